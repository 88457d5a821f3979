"""
Account Views Tests
===================

Test Coverage:
1. Signup - profile and default pipeline created, auto login
2. Login / Logout - ?next= handling, bad credentials
3. Password reset - email sent, token link sets the new password
4. Profile settings - updates User and UserProfile

Run tests:
    python manage.py test apps.accounts.tests.test_views
"""

from django.contrib.auth import get_user_model
from django.contrib.auth.tokens import default_token_generator
from django.core import mail
from django.test import TestCase, Client
from django.urls import reverse
from django.utils.encoding import force_bytes
from django.utils.http import urlsafe_base64_encode

from apps.accounts.models import UserProfile
from apps.deals.models import DealStage

User = get_user_model()

PASSWORD = 'S3cure-pass-123'


class SignupViewTest(TestCase):

    def setUp(self):
        self.client = Client()
        self.url = reverse('accounts:signup')

    def signup(self, **overrides):
        data = {
            'full_name': 'Jane Doe',
            'email': 'Jane@Example.com',
            'password1': PASSWORD,
            'password2': PASSWORD,
        }
        data.update(overrides)
        return self.client.post(self.url, data)

    def test_signup_page_renders(self):
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 200)

    def test_signup_creates_account(self):
        response = self.signup()

        self.assertRedirects(response, reverse('core:dashboard'))
        user = User.objects.get(email='jane@example.com')
        self.assertEqual(user.full_name, 'Jane Doe')
        self.assertTrue(user.check_password(PASSWORD))
        self.assertTrue(UserProfile.objects.filter(user=user).exists())
        self.assertEqual(DealStage.objects.for_owner(user).count(), 7)

    def test_signup_logs_in(self):
        self.signup()

        response = self.client.get(reverse('core:dashboard'))

        self.assertEqual(response.status_code, 200)

    def test_duplicate_email(self):
        User.objects.create_user(email='jane@example.com', password=PASSWORD, full_name='Jane Doe')

        response = self.signup()

        self.assertEqual(response.status_code, 200)
        self.assertIn('email', response.context['form'].errors)
        self.assertEqual(User.objects.count(), 1)

    def test_password_mismatch(self):
        response = self.signup(password2='Different-pass-456')

        self.assertEqual(response.status_code, 200)
        self.assertIn('password2', response.context['form'].errors)
        self.assertFalse(User.objects.exists())


class LoginLogoutViewTest(TestCase):

    def setUp(self):
        self.client = Client()
        self.user = User.objects.create_user(email='owner@example.com', password=PASSWORD, full_name='Olive Owner')
        self.url = reverse('accounts:login')

    def test_login(self):
        response = self.client.post(self.url, {'email': 'Owner@Example.com', 'password': PASSWORD})

        self.assertRedirects(response, reverse('core:dashboard'))

    def test_login_follows_next(self):
        next_url = reverse('deals:deal_board')

        response = self.client.post(f'{self.url}?next={next_url}', {'email': 'owner@example.com', 'password': PASSWORD})

        self.assertRedirects(response, next_url)

    def test_login_ignores_external_next(self):
        response = self.client.post(
            f'{self.url}?next=https://evil.example.com/',
            {'email': 'owner@example.com', 'password': PASSWORD},
        )

        self.assertRedirects(response, reverse('core:dashboard'))

    def test_wrong_password(self):
        response = self.client.post(self.url, {'email': 'owner@example.com', 'password': 'wrong-password'})

        self.assertEqual(response.status_code, 200)
        self.assertNotIn('_auth_user_id', self.client.session)

    def test_inactive_user_cannot_login(self):
        self.user.is_active = False
        self.user.save()

        response = self.client.post(self.url, {'email': 'owner@example.com', 'password': PASSWORD})

        self.assertEqual(response.status_code, 200)
        self.assertNotIn('_auth_user_id', self.client.session)

    def test_logged_in_user_is_sent_to_dashboard(self):
        self.client.force_login(self.user)

        response = self.client.get(self.url)

        self.assertRedirects(response, reverse('core:dashboard'))

    def test_logout(self):
        self.client.force_login(self.user)

        response = self.client.post(reverse('accounts:logout'))

        self.assertRedirects(response, self.url)
        self.assertNotIn('_auth_user_id', self.client.session)

    def test_logout_requires_post(self):
        self.client.force_login(self.user)

        response = self.client.get(reverse('accounts:logout'))

        self.assertEqual(response.status_code, 405)
        self.assertEqual(self.client.session['_auth_user_id'], str(self.user.pk))


class PasswordResetViewTest(TestCase):

    def setUp(self):
        self.client = Client()
        self.user = User.objects.create_user(email='owner@example.com', password=PASSWORD, full_name='Olive Owner')

    def test_request_sends_email(self):
        response = self.client.post(reverse('accounts:password_reset'), {'email': 'owner@example.com'})

        self.assertRedirects(response, reverse('accounts:login'))
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ['owner@example.com'])
        self.assertIn('/reset/', mail.outbox[0].body)

    def test_unknown_email_sends_nothing(self):
        response = self.client.post(reverse('accounts:password_reset'), {'email': 'nobody@example.com'})

        self.assertRedirects(response, reverse('accounts:login'))
        self.assertEqual(len(mail.outbox), 0)

    def test_confirm_sets_new_password(self):
        uid = urlsafe_base64_encode(force_bytes(self.user.pk))
        token = default_token_generator.make_token(self.user)
        url = reverse('accounts:password_reset_confirm', kwargs={'uidb64': uid, 'token': token})

        response = self.client.post(url, {'new_password1': 'Brand-new-pass-789', 'new_password2': 'Brand-new-pass-789'})

        self.assertRedirects(response, reverse('accounts:login'))
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password('Brand-new-pass-789'))

    def test_invalid_token(self):
        uid = urlsafe_base64_encode(force_bytes(self.user.pk))
        url = reverse('accounts:password_reset_confirm', kwargs={'uidb64': uid, 'token': 'bad-token'})

        response = self.client.get(url)

        self.assertRedirects(response, reverse('accounts:password_reset'))


class ProfileViewTest(TestCase):

    def setUp(self):
        self.client = Client()
        self.user = User.objects.create_user(email='owner@example.com', password=PASSWORD, full_name='Olive Owner')
        self.url = reverse('accounts:profile')

    def test_requires_login(self):
        response = self.client.get(self.url)
        self.assertRedirects(response, f"{reverse('accounts:login')}?next={self.url}")

    def test_update_profile(self):
        self.client.force_login(self.user)

        response = self.client.post(self.url, {
            'full_name': 'Olive Oyl',
            'job_title': 'Account Executive',
            'timezone': 'UTC',
            'avatar_url': '',
        })

        self.assertRedirects(response, self.url)
        self.user.refresh_from_db()
        self.assertEqual(self.user.full_name, 'Olive Oyl')
        self.assertEqual(self.user.profile.job_title, 'Account Executive')

    def test_invalid_timezone(self):
        self.client.force_login(self.user)

        response = self.client.post(self.url, {'full_name': 'Olive Owner', 'timezone': 'Mars/Olympus'})

        self.assertEqual(response.status_code, 200)
        self.assertIn('timezone', response.context['form'].errors)
