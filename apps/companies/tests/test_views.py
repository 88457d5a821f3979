"""
Company Views Tests
===================

Run tests:
    python manage.py test apps.companies.tests.test_views
"""

from django.contrib.auth import get_user_model
from django.test import TestCase, Client
from django.urls import reverse

from apps.companies.forms import CompanyForm
from apps.companies.models import Company
from apps.contacts.models import Contact

User = get_user_model()


class CompanyFormTest(TestCase):

    def setUp(self):
        self.user = User.objects.create_user(email='owner@example.com', password='S3cure-pass-123', full_name='Olive Owner')

    def test_domain_is_normalised(self):
        form = CompanyForm({'name': 'Acme', 'domain': 'HTTPS://Acme.com/'}, owner=self.user)

        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.cleaned_data['domain'], 'acme.com')

    def test_name_required(self):
        form = CompanyForm({'domain': 'acme.com'}, owner=self.user)

        self.assertFalse(form.is_valid())
        self.assertEqual(form.errors['name'], ['Company name is required'])

    def test_unknown_size(self):
        form = CompanyForm({'name': 'Acme', 'size': 'galactic'}, owner=self.user)

        self.assertFalse(form.is_valid())
        self.assertIn('size', form.errors)

    def test_model_accepts_free_text_size(self):
        company = Company(owner=self.user, name='Acme', size='about 30')

        company.full_clean()

    def test_edit_keeps_free_text_size_selectable(self):
        company = Company.objects.create(owner=self.user, name='Acme', size='about 30')

        form = CompanyForm({'name': 'Acme', 'size': 'about 30'}, instance=company, owner=self.user)

        self.assertIn(('about 30', 'about 30'), form.fields['size'].choices)
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.save().size, 'about 30')


class CompanyViewTest(TestCase):

    def setUp(self):
        self.client = Client()
        self.user = User.objects.create_user(email='owner@example.com', password='S3cure-pass-123', full_name='Olive Owner')
        self.other = User.objects.create_user(email='other@example.com', password='S3cure-pass-123', full_name='Oscar Other')
        self.client.force_login(self.user)

    def test_requires_login(self):
        self.client.logout()

        response = self.client.get(reverse('companies:company_list'))

        self.assertEqual(response.status_code, 302)

    def test_create_then_list(self):
        response = self.client.post(reverse('companies:company_create'), {'name': 'Acme', 'domain': 'acme.com'})

        self.assertRedirects(response, reverse('companies:company_list'))
        listing = self.client.get(reverse('companies:company_list'))
        self.assertContains(listing, 'Acme')

    def test_search_by_name_or_domain(self):
        Company.objects.create(owner=self.user, name='Acme', domain='acme.com')
        Company.objects.create(owner=self.user, name='Globex', domain='globex.io')

        by_name = self.client.get(reverse('companies:company_list'), {'search': 'acm'})
        by_domain = self.client.get(reverse('companies:company_list'), {'search': '.io'})

        self.assertEqual([c.name for c in by_name.context['companies']], ['Acme'])
        self.assertEqual([c.name for c in by_domain.context['companies']], ['Globex'])

    def test_list_hides_other_users_companies(self):
        Company.objects.create(owner=self.other, name='Foreign Ltd')

        response = self.client.get(reverse('companies:company_list'))

        self.assertEqual(response.context['total_count'], 0)

    def test_detail_lists_contacts(self):
        company = Company.objects.create(owner=self.user, name='Acme')
        Contact.objects.create(owner=self.user, first_name='Ada', last_name='Lovelace', company=company)

        response = self.client.get(reverse('companies:company_detail', kwargs={'pk': company.pk}))

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Lovelace')

    def test_other_users_company_is_404(self):
        company = Company.objects.create(owner=self.other, name='Foreign Ltd')

        for name in ('companies:company_detail', 'companies:company_edit'):
            response = self.client.get(reverse(name, kwargs={'pk': company.pk}))
            self.assertEqual(response.status_code, 404)

    def test_delete_keeps_contacts(self):
        company = Company.objects.create(owner=self.user, name='Acme')
        contact = Contact.objects.create(owner=self.user, first_name='Ada', last_name='Lovelace', company=company)

        response = self.client.post(reverse('companies:company_delete', kwargs={'pk': company.pk}))

        self.assertRedirects(response, reverse('companies:company_list'))
        contact.refresh_from_db()
        self.assertIsNone(contact.company)
