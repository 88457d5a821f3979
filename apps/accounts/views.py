import logging

from django.shortcuts import render, redirect
from django.contrib.auth import authenticate, login, logout
from django.contrib.auth.decorators import login_required
from django.contrib.auth.tokens import default_token_generator
from django.contrib import messages
from django.db import DatabaseError
from django.utils.http import url_has_allowed_host_and_scheme, urlsafe_base64_decode
from django.utils.translation import gettext_lazy as _
from django.views.decorators.cache import never_cache
from django.views.decorators.http import require_POST

from apps.core.utils import report_database_error
from .models import User, UserProfile
from .forms import (
    LoginForm,
    SignupForm,
    ProfileForm,
    PasswordResetRequestForm,
    PasswordResetConfirmForm
)


logger = logging.getLogger(__name__)


# HELPER FUNCTIONS
def get_safe_next_url(request):
    """Return ?next= only when it points back at this site"""
    next_url = request.POST.get('next') or request.GET.get('next')
    if next_url and url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}, require_https=request.is_secure()):
        return next_url
    return None


# AUTHENTICATION VIEWS
@never_cache
def login_view(request):
    # If already logged in, redirect to dashboard
    if request.user.is_authenticated:
        return redirect('core:dashboard')

    if request.method == 'POST':
        form = LoginForm(request.POST)

        if form.is_valid():
            email = form.cleaned_data['email']
            password = form.cleaned_data['password']
            remember = form.cleaned_data.get('remember', False)

            # Returns None for a wrong password and for inactive users
            user = authenticate(request, username=email, password=password)

            if user is not None:
                login(request, user)

                if remember:
                    # Session expires in 30 days
                    request.session.set_expiry(30 * 24 * 60 * 60)
                else:
                    # Session expires when browser closes
                    request.session.set_expiry(0)

                logger.info('User %s logged in', user.pk)
                messages.success(
                    request,
                    _('Welcome back, {}!').format(user.get_short_name())
                )

                return redirect(get_safe_next_url(request) or 'core:dashboard')

            else:
                messages.error(
                    request,
                    _('Invalid email or password. Please try again.')
                )
        else:
            messages.error(request, _('Please correct the errors below.'))

    else:
        form = LoginForm()

    context = {
        'form': form,
        'next': get_safe_next_url(request) or '',
        'page_title': _('Sign in'),
    }

    return render(request, 'accounts/login.html', context)


@never_cache
def signup_view(request):
    if request.user.is_authenticated:
        return redirect('core:dashboard')

    if request.method == 'POST':
        form = SignupForm(request.POST)

        if form.is_valid():
            try:
                # post_save handlers create the profile and the default deal stages
                user = form.save()
            except DatabaseError as e:
                report_database_error(request, 'creating account', e)
            else:
                login(request, user, backend='django.contrib.auth.backends.ModelBackend')
                logger.info('User %s signed up', user.pk)
                messages.success(request, _('Welcome to Pipeline CRM, {}!').format(user.get_short_name()))
                return redirect('core:dashboard')
        else:
            messages.error(request, _('Please correct the errors below.'))
    else:
        form = SignupForm()

    context = {
        'form': form,
        'page_title': _('Create account'),
    }

    return render(request, 'accounts/signup.html', context)


@require_POST
def logout_view(request):
    if request.user.is_authenticated:
        user_name = request.user.get_short_name()
        logout(request)
        messages.success(
            request,
            _('You have been logged out successfully. See you soon, {}!').format(user_name)
        )

    return redirect('accounts:login')


@never_cache
def password_reset_request_view(request):
    if request.method == 'POST':
        form = PasswordResetRequestForm(request.POST)

        if form.is_valid():
            # Sends nothing for unknown emails; the answer is the same either way
            form.save(
                request=request,
                use_https=request.is_secure(),
                subject_template_name='accounts/emails/password_reset_subject.txt',
                email_template_name='accounts/emails/password_reset_email.txt',
            )
            logger.info('Password reset requested for %s', form.cleaned_data['email'])
            messages.success(
                request,
                _('If an account exists for that email, you will receive '
                  'password reset instructions shortly.')
            )
            return redirect('accounts:login')
        else:
            messages.error(request, _('Please correct the errors below.'))
    else:
        form = PasswordResetRequestForm()

    context = {
        'form': form,
        'page_title': _('Forgot password'),
    }

    return render(request, 'accounts/password_reset.html', context)


@never_cache
def password_reset_confirm_view(request, uidb64, token):
    try:
        uid = urlsafe_base64_decode(uidb64).decode()
        user = User.objects.get(pk=uid)
    except (TypeError, ValueError, OverflowError, User.DoesNotExist):
        user = None

    if user is None or not default_token_generator.check_token(user, token):
        messages.error(request, _('Invalid or expired reset link.'))
        return redirect('accounts:password_reset')

    if request.method == 'POST':
        form = PasswordResetConfirmForm(user, request.POST)

        if form.is_valid():
            form.save()
            logger.info('Password reset completed for user %s', user.pk)
            messages.success(request, _('Your password has been reset. Please sign in.'))
            return redirect('accounts:login')
        else:
            messages.error(request, _('Please correct the errors below.'))
    else:
        form = PasswordResetConfirmForm(user)

    context = {
        'form': form,
        'page_title': _('Reset password'),
    }

    return render(request, 'accounts/password_reset_confirm.html', context)


# SETTINGS
@login_required
def profile_view(request):
    profile, _created = UserProfile.objects.get_or_create(user=request.user)

    if request.method == 'POST':
        form = ProfileForm(request.POST, instance=profile)

        if form.is_valid():
            try:
                form.save()
                messages.success(request, _('Your profile has been updated successfully!'))
                return redirect('accounts:profile')

            except DatabaseError as e:
                report_database_error(request, 'updating profile', e)
        else:
            messages.error(request, _('Please correct the errors below.'))
    else:
        form = ProfileForm(instance=profile)

    context = {
        'form': form,
        'profile': profile,
        'page_title': _('Profile settings'),
        'active_page': 'settings',
    }

    return render(request, 'accounts/profile.html', context)
