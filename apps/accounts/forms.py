from django import forms
from django.contrib.auth.forms import UserCreationForm, PasswordResetForm, SetPasswordForm
from django.contrib.auth import get_user_model
from django.utils.translation import gettext_lazy as _
from django.core.exceptions import ValidationError
from crispy_forms.helper import FormHelper
from crispy_forms.layout import Layout, Fieldset, Submit, Div, Field, HTML
from crispy_forms.bootstrap import FormActions

from .models import UserProfile

User = get_user_model()


# LOGIN FORM
class LoginForm(forms.Form):
    email = forms.EmailField(
        label=_('Email Address'),
        max_length=255,
        required=True,
        error_messages={'required': _('Email is required'), 'invalid': _('Invalid email')},
        widget=forms.EmailInput(attrs={
            'class': 'form-control',
            'placeholder': _('you@example.com'),
            'autofocus': True,
        })
    )

    password = forms.CharField(
        label=_('Password'),
        required=True,
        error_messages={'required': _('Password is required')},
        widget=forms.PasswordInput(attrs={
            'class': 'form-control',
            'placeholder': _('Enter your password'),
        })
    )

    remember = forms.BooleanField(
        label=_('Remember me'),
        required=False,
        initial=False,
        widget=forms.CheckboxInput(attrs={
            'class': 'form-check-input',
        })
    )

    def __init__(self, *args, **kwargs):

        super().__init__(*args, **kwargs)

        self.helper = FormHelper()
        self.helper.form_method = 'post'

        self.helper.layout = Layout(
            Field('email', css_class='mb-3'),
            Field('password', css_class='mb-3'),
            Field('remember', css_class='mb-3'),
            FormActions(
                Submit('submit', _('Sign in'), css_class='btn btn-primary w-100')
            )
        )

    def clean_email(self):

        email = self.cleaned_data.get('email', '')
        return email.lower().strip()


# SIGNUP FORM
class SignupForm(UserCreationForm):

    email = forms.EmailField(
        label=_('Email Address'),
        max_length=255,
        required=True,
        error_messages={'required': _('Email is required'), 'invalid': _('Invalid email')},
        widget=forms.EmailInput(attrs={
            'class': 'form-control',
            'placeholder': _('you@example.com'),
        })
    )

    full_name = forms.CharField(
        label=_('Full Name'),
        max_length=150,
        required=True,
        error_messages={'required': _('Full name is required')},
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': _('Jane Doe'),
            'autofocus': True,
        })
    )

    class Meta:
        model = User
        fields = ['full_name', 'email', 'password1', 'password2']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.fields['password1'].widget = forms.PasswordInput(attrs={
            'class': 'form-control',
            'placeholder': _('At least 8 characters'),
        })
        self.fields['password2'].widget = forms.PasswordInput(attrs={
            'class': 'form-control',
            'placeholder': _('Confirm password'),
        })

        self.helper = FormHelper()
        self.helper.form_method = 'post'

        self.helper.layout = Layout(
            'full_name',
            'email',
            Div(
                Div('password1', css_class='col-md-6'),
                Div('password2', css_class='col-md-6'),
                css_class='row'
            ),
            FormActions(
                Submit('submit', _('Create account'), css_class='btn btn-primary w-100')
            )
        )

    def clean_email(self):
        email = self.cleaned_data.get('email', '').lower().strip()

        if User.objects.filter(email__iexact=email).exists():
            raise ValidationError(
                _('A user with this email already exists.')
            )

        return email

    def clean_full_name(self):
        return self.cleaned_data.get('full_name', '').strip()


# PROFILE FORM (settings page)
class ProfileForm(forms.ModelForm):
    """
    Edits the UserProfile plus the user's display name

    full_name lives on User; save() writes both rows.
    """

    full_name = forms.CharField(
        label=_('Full Name'),
        max_length=150,
        required=True,
        error_messages={'required': _('Full name is required')},
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )

    class Meta:
        model = UserProfile
        fields = ['job_title', 'timezone', 'avatar_url']

        widgets = {
            'job_title': forms.TextInput(attrs={
                'class': 'form-control',
                'placeholder': _('e.g., Account Executive'),
            }),
            'timezone': forms.Select(attrs={
                'class': 'form-select',
            }),
            'avatar_url': forms.URLInput(attrs={
                'class': 'form-control',
                'placeholder': _('https://...'),
            }),
        }

        labels = {
            'job_title': _('Job Title'),
            'timezone': _('Timezone'),
            'avatar_url': _('Avatar URL'),
        }

        error_messages = {
            'avatar_url': {'invalid': _('Enter a valid URL')},
            'timezone': {'invalid_choice': _('Select a valid timezone')},
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        if self.instance.pk and 'full_name' not in self.initial:
            self.initial['full_name'] = self.instance.user.full_name

        self.helper = FormHelper()
        self.helper.form_method = 'post'

        self.helper.layout = Layout(
            Fieldset(
                _('Personal Information'),
                Div(
                    Div('full_name', css_class='col-md-6'),
                    Div('job_title', css_class='col-md-6'),
                    css_class='row'
                ),
                'avatar_url',
            ),
            Fieldset(
                _('Preferences'),
                'timezone',
            ),
            FormActions(
                Submit('submit', _('Save Changes'), css_class='btn btn-primary'),
                HTML('<a href="{% url \'core:dashboard\' %}" class="btn btn-secondary">Cancel</a>'),
            )
        )

    def clean_full_name(self):
        return self.cleaned_data.get('full_name', '').strip()

    def save(self, commit=True):
        profile = super().save(commit=False)
        profile.user.full_name = self.cleaned_data['full_name']

        if commit:
            profile.user.save(update_fields=['full_name', 'updated_at'])
            profile.save()
        return profile


# PASSWORD RESET FORMS
class PasswordResetRequestForm(PasswordResetForm):

    email = forms.EmailField(
        label=_('Email Address'),
        max_length=254,
        required=True,
        error_messages={'required': _('Email is required'), 'invalid': _('Invalid email')},
        widget=forms.EmailInput(attrs={
            'class': 'form-control',
            'placeholder': _('you@example.com'),
            'autofocus': True,
        }),
        help_text=_('Enter your email address to receive password reset instructions.')
    )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.helper = FormHelper()
        self.helper.form_method = 'post'

        self.helper.layout = Layout(
            'email',
            FormActions(
                Submit('submit', _('Send Reset Link'), css_class='btn btn-primary w-100')
            )
        )

    def clean_email(self):
        """Clean and normalize email"""
        email = self.cleaned_data.get('email', '').lower().strip()
        return email


class PasswordResetConfirmForm(SetPasswordForm):

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.fields['new_password1'].widget = forms.PasswordInput(attrs={
            'class': 'form-control',
            'placeholder': _('Enter new password'),
            'autofocus': True,
        })
        self.fields['new_password2'].widget = forms.PasswordInput(attrs={
            'class': 'form-control',
            'placeholder': _('Confirm new password'),
        })

        self.helper = FormHelper()
        self.helper.form_method = 'post'

        self.helper.layout = Layout(
            'new_password1',
            'new_password2',
            FormActions(
                Submit('submit', _('Reset Password'), css_class='btn btn-primary w-100')
            )
        )
