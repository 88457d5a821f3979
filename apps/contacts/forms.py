from django import forms

from apps.core.forms import OwnedModelForm
from .models import Contact


class ContactForm(OwnedModelForm):
    class Meta:
        model = Contact
        fields = ['first_name', 'last_name', 'email', 'phone', 'job_title', 'company', 'status', 'source', 'address', 'city', 'state', 'country']

        widgets = {
            'first_name': forms.TextInput(attrs={'class': 'form-control', 'autofocus': True}),
            'last_name': forms.TextInput(attrs={'class': 'form-control'}),
            'email': forms.EmailInput(attrs={'class': 'form-control', 'placeholder': 'name@example.com'}),
            'phone': forms.TextInput(attrs={'class': 'form-control'}),
            'job_title': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'e.g. Head of Sales'}),
            'company': forms.Select(attrs={'class': 'form-select'}),
            'status': forms.Select(attrs={'class': 'form-select'}),
            'source': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'e.g. Referral'}),
            'address': forms.TextInput(attrs={'class': 'form-control'}),
            'city': forms.TextInput(attrs={'class': 'form-control'}),
            'state': forms.TextInput(attrs={'class': 'form-control'}),
            'country': forms.TextInput(attrs={'class': 'form-control'}),
        }

        error_messages = {
            'first_name': {'required': 'First name is required'},
            'last_name': {'required': 'Last name is required'},
            'email': {'invalid': 'Invalid email'},
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.fields['company'].empty_label = 'No company'
        self.fields['company'].queryset = self.fields['company'].queryset.order_by('name')

        # Omitted status falls back to the model default instead of failing
        self.fields['status'].required = False
        if self.instance._state.adding:
            self.fields['status'].initial = 'active'

    def clean_email(self):
        return self.cleaned_data.get('email', '').strip().lower()

    def clean_status(self):
        return self.cleaned_data.get('status') or 'active'


class ContactFilterForm(forms.Form):
    search = forms.CharField(required=False, label='Search', widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Search by name or email...'}))
    status = forms.ChoiceField(choices=[('', 'All Statuses')] + Contact.STATUS_CHOICES, required=False, label='Status', widget=forms.Select(attrs={'class': 'form-select'}))
