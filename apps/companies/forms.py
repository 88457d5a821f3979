from django import forms

from apps.core.forms import OwnedModelForm
from .models import Company


class CompanyForm(OwnedModelForm):
    size = forms.ChoiceField(required=False, label='Company size', widget=forms.Select(attrs={'class': 'form-select'}))

    class Meta:
        model = Company
        fields = ['name', 'domain', 'industry', 'size', 'phone', 'address', 'city', 'state', 'country', 'notes']

        widgets = {
            'name': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'e.g. Acme Inc.', 'autofocus': True}),
            'domain': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'acme.com'}),
            'industry': forms.TextInput(attrs={'class': 'form-control'}),
            'phone': forms.TextInput(attrs={'class': 'form-control'}),
            'address': forms.TextInput(attrs={'class': 'form-control'}),
            'city': forms.TextInput(attrs={'class': 'form-control'}),
            'state': forms.TextInput(attrs={'class': 'form-control'}),
            'country': forms.TextInput(attrs={'class': 'form-control'}),
            'notes': forms.Textarea(attrs={'class': 'form-control', 'rows': 4}),
        }

        labels = {
            'name': 'Company name',
        }

        error_messages = {
            'name': {'required': 'Company name is required', 'max_length': 'Company name is too long (max 200 characters)'},
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        choices = [('', 'Not specified')] + Company.SIZE_CHOICES

        # Keep a label saved outside the brackets selectable on edit
        current = self.instance.size
        if current and current not in dict(Company.SIZE_CHOICES):
            choices.append((current, current))
        self.fields['size'].choices = choices

    def clean_domain(self):
        domain = self.cleaned_data.get('domain', '').strip().lower()
        for prefix in ('https://', 'http://'):
            if domain.startswith(prefix):
                domain = domain[len(prefix):]
        return domain.rstrip('/')


class CompanyFilterForm(forms.Form):
    search = forms.CharField(required=False, label='Search', widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Search by name or domain...'}))
