from django import forms
from django.core.exceptions import ValidationError
from django.utils import timezone

from apps.contacts.models import Contact
from apps.core.forms import OwnedModelForm
from .models import Deal, DealStage, DealContact


class DealForm(OwnedModelForm):
    class Meta:
        model = Deal
        fields = ['title', 'value', 'currency', 'probability', 'stage', 'company', 'expected_close_date', 'description', 'lost_reason']

        widgets = {
            'title': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'e.g. Annual licence renewal', 'autofocus': True}),
            'value': forms.NumberInput(attrs={'class': 'form-control', 'min': 0, 'step': '0.01', 'placeholder': '0'}),
            'currency': forms.Select(attrs={'class': 'form-select'}),
            'probability': forms.NumberInput(attrs={'class': 'form-control', 'min': 0, 'max': 100, 'placeholder': '0-100'}),
            'stage': forms.Select(attrs={'class': 'form-select'}),
            'company': forms.Select(attrs={'class': 'form-select'}),
            'expected_close_date': forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}),
            'description': forms.Textarea(attrs={'class': 'form-control', 'rows': 4}),
            'lost_reason': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Why was this deal lost?'}),
        }

        help_texts = {
            'probability': 'Chance of winning, in percent',
            'lost_reason': 'Only shown on deals in a lost stage',
        }

        error_messages = {
            'title': {'required': 'Title is required', 'max_length': 'Title is too long (max 200 characters)'},
            'stage': {'required': 'Stage is required', 'invalid_choice': 'Select a valid stage'},
            'value': {'invalid': 'Value must be a number', 'min_value': 'Value cannot be negative'},
            'probability': {'invalid': 'Probability must be a whole number', 'min_value': 'Probability must be between 0 and 100', 'max_value': 'Probability must be between 0 and 100'},
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.fields['stage'].queryset = self.fields['stage'].queryset.order_by('display_order')
        self.fields['stage'].empty_label = 'Select stage'
        self.fields['company'].queryset = self.fields['company'].queryset.order_by('name')
        self.fields['company'].empty_label = 'No company'

        self.fields['currency'].required = False
        if self.instance._state.adding:
            self.fields['currency'].initial = 'USD'
            self.fields['stage'].initial = self.fields['stage'].queryset.first()

    def clean_currency(self):
        return self.cleaned_data.get('currency') or 'USD'

    def save(self, commit=True):
        deal = super().save(commit=False)

        # New deals and deals whose stage changed go to the bottom of the column
        if deal._state.adding or 'stage' in self.changed_data:
            deal.position = Deal.objects.filter(owner=deal.owner).next_position(deal.stage)
            deal.apply_stage_outcome(deal.stage, timezone.now())

        if commit:
            deal.save()
        return deal


class DealMoveForm(forms.Form):
    """Payload of the kanban move endpoint"""

    deal_id = forms.UUIDField(error_messages={'required': 'Deal is required', 'invalid': 'Invalid deal id'})
    stage_id = forms.UUIDField(error_messages={'required': 'Stage is required', 'invalid': 'Invalid stage id'})
    position = forms.IntegerField(min_value=0, error_messages={'required': 'Position is required', 'invalid': 'Position must be a whole number', 'min_value': 'Position must be zero or greater'})


class DealContactForm(forms.Form):
    contact = forms.ModelChoiceField(queryset=Contact.objects.none(), label='Contact', empty_label='Select contact', widget=forms.Select(attrs={'class': 'form-select'}), error_messages={'required': 'Contact is required', 'invalid_choice': 'Select a valid contact'})
    role = forms.CharField(max_length=100, required=False, label='Role', widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'e.g. Decision maker'}))

    def __init__(self, *args, **kwargs):
        self.deal = kwargs.pop('deal')
        super().__init__(*args, **kwargs)

        self.fields['contact'].queryset = (
            Contact.objects.for_owner(self.deal.owner)
            .exclude(deal_contacts__deal=self.deal)
            .order_by('last_name', 'first_name')
        )

    def save(self):
        return DealContact.objects.create(
            deal=self.deal,
            contact=self.cleaned_data['contact'],
            role=self.cleaned_data.get('role', ''),
        )


class DealFilterForm(forms.Form):
    search = forms.CharField(required=False, label='Search', widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Search deals...'}))
    stage = forms.ModelChoiceField(queryset=DealStage.objects.none(), required=False, label='Stage', empty_label='All Stages', widget=forms.Select(attrs={'class': 'form-select'}))

    def __init__(self, *args, **kwargs):
        owner = kwargs.pop('owner', None)
        super().__init__(*args, **kwargs)
        self.fields['stage'].queryset = DealStage.objects.for_owner(owner)

    def clean_search(self):
        search = self.cleaned_data.get('search', '')
        if len(search) > 200:
            raise ValidationError('Search is too long')
        return search
