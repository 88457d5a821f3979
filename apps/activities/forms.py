from django import forms

from apps.contacts.models import Contact
from apps.core.forms import OwnedModelForm
from apps.deals.models import Deal
from .models import Activity


class ActivityForm(OwnedModelForm):
    class Meta:
        model = Activity
        fields = ['activity_type', 'title', 'description', 'due_date', 'contact', 'deal', 'is_completed']

        widgets = {
            'activity_type': forms.Select(attrs={'class': 'form-select'}),
            'title': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'e.g. Follow-up call'}),
            'description': forms.Textarea(attrs={'class': 'form-control', 'rows': 3}),
            'due_date': forms.DateTimeInput(attrs={'class': 'form-control', 'type': 'datetime-local'}, format='%Y-%m-%dT%H:%M'),
            'contact': forms.Select(attrs={'class': 'form-select'}),
            'deal': forms.Select(attrs={'class': 'form-select'}),
            'is_completed': forms.CheckboxInput(attrs={'class': 'form-check-input'}),
        }

        labels = {
            'activity_type': 'Type',
            'is_completed': 'Completed',
        }

        error_messages = {
            'title': {'required': 'Title is required', 'max_length': 'Title is too long (max 200 characters)'},
            'activity_type': {'required': 'Type is required', 'invalid_choice': 'Select a valid type'},
            'due_date': {'invalid': 'Enter a valid date and time'},
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.fields['due_date'].input_formats = ['%Y-%m-%dT%H:%M', '%Y-%m-%dT%H:%M:%S', '%Y-%m-%d %H:%M:%S', '%Y-%m-%d %H:%M', '%Y-%m-%d']
        self.fields['contact'].queryset = self.fields['contact'].queryset.order_by('last_name', 'first_name')
        self.fields['contact'].empty_label = 'No contact'
        self.fields['deal'].queryset = self.fields['deal'].queryset.order_by('title')
        self.fields['deal'].empty_label = 'No deal'

    def save(self, commit=True):
        activity = super().save(commit=False)
        activity.mark_completed(self.cleaned_data.get('is_completed', False))

        if commit:
            activity.save()
        return activity


class ActivityFilterForm(forms.Form):

    COMPLETED_CHOICES = [
        ('', 'All'),
        ('open', 'Open'),
        ('done', 'Completed'),
    ]

    search = forms.CharField(required=False, label='Search', widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Search activities...'}))
    activity_type = forms.ChoiceField(choices=[('', 'All Types')] + Activity.TYPE_CHOICES, required=False, label='Type', widget=forms.Select(attrs={'class': 'form-select'}))
    completed = forms.ChoiceField(choices=COMPLETED_CHOICES, required=False, label='Status', widget=forms.Select(attrs={'class': 'form-select'}))
    contact = forms.ModelChoiceField(queryset=Contact.objects.none(), required=False, label='Contact', empty_label='All Contacts', widget=forms.Select(attrs={'class': 'form-select'}))
    deal = forms.ModelChoiceField(queryset=Deal.objects.none(), required=False, label='Deal', empty_label='All Deals', widget=forms.Select(attrs={'class': 'form-select'}))

    def __init__(self, *args, **kwargs):
        owner = kwargs.pop('owner', None)
        super().__init__(*args, **kwargs)
        self.fields['contact'].queryset = Contact.objects.for_owner(owner).order_by('last_name', 'first_name')
        self.fields['deal'].queryset = Deal.objects.for_owner(owner).order_by('title')
