from django import forms
from django.core.exceptions import ValidationError

from apps.core.forms import OwnedModelForm
from .models import Note


class NoteForm(OwnedModelForm):
    class Meta:
        model = Note
        fields = ['content', 'contact', 'company', 'deal']
        widgets = {
            'content': forms.Textarea(attrs={'class': 'form-control', 'rows': 4, 'placeholder': 'Write your note here...'}),
            'contact': forms.HiddenInput(),
            'company': forms.HiddenInput(),
            'deal': forms.HiddenInput(),
        }
        labels = {'content': 'Note'}
        error_messages = {
            'content': {'required': 'Note content is required', 'max_length': 'Note is too long (max 10000 characters)'},
            'contact': {'invalid_choice': 'Contact not found'},
            'company': {'invalid_choice': 'Company not found'},
            'deal': {'invalid_choice': 'Deal not found'},
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        # A saved note stays on the record it was written on
        if not self.instance._state.adding:
            for field in Note.PARENT_FIELDS:
                self.fields[field].disabled = True

    def clean_content(self):
        content = self.cleaned_data.get('content', '').strip()
        if not content:
            raise ValidationError('Note content is required')
        return content

    def clean(self):
        cleaned_data = super().clean()

        parents = [field for field in Note.PARENT_FIELDS if cleaned_data.get(field)]
        if len(parents) > 1:
            raise ValidationError('A note can only be attached to one record')

        return cleaned_data
