from django import forms

from .models import OwnedModel


class OwnedModelForm(forms.ModelForm):
    """
    ModelForm for user-scoped rows

    - Pass ``owner=request.user`` when building the form
    - Every FK dropdown pointing at another owned model only offers (and only
      accepts) the owner's rows, so a foreign UUID fails as "invalid choice"
    - save() stamps the owner on new rows
    """

    def __init__(self, *args, **kwargs):
        self.owner = kwargs.pop('owner', None)
        super().__init__(*args, **kwargs)

        for field in self.fields.values():
            if isinstance(field, forms.ModelChoiceField):
                model = field.queryset.model
                if issubclass(model, OwnedModel):
                    field.queryset = model.objects.for_owner(self.owner)

    def save(self, commit=True):
        instance = super().save(commit=False)
        if instance.owner_id is None:
            instance.owner = self.owner

        if commit:
            instance.save()
            self.save_m2m()
        return instance
