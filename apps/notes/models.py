from django.db import models
from django.urls import reverse

from apps.companies.models import Company
from apps.contacts.models import Contact
from apps.core.models import OwnedModel
from apps.deals.models import Deal


class Note(OwnedModel):
    """
    Free-text note attached to at most one contact, company or deal

    Deleting the parent deletes its notes.
    """

    PARENT_FIELDS = ['contact', 'company', 'deal']

    content = models.TextField(max_length=10000)
    contact = models.ForeignKey(Contact, on_delete=models.CASCADE, null=True, blank=True, related_name='notes')
    company = models.ForeignKey(Company, on_delete=models.CASCADE, null=True, blank=True, related_name='crm_notes')
    deal = models.ForeignKey(Deal, on_delete=models.CASCADE, null=True, blank=True, related_name='notes')
    updated_at = models.DateTimeField(auto_now=True)

    class Meta(OwnedModel.Meta):
        verbose_name = 'Note'
        verbose_name_plural = 'Notes'

    def __str__(self):
        return f"{self.content[:50]}..." if len(self.content) > 50 else self.content

    @property
    def parent(self):
        for field in self.PARENT_FIELDS:
            value = getattr(self, field)
            if value is not None:
                return value
        return None

    def get_parent_url(self):
        parent = self.parent
        if parent is None:
            return reverse('core:dashboard')
        return parent.get_absolute_url()
