from django.db import models
from django.urls import reverse

from apps.companies.models import Company
from apps.core.formatting import get_initials
from apps.core.models import OwnedModel


class Contact(OwnedModel):

    STATUS_CHOICES = [
        ('active', 'Active'),
        ('inactive', 'Inactive'),
        ('lead', 'Lead'),
    ]

    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    email = models.EmailField(max_length=254, blank=True)
    phone = models.CharField(max_length=30, blank=True)
    job_title = models.CharField(max_length=100, blank=True)
    company = models.ForeignKey(Company, on_delete=models.SET_NULL, null=True, blank=True, related_name='contacts', help_text='Company this contact works for')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='active', db_index=True)
    source = models.CharField(max_length=50, blank=True, help_text='Where this contact came from, e.g. Referral')
    avatar_url = models.URLField(max_length=500, blank=True)

    # Address
    address = models.CharField(max_length=200, blank=True)
    city = models.CharField(max_length=100, blank=True)
    state = models.CharField(max_length=100, blank=True)
    country = models.CharField(max_length=100, blank=True)

    updated_at = models.DateTimeField(auto_now=True)

    class Meta(OwnedModel.Meta):
        verbose_name = 'Contact'
        verbose_name_plural = 'Contacts'
        indexes = [
            models.Index(fields=['owner', 'status'], name='contact_owner_status_idx'),
            models.Index(fields=['owner', 'last_name'], name='contact_owner_last_name_idx'),
        ]

    def __str__(self):
        return self.full_name

    def get_absolute_url(self):
        return reverse('contacts:contact_detail', kwargs={'pk': self.pk})

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    def get_initials(self):
        return get_initials(self.full_name)
