from django.db import models
from django.urls import reverse

from apps.core.models import OwnedModel


class Company(OwnedModel):

    # Offered by the company form; the column itself takes any short label
    SIZE_CHOICES = [
        ('1-10', '1-10'),
        ('11-50', '11-50'),
        ('51-200', '51-200'),
        ('201-500', '201-500'),
        ('500+', '500+'),
    ]

    name = models.CharField(max_length=200, help_text='Company name')
    domain = models.CharField(max_length=200, blank=True, help_text='Website domain, e.g. acme.com')
    industry = models.CharField(max_length=100, blank=True)
    size = models.CharField(max_length=20, blank=True, help_text='Headcount bracket, e.g. 11-50')
    phone = models.CharField(max_length=30, blank=True)

    # Address
    address = models.CharField(max_length=200, blank=True)
    city = models.CharField(max_length=100, blank=True)
    state = models.CharField(max_length=100, blank=True)
    country = models.CharField(max_length=100, blank=True)

    notes = models.TextField(max_length=5000, blank=True)

    updated_at = models.DateTimeField(auto_now=True)

    class Meta(OwnedModel.Meta):
        verbose_name = 'Company'
        verbose_name_plural = 'Companies'
        indexes = [
            models.Index(fields=['owner', 'name'], name='company_owner_name_idx'),
        ]

    def __str__(self):
        return self.name

    def get_absolute_url(self):
        return reverse('companies:company_detail', kwargs={'pk': self.pk})

    def get_location(self):
        """'Berlin, Germany' from whichever address parts are set"""
        return ', '.join(part for part in [self.city, self.state, self.country] if part)
