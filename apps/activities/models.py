from django.db import models
from django.urls import reverse
from django.utils import timezone

from apps.contacts.models import Contact
from apps.core.models import OwnedModel, OwnedQuerySet
from apps.deals.models import Deal


class ActivityQuerySet(OwnedQuerySet):

    def pending(self):
        return self.filter(is_completed=False)

    def upcoming(self, now=None):
        """Open activities due from now on, soonest first"""
        now = now or timezone.now()
        return self.pending().filter(due_date__gte=now).order_by('due_date')

    def overdue(self, now=None):
        now = now or timezone.now()
        return self.pending().filter(due_date__lt=now).order_by('due_date')


class Activity(OwnedModel):

    TYPE_CHOICES = [
        ('call', 'Call'),
        ('email', 'Email'),
        ('meeting', 'Meeting'),
        ('task', 'Task'),
        ('note', 'Note'),
    ]

    TYPE_ICONS = {
        'call': 'bi-telephone',
        'email': 'bi-envelope',
        'meeting': 'bi-people',
        'task': 'bi-check2-square',
        'note': 'bi-sticky',
    }

    activity_type = models.CharField(max_length=20, choices=TYPE_CHOICES, default='task', db_index=True)
    title = models.CharField(max_length=200)
    description = models.TextField(max_length=5000, blank=True)
    due_date = models.DateTimeField(null=True, blank=True, db_index=True)

    is_completed = models.BooleanField(default=False)
    completed_at = models.DateTimeField(null=True, blank=True)

    contact = models.ForeignKey(Contact, on_delete=models.SET_NULL, null=True, blank=True, related_name='activities')
    deal = models.ForeignKey(Deal, on_delete=models.SET_NULL, null=True, blank=True, related_name='activities')

    updated_at = models.DateTimeField(auto_now=True)

    objects = ActivityQuerySet.as_manager()

    class Meta(OwnedModel.Meta):
        verbose_name = 'Activity'
        verbose_name_plural = 'Activities'
        indexes = [
            models.Index(fields=['owner', 'is_completed', 'due_date'], name='activity_owner_due_idx'),
            models.Index(fields=['owner', 'activity_type'], name='activity_owner_type_idx'),
        ]

    def __str__(self):
        return f"{self.get_activity_type_display()}: {self.title}"

    def get_absolute_url(self):
        return reverse('activities:activity_edit', kwargs={'pk': self.pk})

    @property
    def icon(self):
        return self.TYPE_ICONS.get(self.activity_type, 'bi-circle')

    @property
    def is_overdue(self):
        return not self.is_completed and self.due_date is not None and self.due_date < timezone.now()

    def mark_completed(self, completed):
        self.is_completed = completed
        self.completed_at = (self.completed_at or timezone.now()) if completed else None

    def toggle_complete(self):
        """Flip the completed flag and persist it"""
        self.mark_completed(not self.is_completed)
        self.save(update_fields=['is_completed', 'completed_at', 'updated_at'])
        return self.is_completed
