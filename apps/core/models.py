import uuid

from django.conf import settings
from django.db import models


class OwnedQuerySet(models.QuerySet):
    """
    Row-level security for CRM tables.

    Every read and write in the views starts from ``Model.objects.for_owner(user)``,
    so a row belonging to another user behaves as if it does not exist.
    """

    def for_owner(self, user):
        if user is None or not user.is_authenticated:
            return self.none()
        return self.filter(owner=user)


class OwnedModel(models.Model):
    """
    Abstract base for every user-scoped CRM row

    Fields:
    - id: UUID primary key (used in URLs and form references)
    - owner: the user this row belongs to
    - created_at: insertion time (default ordering key)
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='+', help_text='User who owns this row')
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    objects = OwnedQuerySet.as_manager()

    class Meta:
        abstract = True
        ordering = ['-created_at']

    def is_owned_by(self, user):
        return user.is_authenticated and self.owner_id == user.pk
