import logging

from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import DealStage


logger = logging.getLogger(__name__)


# Every new user starts with the default pipeline columns
@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def seed_user_deal_stages(sender, instance, created, **kwargs):
    if created and not kwargs.get('raw'):
        DealStage.objects.seed_defaults(instance)
