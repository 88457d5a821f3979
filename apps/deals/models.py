import logging

from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models, transaction
from django.db.models import Max
from django.urls import reverse
from django.utils import timezone

from apps.companies.models import Company
from apps.contacts.models import Contact
from apps.core.models import OwnedModel, OwnedQuerySet
from .pipeline import PipelineError, move_deal, positions


logger = logging.getLogger(__name__)


# (name, color, is_won, is_lost) in board order
DEFAULT_STAGES = [
    ('Lead', '#6366f1', False, False),
    ('Qualification', '#8b5cf6', False, False),
    ('Meeting', '#0ea5e9', False, False),
    ('Proposal', '#f59e0b', False, False),
    ('Negotiation', '#f97316', False, False),
    ('Won', '#22c55e', True, False),
    ('Lost', '#ef4444', False, True),
]


class DealStageQuerySet(OwnedQuerySet):

    def seed_defaults(self, user):
        """
        Create the default pipeline for a user

        Idempotent: a user who already has any stage gets nothing added.
        Returns the list of created stages.
        """
        if self.model.objects.filter(owner=user).exists():
            logger.debug('User %s already has deal stages, skipping seed', user.pk)
            return []

        stages = [
            self.model(owner=user, name=name, color=color, display_order=order, is_won=is_won, is_lost=is_lost)
            for order, (name, color, is_won, is_lost) in enumerate(DEFAULT_STAGES)
        ]
        created = self.model.objects.bulk_create(stages)
        logger.debug('Seeded %s deal stages for user %s', len(created), user.pk)
        return created


class DealStage(OwnedModel):

    name = models.CharField(max_length=100)
    color = models.CharField(max_length=7, blank=True, help_text='Hex colour used for the board column, e.g. #6366f1')
    display_order = models.PositiveIntegerField(default=0, help_text='Column order on the board (lower = further left)')
    is_won = models.BooleanField(default=False, help_text='Deals in this stage count as won')
    is_lost = models.BooleanField(default=False, help_text='Deals in this stage count as lost')

    objects = DealStageQuerySet.as_manager()

    class Meta(OwnedModel.Meta):
        verbose_name = 'Deal Stage'
        verbose_name_plural = 'Deal Stages'
        ordering = ['display_order', 'created_at']
        indexes = [
            models.Index(fields=['owner', 'display_order'], name='dealstage_owner_order_idx'),
        ]

    def __str__(self):
        return self.name

    @property
    def is_closed(self):
        return self.is_won or self.is_lost


class DealQuerySet(OwnedQuerySet):

    def on_board(self):
        """Deals in column order (position, then oldest first for ties)"""
        return self.order_by('position', 'created_at')

    def open(self):
        return self.exclude(stage__is_won=True).exclude(stage__is_lost=True)

    def won(self):
        return self.filter(stage__is_won=True)

    def next_position(self, stage):
        """Position one past the last deal in ``stage``"""
        last = self.filter(stage=stage).aggregate(last=Max('position'))['last']
        return 0 if last is None else last + 1

    def reorder(self, owner, updates):
        """
        Apply several (deal_id, stage_id, position) updates in one transaction

        All-or-nothing: if any deal or stage does not belong to ``owner`` the
        whole batch raises PipelineError and nothing is written.
        """
        deal_ids = {update['id'] for update in updates}
        stage_ids = {update['stage_id'] for update in updates}

        with transaction.atomic():
            deals = {
                deal.pk: deal
                for deal in self.model.objects.for_owner(owner).select_for_update().filter(pk__in=deal_ids).order_by('pk')
            }
            stages = {stage.pk: stage for stage in DealStage.objects.for_owner(owner).filter(pk__in=stage_ids)}

            if len(deals) != len(deal_ids):
                raise PipelineError('One or more deals were not found')
            if len(stages) != len(stage_ids):
                raise PipelineError('One or more stages were not found')

            now = timezone.now()
            for update in updates:
                deal = deals[update['id']]
                stage = stages[update['stage_id']]
                if deal.stage_id != stage.pk:
                    deal.apply_stage_outcome(stage, now)
                deal.stage = stage
                deal.position = update['position']
                deal.save(update_fields=['stage', 'position', 'won_at', 'lost_at', 'updated_at'])

        return list(deals.values())


class Deal(OwnedModel):

    CURRENCY_CHOICES = [
        ('USD', 'USD ($)'),
        ('EUR', 'EUR (€)'),
        ('GBP', 'GBP (£)'),
    ]

    title = models.CharField(max_length=200)
    value = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True, validators=[MinValueValidator(0)])
    currency = models.CharField(max_length=3, choices=CURRENCY_CHOICES, default='USD')
    probability = models.PositiveSmallIntegerField(null=True, blank=True, validators=[MinValueValidator(0), MaxValueValidator(100)], help_text='Chance of winning, 0-100')

    stage = models.ForeignKey(DealStage, on_delete=models.PROTECT, related_name='deals')
    company = models.ForeignKey(Company, on_delete=models.SET_NULL, null=True, blank=True, related_name='deals')
    expected_close_date = models.DateField(null=True, blank=True)
    description = models.TextField(max_length=5000, blank=True)

    # Board placement
    position = models.PositiveIntegerField(default=0, help_text='Order within the stage column')

    # Outcome
    won_at = models.DateTimeField(null=True, blank=True)
    lost_at = models.DateTimeField(null=True, blank=True)
    lost_reason = models.CharField(max_length=500, blank=True)

    updated_at = models.DateTimeField(auto_now=True)

    objects = DealQuerySet.as_manager()

    class Meta(OwnedModel.Meta):
        verbose_name = 'Deal'
        verbose_name_plural = 'Deals'
        indexes = [
            models.Index(fields=['owner', 'stage', 'position'], name='deal_owner_stage_pos_idx'),
            models.Index(fields=['owner', 'company'], name='deal_owner_company_idx'),
        ]

    def __str__(self):
        return self.title

    def get_absolute_url(self):
        return reverse('deals:deal_detail', kwargs={'pk': self.pk})

    def apply_stage_outcome(self, stage, now=None):
        """Stamp or clear won_at / lost_at for entering ``stage``"""
        now = now or timezone.now()
        self.won_at = (self.won_at or now) if stage.is_won else None
        self.lost_at = (self.lost_at or now) if stage.is_lost else None

    def move_to(self, stage, position):
        """
        Move this deal to ``stage`` at ``position`` and renumber both columns

        Rows of the source and destination columns are locked for the
        duration, so two concurrent moves cannot leave duplicate positions.
        Locks are taken in primary key order, so moves in opposite
        directions between the same two stages queue instead of deadlocking.

        Returns:
            dict: stage id -> ordered deal ids for every affected column
        """
        if stage.owner_id != self.owner_id:
            raise PipelineError(f'Stage {stage.pk} is not on the board')

        with transaction.atomic():
            source_id = Deal.objects.filter(pk=self.pk).values_list('stage_id', flat=True).first()
            if source_id is None:
                raise PipelineError(f'Deal {self.pk} is not on the board')
            stage_ids = {source_id, stage.pk}

            rows = list(
                Deal.objects.select_for_update()
                .filter(owner_id=self.owner_id, stage_id__in=stage_ids)
                .order_by('pk')
                .values_list('id', 'stage_id', 'position', 'created_at')
            )
            rows.sort(key=lambda row: (row[2], row[3]))

            columns = {stage_id: [] for stage_id in stage_ids}
            before = {}
            for deal_id, stage_id, deal_position, _created_at in rows:
                columns[stage_id].append(deal_id)
                before[deal_id] = (stage_id, deal_position)

            # Raises when the deal left both columns before the lock was taken
            columns = move_deal(columns, self.pk, stage.pk, position)
            after = positions(columns)

            current = Deal.objects.get(pk=self.pk)

            now = timezone.now()
            for deal_id, placement in after.items():
                if deal_id == self.pk or before[deal_id] == placement:
                    continue
                Deal.objects.filter(pk=deal_id).update(stage_id=placement[0], position=placement[1])

            if current.stage_id != stage.pk:
                current.apply_stage_outcome(stage, now)
            current.stage = stage
            current.position = after[self.pk][1]
            current.save(update_fields=['stage', 'position', 'won_at', 'lost_at', 'updated_at'])

        self.stage = current.stage
        self.position = current.position
        self.won_at = current.won_at
        self.lost_at = current.lost_at
        self.updated_at = current.updated_at

        logger.info('Deal %s moved to stage %s at position %s', self.pk, stage.pk, self.position)
        return columns

    @property
    def weighted_value(self):
        if self.value is None or self.probability is None:
            return None
        return self.value * self.probability / 100


class DealContact(models.Model):

    deal = models.ForeignKey(Deal, on_delete=models.CASCADE, related_name='deal_contacts')
    contact = models.ForeignKey(Contact, on_delete=models.CASCADE, related_name='deal_contacts')
    role = models.CharField(max_length=100, blank=True, help_text='e.g. Decision maker, Champion')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = 'Deal Contact'
        verbose_name_plural = 'Deal Contacts'
        ordering = ['created_at']
        unique_together = ['deal', 'contact']

    def __str__(self):
        return f"{self.contact} on {self.deal}"
