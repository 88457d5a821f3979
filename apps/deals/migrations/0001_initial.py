import uuid

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('companies', '0001_initial'),
        ('contacts', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='DealStage',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('name', models.CharField(max_length=100)),
                ('color', models.CharField(blank=True, help_text='Hex colour used for the board column, e.g. #6366f1', max_length=7)),
                ('display_order', models.PositiveIntegerField(default=0, help_text='Column order on the board (lower = further left)')),
                ('is_won', models.BooleanField(default=False, help_text='Deals in this stage count as won')),
                ('is_lost', models.BooleanField(default=False, help_text='Deals in this stage count as lost')),
                ('owner', models.ForeignKey(help_text='User who owns this row', on_delete=django.db.models.deletion.CASCADE, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Deal Stage',
                'verbose_name_plural': 'Deal Stages',
                'ordering': ['display_order', 'created_at'],
                'abstract': False,
                'indexes': [models.Index(fields=['owner', 'display_order'], name='dealstage_owner_order_idx')],
            },
        ),
        migrations.CreateModel(
            name='Deal',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('title', models.CharField(max_length=200)),
                ('value', models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True, validators=[django.core.validators.MinValueValidator(0)])),
                ('currency', models.CharField(choices=[('USD', 'USD ($)'), ('EUR', 'EUR (€)'), ('GBP', 'GBP (£)')], default='USD', max_length=3)),
                ('probability', models.PositiveSmallIntegerField(blank=True, help_text='Chance of winning, 0-100', null=True, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(100)])),
                ('expected_close_date', models.DateField(blank=True, null=True)),
                ('description', models.TextField(blank=True, max_length=5000)),
                ('position', models.PositiveIntegerField(default=0, help_text='Order within the stage column')),
                ('won_at', models.DateTimeField(blank=True, null=True)),
                ('lost_at', models.DateTimeField(blank=True, null=True)),
                ('lost_reason', models.CharField(blank=True, max_length=500)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('company', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='deals', to='companies.company')),
                ('owner', models.ForeignKey(help_text='User who owns this row', on_delete=django.db.models.deletion.CASCADE, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('stage', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='deals', to='deals.dealstage')),
            ],
            options={
                'verbose_name': 'Deal',
                'verbose_name_plural': 'Deals',
                'ordering': ['-created_at'],
                'abstract': False,
                'indexes': [
                    models.Index(fields=['owner', 'stage', 'position'], name='deal_owner_stage_pos_idx'),
                    models.Index(fields=['owner', 'company'], name='deal_owner_company_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='DealContact',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('role', models.CharField(blank=True, help_text='e.g. Decision maker, Champion', max_length=100)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('contact', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='deal_contacts', to='contacts.contact')),
                ('deal', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='deal_contacts', to='deals.deal')),
            ],
            options={
                'verbose_name': 'Deal Contact',
                'verbose_name_plural': 'Deal Contacts',
                'ordering': ['created_at'],
                'unique_together': {('deal', 'contact')},
            },
        ),
    ]
