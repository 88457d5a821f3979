"""
Deal Forms Tests
================

Test Coverage:
1. DealForm - required stage, numeric coercion, bounds, ownership
2. DealForm.save - column placement and won/lost stamps
3. DealMoveForm - kanban payload validation
4. DealContactForm - contact choices

Run tests:
    python manage.py test apps.deals.tests.test_forms
"""

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase

from apps.companies.models import Company
from apps.contacts.models import Contact
from apps.deals.forms import DealForm, DealMoveForm, DealContactForm
from apps.deals.models import Deal, DealStage, DealContact

User = get_user_model()


class DealFormTest(TestCase):

    def setUp(self):
        self.user = User.objects.create_user(email='owner@example.com', password='S3cure-pass-123', full_name='Olive Owner')
        self.other = User.objects.create_user(email='other@example.com', password='S3cure-pass-123', full_name='Oscar Other')
        self.lead = DealStage.objects.get(owner=self.user, name='Lead')
        self.won = DealStage.objects.get(owner=self.user, name='Won')

    def form(self, data, **kwargs):
        payload = {'title': 'Annual renewal', 'stage': str(self.lead.pk)}
        payload.update(data)
        return DealForm(payload, owner=self.user, **kwargs)

    def test_valid_form_coerces_numbers(self):
        form = self.form({'value': '5000', 'probability': '50'})

        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.cleaned_data['value'], Decimal('5000'))
        self.assertEqual(form.cleaned_data['probability'], 50)

    def test_missing_stage(self):
        form = DealForm({'title': 'No stage'}, owner=self.user)

        self.assertFalse(form.is_valid())
        self.assertEqual(form.errors['stage'], ['Stage is required'])

    def test_missing_title(self):
        form = self.form({'title': ''})

        self.assertFalse(form.is_valid())
        self.assertIn('title', form.errors)

    def test_empty_optional_fields_become_null(self):
        form = self.form({'value': '', 'probability': '', 'expected_close_date': ''})

        self.assertTrue(form.is_valid(), form.errors)
        self.assertIsNone(form.cleaned_data['value'])
        self.assertIsNone(form.cleaned_data['probability'])
        self.assertIsNone(form.cleaned_data['expected_close_date'])

    def test_currency_defaults_to_usd(self):
        form = self.form({})

        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.cleaned_data['currency'], 'USD')

    def test_unknown_currency(self):
        form = self.form({'currency': 'JPY'})

        self.assertFalse(form.is_valid())
        self.assertIn('currency', form.errors)

    def test_probability_out_of_range(self):
        for probability in ('101', '-1'):
            form = self.form({'probability': probability})
            self.assertFalse(form.is_valid(), probability)
            self.assertIn('probability', form.errors)

    def test_negative_value(self):
        form = self.form({'value': '-10'})

        self.assertFalse(form.is_valid())
        self.assertIn('value', form.errors)

    def test_non_numeric_value(self):
        form = self.form({'value': 'lots'})

        self.assertFalse(form.is_valid())
        self.assertIn('value', form.errors)

    def test_stage_of_another_user(self):
        foreign = DealStage.objects.get(owner=self.other, name='Lead')
        form = self.form({'stage': str(foreign.pk)})

        self.assertFalse(form.is_valid())
        self.assertIn('stage', form.errors)

    def test_stage_that_is_not_a_uuid(self):
        form = self.form({'stage': 'not-a-uuid'})

        self.assertFalse(form.is_valid())
        self.assertIn('stage', form.errors)

    def test_company_of_another_user(self):
        foreign = Company.objects.create(owner=self.other, name='Foreign Ltd')
        form = self.form({'company': str(foreign.pk)})

        self.assertFalse(form.is_valid())
        self.assertIn('company', form.errors)

    def test_save_stamps_owner_and_appends_to_column(self):
        first = self.form({'title': 'First'})
        self.assertTrue(first.is_valid(), first.errors)
        first_deal = first.save()

        second = self.form({'title': 'Second'})
        self.assertTrue(second.is_valid(), second.errors)
        second_deal = second.save()

        self.assertEqual(first_deal.owner, self.user)
        self.assertEqual(first_deal.position, 0)
        self.assertEqual(second_deal.position, 1)

    def test_save_into_won_stage_stamps_won_at(self):
        form = self.form({'stage': str(self.won.pk)})
        self.assertTrue(form.is_valid(), form.errors)

        deal = form.save()

        self.assertIsNotNone(deal.won_at)
        self.assertIsNone(deal.lost_at)

    def test_edit_changing_stage_moves_to_end_of_column(self):
        Deal.objects.create(owner=self.user, stage=self.won, title='Already won', position=0)
        deal = Deal.objects.create(owner=self.user, stage=self.lead, title='Moving', position=0)

        form = DealForm(
            {'title': 'Moving', 'stage': str(self.won.pk), 'currency': 'USD'},
            instance=deal,
            owner=self.user,
        )
        self.assertTrue(form.is_valid(), form.errors)
        deal = form.save()

        self.assertEqual(deal.stage, self.won)
        self.assertEqual(deal.position, 1)
        self.assertIsNotNone(deal.won_at)

    def test_edit_without_stage_change_keeps_position(self):
        deal = Deal.objects.create(owner=self.user, stage=self.lead, title='Stays', position=4)

        form = DealForm(
            {'title': 'Stays renamed', 'stage': str(self.lead.pk), 'currency': 'USD'},
            instance=deal,
            owner=self.user,
        )
        self.assertTrue(form.is_valid(), form.errors)
        deal = form.save()

        self.assertEqual(deal.title, 'Stays renamed')
        self.assertEqual(deal.position, 4)


class DealMoveFormTest(TestCase):

    def test_valid_payload(self):
        form = DealMoveForm({
            'deal_id': 'c2b4f8c6-5f7e-4a51-9a55-1d0b6f1f6c11',
            'stage_id': '0d9b7c39-3cc2-4f0f-9b0c-2f8e1d3fb1a2',
            'position': '2',
        })

        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.cleaned_data['position'], 2)

    def test_invalid_ids(self):
        form = DealMoveForm({'deal_id': 'abc', 'stage_id': '123', 'position': 0})

        self.assertFalse(form.is_valid())
        self.assertEqual(form.errors['deal_id'], ['Invalid deal id'])
        self.assertEqual(form.errors['stage_id'], ['Invalid stage id'])

    def test_negative_position(self):
        form = DealMoveForm({
            'deal_id': 'c2b4f8c6-5f7e-4a51-9a55-1d0b6f1f6c11',
            'stage_id': '0d9b7c39-3cc2-4f0f-9b0c-2f8e1d3fb1a2',
            'position': -1,
        })

        self.assertFalse(form.is_valid())
        self.assertEqual(form.errors['position'], ['Position must be zero or greater'])

    def test_missing_fields(self):
        form = DealMoveForm({})

        self.assertFalse(form.is_valid())
        self.assertEqual(set(form.errors), {'deal_id', 'stage_id', 'position'})


class DealContactFormTest(TestCase):

    def setUp(self):
        self.user = User.objects.create_user(email='owner@example.com', password='S3cure-pass-123', full_name='Olive Owner')
        self.other = User.objects.create_user(email='other@example.com', password='S3cure-pass-123', full_name='Oscar Other')
        stage = DealStage.objects.get(owner=self.user, name='Lead')
        self.deal = Deal.objects.create(owner=self.user, stage=stage, title='Renewal')
        self.contact = Contact.objects.create(owner=self.user, first_name='Ada', last_name='Lovelace')

    def test_links_contact(self):
        form = DealContactForm({'contact': str(self.contact.pk), 'role': 'Champion'}, deal=self.deal)

        self.assertTrue(form.is_valid(), form.errors)
        link = form.save()

        self.assertEqual(link.deal, self.deal)
        self.assertEqual(link.role, 'Champion')

    def test_already_linked_contact_not_offered(self):
        DealContact.objects.create(deal=self.deal, contact=self.contact)

        form = DealContactForm({'contact': str(self.contact.pk)}, deal=self.deal)

        self.assertFalse(form.is_valid())
        self.assertIn('contact', form.errors)

    def test_contact_of_another_user(self):
        foreign = Contact.objects.create(owner=self.other, first_name='Grace', last_name='Hopper')

        form = DealContactForm({'contact': str(foreign.pk)}, deal=self.deal)

        self.assertFalse(form.is_valid())
        self.assertEqual(form.errors['contact'], ['Select a valid contact'])
