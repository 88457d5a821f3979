"""
Formatting Helpers Tests
========================

Test Coverage:
1. format_currency - symbols, separators, empty input
2. format_date - dates, datetimes and ISO strings
3. format_relative_date - past / future wording
4. get_initials
5. crm_format template filters

Run tests:
    python manage.py test apps.core.tests.test_formatting
"""

from datetime import date, datetime, timedelta, timezone as dt_timezone
from decimal import Decimal

from django.template import Context, Template
from django.test import SimpleTestCase

from apps.core.formatting import format_currency, format_date, format_relative_date, get_initials


class FormatCurrencyTest(SimpleTestCase):

    def test_usd_whole_units_with_separators(self):
        self.assertEqual(format_currency(1000), '$1,000')
        self.assertEqual(format_currency(Decimal('1234567.40')), '$1,234,567')

    def test_rounds_half_up(self):
        self.assertEqual(format_currency(Decimal('999.50')), '$1,000')

    def test_known_currency_symbols(self):
        self.assertEqual(format_currency(2500, 'EUR'), '€2,500')
        self.assertEqual(format_currency(2500, 'GBP'), '£2,500')

    def test_unknown_currency_uses_code(self):
        self.assertEqual(format_currency(1000, 'CHF'), 'CHF 1,000')

    def test_none_is_zero_placeholder(self):
        self.assertEqual(format_currency(None), '$0.00')
        self.assertEqual(format_currency(None, 'EUR'), '$0.00')

    def test_numeric_string(self):
        self.assertEqual(format_currency('5000'), '$5,000')

    def test_zero(self):
        self.assertEqual(format_currency(0), '$0')


class FormatDateTest(SimpleTestCase):

    def test_date(self):
        self.assertEqual(format_date(date(2025, 1, 15)), 'Jan 15, 2025')

    def test_aware_datetime(self):
        value = datetime(2025, 1, 15, 12, 30, tzinfo=dt_timezone.utc)
        self.assertEqual(format_date(value), 'Jan 15, 2025')

    def test_iso_strings(self):
        self.assertEqual(format_date('2025-01-15'), 'Jan 15, 2025')
        self.assertEqual(format_date('2025-01-15T12:00:00'), 'Jan 15, 2025')

    def test_empty_values(self):
        self.assertEqual(format_date(None), '')
        self.assertEqual(format_date(''), '')

    def test_unparseable_string(self):
        self.assertEqual(format_date('not a date'), '')


class FormatRelativeDateTest(SimpleTestCase):

    def setUp(self):
        self.now = datetime(2025, 6, 1, 12, 0, tzinfo=dt_timezone.utc)

    def test_days_ago(self):
        self.assertEqual(format_relative_date(self.now - timedelta(days=3), now=self.now), '3 days ago')

    def test_single_unit(self):
        value = self.now - timedelta(days=1, hours=5)
        self.assertEqual(format_relative_date(value, now=self.now), '1 day ago')

    def test_under_a_minute(self):
        value = self.now - timedelta(seconds=20)
        self.assertEqual(format_relative_date(value, now=self.now), 'less than a minute ago')

    def test_future(self):
        value = self.now + timedelta(hours=2, minutes=1)
        self.assertEqual(format_relative_date(value, now=self.now), 'in 2 hours')

    def test_empty_values(self):
        self.assertEqual(format_relative_date(None), '')
        self.assertEqual(format_relative_date(''), '')


class GetInitialsTest(SimpleTestCase):

    def test_two_words(self):
        self.assertEqual(get_initials('Jane Doe'), 'JD')

    def test_only_first_two_words(self):
        self.assertEqual(get_initials('john michael doe'), 'JM')

    def test_single_word(self):
        self.assertEqual(get_initials('acme'), 'A')

    def test_empty(self):
        self.assertEqual(get_initials(''), '')
        self.assertEqual(get_initials(None), '')


class FormatFiltersTest(SimpleTestCase):

    def render(self, source, **context):
        return Template('{% load crm_format %}' + source).render(Context(context))

    def test_currency_filter(self):
        self.assertEqual(self.render('{{ value|currency:code }}', value=1500, code='GBP'), '£1,500')
        self.assertEqual(self.render('{{ value|currency }}', value=None), '$0.00')

    def test_date_filters(self):
        self.assertEqual(self.render('{{ value|short_date }}', value=date(2025, 1, 15)), 'Jan 15, 2025')
        self.assertEqual(self.render('{{ value|relative_date }}', value=None), '')

    def test_initials_filter(self):
        self.assertEqual(self.render('{{ name|initials }}', name='Ada Lovelace'), 'AL')
