"""
Display helpers shared by templates, models and JSON views.

All helpers accept empty input (None / '') and return a placeholder
instead of raising, so templates can pipe raw column values through them.
"""
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime
from django.utils.timesince import timesince, timeuntil


CURRENCY_SYMBOLS = {
    'USD': '$',
    'EUR': '€',
    'GBP': '£',
}

ZERO_AMOUNT = '$0.00'


def format_currency(amount, currency='USD'):
    """
    Whole units with thousands separators: 1234567 -> '$1,234,567'

    None renders as '$0.00'. Unknown currency codes are prefixed as-is
    ('CHF 1,000').
    """
    if amount is None:
        return ZERO_AMOUNT

    try:
        value = Decimal(str(amount)).quantize(Decimal('1'), rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError):
        return ZERO_AMOUNT

    sign = '-' if value < 0 else ''
    digits = f'{abs(value):,.0f}'
    code = (currency or 'USD').upper()
    symbol = CURRENCY_SYMBOLS.get(code)

    if symbol:
        return f'{sign}{symbol}{digits}'
    return f'{sign}{code} {digits}'


def _to_datetime(value):
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        parsed = parse_datetime(value)
        if parsed is None:
            parsed_date = parse_date(value)
            if parsed_date is None:
                return None
            parsed = datetime(parsed_date.year, parsed_date.month, parsed_date.day)
        return parsed
    return None


def format_date(value):
    """'2025-01-15T12:00:00' -> 'Jan 15, 2025'; empty input -> ''"""
    if not value:
        return ''

    dt = _to_datetime(value)
    if dt is None:
        return ''
    if timezone.is_aware(dt):
        dt = timezone.localtime(dt)

    return f'{dt:%b} {dt.day}, {dt.year}'


def format_relative_date(value, now=None):
    """
    '3 days ago' for past values, 'in 2 hours' for future ones.

    Anything under a minute in the past renders as 'less than a minute ago'.
    """
    if not value:
        return ''

    dt = _to_datetime(value)
    if dt is None:
        return ''

    now = now or timezone.now()
    if timezone.is_naive(dt) and timezone.is_aware(now):
        dt = timezone.make_aware(dt, timezone.get_current_timezone())
    elif timezone.is_aware(dt) and timezone.is_naive(now):
        now = timezone.make_aware(now, timezone.get_current_timezone())

    if dt > now:
        return f"in {timeuntil(dt, now, depth=1)}".replace('\xa0', ' ')

    if (now - dt).total_seconds() < 60:
        return 'less than a minute ago'
    return f"{timesince(dt, now, depth=1)} ago".replace('\xa0', ' ')


def get_initials(name):
    """'john michael doe' -> 'JM'"""
    if not name:
        return ''
    return ''.join(part[0] for part in name.split()[:2]).upper()
