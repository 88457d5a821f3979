from django import template

from apps.core import formatting


register = template.Library()


@register.filter
def currency(amount, code='USD'):
    """{{ deal.value|currency:deal.currency }}"""
    return formatting.format_currency(amount, code)


@register.filter
def short_date(value):
    return formatting.format_date(value)


@register.filter
def relative_date(value):
    return formatting.format_relative_date(value)


@register.filter
def initials(name):
    return formatting.get_initials(name)
