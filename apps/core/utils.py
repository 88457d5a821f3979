"""
Helper utilities shared by the list views
"""
import logging

from django.conf import settings
from django.contrib import messages
from django.core.paginator import Paginator


logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = 'Something went wrong. Please try again.'


def paginate(request, queryset, per_page=None):
    """
    Slice a queryset into the page requested by ``?page=``

    Invalid or out-of-range page numbers fall back to the first/last page.

    Returns:
        (page_obj, paginator)
    """
    paginator = Paginator(queryset, per_page or getattr(settings, 'CRM_PAGE_SIZE', 20))
    page_obj = paginator.get_page(request.GET.get('page', 1))
    return page_obj, paginator


def pagination_context(page_obj, paginator):
    return {
        'page_obj': page_obj,
        'total_count': paginator.count,
        'is_paginated': page_obj.has_other_pages(),
        'page_range': paginator.get_elided_page_range(
            page_obj.number,
            on_each_side=2,
            on_ends=1
        ),
    }


def report_database_error(request, action, exc):
    """
    Log a failed write and show the generic toast

    The user only ever sees GENERIC_ERROR_MESSAGE; details go to the log.
    """
    logger.exception('Database error while %s for user %s: %s', action, request.user.pk, exc)
    messages.error(request, GENERIC_ERROR_MESSAGE)

