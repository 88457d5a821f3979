import logging

from django.shortcuts import render, redirect, get_object_or_404
from django.contrib.auth.decorators import login_required
from django.contrib import messages
from django.db import DatabaseError
from django.db.models import Q
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_POST

from apps.core.utils import paginate, pagination_context, report_database_error
from .forms import ActivityForm, ActivityFilterForm
from .models import Activity


logger = logging.getLogger(__name__)


def _redirect_back(request, default='activities:activity_list'):
    """Follow ?next= / POST next when it points at this site"""
    next_url = request.POST.get('next') or request.GET.get('next')
    if next_url and url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}, require_https=request.is_secure()):
        return redirect(next_url)
    return redirect(default)


@login_required
def activity_list_view(request):
    """
    Activity list with the creation sheet

    GET renders the filtered list; POST creates an activity from the sheet
    and re-renders the list with the sheet open on validation errors.
    """
    show_sheet = False

    if request.method == 'POST':
        form = ActivityForm(request.POST, owner=request.user)

        if form.is_valid():
            try:
                activity = form.save()
                logger.info('Activity %s created by user %s', activity.pk, request.user.pk)
                messages.success(request, f'Activity "{activity.title}" created successfully')
                return _redirect_back(request)

            except DatabaseError as e:
                report_database_error(request, 'creating activity', e)
        else:
            messages.error(request, 'Please correct the errors below.')
        show_sheet = True
    else:
        initial = {}
        for field in ('contact', 'deal', 'activity_type'):
            if request.GET.get(field):
                initial[field] = request.GET[field]
        form = ActivityForm(owner=request.user, initial=initial)
        show_sheet = bool(initial) or request.GET.get('new') == '1'

    activities = Activity.objects.for_owner(request.user).select_related('contact', 'deal').order_by('-created_at')

    filter_form = ActivityFilterForm(request.GET, owner=request.user)
    search_query = ''

    if filter_form.is_valid():
        search_query = filter_form.cleaned_data.get('search', '').strip()
        if search_query:
            activities = activities.filter(
                Q(title__icontains=search_query) |
                Q(description__icontains=search_query)
            )

        if filter_form.cleaned_data.get('activity_type'):
            activities = activities.filter(activity_type=filter_form.cleaned_data['activity_type'])

        completed = filter_form.cleaned_data.get('completed')
        if completed == 'open':
            activities = activities.filter(is_completed=False)
        elif completed == 'done':
            activities = activities.filter(is_completed=True)

        if filter_form.cleaned_data.get('contact'):
            activities = activities.filter(contact=filter_form.cleaned_data['contact'])

        if filter_form.cleaned_data.get('deal'):
            activities = activities.filter(deal=filter_form.cleaned_data['deal'])

    page_obj, paginator = paginate(request, activities)

    context = {
        'activities': page_obj,
        'filter_form': filter_form,
        'form': form,
        'show_sheet': show_sheet,
        'search_query': search_query,
        'overdue_count': Activity.objects.for_owner(request.user).overdue().count(),
        'active_page': 'activities',
        **pagination_context(page_obj, paginator),
    }

    return render(request, 'activities/activity_list.html', context)


@login_required
def activity_edit_view(request, pk):
    activity = get_object_or_404(Activity.objects.for_owner(request.user), pk=pk)

    if request.method == 'POST':
        form = ActivityForm(request.POST, instance=activity, owner=request.user)

        if form.is_valid():
            try:
                activity = form.save()
                messages.success(request, f'Activity "{activity.title}" updated successfully')
                return _redirect_back(request)

            except DatabaseError as e:
                report_database_error(request, 'updating activity', e)
        else:
            messages.error(request, 'Please correct the errors below.')
    else:
        form = ActivityForm(instance=activity, owner=request.user)

    context = {
        'form': form,
        'activity': activity,
        'form_title': f'Edit Activity: {activity.title}',
        'submit_text': 'Save Changes',
        'cancel_url': 'activities:activity_list',
        'active_page': 'activities',
    }
    return render(request, 'activities/activity_form.html', context)


@login_required
@require_POST
def activity_delete_view(request, pk):
    activity = get_object_or_404(Activity.objects.for_owner(request.user), pk=pk)
    activity_title = activity.title

    try:
        activity.delete()
    except DatabaseError as e:
        report_database_error(request, 'deleting activity', e)
        return _redirect_back(request)

    logger.info('Activity %s deleted by user %s', pk, request.user.pk)
    messages.success(request, f'Activity "{activity_title}" deleted successfully')
    return _redirect_back(request)


@login_required
@require_POST
def activity_toggle_view(request, pk):
    activity = get_object_or_404(Activity.objects.for_owner(request.user), pk=pk)

    try:
        completed = activity.toggle_complete()
    except DatabaseError as e:
        report_database_error(request, 'updating activity', e)
        return _redirect_back(request)

    if completed:
        messages.success(request, f'"{activity.title}" marked as done')
    else:
        messages.success(request, f'"{activity.title}" reopened')
    return _redirect_back(request)
