import json
import logging

from django.shortcuts import render, redirect, get_object_or_404
from django.contrib.auth.decorators import login_required
from django.contrib import messages
from django.db import DatabaseError
from django.http import JsonResponse
from django.views.decorators.http import require_POST

from apps.activities.models import Activity
from apps.core.utils import GENERIC_ERROR_MESSAGE, paginate, pagination_context, report_database_error
from apps.notes.forms import NoteForm
from apps.notes.models import Note
from .forms import DealForm, DealMoveForm, DealContactForm, DealFilterForm
from .models import Deal, DealStage, DealContact
from .pipeline import PipelineError, build_board


logger = logging.getLogger(__name__)


def _deal_payload(deal):
    return {
        'id': str(deal.pk),
        'title': deal.title,
        'stage_id': str(deal.stage_id),
        'position': deal.position,
        'won_at': deal.won_at.isoformat() if deal.won_at else None,
        'lost_at': deal.lost_at.isoformat() if deal.lost_at else None,
    }


def _errors_payload(form):
    return {field: [str(error) for error in errors] for field, errors in form.errors.items()}


def _load_json(request):
    try:
        data = json.loads(request.body or b'{}')
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    return data if isinstance(data, dict) else None


@login_required
def deal_board_view(request):
    """Kanban board with every deal of every stage (drop indexes count whole columns)"""
    stages = list(DealStage.objects.for_owner(request.user).order_by('display_order'))
    deals = Deal.objects.for_owner(request.user).select_related('company').on_board()

    board = build_board(stages, deals)

    context = {
        'board': board,
        'total_count': sum(column['count'] for column in board),
        'active_page': 'deals',
    }

    return render(request, 'deals/deal_board.html', context)


@login_required
def deal_list_view(request):
    deals = Deal.objects.for_owner(request.user).select_related('stage', 'company').order_by('-created_at')

    filter_form = DealFilterForm(request.GET, owner=request.user)
    search_query = ''

    if filter_form.is_valid():
        search_query = filter_form.cleaned_data.get('search', '').strip()
        if search_query:
            deals = deals.filter(title__icontains=search_query)

        if filter_form.cleaned_data.get('stage'):
            deals = deals.filter(stage=filter_form.cleaned_data['stage'])

    page_obj, paginator = paginate(request, deals)

    context = {
        'deals': page_obj,
        'filter_form': filter_form,
        'search_query': search_query,
        'active_page': 'deals',
        **pagination_context(page_obj, paginator),
    }

    return render(request, 'deals/deal_list.html', context)


@login_required
def deal_detail_view(request, pk):
    deal = get_object_or_404(
        Deal.objects.for_owner(request.user).select_related('stage', 'company'),
        pk=pk
    )

    deal_contacts = DealContact.objects.filter(deal=deal).select_related('contact')
    activities = Activity.objects.for_owner(request.user).filter(deal=deal).select_related('contact').order_by('-created_at')
    notes = Note.objects.for_owner(request.user).filter(deal=deal).order_by('-created_at')

    context = {
        'deal': deal,
        'deal_contacts': deal_contacts,
        'activities': activities,
        'notes': notes,
        'contact_form': DealContactForm(deal=deal),
        'note_form': NoteForm(owner=request.user, initial={'deal': deal.pk}),
        'note_parent_field': 'deal',
        'active_page': 'deals',
    }

    return render(request, 'deals/deal_detail.html', context)


@login_required
def deal_create_view(request):
    if request.method == 'POST':
        form = DealForm(request.POST, owner=request.user)

        if form.is_valid():
            try:
                deal = form.save()
                logger.info('Deal %s created by user %s', deal.pk, request.user.pk)
                messages.success(request, f'Deal "{deal.title}" created successfully')
                return redirect('deals:deal_board')

            except DatabaseError as e:
                report_database_error(request, 'creating deal', e)
        else:
            messages.error(request, 'Please correct the errors below.')
    else:
        initial = {}
        for field in ('stage', 'company'):
            if request.GET.get(field):
                initial[field] = request.GET[field]
        form = DealForm(owner=request.user, initial=initial)

    context = {
        'form': form,
        'form_title': 'New Deal',
        'submit_text': 'Create Deal',
        'cancel_url': 'deals:deal_board',
        'active_page': 'deals',
    }
    return render(request, 'deals/deal_form.html', context)


@login_required
def deal_edit_view(request, pk):
    deal = get_object_or_404(Deal.objects.for_owner(request.user), pk=pk)

    if request.method == 'POST':
        form = DealForm(request.POST, instance=deal, owner=request.user)

        if form.is_valid():
            try:
                deal = form.save()
                messages.success(request, f'Deal "{deal.title}" updated successfully')
                return redirect('deals:deal_detail', pk=deal.pk)

            except DatabaseError as e:
                report_database_error(request, 'updating deal', e)
        else:
            messages.error(request, 'Please correct the errors below.')
    else:
        form = DealForm(instance=deal, owner=request.user)

    context = {
        'form': form,
        'deal': deal,
        'form_title': f'Edit Deal: {deal.title}',
        'submit_text': 'Save Changes',
        'cancel_url': 'deals:deal_detail',
        'cancel_pk': deal.pk,
        'active_page': 'deals',
    }
    return render(request, 'deals/deal_form.html', context)


@login_required
@require_POST
def deal_delete_view(request, pk):
    deal = get_object_or_404(Deal.objects.for_owner(request.user), pk=pk)
    deal_title = deal.title

    try:
        deal.delete()
    except DatabaseError as e:
        report_database_error(request, 'deleting deal', e)
        return redirect('deals:deal_detail', pk=pk)

    logger.info('Deal %s deleted by user %s', pk, request.user.pk)
    messages.success(request, f'Deal "{deal_title}" deleted successfully')
    return redirect('deals:deal_board')


@login_required
@require_POST
def deal_add_contact_view(request, pk):
    deal = get_object_or_404(Deal.objects.for_owner(request.user), pk=pk)
    form = DealContactForm(request.POST, deal=deal)

    if form.is_valid():
        try:
            deal_contact = form.save()
            messages.success(request, f'{deal_contact.contact.full_name} linked to this deal')
        except DatabaseError as e:
            report_database_error(request, 'linking contact to deal', e)
    else:
        for errors in form.errors.values():
            messages.error(request, errors[0])

    return redirect('deals:deal_detail', pk=deal.pk)


@login_required
@require_POST
def deal_remove_contact_view(request, pk, contact_pk):
    deal = get_object_or_404(Deal.objects.for_owner(request.user), pk=pk)
    deal_contact = get_object_or_404(DealContact, deal=deal, contact_id=contact_pk)

    try:
        deal_contact.delete()
        messages.success(request, 'Contact removed from this deal')
    except DatabaseError as e:
        report_database_error(request, 'unlinking contact from deal', e)

    return redirect('deals:deal_detail', pk=deal.pk)


@login_required
@require_POST
def deal_move_view(request):
    """
    Persist a single kanban drag

    Body: {"deal_id": uuid, "stage_id": uuid, "position": int}
    The board script rolls back its optimistic render on any non-2xx answer.
    """
    data = _load_json(request)
    if data is None:
        return JsonResponse({'success': False, 'error': 'Invalid JSON format'}, status=400)

    form = DealMoveForm(data)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': _errors_payload(form)}, status=400)

    deal = Deal.objects.for_owner(request.user).filter(pk=form.cleaned_data['deal_id']).first()
    stage = DealStage.objects.for_owner(request.user).filter(pk=form.cleaned_data['stage_id']).first()
    if deal is None or stage is None:
        return JsonResponse({'success': False, 'error': 'Deal or stage not found'}, status=404)

    try:
        columns = deal.move_to(stage, form.cleaned_data['position'])

    except PipelineError as e:
        return JsonResponse({'success': False, 'error': str(e)}, status=400)

    except DatabaseError:
        logger.exception('Database error moving deal %s for user %s', deal.pk, request.user.pk)
        return JsonResponse({'success': False, 'error': GENERIC_ERROR_MESSAGE}, status=500)

    return JsonResponse({
        'success': True,
        'deal': _deal_payload(deal),
        'columns': {str(stage_id): [str(deal_id) for deal_id in deal_ids] for stage_id, deal_ids in columns.items()},
    })


@login_required
@require_POST
def deal_reorder_view(request):
    """
    Apply several position updates at once

    Body: {"updates": [{"id": uuid, "stage_id": uuid, "position": int}, ...]}
    """
    data = _load_json(request)
    updates = data.get('updates') if data else None
    if not isinstance(updates, list) or not updates:
        return JsonResponse({'success': False, 'error': 'updates must be a non-empty list'}, status=400)

    cleaned = []
    for index, update in enumerate(updates):
        if not isinstance(update, dict):
            return JsonResponse({'success': False, 'errors': {str(index): ['Invalid update']}}, status=400)

        form = DealMoveForm({
            'deal_id': update.get('id'),
            'stage_id': update.get('stage_id'),
            'position': update.get('position'),
        })
        if not form.is_valid():
            return JsonResponse({'success': False, 'errors': {str(index): _errors_payload(form)}}, status=400)

        cleaned.append({
            'id': form.cleaned_data['deal_id'],
            'stage_id': form.cleaned_data['stage_id'],
            'position': form.cleaned_data['position'],
        })

    try:
        deals = Deal.objects.reorder(request.user, cleaned)

    except PipelineError as e:
        return JsonResponse({'success': False, 'error': str(e)}, status=404)

    except DatabaseError:
        logger.exception('Database error reordering deals for user %s', request.user.pk)
        return JsonResponse({'success': False, 'error': GENERIC_ERROR_MESSAGE}, status=500)

    logger.info('User %s reordered %s deals', request.user.pk, len(deals))
    return JsonResponse({'success': True, 'deals': [_deal_payload(deal) for deal in deals]})
