import logging

from django.shortcuts import render, redirect, get_object_or_404
from django.contrib.auth.decorators import login_required
from django.contrib import messages
from django.db import DatabaseError
from django.db.models import Q
from django.views.decorators.http import require_POST

from apps.activities.models import Activity
from apps.core.utils import paginate, pagination_context, report_database_error
from apps.deals.models import Deal
from apps.notes.forms import NoteForm
from apps.notes.models import Note
from .forms import ContactForm, ContactFilterForm
from .models import Contact


logger = logging.getLogger(__name__)


@login_required
def contact_list_view(request):
    contacts = Contact.objects.for_owner(request.user).select_related('company').order_by('-created_at')

    filter_form = ContactFilterForm(request.GET)
    search_query = ''

    if filter_form.is_valid():
        search_query = filter_form.cleaned_data.get('search', '').strip()

        if search_query:
            contacts = contacts.filter(
                Q(first_name__icontains=search_query) |
                Q(last_name__icontains=search_query) |
                Q(email__icontains=search_query)
            )

        if filter_form.cleaned_data.get('status'):
            contacts = contacts.filter(status=filter_form.cleaned_data['status'])

    page_obj, paginator = paginate(request, contacts)

    context = {
        'contacts': page_obj,
        'filter_form': filter_form,
        'search_query': search_query,
        'active_page': 'contacts',
        **pagination_context(page_obj, paginator),
    }

    return render(request, 'contacts/contact_list.html', context)


@login_required
def contact_detail_view(request, pk):
    contact = get_object_or_404(
        Contact.objects.for_owner(request.user).select_related('company'),
        pk=pk
    )

    activities = Activity.objects.for_owner(request.user).filter(contact=contact).select_related('deal').order_by('-created_at')
    notes = Note.objects.for_owner(request.user).filter(contact=contact).order_by('-created_at')
    deals = Deal.objects.for_owner(request.user).filter(deal_contacts__contact=contact).select_related('stage').distinct()

    context = {
        'contact': contact,
        'activities': activities,
        'notes': notes,
        'deals': deals,
        'note_form': NoteForm(owner=request.user, initial={'contact': contact.pk}),
        'note_parent_field': 'contact',
        'active_tab': request.GET.get('tab', 'overview'),
        'active_page': 'contacts',
    }

    return render(request, 'contacts/contact_detail.html', context)


@login_required
def contact_create_view(request):
    if request.method == 'POST':
        form = ContactForm(request.POST, owner=request.user)

        if form.is_valid():
            try:
                contact = form.save()
                logger.info('Contact %s created by user %s', contact.pk, request.user.pk)
                messages.success(request, f'Contact "{contact.full_name}" created successfully')
                return redirect('contacts:contact_list')

            except DatabaseError as e:
                report_database_error(request, 'creating contact', e)
        else:
            messages.error(request, 'Please correct the errors below.')
    else:
        initial = {}
        if request.GET.get('company'):
            initial['company'] = request.GET['company']
        form = ContactForm(owner=request.user, initial=initial)

    context = {
        'form': form,
        'form_title': 'New Contact',
        'submit_text': 'Create Contact',
        'cancel_url': 'contacts:contact_list',
        'active_page': 'contacts',
    }
    return render(request, 'contacts/contact_form.html', context)


@login_required
def contact_edit_view(request, pk):
    contact = get_object_or_404(Contact.objects.for_owner(request.user), pk=pk)

    if request.method == 'POST':
        form = ContactForm(request.POST, instance=contact, owner=request.user)

        if form.is_valid():
            try:
                contact = form.save()
                messages.success(request, f'Contact "{contact.full_name}" updated successfully')
                return redirect('contacts:contact_detail', pk=contact.pk)

            except DatabaseError as e:
                report_database_error(request, 'updating contact', e)
        else:
            messages.error(request, 'Please correct the errors below.')
    else:
        form = ContactForm(instance=contact, owner=request.user)

    context = {
        'form': form,
        'contact': contact,
        'form_title': f'Edit Contact: {contact.full_name}',
        'submit_text': 'Save Changes',
        'cancel_url': 'contacts:contact_detail',
        'cancel_pk': contact.pk,
        'active_page': 'contacts',
    }
    return render(request, 'contacts/contact_form.html', context)


@login_required
@require_POST
def contact_delete_view(request, pk):
    contact = get_object_or_404(Contact.objects.for_owner(request.user), pk=pk)
    contact_name = contact.full_name

    try:
        contact.delete()
    except DatabaseError as e:
        report_database_error(request, 'deleting contact', e)
        return redirect('contacts:contact_detail', pk=pk)

    logger.info('Contact %s deleted by user %s', pk, request.user.pk)
    messages.success(request, f'Contact "{contact_name}" deleted successfully')
    return redirect('contacts:contact_list')
