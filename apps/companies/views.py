import logging

from django.shortcuts import render, redirect, get_object_or_404
from django.contrib.auth.decorators import login_required
from django.contrib import messages
from django.db import DatabaseError
from django.db.models import Q
from django.views.decorators.http import require_POST

from apps.contacts.models import Contact
from apps.core.utils import paginate, pagination_context, report_database_error
from apps.deals.models import Deal
from apps.notes.forms import NoteForm
from apps.notes.models import Note
from .forms import CompanyForm, CompanyFilterForm
from .models import Company


logger = logging.getLogger(__name__)


@login_required
def company_list_view(request):
    companies = Company.objects.for_owner(request.user).order_by('-created_at')

    filter_form = CompanyFilterForm(request.GET)
    search_query = ''

    if filter_form.is_valid():
        search_query = filter_form.cleaned_data.get('search', '').strip()
        if search_query:
            companies = companies.filter(
                Q(name__icontains=search_query) |
                Q(domain__icontains=search_query)
            )

    page_obj, paginator = paginate(request, companies)

    context = {
        'companies': page_obj,
        'filter_form': filter_form,
        'search_query': search_query,
        'active_page': 'companies',
        **pagination_context(page_obj, paginator),
    }

    return render(request, 'companies/company_list.html', context)


@login_required
def company_detail_view(request, pk):
    company = get_object_or_404(Company.objects.for_owner(request.user), pk=pk)

    contacts = Contact.objects.for_owner(request.user).filter(company=company).order_by('last_name', 'first_name')
    deals = Deal.objects.for_owner(request.user).filter(company=company).select_related('stage').order_by('-created_at')
    notes = Note.objects.for_owner(request.user).filter(company=company).order_by('-created_at')

    context = {
        'company': company,
        'contacts': contacts,
        'deals': deals,
        'notes': notes,
        'note_form': NoteForm(owner=request.user, initial={'company': company.pk}),
        'note_parent_field': 'company',
        'active_tab': request.GET.get('tab', 'overview'),
        'active_page': 'companies',
    }

    return render(request, 'companies/company_detail.html', context)


@login_required
def company_create_view(request):
    if request.method == 'POST':
        form = CompanyForm(request.POST, owner=request.user)

        if form.is_valid():
            try:
                company = form.save()
                logger.info('Company %s created by user %s', company.pk, request.user.pk)
                messages.success(request, f'Company "{company.name}" created successfully')
                return redirect('companies:company_list')

            except DatabaseError as e:
                report_database_error(request, 'creating company', e)
        else:
            messages.error(request, 'Please correct the errors below.')
    else:
        form = CompanyForm(owner=request.user)

    context = {
        'form': form,
        'form_title': 'New Company',
        'submit_text': 'Create Company',
        'cancel_url': 'companies:company_list',
        'active_page': 'companies',
    }
    return render(request, 'companies/company_form.html', context)


@login_required
def company_edit_view(request, pk):
    company = get_object_or_404(Company.objects.for_owner(request.user), pk=pk)

    if request.method == 'POST':
        form = CompanyForm(request.POST, instance=company, owner=request.user)

        if form.is_valid():
            try:
                company = form.save()
                messages.success(request, f'Company "{company.name}" updated successfully')
                return redirect('companies:company_detail', pk=company.pk)

            except DatabaseError as e:
                report_database_error(request, 'updating company', e)
        else:
            messages.error(request, 'Please correct the errors below.')
    else:
        form = CompanyForm(instance=company, owner=request.user)

    context = {
        'form': form,
        'company': company,
        'form_title': f'Edit Company: {company.name}',
        'submit_text': 'Save Changes',
        'cancel_url': 'companies:company_detail',
        'cancel_pk': company.pk,
        'active_page': 'companies',
    }
    return render(request, 'companies/company_form.html', context)


@login_required
@require_POST
def company_delete_view(request, pk):
    company = get_object_or_404(Company.objects.for_owner(request.user), pk=pk)
    company_name = company.name

    try:
        company.delete()
    except DatabaseError as e:
        report_database_error(request, 'deleting company', e)
        return redirect('companies:company_detail', pk=pk)

    logger.info('Company %s deleted by user %s', pk, request.user.pk)
    messages.success(request, f'Company "{company_name}" deleted successfully')
    return redirect('companies:company_list')
