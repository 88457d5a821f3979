import logging

from django.shortcuts import render, redirect, get_object_or_404
from django.contrib.auth.decorators import login_required
from django.contrib import messages
from django.db import DatabaseError
from django.views.decorators.http import require_POST

from apps.core.utils import report_database_error
from .forms import NoteForm
from .models import Note


logger = logging.getLogger(__name__)


@login_required
@require_POST
def note_create_view(request):
    """Add a note from the form on a contact, company or deal page"""
    form = NoteForm(request.POST, owner=request.user)

    if form.is_valid():
        note = form.save(commit=False)

        if note.parent is None:
            messages.error(request, 'A note must be attached to a contact, company or deal')
            return redirect('core:dashboard')

        try:
            note.save()
            logger.info('Note %s created by user %s', note.pk, request.user.pk)
            messages.success(request, 'Note added successfully')
        except DatabaseError as e:
            report_database_error(request, 'creating note', e)

        return redirect(note.get_parent_url())

    for errors in form.errors.values():
        messages.error(request, errors[0])

    # Send the user back to whichever parent the form was posted from
    parent_note = Note(**{field: form.cleaned_data.get(field) for field in Note.PARENT_FIELDS if form.cleaned_data.get(field)})
    return redirect(parent_note.get_parent_url())


@login_required
def note_edit_view(request, pk):
    note = get_object_or_404(Note.objects.for_owner(request.user), pk=pk)

    if request.method == 'POST':
        form = NoteForm(request.POST, instance=note, owner=request.user)

        if form.is_valid():
            try:
                note = form.save()
                messages.success(request, 'Note updated successfully')
                return redirect(note.get_parent_url())

            except DatabaseError as e:
                report_database_error(request, 'updating note', e)
        else:
            messages.error(request, 'Please correct the errors below.')
    else:
        form = NoteForm(instance=note, owner=request.user)

    context = {
        'form': form,
        'note': note,
        'form_title': 'Edit Note',
        'submit_text': 'Save Changes',
        'cancel_href': note.get_parent_url(),
    }
    return render(request, 'notes/note_form.html', context)


@login_required
@require_POST
def note_delete_view(request, pk):
    note = get_object_or_404(Note.objects.for_owner(request.user), pk=pk)
    parent_url = note.get_parent_url()

    try:
        note.delete()
    except DatabaseError as e:
        report_database_error(request, 'deleting note', e)
        return redirect(parent_url)

    logger.info('Note %s deleted by user %s', pk, request.user.pk)
    messages.success(request, 'Note deleted successfully')
    return redirect(parent_url)
