from django.contrib import admin

from .models import Note


@admin.register(Note)
class NoteAdmin(admin.ModelAdmin):

    list_display = ['__str__', 'contact', 'company', 'deal', 'owner', 'created_at']
    search_fields = ['content', 'owner__email']
    ordering = ['-created_at']
    list_per_page = 50
    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['owner', 'contact', 'company', 'deal']
