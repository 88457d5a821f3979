from django.contrib import admin
from django.utils.html import format_html

from .models import Deal, DealStage, DealContact


@admin.register(DealStage)
class DealStageAdmin(admin.ModelAdmin):

    list_display = ['name', 'colored_name', 'display_order', 'is_won', 'is_lost', 'owner']
    list_editable = ['display_order', 'is_won', 'is_lost']
    list_filter = ['is_won', 'is_lost']
    search_fields = ['name', 'owner__email']
    ordering = ['owner', 'display_order']
    raw_id_fields = ['owner']

    def colored_name(self, obj):
        """Display stage with its board colour"""
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 8px; '
            'border-radius: 3px; font-size: 11px;">{}</span>',
            obj.color or '#6c757d',
            obj.name
        )
    colored_name.short_description = 'Preview'


class DealContactInline(admin.TabularInline):
    model = DealContact
    extra = 0
    raw_id_fields = ['contact']


@admin.register(Deal)
class DealAdmin(admin.ModelAdmin):

    list_display = ['title', 'stage', 'value', 'currency', 'probability', 'company', 'owner', 'created_at']
    list_filter = ['stage__is_won', 'stage__is_lost', 'currency', 'created_at']
    search_fields = ['title', 'company__name', 'owner__email']
    ordering = ['-created_at']
    list_per_page = 50
    date_hierarchy = 'created_at'

    fieldsets = [
        ('Basic Information', {
            'fields': ['owner', 'title', 'company', 'description']
        }),
        ('Pipeline', {
            'fields': ['stage', 'position', 'value', 'currency', 'probability', 'expected_close_date']
        }),
        ('Outcome', {
            'fields': ['won_at', 'lost_at', 'lost_reason'],
            'classes': ['collapse'],
        }),
        ('Timestamps', {
            'fields': ['created_at', 'updated_at'],
            'classes': ['collapse'],
        }),
    ]

    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['owner', 'stage', 'company']
    inlines = [DealContactInline]
