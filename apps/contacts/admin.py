from django.contrib import admin
from django.utils.html import format_html

from .models import Contact


@admin.register(Contact)
class ContactAdmin(admin.ModelAdmin):

    list_display = ['full_name', 'email', 'company', 'status_badge', 'owner', 'created_at']
    list_filter = ['status', 'created_at']
    search_fields = ['first_name', 'last_name', 'email', 'owner__email']
    ordering = ['-created_at']
    list_per_page = 50
    date_hierarchy = 'created_at'

    fieldsets = [
        ('Basic Information', {
            'fields': ['owner', 'first_name', 'last_name', 'email', 'phone', 'job_title']
        }),
        ('Classification', {
            'fields': ['company', 'status', 'source']
        }),
        ('Address', {
            'fields': ['address', 'city', 'state', 'country'],
            'classes': ['collapse'],
        }),
        ('Timestamps', {
            'fields': ['created_at', 'updated_at'],
            'classes': ['collapse'],
        }),
    ]

    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['owner', 'company']

    STATUS_COLORS = {
        'active': '#28a745',
        'inactive': '#6c757d',
        'lead': '#17a2b8',
    }

    def status_badge(self, obj):
        """Display status with colored badge"""
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 8px; '
            'border-radius: 3px; font-size: 11px;">{}</span>',
            self.STATUS_COLORS.get(obj.status, '#6c757d'),
            obj.get_status_display()
        )
    status_badge.short_description = 'Status'
