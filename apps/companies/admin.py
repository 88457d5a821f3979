from django.contrib import admin

from .models import Company


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):

    list_display = ['name', 'domain', 'industry', 'size', 'owner', 'created_at']
    list_filter = ['size', 'industry', 'created_at']
    search_fields = ['name', 'domain', 'owner__email']
    ordering = ['-created_at']
    list_per_page = 50
    date_hierarchy = 'created_at'

    fieldsets = [
        ('Basic Information', {
            'fields': ['owner', 'name', 'domain', 'industry', 'size', 'phone']
        }),
        ('Address', {
            'fields': ['address', 'city', 'state', 'country'],
            'classes': ['collapse'],
        }),
        ('Additional Info', {
            'fields': ['notes'],
            'classes': ['collapse'],
        }),
        ('Timestamps', {
            'fields': ['created_at', 'updated_at'],
            'classes': ['collapse'],
        }),
    ]

    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['owner']
