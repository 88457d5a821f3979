from django.contrib import admin

from .models import Activity


@admin.register(Activity)
class ActivityAdmin(admin.ModelAdmin):

    list_display = ['title', 'activity_type', 'due_date', 'is_completed', 'contact', 'deal', 'owner']
    list_filter = ['activity_type', 'is_completed', 'due_date']
    search_fields = ['title', 'description', 'owner__email']
    ordering = ['-created_at']
    list_per_page = 50
    date_hierarchy = 'created_at'
    readonly_fields = ['created_at', 'updated_at', 'completed_at']
    raw_id_fields = ['owner', 'contact', 'deal']
