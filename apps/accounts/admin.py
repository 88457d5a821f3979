from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _
from django.utils.html import format_html
from .forms import SignupForm
from .models import User, UserProfile


# USER PROFILE INLINE (Edit profile inside user form)
class UserProfileInline(admin.StackedInline):

    model = UserProfile

    # Show only 1 profile (since it's OneToOne relationship)
    can_delete = False
    verbose_name = _('User Profile')
    verbose_name_plural = _('User Profile')

    fk_name = "user"
    extra = 0
    max_num = 1

    fields = ('job_title', 'timezone', 'avatar_url')


# CUSTOM USER ADMIN
@admin.register(User)
class UserAdmin(BaseUserAdmin):
    add_form = SignupForm

    list_display = (
        'email',
        'full_name',
        'is_active_badge',
        'is_staff',
        'date_joined',
    )

    list_display_links = ('email', 'full_name')

    list_filter = (
        'is_active',
        'is_staff',
        'is_superuser',
        'date_joined',
    )
    search_fields = (
        'email',
        'full_name',
    )

    ordering = ('-date_joined',)
    list_per_page = 25
    list_select_related = ('profile',)

    fieldsets = (
        (_('Login Credentials'), {
            'fields': ('email', 'password'),
            'classes': ('wide',),
            'description': _('Email is used for login. Password is stored encrypted.')
        }),
        (_('Personal Information'), {
            'fields': ('full_name',),
            'classes': ('wide',),
        }),
        (_('Permissions'), {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',),
        }),
        (_('Activity Tracking'), {
            'fields': ('date_joined', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    # Fields shown when creating NEW user
    add_fieldsets = (
        (_('Login Credentials'), {
            'fields': ('email', 'password1', 'password2'),
            'classes': ('wide',),
        }),
        (_('Personal Information'), {
            'fields': ('full_name',),
            'classes': ('wide',),
        }),
    )

    readonly_fields = ('date_joined', 'last_login')

    inlines = [UserProfileInline]

    def is_active_badge(self, obj):
        if obj.is_active:
            return format_html(
                '<span style="background: #28a745; color: white; padding: 3px 10px; '
                'border-radius: 3px; font-size: 11px;">Active</span>'
            )
        return format_html(
            '<span style="background: #dc3545; color: white; padding: 3px 10px; '
            'border-radius: 3px; font-size: 11px;">Inactive</span>'
        )

    is_active_badge.short_description = _('Status')
    is_active_badge.admin_order_field = 'is_active'

    def has_delete_permission(self, request, obj=None):
        if obj and obj == request.user:
            return False  # Cannot delete yourself

        return super().has_delete_permission(request, obj)


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ('user', 'job_title', 'timezone')
    list_filter = ('timezone',)
    search_fields = ('user__email', 'user__full_name', 'job_title')
    readonly_fields = ('created_at', 'updated_at')


# ADMIN SITE CUSTOMIZATION
admin.site.site_header = _('Pipeline CRM Administration')
admin.site.site_title = _('Pipeline CRM')
admin.site.index_title = _('Pipeline CRM Admin Panel')
