from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _

from .models import User


ROLE_COLORS = {
    'admin': '#28a745',
    'corretor': '#007bff',
    'financeiro': '#6f42c1',
}


# CUSTOM USER ADMIN
@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = (
        'email',
        'get_full_name_display',
        'company',
        'role_badge',
        'is_active',
        'date_joined',
    )
    list_display_links = ('email', 'get_full_name_display')
    list_filter = ('role', 'is_active', 'is_staff', 'company')
    search_fields = ('email', 'first_name', 'last_name', 'phone', 'company__name')
    ordering = ('-date_joined',)
    list_per_page = 25
    list_select_related = ('company',)

    fieldsets = (
        (_('Login Credentials'), {
            'fields': ('email', 'password'),
            'description': _('Email is used for login. Password is stored encrypted.')
        }),
        (_('Personal Information'), {
            'fields': ('first_name', 'last_name', 'phone'),
        }),
        (_('Company & Role'), {
            'fields': ('company', 'role'),
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
            'fields': ('first_name', 'last_name', 'phone'),
        }),
        (_('Company & Role'), {
            'fields': ('company', 'role'),
        }),
    )

    readonly_fields = ('date_joined', 'last_login')

    def get_full_name_display(self, obj):
        return obj.get_full_name()

    get_full_name_display.short_description = _('Full Name')
    get_full_name_display.admin_order_field = 'first_name'

    def role_badge(self, obj):
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 10px; '
            'border-radius: 3px; font-size: 11px;">{}</span>',
            ROLE_COLORS.get(obj.role, '#6c757d'), obj.get_role_display()
        )

    role_badge.short_description = _('Role')
    role_badge.admin_order_field = 'role'

    actions = ['activate_users', 'deactivate_users']

    def activate_users(self, request, queryset):
        updated = queryset.update(is_active=True)
        self.message_user(request, _('%(count)d user(s) were successfully activated.') % {'count': updated})

    activate_users.short_description = _('Activate selected users')

    def deactivate_users(self, request, queryset):
        # Never lock yourself out
        updated = queryset.exclude(pk=request.user.pk).update(is_active=False)
        self.message_user(request, _('%(count)d user(s) were deactivated.') % {'count': updated})

    deactivate_users.short_description = _('Deactivate selected users')
