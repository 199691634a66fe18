from django.contrib import admin
from django.utils.html import format_html

from .models import Activity, Company


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):

    list_display = [
        'name',
        'document',
        'contact_info',
        'created_at'
    ]
    list_filter = ['created_at']
    search_fields = ['name', 'document', 'email', 'phone']
    readonly_fields = ['created_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'document')
        }),
        ('Contact Information', {
            'fields': ('email', 'phone', 'address')
        }),
        ('Timestamps', {
            'fields': ('created_at',),
            'classes': ('collapse',)
        }),
    )

    def contact_info(self, obj):
        if obj.phone:
            return format_html('{}<br>{}', obj.email, obj.phone)
        return obj.email

    contact_info.short_description = 'Contact'


@admin.register(Activity)
class ActivityAdmin(admin.ModelAdmin):
    """Audit feed: rows are written by the services only"""

    list_display = ['title', 'activity_type', 'company', 'entity_type', 'entity_id', 'user', 'created_at']
    list_filter = ['activity_type', 'company', 'created_at']
    search_fields = ['title', 'description']
    list_select_related = ['company', 'user']
    readonly_fields = [
        'company', 'user', 'activity_type', 'title', 'description',
        'entity_type', 'entity_id', 'created_at',
    ]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
