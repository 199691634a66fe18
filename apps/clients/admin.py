from django.contrib import admin
from django.utils.html import format_html

from .models import Client, ClientInteraction


STAGE_COLORS = {
    'novo': '#17a2b8',
    'qualificado': '#007bff',
    'visita_agendada': '#ffc107',
    'proposta': '#fd7e14',
    'fechado': '#28a745',
    'perdido': '#6c757d',
}


class ClientInteractionInline(admin.TabularInline):
    model = ClientInteraction
    extra = 0
    can_delete = False
    fields = ['occurred_at', 'interaction_type', 'channel', 'summary', 'stage', 'created_by']
    readonly_fields = fields
    ordering = ['-occurred_at']

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):

    list_display = ['name', 'email', 'phone', 'client_type', 'stage_badge', 'pipeline_value', 'next_follow_up', 'company']
    list_filter = ['client_type', 'stage', 'company', 'created_at']
    search_fields = ['name', 'email', 'phone', 'document']
    list_select_related = ['company']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [ClientInteractionInline]

    fieldsets = (
        ('Basic Information', {
            'fields': ('company', 'name', 'email', 'phone', 'document', 'client_type', 'address')
        }),
        ('Pipeline', {
            'fields': ('stage', 'source', 'pipeline_value', 'last_contact_at', 'next_follow_up', 'tags')
        }),
        ('Notes', {
            'fields': ('notes',)
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def stage_badge(self, obj):
        return format_html(
            '<span style="background-color: {}; color: white; '
            'padding: 3px 10px; border-radius: 3px; font-size: 11px;">{}</span>',
            STAGE_COLORS.get(obj.stage, '#6c757d'),
            obj.get_stage_display()
        )

    stage_badge.short_description = 'Stage'


@admin.register(ClientInteraction)
class ClientInteractionAdmin(admin.ModelAdmin):
    """Contact log is append-only"""

    list_display = ['client', 'interaction_type', 'channel', 'stage', 'occurred_at', 'created_by']
    list_filter = ['interaction_type', 'channel', 'stage']
    search_fields = ['client__name', 'summary', 'next_steps']
    list_select_related = ['client']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
