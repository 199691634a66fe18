from django.contrib import admin
from django.utils.html import format_html

from .models import Contract


@admin.register(Contract)
class ContractAdmin(admin.ModelAdmin):

    list_display = ['id', 'contract_type', 'property', 'client', 'value', 'start_date', 'status_badge', 'company']
    list_filter = ['contract_type', 'status', 'company']
    search_fields = ['property__title', 'client__name', 'terms']
    list_select_related = ['property', 'client', 'company']
    readonly_fields = ['created_at', 'updated_at']

    fieldsets = (
        ('Parties', {
            'fields': ('company', 'contract_type', 'property', 'client')
        }),
        ('Terms', {
            'fields': ('value', 'commission', 'start_date', 'end_date', 'status', 'terms')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def status_badge(self, obj):
        color = '#28a745' if obj.status == 'ativo' else '#6c757d'
        return format_html(
            '<span style="color: {}; font-weight: bold;">● {}</span>',
            color,
            obj.get_status_display()
        )

    status_badge.short_description = 'Status'
