from django.contrib import admin
from django.utils.html import format_html

from .models import Property


STATUS_COLORS = {
    'disponivel': '#28a745',
    'alugado': '#007bff',
    'vendido': '#6c757d',
    'manutencao': '#ffc107',
}


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):

    list_display = ['title', 'property_type', 'status_badge', 'price', 'city', 'state', 'company', 'created_at']
    list_filter = ['property_type', 'status', 'state', 'company']
    search_fields = ['title', 'address', 'neighborhood', 'city']
    list_select_related = ['company']
    readonly_fields = ['created_at', 'updated_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('company', 'title', 'description', 'property_type', 'status')
        }),
        ('Details', {
            'fields': ('price', 'area', 'bedrooms', 'bathrooms', 'parking_spaces', 'images')
        }),
        ('Location', {
            'fields': ('address', 'neighborhood', 'city', 'state', 'zip_code')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def status_badge(self, obj):
        return format_html(
            '<span style="background-color: {}; color: white; '
            'padding: 3px 10px; border-radius: 3px; font-size: 11px;">{}</span>',
            STATUS_COLORS.get(obj.status, '#6c757d'),
            obj.get_status_display()
        )

    status_badge.short_description = 'Status'
