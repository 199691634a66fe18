from django.contrib import admin

from .models import Appointment


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):

    list_display = ['scheduled_at', 'client', 'property', 'appointment_type', 'status', 'agent_name', 'company']
    list_filter = ['status', 'appointment_type', 'company']
    search_fields = ['client__name', 'property__title', 'agent_name', 'notes']
    list_select_related = ['client', 'property', 'company']
    date_hierarchy = 'scheduled_at'
    readonly_fields = ['created_at', 'updated_at']
