from django import forms

from apps.core.forms import ApiForm, OptionalReferenceField

from .models import Appointment


class AppointmentForm(ApiForm):
    renamed_fields = {'type': 'appointment_type'}
    not_null_fields = ('type', 'status', 'duration_minutes')

    client_id = forms.IntegerField(min_value=1)
    property_id = OptionalReferenceField()
    type = forms.ChoiceField(choices=Appointment.TYPE_CHOICES)
    status = forms.ChoiceField(choices=Appointment.STATUS_CHOICES, required=False)
    scheduled_at = forms.DateTimeField()
    duration_minutes = forms.IntegerField(min_value=1, required=False)
    notes = forms.CharField(required=False, empty_value=None)
    agent_name = forms.CharField(max_length=200, required=False, empty_value=None)
    channel = forms.CharField(max_length=50, required=False, empty_value=None)
