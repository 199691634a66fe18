from django.db import models

from apps.clients.models import Client
from apps.core.models import Company
from apps.core.utils import isoformat_or_none
from apps.properties.models import Property


class Appointment(models.Model):
    """Visit, meeting or inspection scheduled with a client"""

    TYPE_CHOICES = [
        ('visita', 'Visita'),
        ('reuniao', 'Reunião'),
        ('vistoria', 'Vistoria'),
    ]

    STATUS_CHOICES = [
        ('agendado', 'Agendado'),
        ('confirmado', 'Confirmado'),
        ('realizado', 'Realizado'),
        ('cancelado', 'Cancelado'),
        ('no_show', 'Não compareceu'),
    ]

    # Statuses still expected to happen (upcoming list)
    OPEN_STATUSES = ('agendado', 'confirmado')

    company = models.ForeignKey(Company, on_delete=models.CASCADE, related_name='appointments')
    client = models.ForeignKey(Client, on_delete=models.CASCADE, related_name='appointments')
    property = models.ForeignKey(Property, on_delete=models.SET_NULL, null=True, blank=True, related_name='appointments')

    appointment_type = models.CharField(max_length=20, choices=TYPE_CHOICES, default='visita')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='agendado', db_index=True)
    scheduled_at = models.DateTimeField(db_index=True)
    duration_minutes = models.PositiveIntegerField(default=60)
    notes = models.TextField(blank=True, null=True)
    agent_name = models.CharField(max_length=200, blank=True, null=True, help_text='Broker attending the appointment')
    channel = models.CharField(max_length=50, blank=True, null=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Appointment'
        verbose_name_plural = 'Appointments'
        ordering = ['scheduled_at']
        indexes = [
            models.Index(fields=['company', 'scheduled_at'], name='appt_company_scheduled_idx'),
            models.Index(fields=['company', 'status'], name='appt_company_status_idx'),
        ]

    def __str__(self):
        return f"{self.get_appointment_type_display()} - {self.scheduled_at:%d/%m/%Y %H:%M} ({self.get_status_display()})"

    def is_open(self):
        return self.status in self.OPEN_STATUSES

    def to_json(self, client=None, property=None):
        data = {
            'id': self.id,
            'clientId': self.client_id,
            'propertyId': self.property_id,
            'type': self.appointment_type,
            'status': self.status,
            'scheduledAt': isoformat_or_none(self.scheduled_at),
            'durationMinutes': self.duration_minutes,
            'notes': self.notes,
            'agentName': self.agent_name,
            'channel': self.channel,
            'companyId': self.company_id,
            'createdAt': isoformat_or_none(self.created_at),
            'updatedAt': isoformat_or_none(self.updated_at),
        }

        if client is not None:
            data['client'] = {'id': client.id, 'name': client.name, 'phone': client.phone, 'stage': client.stage}
        if property is not None:
            data['property'] = {'id': property.id, 'title': property.title, 'address': property.address}

        return data
