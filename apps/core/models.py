from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from apps.core.utils import isoformat_or_none


class Company(models.Model):
    """
    Tenant root

    Every other row (properties, clients, contracts, ...) belongs to exactly
    one company, directly or through its parent.
    """

    # Basic Information
    name = models.CharField(max_length=200, help_text="Company name")
    document = models.CharField(max_length=20, unique=True, help_text="CNPJ/CPF (unique)")

    # Contact Information
    email = models.EmailField(help_text="Contact email")
    phone = models.CharField(max_length=20, blank=True, null=True, help_text="Contact phone number")
    address = models.TextField(blank=True, null=True, help_text="Physical address")

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Company"
        verbose_name_plural = "Companies"
        ordering = ['name']

    def __str__(self):
        return self.name

    def to_json(self):
        return {
            'id': self.id,
            'name': self.name,
            'document': self.document,
            'email': self.email,
            'phone': self.phone,
            'address': self.address,
            'createdAt': isoformat_or_none(self.created_at),
        }


class Activity(models.Model):
    """Append-only audit entry shown on the dashboard feed"""

    TYPE_CHOICES = [
        ('property_created', _('Property created')),
        ('lead_created', _('Lead created')),
        ('interaction_recorded', _('Interaction recorded')),
        ('appointment_created', _('Appointment created')),
        ('appointment_updated', _('Appointment updated')),
        ('appointment_deleted', _('Appointment deleted')),
        ('contract_signed', _('Contract signed')),
        ('transaction_created', _('Transaction created')),
        ('construction_created', _('Construction created')),
    ]

    company = models.ForeignKey(Company, on_delete=models.CASCADE, related_name='activities')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                             related_name='activities', help_text='Who performed this action')
    activity_type = models.CharField(max_length=30, choices=TYPE_CHOICES, help_text='Type of activity/action')
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True, null=True, help_text='Human-readable description of what happened')

    # Entity the activity refers to (property, client, contract, ...)
    entity_type = models.CharField(max_length=30, blank=True, null=True)
    entity_id = models.BigIntegerField(blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        verbose_name = 'Activity'
        verbose_name_plural = 'Activities'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['company', '-created_at'], name='activity_company_created_idx'),
        ]

    def __str__(self):
        return f"{self.get_activity_type_display()}: {self.title}"

    def to_json(self):
        return {
            'id': self.id,
            'type': self.activity_type,
            'title': self.title,
            'description': self.description,
            'entityType': self.entity_type,
            'entityId': self.entity_id,
            'userId': self.user_id,
            'companyId': self.company_id,
            'createdAt': isoformat_or_none(self.created_at),
        }
