from django.db import models

from apps.clients.models import Client
from apps.core.models import Company
from apps.core.utils import decimal_or_none, isoformat_or_none
from apps.properties.models import Property


class Contract(models.Model):

    TYPE_CHOICES = [
        ('locacao', 'Locação'),
        ('venda', 'Venda'),
    ]

    STATUS_CHOICES = [
        ('ativo', 'Ativo'),
        ('vencido', 'Vencido'),
        ('cancelado', 'Cancelado'),
        ('renovado', 'Renovado'),
    ]

    # Property status set when a contract of each type is signed
    PROPERTY_STATUS_BY_TYPE = {
        'locacao': 'alugado',
        'venda': 'vendido',
    }

    company = models.ForeignKey(Company, on_delete=models.CASCADE, related_name='contracts')
    contract_type = models.CharField(max_length=20, choices=TYPE_CHOICES)

    # Contracts keep their property and client alive
    property = models.ForeignKey(Property, on_delete=models.PROTECT, related_name='contracts')
    client = models.ForeignKey(Client, on_delete=models.PROTECT, related_name='contracts')

    value = models.DecimalField(max_digits=12, decimal_places=2)
    start_date = models.DateTimeField()
    end_date = models.DateTimeField(blank=True, null=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='ativo', db_index=True)
    terms = models.TextField(blank=True, null=True)
    commission = models.DecimalField(max_digits=5, decimal_places=2, blank=True, null=True, help_text='Commission (%)')

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Contract'
        verbose_name_plural = 'Contracts'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['company', 'status'], name='contract_company_status_idx'),
        ]

    def __str__(self):
        return f"{self.get_contract_type_display()} #{self.pk} ({self.get_status_display()})"

    def to_json(self, property=None, client=None):
        data = {
            'id': self.id,
            'type': self.contract_type,
            'propertyId': self.property_id,
            'clientId': self.client_id,
            'value': decimal_or_none(self.value),
            'startDate': isoformat_or_none(self.start_date),
            'endDate': isoformat_or_none(self.end_date),
            'status': self.status,
            'terms': self.terms,
            'commission': decimal_or_none(self.commission),
            'companyId': self.company_id,
            'createdAt': isoformat_or_none(self.created_at),
            'updatedAt': isoformat_or_none(self.updated_at),
        }

        if property is not None:
            data['property'] = {'id': property.id, 'title': property.title, 'address': property.address}
        if client is not None:
            data['client'] = {'id': client.id, 'name': client.name, 'email': client.email}

        return data
