from django.db import models

from apps.core.models import Company
from apps.core.utils import decimal_or_none, isoformat_or_none


class Property(models.Model):

    TYPE_CHOICES = [
        ('apartamento', 'Apartamento'),
        ('casa', 'Casa'),
        ('comercial', 'Comercial'),
        ('terreno', 'Terreno'),
    ]

    # Any status may follow any other; contracts flip it to alugado/vendido
    STATUS_CHOICES = [
        ('disponivel', 'Disponível'),
        ('alugado', 'Alugado'),
        ('vendido', 'Vendido'),
        ('manutencao', 'Manutenção'),
    ]

    company = models.ForeignKey(Company, on_delete=models.CASCADE, related_name='properties', help_text='Which company owns this property')

    # Basic Information
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True, null=True)
    property_type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='disponivel', db_index=True)

    # Features
    price = models.DecimalField(max_digits=12, decimal_places=2)
    area = models.DecimalField(max_digits=8, decimal_places=2, blank=True, null=True, help_text='Area in m²')
    bedrooms = models.PositiveIntegerField(blank=True, null=True)
    bathrooms = models.PositiveIntegerField(blank=True, null=True)
    parking_spaces = models.PositiveIntegerField(blank=True, null=True)

    # Address
    address = models.CharField(max_length=255)
    neighborhood = models.CharField(max_length=100)
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=2)
    zip_code = models.CharField(max_length=10)

    images = models.JSONField(default=list, blank=True, help_text='Image URLs')

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Property'
        verbose_name_plural = 'Properties'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['company', 'status'], name='property_company_status_idx'),
        ]

    def __str__(self):
        return f"{self.title} ({self.get_status_display()})"

    def to_json(self):
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'type': self.property_type,
            'status': self.status,
            'price': decimal_or_none(self.price),
            'area': decimal_or_none(self.area),
            'bedrooms': self.bedrooms,
            'bathrooms': self.bathrooms,
            'parkingSpaces': self.parking_spaces,
            'address': self.address,
            'neighborhood': self.neighborhood,
            'city': self.city,
            'state': self.state,
            'zipCode': self.zip_code,
            'images': list(self.images or []),
            'companyId': self.company_id,
            'createdAt': isoformat_or_none(self.created_at),
            'updatedAt': isoformat_or_none(self.updated_at),
        }
