from django.db import models
from django.utils import timezone
from taggit.managers import TaggableManager

from apps.core.models import Company
from apps.core.utils import decimal_or_none, isoformat_or_none


class Client(models.Model):

    TYPE_CHOICES = [
        ('lead', 'Lead'),
        ('proprietario', 'Proprietário'),
        ('locatario', 'Locatário'),
        ('comprador', 'Comprador'),
    ]

    # Pipeline position, in display order (see apps/clients/pipeline.py)
    STAGE_CHOICES = [
        ('novo', 'Novo lead'),
        ('qualificado', 'Qualificado'),
        ('visita_agendada', 'Visita agendada'),
        ('proposta', 'Proposta enviada'),
        ('fechado', 'Negócio fechado'),
        ('perdido', 'Perdido'),
    ]

    company = models.ForeignKey(Company, on_delete=models.CASCADE, related_name='clients', help_text='Which company owns this client')

    # Basic Information
    name = models.CharField(max_length=200, help_text="Client's full name")
    email = models.EmailField()
    phone = models.CharField(max_length=20, db_index=True)
    document = models.CharField(max_length=20, blank=True, null=True, help_text='CPF/CNPJ')
    client_type = models.CharField(max_length=20, choices=TYPE_CHOICES)

    # Pipeline
    stage = models.CharField(max_length=20, choices=STAGE_CHOICES, default='novo', db_index=True)
    source = models.CharField(max_length=100, blank=True, null=True, help_text='Where did this lead come from?')
    pipeline_value = models.DecimalField(max_digits=12, decimal_places=2, blank=True, null=True, help_text='Estimated deal value')
    last_contact_at = models.DateTimeField(blank=True, null=True)
    next_follow_up = models.DateTimeField(blank=True, null=True, db_index=True)

    # Additional Information
    address = models.TextField(blank=True, null=True)
    notes = models.TextField(blank=True, null=True)
    tags = TaggableManager(blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Client'
        verbose_name_plural = 'Clients'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['company', 'stage'], name='client_company_stage_idx'),
            models.Index(fields=['company', 'client_type'], name='client_company_type_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.get_stage_display()})"

    def get_initials(self):
        """Returns first letters for avatar: 'Ana Souza' → 'AS'"""
        parts = self.name.split()
        if len(parts) >= 2:
            return f"{parts[0][0]}{parts[1][0]}".upper()
        elif len(parts) == 1:
            return parts[0][0].upper()
        return "?"

    def is_follow_up_overdue(self, now=None):
        if not self.next_follow_up:
            return False
        return self.next_follow_up < (now or timezone.now())

    def to_json(self, tags=()):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'document': self.document,
            'type': self.client_type,
            'stage': self.stage,
            'source': self.source,
            'tags': list(tags),
            'pipelineValue': decimal_or_none(self.pipeline_value),
            'address': self.address,
            'notes': self.notes,
            'lastContactAt': isoformat_or_none(self.last_contact_at),
            'nextFollowUp': isoformat_or_none(self.next_follow_up),
            'companyId': self.company_id,
            'createdAt': isoformat_or_none(self.created_at),
            'updatedAt': isoformat_or_none(self.updated_at),
        }


class ClientInteraction(models.Model):
    """
    Immutable contact log entry

    Recording one moves the client's lastContactAt and, when given,
    nextFollowUp and stage (see apps/clients/services.py).
    """

    TYPE_CHOICES = [
        ('contato_telefonico', 'Contato telefônico'),
        ('whatsapp', 'WhatsApp'),
        ('email', 'E-mail'),
        ('visita', 'Visita presencial'),
        ('proposta', 'Envio de proposta'),
        ('assinatura', 'Assinatura de contrato'),
    ]

    CHANNEL_CHOICES = [
        ('telefone', 'Telefone'),
        ('whatsapp', 'WhatsApp'),
        ('email', 'E-mail'),
        ('presencial', 'Presencial'),
    ]

    client = models.ForeignKey(Client, on_delete=models.CASCADE, related_name='interactions')
    interaction_type = models.CharField(max_length=30, choices=TYPE_CHOICES)
    channel = models.CharField(max_length=20, choices=CHANNEL_CHOICES, blank=True, null=True)
    summary = models.TextField()
    occurred_at = models.DateTimeField(default=timezone.now)
    next_steps = models.TextField(blank=True, null=True)
    next_follow_up = models.DateTimeField(blank=True, null=True)
    stage = models.CharField(max_length=20, choices=Client.STAGE_CHOICES, blank=True, null=True,
                             help_text='Stage the client moved to with this interaction')
    created_by = models.CharField(max_length=200, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = 'Client interaction'
        verbose_name_plural = 'Client interactions'
        ordering = ['-occurred_at']
        indexes = [
            models.Index(fields=['client', '-occurred_at'], name='interaction_client_date_idx'),
        ]

    def __str__(self):
        preview = self.summary[:50] + '...' if len(self.summary) > 50 else self.summary
        return f"{self.get_interaction_type_display()}: {preview}"

    def to_json(self):
        return {
            'id': self.id,
            'clientId': self.client_id,
            'type': self.interaction_type,
            'channel': self.channel,
            'summary': self.summary,
            'occurredAt': isoformat_or_none(self.occurred_at),
            'nextSteps': self.next_steps,
            'nextFollowUp': isoformat_or_none(self.next_follow_up),
            'stage': self.stage,
            'createdBy': self.created_by,
            'createdAt': isoformat_or_none(self.created_at),
        }
