from django.core.validators import MaxValueValidator
from django.db import models

from apps.core.models import Company
from apps.core.utils import decimal_or_none, isoformat_or_none
from apps.properties.models import Property


class Construction(models.Model):
    """
    Construction/renovation project on a property

    `spent` is maintained by hand; it is not recomputed from the expenses.
    """

    STATUS_CHOICES = [
        ('planejamento', 'Planejamento'),
        ('em_andamento', 'Em Andamento'),
        ('pausada', 'Pausada'),
        ('concluida', 'Concluída'),
        ('cancelada', 'Cancelada'),
    ]

    company = models.ForeignKey(Company, on_delete=models.CASCADE, related_name='constructions')
    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name='constructions')

    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, null=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='planejamento', db_index=True)

    # Budget
    budget = models.DecimalField(max_digits=12, decimal_places=2, blank=True, null=True)
    spent = models.DecimalField(max_digits=12, decimal_places=2, default=0)

    # Schedule
    start_date = models.DateTimeField(blank=True, null=True)
    end_date = models.DateTimeField(blank=True, null=True)
    expected_end_date = models.DateTimeField(blank=True, null=True)
    progress = models.PositiveSmallIntegerField(default=0, validators=[MaxValueValidator(100)], help_text='0-100 (%)')

    # Contractor
    contractor = models.CharField(max_length=200, blank=True, null=True)
    contractor_contact = models.CharField(max_length=200, blank=True, null=True)
    notes = models.TextField(blank=True, null=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Construction'
        verbose_name_plural = 'Constructions'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.name} ({self.get_status_display()})"

    def to_json(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'propertyId': self.property_id,
            'status': self.status,
            'budget': decimal_or_none(self.budget),
            'spent': decimal_or_none(self.spent),
            'startDate': isoformat_or_none(self.start_date),
            'endDate': isoformat_or_none(self.end_date),
            'expectedEndDate': isoformat_or_none(self.expected_end_date),
            'progress': self.progress,
            'contractor': self.contractor,
            'contractorContact': self.contractor_contact,
            'notes': self.notes,
            'companyId': self.company_id,
            'createdAt': isoformat_or_none(self.created_at),
            'updatedAt': isoformat_or_none(self.updated_at),
        }


class ConstructionTask(models.Model):

    STATUS_CHOICES = [
        ('pendente', 'Pendente'),
        ('em_andamento', 'Em Andamento'),
        ('concluida', 'Concluída'),
    ]

    PRIORITY_CHOICES = [
        ('baixa', 'Baixa'),
        ('media', 'Média'),
        ('alta', 'Alta'),
    ]

    construction = models.ForeignKey(Construction, on_delete=models.CASCADE, related_name='tasks')
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, null=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pendente')
    priority = models.CharField(max_length=10, choices=PRIORITY_CHOICES, default='media')
    start_date = models.DateTimeField(blank=True, null=True)
    end_date = models.DateTimeField(blank=True, null=True)
    assigned_to = models.CharField(max_length=200, blank=True, null=True)
    estimated_cost = models.DecimalField(max_digits=12, decimal_places=2, blank=True, null=True)
    actual_cost = models.DecimalField(max_digits=12, decimal_places=2, blank=True, null=True)
    progress = models.PositiveSmallIntegerField(default=0, validators=[MaxValueValidator(100)])
    order = models.PositiveIntegerField(default=0, help_text='Display order (lower numbers appear first)')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = 'Construction task'
        verbose_name_plural = 'Construction tasks'
        ordering = ['order', 'id']

    def __str__(self):
        return self.name

    def to_json(self):
        return {
            'id': self.id,
            'constructionId': self.construction_id,
            'name': self.name,
            'description': self.description,
            'status': self.status,
            'priority': self.priority,
            'startDate': isoformat_or_none(self.start_date),
            'endDate': isoformat_or_none(self.end_date),
            'assignedTo': self.assigned_to,
            'estimatedCost': decimal_or_none(self.estimated_cost),
            'actualCost': decimal_or_none(self.actual_cost),
            'progress': self.progress,
            'order': self.order,
            'createdAt': isoformat_or_none(self.created_at),
        }


class ConstructionExpense(models.Model):

    CATEGORY_CHOICES = [
        ('material', 'Material'),
        ('mao_de_obra', 'Mão de Obra'),
        ('equipamento', 'Equipamento'),
        ('outros', 'Outros'),
    ]

    construction = models.ForeignKey(Construction, on_delete=models.CASCADE, related_name='expenses')
    description = models.CharField(max_length=255)
    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES, default='material')
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    expense_date = models.DateTimeField()
    supplier = models.CharField(max_length=200, blank=True, null=True)
    receipt = models.CharField(max_length=500, blank=True, null=True, help_text='Receipt number or URL')
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = 'Construction expense'
        verbose_name_plural = 'Construction expenses'
        ordering = ['-expense_date']

    def __str__(self):
        return f"{self.description} (R$ {self.amount})"

    def to_json(self):
        return {
            'id': self.id,
            'constructionId': self.construction_id,
            'description': self.description,
            'category': self.category,
            'amount': decimal_or_none(self.amount),
            'expenseDate': isoformat_or_none(self.expense_date),
            'supplier': self.supplier,
            'receipt': self.receipt,
            'notes': self.notes,
            'createdAt': isoformat_or_none(self.created_at),
        }
