from django.db import models

from apps.contracts.models import Contract
from apps.core.models import Company
from apps.core.utils import decimal_or_none, isoformat_or_none


class Transaction(models.Model):

    TYPE_CHOICES = [
        ('receita', 'Receita'),
        ('despesa', 'Despesa'),
    ]

    STATUS_CHOICES = [
        ('pendente', 'Pendente'),
        ('pago', 'Pago'),
        ('vencido', 'Vencido'),
    ]

    company = models.ForeignKey(Company, on_delete=models.CASCADE, related_name='transactions')
    contract = models.ForeignKey(Contract, on_delete=models.SET_NULL, null=True, blank=True, related_name='transactions')

    transaction_type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    category = models.CharField(max_length=50, help_text='aluguel, venda, comissao, manutencao, ...')
    description = models.CharField(max_length=255)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    due_date = models.DateTimeField()
    paid_date = models.DateTimeField(blank=True, null=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pendente', db_index=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = 'Transaction'
        verbose_name_plural = 'Transactions'
        ordering = ['-due_date']
        indexes = [
            models.Index(fields=['company', 'status'], name='txn_company_status_idx'),
            models.Index(fields=['company', 'due_date'], name='txn_company_due_idx'),
        ]

    def __str__(self):
        return f"{self.get_transaction_type_display()}: {self.description} (R$ {self.amount})"

    def to_json(self, contract=None):
        data = {
            'id': self.id,
            'type': self.transaction_type,
            'category': self.category,
            'description': self.description,
            'amount': decimal_or_none(self.amount),
            'dueDate': isoformat_or_none(self.due_date),
            'paidDate': isoformat_or_none(self.paid_date),
            'status': self.status,
            'contractId': self.contract_id,
            'companyId': self.company_id,
            'createdAt': isoformat_or_none(self.created_at),
        }

        if contract is not None:
            data['contract'] = {'id': contract.id, 'type': contract.contract_type, 'value': decimal_or_none(contract.value)}

        return data
