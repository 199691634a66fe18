"""
Django ORM storage (production backend)
"""

from decimal import Decimal

from django.db import IntegrityError, transaction
from django.db.models import Count, DecimalField, OuterRef, Q, Subquery, Sum, Value
from django.db.models.functions import Coalesce

from apps.appointments.models import Appointment
from apps.clients.models import Client, ClientInteraction
from apps.constructions.models import Construction, ConstructionExpense, ConstructionTask
from apps.contracts.models import Contract
from apps.core.exceptions import NotFound, ValidationFailed
from apps.core.models import Activity, Company
from apps.finance.models import Transaction
from apps.properties.models import Property

from .base import BaseStorage


def _apply(instance, data):
    for field, value in data.items():
        setattr(instance, field, value)
    instance.save()
    return instance


class DatabaseStorage(BaseStorage):

    def atomic(self):
        return transaction.atomic()

    def _get(self, queryset, entity, pk):
        # Same answer for "absent" and "belongs to another company"
        try:
            return queryset.get(pk=pk)
        except queryset.model.DoesNotExist:
            raise NotFound(entity, pk)

    # ==================== Companies ====================

    def list_companies(self):
        return list(Company.objects.all())

    def get_company(self, company_id):
        return self._get(Company.objects.all(), 'company', company_id)

    def create_company(self, data):
        if Company.objects.filter(document=data['document']).exists():
            raise ValidationFailed({'document': ['Já existe uma empresa com este documento']})
        try:
            return Company.objects.create(**data)
        except IntegrityError:
            # Concurrent onboarding with the same document
            raise ValidationFailed({'document': ['Já existe uma empresa com este documento']})

    # ==================== Activities ====================

    def create_activity(self, company_id, activity_type, title, description=None,
                        entity_type=None, entity_id=None, user_id=None):
        return Activity.objects.create(
            company_id=company_id,
            activity_type=activity_type,
            title=title,
            description=description,
            entity_type=entity_type,
            entity_id=entity_id,
            user_id=user_id,
        )

    def list_activities(self, company_id, limit=10):
        return list(Activity.objects.filter(company_id=company_id).order_by('-created_at', '-id')[:limit])

    # ==================== Properties ====================

    def list_properties(self, company_id):
        return list(Property.objects.filter(company_id=company_id))

    def get_property(self, company_id, property_id):
        return self._get(Property.objects.filter(company_id=company_id), 'property', property_id)

    def create_property(self, company_id, data):
        return Property.objects.create(company_id=company_id, **data)

    def update_property(self, company_id, property_id, data):
        return _apply(self.get_property(company_id, property_id), data)

    def delete_property(self, company_id, property_id):
        self.get_property(company_id, property_id).delete()

    # ==================== Clients ====================

    def list_clients(self, company_id, client_type=None, stage=None):
        queryset = Client.objects.filter(company_id=company_id).prefetch_related('tags')
        if client_type:
            queryset = queryset.filter(client_type=client_type)
        if stage:
            queryset = queryset.filter(stage=stage)
        return list(queryset)

    def get_client(self, company_id, client_id):
        return self._get(Client.objects.filter(company_id=company_id), 'client', client_id)

    def create_client(self, company_id, data):
        data = dict(data)
        tags = data.pop('tags', None)
        client = Client.objects.create(company_id=company_id, **data)
        if tags:
            client.tags.set(tags)
        return client

    def update_client(self, company_id, client_id, data):
        data = dict(data)
        tags = data.pop('tags', None)
        client = _apply(self.get_client(company_id, client_id), data)
        if tags is not None:
            client.tags.set(tags)
        return client

    def delete_client(self, company_id, client_id):
        self.get_client(company_id, client_id).delete()

    def client_tags(self, client):
        return sorted(tag.name for tag in client.tags.all())

    # ==================== Client interactions ====================

    def create_interaction(self, company_id, client_id, data):
        client = self.get_client(company_id, client_id)
        return ClientInteraction.objects.create(client=client, **data)

    def list_interactions(self, company_id, client_id):
        client = self.get_client(company_id, client_id)
        return list(client.interactions.order_by('-occurred_at', '-id'))

    # ==================== Appointments ====================

    def _appointment_queryset(self, company_id, status=None, client_id=None, upcoming=False,
                              from_date=None, to_date=None, limit=None, now=None, related=False):
        queryset = Appointment.objects.filter(company_id=company_id)
        if related:
            queryset = queryset.select_related('client', 'property')

        if status:
            queryset = queryset.filter(status=status)
        if client_id:
            queryset = queryset.filter(client_id=client_id)
        if upcoming:
            queryset = queryset.filter(scheduled_at__gte=now, status__in=Appointment.OPEN_STATUSES)
        if from_date:
            queryset = queryset.filter(scheduled_at__gte=from_date)
        if to_date:
            queryset = queryset.filter(scheduled_at__lte=to_date)

        queryset = queryset.order_by('scheduled_at', 'id')
        if limit:
            queryset = queryset[:limit]
        return queryset

    def list_appointments(self, company_id, **filters):
        return list(self._appointment_queryset(company_id, **filters))

    def get_appointment(self, company_id, appointment_id):
        return self._get(Appointment.objects.filter(company_id=company_id), 'appointment', appointment_id)

    def create_appointment(self, company_id, data):
        return Appointment.objects.create(company_id=company_id, **data)

    def update_appointment(self, company_id, appointment_id, data):
        return _apply(self.get_appointment(company_id, appointment_id), data)

    def delete_appointment(self, company_id, appointment_id):
        self.get_appointment(company_id, appointment_id).delete()

    # ==================== Contracts ====================

    def list_contracts(self, company_id):
        return list(Contract.objects.filter(company_id=company_id))

    def get_contract(self, company_id, contract_id):
        return self._get(Contract.objects.filter(company_id=company_id), 'contract', contract_id)

    def create_contract(self, company_id, data):
        return Contract.objects.create(company_id=company_id, **data)

    def update_contract(self, company_id, contract_id, data):
        return _apply(self.get_contract(company_id, contract_id), data)

    def delete_contract(self, company_id, contract_id):
        self.get_contract(company_id, contract_id).delete()

    # ==================== Transactions ====================

    def list_transactions(self, company_id):
        return list(Transaction.objects.filter(company_id=company_id))

    def get_transaction(self, company_id, transaction_id):
        return self._get(Transaction.objects.filter(company_id=company_id), 'transaction', transaction_id)

    def create_transaction(self, company_id, data):
        return Transaction.objects.create(company_id=company_id, **data)

    def update_transaction(self, company_id, transaction_id, data):
        return _apply(self.get_transaction(company_id, transaction_id), data)

    def delete_transaction(self, company_id, transaction_id):
        self.get_transaction(company_id, transaction_id).delete()

    # ==================== Constructions ====================

    def list_constructions(self, company_id):
        return list(Construction.objects.filter(company_id=company_id))

    def get_construction(self, company_id, construction_id):
        return self._get(Construction.objects.filter(company_id=company_id), 'construction', construction_id)

    def create_construction(self, company_id, data):
        return Construction.objects.create(company_id=company_id, **data)

    def update_construction(self, company_id, construction_id, data):
        return _apply(self.get_construction(company_id, construction_id), data)

    def delete_construction(self, company_id, construction_id):
        self.get_construction(company_id, construction_id).delete()

    def _tasks(self, company_id, construction_id):
        return ConstructionTask.objects.filter(
            construction_id=construction_id,
            construction__company_id=company_id,
        )

    def list_tasks(self, company_id, construction_id):
        self.get_construction(company_id, construction_id)
        return list(self._tasks(company_id, construction_id).order_by('order', 'id'))

    def get_task(self, company_id, construction_id, task_id):
        self.get_construction(company_id, construction_id)
        return self._get(self._tasks(company_id, construction_id), 'task', task_id)

    def create_task(self, company_id, construction_id, data):
        construction = self.get_construction(company_id, construction_id)
        return ConstructionTask.objects.create(construction=construction, **data)

    def update_task(self, company_id, construction_id, task_id, data):
        return _apply(self.get_task(company_id, construction_id, task_id), data)

    def delete_task(self, company_id, construction_id, task_id):
        self.get_task(company_id, construction_id, task_id).delete()

    def _expenses(self, company_id, construction_id):
        return ConstructionExpense.objects.filter(
            construction_id=construction_id,
            construction__company_id=company_id,
        )

    def list_expenses(self, company_id, construction_id):
        self.get_construction(company_id, construction_id)
        return list(self._expenses(company_id, construction_id).order_by('-expense_date', '-id'))

    def get_expense(self, company_id, construction_id, expense_id):
        self.get_construction(company_id, construction_id)
        return self._get(self._expenses(company_id, construction_id), 'expense', expense_id)

    def create_expense(self, company_id, construction_id, data):
        construction = self.get_construction(company_id, construction_id)
        return ConstructionExpense.objects.create(construction=construction, **data)

    def update_expense(self, company_id, construction_id, expense_id, data):
        return _apply(self.get_expense(company_id, construction_id, expense_id), data)

    def delete_expense(self, company_id, construction_id, expense_id):
        self.get_expense(company_id, construction_id, expense_id).delete()

    # ==================== Joined reads ====================

    def list_appointment_details(self, company_id, **filters):
        queryset = self._appointment_queryset(company_id, related=True, **filters)
        return [(appointment, appointment.client, appointment.property) for appointment in queryset]

    def list_contract_details(self, company_id):
        queryset = Contract.objects.filter(company_id=company_id).select_related('property', 'client')
        return [(contract, contract.property, contract.client) for contract in queryset]

    def list_transaction_details(self, company_id):
        queryset = Transaction.objects.filter(company_id=company_id).select_related('contract')
        return [(t, t.contract) for t in queryset]

    def list_construction_details(self, company_id):
        money = DecimalField(max_digits=14, decimal_places=2)

        expense_totals = (
            ConstructionExpense.objects
            .filter(construction=OuterRef('pk'))
            .values('construction')
            .annotate(total=Sum('amount'))
            .values('total')
        )

        queryset = (
            Construction.objects
            .filter(company_id=company_id)
            .select_related('property')
            .annotate(
                task_count=Count('tasks', distinct=True),
                completed_task_count=Count('tasks', filter=Q(tasks__status='concluida'), distinct=True),
                expense_total=Coalesce(Subquery(expense_totals, output_field=money), Value(Decimal('0')), output_field=money),
            )
        )

        return [
            (
                construction,
                construction.property,
                {
                    'task_count': construction.task_count,
                    'completed_tasks': construction.completed_task_count,
                    'expense_total': construction.expense_total,
                },
            )
            for construction in queryset
        ]

    def dashboard_counts(self, company_id, month_start, month_end):
        revenue = Transaction.objects.filter(
            company_id=company_id,
            transaction_type='receita',
            status='pago',
            paid_date__gte=month_start,
            paid_date__lt=month_end,
        ).aggregate(total=Sum('amount'))['total']

        return {
            'active_properties': Property.objects.filter(
                company_id=company_id, status__in=['disponivel', 'alugado']
            ).count(),
            'active_contracts': Contract.objects.filter(company_id=company_id, status='ativo').count(),
            'monthly_leads': Client.objects.filter(
                company_id=company_id,
                client_type='lead',
                created_at__gte=month_start,
                created_at__lt=month_end,
            ).count(),
            'monthly_revenue': revenue or Decimal('0'),
        }
