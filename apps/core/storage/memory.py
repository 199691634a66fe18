"""
In-memory storage

Keeps unsaved model instances in per-model dicts. Used by the test suite
and for running the API without a database; state lives as long as the
process. Relational rules (cascade, protect, set null) are reproduced by
hand since nothing here goes through the ORM.
"""

import itertools
from contextlib import nullcontext

from django.db.models import ProtectedError
from django.utils import timezone

from apps.appointments.models import Appointment
from apps.clients.models import Client, ClientInteraction
from apps.constructions.models import Construction, ConstructionExpense, ConstructionTask
from apps.contracts.models import Contract
from apps.core.exceptions import NotFound, ValidationFailed
from apps.core.models import Activity, Company
from apps.finance.models import Transaction
from apps.properties.models import Property

from .base import BaseStorage


def _newest_first(rows, field='created_at'):
    return sorted(rows, key=lambda row: (getattr(row, field), row.id), reverse=True)


class MemStorage(BaseStorage):

    def __init__(self):
        self._ids = itertools.count(1)
        self._rows = {
            model: {}
            for model in (
                Company, Activity, Property, Client, ClientInteraction, Appointment,
                Contract, Transaction, Construction, ConstructionTask, ConstructionExpense,
            )
        }
        self._tags = {}

    def atomic(self):
        return nullcontext()

    # ==================== Helpers ====================

    def _stamp(self, instance, created):
        """Fill auto_now / auto_now_add fields the way Model.save() would"""
        now = timezone.now()
        for field in instance._meta.concrete_fields:
            if getattr(field, 'auto_now', False) or (created and getattr(field, 'auto_now_add', False)):
                setattr(instance, field.attname, now)

    def _insert(self, model, **fields):
        instance = model(**fields)
        instance.id = next(self._ids)
        self._stamp(instance, created=True)
        self._rows[model][instance.id] = instance
        return instance

    def _update(self, instance, data):
        for field, value in data.items():
            setattr(instance, field, value)
        self._stamp(instance, created=False)
        return instance

    def _all(self, model, company_id):
        return [row for row in self._rows[model].values() if row.company_id == company_id]

    def _get(self, model, entity, company_id, pk):
        row = self._rows[model].get(pk)
        if row is None or row.company_id != company_id:
            raise NotFound(entity, pk)
        return row

    def _delete(self, model, pk):
        del self._rows[model][pk]

    # ==================== Companies ====================

    def list_companies(self):
        return sorted(self._rows[Company].values(), key=lambda company: company.name)

    def get_company(self, company_id):
        company = self._rows[Company].get(company_id)
        if company is None:
            raise NotFound('company', company_id)
        return company

    def create_company(self, data):
        if any(company.document == data['document'] for company in self._rows[Company].values()):
            raise ValidationFailed({'document': ['Já existe uma empresa com este documento']})
        return self._insert(Company, **data)

    # ==================== Activities ====================

    def create_activity(self, company_id, activity_type, title, description=None,
                        entity_type=None, entity_id=None, user_id=None):
        return self._insert(
            Activity,
            company_id=company_id,
            activity_type=activity_type,
            title=title,
            description=description,
            entity_type=entity_type,
            entity_id=entity_id,
            user_id=user_id,
        )

    def list_activities(self, company_id, limit=10):
        return _newest_first(self._all(Activity, company_id))[:limit]

    # ==================== Properties ====================

    def list_properties(self, company_id):
        return _newest_first(self._all(Property, company_id))

    def get_property(self, company_id, property_id):
        return self._get(Property, 'property', company_id, property_id)

    def create_property(self, company_id, data):
        return self._insert(Property, company_id=company_id, **data)

    def update_property(self, company_id, property_id, data):
        return self._update(self.get_property(company_id, property_id), data)

    def delete_property(self, company_id, property_id):
        prop = self.get_property(company_id, property_id)

        contracts = [c for c in self._rows[Contract].values() if c.property_id == prop.id]
        if contracts:
            raise ProtectedError('Property is referenced by contracts', set(contracts))

        for appointment in self._rows[Appointment].values():
            if appointment.property_id == prop.id:
                appointment.property_id = None
        for construction in list(self._rows[Construction].values()):
            if construction.property_id == prop.id:
                self._drop_construction(construction)

        self._delete(Property, prop.id)

    # ==================== Clients ====================

    def list_clients(self, company_id, client_type=None, stage=None):
        clients = self._all(Client, company_id)
        if client_type:
            clients = [c for c in clients if c.client_type == client_type]
        if stage:
            clients = [c for c in clients if c.stage == stage]
        return _newest_first(clients)

    def get_client(self, company_id, client_id):
        return self._get(Client, 'client', company_id, client_id)

    def create_client(self, company_id, data):
        data = dict(data)
        tags = data.pop('tags', None)
        client = self._insert(Client, company_id=company_id, **data)
        self._tags[client.id] = list(tags or [])
        return client

    def update_client(self, company_id, client_id, data):
        data = dict(data)
        tags = data.pop('tags', None)
        client = self._update(self.get_client(company_id, client_id), data)
        if tags is not None:
            self._tags[client.id] = list(tags)
        return client

    def delete_client(self, company_id, client_id):
        client = self.get_client(company_id, client_id)

        contracts = [c for c in self._rows[Contract].values() if c.client_id == client.id]
        if contracts:
            raise ProtectedError('Client is referenced by contracts', set(contracts))

        for model in (ClientInteraction, Appointment):
            for row in list(self._rows[model].values()):
                if row.client_id == client.id:
                    self._delete(model, row.id)

        self._tags.pop(client.id, None)
        self._delete(Client, client.id)

    def client_tags(self, client):
        return sorted(self._tags.get(client.id, []))

    # ==================== Client interactions ====================

    def create_interaction(self, company_id, client_id, data):
        client = self.get_client(company_id, client_id)
        return self._insert(ClientInteraction, client_id=client.id, **data)

    def list_interactions(self, company_id, client_id):
        client = self.get_client(company_id, client_id)
        rows = [row for row in self._rows[ClientInteraction].values() if row.client_id == client.id]
        return _newest_first(rows, field='occurred_at')

    # ==================== Appointments ====================

    def list_appointments(self, company_id, status=None, client_id=None, upcoming=False,
                          from_date=None, to_date=None, limit=None, now=None):
        rows = self._all(Appointment, company_id)

        if status:
            rows = [a for a in rows if a.status == status]
        if client_id:
            rows = [a for a in rows if a.client_id == client_id]
        if upcoming:
            rows = [a for a in rows if a.scheduled_at >= now and a.status in Appointment.OPEN_STATUSES]
        if from_date:
            rows = [a for a in rows if a.scheduled_at >= from_date]
        if to_date:
            rows = [a for a in rows if a.scheduled_at <= to_date]

        rows.sort(key=lambda a: (a.scheduled_at, a.id))
        return rows[:limit] if limit else rows

    def get_appointment(self, company_id, appointment_id):
        return self._get(Appointment, 'appointment', company_id, appointment_id)

    def create_appointment(self, company_id, data):
        return self._insert(Appointment, company_id=company_id, **data)

    def update_appointment(self, company_id, appointment_id, data):
        return self._update(self.get_appointment(company_id, appointment_id), data)

    def delete_appointment(self, company_id, appointment_id):
        self._delete(Appointment, self.get_appointment(company_id, appointment_id).id)

    # ==================== Contracts ====================

    def list_contracts(self, company_id):
        return _newest_first(self._all(Contract, company_id))

    def get_contract(self, company_id, contract_id):
        return self._get(Contract, 'contract', company_id, contract_id)

    def create_contract(self, company_id, data):
        return self._insert(Contract, company_id=company_id, **data)

    def update_contract(self, company_id, contract_id, data):
        return self._update(self.get_contract(company_id, contract_id), data)

    def delete_contract(self, company_id, contract_id):
        contract = self.get_contract(company_id, contract_id)
        for t in self._rows[Transaction].values():
            if t.contract_id == contract.id:
                t.contract_id = None
        self._delete(Contract, contract.id)

    # ==================== Transactions ====================

    def list_transactions(self, company_id):
        return _newest_first(self._all(Transaction, company_id), field='due_date')

    def get_transaction(self, company_id, transaction_id):
        return self._get(Transaction, 'transaction', company_id, transaction_id)

    def create_transaction(self, company_id, data):
        return self._insert(Transaction, company_id=company_id, **data)

    def update_transaction(self, company_id, transaction_id, data):
        return self._update(self.get_transaction(company_id, transaction_id), data)

    def delete_transaction(self, company_id, transaction_id):
        self._delete(Transaction, self.get_transaction(company_id, transaction_id).id)

    # ==================== Constructions ====================

    def list_constructions(self, company_id):
        return _newest_first(self._all(Construction, company_id))

    def get_construction(self, company_id, construction_id):
        return self._get(Construction, 'construction', company_id, construction_id)

    def create_construction(self, company_id, data):
        return self._insert(Construction, company_id=company_id, **data)

    def update_construction(self, company_id, construction_id, data):
        return self._update(self.get_construction(company_id, construction_id), data)

    def delete_construction(self, company_id, construction_id):
        self._drop_construction(self.get_construction(company_id, construction_id))

    def _drop_construction(self, construction):
        for model in (ConstructionTask, ConstructionExpense):
            for row in list(self._rows[model].values()):
                if row.construction_id == construction.id:
                    self._delete(model, row.id)
        self._delete(Construction, construction.id)

    def _children(self, model, entity, company_id, construction_id, pk):
        construction = self.get_construction(company_id, construction_id)
        row = self._rows[model].get(pk)
        if row is None or row.construction_id != construction.id:
            raise NotFound(entity, pk)
        return row

    def list_tasks(self, company_id, construction_id):
        construction = self.get_construction(company_id, construction_id)
        rows = [t for t in self._rows[ConstructionTask].values() if t.construction_id == construction.id]
        return sorted(rows, key=lambda t: (t.order, t.id))

    def get_task(self, company_id, construction_id, task_id):
        return self._children(ConstructionTask, 'task', company_id, construction_id, task_id)

    def create_task(self, company_id, construction_id, data):
        construction = self.get_construction(company_id, construction_id)
        return self._insert(ConstructionTask, construction_id=construction.id, **data)

    def update_task(self, company_id, construction_id, task_id, data):
        return self._update(self.get_task(company_id, construction_id, task_id), data)

    def delete_task(self, company_id, construction_id, task_id):
        self._delete(ConstructionTask, self.get_task(company_id, construction_id, task_id).id)

    def list_expenses(self, company_id, construction_id):
        construction = self.get_construction(company_id, construction_id)
        rows = [e for e in self._rows[ConstructionExpense].values() if e.construction_id == construction.id]
        return _newest_first(rows, field='expense_date')

    def get_expense(self, company_id, construction_id, expense_id):
        return self._children(ConstructionExpense, 'expense', company_id, construction_id, expense_id)

    def create_expense(self, company_id, construction_id, data):
        construction = self.get_construction(company_id, construction_id)
        return self._insert(ConstructionExpense, construction_id=construction.id, **data)

    def update_expense(self, company_id, construction_id, expense_id, data):
        return self._update(self.get_expense(company_id, construction_id, expense_id), data)

    def delete_expense(self, company_id, construction_id, expense_id):
        self._delete(ConstructionExpense, self.get_expense(company_id, construction_id, expense_id).id)
