"""
Storage Base

Abstract data-access interface for the back office.
Implementations: DatabaseStorage (Django ORM, production), MemStorage (tests).

Every single-row operation takes the caller's company id and raises
NotFound when the row is absent OR belongs to another company; list
operations filter by company at the source. Construction tasks and
expenses are scoped through their parent construction.
"""

from abc import ABC, abstractmethod
from decimal import Decimal


class BaseStorage(ABC):
    """
    Interface shared by every storage backend

    `data` arguments are dicts keyed by model field names (as produced by the
    API forms). Rows are returned as model instances.
    """

    @abstractmethod
    def atomic(self):
        """Context manager grouping several writes into one unit"""
        pass

    # ==================== Companies ====================

    @abstractmethod
    def list_companies(self):
        pass

    @abstractmethod
    def get_company(self, company_id):
        pass

    @abstractmethod
    def create_company(self, data):
        """Raises ValidationFailed when the document is already registered"""
        pass

    # ==================== Activities ====================

    @abstractmethod
    def create_activity(self, company_id, activity_type, title, description=None,
                        entity_type=None, entity_id=None, user_id=None):
        pass

    @abstractmethod
    def list_activities(self, company_id, limit=10):
        """Newest first"""
        pass

    # ==================== Properties ====================

    @abstractmethod
    def list_properties(self, company_id):
        pass

    @abstractmethod
    def get_property(self, company_id, property_id):
        pass

    @abstractmethod
    def create_property(self, company_id, data):
        pass

    @abstractmethod
    def update_property(self, company_id, property_id, data):
        pass

    @abstractmethod
    def delete_property(self, company_id, property_id):
        """Raises ProtectedError while a contract references the property"""
        pass

    # ==================== Clients ====================

    @abstractmethod
    def list_clients(self, company_id, client_type=None, stage=None):
        pass

    @abstractmethod
    def get_client(self, company_id, client_id):
        pass

    @abstractmethod
    def create_client(self, company_id, data):
        """`data` may carry a 'tags' list"""
        pass

    @abstractmethod
    def update_client(self, company_id, client_id, data):
        pass

    @abstractmethod
    def delete_client(self, company_id, client_id):
        """Cascades to interactions and appointments; ProtectedError while under contract"""
        pass

    @abstractmethod
    def client_tags(self, client):
        """Tag names of a client, sorted"""
        pass

    # ==================== Client interactions ====================

    @abstractmethod
    def create_interaction(self, company_id, client_id, data):
        pass

    @abstractmethod
    def list_interactions(self, company_id, client_id):
        """Newest first by occurred_at"""
        pass

    # ==================== Appointments ====================

    @abstractmethod
    def list_appointments(self, company_id, status=None, client_id=None, upcoming=False,
                          from_date=None, to_date=None, limit=None, now=None):
        """
        Appointments ordered by scheduled_at ascending

        Args:
            upcoming: only scheduled_at >= now with an open status (agendado/confirmado)
            from_date, to_date: inclusive bounds on scheduled_at
            limit: maximum number of rows (after filtering and ordering)
        """
        pass

    @abstractmethod
    def get_appointment(self, company_id, appointment_id):
        pass

    @abstractmethod
    def create_appointment(self, company_id, data):
        pass

    @abstractmethod
    def update_appointment(self, company_id, appointment_id, data):
        pass

    @abstractmethod
    def delete_appointment(self, company_id, appointment_id):
        pass

    # ==================== Contracts ====================

    @abstractmethod
    def list_contracts(self, company_id):
        pass

    @abstractmethod
    def get_contract(self, company_id, contract_id):
        pass

    @abstractmethod
    def create_contract(self, company_id, data):
        pass

    @abstractmethod
    def update_contract(self, company_id, contract_id, data):
        pass

    @abstractmethod
    def delete_contract(self, company_id, contract_id):
        """Linked transactions lose their contract reference"""
        pass

    # ==================== Transactions ====================

    @abstractmethod
    def list_transactions(self, company_id):
        pass

    @abstractmethod
    def get_transaction(self, company_id, transaction_id):
        pass

    @abstractmethod
    def create_transaction(self, company_id, data):
        pass

    @abstractmethod
    def update_transaction(self, company_id, transaction_id, data):
        pass

    @abstractmethod
    def delete_transaction(self, company_id, transaction_id):
        pass

    # ==================== Constructions ====================

    @abstractmethod
    def list_constructions(self, company_id):
        pass

    @abstractmethod
    def get_construction(self, company_id, construction_id):
        pass

    @abstractmethod
    def create_construction(self, company_id, data):
        pass

    @abstractmethod
    def update_construction(self, company_id, construction_id, data):
        pass

    @abstractmethod
    def delete_construction(self, company_id, construction_id):
        """Cascades to tasks and expenses"""
        pass

    @abstractmethod
    def list_tasks(self, company_id, construction_id):
        """Ordered by `order`, then id"""
        pass

    @abstractmethod
    def get_task(self, company_id, construction_id, task_id):
        pass

    @abstractmethod
    def create_task(self, company_id, construction_id, data):
        pass

    @abstractmethod
    def update_task(self, company_id, construction_id, task_id, data):
        pass

    @abstractmethod
    def delete_task(self, company_id, construction_id, task_id):
        pass

    @abstractmethod
    def list_expenses(self, company_id, construction_id):
        """Newest expense_date first"""
        pass

    @abstractmethod
    def get_expense(self, company_id, construction_id, expense_id):
        pass

    @abstractmethod
    def create_expense(self, company_id, construction_id, data):
        pass

    @abstractmethod
    def update_expense(self, company_id, construction_id, expense_id, data):
        pass

    @abstractmethod
    def delete_expense(self, company_id, construction_id, expense_id):
        pass

    # ==================== Joined reads ====================
    # Built from the primitives above; backends may override with a
    # single query.

    def list_appointment_details(self, company_id, **filters):
        """[(appointment, client, property or None), ...]"""
        appointments = self.list_appointments(company_id, **filters)
        clients = {client.id: client for client in self.list_clients(company_id)}
        properties = {prop.id: prop for prop in self.list_properties(company_id)}

        return [
            (appointment, clients.get(appointment.client_id), properties.get(appointment.property_id))
            for appointment in appointments
        ]

    def list_contract_details(self, company_id):
        """[(contract, property, client), ...]"""
        properties = {prop.id: prop for prop in self.list_properties(company_id)}
        clients = {client.id: client for client in self.list_clients(company_id)}

        return [
            (contract, properties.get(contract.property_id), clients.get(contract.client_id))
            for contract in self.list_contracts(company_id)
        ]

    def list_transaction_details(self, company_id):
        """[(transaction, contract or None), ...]"""
        contracts = {contract.id: contract for contract in self.list_contracts(company_id)}

        return [
            (transaction, contracts.get(transaction.contract_id))
            for transaction in self.list_transactions(company_id)
        ]

    def list_construction_details(self, company_id):
        """
        [(construction, property, stats), ...]

        stats = {'task_count', 'completed_tasks', 'expense_total'}; the total
        is reported only and never copied into construction.spent.
        """
        properties = {prop.id: prop for prop in self.list_properties(company_id)}
        rows = []

        for construction in self.list_constructions(company_id):
            tasks = self.list_tasks(company_id, construction.id)
            expenses = self.list_expenses(company_id, construction.id)
            stats = {
                'task_count': len(tasks),
                'completed_tasks': sum(1 for task in tasks if task.status == 'concluida'),
                'expense_total': sum((expense.amount for expense in expenses), Decimal('0')),
            }
            rows.append((construction, properties.get(construction.property_id), stats))

        return rows

    def dashboard_counts(self, company_id, month_start, month_end):
        """
        Raw dashboard figures for the [month_start, month_end) window

        Returns:
            dict with active_properties, active_contracts, monthly_leads,
            monthly_revenue (Decimal)
        """
        properties = self.list_properties(company_id)
        contracts = self.list_contracts(company_id)
        leads = self.list_clients(company_id, client_type='lead')
        transactions = self.list_transactions(company_id)

        revenue = sum(
            (
                t.amount for t in transactions
                if t.transaction_type == 'receita' and t.status == 'pago'
                and t.paid_date is not None and month_start <= t.paid_date < month_end
            ),
            Decimal('0'),
        )

        return {
            'active_properties': sum(1 for p in properties if p.status in ('disponivel', 'alugado')),
            'active_contracts': sum(1 for c in contracts if c.status == 'ativo'),
            'monthly_leads': sum(1 for c in leads if month_start <= c.created_at < month_end),
            'monthly_revenue': revenue,
        }
