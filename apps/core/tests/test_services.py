"""
Core Services Tests
===================

Reference checks, month window and dashboard KPIs (MemStorage).
"""

from datetime import datetime, timedelta
from decimal import Decimal
from zoneinfo import ZoneInfo

from django.test import SimpleTestCase
from django.utils import timezone

from apps.core.exceptions import InvalidReference
from apps.core.services import check_reference, compute_kpis, format_revenue, month_bounds
from apps.core.storage.memory import MemStorage
from apps.core.tests.test_storage import client_data, property_data


class MonthBoundsTest(SimpleTestCase):

    def test_regular_month(self):
        now = datetime(2024, 5, 17, 15, 30, tzinfo=ZoneInfo('America/Sao_Paulo'))
        start, end = month_bounds(now)

        self.assertEqual((start.year, start.month, start.day, start.hour), (2024, 5, 1, 0))
        self.assertEqual((end.year, end.month, end.day), (2024, 6, 1))

    def test_december_rolls_over(self):
        now = datetime(2024, 12, 31, 23, 0, tzinfo=ZoneInfo('America/Sao_Paulo'))
        start, end = month_bounds(now)

        self.assertEqual((start.year, start.month), (2024, 12))
        self.assertEqual((end.year, end.month, end.day), (2025, 1, 1))


class FormatRevenueTest(SimpleTestCase):

    def test_thousands_with_one_decimal(self):
        self.assertEqual(format_revenue(Decimal('45000')), 'R$ 45.0K')
        self.assertEqual(format_revenue(Decimal('1250.50')), 'R$ 1.3K')
        self.assertEqual(format_revenue(Decimal('0')), 'R$ 0.0K')


class CheckReferenceTest(SimpleTestCase):

    def setUp(self):
        self.storage = MemStorage()
        self.company = self.storage.create_company({'name': 'A', 'document': '1', 'email': 'a@a.com'})
        self.other = self.storage.create_company({'name': 'B', 'document': '2', 'email': 'b@b.com'})
        self.client = self.storage.create_client(self.company.id, client_data())

    def test_returns_instance(self):
        found = check_reference(self.storage.get_client, self.company.id, 'client_id', self.client.id)
        self.assertEqual(found.id, self.client.id)

    def test_other_company_is_field_error(self):
        """A foreign id becomes a field error, not a 404"""
        with self.assertRaises(InvalidReference) as ctx:
            check_reference(self.storage.get_client, self.other.id, 'client_id', self.client.id)

        self.assertEqual(list(ctx.exception.errors), ['client_id'])


class ComputeKpisTest(SimpleTestCase):

    def setUp(self):
        self.storage = MemStorage()
        self.company = self.storage.create_company({'name': 'A', 'document': '1', 'email': 'a@a.com'})
        self.now = timezone.now()

    def _transaction(self, **overrides):
        data = {
            'transaction_type': 'receita',
            'category': 'aluguel',
            'description': 'Aluguel',
            'amount': Decimal('30000.00'),
            'due_date': self.now,
            'paid_date': self.now,
            'status': 'pago',
        }
        data.update(overrides)
        return self.storage.create_transaction(self.company.id, data)

    def test_kpis(self):
        cid = self.company.id
        self.storage.create_property(cid, property_data(status='disponivel'))
        self.storage.create_property(cid, property_data(status='alugado'))
        self.storage.create_property(cid, property_data(status='vendido'))

        lead = self.storage.create_client(cid, client_data())
        self.storage.create_client(cid, client_data(client_type='proprietario'))

        prop = self.storage.list_properties(cid)[0]
        self.storage.create_contract(cid, {
            'contract_type': 'locacao', 'property_id': prop.id, 'client_id': lead.id,
            'value': Decimal('1000.00'), 'start_date': self.now,
        })
        self.storage.create_contract(cid, {
            'contract_type': 'venda', 'property_id': prop.id, 'client_id': lead.id,
            'value': Decimal('1000.00'), 'start_date': self.now, 'status': 'cancelado',
        })

        self._transaction()
        self._transaction(amount=Decimal('15000.00'))
        self._transaction(status='pendente', paid_date=None)
        self._transaction(transaction_type='despesa')
        self._transaction(paid_date=self.now - timedelta(days=70))

        kpis = compute_kpis(self.storage, cid, now=self.now)

        self.assertEqual(kpis['activeProperties'], 2)
        self.assertEqual(kpis['activeContracts'], 1)
        self.assertEqual(kpis['monthlyLeads'], 1)
        self.assertEqual(kpis['monthlyRevenue'], 'R$ 45.0K')

    def test_empty_company(self):
        kpis = compute_kpis(self.storage, self.company.id)
        self.assertEqual(kpis, {
            'activeProperties': 0,
            'activeContracts': 0,
            'monthlyLeads': 0,
            'monthlyRevenue': 'R$ 0.0K',
        })
