"""
Storage Backend Tests
=====================

Tenant isolation and relational rules of both backends.

Test Coverage:
1. MemStorage - isolation, cascade, protect, set null
2. MemStorage - construction children and joined reads
3. DatabaseStorage - isolation and aggregated construction list

Run tests:
    python manage.py test apps.core.tests.test_storage
"""

from datetime import timedelta
from decimal import Decimal

from django.db.models import ProtectedError
from django.test import SimpleTestCase, TestCase
from django.utils import timezone

from apps.core.exceptions import NotFound, ValidationFailed
from apps.core.models import Company
from apps.core.storage.database import DatabaseStorage
from apps.core.storage.memory import MemStorage


def property_data(**overrides):
    data = {
        'title': 'Apartamento Centro',
        'property_type': 'apartamento',
        'price': Decimal('350000.00'),
        'address': 'Rua das Flores, 100',
        'neighborhood': 'Centro',
        'city': 'Curitiba',
        'state': 'PR',
        'zip_code': '80000-000',
    }
    data.update(overrides)
    return data


def client_data(**overrides):
    data = {
        'name': 'Maria Souza',
        'email': 'maria@example.com',
        'phone': '41999990000',
        'client_type': 'lead',
    }
    data.update(overrides)
    return data


class MemStorageIsolationTest(SimpleTestCase):
    """Rows of one company are invisible to another"""

    def setUp(self):
        self.storage = MemStorage()
        self.company_a = self.storage.create_company({'name': 'A', 'document': '111', 'email': 'a@a.com'})
        self.company_b = self.storage.create_company({'name': 'B', 'document': '222', 'email': 'b@b.com'})
        self.prop = self.storage.create_property(self.company_a.id, property_data())
        self.client_a = self.storage.create_client(self.company_a.id, client_data())

    def test_get_from_other_company_is_not_found(self):
        """Reading another company's row looks exactly like a missing row"""
        with self.assertRaises(NotFound) as ctx:
            self.storage.get_property(self.company_b.id, self.prop.id)
        self.assertEqual(ctx.exception.entity, 'property')

        with self.assertRaises(NotFound):
            self.storage.get_property(self.company_a.id, 9999)

    def test_lists_are_scoped(self):
        """List operations only return the caller's rows"""
        self.assertEqual([p.id for p in self.storage.list_properties(self.company_a.id)], [self.prop.id])
        self.assertEqual(self.storage.list_properties(self.company_b.id), [])
        self.assertEqual(self.storage.list_clients(self.company_b.id), [])

    def test_update_and_delete_from_other_company_fail(self):
        """Writes against another company's row raise NotFound and change nothing"""
        with self.assertRaises(NotFound):
            self.storage.update_property(self.company_b.id, self.prop.id, {'title': 'Hijacked'})
        with self.assertRaises(NotFound):
            self.storage.delete_client(self.company_b.id, self.client_a.id)

        self.assertEqual(self.storage.get_property(self.company_a.id, self.prop.id).title, 'Apartamento Centro')
        self.assertEqual(len(self.storage.list_clients(self.company_a.id)), 1)

    def test_interactions_of_other_company_client(self):
        """Interaction history is reachable only through the owning company"""
        with self.assertRaises(NotFound):
            self.storage.list_interactions(self.company_b.id, self.client_a.id)

    def test_duplicate_company_document(self):
        with self.assertRaises(ValidationFailed) as ctx:
            self.storage.create_company({'name': 'C', 'document': '111', 'email': 'c@c.com'})
        self.assertIn('document', ctx.exception.errors)

    def test_client_filters_and_tags(self):
        """Type/stage filters and tag storage"""
        self.storage.create_client(
            self.company_a.id,
            client_data(name='João', client_type='proprietario', stage='proposta', tags=['vip', 'centro']),
        )

        owners = self.storage.list_clients(self.company_a.id, client_type='proprietario')
        self.assertEqual([c.name for c in owners], ['João'])
        self.assertEqual(self.storage.client_tags(owners[0]), ['centro', 'vip'])
        self.assertEqual(len(self.storage.list_clients(self.company_a.id, stage='novo')), 1)


class MemStorageRelationsTest(SimpleTestCase):
    """Cascade, protect and set-null rules"""

    def setUp(self):
        self.storage = MemStorage()
        self.company = self.storage.create_company({'name': 'A', 'document': '111', 'email': 'a@a.com'})
        self.prop = self.storage.create_property(self.company.id, property_data())
        self.client = self.storage.create_client(self.company.id, client_data())
        self.now = timezone.now()

    def _contract(self):
        return self.storage.create_contract(self.company.id, {
            'contract_type': 'locacao',
            'property_id': self.prop.id,
            'client_id': self.client.id,
            'value': Decimal('2500.00'),
            'start_date': self.now,
        })

    def test_contract_protects_property_and_client(self):
        """Property/client referenced by a contract cannot be deleted"""
        self._contract()

        with self.assertRaises(ProtectedError):
            self.storage.delete_property(self.company.id, self.prop.id)
        with self.assertRaises(ProtectedError):
            self.storage.delete_client(self.company.id, self.client.id)

    def test_client_delete_cascades(self):
        """Deleting a client removes its interactions and appointments"""
        self.storage.create_interaction(self.company.id, self.client.id, {
            'interaction_type': 'email', 'summary': 'Enviado catálogo', 'occurred_at': self.now,
        })
        self.storage.create_appointment(self.company.id, {
            'client_id': self.client.id, 'scheduled_at': self.now + timedelta(days=1),
        })

        self.storage.delete_client(self.company.id, self.client.id)

        self.assertEqual(self.storage.list_appointments(self.company.id), [])
        with self.assertRaises(NotFound):
            self.storage.list_interactions(self.company.id, self.client.id)

    def test_property_delete_nulls_appointments_and_drops_constructions(self):
        appointment = self.storage.create_appointment(self.company.id, {
            'client_id': self.client.id,
            'property_id': self.prop.id,
            'scheduled_at': self.now + timedelta(days=1),
        })
        construction = self.storage.create_construction(self.company.id, {
            'name': 'Reforma', 'property_id': self.prop.id,
        })
        self.storage.create_task(self.company.id, construction.id, {'name': 'Pintura'})

        self.storage.delete_property(self.company.id, self.prop.id)

        self.assertIsNone(self.storage.get_appointment(self.company.id, appointment.id).property_id)
        self.assertEqual(self.storage.list_constructions(self.company.id), [])

    def test_contract_delete_unlinks_transactions(self):
        contract = self._contract()
        transaction = self.storage.create_transaction(self.company.id, {
            'transaction_type': 'receita',
            'category': 'aluguel',
            'description': 'Aluguel março',
            'amount': Decimal('2500.00'),
            'due_date': self.now,
            'contract_id': contract.id,
        })

        self.storage.delete_contract(self.company.id, contract.id)

        self.assertIsNone(self.storage.get_transaction(self.company.id, transaction.id).contract_id)


class MemStorageConstructionTest(SimpleTestCase):
    """Tasks and expenses are scoped through their construction"""

    def setUp(self):
        self.storage = MemStorage()
        self.company = self.storage.create_company({'name': 'A', 'document': '111', 'email': 'a@a.com'})
        self.other = self.storage.create_company({'name': 'B', 'document': '222', 'email': 'b@b.com'})
        self.prop = self.storage.create_property(self.company.id, property_data())
        self.construction = self.storage.create_construction(self.company.id, {
            'name': 'Reforma cozinha',
            'property_id': self.prop.id,
            'spent': Decimal('100.00'),
        })
        self.now = timezone.now()

    def test_children_of_other_company_construction(self):
        task = self.storage.create_task(self.company.id, self.construction.id, {'name': 'Demolição'})

        with self.assertRaises(NotFound) as ctx:
            self.storage.get_task(self.other.id, self.construction.id, task.id)
        self.assertEqual(ctx.exception.entity, 'construction')

        with self.assertRaises(NotFound):
            self.storage.list_expenses(self.other.id, self.construction.id)

    def test_task_of_another_construction(self):
        """A task id under the wrong construction is not found"""
        second = self.storage.create_construction(self.company.id, {'name': 'Fachada', 'property_id': self.prop.id})
        task = self.storage.create_task(self.company.id, second.id, {'name': 'Andaime'})

        with self.assertRaises(NotFound) as ctx:
            self.storage.get_task(self.company.id, self.construction.id, task.id)
        self.assertEqual(ctx.exception.entity, 'task')

    def test_tasks_ordered_by_order(self):
        self.storage.create_task(self.company.id, self.construction.id, {'name': 'Acabamento', 'order': 2})
        self.storage.create_task(self.company.id, self.construction.id, {'name': 'Fundação', 'order': 1})

        names = [t.name for t in self.storage.list_tasks(self.company.id, self.construction.id)]
        self.assertEqual(names, ['Fundação', 'Acabamento'])

    def test_construction_details(self):
        """Task counts and expense total are reported; spent is left alone"""
        self.storage.create_task(self.company.id, self.construction.id, {'name': 'A', 'status': 'concluida'})
        self.storage.create_task(self.company.id, self.construction.id, {'name': 'B'})
        for amount in ('1000.00', '250.50'):
            self.storage.create_expense(self.company.id, self.construction.id, {
                'description': 'Cimento', 'amount': Decimal(amount), 'expense_date': self.now,
            })

        [(construction, prop, stats)] = self.storage.list_construction_details(self.company.id)

        self.assertEqual(prop.id, self.prop.id)
        self.assertEqual(stats['task_count'], 2)
        self.assertEqual(stats['completed_tasks'], 1)
        self.assertEqual(stats['expense_total'], Decimal('1250.50'))
        self.assertEqual(construction.spent, Decimal('100.00'))


class DatabaseStorageTest(TestCase):
    """ORM backend: same isolation rules, aggregated joins"""

    def setUp(self):
        self.storage = DatabaseStorage()
        self.company = Company.objects.create(name='A', document='111', email='a@a.com')
        self.other = Company.objects.create(name='B', document='222', email='b@b.com')
        self.prop = self.storage.create_property(self.company.id, property_data())

    def test_cross_tenant_not_found(self):
        with self.assertRaises(NotFound):
            self.storage.get_property(self.other.id, self.prop.id)
        with self.assertRaises(NotFound):
            self.storage.update_property(self.other.id, self.prop.id, {'title': 'X'})

    def test_client_tags_round_trip(self):
        client = self.storage.create_client(self.company.id, client_data(tags=['vip', 'investidor']))
        self.assertEqual(self.storage.client_tags(client), ['investidor', 'vip'])

        client = self.storage.update_client(self.company.id, client.id, {'tags': ['vip']})
        self.assertEqual(self.storage.client_tags(client), ['vip'])

    def test_construction_details(self):
        construction = self.storage.create_construction(self.company.id, {
            'name': 'Reforma', 'property_id': self.prop.id,
        })
        empty = self.storage.create_construction(self.company.id, {
            'name': 'Fachada', 'property_id': self.prop.id,
        })
        self.storage.create_task(self.company.id, construction.id, {'name': 'A', 'status': 'concluida'})
        self.storage.create_task(self.company.id, construction.id, {'name': 'B'})
        for amount in ('300.00', '200.00'):
            self.storage.create_expense(self.company.id, construction.id, {
                'description': 'Tinta', 'amount': Decimal(amount), 'expense_date': timezone.now(),
            })

        stats = {c.id: s for c, _prop, s in self.storage.list_construction_details(self.company.id)}

        self.assertEqual(stats[construction.id]['task_count'], 2)
        self.assertEqual(stats[construction.id]['completed_tasks'], 1)
        self.assertEqual(stats[construction.id]['expense_total'], Decimal('500.00'))
        self.assertEqual(stats[empty.id]['task_count'], 0)
        self.assertEqual(stats[empty.id]['expense_total'], Decimal('0'))
