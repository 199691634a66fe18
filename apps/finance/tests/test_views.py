"""
Transaction API Tests
=====================

Run tests:
    python manage.py test apps.finance.tests.test_views
"""

import json
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.utils import timezone

from apps.clients.tests.test_views import make_client
from apps.contracts.tests.test_views import make_contract
from apps.core.models import Activity, Company
from apps.core.tests.test_views import make_property
from apps.finance.models import Transaction

User = get_user_model()


class TransactionApiTest(TestCase):

    def setUp(self):
        self.company = Company.objects.create(name='A', document='1', email='a@a.com')
        self.other = Company.objects.create(name='B', document='2', email='b@b.com')
        self.user = User.objects.create_user(email='ana@a.com', password='testpass123', company=self.company)
        self.client.force_login(self.user)

        self.contract = make_contract(self.company, make_property(self.company), make_client(self.company))
        self.due = timezone.now().replace(microsecond=0)

    def _send(self, method, url, payload):
        return getattr(self.client, method)(url, data=json.dumps(payload), content_type='application/json')

    def _payload(self, **overrides):
        data = {
            'type': 'receita',
            'category': 'aluguel',
            'description': 'Aluguel março',
            'amount': '1250,50',
            'dueDate': self.due.isoformat(),
        }
        data.update(overrides)
        return data

    def test_create(self):
        response = self._send('post', '/api/transactions', self._payload(contractId=self.contract.id))
        body = response.json()

        self.assertEqual(response.status_code, 201)
        self.assertEqual(body['amount'], '1250.50')
        self.assertEqual(body['status'], 'pendente')
        self.assertEqual(body['contractId'], self.contract.id)
        self.assertTrue(Activity.objects.filter(activity_type='transaction_created', entity_id=body['id']).exists())

    def test_empty_contract_means_no_link(self):
        response = self._send('post', '/api/transactions', self._payload(contractId=''))

        self.assertEqual(response.status_code, 201)
        self.assertIsNone(response.json()['contractId'])

    def test_foreign_contract(self):
        foreign = make_contract(self.other, make_property(self.other), make_client(self.other))

        response = self._send('post', '/api/transactions', self._payload(contractId=foreign.id))

        self.assertEqual(response.status_code, 400)
        self.assertIn('contractId', response.json()['errors'])
        self.assertFalse(Transaction.objects.exists())

    def test_invalid_payload(self):
        response = self._send('post', '/api/transactions', self._payload(amount='-10', type='transferencia'))

        self.assertEqual(response.status_code, 400)
        self.assertEqual(set(response.json()['errors']), {'amount', 'type'})

    def test_list_joins_contract(self):
        Transaction.objects.create(
            company=self.company, transaction_type='receita', category='aluguel',
            description='Com contrato', amount=Decimal('3500'), due_date=self.due, contract=self.contract,
        )
        Transaction.objects.create(
            company=self.company, transaction_type='despesa', category='manutencao',
            description='Sem contrato', amount=Decimal('200'), due_date=self.due,
        )
        Transaction.objects.create(
            company=self.other, transaction_type='receita', category='venda',
            description='Outra empresa', amount=Decimal('1'), due_date=self.due,
        )

        body = {t['description']: t for t in self.client.get('/api/transactions').json()}

        self.assertEqual(set(body), {'Com contrato', 'Sem contrato'})
        self.assertEqual(body['Com contrato']['contract'], {'id': self.contract.id, 'type': 'locacao', 'value': '3500.00'})
        self.assertNotIn('contract', body['Sem contrato'])

    def test_mark_paid(self):
        transaction = Transaction.objects.create(
            company=self.company, transaction_type='receita', category='aluguel',
            description='Aluguel', amount=Decimal('3500'), due_date=self.due,
        )

        response = self._send('put', f'/api/transactions/{transaction.id}', {
            'status': 'pago', 'paidDate': self.due.isoformat(),
        })

        self.assertEqual(response.status_code, 200)
        transaction.refresh_from_db()
        self.assertEqual(transaction.status, 'pago')
        self.assertEqual(transaction.paid_date, self.due)

    def test_deleting_contract_unlinks_transactions(self):
        transaction = Transaction.objects.create(
            company=self.company, transaction_type='receita', category='aluguel',
            description='Aluguel', amount=Decimal('3500'), due_date=self.due, contract=self.contract,
        )

        self.assertEqual(self.client.delete(f'/api/contracts/{self.contract.id}').status_code, 204)

        transaction.refresh_from_db()
        self.assertIsNone(transaction.contract_id)

    def test_foreign_transaction_is_404(self):
        foreign = Transaction.objects.create(
            company=self.other, transaction_type='receita', category='venda',
            description='Outra', amount=Decimal('1'), due_date=self.due,
        )

        self.assertEqual(self.client.get(f'/api/transactions/{foreign.id}').status_code, 404)
        self.assertEqual(self._send('put', f'/api/transactions/{foreign.id}', {'status': 'pago'}).status_code, 404)
        self.assertEqual(self.client.delete(f'/api/transactions/{foreign.id}').status_code, 404)
