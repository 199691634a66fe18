"""
Contract API Tests
==================

Test Coverage:
1. Signing a contract flips the property status (locacao/venda)
2. contract_signed activity
3. List with property/client join
4. Reference and date validation
5. Property/client deletion blocked while under contract

Run tests:
    python manage.py test apps.contracts.tests.test_views
"""

import json
from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.utils import timezone

from apps.clients.tests.test_views import make_client
from apps.contracts.models import Contract
from apps.core.models import Activity, Company
from apps.core.tests.test_views import make_property

User = get_user_model()


def make_contract(company, prop, client, **overrides):
    data = {
        'company': company,
        'contract_type': 'locacao',
        'property': prop,
        'client': client,
        'value': Decimal('3500.00'),
        'start_date': timezone.now(),
    }
    data.update(overrides)
    return Contract.objects.create(**data)


class ContractApiTest(TestCase):

    def setUp(self):
        self.company = Company.objects.create(name='A', document='1', email='a@a.com')
        self.other = Company.objects.create(name='B', document='2', email='b@b.com')
        self.user = User.objects.create_user(email='ana@a.com', password='testpass123', company=self.company)
        self.client.force_login(self.user)

        self.prop = make_property(self.company)
        self.lead = make_client(self.company)
        self.start = timezone.now().replace(microsecond=0)

    def _post(self, payload):
        return self.client.post('/api/contracts', data=json.dumps(payload), content_type='application/json')

    def _payload(self, **overrides):
        data = {
            'type': 'locacao',
            'propertyId': self.prop.id,
            'clientId': self.lead.id,
            'value': '3500,00',
            'startDate': self.start.isoformat(),
        }
        data.update(overrides)
        return data

    def test_rent_contract_marks_property_rented(self):
        response = self._post(self._payload(commission=10))
        body = response.json()

        self.assertEqual(response.status_code, 201)
        self.assertEqual(body['status'], 'ativo')
        self.assertEqual(body['value'], '3500.00')
        self.assertEqual(Decimal(body['commission']), Decimal('10'))

        self.prop.refresh_from_db()
        self.assertEqual(self.prop.status, 'alugado')

        activity = Activity.objects.get(activity_type='contract_signed')
        self.assertEqual(activity.entity_id, body['id'])
        self.assertEqual(activity.company_id, self.company.id)

    def test_sale_contract_marks_property_sold(self):
        self.prop.status = 'alugado'
        self.prop.save()

        response = self._post(self._payload(type='venda', value=480000))

        self.assertEqual(response.status_code, 201)
        self.prop.refresh_from_db()
        self.assertEqual(self.prop.status, 'vendido')

    def test_foreign_property(self):
        foreign = make_property(self.other)

        response = self._post(self._payload(propertyId=foreign.id))

        self.assertEqual(response.status_code, 400)
        self.assertIn('propertyId', response.json()['errors'])
        foreign.refresh_from_db()
        self.assertEqual(foreign.status, 'disponivel')
        self.assertFalse(Contract.objects.exists())

    def test_end_date_before_start(self):
        response = self._post(self._payload(endDate=(self.start - timedelta(days=1)).isoformat()))

        self.assertEqual(response.status_code, 400)
        self.assertEqual(list(response.json()['errors']), ['endDate'])

    def test_missing_fields(self):
        response = self._post({'type': 'permuta'})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            set(response.json()['errors']),
            {'type', 'propertyId', 'clientId', 'value', 'startDate'},
        )

    def test_list_joins_property_and_client(self):
        make_contract(self.company, self.prop, self.lead)
        make_contract(self.other, make_property(self.other), make_client(self.other))

        body = self.client.get('/api/contracts').json()

        self.assertEqual(len(body), 1)
        self.assertEqual(body[0]['property'], {'id': self.prop.id, 'title': 'Casa Jardim', 'address': 'Rua A, 1'})
        self.assertEqual(body[0]['client']['email'], 'carlos@example.com')

    def test_update_does_not_touch_property(self):
        contract = make_contract(self.company, self.prop, self.lead)

        response = self.client.put(
            f'/api/contracts/{contract.id}',
            data=json.dumps({'status': 'cancelado'}),
            content_type='application/json',
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['status'], 'cancelado')
        self.prop.refresh_from_db()
        self.assertEqual(self.prop.status, 'disponivel')

    def test_foreign_contract_is_404(self):
        foreign = make_contract(self.other, make_property(self.other), make_client(self.other))

        self.assertEqual(self.client.get(f'/api/contracts/{foreign.id}').status_code, 404)
        self.assertEqual(self.client.delete(f'/api/contracts/{foreign.id}').status_code, 404)
        self.assertTrue(Contract.objects.filter(pk=foreign.pk).exists())

    def test_property_under_contract_cannot_be_deleted(self):
        make_contract(self.company, self.prop, self.lead)

        response = self.client.delete(f'/api/properties/{self.prop.id}')

        self.assertEqual(response.status_code, 400)
        self.assertIn('message', response.json())

    def test_delete(self):
        contract = make_contract(self.company, self.prop, self.lead)

        self.assertEqual(self.client.delete(f'/api/contracts/{contract.id}').status_code, 204)
        self.assertFalse(Contract.objects.exists())
