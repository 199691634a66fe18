"""
Property API Tests
==================

Test Coverage:
1. List/Create - /api/properties
2. Detail/Update/Delete - /api/properties/<id>
3. Tenant isolation and validation

Run tests:
    python manage.py test apps.properties.tests.test_views
"""

import json

from django.contrib.auth import get_user_model
from django.test import TestCase

from apps.core.models import Activity, Company
from apps.core.tests.test_views import make_property

User = get_user_model()


PROPERTY_PAYLOAD = {
    'title': 'Apartamento 2 quartos',
    'type': 'apartamento',
    'price': '320000,00',
    'area': 68.5,
    'bedrooms': 2,
    'address': 'Av. Brasil, 500',
    'neighborhood': 'Centro',
    'city': 'Curitiba',
    'state': 'pr',
    'zipCode': '80010-000',
    'images': ['https://cdn.example.com/1.jpg'],
}


class PropertyApiTest(TestCase):

    def setUp(self):
        self.company = Company.objects.create(name='A', document='1', email='a@a.com')
        self.other = Company.objects.create(name='B', document='2', email='b@b.com')
        self.user = User.objects.create_user(email='ana@a.com', password='testpass123', company=self.company)
        self.client.force_login(self.user)

    def _post(self, payload):
        return self.client.post('/api/properties', data=json.dumps(payload), content_type='application/json')

    def _put(self, pk, payload):
        return self.client.put(f'/api/properties/{pk}', data=json.dumps(payload), content_type='application/json')

    def test_anonymous_gets_401(self):
        self.client.logout()
        self.assertEqual(self.client.get('/api/properties').status_code, 401)

    def test_create(self):
        """Comma decimals are accepted; defaults fill what was left out"""
        response = self._post(PROPERTY_PAYLOAD)
        body = response.json()

        self.assertEqual(response.status_code, 201)
        self.assertEqual(body['price'], '320000.00')
        self.assertEqual(body['area'], '68.5')
        self.assertEqual(body['status'], 'disponivel')
        self.assertEqual(body['state'], 'PR')
        self.assertEqual(body['companyId'], self.company.id)
        self.assertEqual(body['images'], ['https://cdn.example.com/1.jpg'])

    def test_create_records_activity(self):
        response = self._post(PROPERTY_PAYLOAD)

        activity = Activity.objects.get(company=self.company)
        self.assertEqual(activity.activity_type, 'property_created')
        self.assertEqual(activity.title, 'Imóvel cadastrado')
        self.assertEqual(activity.entity_id, response.json()['id'])
        self.assertEqual(activity.user, self.user)

    def test_create_validation(self):
        payload = dict(PROPERTY_PAYLOAD, type='castelo', price='-10')
        del payload['city']

        response = self._post(payload)
        errors = response.json()['errors']

        self.assertEqual(response.status_code, 400)
        self.assertEqual(set(errors), {'type', 'price', 'city'})

    def test_status_cannot_be_null(self):
        response = self._post(dict(PROPERTY_PAYLOAD, status=None))

        self.assertEqual(response.status_code, 400)
        self.assertIn('status', response.json()['errors'])

    def test_list_only_own_company(self):
        own = make_property(self.company)
        make_property(self.other)

        response = self.client.get('/api/properties')

        self.assertEqual([p['id'] for p in response.json()], [own.id])

    def test_partial_update(self):
        prop = make_property(self.company)

        response = self._put(prop.id, {'status': 'manutencao', 'price': '510000'})

        self.assertEqual(response.status_code, 200)
        prop.refresh_from_db()
        self.assertEqual(prop.status, 'manutencao')
        self.assertEqual(prop.title, 'Casa Jardim')

    def test_other_company_is_404(self):
        """Read, update and delete of a foreign property all answer 404"""
        foreign = make_property(self.other)

        self.assertEqual(self.client.get(f'/api/properties/{foreign.id}').status_code, 404)
        self.assertEqual(self._put(foreign.id, {'title': 'Hack'}).status_code, 404)
        self.assertEqual(self.client.delete(f'/api/properties/{foreign.id}').status_code, 404)

        foreign.refresh_from_db()
        self.assertEqual(foreign.title, 'Casa Jardim')

    def test_unknown_id_is_404_before_validation(self):
        response = self._put(99999, {'price': 'abc'})
        self.assertEqual(response.status_code, 404)

    def test_delete(self):
        prop = make_property(self.company)

        response = self.client.delete(f'/api/properties/{prop.id}')

        self.assertEqual(response.status_code, 204)
        self.assertEqual(self.client.get(f'/api/properties/{prop.id}').status_code, 404)

    def test_method_not_allowed(self):
        self.assertEqual(self.client.patch('/api/properties').status_code, 405)
