"""
Client API Tests
================

Test Coverage:
1. List/Create - /api/clients (filters, tags, comma decimals)
2. Detail/Update/Delete - /api/clients/<id>
3. Interactions - /api/clients/<id>/interactions
4. Pipeline - /api/clients/pipeline

Run tests:
    python manage.py test apps.clients.tests.test_views
"""

import json
from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.utils import timezone

from apps.clients.models import Client, ClientInteraction
from apps.contracts.models import Contract
from apps.core.models import Activity, Company
from apps.core.tests.test_views import make_property

User = get_user_model()


def make_client(company, **overrides):
    data = {
        'company': company,
        'name': 'Carlos Lima',
        'email': 'carlos@example.com',
        'phone': '11988887777',
        'client_type': 'lead',
    }
    data.update(overrides)
    return Client.objects.create(**data)


class ClientApiTestCase(TestCase):

    def setUp(self):
        self.company = Company.objects.create(name='A', document='1', email='a@a.com')
        self.other = Company.objects.create(name='B', document='2', email='b@b.com')
        self.user = User.objects.create_user(email='ana@a.com', password='testpass123', company=self.company)
        self.client.force_login(self.user)

    def _send(self, method, url, payload):
        return getattr(self.client, method)(url, data=json.dumps(payload), content_type='application/json')


class ClientListCreateTest(ClientApiTestCase):

    def test_create_lead(self):
        response = self._send('post', '/api/clients', {
            'name': 'Beatriz Rocha',
            'email': ' Beatriz@Example.com ',
            'phone': '11977776666',
            'type': 'lead',
            'pipelineValue': '450000,00',
            'tags': ['vip', 'zona sul', 'vip'],
        })
        body = response.json()

        self.assertEqual(response.status_code, 201)
        self.assertEqual(body['email'], 'beatriz@example.com')
        self.assertEqual(body['stage'], 'novo')
        self.assertEqual(body['pipelineValue'], '450000.00')
        self.assertEqual(body['tags'], ['vip', 'zona sul'])
        self.assertTrue(Activity.objects.filter(company=self.company, activity_type='lead_created').exists())

    def test_create_invalid(self):
        response = self._send('post', '/api/clients', {
            'name': '',
            'email': 'not-an-email',
            'phone': '1',
            'type': 'investidor',
            'pipelineValue': 'muito',
        })

        self.assertEqual(response.status_code, 400)
        self.assertEqual(set(response.json()['errors']), {'name', 'email', 'type', 'pipelineValue'})

    def test_list_filters(self):
        make_client(self.company, name='Lead Novo')
        make_client(self.company, name='Dono', client_type='proprietario', stage='qualificado')
        make_client(self.other, name='Outro')

        def names(response):
            return sorted(c['name'] for c in response.json())

        self.assertEqual(names(self.client.get('/api/clients')), ['Dono', 'Lead Novo'])
        self.assertEqual(names(self.client.get('/api/clients?type=proprietario')), ['Dono'])
        self.assertEqual(names(self.client.get('/api/clients?stage=novo')), ['Lead Novo'])


class ClientDetailTest(ClientApiTestCase):

    def test_update_stage_and_tags(self):
        client = make_client(self.company)

        response = self._send('put', f'/api/clients/{client.id}', {'stage': 'proposta', 'tags': ['quente']})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['stage'], 'proposta')
        self.assertEqual(response.json()['tags'], ['quente'])
        self.assertEqual(response.json()['name'], 'Carlos Lima')

    def test_foreign_client_is_404(self):
        foreign = make_client(self.other)

        self.assertEqual(self.client.get(f'/api/clients/{foreign.id}').status_code, 404)
        self.assertEqual(self._send('put', f'/api/clients/{foreign.id}', {'stage': 'perdido'}).status_code, 404)
        self.assertEqual(self.client.delete(f'/api/clients/{foreign.id}').status_code, 404)

    def test_delete_blocked_by_contract(self):
        client = make_client(self.company)
        Contract.objects.create(company=self.company, contract_type='venda', property=make_property(self.company),
                                client=client, value=Decimal('1.00'), start_date=timezone.now())

        response = self.client.delete(f'/api/clients/{client.id}')

        self.assertEqual(response.status_code, 400)
        self.assertTrue(Client.objects.filter(pk=client.pk).exists())


class ClientInteractionsTest(ClientApiTestCase):

    def test_record_interaction_updates_client(self):
        client = make_client(self.company)
        follow_up = (timezone.now() + timedelta(days=3)).replace(microsecond=0)

        response = self._send('post', f'/api/clients/{client.id}/interactions', {
            'type': 'contato_telefonico',
            'channel': 'telefone',
            'summary': 'Interessado em imóveis na zona sul',
            'nextFollowUp': follow_up.isoformat(),
            'stage': 'qualificado',
        })
        body = response.json()

        self.assertEqual(response.status_code, 201)
        self.assertEqual(body['type'], 'contato_telefonico')
        self.assertEqual(body['client']['stage'], 'qualificado')

        client.refresh_from_db()
        self.assertEqual(client.stage, 'qualificado')
        self.assertEqual(client.next_follow_up, follow_up)
        self.assertIsNotNone(client.last_contact_at)

    def test_history_newest_first(self):
        client = make_client(self.company)
        now = timezone.now()
        ClientInteraction.objects.create(client=client, interaction_type='email', summary='antigo',
                                         occurred_at=now - timedelta(days=2))
        ClientInteraction.objects.create(client=client, interaction_type='email', summary='recente',
                                         occurred_at=now)

        response = self.client.get(f'/api/clients/{client.id}/interactions')

        self.assertEqual([i['summary'] for i in response.json()], ['recente', 'antigo'])

    def test_foreign_client_is_404_even_with_invalid_body(self):
        foreign = make_client(self.other)

        response = self._send('post', f'/api/clients/{foreign.id}/interactions', {'type': 'telepatia'})

        self.assertEqual(response.status_code, 404)
        self.assertEqual(self.client.get(f'/api/clients/{foreign.id}/interactions').status_code, 404)
        self.assertFalse(ClientInteraction.objects.exists())

    def test_invalid_interaction(self):
        client = make_client(self.company)

        response = self._send('post', f'/api/clients/{client.id}/interactions', {
            'type': 'telepatia', 'stage': 'ganho',
        })

        self.assertEqual(response.status_code, 400)
        self.assertEqual(set(response.json()['errors']), {'type', 'summary', 'stage'})


class ClientPipelineViewTest(ClientApiTestCase):

    def test_summary(self):
        make_client(self.company, stage='fechado', pipeline_value=Decimal('300000.00'))
        make_client(self.company, stage='novo', next_follow_up=timezone.now() + timedelta(days=1))
        make_client(self.other, stage='fechado')

        response = self.client.get('/api/clients/pipeline')
        body = response.json()
        stages = {row['stage']: row for row in body['stages']}

        self.assertEqual(response.status_code, 200)
        self.assertEqual(body['totalClients'], 2)
        self.assertEqual(stages['fechado']['totalValue'], 300000.0)
        self.assertEqual(body['conversionRate'], 50)
        self.assertEqual(len(body['upcomingFollowUps']), 1)
