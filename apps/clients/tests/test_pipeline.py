"""
Pipeline Rules Tests
====================

Test Coverage:
1. next_stage - transition table
2. appointment_event - status to event mapping
3. build_pipeline_summary - counts, values, conversion, follow-ups
"""

from datetime import timedelta
from decimal import Decimal

from django.test import SimpleTestCase
from django.utils import timezone

from apps.clients.models import Client
from apps.clients.pipeline import (
    APPOINTMENT_CANCELLED,
    APPOINTMENT_COMPLETED,
    APPOINTMENT_SCHEDULED,
    INTERACTION_RECORDED,
    STAGES,
    appointment_event,
    build_pipeline_summary,
    next_stage,
)


class NextStageTest(SimpleTestCase):

    def test_interaction_uses_requested_stage(self):
        self.assertEqual(next_stage('novo', INTERACTION_RECORDED, requested_stage='proposta'), 'proposta')

    def test_interaction_can_move_backwards(self):
        """Interactions may set any stage, no forward-only rule"""
        self.assertEqual(next_stage('fechado', INTERACTION_RECORDED, requested_stage='novo'), 'novo')

    def test_interaction_without_stage_keeps_current(self):
        self.assertEqual(next_stage('qualificado', INTERACTION_RECORDED), 'qualificado')

    def test_scheduled_only_moves_new_leads(self):
        self.assertEqual(next_stage('novo', APPOINTMENT_SCHEDULED), 'visita_agendada')
        for stage in ('qualificado', 'proposta', 'fechado', 'perdido'):
            self.assertEqual(next_stage(stage, APPOINTMENT_SCHEDULED), stage)

    def test_completed_closes_from_any_stage(self):
        for stage in STAGES:
            self.assertEqual(next_stage(stage, APPOINTMENT_COMPLETED), 'fechado')

    def test_cancelled_only_reverts_scheduled_visit(self):
        self.assertEqual(next_stage('visita_agendada', APPOINTMENT_CANCELLED), 'qualificado')
        for stage in ('novo', 'proposta', 'fechado'):
            self.assertEqual(next_stage(stage, APPOINTMENT_CANCELLED), stage)

    def test_unknown_event(self):
        with self.assertRaises(ValueError):
            next_stage('novo', 'contract_signed')


class AppointmentEventTest(SimpleTestCase):

    def test_on_create(self):
        self.assertEqual(appointment_event('agendado', created=True), APPOINTMENT_SCHEDULED)
        self.assertEqual(appointment_event('confirmado', created=True), APPOINTMENT_SCHEDULED)
        self.assertEqual(appointment_event('realizado', created=True), APPOINTMENT_COMPLETED)
        self.assertIsNone(appointment_event('cancelado', created=True))

    def test_on_update(self):
        self.assertEqual(appointment_event('realizado'), APPOINTMENT_COMPLETED)
        self.assertEqual(appointment_event('cancelado'), APPOINTMENT_CANCELLED)
        self.assertIsNone(appointment_event('agendado'))
        self.assertIsNone(appointment_event('no_show'))


class PipelineSummaryTest(SimpleTestCase):

    def setUp(self):
        self.now = timezone.now()
        self._next_id = 0

    def _client(self, stage='novo', client_type='lead', value=None, follow_up=None, name=None):
        self._next_id += 1
        return Client(
            id=self._next_id,
            name=name or f'Cliente {self._next_id}',
            client_type=client_type,
            stage=stage,
            pipeline_value=value,
            next_follow_up=follow_up,
        )

    def test_stage_counts_and_values(self):
        clients = [
            self._client('novo', value=Decimal('100000.00')),
            self._client('novo', value=Decimal('50000.50')),
            self._client('proposta', value=None),
            self._client('fechado', value=Decimal('200000.00')),
        ]

        summary = build_pipeline_summary(clients, self.now)
        stages = {row['stage']: row for row in summary['stages']}

        self.assertEqual([row['stage'] for row in summary['stages']], STAGES)
        self.assertEqual(stages['novo']['count'], 2)
        self.assertEqual(stages['novo']['totalValue'], 150000.5)
        self.assertEqual(stages['proposta']['totalValue'], 0)
        self.assertEqual(stages['perdido']['count'], 0)
        self.assertEqual(summary['totalClients'], 4)

    def test_conversion_rate(self):
        """Closed clients over lead/comprador clients"""
        clients = [
            self._client('fechado', client_type='lead'),
            self._client('novo', client_type='lead'),
            self._client('novo', client_type='comprador'),
            self._client('fechado', client_type='proprietario'),
        ]

        summary = build_pipeline_summary(clients, self.now)

        self.assertAlmostEqual(summary['conversionRate'], 200 / 3)

    def test_conversion_rate_without_leads(self):
        clients = [self._client('fechado', client_type='locatario')]
        self.assertEqual(build_pipeline_summary(clients, self.now)['conversionRate'], 0)

    def test_empty_company(self):
        summary = build_pipeline_summary([], self.now)

        self.assertEqual(summary['totalClients'], 0)
        self.assertEqual(summary['conversionRate'], 0)
        self.assertEqual(summary['upcomingFollowUps'], [])
        self.assertTrue(all(row['count'] == 0 for row in summary['stages']))

    def test_upcoming_follow_ups(self):
        """Strictly future follow-ups, soonest first, capped by the limit"""
        clients = [
            self._client(follow_up=self.now + timedelta(days=3), name='Três'),
            self._client(follow_up=self.now - timedelta(days=1), name='Passado'),
            self._client(follow_up=self.now, name='Agora'),
            self._client(follow_up=self.now + timedelta(hours=1), name='Uma hora'),
            self._client(follow_up=None, name='Sem data'),
            self._client(follow_up=self.now + timedelta(days=10), name='Dez'),
        ]

        summary = build_pipeline_summary(clients, self.now, follow_up_limit=2)
        names = [row['name'] for row in summary['upcomingFollowUps']]

        self.assertEqual(names, ['Uma hora', 'Três'])
        self.assertEqual(
            summary['upcomingFollowUps'][0]['nextFollowUp'],
            (self.now + timedelta(hours=1)).isoformat(),
        )

    def test_upcoming_follow_ups_default_limit(self):
        """One past and six future follow-ups: the five soonest future ones, ascending"""
        days = [9, 1, 7, 3, 5, 8]
        clients = [self._client(follow_up=self.now - timedelta(days=1), name='Passado')]
        clients += [self._client(follow_up=self.now + timedelta(days=d), name=f'D+{d}') for d in days]

        summary = build_pipeline_summary(clients, self.now)
        upcoming = summary['upcomingFollowUps']

        self.assertEqual(len(upcoming), 5)
        self.assertEqual([row['name'] for row in upcoming], ['D+1', 'D+3', 'D+5', 'D+7', 'D+8'])
        self.assertEqual(
            [row['nextFollowUp'] for row in upcoming],
            sorted(row['nextFollowUp'] for row in upcoming),
        )
