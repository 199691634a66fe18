"""
Client pipeline rules

- next_stage(): the single place where a client's stage changes as a side
  effect of an interaction or an appointment
- build_pipeline_summary(): per-stage counts/values, conversion rate and
  upcoming follow-ups, recomputed on every request
"""

from decimal import Decimal, InvalidOperation

from apps.clients.models import Client


STAGES = [stage for stage, _label in Client.STAGE_CHOICES]
STAGE_LABELS = dict(Client.STAGE_CHOICES)

# Client types counted in the conversion-rate denominator
LEAD_LIKE_TYPES = ('lead', 'comprador')

INTERACTION_RECORDED = 'interaction_recorded'
APPOINTMENT_SCHEDULED = 'appointment_scheduled'
APPOINTMENT_COMPLETED = 'appointment_completed'
APPOINTMENT_CANCELLED = 'appointment_cancelled'

# (event, current stage) → new stage; '*' matches any current stage.
# Pairs not listed leave the stage unchanged.
TRANSITIONS = {
    (APPOINTMENT_SCHEDULED, 'novo'): 'visita_agendada',
    (APPOINTMENT_COMPLETED, '*'): 'fechado',
    (APPOINTMENT_CANCELLED, 'visita_agendada'): 'qualificado',
}

EVENTS = (INTERACTION_RECORDED, APPOINTMENT_SCHEDULED, APPOINTMENT_COMPLETED, APPOINTMENT_CANCELLED)


def next_stage(current_stage, event, requested_stage=None):
    """
    Stage a client moves to after an event

    Args:
        current_stage: client's stage before the event
        event: one of EVENTS
        requested_stage: stage chosen by the user on an interaction
            (any stage is accepted, no forward-only check)

    Returns:
        str: the new stage (equal to current_stage when nothing changes)

    Example:
        >>> next_stage('novo', APPOINTMENT_SCHEDULED)
        'visita_agendada'
        >>> next_stage('proposta', APPOINTMENT_CANCELLED)
        'proposta'
    """
    if event not in EVENTS:
        raise ValueError(f"Unknown pipeline event: {event}")

    if event == INTERACTION_RECORDED:
        return requested_stage or current_stage

    return TRANSITIONS.get((event, current_stage)) or TRANSITIONS.get((event, '*')) or current_stage


def appointment_event(status, created=False):
    """
    Pipeline event raised by an appointment ending up in `status`

    On creation any status other than realizado/cancelado counts as a
    scheduled visit; on update only realizado and cancelado matter.
    """
    if status == 'realizado':
        return APPOINTMENT_COMPLETED
    if status == 'cancelado':
        return None if created else APPOINTMENT_CANCELLED
    return APPOINTMENT_SCHEDULED if created else None


def _pipeline_value(client):
    # Missing or unparseable values count as zero
    if client.pipeline_value is None:
        return Decimal('0')
    try:
        return Decimal(str(client.pipeline_value))
    except InvalidOperation:
        return Decimal('0')


def build_pipeline_summary(clients, now, follow_up_limit=5):
    """
    Aggregate the pipeline of one company

    Args:
        clients: every client of the company
        now: reference time; follow-ups must be strictly after it
        follow_up_limit: how many upcoming follow-ups to return

    Returns:
        dict ready for JSON (camelCase keys)
    """
    counts = {stage: 0 for stage in STAGES}
    totals = {stage: Decimal('0') for stage in STAGES}

    for client in clients:
        if client.stage not in counts:
            continue
        counts[client.stage] += 1
        totals[client.stage] += _pipeline_value(client)

    lead_like = sum(1 for client in clients if client.client_type in LEAD_LIKE_TYPES)
    closed = counts['fechado']
    conversion_rate = closed / lead_like * 100 if lead_like else 0

    upcoming = sorted(
        (client for client in clients if client.next_follow_up and client.next_follow_up > now),
        key=lambda client: client.next_follow_up,
    )[:follow_up_limit]

    return {
        'stages': [
            {
                'stage': stage,
                'label': STAGE_LABELS[stage],
                'count': counts[stage],
                'totalValue': float(totals[stage]),
            }
            for stage in STAGES
        ],
        'totalClients': len(clients),
        'conversionRate': conversion_rate,
        'upcomingFollowUps': [
            {
                'clientId': client.id,
                'name': client.name,
                'stage': client.stage,
                'nextFollowUp': client.next_follow_up.isoformat(),
            }
            for client in upcoming
        ],
    }
