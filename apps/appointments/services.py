"""
Appointment scheduling and its coupling with the client pipeline

Every create/update re-derives the linked client's next_follow_up and stage
(see apps.clients.pipeline) and pushes an event to the company's sockets
once the write is done.
"""

import logging

from apps.clients.pipeline import appointment_event, next_stage
from apps.core.notifications import broadcast_to_company
from apps.core.services import check_reference

logger = logging.getLogger(__name__)


def _check_references(storage, company_id, data):
    if 'client_id' in data:
        check_reference(storage.get_client, company_id, 'client_id', data['client_id'])
    if data.get('property_id'):
        check_reference(storage.get_property, company_id, 'property_id', data['property_id'])


def _sync_client(storage, company_id, appointment, created, status_changed=True):
    """Apply follow-up and stage rules to the appointment's client"""
    client = storage.get_client(company_id, appointment.client_id)
    changes = {'next_follow_up': appointment.scheduled_at}

    event = appointment_event(appointment.status, created=created) if status_changed else None
    if event:
        stage = next_stage(client.stage, event)
        if stage != client.stage:
            changes['stage'] = stage

    return storage.update_client(company_id, client.id, changes)


def _payload(appointment, client):
    data = appointment.to_json()
    data['clientStage'] = client.stage
    return data


def create_appointment(storage, company_id, data, user_id=None):
    """
    Schedule an appointment

    Raises:
        InvalidReference: client/property not under the caller's company
    """
    _check_references(storage, company_id, data)

    with storage.atomic():
        appointment = storage.create_appointment(company_id, data)
        client = _sync_client(storage, company_id, appointment, created=True)

        storage.create_activity(
            company_id,
            'appointment_created',
            'Agendamento criado',
            description=f"{appointment.get_appointment_type_display()} com {client.name} em "
                        f"{appointment.scheduled_at:%d/%m/%Y %H:%M}",
            entity_type='appointment',
            entity_id=appointment.id,
            user_id=user_id,
        )

    broadcast_to_company(company_id, 'appointment_created', _payload(appointment, client))
    return appointment, client


def update_appointment(storage, company_id, appointment_id, data, user_id=None):
    """
    Partially update an appointment

    Only an update that sends a status applies the stage rule: realizado
    closes the deal, cancelado reverts visita_agendada to qualificado.
    next_follow_up always follows scheduled_at.

    Raises:
        NotFound: appointment not under the caller's company
        InvalidReference: changed client/property not under the company
    """
    storage.get_appointment(company_id, appointment_id)
    _check_references(storage, company_id, data)

    with storage.atomic():
        appointment = storage.update_appointment(company_id, appointment_id, data)
        client = _sync_client(storage, company_id, appointment, created=False, status_changed='status' in data)

        storage.create_activity(
            company_id,
            'appointment_updated',
            'Agendamento atualizado',
            description=f"{appointment.get_appointment_type_display()} com {client.name}: "
                        f"{appointment.get_status_display()}",
            entity_type='appointment',
            entity_id=appointment.id,
            user_id=user_id,
        )

    broadcast_to_company(company_id, 'appointment_updated', _payload(appointment, client))
    return appointment, client


def delete_appointment(storage, company_id, appointment_id, user_id=None):
    """Delete an appointment; the client record is left as it is"""
    with storage.atomic():
        appointment = storage.get_appointment(company_id, appointment_id)
        storage.delete_appointment(company_id, appointment_id)

        storage.create_activity(
            company_id,
            'appointment_deleted',
            'Agendamento removido',
            entity_type='appointment',
            entity_id=appointment_id,
            user_id=user_id,
        )

    broadcast_to_company(company_id, 'appointment_deleted', {'id': appointment.id, 'clientId': appointment.client_id})
    logger.info(f"Appointment {appointment_id} deleted (company {company_id})")
