"""
Client write paths with side effects on the client record and activity feed
"""

import logging

from django.utils import timezone

from apps.clients.pipeline import INTERACTION_RECORDED, next_stage

logger = logging.getLogger(__name__)


def create_client(storage, company_id, data, user_id=None):
    """Create a client; leads also get a lead_created activity"""
    with storage.atomic():
        client = storage.create_client(company_id, data)

        if client.client_type == 'lead':
            storage.create_activity(
                company_id,
                'lead_created',
                'Novo lead cadastrado',
                description=f"{client.name} foi cadastrado como lead",
                entity_type='client',
                entity_id=client.id,
                user_id=user_id,
            )

    return client


def record_interaction(storage, company_id, client_id, data, user_id=None):
    """
    Log a contact with a client and move the client along the pipeline

    After the interaction is stored the client gets:
    - last_contact_at = interaction.occurred_at (always)
    - next_follow_up = interaction.next_follow_up (only when given)
    - stage = interaction.stage (only when given, any stage accepted)

    Args:
        storage: storage backend
        company_id: caller's company
        client_id: target client (NotFound when not under the company)
        data: validated interaction fields
        user_id: author, for the activity feed

    Returns:
        tuple: (interaction, updated client)
    """
    data = dict(data)
    if not data.get('occurred_at'):
        data['occurred_at'] = timezone.now()

    with storage.atomic():
        client = storage.get_client(company_id, client_id)
        interaction = storage.create_interaction(company_id, client.id, data)

        changes = {'last_contact_at': interaction.occurred_at}
        if interaction.next_follow_up:
            changes['next_follow_up'] = interaction.next_follow_up

        stage = next_stage(client.stage, INTERACTION_RECORDED, requested_stage=interaction.stage)
        if stage != client.stage:
            changes['stage'] = stage

        client = storage.update_client(company_id, client.id, changes)

        storage.create_activity(
            company_id,
            'interaction_recorded',
            'Interação registrada',
            description=f"{interaction.get_interaction_type_display()} com {client.name}",
            entity_type='client',
            entity_id=client.id,
            user_id=user_id,
        )

    logger.info(f"Interaction {interaction.id} recorded for client {client.id} (stage: {client.stage})")
    return interaction, client
