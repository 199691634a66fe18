import logging

from apps.contracts.models import Contract
from apps.core.services import check_reference

logger = logging.getLogger(__name__)


def create_contract(storage, company_id, data, user_id=None):
    """
    Sign a contract and flip the property's status

    locacao → property 'alugado', venda → property 'vendido', whatever the
    property's current status is (a second contract simply overwrites it).

    Raises:
        InvalidReference: property/client not under the caller's company
    """
    check_reference(storage.get_property, company_id, 'property_id', data['property_id'])
    check_reference(storage.get_client, company_id, 'client_id', data['client_id'])

    with storage.atomic():
        contract = storage.create_contract(company_id, data)

        new_status = Contract.PROPERTY_STATUS_BY_TYPE[contract.contract_type]
        storage.update_property(company_id, contract.property_id, {'status': new_status})

        storage.create_activity(
            company_id,
            'contract_signed',
            'Novo contrato assinado',
            description=f"Contrato de {contract.contract_type} foi assinado",
            entity_type='contract',
            entity_id=contract.id,
            user_id=user_id,
        )

    logger.info(f"Contract {contract.id} signed; property {contract.property_id} is now {new_status}")
    return contract


def update_contract(storage, company_id, contract_id, data):
    """Partial update; changed references are re-checked, property status is not touched"""
    storage.get_contract(company_id, contract_id)
    if 'property_id' in data:
        check_reference(storage.get_property, company_id, 'property_id', data['property_id'])
    if 'client_id' in data:
        check_reference(storage.get_client, company_id, 'client_id', data['client_id'])

    return storage.update_contract(company_id, contract_id, data)
