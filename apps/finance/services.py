from apps.core.services import check_reference


def _check_contract(storage, company_id, data):
    # contract_id None means "no link"
    if data.get('contract_id'):
        check_reference(storage.get_contract, company_id, 'contract_id', data['contract_id'])


def create_transaction(storage, company_id, data, user_id=None):
    _check_contract(storage, company_id, data)

    with storage.atomic():
        transaction = storage.create_transaction(company_id, data)
        storage.create_activity(
            company_id,
            'transaction_created',
            'Transação registrada',
            description=f"{transaction.get_transaction_type_display()}: {transaction.description}",
            entity_type='transaction',
            entity_id=transaction.id,
            user_id=user_id,
        )
    return transaction


def update_transaction(storage, company_id, transaction_id, data):
    storage.get_transaction(company_id, transaction_id)
    _check_contract(storage, company_id, data)
    return storage.update_transaction(company_id, transaction_id, data)
