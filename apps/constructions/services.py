from apps.core.services import check_reference


def create_construction(storage, company_id, data, user_id=None):
    check_reference(storage.get_property, company_id, 'property_id', data['property_id'])

    with storage.atomic():
        construction = storage.create_construction(company_id, data)
        storage.create_activity(
            company_id,
            'construction_created',
            'Obra cadastrada',
            description=f"{construction.name} foi cadastrada",
            entity_type='construction',
            entity_id=construction.id,
            user_id=user_id,
        )
    return construction


def update_construction(storage, company_id, construction_id, data):
    # spent is whatever the user sets; expenses never recompute it
    storage.get_construction(company_id, construction_id)
    if 'property_id' in data:
        check_reference(storage.get_property, company_id, 'property_id', data['property_id'])
    return storage.update_construction(company_id, construction_id, data)
