def create_property(storage, company_id, data, user_id=None):
    with storage.atomic():
        prop = storage.create_property(company_id, data)
        storage.create_activity(
            company_id,
            'property_created',
            'Imóvel cadastrado',
            description=f"{prop.title} foi cadastrado no sistema",
            entity_type='property',
            entity_id=prop.id,
            user_id=user_id,
        )
    return prop
