class BusinessError(Exception):
    """Generic business rule failure"""

    pass


class NotFound(BusinessError):
    """
    Entity absent under the caller's company

    Raised both when the id does not exist and when it belongs to another
    company; callers must not be able to tell the two apart.
    """

    def __init__(self, entity, entity_id=None):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class ValidationFailed(BusinessError):
    """Payload rejected; errors maps field name to a list of messages"""

    def __init__(self, errors):
        self.errors = errors
        super().__init__(f"Invalid fields: {', '.join(sorted(errors))}")


class InvalidReference(ValidationFailed):
    """A referenced id (clientId, propertyId, ...) is not under the caller's company"""

    def __init__(self, field, message):
        self.field = field
        super().__init__({field: [message]})
