"""Domain errors for nutrition logging."""


class NutritionLogError(Exception):
    """Base class for nutrition log errors."""


class ValidationError(NutritionLogError):
    """Raised when input is malformed or out of range."""


class NotFoundError(NutritionLogError):
    """Raised when a referenced entity does not exist."""

    def __init__(self, entity: str, entity_id: object) -> None:
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class IntegrityFault(NutritionLogError):
    """Raised when stored data references an entity that no longer exists."""
