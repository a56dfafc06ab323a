"""Exception hierarchy for Planform."""


class PlanformError(Exception):
    """Base exception for all Planform errors."""

    pass


class EntityError(PlanformError):
    """Errors related to shape entities."""

    pass


class EntityFormatError(EntityError):
    """Entity description could not be parsed."""

    def __init__(self, details: str) -> None:
        self.details = details
        super().__init__(f"Invalid entity: {details}")


class GeometryError(PlanformError):
    """Errors in geometric calculations."""

    pass


class NonFiniteGeometryError(GeometryError):
    """Polygon coordinates produced a non-finite value."""

    def __init__(self, quantity: str) -> None:
        self.quantity = quantity
        super().__init__(f"Non-finite {quantity} in polygon geometry")


class DocumentError(PlanformError):
    """Errors related to scene documents."""

    pass


class DocumentLoadError(DocumentError):
    """Error loading a scene document."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load document '{path}': {reason}")


class DocumentSaveError(DocumentError):
    """Error writing a result document."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save document '{path}': {reason}")
