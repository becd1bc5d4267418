class CRMError(Exception):
    """Base class for errors raised by the CRM services."""


class InvalidInput(CRMError):
    def __init__(self, errors: list[str] | str) -> None:
        if isinstance(errors, str):
            errors = [errors]
        self.errors = errors
        super().__init__("; ".join(errors))


class NotFound(CRMError):
    def __init__(self, entity: str, entity_id: object) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class InvalidTransition(CRMError):
    pass


class SheetSyncError(CRMError):
    pass


class DocumentRenderError(CRMError):
    pass
