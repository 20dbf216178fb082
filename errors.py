"""
Domain errors raised by the application core.
Routers translate them to HTTP responses; the core never catches them itself.
"""


class ValidationError(ValueError):
    """Malformed or out-of-range input, rejected before any computation."""


class InvalidTransitionError(Exception):
    """Status change attempted on a finalized application."""

    def __init__(self, application_id: str, current_status: str, new_status: str):
        self.application_id = application_id
        self.current_status = current_status
        self.new_status = new_status
        super().__init__(
            f"Cannot change status of finalized application {application_id} "
            f"from {current_status} to {new_status}"
        )


class NotFoundError(LookupError):
    """Referenced applicant, lender or application does not exist."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")
