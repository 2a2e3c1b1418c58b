class CreditAppError(Exception):
    """Base class for errors raised by the credit services."""


class ValidationError(CreditAppError):
    """Input is malformed or out of range. `errors` maps field name -> messages."""

    def __init__(self, errors):
        self.errors = errors
        super().__init__(errors)


class NotFoundError(CreditAppError):
    pass


class ConflictError(CreditAppError):
    """A unique constraint (cpf, email) would be violated."""
