"""
Domain errors raised by the studio services.

Each error carries the HTTP status and the user-facing message the API
answers with; the app renders them through a single exception handler.
"""


class StudioError(Exception):
    status_code = 500
    default_message = "Something went wrong"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(StudioError):
    status_code = 404
    default_message = "Not found"


class AuthenticationError(StudioError):
    status_code = 401
    default_message = "Not authenticated"


class PermissionDeniedError(StudioError):
    status_code = 403
    default_message = "You do not have access to this project"


class PersistenceError(StudioError):
    """A store write failed; nothing was applied locally."""
    status_code = 500
    default_message = "Failed to save changes"


class InvalidFundingAmountError(StudioError):
    status_code = 422
    default_message = "Funding amount must be positive"


class FundingConflictError(StudioError):
    """The bonding curve moved between reading the price and writing it."""
    status_code = 409
    default_message = "The price changed while funding, please try again"


class VariationError(StudioError):
    default_message = "Failed to generate variations"


class RateLimitedError(VariationError):
    status_code = 429
    default_message = "Rate limits exceeded, please try again later."


class PaymentRequiredError(VariationError):
    status_code = 402
    default_message = "Payment required, please add funds to your workspace."


class ProvenanceImmutableError(StudioError):
    status_code = 409
    default_message = "Provenance entries cannot be modified"
