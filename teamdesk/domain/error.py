"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class DuplicateUserError(DomainError):
    """Raised when an active user already exists for an email."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"User already exists: {email}")


class TokenError(DomainError):
    """Base error for invitation token lookups and transitions."""

    def __init__(self, message: str, token: str):
        self.token = token
        super().__init__(message)


class TokenNotFoundError(TokenError):
    """Raised when no verification matches a token."""

    def __init__(self, token: str):
        super().__init__("Invitation not found", token)


class TokenExpiredError(TokenError):
    """Raised when a pending verification is past its expiry."""

    def __init__(self, token: str):
        super().__init__("Invitation has expired", token)


class TokenAlreadyConsumedError(TokenError):
    """Raised when a verification has already been consumed."""

    def __init__(self, token: str):
        super().__init__("Invitation has already been used", token)


class EmailDeliveryError(DomainError):
    """Invitation email could not be delivered.

    Never propagated to the inviting caller; logged and recorded on the
    delivery outcome.
    """

    def __init__(self, recipient: str, attempts: int, reason: str):
        self.recipient = recipient
        self.attempts = attempts
        self.reason = reason
        super().__init__(
            f"Email to {recipient} failed after {attempts} attempt(s): {reason}"
        )


class PersistenceError(DomainError):
    """Raised when a collection cannot be accessed or modified."""

    def __init__(self, collection: str, reason: str):
        self.collection = collection
        self.reason = reason
        super().__init__(f"{collection}: {reason}")


class TransportError(DomainError):
    """Email transport failure reported by an EmailTransport."""

    pass


class TransientTransportError(TransportError):
    """Failure that may succeed on retry (connection, auth, 4xx replies)."""

    pass


class PermanentTransportError(TransportError):
    """Failure that will not succeed on retry (refused recipient, 5xx)."""

    pass
