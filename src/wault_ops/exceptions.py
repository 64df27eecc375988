"""Exception hierarchy for the Wault vault operations toolkit."""

from typing import Any


class WaultOpsError(Exception):
    """Base exception for all vault operation errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(WaultOpsError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value


class NetworkError(WaultOpsError):
    """Raised when network/connection issues occur."""

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.endpoint = endpoint


class TransactionError(WaultOpsError):
    """Raised when a transaction cannot be submitted or is reverted."""

    def __init__(
        self,
        message: str,
        action: str | None = None,
        tx_hash: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.action = action
        self.tx_hash = tx_hash


class ArtifactError(WaultOpsError):
    """Raised when a compiled contract artifact is missing or malformed."""

    def __init__(
        self,
        message: str,
        contract: str | None = None,
        path: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.contract = contract
        self.path = path
