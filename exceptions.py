"""Errors raised by the transaction services and rendered by the API."""


class WalletError(Exception):
    """Base error carrying the HTTP status and the JSON body it renders to."""

    status_code = 500
    key = "message"
    default_message = "Internal server error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {self.key: self.message}


class ValidationError(WalletError):
    status_code = 400
    default_message = "All fields are required"


class NotFoundError(WalletError):
    status_code = 404
    default_message = "Transaction not found"


class StorageError(WalletError):
    status_code = 500
    default_message = "Database query failed"

    def __init__(self, message=None, key="message"):
        super().__init__(message)
        self.key = key
