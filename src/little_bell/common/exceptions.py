"""Little Bell exception hierarchy."""


class LittleBellError(Exception):
    """Base exception for all Little Bell errors."""

    def __init__(self, message: str = "", code: str = "LITTLE_BELL_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class StorageFault(LittleBellError):
    """Raised when the underlying store cannot be opened, read or written."""

    def __init__(self, message: str = "Storage failure"):
        super().__init__(message, code="STORAGE_FAULT")


class NotFoundError(LittleBellError):
    """Raised when a tenant or email is absent, or owned by another tenant."""

    def __init__(self, message: str = "Not found"):
        super().__init__(message, code="NOT_FOUND")


class InvalidInputError(LittleBellError):
    """Raised for malformed identifiers, before any storage access."""

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message, code="INVALID_INPUT")
