"""Exceptions raised by the boatrace package."""


class BoatraceError(Exception):
    """Base exception for boatrace scraping failures."""


class ValidationError(BoatraceError, ValueError):
    """Caller supplied an argument that can never be fetched."""


class InvalidOperationError(ValidationError):
    """Operation name is not registered with the dispatcher."""

    def __init__(self, operation: object) -> None:
        self.operation = operation
        super().__init__(f"The scraper name for '{operation}' is invalid.")


class InvalidDateError(ValidationError):
    """Date could not be parsed."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"The race date for '{value}' is invalid.")


class InvalidStadiumCodeError(ValidationError):
    """Stadium code is malformed or outside 1-24."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"The race stadium code for '{value}' is invalid.")


class InvalidRaceNumberError(ValidationError):
    """Race number is malformed or outside 1-12."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"The race number for '{value}' is invalid.")


class FetchError(BoatraceError):
    """HTTP/network/transport layer failures (timeouts, connection errors, non-2xx, etc.)."""

    def __init__(self, url: str, message: str) -> None:
        self.url = url
        super().__init__(f"{message} ({url})")
