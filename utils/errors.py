from typing import Any, List, Optional


class MissingFieldError(Exception):
    def __init__(self, missing_fields: List[str], required_fields: List[str]):
        self.missing_fields = missing_fields
        self.required_fields = required_fields
        super().__init__(f"Missing required fields: {', '.join(required_fields)}")


class VerificationError(Exception):
    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Any = None,
        original_error: Optional[Exception] = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.details = details
        self.original_error = original_error


class GrantError(Exception):
    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message)
        self.original_error = original_error


class GooglePlayError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None, original_error: Optional[Exception] = None):
        super().__init__(message)
        self.status_code = status_code
        self.original_error = original_error
