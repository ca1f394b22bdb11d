"""
Exceptions raised by the service layer and translated to HTTP errors by the routes
"""
from typing import List, Optional


class ServiceError(Exception):
    """Base class for service failures"""


class NotFoundError(ServiceError):
    """Requested user or conversation does not exist"""


class DuplicateUserError(ServiceError):
    """A user with the same email is already registered"""


class InputValidationError(ServiceError):
    """Request data failed validation; carries every message found"""

    def __init__(self, messages: List[str]):
        super().__init__("; ".join(messages))
        self.messages = messages


class AssistantError(ServiceError):
    """The language model could not produce a usable reply"""

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.detail = detail
