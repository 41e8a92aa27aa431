from __future__ import annotations

from typing import Any, Dict, Iterable


class JoblyError(Exception):
    """
    Base error carrying an HTTP status.

    The API error handler turns any JoblyError into
    {"error": {"message": ..., "status": ...}}.
    """

    status: int = 500
    default_message: str = "Internal Server Error"

    def __init__(self, message: str | None = None, status: int | None = None):
        self.message = message or self.default_message
        if status is not None:
            self.status = status
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": {"message": self.message, "status": self.status}}


class BadRequestError(JoblyError):
    status = 400
    default_message = "Bad Request"


class EmptyInputError(BadRequestError):
    default_message = "No data"


class InvalidFilterKeyError(BadRequestError):
    def __init__(self, keys: Iterable[str]):
        self.keys = sorted(keys)
        super().__init__(f"Invalid filter parameter(s): {', '.join(self.keys)}")


class InvalidFilterValueError(BadRequestError):
    def __init__(self, key: str, value: Any):
        self.key = key
        self.value = value
        super().__init__(f"Invalid value for {key}: {value!r}")


class InvalidRangeError(BadRequestError):
    default_message = "Min value is greater than Max value"


# 401: who are you? 403: I know who you are, and the answer is still no.
class UnauthorizedError(JoblyError):
    status = 401
    default_message = "Unauthorized"


class ForbiddenError(JoblyError):
    status = 403
    default_message = "Forbidden"


class NotFoundError(JoblyError):
    status = 404
    default_message = "Not Found"


class ConfigError(RuntimeError):
    pass
