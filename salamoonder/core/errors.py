"""
Client Errors
=============

Every failure the client can report derives from SalamoonderError.
Nothing here is retried or suppressed internally: the caller decides
whether to poll again (NotReady), give up (ServerError) or fix its input.
"""

from typing import Any, Optional


class SalamoonderError(Exception):
    """Base class for all client errors"""
    pass


class ConfigError(SalamoonderError):
    """Missing or invalid configuration (e.g. no API key)"""
    pass


class TransportError(SalamoonderError):
    """
    The request never produced a usable API response.

    Raised for connection failures and non-200 HTTP statuses.
    """

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class TransportTimeout(TransportError):
    """The request did not complete within its timeout"""
    pass


class ServerError(SalamoonderError):
    """The API answered with a non-success error code"""

    def __init__(self, code: int, message: str = ""):
        super().__init__(f"API error {code}: {message}" if message else f"API error {code}")
        self.code = code
        self.message = message


class TaskError(ServerError):
    """A poll for a task result answered with a non-success error id"""

    def __init__(self, task_id: str, code: int, message: str = ""):
        super().__init__(code, message or f"task error id: {code}")
        self.task_id = task_id


class NotReady(SalamoonderError):
    """
    The task exists but has not finished yet.

    Not fatal: poll the same task id again later.
    """

    def __init__(self, task_id: str, status: str):
        super().__init__(f"task {task_id} not ready (status={status!r})")
        self.task_id = task_id
        self.status = status


class DecodeError(SalamoonderError):
    """A response body does not match the expected shape"""
    pass


class UnsupportedVariant(SalamoonderError):
    """A value outside the closed set of task variants was supplied"""

    def __init__(self, value: Any):
        super().__init__(f"unsupported task variant: {value!r}")
        self.value = value


class NotFound(SalamoonderError):
    """The requested item (e.g. a p.js script reference) does not exist"""
    pass
