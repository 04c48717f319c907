"""
API Module
Wire envelopes and HTTP transport
"""

from .envelopes import (
    CreateTaskRequest,
    GetTaskResultRequest,
    CreateTaskResponse,
    BalanceResponse,
    TaskResultResponse,
)
from .transport import Transport

__all__ = [
    'CreateTaskRequest',
    'GetTaskResultRequest',
    'CreateTaskResponse',
    'BalanceResponse',
    'TaskResultResponse',
    'Transport',
]
