"""
Result Poller
=============

Fetches a result envelope for a task id and turns it into a typed solution.

Classification order:
1. error_id != 0            -> TaskError
2. status != "ready"        -> NotReady (poll again later, not fatal)
3. solution shape mismatch  -> DecodeError
otherwise the decoded solution is returned.

A single fetch is one request; looping until ready is up to the caller.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Type

from pydantic import ValidationError

from ..api.envelopes import TaskResultResponse
from ..api.transport import Transport
from ..core.errors import DecodeError, NotReady, TaskError
from .builder import build_result_request
from .models import TaskStatus, TaskSolution, TaskVariant
from .registry import spec_for

logger = logging.getLogger(__name__)

RESULT_PATH = "/getTaskResult"

# Statuses the service reports while a task is still running
IN_PROGRESS = frozenset({TaskStatus.PENDING.value, TaskStatus.PROCESSING.value})


async def fetch_result(
    transport: Transport,
    api_key: str,
    task_id: str,
    timeout: Optional[float] = None,
) -> TaskResultResponse:
    """
    Fetch the raw result envelope of a task.

    Raises:
        TaskError: The response carries a non-success errorId
        DecodeError: The response is not a result envelope
    """
    request = build_result_request(api_key, task_id)
    data = await transport.post_json(RESULT_PATH, request.model_dump(by_alias=True), timeout=timeout)

    try:
        envelope = TaskResultResponse.model_validate(data)
    except ValidationError as e:
        raise DecodeError(f"decode result envelope: {e}") from e

    if not envelope.ok:
        logger.warning(f"Task {task_id} failed with error id {envelope.error_id}")
        raise TaskError(task_id, envelope.error_id)

    return envelope


def decode_balance(value: Any) -> Decimal:
    """
    Decode a balance amount encoded as a decimal string.

    Raises:
        DecodeError: value is not a string holding a finite decimal number
    """
    if not isinstance(value, str):
        raise DecodeError(f"balance must be a decimal string, got {type(value).__name__}")
    try:
        amount = Decimal(value.strip())
    except InvalidOperation as e:
        raise DecodeError(f"balance is not a decimal number: {value!r}") from e
    if not amount.is_finite():
        raise DecodeError(f"balance is not a finite number: {value!r}")
    return amount


def project(
    envelope: TaskResultResponse,
    variant: TaskVariant,
    task_id: str = "",
    solution_model: Optional[Type[TaskSolution]] = None,
) -> Any:
    """
    Classify a result envelope and decode its solution.

    Args:
        envelope: Result envelope from fetch_result
        variant: Variant the task was created as
        task_id: Used for error reporting only
        solution_model: Overrides the variant's default solution record
            (e.g. Reese84SubmitPayloadSolution)

    Returns:
        An instance of the solution record, or a Decimal for BALANCE

    Raises:
        UnsupportedVariant: variant is not a TaskVariant
        TaskError: envelope carries a non-success errorId
        NotReady: the task has not finished
        DecodeError: the solution does not match the expected shape
    """
    spec = spec_for(variant)

    if not envelope.ok:
        raise TaskError(task_id, envelope.error_id)

    if envelope.status != TaskStatus.READY.value:
        if envelope.status in IN_PROGRESS:
            logger.debug(f"Task {task_id} not ready: {envelope.status!r}")
        else:
            logger.info(f"Task {task_id} has unrecognized status {envelope.status!r}, treating as not ready")
        raise NotReady(task_id, envelope.status)

    model = solution_model or spec.solution
    if model is None:
        return decode_balance(envelope.solution)

    if not isinstance(envelope.solution, dict):
        raise DecodeError(
            f"{model.__name__}: expected a JSON object, got {type(envelope.solution).__name__}"
        )

    try:
        return model.model_validate(envelope.solution)
    except ValidationError as e:
        raise DecodeError(f"{model.__name__}: {e}") from e
