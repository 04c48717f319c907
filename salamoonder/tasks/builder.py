"""
Request Builder
Shapes option records into /createTask and /getTaskResult envelopes
"""

from typing import Any, Dict, Mapping, Union

from ..api.envelopes import CreateTaskRequest, GetTaskResultRequest
from .models import TaskOptions


def build_create_request(
    api_key: str,
    tag: str,
    options: Union[TaskOptions, Mapping[str, Any]],
) -> CreateTaskRequest:
    """
    Build a /createTask envelope.

    The option record is serialized first and "type" is assigned last, so
    the tag always wins over an option field that happens to be called
    "type".

    Args:
        api_key: Account credential
        tag: Server tag of the task variant
        options: Option record, or already-serialized task fields

    Returns:
        CreateTaskRequest ready to be dumped as JSON
    """
    if isinstance(options, TaskOptions):
        task: Dict[str, Any] = options.task_fields()
    else:
        task = dict(options)

    task["type"] = tag

    return CreateTaskRequest(api_key=api_key, task=task)


def build_result_request(api_key: str, task_id: str) -> GetTaskResultRequest:
    """Build a /getTaskResult envelope"""
    return GetTaskResultRequest(api_key=api_key, task_id=task_id)
