"""
Wire Envelopes
==============

Pydantic models for the JSON bodies exchanged with /createTask and
/getTaskResult.

The service has used different field names across its history (error_code
vs errorId, taskId spellings). These models describe the schema served by
the live deployment: create and balance responses carry error_code /
error_description, result responses carry errorId.
"""

from typing import Annotated, Any, Dict, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


SUCCESS = 0


# A null code or status decodes like an absent one
ErrorCode = Annotated[int, BeforeValidator(lambda value: SUCCESS if value is None else value)]
Status = Annotated[str, BeforeValidator(lambda value: "" if value is None else value)]


# =============================================================================
# REQUESTS
# =============================================================================

class CreateTaskRequest(BaseModel):
    """Request body for /createTask"""
    api_key: str
    task: Dict[str, Any]


class GetTaskResultRequest(BaseModel):
    """Request body for /getTaskResult"""
    model_config = ConfigDict(populate_by_name=True)

    api_key: str
    task_id: str = Field(alias="taskId")


# =============================================================================
# RESPONSES
# =============================================================================

class CreateTaskResponse(BaseModel):
    """Response body for /createTask"""
    model_config = ConfigDict(populate_by_name=True)

    error_code: ErrorCode = SUCCESS
    error_description: Optional[str] = None
    task_id: Optional[str] = Field(None, alias="taskId")

    @property
    def ok(self) -> bool:
        return self.error_code == SUCCESS


class BalanceResponse(BaseModel):
    """Response body for /createTask with a getBalance task"""
    error_code: ErrorCode = SUCCESS
    error_description: Optional[str] = None
    wallet: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error_code == SUCCESS


class TaskResultResponse(BaseModel):
    """
    Response body for /getTaskResult.

    solution is left undecoded; it is only meaningful when error_id is
    SUCCESS and status is "ready", and may be absent otherwise.
    A null errorId or status decodes to its default, so a failed task
    still surfaces through its error id.
    """
    model_config = ConfigDict(populate_by_name=True)

    error_id: ErrorCode = Field(SUCCESS, alias="errorId")
    status: Status = ""
    solution: Any = None

    @property
    def ok(self) -> bool:
        return self.error_id == SUCCESS
