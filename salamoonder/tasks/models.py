"""
Task Models
===========

The closed set of task variants and, for each one, the option record sent
to the server and the solution record it returns.

Options and solutions are pydantic models whose field aliases are the wire
keys. Both accept the Python field name or the wire key on construction:

    KasadaOptions(pjs="https://site/p.js", cd_only=True)
    KasadaSolution.model_validate({"user-agent": "...", ...})

Optional identifiers (deviceId, clientId) default to "" and are always
serialized, so an unset identifier reaches the server as an empty string.
"""

from enum import Enum
from typing import Dict, Any

from pydantic import BaseModel, ConfigDict, Field


class TaskVariant(Enum):
    """Supported task kinds"""
    KASADA = "kasada"
    REESE84 = "reese84"
    UTMVC = "utmvc"
    TWITCH_SCRAPER = "twitch_scraper"
    TWITCH_INTEGRITY = "twitch_integrity"
    TWITCH_PUBLIC_INTEGRITY = "twitch_public_integrity"  # deprecated
    TWITCH_LOCAL_INTEGRITY = "twitch_local_integrity"  # deprecated
    BALANCE = "balance"


class TaskStatus(Enum):
    """Task status values reported by getTaskResult"""
    PENDING = "pending"
    PROCESSING = "processing"
    READY = "ready"


# =============================================================================
# BASE MODELS
# =============================================================================

class TaskOptions(BaseModel):
    """Base class for the option record of a task variant"""
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="forbid")

    def task_fields(self) -> Dict[str, Any]:
        """Serialize to the wire keys of the task object (without "type")"""
        return self.model_dump(by_alias=True)


class TaskSolution(BaseModel):
    """Base class for the solution record of a task variant"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)


# =============================================================================
# KASADA
# https://apidocs.salamoonder.com/tasks/kasada-solver
# =============================================================================

class KasadaOptions(TaskOptions):
    pjs: str
    cd_only: bool = Field(False, alias="cdOnly")


class KasadaSolution(TaskSolution):
    user_agent: str = Field(alias="user-agent")
    x_is_human: str = Field(alias="x-is-human")
    x_kpsdk_cd: str = Field(alias="x-kpsdk-cd")
    x_kpsdk_cr: str = Field(alias="x-kpsdk-cr")
    x_kpsdk_ct: str = Field(alias="x-kpsdk-ct")
    x_kpsdk_r: str = Field(alias="x-kpsdk-r")
    x_kpsdk_st: str = Field(alias="x-kpsdk-st")


# =============================================================================
# INCAPSULA
# https://apidocs.salamoonder.com/tasks/incapsula/reese84
# https://apidocs.salamoonder.com/tasks/incapsula/utmvc
# =============================================================================

class Reese84Options(TaskOptions):
    website: str
    submit_payload: bool = False


class Reese84Solution(TaskSolution):
    """Solution when the task was created with submit_payload=False"""
    payload: str
    user_agent: str = Field(alias="user-agent")
    accept_language: str = Field(alias="accept-language")


class Reese84SubmitPayloadSolution(TaskSolution):
    """Solution when the task was created with submit_payload=True"""
    token: str
    renew_in_sec: int = Field(alias="renewInSec")
    user_agent: str = Field(alias="user-agent")


class UtmvcOptions(TaskOptions):
    website: str


class UtmvcSolution(TaskSolution):
    user_agent: str = Field(alias="user-agent")
    utmvc: str


# =============================================================================
# TWITCH
# https://apidocs.salamoonder.com/tasks/twitch/scraper
# https://apidocs.salamoonder.com/tasks/twitch/integrity
# =============================================================================

class TwitchScraperOptions(TaskOptions):
    pass


class TwitchScraperSolution(TaskSolution):
    biography: str
    profile_picture: str
    username: str


class TwitchIntegrityOptions(TaskOptions):
    access_token: str
    device_id: str = Field("", alias="deviceId")
    client_id: str = Field("", alias="clientId")


class TwitchIntegritySolution(TaskSolution):
    device_id: str
    integrity_token: str
    user_agent: str = Field(alias="user-agent")
    client_id: str = Field(alias="client-id")


class TwitchPublicIntegrityOptions(TaskOptions):
    """
    Deprecated: superseded by TwitchIntegrityOptions, which no longer
    takes a proxy.
    """
    proxy: str
    access_token: str
    device_id: str = Field("", alias="deviceId")
    client_id: str = Field("", alias="clientId")


class TwitchPublicIntegritySolution(TaskSolution):
    device_id: str
    proxy: str
    integrity_token: str
    user_agent: str = Field(alias="user-agent")
    client_id: str = Field(alias="client-id")


class TwitchLocalIntegrityOptions(TaskOptions):
    """
    Deprecated: the service removed the local integrity task. Accounts
    can be generated with a Kasada task instead.
    """
    proxy: str
    device_id: str = Field("", alias="deviceId")
    client_id: str = Field("", alias="clientId")


class TwitchLocalIntegritySolution(TaskSolution):
    device_id: str
    integrity_token: str
    proxy: str
    user_agent: str = Field(alias="user-agent")
    client_id: str = Field(alias="client-id")


# =============================================================================
# BALANCE
# https://apidocs.salamoonder.com/tasks/get-balance
# =============================================================================

class BalanceOptions(TaskOptions):
    pass
