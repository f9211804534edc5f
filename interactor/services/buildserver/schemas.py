"""
Data schemas for build server requests.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class RequestKind(str, Enum):
    """Logical request queues exposed by the build server."""

    BUILD = "build"
    CANCEL = "cancel"
    STATE = "state"


class QueueRequest(BaseModel):
    """A pending build, cancel or state request."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str
    response_url: str = Field(alias="responseUrl")
