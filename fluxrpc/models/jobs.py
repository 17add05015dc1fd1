"""
fluxrpc - Release Job Models

Payloads of PostRelease and GetRelease.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from fluxrpc.models.services import ImageSpec, ServiceSpec

JobID = str


class ReleaseKind(str, Enum):
    """Whether a release is only planned or actually executed."""

    PLAN = "plan"
    EXECUTE = "execute"


class ReleaseJobParams(BaseModel):
    """Parameters of a release request.

    Sent as query parameters, not as a body: each service spec and each
    exclusion becomes its own repeated ``service=`` / ``exclude=`` pair.
    """

    service_specs: list[ServiceSpec] = Field(default_factory=list)
    image_spec: ImageSpec
    kind: ReleaseKind = ReleaseKind.PLAN
    excludes: list[str] = Field(default_factory=list)

    def query_params(self) -> list[str]:
        """Flatten to the key/value sequence expected by the PostRelease route."""
        args = ["image", self.image_spec, "kind", self.kind.value]
        for spec in self.service_specs:
            args.extend(["service", spec])
        for excluded in self.excludes:
            args.extend(["exclude", excluded])
        return args


class PostReleaseResponse(BaseModel):
    """Body returned by PostRelease."""

    model_config = ConfigDict(populate_by_name=True)

    status: str = ""
    release_id: JobID = Field(default="", alias="releaseId")


class Job(BaseModel):
    """State of a queued or finished release job."""

    model_config = ConfigDict(populate_by_name=True)

    id: JobID
    queue: str = ""
    method: str = ""
    params: dict[str, Any] = Field(default_factory=dict)
    scheduled_at: datetime | None = Field(default=None, alias="scheduledAt")
    submitted: datetime | None = None
    claimed: datetime | None = None
    finished: datetime | None = None
    log: list[str] = Field(default_factory=list)
    status: str = ""
    done: bool = False
    success: bool = False
    error: str = ""
