"""
fluxrpc - Service and Image Models

Payloads returned by ListServices, ListImages and History.
Service IDs are ``namespace/name`` strings; a service spec is either a
service ID or the literal ``<all>``.
"""

from datetime import datetime
from typing import Final

from pydantic import BaseModel, ConfigDict, Field

ServiceID = str
ServiceSpec = str
ImageSpec = str

SERVICE_SPEC_ALL: Final[ServiceSpec] = "<all>"
IMAGE_SPEC_LATEST: Final[ImageSpec] = "<all latest>"


class ImageDescription(BaseModel):
    """A container image reference with its creation time, when known."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    created_at: datetime | None = Field(default=None, alias="createdAt")


class Container(BaseModel):
    """A container of a service and the images available for it."""

    name: str
    current: ImageDescription
    available: list[ImageDescription] = Field(default_factory=list)


class ServiceStatus(BaseModel):
    """Status of a single service as reported by ListServices."""

    id: ServiceID
    containers: list[Container] = Field(default_factory=list)
    status: str = ""
    automated: bool = False
    locked: bool = False


class ImageStatus(BaseModel):
    """Images available for each container of a service."""

    id: ServiceID
    containers: list[Container] = Field(default_factory=list)


class HistoryEntry(BaseModel):
    """One event in a service's history."""

    stamp: datetime
    type: str = ""
    data: str = ""
