"""Pydantic models for the JSON payloads exchanged with the Flux service."""

from fluxrpc.models.instance import (
    FluxdStatus,
    FluxsvcStatus,
    GitConfig,
    GitStatus,
    InstanceConfig,
    RegistryConfig,
    SlackConfig,
    Status,
    UnsafeInstanceConfig,
)
from fluxrpc.models.jobs import (
    Job,
    JobID,
    PostReleaseResponse,
    ReleaseJobParams,
    ReleaseKind,
)
from fluxrpc.models.services import (
    IMAGE_SPEC_LATEST,
    SERVICE_SPEC_ALL,
    Container,
    HistoryEntry,
    ImageDescription,
    ImageSpec,
    ImageStatus,
    ServiceID,
    ServiceSpec,
    ServiceStatus,
)

__all__ = [
    "IMAGE_SPEC_LATEST",
    "SERVICE_SPEC_ALL",
    "Container",
    "FluxdStatus",
    "FluxsvcStatus",
    "GitConfig",
    "GitStatus",
    "HistoryEntry",
    "ImageDescription",
    "ImageSpec",
    "ImageStatus",
    "InstanceConfig",
    "Job",
    "JobID",
    "PostReleaseResponse",
    "RegistryConfig",
    "ReleaseJobParams",
    "ReleaseKind",
    "ServiceID",
    "ServiceSpec",
    "ServiceStatus",
    "SlackConfig",
    "Status",
    "UnsafeInstanceConfig",
]
