"""
fluxrpc - Client Protocols

Structural interface of the Flux service client so callers can depend on
the operations rather than on RPCClient (and swap in a fake in their tests).
"""

from typing import Protocol, runtime_checkable

from fluxrpc.models import (
    HistoryEntry,
    ImageStatus,
    InstanceConfig,
    Job,
    JobID,
    ReleaseJobParams,
    ServiceID,
    ServiceSpec,
    ServiceStatus,
    Status,
    UnsafeInstanceConfig,
)


@runtime_checkable
class ClientServiceProtocol(Protocol):
    """Remote operations offered by the Flux service."""

    def list_services(self, namespace: str = "") -> list[ServiceStatus]: ...

    def list_images(self, service_spec: ServiceSpec) -> list[ImageStatus]: ...

    def post_release(self, params: ReleaseJobParams) -> JobID: ...

    def get_release(self, job_id: JobID) -> Job: ...

    def automate(self, service_id: ServiceID) -> None: ...

    def deautomate(self, service_id: ServiceID) -> None: ...

    def lock(self, service_id: ServiceID) -> None: ...

    def unlock(self, service_id: ServiceID) -> None: ...

    def history(self, service_spec: ServiceSpec) -> list[HistoryEntry]: ...

    def get_config(self) -> InstanceConfig: ...

    def set_config(self, config: UnsafeInstanceConfig) -> None: ...

    def generate_deploy_key(self) -> None: ...

    def status(self) -> Status: ...
