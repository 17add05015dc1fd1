"""
fluxrpc - Instance Configuration and Status Models

GetConfig returns secrets redacted; SetConfig accepts the unredacted
UnsafeInstanceConfig so a private key can be uploaded.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class GitConfig(BaseModel):
    """Git repository the instance syncs from."""

    model_config = ConfigDict(populate_by_name=True)

    url: str = ""
    path: str = ""
    branch: str = ""
    key: str = ""
    public_key: str = Field(default="", alias="publicKey")


class SlackConfig(BaseModel):
    """Slack notification target."""

    model_config = ConfigDict(populate_by_name=True)

    hook_url: str = Field(default="", alias="hookUrl")
    username: str = ""


class RegistryConfig(BaseModel):
    """Registry credentials keyed by registry host."""

    auths: dict[str, dict[str, str]] = Field(default_factory=dict)


class UnsafeInstanceConfig(BaseModel):
    """Instance configuration including secrets."""

    git: GitConfig = Field(default_factory=GitConfig)
    slack: SlackConfig = Field(default_factory=SlackConfig)
    registry: RegistryConfig = Field(default_factory=RegistryConfig)

    def hide_secrets(self) -> "InstanceConfig":
        """Return a copy with the git key and registry auths redacted."""
        git = self.git.model_copy(update={"key": "******" if self.git.key else ""})
        registry = RegistryConfig(
            auths={host: {"auth": "******"} for host in self.registry.auths}
        )
        return InstanceConfig(git=git, slack=self.slack, registry=registry)


class InstanceConfig(UnsafeInstanceConfig):
    """Instance configuration as returned by GetConfig."""


class FluxsvcStatus(BaseModel):
    """Status of the hosted service."""

    version: str = ""


class FluxdStatus(BaseModel):
    """Status of the daemon connected to the instance."""

    model_config = ConfigDict(populate_by_name=True)

    connected: bool = False
    last_seen: datetime | None = Field(default=None, alias="lastSeen")
    version: str = ""


class GitStatus(BaseModel):
    """Whether the git repository is configured and reachable."""

    configured: bool = False
    error: str = ""


class Status(BaseModel):
    """Overall instance status."""

    fluxsvc: FluxsvcStatus = Field(default_factory=FluxsvcStatus)
    fluxd: FluxdStatus = Field(default_factory=FluxdStatus)
    git: GitStatus = Field(default_factory=GitStatus)
