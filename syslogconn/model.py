from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .core.transport.defaults import NO_DEADLINE
from .core.transport.interfaces import TransportKind


class TLSConfig(BaseModel):
    """
    TLS material and verification policy for ``tls`` connections.

    Field names follow the JSON keys callers send (``cert``, ``key``,
    ``serverName``, ``insecureSkipVerify``); the snake_case attribute names are
    accepted as well.
    """

    model_config = ConfigDict(
        frozen=True, validate_by_name=True, validate_by_alias=True
    )

    ca: str | None = Field(
        None,
        description="PEM-encoded CA bundle. When set it is the only trust root.",
    )
    client_cert: str | None = Field(
        None, alias="cert", description="PEM-encoded client certificate."
    )
    client_key: str | None = Field(
        None,
        alias="key",
        description="PEM-encoded private key for the client certificate.",
    )
    server_name: str | None = Field(
        None,
        alias="serverName",
        description="Server name used for SNI and hostname verification.",
    )
    insecure_skip_verify: bool = Field(
        False,
        alias="insecureSkipVerify",
        description="Skip certificate chain and hostname verification.",
    )

    @field_validator("ca", "client_cert", "client_key", "server_name", mode="before")
    @classmethod
    def _empty_as_missing(cls, value: Any) -> Any:
        if value == "":
            return None
        return value

    @property
    def has_client_certificate(self) -> bool:
        """Check if any client certificate material was supplied."""
        return bool(self.client_cert or self.client_key)


class SyslogConfig(BaseModel):
    """
    Declarative description of how to reach a syslog sink.

    Immutable once built. ``transport`` values other than ``udp``, ``tcp`` and
    ``tls`` fall back to ``udp``.
    """

    model_config = ConfigDict(
        frozen=True, validate_by_name=True, validate_by_alias=True
    )

    transport: TransportKind = Field(
        TransportKind.UDP, description="Transport protocol: udp, tcp or tls."
    )
    timeout: int = Field(
        NO_DEADLINE,
        ge=0,
        description="Seconds until the connection deadline. 0 disables it.",
    )
    tls: TLSConfig | None = Field(
        None, description="TLS configuration, required when transport is tls."
    )

    @field_validator("transport", mode="before")
    @classmethod
    def _coerce_transport(cls, value: Any) -> TransportKind:
        return TransportKind.parse(value)

    @field_validator("timeout", mode="before")
    @classmethod
    def _missing_timeout(cls, value: Any) -> Any:
        return NO_DEADLINE if value is None else value

    @model_validator(mode="after")
    def _require_tls_section(self) -> "SyslogConfig":
        if self.transport is TransportKind.TLS and self.tls is None:
            raise ValueError("transport 'tls' requires a tls configuration section")
        return self

    @classmethod
    def coerce(
        cls, config: "SyslogConfig | Mapping[str, Any] | None"
    ) -> "SyslogConfig":
        """Build a config from a model, a JSON-style mapping or ``None``."""
        if config is None:
            return cls()
        if isinstance(config, cls):
            return config
        return cls.model_validate(config)
