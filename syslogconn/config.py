from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.transport.defaults import DEFAULT_ADDRESS, DEFAULT_TRANSPORT, NO_DEADLINE


class SyslogSettings(BaseSettings):
    """Process-level defaults for the syslogconn command line.

    Read from ``SYSLOGCONN_*`` environment variables or a ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="SYSLOGCONN_", env_file=".env", extra="ignore"
    )

    address: str = Field(
        DEFAULT_ADDRESS, description="Default syslog sink address (host:port)."
    )
    transport: str = Field(
        DEFAULT_TRANSPORT, description="Default transport: udp, tcp or tls."
    )
    timeout: int = Field(
        NO_DEADLINE,
        ge=0,
        description="Default connection deadline in seconds. 0 disables it.",
    )
    log_level: str = Field("WARNING", description="Logging level for the CLI.")
    debug_scopes: list[str] = Field(
        default_factory=list,
        description='Modules logged at DEBUG regardless of log_level, e.g. ["tls"].',
    )
