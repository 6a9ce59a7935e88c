import logging
import os
import platform
from dataclasses import dataclass
from functools import lru_cache

from humantyped import __version__

# Configure module-level logger
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    """Runtime settings read from the environment."""
    sdk_version: str
    platform: str
    platform_version: str
    log_level: str
    host: str
    port: int


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Builds the process-wide settings once.

    Reads configuration from environment variables:
    - HUMANTYPED_PLATFORM: Platform identifier in proofs (default: platform.system())
    - HUMANTYPED_PLATFORM_VERSION: Platform version in proofs (default: platform.release())
    - HUMANTYPED_LOG_LEVEL: Logging level for the local service (default: INFO)
    - HUMANTYPED_HOST: Bind address for the local service (default: 127.0.0.1)
    - HUMANTYPED_PORT: Port for the local service (default: 8000)
    """
    port_raw = os.getenv("HUMANTYPED_PORT", "8000")
    try:
        port = int(port_raw)
    except ValueError:
        logger.critical(f"HUMANTYPED_PORT must be an integer, got {port_raw!r}")
        raise

    settings = Settings(
        sdk_version=__version__,
        platform=os.getenv("HUMANTYPED_PLATFORM") or platform.system() or "unknown",
        platform_version=os.getenv("HUMANTYPED_PLATFORM_VERSION") or platform.release() or "unknown",
        log_level=os.getenv("HUMANTYPED_LOG_LEVEL", "INFO").upper(),
        host=os.getenv("HUMANTYPED_HOST", "127.0.0.1"),
        port=port,
    )
    logger.debug(f"Settings loaded: platform={settings.platform} {settings.platform_version}")
    return settings
