"""Configuration model for reprendpoint applications.

Values can be given directly or loaded from ``REPR_ENDPOINTS_*`` environment
variables with ``ReprEndpointsConfig.from_env()``.
"""

import logging
import os
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from reprendpoint.services.collection import ServiceLifetime

ENV_PREFIX = "REPR_ENDPOINTS_"

_LOG_LEVELS = ("critical", "error", "warning", "info", "debug")

logger = logging.getLogger(__name__)


class ReprEndpointsConfig(BaseModel):
    """Configuration model for an endpoint application.

    Attributes:
        title: API title
        description: API description
        version: API version
        debug: Enable debug mode
        docs_url: OpenAPI documentation URL
        host: Server host address
        port: Server port number
        log_level: Logging level
        lifetime: Default service lifetime for endpoint classes
        modules: Modules scanned for endpoint classes
    """

    # API Configuration
    title: str = "reprendpoint API"
    description: str = "API built from endpoint classes"
    version: str = "1.0.0"
    debug: bool = False
    docs_url: Optional[str] = "/docs"

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 8000

    # Logging Configuration
    log_level: str = "info"

    # Endpoint Registration
    lifetime: ServiceLifetime = ServiceLifetime.TRANSIENT
    modules: List[str] = Field(default_factory=list)

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().lower()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @field_validator("modules", mode="before")
    @classmethod
    def _split_modules(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [m.strip() for m in value.split(",") if m.strip()]
        return value

    @classmethod
    def from_env(cls, **overrides: Any) -> "ReprEndpointsConfig":
        """Build a config from environment variables.

        Environment Variables:
            REPR_ENDPOINTS_TITLE: API title
            REPR_ENDPOINTS_DEBUG: "true" to enable debug mode
            REPR_ENDPOINTS_HOST: Server host
            REPR_ENDPOINTS_PORT: Server port
            REPR_ENDPOINTS_LOG_LEVEL: Logging level (default: "info")
            REPR_ENDPOINTS_LIFETIME: transient, scoped or singleton
            REPR_ENDPOINTS_MODULES: Comma-separated modules to scan

        Args:
            **overrides: Values taking precedence over the environment
        """
        values: Dict[str, Any] = {}
        for field in ("title", "debug", "host", "port", "log_level", "lifetime", "modules"):
            raw = os.getenv(ENV_PREFIX + field.upper())
            if raw is not None:
                values[field] = raw
        if "debug" in values:
            values["debug"] = values["debug"].lower() == "true"
        values.update(overrides)
        logger.debug(f"Loaded configuration keys from environment: {sorted(values)}")
        return cls(**values)


__all__ = ["ENV_PREFIX", "ReprEndpointsConfig"]
