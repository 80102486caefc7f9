"""Application builder for endpoint-class applications.

AppBuilder collects service registrations, creates the FastAPI application
with the built service provider attached, maps the registered endpoints and
runs the result with uvicorn.
"""

import logging
from typing import Any, Optional

import uvicorn
from fastapi import FastAPI

from reprendpoint.config import ReprEndpointsConfig
from reprendpoint.discovery import ModuleRef
from reprendpoint.logging_config import LoggingConfigurator
from reprendpoint.registration import (
    add_repr_endpoint_types,
    add_repr_endpoints,
    map_repr_endpoints,
)
from reprendpoint.services.collection import ServiceCollection
from reprendpoint.services.hosting import attach_service_provider


class AppBuilder:
    """Builds a FastAPI application from registered endpoint classes.

    Attributes:
        config: Application configuration
        services: Service collection endpoints and collaborators are added to
        _logger: Logger instance for app building operations
    """

    def __init__(
        self,
        config: Optional[ReprEndpointsConfig] = None,
        services: Optional[ServiceCollection] = None,
    ) -> None:
        """Initialize the AppBuilder.

        Args:
            config: Application configuration (defaults to ReprEndpointsConfig())
            services: Existing service collection to build on
        """
        self.config = config or ReprEndpointsConfig()
        self.services = services if services is not None else ServiceCollection()
        self._logger = logging.getLogger(__name__)

    def add_endpoints(self, *modules: ModuleRef) -> "AppBuilder":
        """Register endpoints found in ``modules``.

        Falls back to ``config.modules`` and then to every loaded module.
        """
        add_repr_endpoints(
            self.services,
            *(modules or self.config.modules),
            lifetime=self.config.lifetime,
        )
        return self

    def add_endpoint_types(self, *endpoint_types: Any) -> "AppBuilder":
        add_repr_endpoint_types(self.services, *endpoint_types, lifetime=self.config.lifetime)
        return self

    def create_app(self, **app_kwargs: Any) -> FastAPI:
        """Create the FastAPI application with the service provider attached.

        Args:
            **app_kwargs: Extra FastAPI arguments, overriding the config

        Returns:
            FastAPI application without endpoints mapped
        """
        LoggingConfigurator.configure(self.config.log_level)

        kwargs = {
            "title": self.config.title,
            "description": self.config.description,
            "version": self.config.version,
            "docs_url": self.config.docs_url,
            "debug": self.config.debug,
            **app_kwargs,
        }
        app = FastAPI(**kwargs)
        attach_service_provider(app, self.services.build_service_provider())

        self._logger.debug(f"FastAPI app created: {self.config.title} v{self.config.version}")
        return app

    def build(self, **app_kwargs: Any) -> FastAPI:
        """Create the application and map every registered endpoint."""
        return map_repr_endpoints(self.create_app(**app_kwargs))

    def run(self, app: Optional[FastAPI] = None, **uvicorn_kwargs: Any) -> None:
        """Run the application using uvicorn.

        Args:
            app: Application to serve (built with ``build()`` if omitted)
            **uvicorn_kwargs: Additional uvicorn parameters
        """
        if app is None:
            app = self.build()

        uvicorn_config = {
            "host": self.config.host,
            "port": self.config.port,
            "log_level": self.config.log_level,
            **uvicorn_kwargs,
        }
        self._logger.info(
            f"Starting {self.config.title} on {uvicorn_config['host']}:{uvicorn_config['port']}"
        )
        uvicorn.run(app, **uvicorn_config)


__all__ = ["AppBuilder"]
