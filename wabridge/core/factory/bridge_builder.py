"""
BridgeBuilder - FastAPI Application Factory

Assembles the gateway's FastAPI application from plugins, middleware,
routers, exception handlers and lifespan hooks.
"""

from collections.abc import Callable
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI

from ..logging.logger import get_app_logger

if TYPE_CHECKING:
    from .plugin import BridgePlugin


class BridgeBuilder:
    """
    Fluent builder for the gateway application.

    Supports:
    - Plugin system with lifecycle management
    - Priority-based middleware ordering
    - Priority-ordered startup/shutdown hooks

    Example:
        app = (BridgeBuilder()
            .add_plugin(BridgeCorePlugin())
            .add_plugin(MessageLogPlugin("sqlite+aiosqlite:///./wabridge.db"))
            .configure(title="My Gateway")
            .build())
    """

    def __init__(self):
        self.plugins: list[BridgePlugin] = []
        self.middlewares: list[tuple[type, dict, int]] = []  # (class, kwargs, priority)
        self.routers: list[tuple[Any, dict]] = []  # (router, include_kwargs)
        self.exception_handlers: list[tuple[Any, Callable]] = []
        self.startup_hooks: list[tuple[Callable, int]] = []  # (hook, priority)
        self.shutdown_hooks: list[tuple[Callable, int]] = []  # (hook, priority)
        self.config_overrides: dict[str, Any] = {}

    def add_plugin(self, plugin: "BridgePlugin") -> "BridgeBuilder":
        self.plugins.append(plugin)
        return self

    def add_middleware(
        self, middleware_class: type, priority: int = 50, **kwargs: Any
    ) -> "BridgeBuilder":
        """
        Add middleware to the application with priority ordering.

        Lower numbers run first (outer middleware), higher numbers run
        closer to the routes. Default priority is 50.
        """
        self.middlewares.append((middleware_class, kwargs, priority))
        return self

    def add_router(self, router: Any, **kwargs: Any) -> "BridgeBuilder":
        self.routers.append((router, kwargs))
        return self

    def add_exception_handler(
        self, exc_class_or_status: Any, handler: Callable
    ) -> "BridgeBuilder":
        self.exception_handlers.append((exc_class_or_status, handler))
        return self

    def add_startup_hook(self, hook: Callable, priority: int = 50) -> "BridgeBuilder":
        """
        Add a startup hook. Lower priority numbers execute first.

        Priority Guidelines:
        - 10: Core system initialization (logging, HTTP session, messaging client)
        - 20: Infrastructure (databases, external services)
        - 50: User hooks (default)
        """
        self.startup_hooks.append((hook, priority))
        return self

    def add_shutdown_hook(self, hook: Callable, priority: int = 50) -> "BridgeBuilder":
        """
        Add a shutdown hook. Higher priority numbers execute first.

        Priority Guidelines:
        - 90: Core system cleanup (drain events, close HTTP session) - runs first
        - 50: User hooks (default)
        - 20: Infrastructure cleanup (databases) - runs after pending events settle
        """
        self.shutdown_hooks.append((hook, priority))
        return self

    def configure(self, **overrides: Any) -> "BridgeBuilder":
        """Override default FastAPI constructor arguments."""
        self.config_overrides.update(overrides)
        return self

    def build(self) -> FastAPI:
        """
        Build the configured FastAPI application.

        1. Configure plugins (sync registration only)
        2. Create FastAPI app with unified lifespan
        3. Add middleware, exception handlers and routers

        Returns:
            FastAPI application with properly configured plugins
        """
        logger = get_app_logger()
        logger.debug(f"Building FastAPI app with {len(self.plugins)} plugins")

        for plugin in self.plugins:
            plugin.configure(self)

        @asynccontextmanager
        async def unified_lifespan(app: FastAPI):
            try:
                await self._execute_all_startup_hooks(app)
                logger.info("All startup hooks completed successfully")
                yield
            except Exception as e:
                logger.error(f"Error during startup phase: {e}", exc_info=True)
                raise
            finally:
                await self._execute_all_shutdown_hooks(app)
                logger.info("All shutdown hooks completed")

        default_config = {
            "title": "wabridge",
            "description": "REST gateway for WhatsApp messaging sessions",
            "version": "1.0.0",
            "lifespan": unified_lifespan,
        }
        default_config.update(self.config_overrides)

        app = FastAPI(**default_config)

        # FastAPI wraps middleware in reverse order of registration
        sorted_middlewares = sorted(self.middlewares, key=lambda x: x[2], reverse=True)
        for middleware_class, kwargs, priority in sorted_middlewares:
            app.add_middleware(middleware_class, **kwargs)
            logger.debug(
                f"Added middleware {middleware_class.__name__} (priority: {priority})"
            )

        for exc_class_or_status, handler in self.exception_handlers:
            app.add_exception_handler(exc_class_or_status, handler)

        for router, kwargs in self.routers:
            app.include_router(router, **kwargs)

        logger.info(
            f"BridgeBuilder created FastAPI app: {len(self.plugins)} plugins, "
            f"{len(self.middlewares)} middlewares, {len(self.routers)} routers"
        )
        return app

    async def _execute_all_startup_hooks(self, app: FastAPI) -> None:
        """Run startup hooks in priority order, failing fast on the first error."""
        logger = get_app_logger()

        for hook, priority in sorted(self.startup_hooks, key=lambda x: x[1]):
            hook_name = getattr(hook, "__name__", "anonymous_hook")
            logger.debug(f"Executing startup hook: {hook_name} (priority: {priority})")
            try:
                await hook(app)
            except Exception as e:
                logger.error(f"Startup hook {hook_name} failed: {e}", exc_info=True)
                raise

    async def _execute_all_shutdown_hooks(self, app: FastAPI) -> None:
        """Run shutdown hooks in reverse priority order; errors are logged, not raised."""
        logger = get_app_logger()

        for hook, priority in sorted(
            self.shutdown_hooks, key=lambda x: x[1], reverse=True
        ):
            hook_name = getattr(hook, "__name__", "anonymous_hook")
            try:
                logger.debug(
                    f"Executing shutdown hook: {hook_name} (priority: {priority})"
                )
                await hook(app)
            except Exception as e:
                logger.error(f"Error in shutdown hook {hook_name}: {e}", exc_info=True)
