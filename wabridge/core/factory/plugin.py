"""
Gateway Plugin Protocol

Defines the interface that all plugins must implement for consistent
integration with the BridgeBuilder factory system.
"""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from fastapi import FastAPI

    from .bridge_builder import BridgeBuilder


class BridgePlugin(Protocol):
    """
    Plugin interface for extending the gateway.

    Lifecycle:
    1. configure: Called during BridgeBuilder.build() to register middleware/routes/hooks
    2. startup: Called during FastAPI application startup
    3. shutdown: Called during FastAPI application shutdown
    """

    def configure(self, builder: "BridgeBuilder") -> None:
        """
        Configure the plugin with the BridgeBuilder.

        Synchronous: only registers components with the builder. Async
        initialization belongs in startup().
        """
        ...

    async def startup(self, app: "FastAPI") -> None:
        """Execute plugin startup logic (connections, resources, app.state)."""
        ...

    async def shutdown(self, app: "FastAPI") -> None:
        """Execute plugin cleanup logic. Should not raise."""
        ...
