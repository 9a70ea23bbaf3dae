"""Litestar plugin for choose-state integration.

This module provides the ChooseStatePlugin for wiring the choose-state task
into a Litestar application.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from litestar.di import Provide
from litestar.plugins import InitPluginProtocol
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002 - needed for DI

from litestar_choose_state.core.types import DEFAULT_LOCALE
from litestar_choose_state.engine.locks import KeyedLock
from litestar_choose_state.engine.reflexive import NoopReflexiveActionRunner
from litestar_choose_state.engine.registry import ControllerRegistry
from litestar_choose_state.engine.service import ChooseStateTaskService
from litestar_choose_state.stores.memory import create_memory_stores

if TYPE_CHECKING:
    from litestar.config.app import AppConfig

    from litestar_choose_state.core.protocols import ChooseStateController, EventBus, ReflexiveActionRunner
    from litestar_choose_state.core.types import ResourceKey
    from litestar_choose_state.stores.base import ChooseStateStores

__all__ = ["ChooseStatePlugin", "ChooseStatePluginConfig"]


@dataclass
class ChooseStatePluginConfig:
    """Configuration for the ChooseStatePlugin.

    Attributes:
        registry: Optional pre-configured ControllerRegistry. If not provided,
            a new one will be created.
        controllers: Controllers to register with the registry on app startup.
        stores: Optional store bundle. If not provided and ``use_database`` is
            False, in-memory stores are created.
        use_database: Build SQLAlchemy stores for each request from the
            ``db_session`` dependency provided by advanced-alchemy's
            ``SQLAlchemyPlugin``. Takes precedence over ``stores``.
        reflexive_actions: The host engine's reflexive-action cascade.
            Defaults to a runner that does nothing.
        default_locale: Locale used for the cascade when a caller passes none.
        event_bus: Optional event bus transition events are emitted on.
        dependency_key_registry: The key used for dependency injection of
            the ControllerRegistry. Defaults to "choose_state_registry".
        dependency_key_service: The key used for dependency injection of
            the ChooseStateTaskService. Defaults to "choose_state_service".
        enable_api: Whether to enable the REST API endpoints. Defaults to True.
        api_path_prefix: URL path prefix for all choose-state API endpoints.
            Defaults to "/choose-state".
        api_guards: List of Litestar guards to apply to all API endpoints.
        api_tags: OpenAPI tags to apply to API endpoints.
        include_api_in_schema: Whether to include API endpoints in OpenAPI schema.
            Defaults to True.
    """

    registry: ControllerRegistry | None = None
    controllers: list[ChooseStateController] = field(default_factory=list)
    stores: ChooseStateStores | None = None
    use_database: bool = False
    reflexive_actions: ReflexiveActionRunner | None = None
    default_locale: str = DEFAULT_LOCALE
    event_bus: EventBus | None = None
    dependency_key_registry: str = "choose_state_registry"
    dependency_key_service: str = "choose_state_service"
    enable_api: bool = True
    api_path_prefix: str = "/choose-state"
    api_guards: list[Any] = field(default_factory=list)
    api_tags: list[str] = field(default_factory=lambda: ["Choose State"])
    include_api_in_schema: bool = True


class ChooseStatePlugin(InitPluginProtocol):
    """Litestar plugin for the choose-state task.

    This plugin registers the configured controllers and provides the
    ControllerRegistry and the ChooseStateTaskService through dependency
    injection. All services created by the plugin share one set of
    per-resource locks.

    Example:
        Basic usage with in-memory stores::

            from litestar import Litestar
            from litestar_choose_state import (
                ChooseStatePlugin,
                ChooseStatePluginConfig,
                ConstantController,
            )

            app = Litestar(
                plugins=[
                    ChooseStatePlugin(
                        config=ChooseStatePluginConfig(
                            controllers=[ConstantController("always-true", True)],
                        )
                    )
                ]
            )

        Using database stores::

            from advanced_alchemy.extensions.litestar import SQLAlchemyAsyncConfig, SQLAlchemyPlugin

            app = Litestar(
                plugins=[
                    SQLAlchemyPlugin(config=SQLAlchemyAsyncConfig(connection_string="sqlite+aiosqlite:///app.db")),
                    ChooseStatePlugin(config=ChooseStatePluginConfig(use_database=True)),
                ]
            )
    """

    __slots__ = ("_config", "_locks", "_registry", "_service")

    def __init__(self, config: ChooseStatePluginConfig | None = None) -> None:
        """Initialize the plugin.

        Args:
            config: Optional configuration for the plugin.
        """
        self._config = config or ChooseStatePluginConfig()
        self._registry: ControllerRegistry | None = None
        self._service: ChooseStateTaskService | None = None
        self._locks: KeyedLock[ResourceKey] = KeyedLock()

    @property
    def registry(self) -> ControllerRegistry:
        """Get the controller registry.

        Returns:
            The ControllerRegistry instance.

        Raises:
            RuntimeError: If accessed before plugin initialization.
        """
        if self._registry is None:
            msg = "ChooseStatePlugin has not been initialized. Access registry after app startup."
            raise RuntimeError(msg)
        return self._registry

    @property
    def service(self) -> ChooseStateTaskService:
        """Get the application-wide service of a plugin without database stores.

        Returns:
            The ChooseStateTaskService instance.

        Raises:
            RuntimeError: If accessed before initialization, or when services
                are created per request from the database session.
        """
        if self._service is None:
            msg = "ChooseStatePlugin has no application-wide service. Access it after app startup without use_database."
            raise RuntimeError(msg)
        return self._service

    def create_service(self, stores: ChooseStateStores) -> ChooseStateTaskService:
        """Create a service over the given stores with the plugin's settings.

        Args:
            stores: The stores the service reads and writes.

        Returns:
            A new ChooseStateTaskService sharing the plugin's registry and locks.
        """
        return ChooseStateTaskService(
            self.registry,
            stores,
            self._config.reflexive_actions or NoopReflexiveActionRunner(),
            default_locale=self._config.default_locale,
            event_bus=self._config.event_bus,
            locks=self._locks,
        )

    def on_app_init(self, app_config: AppConfig) -> AppConfig:
        """Initialize the plugin when the Litestar app starts.

        This method:
        1. Creates or uses the provided ControllerRegistry
        2. Registers the configured controllers
        3. Adds dependency providers to the app config
        4. Optionally registers REST API controllers if enable_api=True

        Args:
            app_config: The Litestar application configuration.

        Returns:
            The modified application configuration.
        """
        # Initialize registry
        self._registry = self._config.registry or ControllerRegistry()

        for controller in self._config.controllers:
            self._registry.register(controller)

        def provide_registry() -> ControllerRegistry:
            return self._registry  # type: ignore[return-value]

        app_config.dependencies[self._config.dependency_key_registry] = Provide(
            provide_registry,
            sync_to_thread=False,
        )

        if self._config.use_database:
            from litestar_choose_state.db.stores import create_sqlalchemy_stores

            async def provide_database_service(db_session: AsyncSession) -> ChooseStateTaskService:
                return self.create_service(create_sqlalchemy_stores(db_session))

            app_config.dependencies[self._config.dependency_key_service] = Provide(provide_database_service)
        else:
            self._service = self.create_service(self._config.stores or create_memory_stores())

            def provide_service() -> ChooseStateTaskService:
                return self._service  # type: ignore[return-value]

            app_config.dependencies[self._config.dependency_key_service] = Provide(
                provide_service,
                sync_to_thread=False,
            )

        # Register REST API controllers if enabled
        if self._config.enable_api:
            from litestar import Router

            from litestar_choose_state.web.controllers import (
                ChooseStateReferenceController,
                ChooseStateTaskController,
                ResourceHistoryController,
            )
            from litestar_choose_state.web.exceptions import exception_handlers

            choose_state_router = Router(
                path=self._config.api_path_prefix,
                route_handlers=[
                    ChooseStateReferenceController,
                    ChooseStateTaskController,
                    ResourceHistoryController,
                ],
                guards=self._config.api_guards,
                tags=self._config.api_tags,
                include_in_schema=self._config.include_api_in_schema,
                exception_handlers=exception_handlers,  # type: ignore[arg-type]
            )

            app_config.route_handlers.append(choose_state_router)

        return app_config
