"""Wiring of ports to adapters.

Each port type is bound to a zero-argument factory. Bindings are either
shared (built on first resolve, then reused) or fresh on every resolve.
The pipeline and the tests build containers; nothing else imports
adapters directly.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, get_config

Factory = Callable[[], Any]


@dataclass
class _Binding:
    factory: Factory
    shared: bool
    instance: Any = None
    built: bool = False


@dataclass
class Container:
    """Registry of port bindings for one configuration.

    Usage:
        container = Container.create_default(config)
        controller = container.resolve(DataLoadController)

        # Tests bind fakes directly
        container = Container(config=config)
        container.register(TabularSourcePort, lambda: InMemorySource(rows))

    Attributes:
        config: Configuration the default bindings are built from
    """

    config: AppConfig = field(default_factory=get_config)

    _bindings: Dict[type[Any], _Binding] = field(default_factory=dict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        port_type: type[Any],
        factory: Factory,
        singleton: bool = True,
    ) -> None:
        """Bind ``port_type`` to ``factory``, replacing any earlier binding.

        Args:
            port_type: Key to resolve by, usually a Protocol.
            factory: Zero-argument callable building the implementation.
            singleton: Reuse the first built instance when True.
        """
        with self._lock:
            self._bindings[port_type] = _Binding(factory=factory, shared=singleton)

    def resolve(self, port_type: type[Any]) -> Any:
        """Build or return the implementation bound to ``port_type``.

        Raises:
            KeyError: If nothing is bound to ``port_type``.
        """
        with self._lock:
            binding = self._bindings.get(port_type)
            if binding is None:
                raise KeyError(f"No binding for {port_type!r}")
            if not binding.shared:
                return binding.factory()
            if not binding.built:
                binding.instance = binding.factory()
                binding.built = True
            return binding.instance

    def is_registered(self, port_type: type[Any]) -> bool:
        return port_type in self._bindings

    def clear_singletons(self) -> None:
        """Drop shared instances; the next resolve rebuilds them."""
        with self._lock:
            for binding in self._bindings.values():
                binding.instance = None
                binding.built = False

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Bind the CSV source, the configured projector and the services.

        The load controller is bound fresh per resolve since each
        controller only ever runs one load.
        """
        from .adapters.source import CsvTabularSource
        from .graph.projection import get_projector
        from .ports.projection import ProjectorPort
        from .ports.source import TabularSourcePort
        from .services import DataLoadController, DatasetPreparationService

        config = config or get_config()
        container = cls(config=config)

        container.register(
            TabularSourcePort,
            lambda: CsvTabularSource(config=config.dataset, http=config.http),
        )
        container.register(
            ProjectorPort,
            lambda: get_projector(config.projection.kind),
        )
        container.register(
            DatasetPreparationService,
            lambda: DatasetPreparationService(
                source=container.resolve(TabularSourcePort),
                config=config,
                projector=container.resolve(ProjectorPort),
            ),
        )
        container.register(
            DataLoadController,
            lambda: DataLoadController(
                container.resolve(DatasetPreparationService).prepare
            ),
            singleton=False,
        )
        return container
