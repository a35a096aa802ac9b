"""Load-state controller exposing the preparation pipeline to a consumer.

The controller starts Idle. The first observation moves it to Loading
and schedules the preparation on the running event loop; it then ends
in Ready or Error and never leaves that state. A consumer needing a
retry creates a new controller.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional

from ..domain.models import (
    DataState,
    ErrorState,
    IdleState,
    LoadingState,
    ReadyState,
)
from ..graph.dataset import Dataset

PrepareFn = Callable[[], Awaitable[Dataset]]


@dataclass
class DataLoadController:
    """One-shot Idle -> Loading -> Ready | Error state machine.

    Usage:
        controller = DataLoadController(service.prepare)
        controller.observe()          # Idle -> Loading
        state = await controller.wait()

    Attributes:
        prepare: Coroutine function producing the Dataset
    """

    prepare: PrepareFn

    _state: DataState = field(default_factory=IdleState, init=False)
    _task: Optional[asyncio.Task] = field(default=None, init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def state(self) -> DataState:
        """The current state, without triggering a load."""
        return self._state

    def observe(self) -> DataState:
        """Return the current state, starting the load on first call.

        Must be called from within a running event loop.
        """
        if isinstance(self._state, IdleState):
            loop = asyncio.get_running_loop()
            self._state = LoadingState()
            self._logger.debug("Load started")
            self._task = loop.create_task(self._run())
        return self._state

    async def wait(self) -> DataState:
        """Observe, then wait until the state is Ready or Error."""
        self.observe()
        if self._task is not None:
            await self._task
        return self._state

    async def _run(self) -> None:
        try:
            dataset = await self.prepare()
        except asyncio.CancelledError as e:
            self._logger.warning("Load cancelled")
            self._state = ErrorState(error=e)
            raise
        except Exception as e:
            self._logger.warning(
                "Load failed",
                extra={"error": str(e), "error_type": type(e).__name__},
            )
            self._state = ErrorState(error=e)
            return
        self._state = ReadyState(dataset=dataset)
        self._logger.info("Load succeeded")


def describe_state(state: DataState) -> str:
    """Render a one-line, human-readable summary of a load state.

    Raises:
        TypeError: If ``state`` is not one of the DataState members.
    """
    if isinstance(state, IdleState):
        return "Idle"
    if isinstance(state, LoadingState):
        return "Loading..."
    if isinstance(state, ReadyState):
        dataset = state.dataset
        return (
            f"Ready: {dataset.number_of_nodes} nodes, "
            f"{dataset.number_of_edges} edges, "
            f"{len(dataset.routes())} routes"
        )
    if isinstance(state, ErrorState):
        return f"Error: {state.error}"
    raise TypeError(f"Unknown load state: {state!r}")
