"""Services layer - Application orchestration.

This module contains the application services that orchestrate
the flow of data through adapters to fulfill use cases.

Available services:
- DatasetPreparationService: Sources to normalized Dataset
- DataLoadController: Idle/Loading/Ready/Error state machine
"""

from .dataset_preparation import DatasetPreparationService, gather_all_or_fail
from .load_state import DataLoadController, describe_state

__all__ = [
    "DatasetPreparationService",
    "DataLoadController",
    "describe_state",
    "gather_all_or_fail",
]
