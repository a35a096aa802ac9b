"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the application core and external
adapters. They enable dependency injection and make the system testable.
"""

from .projection import ProjectorPort
from .source import TabularSourcePort

__all__ = [
    "ProjectorPort",
    "TabularSourcePort",
]
