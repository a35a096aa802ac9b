"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the application to external systems like:
- Tabular sources (CSV over HTTP or on disk)
"""
