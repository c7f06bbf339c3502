"""Reactive screen state and fetch orchestration over a typed JSON API client."""

__version__ = "0.1.0"
