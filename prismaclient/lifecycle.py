"""Connecting to and disconnecting from the query engine."""

from __future__ import annotations

from dataclasses import dataclass

from .builder import Engine


@dataclass
class Lifecycle:
    """Controls the engine connection; usable as a context manager."""

    engine: Engine

    def connect(self) -> None:
        """Connect to the query engine. Required before accessing data."""
        self.engine.connect()

    def disconnect(self) -> None:
        """Disconnect from the query engine."""
        self.engine.disconnect()

    def __enter__(self) -> Lifecycle:
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.disconnect()