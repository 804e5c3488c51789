"""Runtime services (logging and telemetry) shared by every component."""

from . import telemetry

__all__ = ["telemetry"]
