"""Runtime services (telemetry, logging) shared by every engine layer."""

from . import telemetry

__all__ = ["telemetry"]
