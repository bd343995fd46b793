"""Diagnostics module for simulation traces."""

from fasim.diagnostics.trace import RejectReason, Status, Step, Trace

__all__ = [
    "Trace",
    "Step",
    "Status",
    "RejectReason",
]
