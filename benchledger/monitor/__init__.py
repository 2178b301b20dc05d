"""Terminal rendering of benchmark series (Rich)."""

from benchledger.monitor.renderer import SeriesRenderer

__all__ = ["SeriesRenderer"]
