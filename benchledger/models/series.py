"""Series query output models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class SeriesPoint(BaseModel):
    """One point of a benchmark trend line.

    Plain data handed to renderers; ``extra`` is the harness free text,
    passed through verbatim.
    """

    model_config = ConfigDict(frozen=True)

    date: int
    value: float
    unit: str = ""
    commit_id: str
    extra: str = ""
