"""Converters from benchmark harness output to ledger measurements.

Only the Google Benchmark JSON reporter (tool ``googlecpp``) is supported.
Each iteration row becomes one Measurement::

    name  = row["name"]
    value = row["real_time"]
    unit  = "<time_unit>/iter"
    extra = "iterations: N\\ncpu: X <time_unit>\\nthreads: T"
"""

from __future__ import annotations

import json
import time
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from benchledger.core.errors import ValidationError
from benchledger.models.ledger import CommitInfo, Entry, Measurement

GOOGLECPP_TOOL = "googlecpp"


def _format_number(number: Any) -> str:
    if isinstance(number, float) and number.is_integer():
        return str(int(number))
    return str(number)


def measurements_from_googlecpp(payload: Mapping[str, Any] | str | bytes) -> tuple[Measurement, ...]:
    """Convert Google Benchmark ``--benchmark_format=json`` output.

    Aggregate rows (mean/median/stddev of repetitions) are skipped.

    Raises
    ------
    ValidationError
        If the payload is not JSON, has no ``benchmarks`` array, or a row
        lacks the fields a Measurement needs.
    """
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise ValidationError(f"Benchmark output is not valid JSON: {exc}") from exc

    if not isinstance(payload, Mapping):
        raise ValidationError("Benchmark output must be a JSON object")
    rows = payload.get("benchmarks")
    if not isinstance(rows, list):
        raise ValidationError("Benchmark output has no 'benchmarks' array")

    measurements: list[Measurement] = []
    for index, row in enumerate(rows):
        if not isinstance(row, Mapping):
            raise ValidationError(f"Benchmark row {index} is not an object")
        if row.get("run_type") == "aggregate":
            continue
        try:
            time_unit = row.get("time_unit", "ns")
            extra = "\n".join(
                [
                    f"iterations: {row['iterations']}",
                    f"cpu: {_format_number(row['cpu_time'])} {time_unit}",
                    f"threads: {row.get('threads', 1)}",
                ]
            )
            measurements.append(
                Measurement(
                    name=row["name"],
                    value=row["real_time"],
                    unit=f"{time_unit}/iter",
                    extra=extra,
                )
            )
        except KeyError as exc:
            raise ValidationError(
                f"Benchmark row {index} is missing field {exc.args[0]!r}"
            ) from exc
        except PydanticValidationError as exc:
            raise ValidationError(f"Benchmark row {index} is malformed: {exc}") from exc
    return tuple(measurements)


def build_entry(
    commit: CommitInfo | Mapping[str, Any],
    tool: str,
    benches: Iterable[Measurement],
    date: int | None = None,
) -> Entry:
    """Assemble an Entry for one CI run.

    ``date`` defaults to the current time in epoch millis.
    """
    if date is None:
        date = int(time.time() * 1000)
    try:
        return Entry(
            commit=CommitInfo.model_validate(commit),
            date=date,
            tool=tool,
            benches=tuple(benches),
        )
    except PydanticValidationError as exc:
        raise ValidationError(f"Malformed entry: {exc}") from exc
