"""Runtime configuration: env-driven.

Centralized settings using pydantic-settings.  Reads from a .env file and
BENCHLEDGER_* environment variables.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class LedgerSettings(BaseSettings):
    """Settings with environment variable overrides.

    Examples
    --------
    Override via environment::

        export BENCHLEDGER_LOG_LEVEL=DEBUG
        export BENCHLEDGER_LEDGER_PATH=site/dev/bench/data.js
        export BENCHLEDGER_DEFAULT_GROUP="Benchmark"

    Or via .env file::

        BENCHLEDGER_REPO_URL=https://github.com/sam20908/matrixpp
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="BENCHLEDGER_",
        env_file_encoding="utf-8",
    )

    # Logging
    log_level: str = "INFO"

    # Storage
    ledger_path: Path = Path("dev/bench/data.js")
    script_output: bool = True  # write the window.BENCHMARK_DATA wrapper

    # Query defaults
    default_group: str = "Benchmark"
    default_tool: str = "googlecpp"

    # Ledger metadata for newly created files
    repo_url: str = ""
