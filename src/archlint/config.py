"""Global configuration — env vars and defaults.

Rule thresholds and pattern tables are fixed and deliberately absent here.
"""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass
class ArchLintConfig:
    """Application-wide configuration."""

    workers: int = 1
    scan_timeout: float | None = None
    web_host: str = "127.0.0.1"  # loopback only
    web_port: int = 8471

    @classmethod
    def load(cls) -> ArchLintConfig:
        """Load config from environment variables."""
        config = cls()

        env_workers = os.environ.get("ARCHLINT_WORKERS")
        if env_workers:
            config.workers = max(1, int(env_workers))

        env_timeout = os.environ.get("ARCHLINT_SCAN_TIMEOUT")
        if env_timeout:
            config.scan_timeout = float(env_timeout)

        env_port = os.environ.get("ARCHLINT_WEB_PORT")
        if env_port:
            config.web_port = int(env_port)

        return config
