"""Environment configuration for chartharness runs.

Usage
-----
>>> config = HarnessConfig()
>>> config.release_name
'release-name'

Or load from environment variables:

>>> import os
>>> os.environ["CHARTHARNESS_MAX_WORKERS"] = "4"
>>> HarnessConfig.from_env().max_workers
4

"""

from __future__ import annotations

import dataclasses as dc
import os

from chartharness.templates.models import Release


@dc.dataclass(frozen=True, slots=True)
class HarnessConfig:
    """Settings shared by the CLI and the suite runner.

    Attributes
    ----------
    log_level
        femtologging level name. Invalid names fall back to ``INFO``.
    max_workers
        Worker threads for running cases; ``None`` lets the executor decide.
    release_name
        Release name used when a suite does not declare one.
    release_namespace
        Release namespace used when a suite does not declare one.

    """

    log_level: str = "INFO"
    max_workers: int | None = None
    release_name: str = "release-name"
    release_namespace: str = "default"

    @property
    def release(self) -> Release:
        """Return the default release built from this configuration."""
        return Release(name=self.release_name, namespace=self.release_namespace)

    @staticmethod
    def _parse_positive_int(env_var: str) -> int | None:
        """Read an optional positive integer env var."""
        raw = os.environ.get(env_var, "")
        if not raw.strip():
            return None
        try:
            value = int(raw)
        except ValueError as exc:
            msg = f"{env_var} must be an integer, got: {raw!r}"
            raise ValueError(msg) from exc
        if value < 1:
            msg = f"{env_var} must be positive, got: {value}"
            raise ValueError(msg)
        return value

    @classmethod
    def from_env(cls) -> HarnessConfig:
        """Create configuration from environment variables.

        Reads ``CHARTHARNESS_LOG_LEVEL``, ``CHARTHARNESS_MAX_WORKERS``,
        ``CHARTHARNESS_RELEASE_NAME`` and ``CHARTHARNESS_RELEASE_NAMESPACE``;
        blank or unset variables keep their defaults.

        Raises
        ------
        ValueError
            If CHARTHARNESS_MAX_WORKERS is not a positive integer.

        """
        defaults = cls()
        return cls(
            log_level=os.environ.get("CHARTHARNESS_LOG_LEVEL", "").strip()
            or defaults.log_level,
            max_workers=cls._parse_positive_int("CHARTHARNESS_MAX_WORKERS"),
            release_name=os.environ.get("CHARTHARNESS_RELEASE_NAME", "").strip()
            or defaults.release_name,
            release_namespace=os.environ.get(
                "CHARTHARNESS_RELEASE_NAMESPACE", ""
            ).strip()
            or defaults.release_namespace,
        )
