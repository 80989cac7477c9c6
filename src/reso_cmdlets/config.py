"""Runtime configuration for cmdlet execution and log bridging."""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, field

ERROR_ACTION_CHOICES = ("stop", "silentlycontinue", "ignore", "continue", "inquire")


@dataclass(slots=True)
class BridgeSettings:
    """Log bridge settings."""

    wait_seconds: float = 0.1
    forwarded_logger: str = "reso_cmdlets.work"
    forwarded_level: str = "INFO"


@dataclass(slots=True)
class Settings:
    """Application settings grouped by concern."""

    error_action: str = ""
    verbose: bool = False
    bridge: BridgeSettings = field(default_factory=BridgeSettings)

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from environment with defaults for interactive use."""

        return cls(
            error_action=os.getenv("RESO_CMDLETS_ERROR_ACTION", "").strip().lower(),
            verbose=_env_bool("RESO_CMDLETS_VERBOSE", default=False),
            bridge=BridgeSettings(
                wait_seconds=_env_float("RESO_CMDLETS_BRIDGE_WAIT_SECONDS", default=0.1),
                forwarded_logger=os.getenv(
                    "RESO_CMDLETS_FORWARDED_LOGGER",
                    "reso_cmdlets.work",
                ).strip(),
                forwarded_level=os.getenv("RESO_CMDLETS_FORWARDED_LEVEL", "INFO").strip().upper(),
            ),
        )

    def validate(self) -> None:
        """Raise configuration error if any value is out of range."""

        if self.error_action and self.error_action not in ERROR_ACTION_CHOICES:
            raise ValueError(
                "Invalid RESO_CMDLETS_ERROR_ACTION: "
                f"{self.error_action!r}. Expected one of {', '.join(ERROR_ACTION_CHOICES)}.",
            )
        wait_seconds = self.bridge.wait_seconds
        if not math.isfinite(wait_seconds) or wait_seconds <= 0:
            raise ValueError("RESO_CMDLETS_BRIDGE_WAIT_SECONDS must be > 0 and finite.")
        if not self.bridge.forwarded_logger:
            raise ValueError("RESO_CMDLETS_FORWARDED_LOGGER must not be empty.")
        if not isinstance(logging.getLevelName(self.bridge.forwarded_level), int):
            raise ValueError(
                f"Invalid RESO_CMDLETS_FORWARDED_LEVEL: {self.bridge.forwarded_level!r}",
            )

    @property
    def forwarded_level_number(self) -> int:
        return logging.getLevelName(self.bridge.forwarded_level)


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"Invalid boolean value for {name}: {value!r}")


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value.strip())
    except ValueError as error:
        raise ValueError(f"Invalid float value for {name}: {value!r}") from error
