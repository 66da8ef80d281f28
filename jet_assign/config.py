from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .parsing import parse_confirmation
from .plan import JetAssignError


ENV_PREFIX = "JET_ASSIGN_"

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class ConfigError(JetAssignError):
    pass


@dataclass(frozen=True)
class Settings:
    upload_steps: int = 20
    upload_interval: float = 0.05
    cell_width: int = 3
    show_ids: bool = False
    # Empty answers to the move / commit prompts.
    reassign_default: bool = False
    commit_default: bool = False
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.upload_steps <= 0:
            raise ConfigError("upload_steps must be a positive integer")
        if self.upload_interval < 0:
            raise ConfigError("upload_interval must not be negative")
        if self.cell_width <= 0:
            raise ConfigError("cell_width must be a positive integer")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigError(f"log_level must be one of {', '.join(LOG_LEVELS)}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        defaults = cls()

        def get(name: str) -> Optional[str]:
            value = env.get(ENV_PREFIX + name)
            if value is None or not value.strip():
                return None
            return value.strip()

        try:
            return cls(
                upload_steps=int(get("UPLOAD_STEPS") or defaults.upload_steps),
                upload_interval=float(get("UPLOAD_INTERVAL") or defaults.upload_interval),
                cell_width=int(get("CELL_WIDTH") or defaults.cell_width),
                show_ids=_flag(get("SHOW_IDS"), defaults.show_ids),
                reassign_default=_flag(get("REASSIGN_DEFAULT"), defaults.reassign_default),
                commit_default=_flag(get("COMMIT_DEFAULT"), defaults.commit_default),
                log_level=(get("LOG_LEVEL") or defaults.log_level).upper(),
            )
        except ValueError as e:
            raise ConfigError(f"invalid {ENV_PREFIX}* setting: {e}") from e


def _flag(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    if value.lower() in ("1", "true", "on"):
        return True
    if value.lower() in ("0", "false", "off"):
        return False
    return parse_confirmation(value)
