# Task board configuration
# Override defaults via taskboard.yaml, TASKBOARD_CONFIG, or CLI args.

import os
import yaml
from pathlib import Path
from dataclasses import dataclass, field, fields
from typing import List, Optional

from .errors import ConfigError

CONFIG_PATH = Path("taskboard.yaml")
CONFIG_ENV = "TASKBOARD_CONFIG"

DEFAULT_MEDIA_TYPES = ["image/jpeg", "image/png", "application/pdf"]


@dataclass
class BoardConfig:
    """Runtime configuration for the task board."""

    # Upload gate
    max_attachment_bytes: int = 5 * 1024 * 1024
    allowed_media_types: List[str] = field(default_factory=lambda: list(DEFAULT_MEDIA_TYPES))

    # Task defaults
    default_category: str = "WORK"

    # Identity scheme: "random" or "sequential"
    id_scheme: str = "random"
    id_prefix: str = "task"

    # Boot with the demo board
    seed_sample_tasks: bool = False

    # HTTP server
    host: str = "127.0.0.1"
    port: int = 3000
    log_level: str = "INFO"

    def check(self) -> None:
        """Reject values the board cannot run with."""
        if self.id_scheme not in ("random", "sequential"):
            raise ConfigError(
                f"id_scheme must be 'random' or 'sequential', got: {self.id_scheme!r}"
            )
        if self.default_category.upper() not in ("WORK", "PERSONAL"):
            raise ConfigError(f"Invalid default_category: {self.default_category!r}")
        if self.max_attachment_bytes <= 0:
            raise ConfigError("max_attachment_bytes must be positive")

    @classmethod
    def load(cls, path: Optional[str] = None) -> "BoardConfig":
        """Load config from YAML file, falling back to defaults."""
        if path:
            cfg_path = Path(path)
        elif os.environ.get(CONFIG_ENV):
            cfg_path = Path(os.environ[CONFIG_ENV])
        else:
            cfg_path = CONFIG_PATH

        if not cfg_path.exists():
            cfg = cls()
        else:
            try:
                with open(cfg_path, "r") as f:
                    data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Cannot parse {cfg_path}: {e}") from e
            if not isinstance(data, dict):
                raise ConfigError(f"{cfg_path} must contain a mapping")
            known = {f.name for f in fields(cls)}
            cfg = cls(**{k: v for k, v in data.items() if k in known})
        cfg.check()
        return cfg
