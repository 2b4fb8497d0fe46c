# autocorrector/config.py
# Environment-driven configuration and logging setup

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field
from typing import List, Optional


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass(frozen=True)
class LinterConfig:
    python: str = field(default_factory=lambda: sys.executable)
    timeout_seconds: float = 30.0


@dataclass(frozen=True)
class CheckConfig:
    target_extension: str = ".py"
    require_author_after_docstring: bool = True
    context_lines: int = 5
    pygments_style: str = "default"


@dataclass(frozen=True)
class LogConfig:
    level: str = "INFO"
    format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@dataclass
class AutocorrectorConfig:
    linter: LinterConfig = field(default_factory=LinterConfig)
    check: CheckConfig = field(default_factory=CheckConfig)
    log: LogConfig = field(default_factory=LogConfig)
    title: str = "GU EPI Autocorrector"
    max_upload_mb: int = 20
    api_host: str = "127.0.0.1"
    api_port: int = 3000

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024

    @classmethod
    def from_env(cls) -> "AutocorrectorConfig":
        linter = LinterConfig(
            python=os.getenv("AUTOCORRECTOR_LINTER_PYTHON", sys.executable),
            timeout_seconds=float(os.getenv("AUTOCORRECTOR_LINTER_TIMEOUT", "30")),
        )

        check = CheckConfig(
            target_extension=os.getenv("AUTOCORRECTOR_TARGET_EXTENSION", ".py"),
            require_author_after_docstring=_env_bool(
                "AUTOCORRECTOR_REQUIRE_AUTHOR_AFTER_DOCSTRING", "true"
            ),
            context_lines=int(os.getenv("AUTOCORRECTOR_CONTEXT_LINES", "5")),
            pygments_style=os.getenv("AUTOCORRECTOR_PYGMENTS_STYLE", "default"),
        )

        log = LogConfig(level=os.getenv("AUTOCORRECTOR_LOG_LEVEL", "INFO"))

        return cls(
            linter=linter,
            check=check,
            log=log,
            title=os.getenv("AUTOCORRECTOR_TITLE", "GU EPI Autocorrector"),
            max_upload_mb=int(os.getenv("AUTOCORRECTOR_MAX_UPLOAD_MB", "20")),
            api_host=os.getenv("AUTOCORRECTOR_HOST", "127.0.0.1"),
            api_port=int(os.getenv("AUTOCORRECTOR_PORT", "3000")),
        )


_config: Optional[AutocorrectorConfig] = None


def get_config() -> AutocorrectorConfig:
    global _config
    if _config is None:
        _config = AutocorrectorConfig.from_env()
    return _config


def set_config(config: Optional[AutocorrectorConfig]) -> None:
    global _config
    _config = config


def setup_logging(config: Optional[AutocorrectorConfig] = None) -> None:
    cfg = config or get_config()

    handlers: List[logging.Handler] = [logging.StreamHandler()]

    logging.basicConfig(
        level=getattr(logging, cfg.log.level.upper(), logging.INFO),
        format=cfg.log.format,
        handlers=handlers,
        force=True,
    )
