"""
Settings for hephaestus.

Values come from a YAML file (first match among the candidate paths) and
can be overridden through HEPHAESTUS_* environment variables.
"""

import os
from pathlib import Path
from typing import Optional, List

import yaml
from pydantic import BaseModel, Field, field_validator

from .logging_config import setup_logging

CONFIG_ENV_VAR = "HEPHAESTUS_CONFIG"

_ENV_OVERRIDES = {
    "HEPHAESTUS_LOG_LEVEL": "log_level",
    "HEPHAESTUS_LOG_DIR": "log_dir",
}

_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseModel):
    log_level: str = Field(default="INFO", description="Root logging level")
    log_dir: Optional[str] = Field(default=None, description="Directory for rotating log files")
    console_output: bool = Field(default=True)
    log_to_file: bool = Field(default=False)
    epsilon: str = Field(default="_", description="Sentinel symbol for NFA epsilon moves")

    @field_validator("log_level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in _LEVELS:
            raise ValueError(f"Unknown log level '{v}'")
        return v

    @field_validator("epsilon")
    @classmethod
    def single_character(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError("Epsilon must be a single character")
        return v


def _candidate_paths(path: Optional[str]) -> List[Path]:
    candidates = []
    if path is not None:
        candidates.append(Path(path))
    if os.environ.get(CONFIG_ENV_VAR):
        candidates.append(Path(os.environ[CONFIG_ENV_VAR]))
    candidates.append(Path.cwd() / "config" / "hephaestus.yaml")
    return candidates


def load_settings(path: Optional[str] = None) -> Settings:
    """
    Load settings from the first existing YAML file, then apply env overrides.

    A missing file is not an error: defaults are used. An explicit ``path``
    that does not exist falls through to the remaining candidates.
    """
    data = {}
    for candidate in _candidate_paths(path):
        if candidate.exists():
            with open(candidate, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            break

    for env_name, field in _ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value:
            data[field] = value

    return Settings(**data)


def configure(settings: Optional[Settings] = None) -> Settings:
    """Apply ``settings`` (loaded when omitted) to the logging stack."""
    if settings is None:
        settings = load_settings()
    setup_logging(
        log_dir=settings.log_dir,
        log_level=settings.log_level,
        console_output=settings.console_output,
        log_to_file=settings.log_to_file,
    )
    return settings
