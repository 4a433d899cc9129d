"""
Configuration schema for the WKT conversion service.

This module defines where records are read from and written to, the
output precision, and how per-record failures are handled.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import yaml

MAX_DECIMAL_DIGITS_LIMIT = 17

VALID_ON_ERROR = {"skip", "fail"}
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}


@dataclass(frozen=True)
class ConverterConfig:
    """
    Main configuration for WKTConverterService.

    This configuration is loaded from YAML and validated at startup.
    Immutable after construction (frozen dataclass).
    """

    input_path: Path
    output_path: Path
    max_decimal_digits: int = -1  # -1 = full precision
    on_error: str = "skip"  # "skip" or "fail"
    comment_prefix: str = "#"
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate converter configuration."""
        object.__setattr__(self, 'input_path', Path(self.input_path))
        object.__setattr__(self, 'output_path', Path(self.output_path))

        if not (self.max_decimal_digits == -1
                or 0 <= self.max_decimal_digits <= MAX_DECIMAL_DIGITS_LIMIT):
            raise ValueError(
                f"max_decimal_digits must be -1 or in [0, {MAX_DECIMAL_DIGITS_LIMIT}], "
                f"got {self.max_decimal_digits}"
            )

        if self.on_error not in VALID_ON_ERROR:
            raise ValueError(
                f"Invalid on_error: {self.on_error}. "
                f"Must be one of {sorted(VALID_ON_ERROR)}"
            )

        if self.log_level.upper() not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log_level: {self.log_level}. "
                f"Must be one of {sorted(VALID_LOG_LEVELS)}"
            )

        if not self.input_path.exists():
            raise FileNotFoundError(
                f"Input file not found: {self.input_path}\n"
                f"Create it or update 'input_path' in config"
            )

        if self.input_path.is_dir():
            raise ValueError(
                f"input_path must be a file, got directory: {self.input_path}"
            )

    @property
    def level(self) -> int:
        """log_level as a logging module constant."""
        return getattr(logging, self.log_level.upper())

    def to_dict(self) -> Dict[str, Any]:
        return {
            'input_path': str(self.input_path),
            'output_path': str(self.output_path),
            'max_decimal_digits': self.max_decimal_digits,
            'on_error': self.on_error,
            'comment_prefix': self.comment_prefix,
            'log_level': self.log_level,
        }

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "ConverterConfig":
        """
        Load configuration from YAML file.

        Relative paths are resolved against the YAML file's directory.

        Example YAML:
            input_path: "data/parcels.wkt"
            output_path: "out/parcels.wkt"
            max_decimal_digits: 6
            on_error: "skip"
            comment_prefix: "#"
            log_level: "INFO"
        """
        yaml_path = Path(yaml_path)
        try:
            with open(yaml_path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {yaml_path}: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"Config {yaml_path} must be a mapping, got {type(data).__name__}")

        base_dir = yaml_path.parent

        def resolve(key: str) -> Path:
            if key not in data:
                raise ValueError(f"Missing required config field: {key}")
            path = Path(data[key])
            return path if path.is_absolute() else base_dir / path

        return cls(
            input_path=resolve("input_path"),
            output_path=resolve("output_path"),
            max_decimal_digits=int(data.get("max_decimal_digits", -1)),
            on_error=str(data.get("on_error", "skip")),
            comment_prefix=str(data.get("comment_prefix", "#")),
            log_level=str(data.get("log_level", "INFO")),
        )
