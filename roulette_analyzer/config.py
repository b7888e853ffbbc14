"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local env overrides (gitignored)
  4. Environment variables        — ``ROULETTE_ANALYZER_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The analyzer engine itself only ever sees a ``ThresholdsConfig``; the other
sections are consumed by the spin session driver, the CLI and the logging
setup.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, StrictInt, ValidationError, field_validator

# ── Errors ────────────────────────────────────────────────────────────────────


class InvalidThresholdError(ValueError):
    """Raised when a thresholds record cannot be built.

    Non-integer values, missing keys and unknown keys are invalid.  Zero and
    negative integers are valid and mean "always recommend this kind".

    Attributes:
        errors: Human-readable description of every offending field.
    """

    def __init__(self, errors: str) -> None:
        self.errors = errors
        super().__init__(f"Invalid thresholds: {errors}")


# ── Sub-config models ─────────────────────────────────────────────────────────


class ThresholdsConfig(BaseModel):
    """Absence-streak cutoff per bet kind.

    A member of the matching category is recommended once its absence streak
    is greater than or equal to the threshold.  Zero or a negative value
    recommends every member of that kind.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    color:    StrictInt = 8
    parity:   StrictInt = 8
    range:    StrictInt = 8
    dozen:    StrictInt = 5
    column:   StrictInt = 5
    sixline:  StrictInt = 10
    corner:   StrictInt = 12
    street:   StrictInt = 14
    split:    StrictInt = 18
    straight: StrictInt = 25

    def for_kind(self, kind: str) -> int:
        """Threshold for a ``BetKind`` (or its string value)."""
        return getattr(self, str(kind))


class StakingConfig(BaseModel):
    """Bet sizing settings."""

    model_config = ConfigDict(frozen=True)

    base_stake: float = 10.0

    @field_validator("base_stake")
    @classmethod
    def validate_base_stake(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"base_stake must be > 0, got {v}.")
        return v


class SimulationConfig(BaseModel):
    """Spin session driver settings."""

    model_config = ConfigDict(frozen=True)

    spins: int = 20
    delay_ms: int = 100
    history_size: int = 100
    seed: Optional[int] = None

    @field_validator("spins", "history_size")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"must be >= 1, got {v}.")
        return v

    @field_validator("delay_ms")
    @classmethod
    def validate_delay(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"delay_ms must be >= 0, got {v}.")
        return v


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration — the single source of truth.

    Constructed by ``load_config()`` which merges TOML + .env + environment.
    """

    model_config = ConfigDict(frozen=True)

    thresholds: ThresholdsConfig = ThresholdsConfig()
    staking: StakingConfig = StakingConfig()
    simulation: SimulationConfig = SimulationConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


def coerce_thresholds(
    thresholds: ThresholdsConfig | Mapping[str, Any] | None,
) -> ThresholdsConfig:
    """Return a validated ``ThresholdsConfig``.

    Args:
        thresholds: An existing ``ThresholdsConfig`` (returned as-is), a
            mapping with exactly the ten threshold keys, or ``None`` for the
            defaults.

    Raises:
        InvalidThresholdError: If the mapping has non-integer values, missing
            keys or unknown keys.
    """
    if thresholds is None:
        return ThresholdsConfig()
    if isinstance(thresholds, ThresholdsConfig):
        return thresholds
    if not isinstance(thresholds, Mapping):
        raise InvalidThresholdError(
            f"expected a mapping of bet kind to integer, got {type(thresholds).__name__}"
        )

    missing = sorted(set(ThresholdsConfig.model_fields) - set(thresholds))
    if missing:
        raise InvalidThresholdError(f"missing keys {missing}")

    try:
        return ThresholdsConfig(**{str(k): v for k, v in thresholds.items()})
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise InvalidThresholdError(details) from exc


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the specified ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Create config/default.toml or pass --config."
        )

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    # 3. Apply ROULETTE_ANALYZER_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return _build_app_config(raw)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply ROULETTE_ANALYZER_* env vars to the raw config dict.

    Supported overrides:
      ROULETTE_ANALYZER_LOG_LEVEL   → raw["logging"]["level"]
      ROULETTE_ANALYZER_SEED        → raw["simulation"]["seed"]
      ROULETTE_ANALYZER_BASE_STAKE  → raw["staking"]["base_stake"]
      ROULETTE_ANALYZER_DEBUG       → raw["debug"]
    """
    if log_level := os.environ.get("ROULETTE_ANALYZER_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if seed := os.environ.get("ROULETTE_ANALYZER_SEED"):
        raw.setdefault("simulation", {})["seed"] = int(seed)

    if base_stake := os.environ.get("ROULETTE_ANALYZER_BASE_STAKE"):
        raw.setdefault("staking", {})["base_stake"] = float(base_stake)

    if debug := os.environ.get("ROULETTE_ANALYZER_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    return AppConfig(
        thresholds=ThresholdsConfig(**raw.get("thresholds", {})),
        staking=StakingConfig(**raw.get("staking", {})),
        simulation=SimulationConfig(**raw.get("simulation", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", False),
    )
