"""Reconciliation tuning values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_float, optional_env_int, optional_env_str
from .errors import ConfigurationError, ThresholdOutOfRangeError

DEFAULT_MATCH_THRESHOLD = 0.75
DEFAULT_DUPLICATE_NAME_THRESHOLD = 0.8
DEFAULT_PHONE_REGION = "US"
DEFAULT_CREATE_WORKERS = 4


@dataclass(frozen=True, slots=True)
class ReconciliationConfig:
    """Thresholds and execution limits for one reconciliation run.

    Both thresholds are calibrated against ``string_similarity`` and are
    compared with a strict ``>``.
    """

    match_threshold: float = DEFAULT_MATCH_THRESHOLD
    duplicate_name_threshold: float = DEFAULT_DUPLICATE_NAME_THRESHOLD
    default_phone_region: str = DEFAULT_PHONE_REGION
    create_workers: int = DEFAULT_CREATE_WORKERS

    def __post_init__(self) -> None:
        for name in ("match_threshold", "duplicate_name_threshold"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ThresholdOutOfRangeError(name=name, value=value)
        if self.create_workers < 1:
            raise ConfigurationError(
                f"create_workers must be at least 1, got {self.create_workers}"
            )


def get_reconciliation_config() -> ReconciliationConfig:
    match_threshold = optional_env_float("CONTACT_MATCH_THRESHOLD")
    duplicate_threshold = optional_env_float("CONTACT_DUPLICATE_NAME_THRESHOLD")
    region = optional_env_str("CONTACT_PHONE_REGION")
    workers = optional_env_int("CONTACT_CREATE_WORKERS")
    return ReconciliationConfig(
        match_threshold=DEFAULT_MATCH_THRESHOLD if match_threshold is None else match_threshold,
        duplicate_name_threshold=(
            DEFAULT_DUPLICATE_NAME_THRESHOLD if duplicate_threshold is None else duplicate_threshold
        ),
        default_phone_region=(region or DEFAULT_PHONE_REGION).upper(),
        create_workers=DEFAULT_CREATE_WORKERS if workers is None else workers,
    )
