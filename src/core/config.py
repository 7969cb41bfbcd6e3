"""
Application settings.

Values are read from environment variables prefixed with CHECKERS_ (ex. CHECKERS_COMMISSION_RATE=0.05).
Anything not set falls back to the defaults below.
"""

import logging
import os
from decimal import Decimal
from typing import Mapping, Optional, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

ENV_PREFIX = "CHECKERS_"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    # platform cut of the amount won. 10% is what the platform charged when no rate was configured.
    commission_rate: Decimal = Field(default=Decimal("0.10"), ge=0, le=1)
    min_stake: Decimal = Field(default=Decimal("0"), ge=0)
    max_stake: Optional[Decimal] = None

    # rule variants
    men_capture_backward: bool = False
    flying_kings: bool = False
    promotion_ends_chain: bool = False

    database_url: str = "sqlite:///checkers.db"
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @model_validator(mode="after")
    def check_stake_limits(self) -> Self:
        if self.max_stake is not None and self.max_stake <= self.min_stake:
            raise ValueError(
                f"max_stake ({self.max_stake}) must be larger than min_stake ({self.min_stake})"
            )
        return self

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Self:
        """Collect every CHECKERS_* variable and let pydantic do the parsing/validation."""
        environ = os.environ if environ is None else environ
        values = {
            name: environ[f"{ENV_PREFIX}{name.upper()}"]
            for name in cls.model_fields
            if f"{ENV_PREFIX}{name.upper()}" in environ
        }
        return cls.model_validate(values)


def configure_logging(settings: Settings) -> None:
    """Entry points call this once. Library code only ever does logging.getLogger(__name__)."""
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
