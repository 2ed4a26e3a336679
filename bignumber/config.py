"""Arithmetic configuration for BigNumber types."""

from __future__ import annotations

import os
from dataclasses import dataclass

# Environment variable read by BigNumberConfig.from_env()
REJECT_ON_OVERFLOW_ENV = "BIGNUMBER_REJECT_ON_OVERFLOW"


@dataclass(frozen=True)
class BigNumberConfig:
    """Behavior flags shared by every value of a BigNumber type.

    A config is bound to a type when the type is created, so two types with
    the same capacity but different configs are distinct classes.

    Attributes:
        reject_on_overflow: If True, an arithmetic result needing more digits
            than the capacity raises CapacityExceeded and leaves the operand
            unchanged. If False, the high digits are dropped and a warning is
            logged.
    """

    reject_on_overflow: bool = True

    @classmethod
    def from_env(cls) -> BigNumberConfig:
        """Build a config from environment variables.

        Configuration via environment variables:
        - BIGNUMBER_REJECT_ON_OVERFLOW: raise on overflow (default: true)
        """
        raw = os.environ.get(REJECT_ON_OVERFLOW_ENV, "true")
        return cls(reject_on_overflow=raw.lower() in ("true", "1", "yes"))


# Default configuration instance
DEFAULT_CONFIG = BigNumberConfig()
