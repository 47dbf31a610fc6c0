from enum import Enum


class ExecutionMode(Enum):
    """Whether mutating commands take effect or are only logged."""

    REAL = "real"
    SIMULATED = "simulated"

    @classmethod
    def from_dry_run(cls, dry_run: bool) -> "ExecutionMode":
        return cls.SIMULATED if dry_run else cls.REAL
