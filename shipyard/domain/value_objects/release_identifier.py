import re
from dataclasses import dataclass
from datetime import datetime, UTC

_IDENTIFIER_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")

# Names of the symlinks living next to the release directories
RESERVED_NAMES = frozenset({"current", "previous"})


@dataclass(frozen=True)
class ReleaseIdentifier:
    """
    Value Object naming one release directory under releases/.
    Timestamp identifiers sort lexically in chronological order.
    """
    value: str

    def __post_init__(self):
        if not self.value:
            raise ValueError("Release identifier cannot be empty")
        if self.value in RESERVED_NAMES:
            raise ValueError(f"Release identifier {self.value!r} is reserved")
        if not _IDENTIFIER_RE.match(self.value):
            raise ValueError(f"Invalid release identifier: {self.value!r}")

    @staticmethod
    def generate(now: datetime | None = None) -> "ReleaseIdentifier":
        moment = now or datetime.now(UTC)
        return ReleaseIdentifier(moment.strftime("%Y%m%d%H%M%S"))

    def __str__(self):
        return self.value
