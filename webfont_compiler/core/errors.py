"""
Error types shared by build operations.
"""

import traceback
from dataclasses import dataclass


class ConfigurationError(ValueError):
    """Build-wide configuration problem no single font can recover from."""


@dataclass(frozen=True)
class BuildFailure:
    """Structured failure attached to a font instead of output."""

    kind: str
    message: str
    trace: str | None = None

    @classmethod
    def from_exception(cls, error: BaseException) -> "BuildFailure":
        """Capture an exception's class name, message and traceback."""
        trace = "".join(
            traceback.format_exception(type(error), error, error.__traceback__)
        )
        return cls(kind=type(error).__name__, message=str(error), trace=trace)

    def to_dict(self) -> dict[str, str | None]:
        return {"kind": self.kind, "message": self.message, "trace": self.trace}
