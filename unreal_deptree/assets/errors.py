"""Failure records and the exceptions that carry them."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class AssetResolutionFailure:
    """A reference or file that could not be turned into an asset node.

    Collected as data alongside successes. Two failures are equal when they
    point at the same path, whatever the reason.
    """

    path: str
    reason: str = field(compare=False)

    @classmethod
    def of(cls, path: str | Path, reason: str) -> "AssetResolutionFailure":
        return cls(str(path), reason)

    def __str__(self) -> str:
        return f'Failed to read asset ("{self.path}"). Reason: {self.reason}'

    def to_dict(self) -> dict:
        return {"path": self.path, "reason": self.reason}


class AssetReadError(Exception):
    """An asset file could not be opened or its header could not be parsed."""

    def __init__(self, path: str | Path, reason: str):
        self.failure = AssetResolutionFailure.of(path, reason)
        super().__init__(str(self.failure))

    @property
    def path(self) -> str:
        return self.failure.path

    @property
    def reason(self) -> str:
        return self.failure.reason


class AssetResolutionError(Exception):
    """An import reference could not be mapped to an existing file."""

    def __init__(self, path: str | Path, reason: str):
        self.failure = AssetResolutionFailure.of(path, reason)
        super().__init__(str(self.failure))

    @property
    def path(self) -> str:
        return self.failure.path

    @property
    def reason(self) -> str:
        return self.failure.reason
