"""Lifecycle status of a build."""

from __future__ import annotations

from enum import Enum


class BuildStatus(Enum):
    """Status of a build."""

    PENDING = "Pending"
    RUNNING = "Running"
    SUCCESS = "Success"
    FAILED = "Failed"
    CANCELLED = "Cancelled"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def default(cls) -> BuildStatus:
        """Status of a freshly created build."""
        return cls.PENDING

    def is_terminal(self) -> bool:
        """Whether the build has finished."""
        return self in (BuildStatus.SUCCESS, BuildStatus.FAILED, BuildStatus.CANCELLED)

    def is_in_progress(self) -> bool:
        return self is BuildStatus.RUNNING

    def is_success(self) -> bool:
        return self is BuildStatus.SUCCESS

    def is_failed(self) -> bool:
        return self is BuildStatus.FAILED

    def description(self) -> str:
        """Human-readable description."""
        return _DESCRIPTIONS[self]

    def emoji(self) -> str:
        """Emoji representation."""
        return _EMOJI[self]


_DESCRIPTIONS = {
    BuildStatus.PENDING: "Waiting to start",
    BuildStatus.RUNNING: "Running",
    BuildStatus.SUCCESS: "Completed successfully",
    BuildStatus.FAILED: "Failed",
    BuildStatus.CANCELLED: "Cancelled",
}

_EMOJI = {
    BuildStatus.PENDING: "\u23f8\ufe0f",
    BuildStatus.RUNNING: "\U0001f3c3",
    BuildStatus.SUCCESS: "\u2705",
    BuildStatus.FAILED: "\u274c",
    BuildStatus.CANCELLED: "\U0001f6ab",
}