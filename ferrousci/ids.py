"""UUID-based identifiers for the entities of the CI/CD domain."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import TypeVar

_IdT = TypeVar("_IdT", bound="EntityId")


@dataclass(frozen=True)
class EntityId:
    """An identifier wrapping a UUID.

    Identifiers of different entity kinds never compare equal, even when
    they wrap the same UUID. A default-constructed identifier holds a
    fresh random (version 4) UUID.
    """

    value: uuid.UUID = field(default_factory=uuid.uuid4)

    def __post_init__(self) -> None:
        if not isinstance(self.value, uuid.UUID):
            raise TypeError(
                f"{type(self).__name__} requires a UUID, got {type(self.value).__name__}"
            )

    @classmethod
    def new(cls: type[_IdT]) -> _IdT:
        """Create an identifier with a fresh random UUID."""
        return cls()

    @classmethod
    def from_uuid(cls: type[_IdT], value: uuid.UUID) -> _IdT:
        """Wrap an existing UUID."""
        return cls(value)

    @classmethod
    def parse(cls: type[_IdT], text: str) -> _IdT:
        """Parse an identifier from its textual UUID form.

        Raises ValueError when ``text`` is not a valid UUID.
        """
        return cls(uuid.UUID(text))

    def as_uuid(self) -> uuid.UUID:
        """The wrapped UUID."""
        return self.value

    def __str__(self) -> str:
        return str(self.value)


class AgentId(EntityId):
    """Identifier of a build agent."""


class ArtifactId(EntityId):
    """Identifier of a build artifact."""


class BuildId(EntityId):
    """Identifier of a build."""


class JobId(EntityId):
    """Identifier of a job."""


class PipelineId(EntityId):
    """Identifier of a pipeline."""


class ProjectId(EntityId):
    """Identifier of a project."""


class StageId(EntityId):
    """Identifier of a pipeline stage."""


class UserId(EntityId):
    """Identifier of a user."""


class WorkspaceId(EntityId):
    """Identifier of a workspace."""