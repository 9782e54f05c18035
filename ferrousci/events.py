"""Domain events and the publishers that distribute them."""

from __future__ import annotations

import asyncio
import re
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, Callable, ClassVar

from .build_status import BuildStatus
from .errors import SerializationError
from .ids import AgentId, BuildId, EntityId, PipelineId, ProjectId, UserId


class DomainEvent:
    """Base class of every domain event."""

    _event_type: ClassVar[str] = ""
    _time_field: ClassVar[str] = ""
    _registry: ClassVar[dict[str, type[DomainEvent]]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        DomainEvent._registry[cls.__name__] = cls

    def event_type(self) -> str:
        """Dotted name of the event, such as ``build.created``."""
        return self._event_type

    def timestamp(self) -> datetime:
        """When the event happened."""
        return getattr(self, self._time_field)

    def to_dict(self) -> dict[str, Any]:
        """Plain-data form, with the event kind under ``type``."""
        data: dict[str, Any] = {"type": type(self).__name__}
        for f in fields(self):  # type: ignore[arg-type]
            data[f.name] = _encode(getattr(self, f.name))
        return data

    @classmethod
    def from_dict(cls, data: Any) -> DomainEvent:
        """Rebuild an event from its plain-data form.

        Raises SerializationError when the kind is unknown or a field is
        missing or malformed.
        """
        if not isinstance(data, dict):
            raise SerializationError(f"expected a mapping, got {type(data).__name__}")
        if "type" not in data:
            raise SerializationError("missing field `type`")
        event_cls = DomainEvent._registry.get(data["type"])
        if event_cls is None or (cls is not DomainEvent and event_cls is not cls):
            raise SerializationError(f"unknown event type `{data['type']}`")
        values = {}
        for f in fields(event_cls):  # type: ignore[arg-type]
            if f.name not in data:
                raise SerializationError(f"missing field `{f.name}`")
            try:
                values[f.name] = _decode(f.name, data[f.name])
            except (ValueError, TypeError, AttributeError) as error:
                raise SerializationError(f"invalid field `{f.name}`: {error}") from error
        return event_cls(**values)


@dataclass(frozen=True)
class BuildCreated(DomainEvent):
    _event_type: ClassVar[str] = "build.created"
    _time_field: ClassVar[str] = "created_at"
    build_id: BuildId
    pipeline_id: PipelineId
    project_id: ProjectId
    number: int
    created_at: datetime


@dataclass(frozen=True)
class BuildStarted(DomainEvent):
    _event_type: ClassVar[str] = "build.started"
    _time_field: ClassVar[str] = "started_at"
    build_id: BuildId
    agent_id: AgentId
    started_at: datetime


@dataclass(frozen=True)
class BuildCompleted(DomainEvent):
    _event_type: ClassVar[str] = "build.completed"
    _time_field: ClassVar[str] = "completed_at"
    build_id: BuildId
    status: BuildStatus
    completed_at: datetime


@dataclass(frozen=True)
class BuildCancelled(DomainEvent):
    _event_type: ClassVar[str] = "build.cancelled"
    _time_field: ClassVar[str] = "cancelled_at"
    build_id: BuildId
    cancelled_at: datetime


@dataclass(frozen=True)
class PipelineCreated(DomainEvent):
    _event_type: ClassVar[str] = "pipeline.created"
    _time_field: ClassVar[str] = "created_at"
    pipeline_id: PipelineId
    project_id: ProjectId
    name: str
    created_at: datetime


@dataclass(frozen=True)
class PipelineConfigUpdated(DomainEvent):
    _event_type: ClassVar[str] = "pipeline.config_updated"
    _time_field: ClassVar[str] = "updated_at"
    pipeline_id: PipelineId
    old_version: int
    new_version: int
    updated_at: datetime


@dataclass(frozen=True)
class PipelineEnabled(DomainEvent):
    _event_type: ClassVar[str] = "pipeline.enabled"
    _time_field: ClassVar[str] = "enabled_at"
    pipeline_id: PipelineId
    enabled_at: datetime


@dataclass(frozen=True)
class PipelineDisabled(DomainEvent):
    _event_type: ClassVar[str] = "pipeline.disabled"
    _time_field: ClassVar[str] = "disabled_at"
    pipeline_id: PipelineId
    disabled_at: datetime


@dataclass(frozen=True)
class ProjectCreated(DomainEvent):
    _event_type: ClassVar[str] = "project.created"
    _time_field: ClassVar[str] = "created_at"
    project_id: ProjectId
    name: str
    repository_url: str
    created_at: datetime


@dataclass(frozen=True)
class AgentRegistered(DomainEvent):
    _event_type: ClassVar[str] = "agent.registered"
    _time_field: ClassVar[str] = "created_at"
    agent_id: AgentId
    name: str
    created_at: datetime


@dataclass(frozen=True)
class AgentDisconnected(DomainEvent):
    _event_type: ClassVar[str] = "agent.disconnected"
    _time_field: ClassVar[str] = "disconnected_at"
    agent_id: AgentId
    disconnected_at: datetime


@dataclass(frozen=True)
class UserCreated(DomainEvent):
    """A user account was created; ``role`` is the role's name."""

    _event_type: ClassVar[str] = "user.created"
    _time_field: ClassVar[str] = "created_at"
    user_id: UserId
    username: str
    email: str
    role: str
    created_at: datetime


@dataclass(frozen=True)
class UserPasswordChanged(DomainEvent):
    _event_type: ClassVar[str] = "user.password_changed"
    _time_field: ClassVar[str] = "changed_at"
    user_id: UserId
    changed_at: datetime


@dataclass(frozen=True)
class UserDeactivated(DomainEvent):
    _event_type: ClassVar[str] = "user.deactivated"
    _time_field: ClassVar[str] = "deactivated_at"
    user_id: UserId
    deactivated_at: datetime


_ID_FIELDS: dict[str, Callable[[str], EntityId]] = {
    "build_id": BuildId.parse,
    "pipeline_id": PipelineId.parse,
    "project_id": ProjectId.parse,
    "agent_id": AgentId.parse,
    "user_id": UserId.parse,
}

_FRACTION = re.compile(r"\.(\d+)")


def _format_time(moment: datetime) -> str:
    text = moment.isoformat()
    if text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text


def _parse_time(text: str) -> datetime:
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    return datetime.fromisoformat(text)


def _encode(value: Any) -> Any:
    if isinstance(value, EntityId):
        return str(value)
    if isinstance(value, datetime):
        return _format_time(value)
    if isinstance(value, BuildStatus):
        return value.value
    return value


def _decode(name: str, value: Any) -> Any:
    if name in _ID_FIELDS:
        return _ID_FIELDS[name](value)
    if name == "status":
        return BuildStatus(value)
    if name.endswith("_at"):
        return _parse_time(value)
    return value


class EventPublisher(ABC):
    """Something that distributes domain events."""

    @abstractmethod
    async def publish(self, event: DomainEvent) -> None:
        """Publish one event."""

    @abstractmethod
    async def publish_batch(self, events: Iterable[DomainEvent]) -> None:
        """Publish several events in order."""


class EventHandler(ABC):
    """Something that reacts to domain events."""

    @abstractmethod
    async def handle(self, event: DomainEvent) -> None:
        """React to one event."""

    @abstractmethod
    def interested_in(self) -> list[str]:
        """Event types this handler wants to receive."""


class InMemoryEventPublisher(EventPublisher):
    """Publisher that keeps every event in memory, in publication order."""

    def __init__(self) -> None:
        self._events: list[DomainEvent] = []
        self._lock = asyncio.Lock()

    async def publish(self, event: DomainEvent) -> None:
        async with self._lock:
            self._events.append(event)

    async def publish_batch(self, events: Iterable[DomainEvent]) -> None:
        async with self._lock:
            self._events.extend(events)

    async def get_events(self) -> list[DomainEvent]:
        """A copy of every event published so far."""
        async with self._lock:
            return list(self._events)

    async def clear(self) -> None:
        """Forget every stored event."""
        async with self._lock:
            self._events.clear()