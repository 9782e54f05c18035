from datetime import datetime, timezone

import pytest

from ferrousci.build_status import BuildStatus
from ferrousci.errors import SerializationError
from ferrousci.events import (
    AgentDisconnected,
    AgentRegistered,
    BuildCancelled,
    BuildCompleted,
    BuildCreated,
    BuildStarted,
    DomainEvent,
    EventHandler,
    EventPublisher,
    InMemoryEventPublisher,
    PipelineConfigUpdated,
    PipelineCreated,
    PipelineDisabled,
    PipelineEnabled,
    ProjectCreated,
    UserCreated,
    UserDeactivated,
    UserPasswordChanged,
)
from ferrousci.ids import AgentId, BuildId, PipelineId, ProjectId, UserId

NOW = datetime(2024, 5, 6, 7, 8, 9, 123456, tzinfo=timezone.utc)


def _build_created(number=1, at=None):
    return BuildCreated(
        build_id=BuildId.new(),
        pipeline_id=PipelineId.new(),
        project_id=ProjectId.new(),
        number=number,
        created_at=at or datetime.now(timezone.utc),
    )


def test_event_type():
    assert _build_created().event_type() == "build.created"


def test_event_timestamp():
    now = datetime.now(timezone.utc)
    event = BuildStarted(build_id=BuildId.new(), agent_id=AgentId.new(), started_at=now)
    assert event.timestamp() == now


ALL_EVENTS = [
    (_build_created(at=NOW), "build.created"),
    (BuildStarted(BuildId.new(), AgentId.new(), NOW), "build.started"),
    (BuildCompleted(BuildId.new(), BuildStatus.SUCCESS, NOW), "build.completed"),
    (BuildCancelled(BuildId.new(), NOW), "build.cancelled"),
    (PipelineCreated(PipelineId.new(), ProjectId.new(), "ci", NOW), "pipeline.created"),
    (PipelineConfigUpdated(PipelineId.new(), 1, 2, NOW), "pipeline.config_updated"),
    (PipelineEnabled(PipelineId.new(), NOW), "pipeline.enabled"),
    (PipelineDisabled(PipelineId.new(), NOW), "pipeline.disabled"),
    (ProjectCreated(ProjectId.new(), "proj", "https://git.example.com/r.git", NOW), "project.created"),
    (AgentRegistered(AgentId.new(), "agent-1", NOW), "agent.registered"),
    (AgentDisconnected(AgentId.new(), NOW), "agent.disconnected"),
    (UserCreated(UserId.new(), "alice", "alice@example.com", "Admin", NOW), "user.created"),
    (UserPasswordChanged(UserId.new(), NOW), "user.password_changed"),
    (UserDeactivated(UserId.new(), NOW), "user.deactivated"),
]


@pytest.mark.parametrize("event, expected_type", ALL_EVENTS)
def test_every_event_type_and_timestamp(event, expected_type):
    assert event.event_type() == expected_type
    assert event.timestamp() == NOW


@pytest.mark.parametrize("event, _", ALL_EVENTS)
def test_round_trip(event, _):
    data = event.to_dict()
    assert data["type"] == type(event).__name__
    assert DomainEvent.from_dict(data) == event


def test_to_dict_fields():
    build_id = BuildId.new()
    event = BuildCompleted(build_id=build_id, status=BuildStatus.FAILED, completed_at=NOW)
    assert event.to_dict() == {
        "type": "BuildCompleted",
        "build_id": str(build_id),
        "status": "Failed",
        "completed_at": "2024-05-06T07:08:09.123456Z",
    }


def test_from_dict_nanosecond_timestamp():
    build_id = BuildId.new()
    event = DomainEvent.from_dict(
        {"type": "BuildCancelled", "build_id": str(build_id), "cancelled_at": "2024-01-02T03:04:05.123456789Z"}
    )
    assert event == BuildCancelled(
        build_id=build_id,
        cancelled_at=datetime(2024, 1, 2, 3, 4, 5, 123456, tzinfo=timezone.utc),
    )


def test_from_dict_unknown_type():
    with pytest.raises(SerializationError):
        DomainEvent.from_dict({"type": "BuildExploded"})


def test_from_dict_missing_field():
    data = _build_created().to_dict()
    del data["number"]
    with pytest.raises(SerializationError) as info:
        DomainEvent.from_dict(data)
    assert "number" in str(info.value)


def test_from_dict_bad_id():
    data = _build_created().to_dict()
    data["build_id"] = "not-a-uuid"
    with pytest.raises(SerializationError):
        DomainEvent.from_dict(data)


def test_abstract_interfaces_cannot_be_instantiated():
    with pytest.raises(TypeError):
        EventPublisher()
    with pytest.raises(TypeError):
        EventHandler()


@pytest.mark.asyncio
async def test_in_memory_publisher():
    publisher = InMemoryEventPublisher()
    event = _build_created()
    await publisher.publish(event)
    events = await publisher.get_events()
    assert len(events) == 1
    assert events[0].event_type() == "build.created"
    assert events[0] == event


@pytest.mark.asyncio
async def test_batch_publish():
    publisher = InMemoryEventPublisher()
    first = _build_created()
    second = BuildStarted(BuildId.new(), AgentId.new(), datetime.now(timezone.utc))
    await publisher.publish_batch([first, second])
    stored = await publisher.get_events()
    assert stored == [first, second]


@pytest.mark.asyncio
async def test_clear_and_copy():
    publisher = InMemoryEventPublisher()
    await publisher.publish(_build_created())
    snapshot = await publisher.get_events()
    snapshot.clear()
    assert len(await publisher.get_events()) == 1
    await publisher.clear()
    assert await publisher.get_events() == []