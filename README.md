# ferrousci

The domain core of a CI/CD system, in plain Python with no runtime
dependencies. It provides:

- `ferrousci.errors` – an exception hierarchy rooted at `CiError`
  (`ValidationError`, `NotFoundError`, `ConflictError`, `NetworkError`,
  `OperationTimeoutError` and others). Each error knows its HTTP status
  (`status_code()`) and whether it is worth retrying (`is_retryable()`).
  `CiError.context(text)` wraps an error in a `ContextError`, and the
  `add_context` context manager does the same for any `CiError` raised in
  its block. `ErrorResponse.from_error` turns an exception into an API
  payload with a machine-readable `code`; `to_dict()` leaves out absent
  `details` and `request_id`.
- `ferrousci.build_status` – the `BuildStatus` enum (`PENDING`, `RUNNING`,
  `SUCCESS`, `FAILED`, `CANCELLED`) with `is_terminal()`,
  `is_in_progress()`, `is_success()`, `is_failed()`, `description()` and
  `emoji()`.
- `ferrousci.ids` – UUID-backed identifiers built on `EntityId`:
  `AgentId`, `ArtifactId`, `BuildId`, `JobId`, `PipelineId`, `ProjectId`,
  `StageId`, `UserId`, `WorkspaceId`. Create them with `new()`,
  `from_uuid()` or `parse()`; identifiers of different kinds never compare
  equal.
- `ferrousci.pipeline_config` – `PipelineConfig`, `Stage`, `Job`, the
  triggers (`PushTrigger`, `PullRequestTrigger`, `ScheduleTrigger`,
  `ManualTrigger`, `TagTrigger`) and the records `WhenCondition`,
  `ArtifactConfig`, `CacheConfig`, `NotificationConfig` and
  `SlackNotification`. `validate()` raises `ValidationError` on an unusable
  configuration; `to_dict()` and `from_dict()` convert to and from plain
  data, with `from_dict()` raising `SerializationError` on bad input.
- `ferrousci.events` – `DomainEvent` and its concrete events
  (`BuildCreated`, `BuildStarted`, `BuildCompleted`, `PipelineCreated`,
  `AgentRegistered`, `UserCreated` and more), each with `event_type()`,
  `timestamp()`, `to_dict()` and `DomainEvent.from_dict()`; the abstract
  `EventPublisher` and `EventHandler` interfaces; and an
  `InMemoryEventPublisher` that keeps events in publication order.

## Installation

```
pip install ferrousci
```

## Example

```python
import asyncio
from datetime import datetime, timezone

from ferrousci.errors import ValidationError
from ferrousci.events import BuildCreated, InMemoryEventPublisher
from ferrousci.ids import BuildId, PipelineId, ProjectId
from ferrousci.pipeline_config import Job, ManualTrigger, PipelineConfig, Stage

job = Job("test")
job.add_command("make test")
config = PipelineConfig([Stage("build", [job])], [ManualTrigger()])
config.validate()  # raises ValidationError when the configuration is invalid

try:
    PipelineConfig([], []).validate()
except ValidationError as err:
    print(err, err.status_code())
    # Validation error: Pipeline must have at least one stage 400


async def main():
    publisher = InMemoryEventPublisher()
    await publisher.publish(
        BuildCreated(
            build_id=BuildId.new(),
            pipeline_id=PipelineId.new(),
            project_id=ProjectId.new(),
            number=1,
            created_at=datetime.now(timezone.utc),
        )
    )
    events = await publisher.get_events()
    print(events[0].event_type())  # build.created


asyncio.run(main())
```

## What it does not do

This package holds the domain vocabulary only. It has no command-line
tool, no HTTP server, no database or other persistent storage, no entities
or services for projects, pipelines, builds or agents, and it does not run
builds. Events are kept only in memory by `InMemoryEventPublisher`.

## Running the tests

```
pip install -e ".[test]"
pytest
```