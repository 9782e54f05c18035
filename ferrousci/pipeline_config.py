"""Pipeline configuration: stages, jobs, triggers and related settings."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, ClassVar

from .errors import SerializationError, ValidationError


@dataclass
class WhenCondition:
    """Condition for running a stage or job."""

    branch: str | None = None
    event: str | None = None
    status: str | None = None


@dataclass
class ArtifactConfig:
    """Artifacts to keep after a job."""

    paths: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)
    name: str | None = None
    expire_in: int | None = None


@dataclass
class CacheConfig:
    """Cache settings of a job; ``policy`` is pull, push or pull-push."""

    key: str
    paths: list[str] = field(default_factory=list)
    policy: str | None = None


@dataclass
class SlackNotification:
    """Slack notification settings."""

    channel: str
    on_success: bool = False
    on_failure: bool = False


@dataclass
class NotificationConfig:
    """Notification settings of a pipeline."""

    email: list[str] | None = None
    slack: SlackNotification | None = None
    webhooks: list[str] = field(default_factory=list)


class Trigger:
    """Base class of the events that start a pipeline."""

    kind: ClassVar[str] = ""


@dataclass
class PushTrigger(Trigger):
    """Start on a push to one of ``branches``."""

    kind: ClassVar[str] = "Push"
    branches: list[str] = field(default_factory=list)


@dataclass
class PullRequestTrigger(Trigger):
    """Start on a pull request against one of ``branches``."""

    kind: ClassVar[str] = "PullRequest"
    branches: list[str] = field(default_factory=list)


@dataclass
class ScheduleTrigger(Trigger):
    """Start on a cron schedule."""

    kind: ClassVar[str] = "Schedule"
    cron: str = ""


@dataclass
class ManualTrigger(Trigger):
    """Start only when asked to."""

    kind: ClassVar[str] = "Manual"


@dataclass
class TagTrigger(Trigger):
    """Start when a tag matching one of ``patterns`` is pushed."""

    kind: ClassVar[str] = "Tag"
    patterns: list[str] = field(default_factory=list)


_TRIGGERS: dict[str, type[Trigger]] = {
    cls.kind: cls
    for cls in (PushTrigger, PullRequestTrigger, ScheduleTrigger, ManualTrigger, TagTrigger)
}


@dataclass
class Job:
    """A job: commands run in an optional container image."""

    name: str
    image: str | None = None
    commands: list[str] = field(default_factory=list)
    environment: dict[str, str] = field(default_factory=dict)
    working_directory: str | None = None
    timeout: int | None = None
    retry: int | None = None
    artifacts: ArtifactConfig | None = None
    cache: CacheConfig | None = None
    needs: list[str] = field(default_factory=list)
    when: WhenCondition | None = None

    def validate(self) -> None:
        """Raise ValidationError unless the job is runnable."""
        if not self.name:
            raise ValidationError("Job name cannot be empty")
        if not self.commands and self.image is None:
            raise ValidationError("Job must have at least one command or an image")

    def add_command(self, command: str) -> None:
        self.commands.append(command)

    def set_image(self, image: str) -> None:
        self.image = image


@dataclass
class Stage:
    """A named group of jobs."""

    name: str
    jobs: list[Job] = field(default_factory=list)
    parallel: bool = False
    when: WhenCondition | None = None

    def validate(self) -> None:
        """Raise ValidationError unless the stage and all its jobs are valid."""
        if not self.name:
            raise ValidationError("Stage name cannot be empty")
        if not self.jobs:
            raise ValidationError("Stage must have at least one job")
        for job in self.jobs:
            job.validate()


@dataclass
class PipelineConfig:
    """Complete configuration of a pipeline."""

    stages: list[Stage] = field(default_factory=list)
    triggers: list[Trigger] = field(default_factory=list)
    version: str = "1.0"
    environment: dict[str, str] = field(default_factory=dict)
    notifications: NotificationConfig | None = None

    def validate(self) -> None:
        """Raise ValidationError unless the configuration is usable."""
        if not self.version:
            raise ValidationError("Pipeline version cannot be empty")
        if not self.stages:
            raise ValidationError("Pipeline must have at least one stage")
        for stage in self.stages:
            stage.validate()
        if not self.triggers:
            raise ValidationError("Pipeline must have at least one trigger")

    def add_stage(self, stage: Stage) -> None:
        self.stages.append(stage)

    def add_trigger(self, trigger: Trigger) -> None:
        self.triggers.append(trigger)

    def set_environment(self, key: str, value: str) -> None:
        self.environment[key] = value

    def to_dict(self) -> dict[str, Any]:
        """Plain-data form; triggers carry their kind under ``type``."""
        return _encode(self)

    @classmethod
    def from_dict(cls, data: Any) -> PipelineConfig:
        """Build a configuration from its plain-data form.

        Raises SerializationError when required data is missing or malformed.
        """
        mapping = _mapping(data, "pipeline config")
        return cls(
            version=_required(mapping, "version"),
            stages=[_stage(item) for item in _required_list(mapping, "stages")],
            triggers=[_trigger(item) for item in _required_list(mapping, "triggers")],
            environment=dict(_required(mapping, "environment")),
            notifications=_optional(mapping, "notifications", _notifications),
        )


def _encode(value: Any) -> Any:
    if isinstance(value, Trigger):
        data = {"type": value.kind}
        data.update({f.name: _encode(getattr(value, f.name)) for f in fields(value)})
        return data
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: _encode(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, list):
        return [_encode(item) for item in value]
    if isinstance(value, dict):
        return {key: _encode(item) for key, item in value.items()}
    return value


def _mapping(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise SerializationError(f"expected a mapping for {what}, got {type(data).__name__}")
    return data


def _required(data: dict[str, Any], key: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise SerializationError(f"missing field `{key}`") from None


def _required_list(data: dict[str, Any], key: str) -> list[Any]:
    value = _required(data, key)
    if not isinstance(value, list):
        raise SerializationError(f"field `{key}` must be a list")
    return value


def _optional(data: dict[str, Any], key: str, decode: Any) -> Any:
    value = data.get(key)
    return None if value is None else decode(value)


def _when(data: Any) -> WhenCondition:
    mapping = _mapping(data, "when condition")
    return WhenCondition(
        branch=mapping.get("branch"),
        event=mapping.get("event"),
        status=mapping.get("status"),
    )


def _artifacts(data: Any) -> ArtifactConfig:
    mapping = _mapping(data, "artifact config")
    return ArtifactConfig(
        paths=list(_required_list(mapping, "paths")),
        exclude=list(_required_list(mapping, "exclude")),
        name=mapping.get("name"),
        expire_in=mapping.get("expire_in"),
    )


def _cache(data: Any) -> CacheConfig:
    mapping = _mapping(data, "cache config")
    return CacheConfig(
        key=_required(mapping, "key"),
        paths=list(_required_list(mapping, "paths")),
        policy=mapping.get("policy"),
    )


def _slack(data: Any) -> SlackNotification:
    mapping = _mapping(data, "slack notification")
    return SlackNotification(
        channel=_required(mapping, "channel"),
        on_success=bool(_required(mapping, "on_success")),
        on_failure=bool(_required(mapping, "on_failure")),
    )


def _notifications(data: Any) -> NotificationConfig:
    mapping = _mapping(data, "notification config")
    return NotificationConfig(
        email=_optional(mapping, "email", list),
        slack=_optional(mapping, "slack", _slack),
        webhooks=list(_required_list(mapping, "webhooks")),
    )


def _job(data: Any) -> Job:
    mapping = _mapping(data, "job")
    return Job(
        name=_required(mapping, "name"),
        image=mapping.get("image"),
        commands=list(_required_list(mapping, "commands")),
        environment=dict(_required(mapping, "environment")),
        working_directory=mapping.get("working_directory"),
        timeout=mapping.get("timeout"),
        retry=mapping.get("retry"),
        artifacts=_optional(mapping, "artifacts", _artifacts),
        cache=_optional(mapping, "cache", _cache),
        needs=list(_required_list(mapping, "needs")),
        when=_optional(mapping, "when", _when),
    )


def _stage(data: Any) -> Stage:
    mapping = _mapping(data, "stage")
    return Stage(
        name=_required(mapping, "name"),
        jobs=[_job(item) for item in _required_list(mapping, "jobs")],
        parallel=bool(_required(mapping, "parallel")),
        when=_optional(mapping, "when", _when),
    )


def _trigger(data: Any) -> Trigger:
    mapping = _mapping(data, "trigger")
    kind = _required(mapping, "type")
    trigger_cls = _TRIGGERS.get(kind)
    if trigger_cls is None:
        raise SerializationError(f"unknown trigger type `{kind}`")
    values = {}
    for f in fields(trigger_cls):
        value = _required(mapping, f.name)
        values[f.name] = list(value) if isinstance(value, list) else value
    return trigger_cls(**values)