"""Domain core of a CI/CD system: errors, identifiers, build status, pipeline configuration and events."""

__version__ = "0.1.0"

__all__ = ["build_status", "errors", "events", "ids", "pipeline_config"]