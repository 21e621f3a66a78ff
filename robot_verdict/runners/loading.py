"""Runner plugins: discovery through entry points and construction from JSON."""

import logging
from importlib.metadata import entry_points
from typing import Any

from pydantic import ValidationError

from robot_verdict.config import RobotPaths
from robot_verdict.runners.base import ProcessRunner
from robot_verdict.runners.manifest import RunnerManifest

log = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "robot_verdict.runners"


class RunnerNotFoundError(Exception):
    """Raised when no runner plugin is registered under a key."""


class RunnerConfigError(Exception):
    """Raised when a runner configuration is not valid for its runner."""


def available_runners() -> list[str]:
    """Return the keys of the installed runner plugins."""
    # An editable install next to a regular one registers a key twice.
    return sorted({entry.name for entry in entry_points(group=ENTRY_POINT_GROUP)})


def load_runner_manifest(key: str) -> RunnerManifest[Any]:
    """Load the manifest of the runner registered under ``key``.

    Raises:
        RunnerNotFoundError: If no runner with the given key is installed

    """
    matches = entry_points(group=ENTRY_POINT_GROUP, name=key)
    if not matches:
        raise RunnerNotFoundError(
            f"Unknown runner '{key}', expected one of: {', '.join(available_runners())}"
        )

    manifest: RunnerManifest[Any] = next(iter(matches)).load()
    return manifest


def load_runner(key: str, config_json: str, paths: RobotPaths) -> ProcessRunner:
    """Build the runner registered under ``key`` from its JSON configuration.

    Args:
        key: Runner key as registered in pyproject.toml ("docker", "local")
        config_json: JSON object validated against the runner's config model
        paths: Locations of the suites and run artifacts

    Returns:
        The configured runner

    Raises:
        RunnerNotFoundError: If no runner with the given key is installed
        RunnerConfigError: If the configuration is not valid JSON or does not
            match the runner's config model

    """
    manifest = load_runner_manifest(key)
    try:
        config = manifest.config_cls.model_validate_json(config_json)
    except ValidationError as e:
        raise RunnerConfigError(f"Invalid configuration for runner '{key}': {e}") from e

    log.debug("Runner %s configured with %s", key, config.model_dump_json())
    return manifest.runner_factory(config, paths)
