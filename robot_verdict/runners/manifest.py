"""Runner manifest definition for the plugin system."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel

from robot_verdict.config import RobotPaths
from robot_verdict.runners.base import ProcessRunner

ConfigT = TypeVar("ConfigT", bound=BaseModel)


@dataclass(frozen=True, kw_only=True)
class RunnerManifest(Generic[ConfigT]):
    """Manifest describing a runner plugin.

    The manifest contains references to the configuration class and the
    runner factory so runners can be picked by key at startup.
    """

    config_cls: type[ConfigT]
    runner_factory: Callable[[ConfigT, RobotPaths], ProcessRunner]
