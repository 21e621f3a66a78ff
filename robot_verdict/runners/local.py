"""Runner executing the suites with a locally installed ``robot``."""

from collections.abc import Sequence
from dataclasses import dataclass

from pydantic import BaseModel

from robot_verdict.config import RobotPaths
from robot_verdict.runners.base import ProcessRunner
from robot_verdict.runners.manifest import RunnerManifest


class LocalRunnerConfig(BaseModel):
    """Configuration for the local runner."""

    executable: str = "robot"
    timeout: float | None = None


@dataclass(frozen=True, kw_only=True)
class LocalRunner(ProcessRunner):
    """Runs the suites on the host, without a container."""

    config: LocalRunnerConfig

    @classmethod
    def from_config(cls, config: LocalRunnerConfig, paths: RobotPaths) -> "LocalRunner":
        """Create runner from its configuration."""
        return cls(config=config, paths=paths, timeout=config.timeout)

    def build_command(self, url: str) -> Sequence[str]:
        """Build the ``robot`` command line."""
        return [
            self.config.executable,
            "--variable",
            f"URL:{url}",
            "--outputdir",
            str(self.paths.logs_path),
            "--loglevel",
            "DEBUG",
            str(self.paths.tests_path),
        ]


local_manifest = RunnerManifest(
    config_cls=LocalRunnerConfig,
    runner_factory=LocalRunner.from_config,
)
