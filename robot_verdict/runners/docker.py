"""Runner executing the suites inside the Robot Framework Docker image."""

import os
from collections.abc import Sequence
from dataclasses import dataclass

from pydantic import BaseModel

from robot_verdict.config import RobotPaths
from robot_verdict.runners.base import ProcessRunner
from robot_verdict.runners.manifest import RunnerManifest

CONTAINER_ROOT = "/opt/robotframework"


class DockerRunnerConfig(BaseModel):
    """Configuration for the Docker runner."""

    image: str = "ppodgorsek/robot-framework"
    shm_size: str = "1g"
    network: str = "host"
    run_as_current_user: bool = True
    timeout: float | None = None


@dataclass(frozen=True, kw_only=True)
class DockerRunner(ProcessRunner):
    """Runs the suites in a throwaway container.

    The logs, tests, resources and libs directories are bind-mounted so the
    report lands in ``paths.logs_path``.
    """

    config: DockerRunnerConfig

    @classmethod
    def from_config(cls, config: DockerRunnerConfig, paths: RobotPaths) -> "DockerRunner":
        """Create runner from its configuration."""
        return cls(config=config, paths=paths, timeout=config.timeout)

    def build_command(self, url: str) -> Sequence[str]:
        """Build the ``docker run`` command line."""
        command = ["docker", "run", "--rm", f"--shm-size={self.config.shm_size}"]
        if self.config.run_as_current_user:
            command.append(f"--user={os.getuid()}:{os.getgid()}")
        command.append(f"--network={self.config.network}")

        mounts = (
            (self.paths.logs_path, "results"),
            (self.paths.tests_path, "tests"),
            (self.paths.resources_path, "resources"),
            (self.paths.libs_path, "libs"),
        )
        for host_path, name in mounts:
            command.extend(["-v", f"{host_path}:{CONTAINER_ROOT}/{name}:Z"])

        robot_options = (
            f"--variable URL:{url} "
            f"--outputdir {CONTAINER_ROOT}/results "
            "--loglevel DEBUG"
        )
        command.extend(["-e", f"ROBOT_OPTIONS={robot_options}", self.config.image])
        return command


docker_manifest = RunnerManifest(
    config_cls=DockerRunnerConfig,
    runner_factory=DockerRunner.from_config,
)
