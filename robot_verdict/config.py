"""Filesystem layout shared by the runners and the report reader."""

import os
from pathlib import Path

from pydantic import BaseModel

DEFAULT_BASE_PATH = Path("/home/opc/dian_automatization/robot")
BASE_PATH_ENV = "ROBOT_PATH"


class RobotPaths(BaseModel):
    """Locations of the Robot suites, resources and run artifacts.

    Everything is derived from ``base_path``.
    """

    base_path: Path = DEFAULT_BASE_PATH

    @classmethod
    def from_env(cls) -> "RobotPaths":
        """Build paths honouring the ``ROBOT_PATH`` override."""
        if base_path := os.environ.get(BASE_PATH_ENV):
            return cls(base_path=Path(base_path))
        return cls()

    @property
    def logs_path(self) -> Path:
        """Directory receiving the run artifacts."""
        return self.base_path / "logs"

    @property
    def tests_path(self) -> Path:
        """Directory holding the suites."""
        return self.base_path / "tests"

    @property
    def resources_path(self) -> Path:
        """Directory holding shared resource files."""
        return self.base_path / "resources"

    @property
    def libs_path(self) -> Path:
        """Directory holding custom keyword libraries."""
        return self.base_path / "libs"

    @property
    def output_xml_path(self) -> Path:
        """Location of the report written by a run."""
        return self.logs_path / "output.xml"
