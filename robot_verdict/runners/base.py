"""Abstract base class for the processes that execute Robot suites."""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from robot_verdict.config import RobotPaths
from robot_verdict.models.result import ProcessOutput

log = logging.getLogger(__name__)

READ_CHUNK_SIZE = 64 * 1024


class RunnerError(Exception):
    """Raised when the Robot process could not be run to completion."""

    def __init__(self, message: str, output: str = "") -> None:
        super().__init__(message)
        self.output = output


@dataclass(frozen=True, kw_only=True)
class ProcessRunner(ABC):
    """Executes the Robot suites against a target URL.

    A run that finishes with a non-zero exit code is a normal result: failing
    tests make Robot exit non-zero. Only a process that cannot be started or
    does not finish in time raises ``RunnerError``.
    """

    paths: RobotPaths
    timeout: float | None = None

    @abstractmethod
    def build_command(self, url: str) -> Sequence[str]:
        """Return the command line running the suites against ``url``."""

    async def run(self, url: str) -> ProcessOutput:
        """Run the suites and capture their output.

        Args:
            url: Target URL handed to the suites as the ``URL`` variable

        Returns:
            Captured stdout, stderr and exit code

        Raises:
            RunnerError: If the process cannot be started or times out

        """
        command = self.build_command(url)
        log.info("Running Robot command: %s", " ".join(command))

        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise RunnerError(f"Cannot start {command[0]}: {e}") from e

        stdout = bytearray()
        stderr = bytearray()
        try:
            await asyncio.wait_for(
                asyncio.gather(
                    _drain(process.stdout, stdout),
                    _drain(process.stderr, stderr),
                    process.wait(),
                ),
                timeout=self.timeout,
            )
        except TimeoutError as e:
            process.kill()
            await process.wait()
            raise RunnerError(
                f"Robot run did not complete within {self.timeout} seconds",
                output=stdout.decode(errors="replace"),
            ) from e

        output = ProcessOutput(
            stdout=stdout.decode(errors="replace"),
            stderr=stderr.decode(errors="replace"),
            exit_code=process.returncode,
        )

        log.debug("stdout: %s", output.stdout)
        if output.stderr:
            log.warning("stderr: %s", output.stderr)

        if output.exit_code != 0:
            log.error("Robot process exited with code %s", output.exit_code)
            if not output.stdout:
                return ProcessOutput(
                    stdout=f"Error: exit code {output.exit_code}",
                    stderr=output.stderr,
                    exit_code=output.exit_code,
                )

        return output


async def _drain(stream: asyncio.StreamReader | None, buffer: bytearray) -> None:
    # Appends per chunk; the buffer keeps everything read before a cancellation.
    if stream is None:
        return
    while chunk := await stream.read(READ_CHUNK_SIZE):
        buffer.extend(chunk)
