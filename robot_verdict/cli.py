"""CLI entry point for running Robot suites and reading their verdict."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from aiohttp import web

from robot_verdict.composer import (
    ExecutionFailure,
    TestsFailed,
    check_outcome,
    compose_outcome,
    execute_robot_test,
    to_response,
)
from robot_verdict.config import RobotPaths
from robot_verdict.models.result import RunOutcome
from robot_verdict.runners.loading import (
    RunnerConfigError,
    RunnerNotFoundError,
    load_runner,
)
from robot_verdict.server import create_app

EXIT_SUCCESS = 0
EXIT_TESTS_FAILED = 1
EXIT_EXECUTION_FAILED = 2


class ConsoleUnreadableError(Exception):
    """Raised when the console output file given to ``parse`` cannot be read."""


def exit_code_for(result: RunOutcome | TestsFailed | ExecutionFailure) -> int:
    """Map a run result to the process exit code."""
    if isinstance(result, ExecutionFailure):
        return EXIT_EXECUTION_FAILED
    if isinstance(result, RunOutcome) and result.success:
        return EXIT_SUCCESS
    return EXIT_TESTS_FAILED


def print_result(result: RunOutcome | TestsFailed | ExecutionFailure) -> None:
    """Print the response payload of a run as JSON."""
    _, payload = to_response(result)
    print(json.dumps(payload, indent=2))


async def run(
    url: str,
    runner_key: str,
    runner_config_json: str,
    paths: RobotPaths,
) -> int:
    """Run the suites once and return exit code."""
    log = logging.getLogger("robot_verdict")

    log.info("Loading runner: %s", runner_key)
    runner = load_runner(runner_key, runner_config_json, paths)

    result: RunOutcome | TestsFailed | ExecutionFailure
    try:
        result = await execute_robot_test(url, runner, paths.output_xml_path)
    except (TestsFailed, ExecutionFailure) as e:
        result = e

    print_result(result)
    return exit_code_for(result)


def parse(report_path: Path, console_path: Path | None) -> int:
    """Compose a verdict from artifacts of an earlier run and return exit code."""
    console_text = read_console(console_path) if console_path else ""
    result: RunOutcome | TestsFailed
    try:
        result = check_outcome(compose_outcome(console_text, report_path))
    except TestsFailed as e:
        result = e

    print_result(result)
    return exit_code_for(result)


def read_console(console_path: Path) -> str:
    """Read saved console output.

    Raises:
        ConsoleUnreadableError: If the file cannot be read or is not UTF-8

    """
    try:
        return console_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConsoleUnreadableError(
            f"Cannot read console output {console_path}: {e}"
        ) from e


def serve(
    host: str,
    port: int,
    runner_key: str,
    runner_config_json: str,
    paths: RobotPaths,
) -> None:
    """Serve Robot runs over HTTP until interrupted."""
    runner = load_runner(runner_key, runner_config_json, paths)
    web.run_app(create_app(runner, paths), host=host, port=port)


def _add_runner_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--runner",
        default="docker",
        help="Runner key (docker, local)",
    )
    parser.add_argument(
        "--runner-config",
        default="{}",
        help="JSON configuration for the runner",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Run Robot Framework suites and report their verdict"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log at DEBUG level"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run the suites once")
    run_parser.add_argument("--url", required=True, help="Target URL for the suites")
    _add_runner_arguments(run_parser)

    parse_parser = subparsers.add_parser(
        "parse", help="Read the verdict of an earlier run"
    )
    parse_parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Path to output.xml (defaults to the configured logs directory)",
    )
    parse_parser.add_argument(
        "--console",
        type=Path,
        default=None,
        help="File holding the console output of the run",
    )

    serve_parser = subparsers.add_parser("serve", help="Serve runs over HTTP")
    serve_parser.add_argument("--host", default="0.0.0.0", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=3000, help="Bind port")
    _add_runner_arguments(serve_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    paths = RobotPaths.from_env()

    # parser.error exits with status 2, the execution failure code.
    try:
        if args.command == "serve":
            serve(args.host, args.port, args.runner, args.runner_config, paths)
            return

        if args.command == "parse":
            exit_code = parse(args.report or paths.output_xml_path, args.console)
        else:
            exit_code = asyncio.run(
                run(
                    url=args.url,
                    runner_key=args.runner,
                    runner_config_json=args.runner_config,
                    paths=paths,
                )
            )
    except (RunnerNotFoundError, RunnerConfigError, ConsoleUnreadableError) as e:
        parser.error(str(e))
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
