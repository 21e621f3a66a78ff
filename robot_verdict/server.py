"""HTTP endpoint running Robot suites on request."""

import asyncio
import logging

from aiohttp import web

from robot_verdict.composer import (
    ExecutionFailure,
    TestsFailed,
    execute_robot_test,
    to_response,
)
from robot_verdict.config import RobotPaths
from robot_verdict.models.result import RunOutcome
from robot_verdict.runners.base import ProcessRunner

log = logging.getLogger(__name__)

RUNNER_KEY = web.AppKey("runner", ProcessRunner)
PATHS_KEY = web.AppKey("paths", RobotPaths)
# Every run writes the same report file, so runs must not overlap.
RUN_LOCK_KEY = web.AppKey("run_lock", asyncio.Lock)


def create_app(runner: ProcessRunner, paths: RobotPaths) -> web.Application:
    """Create the web application serving Robot runs."""
    app = web.Application()
    app[RUNNER_KEY] = runner
    app[PATHS_KEY] = paths
    app[RUN_LOCK_KEY] = asyncio.Lock()
    app.router.add_get("/", index)
    app.router.add_post("/robot/execute", execute)
    return app


async def index(request: web.Request) -> web.Response:
    """Liveness check."""
    return web.Response(text="robot-verdict")


async def execute(request: web.Request) -> web.Response:
    """Run the suites against the ``url`` of the JSON body."""
    try:
        body = await request.json()
    # Undecodable bodies raise UnicodeDecodeError, unknown charsets LookupError.
    except (ValueError, LookupError):
        return _bad_request("Request body must be JSON")

    url = body.get("url") if isinstance(body, dict) else None
    if not isinstance(url, str) or not url:
        return _bad_request("Field 'url' is required")

    app = request.app
    result: RunOutcome | TestsFailed | ExecutionFailure
    async with app[RUN_LOCK_KEY]:
        try:
            result = await execute_robot_test(
                url, app[RUNNER_KEY], app[PATHS_KEY].output_xml_path
            )
        except (TestsFailed, ExecutionFailure) as e:
            result = e

    status, payload = to_response(result)
    return web.json_response(payload, status=status)


def _bad_request(message: str) -> web.Response:
    log.warning("Rejected execute request: %s", message)
    return web.json_response(
        {"success": False, "errorMessage": message}, status=400
    )
