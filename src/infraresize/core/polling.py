import asyncio
import logging
from time import monotonic
from typing import Any, Awaitable, Callable, Tuple

from .exceptions import WaitTimedOut

logger = logging.getLogger(__name__)

# A check returns (done, observation). The observation is reported if the wait times out.
PollCheck = Callable[[], Awaitable[Tuple[bool, Any]]]


async def poll_until(check: PollCheck, interval: float, timeout: float, operation: str) -> Any:
    """
    Runs `check` immediately and then once every `interval` seconds until it
    reports done. Any exception raised by `check` ends the wait and propagates.

    Returns:
        The observation of the successful check.

    Raises:
        WaitTimedOut: If `timeout` seconds pass without the check succeeding.
    """
    deadline = monotonic() + timeout
    attempts = 0
    while True:
        attempts += 1
        done, observation = await check()
        if done:
            logger.debug("%s satisfied after %d attempt(s)", operation, attempts)
            return observation

        remaining = deadline - monotonic()
        if remaining <= 0:
            raise WaitTimedOut(operation, timeout, observation)
        await asyncio.sleep(min(interval, remaining))
