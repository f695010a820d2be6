"""
Polling wait for the clock to catch up.

The generator blocks in two places: when a millisecond's sequence space is
used up, and when the clock has moved backwards. Both are the same loop -
sleep briefly, re-read the clock, repeat - with no attempt limit and no
timeout, since only the clock can end the wait.
"""

from tenacity import Retrying, retry_if_result, stop_never, wait_fixed

from shardflake.kernel.clock import Clock
from shardflake.kernel.logging import get_logger

logger = get_logger(__name__)


def wait_for_clock(
    clock: Clock,
    epoch: int,
    target: int,
    *,
    interval_s: float,
    inclusive: bool,
) -> int:
    """
    Poll the clock until it reaches a target timestamp.

    Args:
        clock: Clock to read and sleep on
        epoch: Epoch (ms) subtracted from every clock reading
        target: Timestamp (ms since epoch) to wait for
        interval_s: Sleep between clock reads, in seconds
        inclusive: If True, stop once now >= target; otherwise once now > target

    Returns:
        The first timestamp (ms since epoch) that satisfied the condition

    Example:
        # Wait for the millisecond after last_timestamp
        now = wait_for_clock(clock, epoch, last_timestamp, interval_s=0.0001, inclusive=False)
    """

    def _read() -> int:
        return clock.now_ms() - epoch

    def _not_reached(now: int) -> bool:
        return now < target if inclusive else now <= target

    retrying = Retrying(
        retry=retry_if_result(_not_reached),
        stop=stop_never,
        wait=wait_fixed(interval_s),
        sleep=clock.sleep,
        reraise=True,
    )
    now = retrying(_read)

    logger.debug(
        "Clock reached target",
        target=target,
        now=now,
        attempts=retrying.statistics.get("attempt_number"),
    )
    return now
