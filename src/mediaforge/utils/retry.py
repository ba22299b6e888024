"""Rate-limit retry using tenacity."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import TypeVar

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from mediaforge.errors import ProviderRateLimited
from mediaforge.utils.progress import log_warning

T = TypeVar("T")

MAX_RATE_LIMIT_RETRIES = 2
RATE_LIMIT_SUGGESTION = (
    "Rate limited. Try again in a few seconds or switch to the replicate provider."
)


def backoff_delay(retry_number: int) -> float:
    """Seconds to wait before retry ``retry_number`` (1-based): 2, 4, 8, ..."""
    return float(2 ** retry_number)


def _log_backoff(max_retries: int) -> Callable[[RetryCallState], None]:
    def before_sleep(state: RetryCallState) -> None:
        delay = state.next_action.sleep if state.next_action else 0.0
        log_warning(
            f"Rate limited, retrying in {delay * 1000:.0f}ms "
            f"(attempt {state.attempt_number}/{max_retries})"
        )
    return before_sleep


def call_with_retry(
    invocation: Callable[[], T],
    *,
    max_retries: int = MAX_RATE_LIMIT_RETRIES,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Call ``invocation``, retrying only on ``ProviderRateLimited``.

    The callable is invoked afresh on every attempt, so single-use inputs such
    as open file handles must be created inside it.
    """
    retrying = Retrying(
        stop=stop_after_attempt(max_retries + 1),
        # multiplier * 2 ** (attempt - 1) == 2 ** retry_number
        wait=wait_exponential(multiplier=2, exp_base=2, min=0, max=backoff_delay(max_retries)),
        retry=retry_if_exception_type(ProviderRateLimited),
        before_sleep=_log_backoff(max_retries),
        sleep=sleep,
        reraise=True,
    )
    try:
        return retrying(invocation)
    except ProviderRateLimited as e:
        if not e.suggestion:
            e.suggestion = RATE_LIMIT_SUGGESTION
        raise
