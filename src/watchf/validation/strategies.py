"""
Retry strategy for operations that may fail transiently.

Terminating a child process can fail for reasons that clear up on their own
(the process is mid-exec, a signal races with exit). The supervisor uses
this helper when configured to retry instead of aborting.
"""

import logging
import time
from typing import Callable, Tuple, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')


def simple_retry(
    func: Callable[[], T],
    max_attempts: int = 3,
    delay: float = 1.0,
    context: str = "operation",
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
) -> T:
    """
    Call ``func`` until it succeeds or ``max_attempts`` is exhausted.

    Args:
        func: Function to retry
        max_attempts: Maximum number of attempts
        delay: Delay between attempts in seconds
        context: Context description for log messages
        retry_on: Exception types that trigger another attempt; anything
            else propagates immediately

    Returns:
        Result from func if successful

    Raises:
        Exception: The last exception if all attempts fail
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")

    for attempt in range(max_attempts):
        try:
            result = func()
            if attempt > 0:
                logger.info(f"Operation '{context}' succeeded on attempt {attempt + 1}")
            return result
        except retry_on as e:
            if attempt < max_attempts - 1:
                logger.debug(f"Attempt {attempt + 1} failed for {context}: {e}")
                time.sleep(delay)
            else:
                logger.error(f"All {max_attempts} attempts failed for {context}: {e}")
                raise

    raise AssertionError("unreachable")
