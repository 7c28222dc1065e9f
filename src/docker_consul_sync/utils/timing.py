import functools
import time
from typing import Any, Callable, Optional, Tuple, TypeVar, cast

from docker_consul_sync.logger import logger

F = TypeVar("F", bound=Callable[..., Any])


def retry(
    retries: int = 3,
    delay: float = 0.5,
    backoff: bool = False,
    backoff_ratio: float = 2,
    exceptions: Tuple[type[BaseException], ...] = (Exception,),
    logger_func: Optional[Callable[[str], None]] = None,
) -> Callable[[F], F]:
    """
    Call the wrapped function up to `retries` times, sleeping `delay` seconds
    between attempts (multiplied by `backoff_ratio` after each one when
    `backoff` is set). Used for the startup connection checks.

    The last failure is re-raised unchanged.
    """
    attempts = max(1, retries)
    log = logger_func or logger.warning

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            current_delay = delay
            for attempt in range(1, attempts + 1):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    if attempt == attempts:
                        raise
                    log(
                        f"[retry] {func.__name__} attempt {attempt}/{attempts} failed: {e}. "
                        f"Retrying in {current_delay}s..."
                    )
                    time.sleep(current_delay)
                    if backoff:
                        current_delay *= backoff_ratio

        return cast(F, wrapper)

    return decorator
