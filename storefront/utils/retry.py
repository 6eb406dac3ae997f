# storefront/utils/retry.py
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    retry_if_not_exception_type,
)
import redis

from storefront.domain.errors import CartBusy, ConcurrencyConflict
from storefront.utils.settings import CONFLICT_RETRY_ATTEMPTS


def redis_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(redis.RedisError),
    )


def conflict_retry():
    # every attempt re-reads the store; CartBusy already waited LOCK_WAIT_SECONDS
    return retry(
        reraise=True,
        stop=stop_after_attempt(CONFLICT_RETRY_ATTEMPTS),
        wait=wait_exponential(multiplier=0.02, min=0.02, max=0.5),
        retry=(
            retry_if_exception_type(ConcurrencyConflict)
            & retry_if_not_exception_type(CartBusy)
        ),
    )
