import uuid
from contextlib import contextmanager
from typing import Iterator

import redis
from tenacity import Retrying, RetryError, retry_if_result, stop_after_delay, wait_fixed

from storefront.domain.errors import CartBusy
from storefront.utils.retry import redis_retry
from storefront.utils.settings import REDIS_URL, LOCK_TTL_MS, LOCK_WAIT_SECONDS, LOCK_POLL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# compare-and-delete in one step, only the owner may release
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""


def cart_line_key(cart_id: int, product_id: int) -> str:
    return f"cart:{cart_id}:product:{product_id}:lock"


def cart_item_key(item_id: int) -> str:
    return f"cart_item:{item_id}:lock"


class LockService:
    """
    Per-key mutex in Redis.

    -SET key token NX PX ttl, the ttl frees locks left behind by a crashed worker
    -release through lua (GET + compare + DEL as one operation)
    -waiting for a held lock polls with tenacity up to wait_seconds, then CartBusy
    """

    def __init__(
        self,
        url: str | None = None,
        client: redis.Redis | None = None,
        ttl_ms: int = LOCK_TTL_MS,
        wait_seconds: float = LOCK_WAIT_SECONDS,
        poll_seconds: float = LOCK_POLL_SECONDS,
    ):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )
        self.ttl_ms = ttl_ms
        self.wait_seconds = wait_seconds
        self.poll_seconds = poll_seconds

    @redis_retry()
    def try_acquire(self, key: str, token: str) -> bool:
        #SET cart:1:product:2:lock "<token>" NX PX 5000
        return bool(self.redis.set(name=key, value=token, nx=True, px=self.ttl_ms))

    @redis_retry()
    def release(self, key: str, token: str) -> bool:
        res = self.redis.eval(_RELEASE_LUA, 1, key, token)
        if not res:
            logger.warning(f"Lock {key} expired before release")
        return bool(res)

    def acquire(self, key: str, token: str) -> None:
        retryer = Retrying(
            stop=stop_after_delay(self.wait_seconds),
            wait=wait_fixed(self.poll_seconds),
            retry=retry_if_result(lambda acquired: not acquired),
        )
        try:
            retryer(self.try_acquire, key, token)
        except RetryError as e:
            logger.warning(f"Could not acquire lock {key} within {self.wait_seconds}s")
            raise CartBusy() from e

    @contextmanager
    def hold(self, key: str) -> Iterator[str]:
        token = uuid.uuid4().hex
        self.acquire(key, token)
        logger.debug(f"Acquired lock {key}")
        try:
            yield token
        finally:
            # the body may already have committed, the ttl frees the key anyway
            try:
                self.release(key, token)
            except redis.RedisError as e:
                logger.warning(f"Could not release lock {key}: {e}")
