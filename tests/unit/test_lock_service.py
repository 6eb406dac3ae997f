"""
Unit tests for the Redis-backed LockService (client mocked).
"""
import pytest
import redis

from storefront.domain.errors import CartBusy
from storefront.services.lock_service import cart_item_key, cart_line_key


class TestLockKeys:
    def test_cart_line_key(self):
        assert cart_line_key(3, 7) == "cart:3:product:7:lock"

    def test_cart_item_key(self):
        assert cart_item_key(11) == "cart_item:11:lock"


class TestHold:
    def test_acquires_with_nx_and_ttl_then_releases_own_token(self, lock_service, redis_client):
        with lock_service.hold("cart:1:product:2:lock") as token:
            redis_client.set.assert_called_once_with(
                name="cart:1:product:2:lock",
                value=token,
                nx=True,
                px=lock_service.ttl_ms,
            )
            redis_client.eval.assert_not_called()

        script, numkeys, key, released_token = redis_client.eval.call_args.args
        assert "DEL" in script
        assert (numkeys, key, released_token) == (1, "cart:1:product:2:lock", token)

    def test_releases_when_body_raises(self, lock_service, redis_client):
        with pytest.raises(RuntimeError):
            with lock_service.hold("k"):
                raise RuntimeError("boom")

        redis_client.eval.assert_called_once()

    def test_each_hold_uses_a_fresh_token(self, lock_service):
        with lock_service.hold("k") as first:
            pass
        with lock_service.hold("k") as second:
            pass

        assert first != second

    def test_waits_for_a_held_lock(self, lock_service, redis_client):
        redis_client.set.side_effect = [False, False, True]

        with lock_service.hold("k"):
            pass

        assert redis_client.set.call_count == 3

    def test_gives_up_with_cart_busy(self, lock_service, redis_client):
        redis_client.set.return_value = False

        with pytest.raises(CartBusy):
            with lock_service.hold("k"):
                pytest.fail("lock should not have been acquired")

        redis_client.eval.assert_not_called()

    def test_redis_errors_are_retried(self, lock_service, redis_client):
        redis_client.set.side_effect = [redis.ConnectionError("down"), True]

        with lock_service.hold("k"):
            pass

        assert redis_client.set.call_count == 2

    def test_release_of_expired_lock_reports_false(self, lock_service, redis_client):
        redis_client.eval.return_value = 0

        assert lock_service.release("k", "token") is False

    def test_release_failure_does_not_mask_the_result(self, lock_service, redis_client):
        redis_client.eval.side_effect = redis.ConnectionError("down")

        with lock_service.hold("k") as token:
            result = token

        assert result
        assert redis_client.eval.call_count == 3

    def test_release_failure_keeps_the_body_error(self, lock_service, redis_client):
        redis_client.eval.side_effect = redis.ConnectionError("down")

        with pytest.raises(RuntimeError, match="boom"):
            with lock_service.hold("k"):
                raise RuntimeError("boom")
