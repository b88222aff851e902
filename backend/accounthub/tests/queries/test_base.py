from unittest.mock import Mock

import pytest

from accounthub.core.exceptions import NotFoundError, ServiceError, ValidationError
from accounthub.queries.base import (
    AUDIT_LOGS,
    QueryCache,
    QueryStatus,
    failure_notification,
    filters_key,
    peek,
    use_mutation,
    use_query,
)
from accounthub.models.schemas.redemption_code import RedemptionCodeFilters


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class TestQueryCache:
    @pytest.fixture
    def clock(self):
        return FakeClock()

    @pytest.fixture
    def cache(self, clock):
        return QueryCache(ttl_seconds=30, clock=clock)

    def test_get_miss_then_hit(self, cache):
        assert cache.get(("codes", "list")) == (False, None)
        cache.set(("codes", "list"), [1, 2])
        assert cache.get(("codes", "list")) == (True, [1, 2])
        assert cache.stats() == {"size": 1, "hits": 1, "misses": 1}

    def test_entries_expire(self, cache, clock):
        """Test entries are dropped once their TTL has passed"""
        cache.set(("codes", "list"), "value")
        clock.now += 29
        assert ("codes", "list") in cache
        clock.now += 1
        assert ("codes", "list") not in cache
        assert len(cache) == 0

    def test_invalidate_prefix(self, cache):
        cache.set(("redemption_codes", "list", 1), "a")
        cache.set(("redemption_codes", "stats", None), "b")
        cache.set(("applications", "list", 1), "c")

        assert cache.invalidate(("redemption_codes",)) == 2
        assert ("applications", "list", 1) in cache
        assert ("redemption_codes", "stats", None) not in cache

    def test_sign_out_clears_everything(self, cache):
        cache.set(("users", "list"), "a")
        cache.set(("applications", "list"), "b")

        cache.handle_auth_event("SIGNED_IN")
        assert len(cache) == 2

        cache.handle_auth_event("SIGNED_OUT")
        assert len(cache) == 0

    def test_filters_key(self):
        assert filters_key(None) is None
        key = filters_key(RedemptionCodeFilters(status="active"))
        assert key == '{"status":"active"}'
        assert key == filters_key(RedemptionCodeFilters(status="active"))


class TestUseQuery:
    @pytest.fixture
    def cache(self):
        return QueryCache(ttl_seconds=60)

    def test_success_is_cached(self, cache):
        fetch = Mock(return_value={"total": 3})

        first = use_query(cache, ("codes", "stats"), fetch)
        second = use_query(cache, ("codes", "stats"), fetch)

        assert first.status == QueryStatus.SUCCESS
        assert first.is_success and not first.is_loading
        assert second.data == {"total": 3}
        fetch.assert_called_once()
        assert peek(cache, ("codes", "stats")) == {"total": 3}

    def test_errors_are_not_cached(self, cache):
        """Test a failed fetch is reported and retried on the next call"""
        fetch = Mock(side_effect=[ServiceError("connection reset"), {"total": 0}])

        failed = use_query(cache, ("codes", "stats"), fetch)
        assert failed.is_error
        assert failed.error.reason == "connection reset"
        assert failed.data is None

        retried = use_query(cache, ("codes", "stats"), fetch)
        assert retried.is_success
        assert retried.data == {"total": 0}
        assert fetch.call_count == 2

    def test_unexpected_exceptions_propagate(self, cache):
        with pytest.raises(RuntimeError):
            use_query(cache, ("codes",), Mock(side_effect=RuntimeError("boom")))


class TestUseMutation:
    @pytest.fixture
    def cache(self):
        cache = QueryCache(ttl_seconds=60)
        cache.set(("redemption_codes", "list", 1, 10, None), "page")
        cache.set(("redemption_codes", "stats", None), "stats")
        cache.set(AUDIT_LOGS + ("list",), "logs")
        cache.set(("applications", "list", 1, 10, None), "apps")
        return cache

    def test_success_invalidates_and_notifies(self, cache):
        result = use_mutation(
            cache, lambda: ["a", "b"], [("redemption_codes",)],
            "batch_created", "batch_create", "redemption_code", "zh", count=2,
        )

        assert result.ok
        assert result.data == ["a", "b"]
        assert result.notification == "成功创建 2 个兑换码"
        assert len(cache) == 1
        assert ("applications", "list", 1, 10, None) in cache

    def test_english_notification(self, cache):
        result = use_mutation(
            cache, lambda: None, [("redemption_codes",)], "deleted", "delete", "redemption_code", "en",
        )
        assert result.notification == "Redemption code deleted"

    def test_failure_keeps_cache(self, cache):
        """Test a failed mutation carries the database reason and leaves the cache alone"""
        def mutate():
            raise ServiceError('duplicate key value violates unique constraint "redemption_codes_code_key"')

        result = use_mutation(
            cache, mutate, [("redemption_codes",)], "created", "create", "redemption_code", "en",
        )

        assert not result.ok
        assert result.data is None
        assert result.notification == (
            'Create failed: duplicate key value violates unique constraint "redemption_codes_code_key"'
        )
        assert len(cache) == 4

    def test_failure_notification_in_chinese(self):
        error = NotFoundError("redemption_codes 42 not found")
        assert failure_notification(error, "delete", "zh") == "删除失败: redemption_codes 42 not found"

    def test_validation_failure_uses_message(self):
        error = ValidationError("Invalid ID format")
        assert failure_notification(error, "update", "en") == "Update failed: Invalid ID format"
