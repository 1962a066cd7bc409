"""Tests for the listing cache, owner notifications and the notification webhook"""
import json
import pytest
from unittest.mock import Mock, MagicMock, patch

import redis

from eventuraa.services.listing_cache import ListingCache
from eventuraa.services.notifications import notify, notify_moderation_outcome

from factories import InMemoryRedis


@pytest.fixture
def cache_settings():
    with patch("eventuraa.services.listing_cache.settings") as mock_settings:
        mock_settings.listing_cache_enabled = True
        mock_settings.listing_cache_ttl_seconds = 60
        yield mock_settings


class TestListingCache:
    def _cache(self, mock_redis):
        cache = ListingCache()
        patcher = patch("eventuraa.services.listing_cache.get_redis_client", return_value=mock_redis)
        patcher.start()
        return cache, patcher

    def test_key_includes_current_version(self, cache_settings):
        mock_redis = MagicMock()
        mock_redis.get.side_effect = lambda key: "3" if key == "listing:version:events" else json.dumps([{"id": 1}])
        cache, patcher = self._cache(mock_redis)
        try:
            version = cache.version("events")
            items = cache.get("events", "scope", version)
        finally:
            patcher.stop()

        assert version == "3"
        assert items == [{"id": 1}]
        assert mock_redis.get.call_args_list[-1][0][0] == "listing:events:v3:scope"

    def test_set_uses_ttl(self, cache_settings):
        mock_redis = MagicMock()
        mock_redis.get.return_value = None
        cache, patcher = self._cache(mock_redis)
        try:
            cache.set("venues", "scope", [{"id": 2}], cache.version("venues"))
        finally:
            patcher.stop()

        key, value = mock_redis.set.call_args[0]
        assert key == "listing:venues:v0:scope"
        assert json.loads(value) == [{"id": 2}]
        assert mock_redis.set.call_args[1]["ex"] == 60

    def test_invalidate_bumps_version(self):
        mock_redis = MagicMock()
        cache, patcher = self._cache(mock_redis)
        try:
            cache.invalidate("events")
        finally:
            patcher.stop()

        mock_redis.incr.assert_called_once_with("listing:version:events")

    def test_listing_built_before_invalidation_is_never_served(self, cache_settings):
        fake_redis = InMemoryRedis()
        cache, patcher = self._cache(fake_redis)
        try:
            version = cache.version("events")
            assert cache.get("events", "scope", version) is None
            # An approval commits while the listing is being built
            cache.invalidate("events")
            cache.set("events", "scope", [], version)

            assert cache.get("events", "scope", cache.version("events")) is None
        finally:
            patcher.stop()

    def test_listing_written_at_current_version_is_served(self, cache_settings):
        fake_redis = InMemoryRedis()
        cache, patcher = self._cache(fake_redis)
        try:
            cache.invalidate("events")
            version = cache.version("events")
            cache.set("events", "scope", [{"id": 4}], version)

            assert cache.get("events", "scope", cache.version("events")) == [{"id": 4}]
        finally:
            patcher.stop()

    def test_redis_error_falls_back_to_database(self, cache_settings):
        mock_redis = MagicMock()
        mock_redis.get.side_effect = redis.ConnectionError("down")
        cache, patcher = self._cache(mock_redis)
        try:
            assert cache.version("events") is None
            assert cache.get("events", "scope", "0") is None
        finally:
            patcher.stop()

    def test_no_version_skips_redis(self):
        mock_redis = MagicMock()
        cache, patcher = self._cache(mock_redis)
        try:
            assert cache.get("events", "scope", None) is None
            cache.set("events", "scope", [], None)
        finally:
            patcher.stop()

        mock_redis.get.assert_not_called()
        mock_redis.set.assert_not_called()

    def test_invalidate_swallows_redis_errors(self):
        mock_redis = MagicMock()
        mock_redis.incr.side_effect = redis.ConnectionError("down")
        cache, patcher = self._cache(mock_redis)
        try:
            cache.invalidate("events")
        finally:
            patcher.stop()

    def test_disabled_cache_never_reads(self):
        mock_redis = MagicMock()
        cache, patcher = self._cache(mock_redis)
        try:
            with patch("eventuraa.services.listing_cache.settings") as mock_settings:
                mock_settings.listing_cache_enabled = False
                assert cache.version("events") is None
        finally:
            patcher.stop()

        mock_redis.get.assert_not_called()


class TestNotify:
    def test_enqueues_when_enabled(self):
        with patch("eventuraa.services.notifications.settings") as mock_settings:
            mock_settings.notifications_enabled = True
            with patch("eventuraa.tasks.deliver_notification") as mock_task:
                notify(10, "success", "Approved")

        mock_task.delay.assert_called_once_with(10, "success", "Approved")

    def test_disabled_does_not_enqueue(self):
        with patch("eventuraa.services.notifications.settings") as mock_settings:
            mock_settings.notifications_enabled = False
            with patch("eventuraa.tasks.deliver_notification") as mock_task:
                notify(10, "success", "Approved")

        mock_task.delay.assert_not_called()

    def test_broker_failure_is_logged_not_raised(self):
        with patch("eventuraa.services.notifications.settings") as mock_settings:
            mock_settings.notifications_enabled = True
            with patch("eventuraa.tasks.deliver_notification") as mock_task:
                mock_task.delay.side_effect = ConnectionError("broker down")
                notify(10, "info", "Hello")

    def test_unknown_level_falls_back_to_info(self):
        with patch("eventuraa.services.notifications.settings") as mock_settings:
            mock_settings.notifications_enabled = True
            with patch("eventuraa.tasks.deliver_notification") as mock_task:
                notify(10, "shout", "Hello")

        assert mock_task.delay.call_args[0][1] == "info"

    def test_rejection_message_carries_reason(self):
        with patch("eventuraa.services.notifications.notify") as mock_notify:
            notify_moderation_outcome(10, "Event", "Perahera Night", approved=False, reason="low quality")

        recipient, level, message = mock_notify.call_args[0]
        assert recipient == 10
        assert level == "error"
        assert "low quality" in message
        assert "Perahera Night" in message


class TestWebhook:
    def _client(self, status_code):
        mock_response = Mock()
        mock_response.status_code = status_code
        mock_response.text = "error"

        mock_client_instance = MagicMock()
        mock_client_instance.__enter__ = Mock(return_value=mock_client_instance)
        mock_client_instance.__exit__ = Mock(return_value=False)
        mock_client_instance.post.return_value = mock_response
        return mock_client_instance

    @pytest.mark.parametrize("status_code,expected", [(200, True), (202, True), (500, False)])
    def test_status_codes(self, status_code, expected):
        mock_client_instance = self._client(status_code)

        with patch("eventuraa.integrations.webhook.settings") as mock_settings:
            mock_settings.notification_webhook_url = "https://notify.example.com/send"
            mock_settings.notification_webhook_token = "secret"
            with patch("httpx.Client", return_value=mock_client_instance):
                from eventuraa.integrations.webhook import send_notification
                result = send_notification("owner@test.com", "success", "Approved")

        assert result is expected
        call_kwargs = mock_client_instance.post.call_args
        assert call_kwargs[0][0] == "https://notify.example.com/send"
        assert call_kwargs[1]["json"] == {"to": "owner@test.com", "level": "success", "message": "Approved"}
        assert call_kwargs[1]["headers"]["Authorization"] == "Bearer secret"

    def test_network_error_returns_false(self):
        mock_client_instance = self._client(200)
        mock_client_instance.post.side_effect = Exception("timeout")

        with patch("eventuraa.integrations.webhook.settings") as mock_settings:
            mock_settings.notification_webhook_url = "https://notify.example.com/send"
            mock_settings.notification_webhook_token = ""
            with patch("httpx.Client", return_value=mock_client_instance):
                from eventuraa.integrations.webhook import send_notification
                assert send_notification("owner@test.com", "info", "Hi") is False

    def test_unconfigured_webhook_only_logs(self):
        with patch("eventuraa.integrations.webhook.settings") as mock_settings:
            mock_settings.notification_webhook_url = ""
            with patch("httpx.Client") as mock_client:
                from eventuraa.integrations.webhook import send_notification
                assert send_notification("owner@test.com", "info", "Hi") is True

        mock_client.assert_not_called()


class TestDeliverTask:
    def test_looks_up_recipient_email(self, mock_db):
        mock_db.first.return_value = Mock(email="owner@test.com")

        with patch("eventuraa.tasks.SessionLocal", return_value=mock_db):
            with patch("eventuraa.tasks.send_notification", return_value=True) as mock_send:
                from eventuraa.tasks import deliver_notification
                assert deliver_notification(10, "success", "Approved") is True

        mock_send.assert_called_once_with("owner@test.com", "success", "Approved")
        mock_db.close.assert_called_once()

    def test_missing_recipient_is_dropped(self, mock_db):
        with patch("eventuraa.tasks.SessionLocal", return_value=mock_db):
            with patch("eventuraa.tasks.send_notification") as mock_send:
                from eventuraa.tasks import deliver_notification
                assert deliver_notification(99, "info", "Hi") is False

        mock_send.assert_not_called()
