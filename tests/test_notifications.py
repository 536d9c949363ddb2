"""Testes das notificações transitórias."""

from datetime import timezone

from services.notification_service import NotificationLevel, Notifier


class TestNotifier:

    def test_levels(self):
        notifier = Notifier()
        notifier.success("saved")
        notifier.info("no bin")
        notifier.error("failed")
        assert [n.level for n in notifier.history] == [
            NotificationLevel.SUCCESS, NotificationLevel.INFO, NotificationLevel.ERROR,
        ]
        assert notifier.last.message == "failed"

    def test_subscribers_receive_notifications(self):
        notifier = Notifier()
        received = []
        notifier.subscribe(received.append)
        notifier.error("Failed to load items: offline")
        assert received[0].message == "Failed to load items: offline"

    def test_history_is_bounded(self):
        notifier = Notifier(max_history=2)
        for i in range(5):
            notifier.info(str(i))
        assert [n.message for n in notifier.history] == ["3", "4"]

    def test_empty(self):
        assert Notifier().last is None

    def test_timestamps_are_timezone_aware(self):
        notification = Notifier().info("stored")
        assert notification.created_at.tzinfo is timezone.utc
