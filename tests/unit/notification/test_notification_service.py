"""Tests for toast notifications and their expiry timers."""

import asyncio

from tasknest.core.modules.notification.models import NotificationType
from tasknest.core.modules.notification.service import NotificationService


def messages(service):
    return [n.message for n in service.notifications.value]


class TestShow:
    def test_sticky_notification_needs_no_event_loop(self):
        service = NotificationService()

        notification = service.show("Saved", NotificationType.SUCCESS, 0)

        assert service.notifications.value == [notification]
        assert notification.duration == 0

    def test_timed_notification_outside_loop_stays_until_removed(self):
        service = NotificationService()

        notification = service.info("Saved")

        assert notification.duration == 0
        assert service.notifications.value == [notification]
        service.remove(notification.id)
        assert service.notifications.value == []

    def test_wrappers_set_type(self):
        service = NotificationService(default_duration_ms=0)
        service.success("s")
        service.error("e")
        service.info("i")
        service.warning("w")

        assert [n.type for n in service.notifications.value] == [
            NotificationType.SUCCESS,
            NotificationType.ERROR,
            NotificationType.INFO,
            NotificationType.WARNING,
        ]

    def test_broadcasts_each_change(self):
        service = NotificationService(default_duration_ms=0)
        seen = []
        service.notifications.subscribe(lambda items: seen.append([n.message for n in items]))

        first = service.info("one")
        service.info("two")
        service.remove(first.id)
        service.clear()

        assert seen == [[], ["one"], ["one", "two"], ["two"], []]


class TestExpiry:
    def test_timed_notification_removes_itself(self):
        async def scenario():
            service = NotificationService()
            service.info("short", duration=10)
            service.info("sticky", duration=0)
            assert messages(service) == ["short", "sticky"]
            await asyncio.sleep(0.05)
            return messages(service)

        assert asyncio.run(scenario()) == ["sticky"]

    def test_expiry_removes_by_id_not_position(self):
        async def scenario():
            service = NotificationService()
            service.info("long", duration=200)
            service.info("short", duration=10)
            await asyncio.sleep(0.05)
            return messages(service)

        assert asyncio.run(scenario()) == ["long"]

    def test_default_duration_comes_from_constructor(self):
        async def scenario():
            service = NotificationService(default_duration_ms=10)
            notification = service.warning("careful")
            await asyncio.sleep(0.05)
            return notification.duration, messages(service)

        assert asyncio.run(scenario()) == (10, [])


class TestRemove:
    def test_manual_remove_cancels_timer_and_is_idempotent(self):
        async def scenario():
            service = NotificationService()
            seen = []
            notification = service.info("bye", duration=10)
            service.notifications.subscribe(lambda items: seen.append(len(items)))
            service.remove(notification.id)
            await asyncio.sleep(0.05)
            service.remove(notification.id)
            return seen

        # current value on subscribe, then a single removal broadcast
        assert asyncio.run(scenario()) == [1, 0]

    def test_remove_unknown_id_is_noop(self):
        service = NotificationService(default_duration_ms=0)
        service.info("stay")
        service.remove("missing")
        assert messages(service) == ["stay"]

    def test_on_stop_cancels_pending_timers(self):
        async def scenario():
            service = NotificationService()
            service.info("pending", duration=10)
            await service.on_stop()
            await asyncio.sleep(0.05)
            return messages(service)

        assert asyncio.run(scenario()) == ["pending"]
