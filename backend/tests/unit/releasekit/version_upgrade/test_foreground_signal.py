from unittest.mock import MagicMock

from releasekit.version_upgrade.events import ForegroundSignal


class TestForegroundSignal:
    """Tests for ForegroundSignal."""

    def test_emit_calls_every_subscriber(self) -> None:
        signal = ForegroundSignal()
        first = MagicMock()
        second = MagicMock()
        signal.subscribe(first)
        signal.subscribe(second)

        signal.emit()
        signal.emit()

        assert first.call_count == 2
        assert second.call_count == 2

    def test_unsubscribe_is_idempotent(self) -> None:
        signal = ForegroundSignal()
        callback = MagicMock()
        unsubscribe = signal.subscribe(callback)

        unsubscribe()
        unsubscribe()
        signal.emit()

        callback.assert_not_called()
        assert signal.subscriber_count == 0

    def test_same_callback_subscribed_twice(self) -> None:
        """Each subscription is removed on its own."""
        signal = ForegroundSignal()
        callback = MagicMock()
        unsubscribe_first = signal.subscribe(callback)
        signal.subscribe(callback)

        unsubscribe_first()
        signal.emit()

        assert callback.call_count == 1

    def test_failing_callback_does_not_stop_others(self) -> None:
        signal = ForegroundSignal()
        broken = MagicMock(side_effect=RuntimeError("boom"))
        healthy = MagicMock()
        signal.subscribe(broken)
        signal.subscribe(healthy)

        signal.emit()

        healthy.assert_called_once()

    def test_callback_may_unsubscribe_during_emit(self) -> None:
        signal = ForegroundSignal()
        calls: list[str] = []
        unsubscribe = None

        def _once() -> None:
            calls.append("once")
            assert unsubscribe is not None
            unsubscribe()

        unsubscribe = signal.subscribe(_once)
        signal.emit()
        signal.emit()

        assert calls == ["once"]
