"""Testes da entrada com debounce."""

from services.debounce_service import DebouncedInput, VirtualClock


class TestDebouncedInput:

    def test_nothing_pending(self):
        debounced = DebouncedInput(interval=0.4, clock=VirtualClock())
        assert debounced.has_pending is False
        assert debounced.poll() == (False, None)
        assert debounced.remaining() == 0.0

    def test_released_after_interval(self):
        clock = VirtualClock()
        debounced = DebouncedInput(interval=0.4, clock=clock)
        debounced.push("cone")
        clock.advance(0.39)
        assert debounced.poll() == (False, None)
        clock.advance(0.01)
        assert debounced.poll() == (True, "cone")
        assert debounced.has_pending is False

    def test_new_value_restarts_interval(self):
        """Só o último valor sai, depois de 400ms de silêncio."""
        clock = VirtualClock()
        debounced = DebouncedInput(interval=0.4, clock=clock)
        debounced.push("c")
        clock.advance(0.3)
        debounced.push("co")
        clock.advance(0.3)
        assert debounced.poll() == (False, None)
        assert debounced.pending == "co"
        clock.advance(0.1)
        assert debounced.poll() == (True, "co")

    def test_remaining(self):
        clock = VirtualClock()
        debounced = DebouncedInput(interval=0.4, clock=clock)
        debounced.push("x")
        clock.advance(0.1)
        assert abs(debounced.remaining() - 0.3) < 1e-9

    def test_cancel(self):
        clock = VirtualClock()
        debounced = DebouncedInput(interval=0.4, clock=clock)
        debounced.push("x")
        debounced.cancel()
        clock.advance(1)
        assert debounced.poll() == (False, None)

    def test_empty_string_is_a_value(self):
        clock = VirtualClock()
        debounced = DebouncedInput(interval=0.4, clock=clock)
        debounced.push("")
        clock.advance(0.4)
        assert debounced.poll() == (True, "")
