"""
Entrada com debounce: guarda o último valor e só o liberta
depois de um intervalo sem novas alterações
"""
import os
import time
from typing import Any, Callable, Optional, Tuple
from dotenv import load_dotenv

load_dotenv()

SEARCH_DEBOUNCE_SECONDS = int(os.getenv("SEARCH_DEBOUNCE_MS", "400")) / 1000.0


class VirtualClock:
    """Relógio manual para testes (avança só quando pedido)"""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class DebouncedInput:
    """
    Máquina de estados de debounce: valor pendente + deadline.
    push() adia a deadline; poll() devolve o valor quando o prazo passa.
    """

    def __init__(
        self,
        interval: float = SEARCH_DEBOUNCE_SECONDS,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.interval = interval
        self.clock = clock or time.monotonic
        self._pending: Any = None
        self._deadline: Optional[float] = None

    @property
    def has_pending(self) -> bool:
        return self._deadline is not None

    @property
    def pending(self) -> Any:
        return self._pending

    def push(self, value: Any) -> None:
        self._pending = value
        self._deadline = self.clock() + self.interval

    def remaining(self) -> float:
        if self._deadline is None:
            return 0.0
        return max(0.0, self._deadline - self.clock())

    def poll(self) -> Tuple[bool, Any]:
        if self._deadline is None or self.clock() < self._deadline:
            return False, None
        value = self._pending
        self._pending = None
        self._deadline = None
        return True, value

    def cancel(self) -> None:
        self._pending = None
        self._deadline = None
