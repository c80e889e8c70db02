# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field

from mynotes.core.ports import AlertNotifier


class FakeClock:
    """Callable clock for SessionController (returns a fixed, adjustable time)."""

    def __init__(self, now: float) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@dataclass(slots=True)
class SentAlert:
    title: str
    body: str


@dataclass(slots=True)
class FakeNotifier(AlertNotifier):
    """
    Fake AlertNotifier used by daemon tests.

    With fail=True every call raises after being recorded.
    """

    sent: list[SentAlert] = field(default_factory=list)
    fail: bool = False

    async def send_alert(self, *, title: str, body: str) -> None:
        self.sent.append(SentAlert(title=title, body=body))
        if self.fail:
            raise RuntimeError("notification daemon unavailable")


class FailingStore:
    """
    Wraps a real store and raises on the named methods.

    Used to check that storage failures surface as status messages.
    """

    def __init__(self, inner, *, failing: set[str]) -> None:
        self._inner = inner
        self.failing = set(failing)

    def __getattr__(self, name: str):
        attr = getattr(self._inner, name)
        if name in self.failing:
            def boom(*args, **kwargs):
                raise RuntimeError(f"{name} failed")

            return boom
        return attr
