"""Routes named vehicle signals to their handlers.

Routes are tried in order and the first match wins. This is a simple
routing policy rather than a priority system: a name that mentions both
"park" and "speed" goes to whichever route is listed first.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

SignalHandler = Callable[[str, object], None]


@dataclass(frozen=True)
class SignalRoute:
    name: str
    matches: Callable[[str], bool]
    handler: SignalHandler


def name_contains(*fragments: str) -> Callable[[str], bool]:
    lowered = tuple(fragment.lower() for fragment in fragments)

    def _matches(signal_name: str) -> bool:
        name = signal_name.lower()
        return any(fragment in name for fragment in lowered)

    return _matches


class SignalRouter:
    def __init__(self, routes: Sequence[SignalRoute], fallback: SignalHandler) -> None:
        self._routes = list(routes)
        self._fallback = fallback

    def dispatch(self, signal_name: str, value: object) -> str | None:
        """Invoke the first matching handler and return the route name.

        Empty names are ignored and return ``None``; unmatched names go to
        the fallback and return ``"notify"``.
        """

        if not signal_name:
            return None
        for route in self._routes:
            if route.matches(signal_name):
                route.handler(signal_name, value)
                return route.name
        self._fallback(signal_name, value)
        return "notify"
