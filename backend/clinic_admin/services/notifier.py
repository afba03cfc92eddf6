from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Protocol, Tuple

from fastapi import Request

FLASH_KEY = "_flashes"


class Notifier(Protocol):
    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


@dataclass
class MemoryNotifier:
    """Collects notifications in order; used by the JSON API and tests."""

    messages: List[Tuple[str, str]] = field(default_factory=list)

    def success(self, message: str) -> None:
        self.messages.append(("success", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    @property
    def errors(self) -> List[str]:
        return [m for level, m in self.messages if level == "error"]

    @property
    def successes(self) -> List[str]:
        return [m for level, m in self.messages if level == "success"]


class FlashNotifier:
    """Stores toast messages in the signed session cookie until the next render."""

    def __init__(self, request: Request):
        self.request = request

    def _push(self, level: str, message: str) -> None:
        flashes = list(self.request.session.get(FLASH_KEY, []))
        flashes.append({"level": level, "message": message})
        self.request.session[FLASH_KEY] = flashes

    def success(self, message: str) -> None:
        self._push("success", message)

    def error(self, message: str) -> None:
        self._push("error", message)


def pop_flashes(request: Request) -> List[Dict[str, str]]:
    return request.session.pop(FLASH_KEY, [])


def get_notifier(request: Request) -> Notifier:
    return FlashNotifier(request)
