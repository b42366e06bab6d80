from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Literal

from api.schemas.species import NotificationOut

logger = logging.getLogger(__name__)

Variant = Literal["default", "destructive"]


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    variant: Variant = "default"

    def to_out(self) -> NotificationOut:
        return NotificationOut(
            title=self.title, description=self.description, variant=self.variant
        )


# Fire-and-forget; return value is ignored
Notifier = Callable[[Notification], None]


class NotificationLog:
    """Collects the notifications raised while handling one request."""

    def __init__(self) -> None:
        self.items: List[Notification] = []

    def __call__(self, note: Notification) -> None:
        if note.variant == "destructive":
            logger.warning("%s: %s", note.title, note.description)
        else:
            logger.info("%s: %s", note.title, note.description)
        self.items.append(note)

    def to_out(self) -> List[NotificationOut]:
        return [n.to_out() for n in self.items]
