import logging
from dataclasses import dataclass
from enum import Enum
from typing import List

logger = logging.getLogger(__name__)

class Variant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"

@dataclass
class Notification:
    title: str
    description: str
    variant: Variant = Variant.DEFAULT

class Toaster:
    """Collects transient notifications in the order they were raised."""

    def __init__(self):
        self.notifications: List[Notification] = []

    def toast(self, title: str, description: str, variant: Variant = Variant.DEFAULT) -> Notification:
        notification = Notification(title=title, description=description, variant=variant)
        self.notifications.append(notification)
        logger.debug("Toast [%s] %s: %s", variant.value, title, description)
        return notification

    @property
    def latest(self):
        return self.notifications[-1] if self.notifications else None
