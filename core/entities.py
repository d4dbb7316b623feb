from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

URGENCY_MIN = 0
URGENCY_MAX = 3


@dataclass
class Workspace:
    id: str
    description: str = ""
    children: List[int] = field(default_factory=list)
    todos: List[int] = field(default_factory=list)


@dataclass
class Todo:
    id: str
    description: str = ""
    pending: bool = True
    urgency: int = URGENCY_MIN
    effort: int = 0
    due: Optional[datetime] = None
    children: List[int] = field(default_factory=list)

    def toggle_done(self) -> None:
        self.pending = not self.pending

    def raise_urgency(self) -> bool:
        if self.urgency >= URGENCY_MAX:
            return False
        self.urgency += 1
        return True

    def lower_urgency(self) -> bool:
        if self.urgency <= URGENCY_MIN:
            return False
        self.urgency -= 1
        return True


def clamp_urgency(value: int) -> int:
    return max(URGENCY_MIN, min(URGENCY_MAX, int(value)))


__all__ = ["Workspace", "Todo", "URGENCY_MIN", "URGENCY_MAX", "clamp_urgency"]
