from __future__ import annotations

from collections import deque
from typing import Iterable


class OutputLog:
    """Bounded scrollback of console output lines, oldest first.

    Instances are callable so they can be handed to anything that expects
    a text sink taking a sequence of lines.
    """

    def __init__(self, max_lines: int = 500):
        self._lines: deque[str] = deque(maxlen=max_lines if max_lines > 0 else None)
        self.total = 0  # lines ever added, including ones scrolled out

    def add(self, msg: str):
        self._lines.append(msg)
        self.total += 1

    def extend(self, lines: Iterable[str]):
        for line in lines:
            self.add(line)

    def __call__(self, lines: Iterable[str]):
        self.extend(lines)

    def __len__(self) -> int:
        return len(self._lines)

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    def tail(self, count: int) -> list[str]:
        """Return the newest `count` lines, oldest first."""
        if count <= 0:
            return []
        return list(self._lines)[-count:]

    def since(self, mark: int) -> list[str]:
        """Lines added after `total` was `mark`, as far as they are still kept."""
        return self.tail(self.total - mark)

    def clear(self):
        self._lines.clear()
