from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Sequence

AliasGroup = Sequence[str]
TokenGenerator = Callable[[], Sequence[AliasGroup]]
CommandCallback = Callable[[list[str]], str]


@dataclass(frozen=True)
class CommandDefinition:
    generators: tuple[TokenGenerator, ...]
    fixed_token_count: int
    callback: CommandCallback

    def token_limit(self, fixed_only: bool) -> int:
        """Number of token positions this command can complete."""
        if fixed_only:
            return min(self.fixed_token_count, len(self.generators))
        return len(self.generators)


@dataclass(frozen=True)
class LegacyCommand:
    command: str
    callback: CommandCallback


@dataclass
class MatchInfo:
    position: int | None  # None when the typed token is not in the candidate
    length_gap: int
    command_id: int
    group_id: int
    candidate: str
    candidate_lowered: str
    aliases: list[str] = field(default_factory=list)

    def sort_key(self) -> tuple[bool, int, int]:
        return (self.position is None, self.position or 0, self.length_gap)


def tokenize(line: str) -> list[str]:
    return line.split()


def ts_str(t: float) -> str:
    lt = time.localtime(t)
    return time.strftime("%H:%M:%S", lt)
