"""Ordered command registry.

The index of a command in the registry is its id. Resolution walks the
registry in this order, so earlier registrations win ties.
"""

from __future__ import annotations

from typing import Iterator, Sequence

from tabline.types import (
    AliasGroup,
    CommandCallback,
    CommandDefinition,
    LegacyCommand,
    TokenGenerator,
)


def literal(*aliases: str) -> TokenGenerator:
    """Generator for a token position with a single group of synonyms."""
    group = list(aliases)
    return lambda: [list(group)]


def choices(*groups: AliasGroup) -> TokenGenerator:
    """Generator for a token position with several fixed alias groups."""
    frozen = [list(g) for g in groups]
    return lambda: [list(g) for g in frozen]


class CommandRegistry:
    def __init__(self):
        self._commands: list[CommandDefinition] = []
        self._legacy: list[LegacyCommand] = []

    def register(
        self,
        generators: Sequence[TokenGenerator],
        fixed_token_count: int,
        callback: CommandCallback,
    ) -> int:
        """Append a command and return its id.

        The generator count is not checked against fixed_token_count here;
        resolution and completion handle short specs when they run.
        """
        self._commands.append(
            CommandDefinition(tuple(generators), fixed_token_count, callback)
        )
        return len(self._commands) - 1

    def register_legacy(self, command: str, callback: CommandCallback) -> int:
        """Append a literal command string for the fallback matcher."""
        self._legacy.append(LegacyCommand(command, callback))
        return len(self._legacy) - 1

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[CommandDefinition]:
        return iter(self._commands)

    def __getitem__(self, command_id: int) -> CommandDefinition:
        return self._commands[command_id]

    def list(self) -> Iterator[CommandDefinition]:
        return iter(self._commands)

    @property
    def legacy_commands(self) -> list[LegacyCommand]:
        return self._legacy

    def list_lines(self) -> list[str]:
        """Render each command's fixed tokens, one line per command.

        Groups at the same position are joined with '/', showing only
        each group's canonical (first) alias.
        """
        lines = []
        for command in self._commands:
            parts = []
            for generator in command.generators[: command.fixed_token_count]:
                parts.append("/".join(group[0] for group in generator() if group))
            lines.append(" ".join(parts))
        return lines
