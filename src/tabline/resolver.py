from __future__ import annotations

from typing import Sequence

from tabline.debug_log import DebugLogger
from tabline.registry import CommandRegistry


class CommandResolver:
    """Maps token sequences to registered commands by exact alias match."""

    def __init__(self, registry: CommandRegistry, logger: DebugLogger | None = None):
        self.registry = registry
        self.logger = logger

    def resolve(self, tokens: Sequence[str]) -> int | None:
        """Return the id of the first command whose fixed tokens all match.

        Matching is case-sensitive and whole-token. Generators are called
        fresh for every position tested.
        """
        if not tokens:
            return None
        for command_id, command in enumerate(self.registry):
            fixed = command.fixed_token_count
            if fixed > len(tokens):
                continue
            if fixed > len(command.generators):
                if self.logger:
                    self.logger.log(
                        f"command {command_id}: {fixed} fixed tokens but "
                        f"{len(command.generators)} generators"
                    )
                continue
            if all(
                _in_groups(command.generators[i](), tokens[i]) for i in range(fixed)
            ):
                return command_id
        return None

    def resolve_legacy(self, line: str) -> int | None:
        """Longest legacy command that is the line or a word-bounded prefix of it."""
        best_size = 0
        best_index = None
        for index, legacy in enumerate(self.registry.legacy_commands):
            candidate = legacy.command
            if len(candidate) < best_size:
                continue
            if len(line) == len(candidate) or (
                len(line) > len(candidate) and line[len(candidate)] == " "
            ):
                if line.startswith(candidate) and (
                    best_index is None or len(candidate) > best_size
                ):
                    best_size = len(candidate)
                    best_index = index
        return best_index


def _in_groups(groups, name: str) -> bool:
    return any(name in group for group in groups)
