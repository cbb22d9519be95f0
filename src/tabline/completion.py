"""Incremental tab completion over the command registry.

Each typed token is matched case-insensitively against the alias groups the
still-viable commands offer at that position. Groups whose best alias starts
with the token (prefix bucket) take precedence over groups that merely
contain it (substring bucket). The token is then extended to the longest
prefix shared by every entry of the winning bucket.

Generators are invoked on every call; nothing is cached between keystrokes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from tabline.debug_log import DebugLogger
from tabline.registry import CommandRegistry
from tabline.types import AliasGroup, MatchInfo, tokenize

TextSink = Callable[[Sequence[str]], None]

DEFAULT_SUGGESTION_WIDTH = 40


@dataclass
class CompletedToken:
    text: str
    exhausted: bool = False


def common_start_length(a: str, b: str) -> int:
    n = 0
    for x, y in zip(a, b):
        if x != y:
            break
        n += 1
    return n


def best_match(
    token: str, group: AliasGroup, command_id: int, group_id: int
) -> MatchInfo:
    """Best-matching alias of a non-empty group for an already lowered token.

    Earliest occurrence wins; among equal positions the alias closest in
    length to the token wins; remaining ties keep group order.
    """
    infos = []
    for alias in group:
        lowered = alias.lower()
        pos = lowered.find(token)
        infos.append(
            MatchInfo(
                position=pos if pos >= 0 else None,
                length_gap=len(lowered) - len(token),
                command_id=command_id,
                group_id=group_id,
                candidate=alias,
                candidate_lowered=lowered,
                aliases=list(group),
            )
        )
    return min(infos, key=MatchInfo.sort_key)


class AutocompleteEngine:
    def __init__(
        self,
        registry: CommandRegistry,
        sink: TextSink | None = None,
        suggestion_width: int = DEFAULT_SUGGESTION_WIDTH,
        logger: DebugLogger | None = None,
    ):
        self.registry = registry
        self.sink = sink
        self.suggestion_width = suggestion_width
        self.logger = logger

    def match_token(
        self, token: str, index: int, alive: list[bool], fixed_only: bool
    ) -> tuple[list[MatchInfo], list[MatchInfo]]:
        """Collect prefix and substring matches for the token at `index`.

        Every evaluated command is marked dead in `alive`; the caller
        revives the ones that contribute to the chosen bucket.
        """
        needle = token.lower()
        prefix: list[MatchInfo] = []
        middle: list[MatchInfo] = []
        for command_id, command in enumerate(self.registry):
            if not alive[command_id] or index >= command.token_limit(fixed_only):
                continue
            alive[command_id] = False
            groups = command.generators[index]()
            for group_id, group in enumerate(groups):
                if not group:
                    continue
                match = best_match(needle, group, command_id, group_id)
                if match.position == 0:
                    prefix.append(match)
                elif match.position is not None:
                    middle.append(match)
        return prefix, middle

    def complete(
        self,
        line: str,
        limit_to_fixed: bool = False,
        emit_suggestions: bool = False,
        rewrite_input: bool = True,
    ) -> str:
        """Extend each token of `line` toward its longest unambiguous form.

        Returns the rewritten line when `rewrite_input` is set, otherwise
        `line` itself. With `emit_suggestions`, a ranked listing per token is
        sent to the sink.
        """
        tokens = tokenize(line)
        if not tokens:
            return line

        completed = [CompletedToken(t) for t in tokens]
        alive = [True] * len(self.registry)

        for index, token in enumerate(tokens):
            prefix, middle = self.match_token(token, index, alive, limit_to_fixed)
            bucket = prefix or middle
            if bucket:
                reference = bucket[0].candidate_lowered
                common_length = len(reference)
                longest = len(reference)
                for match in bucket:
                    alive[match.command_id] = True
                    common_length = min(
                        common_length,
                        common_start_length(reference, match.candidate_lowered),
                    )
                    longest = max(longest, len(match.candidate_lowered))
                # Substring matches can share less than the typed text; keep it then.
                if common_length > 0 and common_length >= len(token):
                    completed[index] = CompletedToken(
                        bucket[0].candidate[:common_length],
                        exhausted=longest == common_length,
                    )
            if emit_suggestions:
                self.emit_suggestions(prefix, middle)

        if not rewrite_input:
            return line

        trailing_space = line[-1].isspace()
        last = len(completed) - 1
        parts = []
        for i, tok in enumerate(completed):
            parts.append(tok.text)
            if i != last or trailing_space or tok.exhausted:
                parts.append(" ")
        result = "".join(parts)
        if self.logger:
            self.logger.log_completion(line, result)
        return result

    def suggestion_lines(
        self, prefix: list[MatchInfo], middle: list[MatchInfo]
    ) -> list[str]:
        lines = ["suggestions:"]
        for bucket in (prefix, middle):
            for match in sorted(bucket, key=MatchInfo.sort_key):
                lines.append(
                    "".join(a.ljust(self.suggestion_width) for a in match.aliases).rstrip()
                )
        return lines

    def emit_suggestions(self, prefix: list[MatchInfo], middle: list[MatchInfo]):
        if self.sink is not None:
            self.sink(self.suggestion_lines(prefix, middle))
