"""Console: the line submission and completion entry points.

A Console owns its registry, history and output log. Front ends feed it
text and key actions; it never draws anything itself.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Sequence

from tabline.completion import AutocompleteEngine
from tabline.config import Config
from tabline.debug_log import DebugLogger
from tabline.errors import run_callback
from tabline.history import CommandHistory
from tabline.output import OutputLog
from tabline.registry import CommandRegistry, literal
from tabline.resolver import CommandResolver
from tabline.types import CommandCallback, TokenGenerator, tokenize

NOT_FOUND = "NOTFOUND"
NOT_FOUND_MESSAGE = " -- Command not found -- "


class ConsoleKey(Enum):
    ESCAPE = auto()
    TOGGLE = auto()
    UP = auto()
    DOWN = auto()
    BACKSPACE = auto()
    ENTER = auto()
    TAB = auto()


class Console:
    def __init__(self, config: Config | None = None, logger: DebugLogger | None = None):
        self.config = config or Config()
        self.logger = logger or DebugLogger()
        self.registry = CommandRegistry()
        self.output = OutputLog(self.config.output.max_lines)
        self.history = CommandHistory(self.config.history.max_size)
        self.resolver = CommandResolver(self.registry, self.logger)
        self.completer = AutocompleteEngine(
            self.registry,
            sink=self.output,
            suggestion_width=self.config.console.suggestion_width,
            logger=self.logger,
        )
        self.typed_line = ""
        self.is_open = False

        if self.config.console.banner:
            self.output.add(self.config.console.banner)
        self.register_command([literal("list")], 1, self._list_commands)

    # --- Registration ---

    def register_command(
        self,
        generators: Sequence[TokenGenerator],
        fixed_token_count: int,
        callback: CommandCallback,
    ) -> int:
        return self.registry.register(generators, fixed_token_count, callback)

    def register_legacy_command(self, command: str, callback: CommandCallback) -> int:
        return self.registry.register_legacy(command, callback)

    def _list_commands(self, tokens: list[str]) -> str:
        self.output.extend(self.registry.list_lines())
        return ""

    # --- Entry points ---

    def submit_command(self, line: str) -> str:
        """Run one input line and return its textual result.

        An empty line does nothing and returns "". A line no command
        matches returns NOT_FOUND.
        """
        self.history.submit(line)
        if not line:
            return ""

        self.output.add(" >> " + line)
        tokens = tokenize(line)

        command_id = self.resolver.resolve(tokens)
        if command_id is not None:
            return self._dispatch(self.registry[command_id].callback, tokens, line)

        legacy_id = self.resolver.resolve_legacy(line)
        if legacy_id is not None:
            callback = self.registry.legacy_commands[legacy_id].callback
            return self._dispatch(callback, tokens, line)

        self.output.add(NOT_FOUND_MESSAGE)
        self.logger.log_submit(line, NOT_FOUND)
        return NOT_FOUND

    def _dispatch(self, callback: CommandCallback, tokens: list[str], line: str) -> str:
        result, kind, exc = run_callback(callback, tokens)
        if exc is not None:
            self.logger.log_dispatch_error(tokens, kind, exc)
        else:
            self.logger.log_submit(line, "ok")
        self.output.add(result)
        return result

    def auto_complete(
        self,
        line: str,
        limit_to_fixed: bool = False,
        emit_suggestions: bool = False,
        rewrite_input: bool = True,
    ) -> str:
        return self.completer.complete(line, limit_to_fixed, emit_suggestions, rewrite_input)

    # --- Typed line editing ---

    def on_text_input(self, text: str):
        self.typed_line += text

    def on_key(self, key: ConsoleKey):
        if key == ConsoleKey.ESCAPE:
            self.is_open = False
        elif key == ConsoleKey.TOGGLE:
            self.is_open = not self.is_open
        elif key == ConsoleKey.UP:
            self.typed_line = self.history.older(self.typed_line)
        elif key == ConsoleKey.DOWN:
            self.typed_line = self.history.newer(self.typed_line)
        elif key == ConsoleKey.BACKSPACE:
            self.typed_line = self.typed_line[:-1]
        elif key == ConsoleKey.ENTER:
            self.submit_command(self.typed_line)
            self.typed_line = ""
        elif key == ConsoleKey.TAB:
            self.typed_line = self.auto_complete(self.typed_line, False, True, True)

    def visible_output(self) -> list[str]:
        """The newest output lines that fit the configured console height."""
        return self.output.tail(self.config.console.height)
