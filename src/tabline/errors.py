"""Argument errors raised by command callbacks and the dispatch boundary."""

from __future__ import annotations

from enum import Enum

from tabline.types import CommandCallback


class ArgumentErrorKind(Enum):
    OUT_OF_RANGE = "error: argument out of range"
    INVALID = "error: invalid argument"

    @property
    def message(self) -> str:
        return self.value


class ArgumentError(Exception):
    kind: ArgumentErrorKind = ArgumentErrorKind.INVALID


class ArgumentOutOfRange(ArgumentError, IndexError):
    """An argument names an index or value outside the accepted range."""

    kind = ArgumentErrorKind.OUT_OF_RANGE


class InvalidArgument(ArgumentError, ValueError):
    """An argument cannot be parsed."""

    kind = ArgumentErrorKind.INVALID


def run_callback(
    callback: CommandCallback, tokens: list[str]
) -> tuple[str, ArgumentErrorKind | None, Exception | None]:
    """Invoke a command callback, converting argument errors into messages.

    Returns (text, kind, exc). On success kind and exc are None and text is
    the callback's result. On an argument error text is the fixed message for
    the error kind; exc is kept for diagnostics only.
    """
    try:
        return callback(tokens), None, None
    except ArgumentError as e:
        return e.kind.message, e.kind, e
    except IndexError as e:
        return ArgumentErrorKind.OUT_OF_RANGE.message, ArgumentErrorKind.OUT_OF_RANGE, e
    except ValueError as e:
        return ArgumentErrorKind.INVALID.message, ArgumentErrorKind.INVALID, e
