"""Demo command set.

Save slot names are generated from live state, so completion and resolution
see slots created or removed earlier in the session.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tabline import __version__
from tabline.console import Console
from tabline.errors import ArgumentOutOfRange, InvalidArgument
from tabline.registry import choices, literal


@dataclass
class DemoState:
    slots: list[str] = field(default_factory=list)
    loaded: str | None = None

    def slot_groups(self) -> list[list[str]]:
        return [[name] for name in self.slots]


def _parse_int(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise InvalidArgument(f"not an integer: {text!r}") from None


def register_demo_commands(console: Console, state: DemoState | None = None) -> DemoState:
    """Register the demo commands on `console` and return their shared state."""
    state = state or DemoState()

    def save(tokens: list[str]) -> str:
        name = tokens[1]
        if name not in state.slots:
            state.slots.append(name)
        return f"saved {name}"

    def load(tokens: list[str]) -> str:
        state.loaded = tokens[1]
        return f"loaded {tokens[1]}"

    def slots(tokens: list[str]) -> str:
        if not state.slots:
            return "no save slots"
        return ", ".join(f"{i}:{name}" for i, name in enumerate(state.slots))

    def remove(tokens: list[str]) -> str:
        index = _parse_int(tokens[1])
        if not 0 <= index < len(state.slots):
            raise ArgumentOutOfRange(f"slot index {index} of {len(state.slots)}")
        return f"removed {state.slots.pop(index)}"

    def echo(tokens: list[str]) -> str:
        return " ".join(tokens[1:])

    def set_height(tokens: list[str]) -> str:
        height = _parse_int(tokens[2])
        if height < 1:
            raise ArgumentOutOfRange(f"height {height}")
        console.config.console.height = height
        return f"height set to {height}"

    # save <name> accepts new names, so only the verb is fixed
    console.register_command([literal("save"), state.slot_groups], 1, save)
    console.register_command([literal("load", "ld"), state.slot_groups], 2, load)
    console.register_command([literal("slots")], 1, slots)
    console.register_command([literal("remove", "rm")], 1, remove)
    console.register_command([literal("echo")], 1, echo)
    console.register_command([literal("set"), choices(["height", "lines"])], 2, set_height)
    console.register_legacy_command("version", lambda tokens: f"tabline {__version__}")
    return state
