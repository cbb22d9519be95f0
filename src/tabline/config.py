"""Configuration loading.

Configs are small YAML files read with a minimal parser (no external
dependencies) that supports:
- Scalars (strings, numbers, booleans, null)
- One level of nested sections (key: with indented children)
- Comments (# ...)
- Quoted strings (single and double)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from importlib.resources import files
from pathlib import Path

# --- Minimal YAML Parser ---


def parse_simple_yaml(text: str) -> dict:
    """Parse a flat or one-level nested YAML mapping into a dict."""
    result: dict = {}
    section: dict | None = None
    section_indent = 0

    for raw in text.split("\n"):
        stripped = raw.strip()
        if not stripped or stripped.startswith("#"):
            continue
        indent = len(raw) - len(raw.lstrip())
        colon = _find_unquoted_colon(stripped)
        if colon <= 0:
            continue
        key = stripped[:colon].strip()
        value = _remove_inline_comment(stripped[colon + 1 :].strip())

        if section is not None and indent > section_indent:
            section[key] = _parse_value(value)
            continue

        section = None
        if value:
            result[key] = _parse_value(value)
        else:
            section = {}
            section_indent = indent
            result[key] = section

    return result


def _find_unquoted_colon(s: str) -> int:
    quote = None
    for i, c in enumerate(s):
        if quote:
            if c == quote:
                quote = None
        elif c in ("'", '"'):
            quote = c
        elif c == ":":
            return i
    return -1


def _remove_inline_comment(s: str) -> str:
    # Only a '#' preceded by a space starts a comment
    quote = None
    for i, c in enumerate(s):
        if quote:
            if c == quote:
                quote = None
        elif c in ("'", '"'):
            quote = c
        elif c == "#" and i > 0 and s[i - 1] == " ":
            return s[:i].rstrip()
    return s


def _parse_value(s: str) -> str | int | float | bool | None:
    """Parse a scalar YAML value."""
    s = s.strip()
    if not s or s.lower() in ("null", "~", "none"):
        return None
    if s.lower() in ("true", "yes", "on"):
        return True
    if s.lower() in ("false", "no", "off"):
        return False
    if len(s) >= 2 and s[0] == s[-1] and s[0] in ("'", '"'):
        return s[1:-1]
    try:
        if "." in s:
            return float(s)
        return int(s)
    except ValueError:
        return s


# --- Configuration Dataclasses ---


@dataclass
class ConsoleConfig:
    """Console display and completion settings."""

    height: int = 10
    prompt: str = "> "
    banner: str = " ----------- tabline console -----------"
    suggestion_width: int = 40


@dataclass
class HistoryConfig:
    max_size: int = 1000


@dataclass
class OutputConfig:
    max_lines: int = 500


@dataclass
class Config:
    console: ConsoleConfig = field(default_factory=ConsoleConfig)
    history: HistoryConfig = field(default_factory=HistoryConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def _get_config_search_paths(config_name: str) -> list[str]:
    config_filename = f"{config_name}.yml"
    return [
        str(Path.home() / ".tabline" / "configs" / config_filename),
        str(Path.cwd() / "configs" / config_filename),
        f"tabline.configs/{config_filename} (bundled)",
    ]


def _find_config_text(config_name_or_path: str) -> str | None:
    """Locate a config by path or name and return its text, or None."""
    path = Path(config_name_or_path).expanduser()
    if path.suffix == ".yml" or len(path.parts) > 1:
        if path.is_file():
            return path.read_text(encoding="utf-8")
        return None

    config_filename = f"{config_name_or_path}.yml"
    for candidate in (
        Path.home() / ".tabline" / "configs" / config_filename,
        Path.cwd() / "configs" / config_filename,
    ):
        if candidate.is_file():
            return candidate.read_text(encoding="utf-8")

    bundled = files("tabline.configs").joinpath(config_filename)
    if bundled.is_file():
        return bundled.read_text(encoding="utf-8")
    return None


def load_config(config_name_or_path: str | None = None) -> Config:
    """Load configuration from a YAML file.

    Args:
        config_name_or_path: Name of a config (without .yml extension), or a
                            path to a config file. If None or empty, uses 'default'.

    Returns:
        Config object with loaded values merged over defaults.

    Raises:
        FileNotFoundError: If a non-default config is specified but not found.
    """
    if not config_name_or_path:
        config_name_or_path = "default"

    config = Config()
    text = _find_config_text(config_name_or_path)

    if text is None:
        if config_name_or_path == "default":
            return config
        search_paths = _get_config_search_paths(config_name_or_path)
        paths_str = "\n  - ".join(search_paths)
        raise FileNotFoundError(
            f"Config '{config_name_or_path}' not found. Searched:\n  - {paths_str}"
        )

    _merge_config(config, parse_simple_yaml(text))
    return config


def _merge_config(config: Config, data: dict):
    """Merge parsed YAML data into a Config object.

    Null values leave the default in place; sizes are clamped at 0, which
    means unbounded.
    """
    if not isinstance(data, dict):
        return

    if isinstance(data.get("console"), dict):
        console = data["console"]
        if console.get("height") is not None:
            config.console.height = int(console["height"])
        if console.get("prompt") is not None:
            config.console.prompt = str(console["prompt"])
        if console.get("banner") is not None:
            config.console.banner = str(console["banner"])
        if console.get("suggestion_width") is not None:
            config.console.suggestion_width = int(console["suggestion_width"])

    if isinstance(data.get("history"), dict):
        hist = data["history"]
        if "max_size" in hist:
            config.history.max_size = max(0, int(hist["max_size"])) if hist["max_size"] else 0

    if isinstance(data.get("output"), dict):
        out = data["output"]
        if out.get("max_lines") is not None:
            config.output.max_lines = max(0, int(out["max_lines"]))
