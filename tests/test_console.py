import pytest

from tabline.config import Config
from tabline.console import NOT_FOUND, NOT_FOUND_MESSAGE, Console, ConsoleKey
from tabline.debug_log import DebugLogger
from tabline.errors import ArgumentOutOfRange, InvalidArgument
from tabline.registry import literal


def make_console(**console_settings):
    config = Config()
    for key, value in console_settings.items():
        setattr(config.console, key, value)
    return Console(config)


class TestConstruction:
    def test_banner(self):
        console = make_console(banner="hello")
        assert console.output.lines == ["hello"]

    def test_no_banner(self):
        console = make_console(banner="")
        assert console.output.lines == []

    def test_list_command_registered(self):
        console = make_console()
        assert console.resolver.resolve(["list"]) == 0

    def test_starts_closed(self):
        assert make_console().is_open is False


class TestSubmitCommand:
    def test_empty_line_is_noop(self):
        console = make_console(banner="")
        assert console.submit_command("") == ""
        assert console.output.lines == []
        assert len(console.history) == 0

    def test_not_found(self):
        console = make_console(banner="")
        assert console.submit_command("nope") == NOT_FOUND
        assert console.output.lines == [" >> nope", NOT_FOUND_MESSAGE]
        assert console.history.entries == ["nope"]

    def test_whitespace_line_not_found_and_not_recorded(self):
        console = make_console(banner="")
        assert console.submit_command("   ") == NOT_FOUND
        assert len(console.history) == 0

    def test_dispatch_passes_all_tokens(self):
        console = make_console(banner="")
        seen = []

        def cb(tokens):
            seen.append(tokens)
            return "done"

        console.register_command([literal("echo")], 1, cb)
        assert console.submit_command("echo  a b") == "done"
        assert seen == [["echo", "a", "b"]]
        assert console.output.lines == [" >> echo  a b", "done"]

    def test_first_registered_command_runs(self):
        console = make_console()
        console.register_command([literal("go")], 1, lambda t: "first")
        console.register_command([literal("go")], 1, lambda t: "second")
        assert console.submit_command("go") == "first"

    def test_index_error_becomes_message(self):
        console = make_console()
        console.register_command([literal("get")], 1, lambda t: t[5])
        assert console.submit_command("get") == "error: argument out of range"

    def test_value_error_becomes_message(self):
        console = make_console()
        console.register_command([literal("num")], 1, lambda t: str(int(t[1])))
        assert console.submit_command("num abc") == "error: invalid argument"

    def test_argument_errors(self):
        console = make_console()

        def out_of_range(tokens):
            raise ArgumentOutOfRange("slot 9")

        def invalid(tokens):
            raise InvalidArgument("bad")

        console.register_command([literal("a")], 1, out_of_range)
        console.register_command([literal("b")], 1, invalid)
        assert console.submit_command("a") == "error: argument out of range"
        assert console.submit_command("b") == "error: invalid argument"
        assert console.output.lines[-1] == "error: invalid argument"

    def test_other_errors_propagate(self):
        console = make_console()

        def broken(tokens):
            raise RuntimeError("boom")

        console.register_command([literal("x")], 1, broken)
        with pytest.raises(RuntimeError):
            console.submit_command("x")

    def test_legacy_fallback(self):
        console = make_console()
        console.register_legacy_command("version", lambda t: "1.0")
        assert console.submit_command("version") == "1.0"

    def test_new_system_preferred_over_legacy(self):
        console = make_console()
        console.register_legacy_command("version", lambda t: "legacy")
        console.register_command([literal("version")], 1, lambda t: "new")
        assert console.submit_command("version") == "new"

    def test_legacy_argument_errors(self):
        console = make_console()
        console.register_legacy_command("pick", lambda t: t[3])
        assert console.submit_command("pick 1") == "error: argument out of range"

    def test_list_command_output(self):
        console = make_console(banner="")
        console.register_command([literal("load", "ld"), literal("game")], 2, lambda t: "")
        assert console.submit_command("list") == ""
        assert console.output.lines == [" >> list", "list", "load game", ""]

    def test_duplicate_submissions_recorded_once(self):
        console = make_console()
        console.submit_command("foo")
        console.submit_command("foo")
        assert console.history.entries == ["foo"]

    def test_debug_log_records_errors(self, tmp_path):
        logger = DebugLogger(str(tmp_path / "debug.log"))
        logger.start()
        console = Console(Config(), logger)
        console.register_command([literal("get")], 1, lambda t: t[5])
        console.submit_command("get")
        console.submit_command("nope")
        logger.stop()
        text = (tmp_path / "debug.log").read_text()
        assert "IndexError" in text
        assert "(OUT_OF_RANGE)" in text
        assert f"'nope' -> {NOT_FOUND}" in text


class TestAutoComplete:
    def test_completes_builtin(self):
        console = make_console()
        assert console.auto_complete("li") == "list "

    def test_suggestions_go_to_output(self):
        console = make_console(banner="")
        console.auto_complete("li", emit_suggestions=True)
        assert console.output.lines == ["suggestions:", "list"]

    def test_suggestion_width_from_config(self):
        console = make_console(banner="", suggestion_width=8)
        console.register_command([literal("load", "ld")], 1, lambda t: "")
        console.auto_complete("lo", emit_suggestions=True)
        assert console.output.lines[-1] == "load    ld"


class TestKeys:
    def test_typing_and_backspace(self):
        console = make_console()
        console.on_text_input("lis")
        console.on_text_input("x")
        console.on_key(ConsoleKey.BACKSPACE)
        assert console.typed_line == "lis"

    def test_backspace_on_empty_line(self):
        console = make_console()
        console.on_key(ConsoleKey.BACKSPACE)
        assert console.typed_line == ""

    def test_tab_completes_with_suggestions(self):
        console = make_console(banner="")
        console.on_text_input("li")
        console.on_key(ConsoleKey.TAB)
        assert console.typed_line == "list "
        assert console.output.lines[0] == "suggestions:"

    def test_enter_submits_and_clears(self):
        console = make_console(banner="")
        console.register_command([literal("ping")], 1, lambda t: "pong")
        console.on_text_input("ping")
        console.on_key(ConsoleKey.ENTER)
        assert console.typed_line == ""
        assert console.output.lines == [" >> ping", "pong"]

    def test_history_navigation(self):
        console = make_console()
        console.submit_command("first")
        console.submit_command("second")
        console.on_text_input("draft")
        console.on_key(ConsoleKey.UP)
        assert console.typed_line == "second"
        console.on_key(ConsoleKey.UP)
        assert console.typed_line == "first"
        console.on_key(ConsoleKey.UP)
        assert console.typed_line == "first"
        console.on_key(ConsoleKey.DOWN)
        console.on_key(ConsoleKey.DOWN)
        assert console.typed_line == "draft"

    def test_open_close(self):
        console = make_console()
        console.on_key(ConsoleKey.TOGGLE)
        assert console.is_open
        console.on_key(ConsoleKey.ESCAPE)
        assert not console.is_open
        console.on_key(ConsoleKey.ESCAPE)
        assert not console.is_open


class TestVisibleOutput:
    def test_limited_to_height(self):
        console = make_console(banner="", height=2)
        for i in range(5):
            console.output.add(str(i))
        assert console.visible_output() == ["3", "4"]
