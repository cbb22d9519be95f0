import time

from tabline.types import ts_str

DEFAULT_LOG_PATH = "tabline_debug.log"


class DebugLogger:
    """Optional debug log of submissions, resolutions and completions."""

    def __init__(self, path: str = DEFAULT_LOG_PATH):
        self.path = path
        self.enabled = False
        self._fh = None

    def start(self):
        self._fh = open(self.path, "a", encoding="utf-8")
        self.enabled = True
        self._fh.write(
            f"\n{'='*60}\n  Session started: {time.strftime('%Y-%m-%d %H:%M:%S')}\n{'='*60}\n"
        )
        self._fh.flush()

    def stop(self):
        self.enabled = False
        if self._fh:
            try:
                self._fh.close()
            except OSError:
                pass
        self._fh = None

    def toggle(self) -> bool:
        if self.enabled:
            self.stop()
        else:
            self.start()
        return self.enabled

    def log(self, text: str):
        if not self.enabled or not self._fh:
            return
        for line in text.split("\n"):
            self._fh.write(f"{ts_str(time.time())} | {line}\n")
        self._fh.flush()

    def log_submit(self, line: str, outcome: str):
        self.log(f"submit {line!r} -> {outcome}")

    def log_dispatch_error(self, tokens: list[str], kind, exc: Exception):
        self.log(
            f"dispatch {' '.join(tokens)!r} failed ({kind.name}): "
            f"{type(exc).__name__}: {exc}"
        )

    def log_completion(self, before: str, after: str):
        if before != after:
            self.log(f"complete {before!r} -> {after!r}")
