class CommandHistory:
    """Submitted-line history with older/newer navigation.

    The navigation index counts back from the newest entry: 0 is the newest,
    -1 means not browsing (the pending line is shown).
    """

    def __init__(self, max_size: int | None = 1000):
        self._history: list[str] = []
        self._max_size = max_size
        self._index = -1
        self._pending = ""  # input being edited before browsing started

    def __len__(self) -> int:
        return len(self._history)

    @property
    def entries(self) -> list[str]:
        return list(self._history)

    @property
    def index(self) -> int:
        return self._index

    @property
    def pending(self) -> str:
        return self._pending

    def submit(self, line: str):
        """Record a submitted line. Skip blank lines and consecutive duplicates."""
        if line.strip() and (not self._history or self._history[-1] != line):
            self._history.append(line)
            if self._max_size and len(self._history) > self._max_size:
                self._history = self._history[-self._max_size :]
        self.reset()

    def reset(self):
        """Stop browsing and forget the pending line."""
        self._index = -1
        self._pending = ""

    def older(self, current_input: str) -> str:
        """Move to an older entry. Returns the new input text."""
        if len(self._history) <= self._index + 1:
            return current_input
        if self._index < 0:
            self._pending = current_input
        self._index += 1
        return self._history[-1 - self._index]

    def newer(self, current_input: str) -> str:
        """Move to a newer entry, restoring the pending line past the newest."""
        if self._index < 0:
            return current_input
        self._index -= 1
        if self._index < 0:
            return self._pending
        return self._history[-1 - self._index]
