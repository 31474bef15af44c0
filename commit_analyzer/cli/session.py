"""Interactive prompt session shared by every question in one run."""

from typing import Callable

YES_ANSWERS = ('y', 'yes')


class InteractiveSession:
    """Asks questions on the terminal until closed.

    Use as a context manager so the session is closed on every exit path.
    Once closed, or once input hits EOF or Ctrl-C, every answer is ''.
    """

    def __init__(self, input_fn: Callable[[str], str] = input):
        self._input = input_fn
        self.closed = False

    def ask(self, question: str) -> str:
        """Return the trimmed, lower-cased answer."""
        if self.closed:
            return ''
        try:
            return self._input(question).strip().lower()
        except (KeyboardInterrupt, EOFError):
            print()
            self.close()
            return ''

    def confirm(self, question: str) -> bool:
        return self.ask(question) in YES_ANSWERS

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> 'InteractiveSession':
        return self

    def __exit__(self, *args) -> None:
        self.close()
