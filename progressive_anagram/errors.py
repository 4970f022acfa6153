from __future__ import annotations


class AnagramError(Exception):
    """Base class for caller-facing errors raised by this package."""


class InsufficientInputError(AnagramError, ValueError):
    def __init__(self, usable: int, required: int = 2) -> None:
        super().__init__(f"Need at least {required} usable words to start a session, got {usable}.")
        self.usable = usable
        self.required = required


class SessionAlreadyDoneError(AnagramError, RuntimeError):
    def __init__(self) -> None:
        super().__init__("Session is already done. Start a new session before answering again.")


class UnknownAnswerKeyError(AnagramError, LookupError):
    def __init__(self, letter: str) -> None:
        super().__init__(f"No answer supplied for letter '{letter}'.")
        self.letter = letter
