from typing import List


class MonkeyError(Exception):
    """Base class for host-level errors raised by the Monkey toolchain."""


class ParseError(MonkeyError):
    """Raised when source code could not be parsed.

    Carries every message the parser collected, in source order.
    """
    def __init__(self, errors: List[str]):
        super().__init__('\n'.join(errors))
        self.errors = list(errors)
