"""Yes/no confirmation from the operator."""

import sys
import termios
import tty
from abc import ABC, abstractmethod
from typing import Optional, TextIO

from nvimsetup.ui import console


class Prompt(ABC):
    """Abstract yes/no confirmation"""

    @abstractmethod
    def confirm(self, question: str) -> bool:
        pass


class CannedPrompt(Prompt):
    """Always gives the same answer (used for --yes and in tests)"""

    def __init__(self, answer: bool):
        self.answer = answer
        self.questions: list[str] = []

    def confirm(self, question: str) -> bool:
        self.questions.append(question)
        console.print(f"{question} [dim](y/N)[/] {'y' if self.answer else 'n'}")
        return self.answer


class TerminalPrompt(Prompt):
    """Reads a single keystroke from the controlling terminal.

    Only 'y' or 'Y' counts as yes. When stdin is a pipe (curl ... | python),
    the answer is read from /dev/tty instead.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def _open_terminal(self) -> tuple[TextIO, bool]:
        """Return (stream, owned) where owned means we must close it"""
        if self.stream is not None:
            return self.stream, False
        if sys.stdin.isatty():
            return sys.stdin, False
        try:
            return open("/dev/tty", "r"), True
        except OSError:
            return sys.stdin, False

    @staticmethod
    def _read_key(stream: TextIO) -> str:
        if not stream.isatty():
            return stream.readline()[:1]
        fd = stream.fileno()
        old = termios.tcgetattr(fd)
        try:
            tty.setcbreak(fd)
            return stream.read(1)
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old)

    def confirm(self, question: str) -> bool:
        console.print(f"{question} [dim](y/N)[/] ", end="")
        stream, owned = self._open_terminal()
        try:
            key = self._read_key(stream)
        finally:
            if owned:
                stream.close()
        console.print(key.strip())
        return key.lower() == "y"
