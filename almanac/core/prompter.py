# Line-oriented input: one command token per "> " prompt, and free-form
# questions for the fields each command needs.

from __future__ import annotations
import sys
from typing import Callable, Optional, TextIO

from almanac.calendar.codec import parse_u64
from almanac.utils.config import CONFIG


class PromptClosed(EOFError):
    """stdin hit EOF while a command was still asking for input."""


class Prompter:
    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None,
                 prompt: Optional[str] = None):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.prompt = CONFIG["prompt"] if prompt is None else prompt

    def _readline(self) -> Optional[str]:
        line = self.stdin.readline()
        if line == "":
            return None
        return line.strip()

    def say(self, text: str = "") -> None:
        self.stdout.write(text + "\n")

    def command(self) -> Optional[str]:
        """Read the next command; None at EOF."""
        self.stdout.write(self.prompt)
        self.stdout.flush()
        return self._readline()

    def ask(self, question: str) -> str:
        self.say(question)
        self.stdout.flush()
        answer = self._readline()
        if answer is None:
            raise PromptClosed(question)
        return answer

    def ask_u64(self, question: str) -> int:
        while True:
            try:
                return parse_u64(self.ask(question))
            except ValueError:
                self.say("Please enter a valid number.")

    def ask_field(self, question: str, check: Callable[[str], str]) -> str:
        """Ask until `check` accepts the answer (it raises ValueError otherwise)."""
        while True:
            answer = self.ask(question)
            try:
                return check(answer)
            except ValueError as e:
                self.say(f"Invalid input: {e}")
