"""Strategies deciding which value wins when master and partner disagree."""

from __future__ import annotations

import logging
import sys
from abc import ABC, abstractmethod
from typing import IO

from rich.console import Console

from .diff import render_diff
from .errors import InputExhaustedError
from .models import MergeSettings

logger = logging.getLogger(__name__)

CHOICE_PROMPT = "(p)artner (default) or (m)aster or (e)dit?"
EDIT_PROMPT = "Enter new value:"


class ResolutionStrategy(ABC):
    """Show the diff for a conflict and return the value to keep."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def resolve(self, master_value: str, partner_value: str) -> str:
        self.console.print(render_diff(master_value, partner_value))
        value = self.choose(master_value, partner_value)
        self.console.print()
        return value

    @abstractmethod
    def choose(self, master_value: str, partner_value: str) -> str:
        """Return the winning value once the diff has been shown."""


class AcceptPartnerStrategy(ResolutionStrategy):
    """Batch mode: the partner value always wins."""

    def choose(self, master_value: str, partner_value: str) -> str:
        return partner_value


def _strip_line_ending(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n"):
        return line[:-1]
    return line


class InteractiveStrategy(ResolutionStrategy):
    """Ask the operator for every conflict until a valid answer is given."""

    def __init__(self, console: Console | None = None, stream: IO[str] | None = None) -> None:
        super().__init__(console)
        self.stream = stream

    def _read_line(self, prompt: str) -> str:
        self.console.print(prompt, markup=False, highlight=False)
        line = self.console.input(stream=self.stream or sys.stdin)
        if line == "":
            raise InputExhaustedError("input ended before the conflict was resolved")
        return _strip_line_ending(line)

    def choose(self, master_value: str, partner_value: str) -> str:
        while True:
            answer = self._read_line(CHOICE_PROMPT)
            if answer in ("p", ""):
                return partner_value
            if answer == "m":
                return master_value
            if answer == "e":
                return self._read_line(EDIT_PROMPT)
            logger.debug("Ignoring unrecognized choice %r", answer)


def strategy_for(
    settings: MergeSettings,
    console: Console | None = None,
    stream: IO[str] | None = None,
) -> ResolutionStrategy:
    """Pick the batch or interactive strategy from the run settings."""

    if settings.accept_all:
        return AcceptPartnerStrategy(console)
    return InteractiveStrategy(console, stream)
