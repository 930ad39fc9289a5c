"""Command parsing: raw DM text to a closed set of command names."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import StrEnum


class CommandName(StrEnum):
    ADD = "add"
    PLAY = "play"
    PAUSE = "pause"
    VOLUME = "volume"
    SKIP = "skip"
    STATUS = "status"
    DEVICES = "devices"
    SEARCH = "search"
    HELP = "help"
    UNRECOGNIZED = "unrecognized"

    @classmethod
    def resolve(cls, raw: str) -> CommandName:
        try:
            command = cls(raw.lower())
        except ValueError:
            return cls.UNRECOGNIZED
        return cls.UNRECOGNIZED if command is cls.UNRECOGNIZED else command


@dataclass(frozen=True)
class ParsedCommand:
    name: CommandName
    raw_name: str
    params: tuple[str, ...] = field(default_factory=tuple)

    def param(self, index: int) -> str | None:
        return self.params[index] if index < len(self.params) else None


def parse_command(text: str) -> ParsedCommand:
    """Split *text* on whitespace; the first word names the command."""
    words = text.split()
    if not words:
        return ParsedCommand(name=CommandName.UNRECOGNIZED, raw_name="")
    raw_name, *params = words
    return ParsedCommand(name=CommandName.resolve(raw_name), raw_name=raw_name, params=tuple(params))


def parse_number(text: str) -> int | None:
    """Parse a decimal number and floor it, or return None if it is not a number."""
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return math.floor(value)
