"""Parsing of the commands users give the bot in issue comments."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from crater.strings import split_quoted
from crater.toolchain import Toolchain

_INT_RE = re.compile(r"[+-]?[0-9]+")
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1

Option = tuple[str, str, Callable[[str], Any]]
"""A command option: the key users write, the argument name and the value parser."""


class CommandParseError(ValueError):
    """A command could not be parsed."""

    def __init__(self, message: str, value: str | None = None) -> None:
        super().__init__(message)
        self.value = value

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and other.value == self.value

    def __hash__(self) -> int:
        return hash((type(self), self.value))


class MissingCommandError(CommandParseError):
    """The comment held no command at all."""

    def __init__(self) -> None:
        super().__init__("missing command")


class InvalidArgumentError(CommandParseError):
    """An argument was not of the form ``key=value``."""

    def __init__(self, argument: str) -> None:
        super().__init__(f"invalid argument: {argument}", argument)


class DuplicateKeyError(CommandParseError):
    """The same key was given twice."""

    def __init__(self, key: str) -> None:
        super().__init__(f"duplicate key: {key}", key)


class UnknownKeyError(CommandParseError):
    """A key the command does not accept was given."""

    def __init__(self, key: str) -> None:
        super().__init__(f"unknown key: {key}", key)


def parse_bool(text: str) -> bool:
    """Parse exactly ``true`` or ``false``."""
    if text == "true":
        return True
    if text == "false":
        return False
    raise ValueError(f"invalid boolean: {text!r}")


def _parse_i32(text: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"invalid integer: {text!r}")
    value = int(text)
    if not _I32_MIN <= value <= _I32_MAX:
        raise ValueError(f"integer out of range: {text}")
    return value


@dataclass(frozen=True)
class CommandSpec:
    """A command: its name, the word that selects it and the options it accepts.

    A spec whose ``word`` is None is selected when no other command word matches.
    """

    name: str
    word: str | None
    options: tuple[Option, ...] = ()


@dataclass(frozen=True)
class ParsedCommand:
    """A parsed command with every option it accepts, None where not given."""

    command: str
    args: Mapping[str, Any] = field(default_factory=dict)


class CommandParser:
    """Parser for a set of commands with a fallback command."""

    def __init__(self, commands: Iterable[CommandSpec], default: CommandSpec) -> None:
        self._by_word = {spec.word: spec for spec in commands if spec.word is not None}
        self._default = default

    def parse(self, text: str) -> ParsedCommand:
        """Parse a command line such as ``run name=foo start=stable``."""
        parts = split_quoted(text)
        if not parts:
            raise MissingCommandError()

        spec = self._by_word.get(parts[0])
        if spec is None:
            spec = self._default
        else:
            parts = parts[1:]

        options = {key: (attr, parser) for key, attr, parser in spec.options}
        args: dict[str, Any] = {attr: None for attr, _ in options.values()}
        seen: set[str] = set()

        for part in parts:
            if not part.strip():
                continue
            key, sep, value = part.partition("=")
            if not sep:
                raise InvalidArgumentError(part)
            if key not in options:
                raise UnknownKeyError(key)
            if key in seen:
                raise DuplicateKeyError(key)
            seen.add(key)
            attr, parser = options[key]
            args[attr] = parser(value)

        return ParsedCommand(spec.name, args)


_EXPERIMENT_OPTIONS: tuple[Option, ...] = (
    ("name", "name", str),
    ("start", "start", Toolchain.parse),
    ("end", "end", Toolchain.parse),
    ("mode", "mode", str),
    ("crates", "crates", str),
    ("cap-lints", "cap_lints", str),
    ("p", "priority", _parse_i32),
    ("ignore-blacklist", "ignore_blacklist", parse_bool),
    ("assign", "assign", str),
    ("requirement", "requirement", str),
)

_NAME_OPTION: tuple[Option, ...] = (("name", "name", str),)

COMMAND_PARSER = CommandParser(
    [
        CommandSpec("run", "run", _EXPERIMENT_OPTIONS),
        CommandSpec(
            "check", "check", tuple(opt for opt in _EXPERIMENT_OPTIONS if opt[0] != "mode")
        ),
        CommandSpec("abort", "abort", _NAME_OPTION),
        CommandSpec("ping", "ping"),
        CommandSpec("retry-report", "retry-report", _NAME_OPTION),
        CommandSpec("retry", "retry", _NAME_OPTION),
        CommandSpec("reload-acl", "reload-acl"),
    ],
    default=CommandSpec("edit", None, _EXPERIMENT_OPTIONS),
)


def parse_command(text: str) -> ParsedCommand:
    """Parse one of the bot's commands; unrecognised words mean ``edit``."""
    return COMMAND_PARSER.parse(text)