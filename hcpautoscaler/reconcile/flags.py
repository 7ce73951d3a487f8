"""Typed, ordered command-line flags."""

from dataclasses import dataclass, field
from typing import Optional, Union

FlagValue = Union[str, int, bool]


def format_flag_value(value: FlagValue) -> str:
    """
    Format a flag value the way Go's flag package parses it back.

    Integers use base-10, booleans ``true``/``false`` and strings are
    passed through untouched so durations keep the unit they were given.
    """
    # bool first: it is a subclass of int
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value
    raise TypeError(f"Unsupported flag value type: {type(value).__name__}")


@dataclass(frozen=True)
class Flag:
    """A single ``--name`` or ``--name=value`` flag."""

    name: str
    value: Optional[FlagValue] = None

    def render(self) -> str:
        if self.value is None:
            return f"--{self.name}"
        return f"--{self.name}={format_flag_value(self.value)}"


@dataclass
class FlagSet:
    """Flags kept in insertion order. A name may only be added once."""

    flags: list[Flag] = field(default_factory=list)

    def add(self, name: str, value: Optional[FlagValue] = None) -> "FlagSet":
        """Append a flag unconditionally."""
        if name in self.names():
            raise ValueError(f"Flag --{name} is already set")
        self.flags.append(Flag(name=name, value=value))
        return self

    def add_optional(self, name: str, value: Optional[FlagValue]) -> "FlagSet":
        """Append a flag only when a value is present (not None or empty)."""
        if value is None or value == "":
            return self
        return self.add(name, value)

    def names(self) -> list[str]:
        return [f.name for f in self.flags]

    def render(self) -> list[str]:
        """Serialize the flags to command-line arguments."""
        return [f.render() for f in self.flags]
