"""Exceptions raised while building and materializing a Johnny-Decimal system."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jdex_garden.models.plan import Action


class JdexError(Exception):
    """Base class for every error the CLI reports and exits non-zero on."""


class ConfigError(JdexError):
    """The configuration file is missing or does not have the expected shape."""


class MalformedHierarchy(JdexError):
    """A line of the hierarchy text cannot be placed in the tree."""

    def __init__(self, line_no: int, line: str, reason: str) -> None:
        self.line_no = line_no
        self.line = line
        self.reason = reason
        super().__init__(f"line {line_no}: {reason}: {line.strip()!r}")


class DuplicateIdentifier(JdexError):
    """Two siblings share the same identifier."""

    def __init__(self, parent: str, token: str, topics: tuple[str, str]) -> None:
        self.parent = parent
        self.token = token
        self.topics = topics
        super().__init__(
            f"duplicate identifier {token!r} under {parent!r}: "
            f"{topics[0]!r} and {topics[1]!r}"
        )


class TemplateError(JdexError):
    """A template failed to compile or render."""

    def __init__(self, template_name: str, reason: str) -> None:
        self.template_name = template_name
        self.reason = reason
        super().__init__(f"template {template_name!r}: {reason}")


class PlanExecutionError(JdexError):
    """Base for failures that can happen while a plan is being applied.

    ``completed`` and ``pending`` are filled in by the executor when the error
    interrupts a plan, so the caller can report what was and wasn't applied.
    """

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.completed: tuple[Action, ...] = ()
        self.pending: tuple[Action, ...] = ()
        super().__init__(message)


class PathConflict(PlanExecutionError):
    """A path exists but is the wrong type (file vs directory)."""

    def __init__(self, path: Path, expected: str) -> None:
        self.expected = expected
        super().__init__(path, f"{str(path)!r} exists but is not a {expected}")


class IoError(PlanExecutionError):
    """A filesystem read or write failed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.reason = reason
        super().__init__(path, f"{str(path)!r}: {reason}")
