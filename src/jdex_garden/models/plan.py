"""Planned filesystem actions, shared by dry-run and real runs."""

from collections import Counter
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path


class ActionKind(StrEnum):
    CREATE_DIR = "create-dir"
    WRITE_FILE = "write-file"
    SKIP = "skip"


@dataclass(frozen=True)
class Action:
    """A single step of a plan.

    ``content`` is only set for ``WRITE_FILE``. It is hidden from repr but
    still part of equality, so plans that would write different bytes differ.
    """

    kind: ActionKind
    path: Path
    reason: str
    content: str | None = field(default=None, repr=False)

    def describe(self) -> str:
        return f"{self.kind} {self.path} ({self.reason})"


@dataclass(frozen=True)
class Plan:
    """Ordered actions for one output root."""

    label: str
    root: Path
    actions: tuple[Action, ...] = ()

    def counts(self) -> dict[ActionKind, int]:
        counter = Counter(action.kind for action in self.actions)
        return {kind: counter.get(kind, 0) for kind in ActionKind}

    def render(self) -> str:
        """Human-readable listing, one action per line."""
        lines = [f"{self.label} ({self.root})"]
        lines.extend(f"  {action.describe()}" for action in self.actions)
        return "\n".join(lines) + "\n"

    def summary(self) -> str:
        counts = self.counts()
        return ", ".join(f"{counts[kind]} {kind}" for kind in ActionKind)
