"""Domain models for a Johnny-Decimal system."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import IntEnum, StrEnum


class Level(IntEnum):
    """The five fixed tiers of a system, root first."""

    SYSTEM = 0
    AREA = 1
    CATEGORY = 2
    FOLDER = 3
    XFOLDER = 4

    @property
    def template_name(self) -> str:
        return self.name.lower()


class Kind(StrEnum):
    """What an entry materializes as, selected by the glyph in front of its topic."""

    FOLDER = "folder"
    NOTE = "note"
    FOLDER_AND_NOTE = "folder_and_note"
    INDEX = "index"

    @classmethod
    def from_glyph(cls, glyph: str) -> Kind:
        return GLYPHS.get(glyph, cls.FOLDER)

    @property
    def creates_directory(self) -> bool:
        return self in (Kind.FOLDER, Kind.FOLDER_AND_NOTE)


GLYPHS: dict[str, Kind] = {
    "-": Kind.NOTE,
    "+": Kind.FOLDER_AND_NOTE,
    "!": Kind.INDEX,
}


@dataclass(frozen=True)
class Node:
    """A single entry of the hierarchy text.

    ``numeric_id`` holds the digits of the identifier (the range start for
    areas), ``width`` how many digits were written, and ``prefix`` any alpha
    prefix such as ``X`` for extended folders.
    """

    level: Level
    numeric_id: int
    topic: str
    kind: Kind = Kind.FOLDER
    prefix: str = ""
    width: int = 2
    range_end: int | None = None
    line_no: int = 0
    children: tuple[Node, ...] = ()

    @property
    def token(self) -> str:
        """Identifier as written in the source."""
        if self.range_end is not None:
            return f"{self.numeric_id:0{self.width}d}-{self.range_end:0{self.width}d}"
        return f"{self.prefix}{self.numeric_id:0{self.width}d}"

    @property
    def canonical_id(self) -> str:
        """Identifier used to compare siblings. Keeps the prefix, normalizes padding."""
        if self.range_end is not None:
            return f"{self.numeric_id:02d}-{self.range_end:02d}"
        return f"{self.prefix}{self.numeric_id:02d}"

    @property
    def is_index(self) -> bool:
        return self.kind is Kind.INDEX


@dataclass(frozen=True)
class System:
    """The root of the tree, built from the configuration rather than the text."""

    system_id: str
    name: str
    areas: tuple[Node, ...] = ()


@dataclass(frozen=True)
class ResolvedNode:
    """A node annotated with its ancestor-qualified identifier."""

    node: Node
    tokens: tuple[str, ...]
    full_id: str
    children: tuple[ResolvedNode, ...] = ()

    @property
    def level(self) -> Level:
        return self.node.level

    @property
    def kind(self) -> Kind:
        return self.node.kind

    @property
    def topic(self) -> str:
        return self.node.topic

    @property
    def name(self) -> str:
        """Display name, also used for the node's directory and note file."""
        return f"{self.full_id} {self.topic}"

    def walk(self) -> Iterator[ResolvedNode]:
        """Yield this node and its descendants in pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass(frozen=True)
class ResolvedSystem:
    """A validated system ready for rendering and materialization."""

    system_id: str
    name: str
    areas: tuple[ResolvedNode, ...]
    separator: str = "."
    warnings: tuple[str, ...] = ()

    @property
    def full_id(self) -> str:
        return self.system_id

    def walk(self) -> Iterator[ResolvedNode]:
        """Yield every node below the system in source order."""
        for area in self.areas:
            yield from area.walk()
