"""Parse tab-indented hierarchy text into a tree of nodes."""

import re
from dataclasses import dataclass, field, replace

from loguru import logger

from jdex_garden.errors import MalformedHierarchy
from jdex_garden.models.node import GLYPHS, Kind, Level, Node, System

_RANGE_RE = re.compile(r"^(?P<start>\d+)-(?P<end>\d+)$")
_TOKEN_RE = re.compile(r"^(?P<prefix>X?)(?P<digits>\d+)$")

# Text depth 0 is an area; the system itself comes from the configuration.
MAX_DEPTH = Level.XFOLDER - Level.AREA


@dataclass
class _Draft:
    """Mutable stand-in for a node while its children are still being read."""

    node: Node
    children: list["_Draft"] = field(default_factory=list)

    def freeze(self) -> Node:
        return replace(self.node, children=tuple(child.freeze() for child in self.children))


def parse_line(line_no: int, raw: str) -> tuple[int, Node]:
    """Parse one non-blank line into its tab depth and a childless node.

    Raises:
        MalformedHierarchy: On space indentation, excessive depth, a bad
            identifier or a missing topic.
    """
    body = raw.lstrip("\t")
    depth = len(raw) - len(body)
    if body[:1].isspace():
        raise MalformedHierarchy(line_no, raw, "indentation must use tabs only")
    if depth > MAX_DEPTH:
        raise MalformedHierarchy(line_no, raw, "nested deeper than an extended folder")
    level = Level(Level.AREA + depth)

    parts = body.split(maxsplit=1)
    token = parts[0]
    label = parts[1] if len(parts) > 1 else ""
    glyph = label[0] if label[:1] in GLYPHS else ""
    topic = label[len(glyph):].strip()
    if not topic:
        raise MalformedHierarchy(line_no, raw, "missing topic")

    if level is Level.AREA:
        if glyph:
            raise MalformedHierarchy(line_no, raw, f"areas cannot be marked with {glyph!r}")
        match = _RANGE_RE.match(token)
        if match is None:
            raise MalformedHierarchy(line_no, raw, "area identifier must be a range like 10-19")
        start, end = int(match["start"]), int(match["end"])
        if start > end:
            raise MalformedHierarchy(line_no, raw, "area range ends before it starts")
        node = Node(
            level=level,
            numeric_id=start,
            range_end=end,
            width=len(match["start"]),
            topic=topic,
            line_no=line_no,
        )
        return depth, node

    match = _TOKEN_RE.match(token)
    if match is None:
        raise MalformedHierarchy(
            line_no, raw, "identifier must be digits, optionally prefixed with X"
        )
    node = Node(
        level=level,
        numeric_id=int(match["digits"]),
        prefix=match["prefix"],
        width=len(match["digits"]),
        topic=topic,
        kind=Kind.from_glyph(glyph),
        line_no=line_no,
    )
    return depth, node


def parse_hierarchy(text: str) -> tuple[Node, ...]:
    """Parse the hierarchy text into its area nodes.

    Each line may be indented at most one tab deeper than the line before it.
    Lines nested below a note or index entry are rejected, since those entries
    have no directory to hold children.

    Returns:
        Area nodes in source order, each carrying its full subtree.
    """
    roots: list[_Draft] = []
    stack: list[_Draft] = []
    count = 0

    for line_no, raw in enumerate(text.splitlines(), start=1):
        if not raw.strip():
            continue
        depth, node = parse_line(line_no, raw)
        if depth and not stack:
            raise MalformedHierarchy(line_no, raw, "first entry must not be indented")
        if depth > len(stack):
            raise MalformedHierarchy(
                line_no, raw, f"indented {depth - len(stack) + 1} levels below the previous entry"
            )
        del stack[depth:]

        draft = _Draft(node)
        if stack:
            parent = stack[-1].node
            if not parent.kind.creates_directory:
                raise MalformedHierarchy(
                    line_no, raw, f"{parent.kind} entry {parent.token!r} cannot have children"
                )
            stack[-1].children.append(draft)
        else:
            roots.append(draft)
        stack.append(draft)
        count += 1

    logger.debug("Parsed {} areas ({} entries)", len(roots), count)
    return tuple(draft.freeze() for draft in roots)


def parse_system(system_id: str, name: str, text: str) -> System:
    """Build the system root and attach the parsed areas below it."""
    return System(system_id=system_id, name=name, areas=parse_hierarchy(text))
