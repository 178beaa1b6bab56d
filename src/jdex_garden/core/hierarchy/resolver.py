"""Validate identifiers and compute the full Johnny-Decimal id of every node."""

from collections.abc import Sequence

from loguru import logger

from jdex_garden.errors import DuplicateIdentifier
from jdex_garden.models.node import Node, ResolvedNode, ResolvedSystem, System


def format_full_id(system_id: str, tokens: Sequence[str], separator: str = ".") -> str:
    """Join ancestor tokens into a display id.

    An area shows its own range (``N01.10-19``). Below the area the range is
    implied by the category number, so it is left out (``N01.10.10.X01``).
    """
    shown = tuple(tokens) if len(tokens) <= 1 else tuple(tokens[1:])
    return separator.join((system_id, *shown))


def _check_unique(nodes: Sequence[Node], parent: str) -> None:
    seen: dict[str, Node] = {}
    for node in nodes:
        other = seen.get(node.canonical_id)
        if other is not None:
            raise DuplicateIdentifier(parent, node.token, (other.topic, node.topic))
        seen[node.canonical_id] = node


def _resolve(
    nodes: Sequence[Node],
    *,
    parent: str,
    parent_tokens: tuple[str, ...],
    system_id: str,
    separator: str,
) -> tuple[ResolvedNode, ...]:
    _check_unique(nodes, parent)
    resolved: list[ResolvedNode] = []
    for node in nodes:
        tokens = (*parent_tokens, node.token)
        full_id = format_full_id(system_id, tokens, separator)
        children = _resolve(
            node.children,
            parent=f"{full_id} {node.topic}",
            parent_tokens=tokens,
            system_id=system_id,
            separator=separator,
        )
        resolved.append(ResolvedNode(node=node, tokens=tokens, full_id=full_id, children=children))
    return tuple(resolved)


def _collect_warnings(areas: Sequence[ResolvedNode]) -> list[str]:
    warnings: list[str] = []

    index_names = [node.name for area in areas for node in area.walk() if node.node.is_index]
    if len(index_names) > 1:
        warnings.append(f"More than one index entry: {', '.join(index_names)}")

    for area in areas:
        start, end = area.node.numeric_id, area.node.range_end
        for category in area.children:
            if category.node.prefix:
                continue
            if end is not None and not start <= category.node.numeric_id <= end:
                warnings.append(f"Category {category.name!r} is outside area {area.name!r}")
    return warnings


def resolve_system(system: System, *, separator: str = ".") -> ResolvedSystem:
    """Attach full ids to every node of the system.

    Siblings must have distinct identifiers. Identifiers compare with their
    prefix, so ``20`` and ``X20`` may sit side by side.

    Raises:
        DuplicateIdentifier: When two siblings share an identifier.
    """
    areas = _resolve(
        system.areas,
        parent=f"{system.system_id} {system.name}",
        parent_tokens=(),
        system_id=system.system_id,
        separator=separator,
    )
    warnings = _collect_warnings(areas)
    for warning in warnings:
        logger.warning(warning)

    return ResolvedSystem(
        system_id=system.system_id,
        name=system.name,
        areas=areas,
        separator=separator,
        warnings=tuple(warnings),
    )
