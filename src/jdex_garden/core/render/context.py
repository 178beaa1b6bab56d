"""Build the data each template is rendered with."""

from typing import Any

from jdex_garden.models.node import Kind, Level, ResolvedNode, ResolvedSystem


def build_context(target: ResolvedNode | ResolvedSystem) -> dict[str, Any]:
    """Return the template context for a node or the system root.

    Every context has ``id``, ``topic``, ``kind``, ``level`` and ``tokens``.
    Only the system context carries ``name``.
    """
    if isinstance(target, ResolvedSystem):
        return {
            "id": target.full_id,
            "name": target.name,
            "topic": target.name,
            "kind": str(Kind.FOLDER),
            "level": Level.SYSTEM.template_name,
            "tokens": [],
        }
    return {
        "id": target.full_id,
        "topic": target.topic,
        "kind": str(target.kind),
        "level": target.level.template_name,
        "tokens": list(target.tokens),
    }
