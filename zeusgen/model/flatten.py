"""
Flattening: project a nested schema onto its leaf property paths.

    struct Filter { string q; Page page; Status status; string[] tags; }
    struct Page   { int32 offset; int32 limit; }

    flatten(ctx, Filter) == [["q"], ["page", "offset"], ["page", "limit"],
                             ["status"], ["tags"]]

Descent stops at primitives, arrays (whatever their item type) and enums.
A property that would re-enter a type already on the current path is skipped.

A schema whose every property re-enters an ancestor, such as
`struct Node { Node next; }`, therefore flattens to `[]` even though it has
properties. Emitting `["next"]` would end a path on a struct type, and
descending would revisit `Node`. Leaf paths and the no-revisit rule take
precedence over returning something non-empty.
"""

from zeusgen.gen_logging import get_logger

logger = get_logger(__name__)


def _is_leaf(ctx, prop) -> bool:
    if prop.type is None or prop.is_primitive:
        return True
    return ctx.get_type(prop.type.rpartition(".")[2]).is_enum


def flatten(ctx, schema, _ancestors=None) -> list:
    """Return every leaf path (list of property names) of `schema`, in declaration order."""
    ancestors = _ancestors if _ancestors is not None else {id(schema)}
    paths = []
    for prop in schema.properties:
        if _is_leaf(ctx, prop):
            paths.append([prop.name])
            continue

        target = prop.resolve_type(ctx)
        if id(target) in ancestors:
            logger.debug(
                f"  [FLATTEN] skipping '{prop.name}': '{target.name}' is already on the path"
            )
            continue

        for sub_path in flatten(ctx, target, ancestors | {id(target)}):
            paths.append([prop.name] + sub_path)
    return paths


def flat_name(path) -> str:
    """["page", "offset"] -> "pageOffset" """
    head, *rest = path
    return head + "".join(p[:1].upper() + p[1:] for p in rest)


def prop_by_path(ctx, schema, path):
    """Return the leaf property schema addressed by `path`."""
    current = schema
    prop = None
    for i, name in enumerate(path):
        prop = current.get_prop(name)
        if i < len(path) - 1:
            current = prop.resolve_type(ctx)
    return prop
