"""
Option-path merge.

Options arrive as flat (dotted path, value) pairs and are folded into nested
per-declaration bags:

    @rest.method("post");            -> {"rest": {"method": "post"}}
    @rest.query({"a": 1});
    @rest.query({"b": 2});           -> {"rest": {"query": {"a": 1, "b": 2}}}
    @rest.tags._0("x");
    @rest.tags._1("y");              -> {"rest": {"tags": ["x", "y"]}}

A segment `_N` is an index marker: as the last segment it appends the value
to the array at the parent path; in the middle of a path it addresses element
N of that array, appending a fresh object when N is past its end.
"""

import copy
import re

from zeusgen.errors import ValidationError

_INDEX_MARKER = re.compile(r"^_(\d+)$")


def is_index_marker(segment: str) -> bool:
    return bool(_INDEX_MARKER.match(segment))


def merge_value(current, incoming):
    """Deep-merge two option values; mappings accumulate keys, anything else is replaced."""
    if isinstance(current, dict) and isinstance(incoming, dict):
        merged = dict(current)
        for key, value in incoming.items():
            merged[key] = merge_value(merged[key], value) if key in merged else copy.deepcopy(value)
        return merged
    return copy.deepcopy(incoming)


def assign_by_path(bag: dict, path: str, value) -> dict:
    """Set `value` at the dotted `path` inside `bag`, auto-vivifying intermediate objects."""
    segments = path.split(".")
    parent, key = None, None
    current = bag

    for i, segment in enumerate(segments):
        last = i == len(segments) - 1
        marker = _INDEX_MARKER.match(segment)

        if marker:
            if parent is None:
                raise ValidationError(f"option path '{path}' cannot start with an index marker")
            if not isinstance(parent[key], list):
                parent[key] = []
            items = parent[key]
            if last:
                items.append(copy.deepcopy(value))
                return bag
            index = int(marker.group(1))
            if index >= len(items):
                items.append({})
                index = len(items) - 1
            elif not isinstance(items[index], dict):
                items[index] = {}
            parent, key = items, index
            current = items[index]
            continue

        if last:
            if segment in current:
                current[segment] = merge_value(current[segment], value)
            else:
                current[segment] = copy.deepcopy(value)
            return bag

        nxt = current.get(segment)
        if is_index_marker(segments[i + 1]):
            if not isinstance(nxt, list):
                nxt = current[segment] = []
        # A bare `@flag` (true) followed by `@flag.key(...)` turns the flag into an object
        elif not isinstance(nxt, dict):
            nxt = current[segment] = {}
        parent, key = current, segment
        current = nxt

    return bag


def options_to_bag(options) -> dict:
    """Fold a list of {"name", "value"} options into a nested bag, in order."""
    bag = {}
    for option in options or ():
        assign_by_path(bag, option["name"], option["value"])
    return bag
