"""
Usecase rules.

A rule pairs a regex pattern with a partial RawMethod. When a method is built,
every rule whose pattern matches the method name is applied in declaration
order:

- request/response schemas are appended with the same duplicate-checked merge
  used for inheritance (`Schema.inherit_from_raw`);
- generator option sub-objects are deep-merged; array-valued fields are
  concatenated and values the method already sets are kept.
"""

import copy
import re

from zeusgen.errors import ValidationError
from zeusgen.gen_logging import get_logger
from zeusgen.model.schema import Schema

logger = get_logger(__name__)


def merge_generator_options(current: dict, incoming: dict) -> dict:
    """Deep-merge `incoming` into a copy of `current` (method values win, lists concatenate)."""
    merged = copy.deepcopy(current)
    for key, value in incoming.items():
        if key not in merged:
            merged[key] = copy.deepcopy(value)
        elif isinstance(merged[key], list) and isinstance(value, list):
            merged[key] = merged[key] + copy.deepcopy(value)
        elif isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_generator_options(merged[key], value)
    return merged


def _compile(pattern: str, usecase_name: str):
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ValidationError(
            f"invalid rule pattern '{pattern}' in usecase '{usecase_name}': {e}"
        ) from e


def apply_rules(rules, method) -> None:
    """Apply every matching rule of `rules` to `method`, in declaration order."""
    if not rules:
        return
    if method is None:
        raise ValidationError("unexpected null method found")

    usecase_name = method.parent.name if method.parent is not None else ""
    for rule in rules:
        if _compile(rule.get("pattern") or "", usecase_name).search(method.name):
            logger.debug(f"  [RULE] '{rule.get('pattern')}' -> {usecase_name}.{method.name}")
            apply_rule(rule, method)


def apply_rule(rule: dict, method) -> None:
    partial = rule.get("method") or {}

    for attr in ("req", "res"):
        raw = partial.get(attr)
        if not raw:
            continue
        existing = getattr(method, attr)
        if existing is not None:
            existing.inherit_from_raw(raw)
        else:
            setattr(method, attr, Schema.from_raw(raw, method.src))

    for key, value in (partial.get("gen") or {}).items():
        current = method.gen.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            method.gen[key] = merge_generator_options(current, value)
        elif current is None:
            method.gen[key] = copy.deepcopy(value)
