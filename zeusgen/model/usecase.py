"""Semantic usecases (services) and their methods."""

import copy

from zeusgen.errors import ResolutionError
from zeusgen.model.rules import apply_rules
from zeusgen.model.schema import DefComponent, Schema


class Method(DefComponent):
    """
    One usecase method. `parent` is a back-reference to the owning Usecase;
    `req`/`res` are parentless (possibly None) schemas.
    """

    def __init__(self, src: str, name: str, parent):
        super().__init__(src, name, parent)
        self.req = None
        self.res = None
        self.gen = {}

    @classmethod
    def from_raw(cls, raw: dict, src: str, name: str, usecase) -> "Method":
        raw = raw or {}
        method = cls(src, name, usecase)
        if raw.get("req") is not None:
            method.req = Schema.from_raw(raw["req"], src)
        if raw.get("res") is not None:
            method.res = Schema.from_raw(raw["res"], src)
        method.gen = copy.deepcopy(raw.get("gen") or {})

        apply_rules(usecase.rules, method)
        return method

    @property
    def usecase(self):
        return self.parent


class Usecase(DefComponent):
    def __init__(self, src: str, name: str):
        super().__init__(src, name)
        self.methods = []
        self.rules = []
        self.gen = {}

    @classmethod
    def from_raw(cls, raw: dict, src: str, name: str) -> "Usecase":
        raw = raw or {}
        usecase = cls(src, name)
        usecase.rules = list(raw.get("rules") or [])
        usecase.gen = copy.deepcopy(raw.get("gen") or {})
        for method_name, raw_method in (raw.get("methods") or {}).items():
            usecase.methods.append(Method.from_raw(raw_method, src, method_name, usecase))
        return usecase

    def get_method(self, name: str) -> Method:
        for method in self.methods:
            if method.name == name:
                return method
        raise ResolutionError(f"cannot find method '{name}' in usecase '{self.name}'")
