"""Registry construction and string normalization."""

from __future__ import annotations

import re

from sigdrift.symbols.models import (
    FunctionSignature,
    InterfaceDefinition,
    SymbolRegistry,
    TypeAliasDefinition,
)

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_type_string(text: str) -> str:
    """Collapse whitespace runs to one space and trim.

    Case and syntax are preserved, so ``{ a:  string }`` and ``{ a: string }``
    compare equal while ``String`` and ``string`` do not.
    """
    return _WHITESPACE_RUN.sub(" ", text).strip()


def make_function_key(file_path: str, qualified_name: str) -> str:
    return f"fn:{file_path}::{qualified_name}"


def make_interface_key(file_path: str, name: str) -> str:
    return f"iface:{file_path}::{name}"


def make_type_key(file_path: str, name: str) -> str:
    return f"type:{file_path}::{name}"


class SymbolRegistryBuilder:
    """Append-only accumulator for one extraction pass.

    A duplicate key replaces the earlier entry (last write wins).
    """

    def __init__(self) -> None:
        self._functions: dict[str, FunctionSignature] = {}
        self._interfaces: dict[str, InterfaceDefinition] = {}
        self._types: dict[str, TypeAliasDefinition] = {}

    def add_function(self, key: str, fn: FunctionSignature) -> None:
        self._functions[key] = fn

    def add_interface(self, key: str, iface: InterfaceDefinition) -> None:
        self._interfaces[key] = iface

    def add_type_alias(self, key: str, alias: TypeAliasDefinition) -> None:
        self._types[key] = alias

    def build(self) -> SymbolRegistry:
        return SymbolRegistry(
            functions=self._functions,
            interfaces=self._interfaces,
            types=self._types,
        )
