"""Normalized symbol data model.

Attribute names are snake_case; ``to_dict``/``from_dict`` speak the
camelCase snapshot wire format (``returnType``, ``filePath``, ``isExported``).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True, slots=True)
class ParameterSignature:
    """One declared parameter: name, normalized type, optionality."""

    name: str
    type: str
    optional: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "type": self.type, "optional": self.optional}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ParameterSignature:
        return cls(
            name=str(data["name"]),
            type=str(data["type"]),
            optional=bool(data.get("optional", False)),
        )


@dataclass(frozen=True, slots=True)
class FunctionSignature:
    """Function or method signature, identified by its registry key."""

    name: str
    parameters: tuple[ParameterSignature, ...]
    return_type: str
    file_path: str
    is_exported: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "parameters": [p.to_dict() for p in self.parameters],
            "returnType": self.return_type,
            "filePath": self.file_path,
            "isExported": self.is_exported,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FunctionSignature:
        return cls(
            name=str(data["name"]),
            parameters=tuple(ParameterSignature.from_dict(p) for p in data["parameters"]),
            return_type=str(data["returnType"]),
            file_path=str(data["filePath"]),
            is_exported=bool(data.get("isExported", False)),
        )


@dataclass(frozen=True, slots=True)
class InterfaceProperty:
    name: str
    type: str
    optional: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "type": self.type, "optional": self.optional}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> InterfaceProperty:
        return cls(
            name=str(data["name"]),
            type=str(data["type"]),
            optional=bool(data.get("optional", False)),
        )


@dataclass(frozen=True, slots=True)
class InterfaceDefinition:
    name: str
    properties: tuple[InterfaceProperty, ...]
    file_path: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "properties": [p.to_dict() for p in self.properties],
            "filePath": self.file_path,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> InterfaceDefinition:
        return cls(
            name=str(data["name"]),
            properties=tuple(InterfaceProperty.from_dict(p) for p in data["properties"]),
            file_path=str(data["filePath"]),
        )


@dataclass(frozen=True, slots=True)
class TypeAliasDefinition:
    name: str
    definition: str
    file_path: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "definition": self.definition, "filePath": self.file_path}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TypeAliasDefinition:
        return cls(
            name=str(data["name"]),
            definition=str(data["definition"]),
            file_path=str(data["filePath"]),
        )


def _freeze(mapping: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True, slots=True)
class SymbolRegistry:
    """Read-only key -> definition mappings for one extraction.

    Build through ``SymbolRegistryBuilder``; mappings passed in directly are
    copied and frozen.
    """

    functions: Mapping[str, FunctionSignature] = field(default_factory=dict)
    interfaces: Mapping[str, InterfaceDefinition] = field(default_factory=dict)
    types: Mapping[str, TypeAliasDefinition] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "functions", _freeze(self.functions))
        object.__setattr__(self, "interfaces", _freeze(self.interfaces))
        object.__setattr__(self, "types", _freeze(self.types))

    def __len__(self) -> int:
        return len(self.functions) + len(self.interfaces) + len(self.types)

    def to_dict(self) -> dict[str, Any]:
        return {
            "functions": {k: v.to_dict() for k, v in self.functions.items()},
            "interfaces": {k: v.to_dict() for k, v in self.interfaces.items()},
            "types": {k: v.to_dict() for k, v in self.types.items()},
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SymbolRegistry:
        return cls(
            functions={k: FunctionSignature.from_dict(v) for k, v in data["functions"].items()},
            interfaces={
                k: InterfaceDefinition.from_dict(v)
                for k, v in data.get("interfaces", {}).items()
            },
            types={k: TypeAliasDefinition.from_dict(v) for k, v in data.get("types", {}).items()},
        )


@dataclass(frozen=True, slots=True)
class ProjectSnapshot:
    """Immutable extraction of a project's symbol surface at one point in time."""

    symbols: SymbolRegistry = field(default_factory=SymbolRegistry)

    def to_dict(self) -> dict[str, Any]:
        return {"symbols": self.symbols.to_dict()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ProjectSnapshot:
        return cls(symbols=SymbolRegistry.from_dict(data["symbols"]))
