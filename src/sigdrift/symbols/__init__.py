"""Symbol data model and registry construction."""

from sigdrift.symbols.models import (
    FunctionSignature,
    InterfaceDefinition,
    InterfaceProperty,
    ParameterSignature,
    ProjectSnapshot,
    SymbolRegistry,
    TypeAliasDefinition,
)
from sigdrift.symbols.registry import (
    SymbolRegistryBuilder,
    make_function_key,
    make_interface_key,
    make_type_key,
    normalize_type_string,
)

__all__ = [
    "ParameterSignature",
    "FunctionSignature",
    "InterfaceProperty",
    "InterfaceDefinition",
    "TypeAliasDefinition",
    "SymbolRegistry",
    "ProjectSnapshot",
    "SymbolRegistryBuilder",
    "normalize_type_string",
    "make_function_key",
    "make_interface_key",
    "make_type_key",
]
