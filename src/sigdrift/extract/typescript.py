"""Tree-sitter extraction of TypeScript declaration signatures.

Records, per file:
- function declarations, generators and bodiless signatures (overloads,
  ``declare function``); exported when wrapped in an ``export`` statement
- methods of named classes as ``ClassName.methodName`` (never exported)
- interfaces with their property signatures
- type aliases with their definition text

The extractor is syntactic: types are the annotation source text,
whitespace-normalized. Missing annotations record ``any``; no inference.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import tree_sitter
import tree_sitter_typescript

from sigdrift.core.logging import get_logger
from sigdrift.symbols.models import (
    FunctionSignature,
    InterfaceDefinition,
    InterfaceProperty,
    ParameterSignature,
    ProjectSnapshot,
    TypeAliasDefinition,
)
from sigdrift.symbols.registry import (
    SymbolRegistryBuilder,
    make_function_key,
    make_interface_key,
    make_type_key,
    normalize_type_string,
)

log = get_logger("extract.typescript")

UNKNOWN_TYPE = "any"

_FUNCTION_NODES = frozenset(
    ("function_declaration", "generator_function_declaration", "function_signature")
)
_METHOD_NODES = frozenset(("method_definition", "method_signature", "abstract_method_signature"))
_CLASS_NODES = frozenset(("class_declaration", "abstract_class_declaration"))
_PARAMETER_NODES = frozenset(("required_parameter", "optional_parameter"))
# Accessors and constructors are not methods
_ACCESSOR_KEYWORDS = frozenset(("get", "set"))


def _text(node: Any) -> str:
    return node.text.decode("utf-8", errors="replace") if node.text else ""


def _annotation_text(node: Any | None) -> str:
    """Type text of a ``type_annotation`` (or predicate annotation) node."""
    if node is None:
        return UNKNOWN_TYPE
    text = _text(node).strip()
    if text.startswith(":"):
        text = text[1:]
    return normalize_type_string(text) or UNKNOWN_TYPE


def _has_child(node: Any, child_type: str) -> bool:
    return any(child.type == child_type for child in node.children)


def _is_exported(node: Any) -> bool:
    parent = node.parent
    if parent is not None and parent.type == "ambient_declaration":
        parent = parent.parent
    return parent is not None and parent.type == "export_statement"


class TypeScriptExtractor:
    """Builds one registry from a set of TypeScript files.

    Construct a fresh instance per analysis; instances are not reused.

    Usage::

        extractor = TypeScriptExtractor()
        for path in files:
            extractor.extract_file(path)
        snapshot = extractor.snapshot()
    """

    def __init__(self) -> None:
        self._parser = tree_sitter.Parser()
        self._languages = {
            "typescript": tree_sitter.Language(tree_sitter_typescript.language_typescript()),
            "tsx": tree_sitter.Language(tree_sitter_typescript.language_tsx()),
        }
        self._builder = SymbolRegistryBuilder()
        self._file_count = 0

    def extract_file(self, path: str | os.PathLike[str], content: bytes | None = None) -> None:
        """Parse one file and add its declarations to the registry.

        Args:
            path: Source file. Recorded as an absolute, lexically normalized path.
            content: File bytes. If None, reads from path.
        """
        file_path = os.path.abspath(os.fspath(path))
        if content is None:
            content = Path(file_path).read_bytes()

        lang = "tsx" if file_path.lower().endswith(".tsx") else "typescript"
        self._parser.language = self._languages[lang]
        tree = self._parser.parse(content)
        if tree.root_node.has_error:
            log.debug("parse_errors", path=file_path)

        # Explicit stack, document order: later overloads overwrite earlier ones
        stack = [tree.root_node]
        while stack:
            node = stack.pop()
            if node.type in _FUNCTION_NODES:
                self._add_function(node, file_path)
            elif node.type in _METHOD_NODES:
                self._add_method(node, file_path)
            elif node.type == "interface_declaration":
                self._add_interface(node, file_path)
            elif node.type == "type_alias_declaration":
                self._add_type_alias(node, file_path)
            stack.extend(reversed(node.children))

        self._file_count += 1

    def snapshot(self) -> ProjectSnapshot:
        log.debug("extraction_complete", files=self._file_count)
        return ProjectSnapshot(symbols=self._builder.build())

    def _parameters(self, node: Any) -> tuple[ParameterSignature, ...]:
        params_node = node.child_by_field_name("parameters")
        if params_node is None:
            return ()
        params: list[ParameterSignature] = []
        for child in params_node.named_children:
            if child.type not in _PARAMETER_NODES:
                continue
            pattern = child.child_by_field_name("pattern")
            name = _text(pattern) if pattern is not None else _text(child)
            if name.startswith("..."):
                name = name[3:]
            params.append(
                ParameterSignature(
                    name=normalize_type_string(name),
                    type=_annotation_text(child.child_by_field_name("type")),
                    optional=child.type == "optional_parameter",
                )
            )
        return tuple(params)

    def _signature(self, node: Any, name: str, file_path: str, exported: bool) -> FunctionSignature:
        return FunctionSignature(
            name=name,
            parameters=self._parameters(node),
            return_type=_annotation_text(node.child_by_field_name("return_type")),
            file_path=file_path,
            is_exported=exported,
        )

    def _add_function(self, node: Any, file_path: str) -> None:
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return
        name = _text(name_node)
        sig = self._signature(node, name, file_path, _is_exported(node))
        self._builder.add_function(make_function_key(file_path, name), sig)

    def _add_method(self, node: Any, file_path: str) -> None:
        body = node.parent
        if body is None or body.type != "class_body":
            return
        cls = body.parent
        if cls is None or cls.type not in _CLASS_NODES:
            return
        class_name_node = cls.child_by_field_name("name")
        name_node = node.child_by_field_name("name")
        if class_name_node is None or name_node is None:
            return
        if any(child.type in _ACCESSOR_KEYWORDS for child in node.children):
            return
        method_name = _text(name_node)
        if method_name == "constructor":
            return

        qualified = f"{_text(class_name_node)}.{method_name}"
        sig = self._signature(node, qualified, file_path, exported=False)
        self._builder.add_function(make_function_key(file_path, qualified), sig)

    def _add_interface(self, node: Any, file_path: str) -> None:
        name_node = node.child_by_field_name("name")
        body = node.child_by_field_name("body")
        if name_node is None:
            return
        properties: list[InterfaceProperty] = []
        for member in body.named_children if body is not None else ():
            if member.type != "property_signature":
                continue
            prop_name = member.child_by_field_name("name")
            if prop_name is None:
                continue
            properties.append(
                InterfaceProperty(
                    name=_text(prop_name),
                    type=_annotation_text(member.child_by_field_name("type")),
                    optional=_has_child(member, "?"),
                )
            )
        name = _text(name_node)
        self._builder.add_interface(
            make_interface_key(file_path, name),
            InterfaceDefinition(name=name, properties=tuple(properties), file_path=file_path),
        )

    def _add_type_alias(self, node: Any, file_path: str) -> None:
        name_node = node.child_by_field_name("name")
        value = node.child_by_field_name("value")
        if name_node is None or value is None:
            return
        name = _text(name_node)
        self._builder.add_type_alias(
            make_type_key(file_path, name),
            TypeAliasDefinition(
                name=name,
                definition=normalize_type_string(_text(value)),
                file_path=file_path,
            ),
        )
