"""tsconfig.json loading and project file-set resolution.

Covers the parts of TypeScript's config handling that decide *which files*
belong to a project: JSONC parsing, relative and package ``extends``,
``files``/``include``/``exclude`` and the default excludes. Compiler options
other than ``outDir`` are ignored.
"""

from __future__ import annotations

import fnmatch
import json
import os
from dataclasses import dataclass
from typing import Any

from sigdrift.core.errors import ExtractionError
from sigdrift.core.excludes import DEPENDENCY_DIRS, is_pruned_dir
from sigdrift.core.logging import get_logger

log = get_logger("extract.tsconfig")

SOURCE_EXTENSIONS: tuple[str, ...] = (".ts", ".tsx", ".mts", ".cts")
DECLARATION_SUFFIXES: tuple[str, ...] = (".d.ts", ".d.mts", ".d.cts")

_GLOB_CHARS = frozenset("*?[")


@dataclass(frozen=True, slots=True)
class ProjectConfig:
    """Resolved project: its config file, directory and sorted source files."""

    config_path: str
    root_dir: str
    files: tuple[str, ...]


@dataclass(slots=True)
class _RawConfig:
    """File-set settings after ``extends`` merging, paths made absolute."""

    files: list[str] | None = None
    include: list[str] | None = None
    exclude: list[str] | None = None
    out_dir: str | None = None

    def overlay(self, other: _RawConfig) -> _RawConfig:
        """Return a copy where every setting ``other`` defines wins."""
        return _RawConfig(
            files=other.files if other.files is not None else self.files,
            include=other.include if other.include is not None else self.include,
            exclude=other.exclude if other.exclude is not None else self.exclude,
            out_dir=other.out_dir if other.out_dir is not None else self.out_dir,
        )


def _strip_comments(text: str) -> str:
    out: list[str] = []
    i, n = 0, len(text)
    in_string = False
    while i < n:
        ch = text[i]
        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
        elif ch == '"':
            in_string = True
            out.append(ch)
            i += 1
        elif text.startswith("//", i):
            end = text.find("\n", i)
            i = n if end == -1 else end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = n if end == -1 else end + 2
            out.append(" ")
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def _strip_trailing_commas(text: str) -> str:
    out: list[str] = []
    i, n = 0, len(text)
    in_string = False
    while i < n:
        ch = text[i]
        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
            out.append(ch)
        elif ch == ",":
            j = i + 1
            while j < n and text[j] in " \t\r\n":
                j += 1
            if j >= n or text[j] not in "}]":
                out.append(ch)
        else:
            out.append(ch)
        i += 1
    return "".join(out)


def _read_jsonc(path: str) -> dict[str, Any]:
    if not os.path.isfile(path):
        raise ExtractionError.config_not_found(path)
    try:
        with open(path, encoding="utf-8-sig") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ExtractionError.invalid_config(path, str(e)) from e
    try:
        data = json.loads(_strip_trailing_commas(_strip_comments(text)))
    except json.JSONDecodeError as e:
        raise ExtractionError.invalid_config(path, f"not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ExtractionError.invalid_config(path, "top-level value must be an object")
    return data


def _string_list(data: dict[str, Any], key: str, config_path: str) -> list[str] | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ExtractionError.invalid_config(config_path, f"'{key}' must be a list of strings")
    return value


def _absolute(base_dir: str, path: str) -> str:
    return os.path.normpath(os.path.join(base_dir, path))


def _resolve_extends(parent_ref: Any, base_dir: str, config_path: str) -> str:
    if not isinstance(parent_ref, str) or not parent_ref:
        raise ExtractionError.invalid_config(config_path, "'extends' must be a non-empty string")

    if parent_ref.startswith(".") or os.path.isabs(parent_ref):
        target = _absolute(base_dir, parent_ref)
        candidates = [target, target + ".json"]
    else:
        # Package reference: search node_modules upwards like Node does
        candidates = []
        current = base_dir
        while True:
            target = os.path.join(current, "node_modules", parent_ref)
            candidates.extend([target, target + ".json", os.path.join(target, "tsconfig.json")])
            parent = os.path.dirname(current)
            if parent == current:
                break
            current = parent

    for candidate in candidates:
        if os.path.isfile(candidate):
            return candidate
    raise ExtractionError.invalid_config(config_path, f"cannot resolve 'extends': {parent_ref}")


def _read_config_chain(path: str, seen: frozenset[str]) -> _RawConfig:
    if path in seen:
        raise ExtractionError.invalid_config(path, "circular 'extends' chain")
    seen = seen | {path}

    data = _read_jsonc(path)
    base_dir = os.path.dirname(path)

    merged = _RawConfig()
    extends = data.get("extends")
    if extends is not None:
        parents = extends if isinstance(extends, list) else [extends]
        for parent_ref in parents:
            parent_path = _resolve_extends(parent_ref, base_dir, path)
            merged = merged.overlay(_read_config_chain(parent_path, seen))

    files = _string_list(data, "files", path)
    include = _string_list(data, "include", path)
    exclude = _string_list(data, "exclude", path)

    out_dir = None
    options = data.get("compilerOptions")
    if isinstance(options, dict) and isinstance(options.get("outDir"), str):
        out_dir = _absolute(base_dir, options["outDir"])

    own = _RawConfig(
        files=[_absolute(base_dir, f) for f in files] if files is not None else None,
        include=[_expand_pattern(_absolute(base_dir, p)) for p in include]
        if include is not None
        else None,
        exclude=[_absolute(base_dir, p) for p in exclude] if exclude is not None else None,
        out_dir=out_dir,
    )
    return merged.overlay(own)


def _has_glob(segment: str) -> bool:
    return any(c in _GLOB_CHARS for c in segment)


def _expand_pattern(pattern: str) -> str:
    """A literal directory include means everything below it."""
    if not _has_glob(pattern) and os.path.isdir(pattern):
        return os.path.join(pattern, "**", "*")
    return pattern


def _pattern_base(pattern: str) -> str:
    parts = pattern.split(os.sep)
    literal: list[str] = []
    for part in parts:
        if _has_glob(part):
            break
        literal.append(part)
    base = os.sep.join(literal) or os.sep
    if len(literal) == len(parts):
        base = os.path.dirname(base)
    return base


def _match_parts(path_parts: list[str], pattern_parts: list[str]) -> bool:
    if not pattern_parts:
        return not path_parts
    head, rest = pattern_parts[0], pattern_parts[1:]
    if head == "**":
        # Zero or more whole directories
        return any(_match_parts(path_parts[i:], rest) for i in range(len(path_parts) + 1))
    return (
        bool(path_parts)
        and fnmatch.fnmatchcase(path_parts[0], head)
        and _match_parts(path_parts[1:], rest)
    )


def matches_glob(path: str, pattern: str) -> bool:
    """Check if an absolute path matches an absolute glob.

    ``*`` and ``?`` stay within one path segment; only ``**`` spans directories.
    """
    return _match_parts(path.split(os.sep), pattern.split(os.sep))


def _is_excluded(path: str, excludes: list[str]) -> bool:
    """An exclude matching the file or any directory above it removes it."""
    parts = path.split(os.sep)
    for pattern in excludes:
        pattern_parts = pattern.split(os.sep)
        if any(_match_parts(parts[:end], pattern_parts) for end in range(len(parts), 1, -1)):
            return True
    return False


def is_source_file(path: str) -> bool:
    """True for TypeScript sources that are not declaration files."""
    lowered = path.lower()
    return lowered.endswith(SOURCE_EXTENSIONS) and not lowered.endswith(DECLARATION_SUFFIXES)


def _walk_sources(base: str) -> list[str]:
    found: list[str] = []
    if not os.path.isdir(base):
        return found
    for dirpath, dirnames, filenames in os.walk(base):
        dirnames[:] = sorted(d for d in dirnames if not is_pruned_dir(d))
        for name in sorted(filenames):
            if is_source_file(name):
                found.append(os.path.join(dirpath, name))
    return found


def _collect_files(raw: _RawConfig, config_path: str, root_dir: str) -> list[str]:
    selected: set[str] = set()

    for path in raw.files or []:
        if not is_source_file(path):
            continue
        if not os.path.isfile(path):
            raise ExtractionError.invalid_config(config_path, f"file not found: {path}")
        selected.add(path)

    if raw.include is not None:
        include = raw.include
    elif raw.files is None:
        include = [os.path.join(root_dir, "**", "*")]
    else:
        include = []

    if raw.exclude is not None:
        exclude = list(raw.exclude)
    else:
        exclude = [os.path.join(root_dir, d) for d in sorted(DEPENDENCY_DIRS)]
        if raw.out_dir:
            exclude.append(raw.out_dir)

    for pattern in include:
        for path in _walk_sources(_pattern_base(pattern)):
            if path in selected:
                continue
            if matches_glob(path, pattern) and not _is_excluded(path, exclude):
                selected.add(path)

    # Dependency trees never count, even when named explicitly
    return sorted(
        p for p in selected if not any(part in DEPENDENCY_DIRS for part in p.split(os.sep))
    )


def load_project_config(config_path: str | os.PathLike[str]) -> ProjectConfig:
    """Read a tsconfig.json and compute the project's source file set.

    Args:
        config_path: Path to the tsconfig file.

    Returns:
        The resolved project config with absolute, sorted file paths.

    Raises:
        ExtractionError: If the config is missing, unparseable, has an
            unresolvable ``extends``, names a missing file or selects no
            source files.
    """
    path = os.path.abspath(os.fspath(config_path))
    raw = _read_config_chain(path, frozenset())
    root_dir = os.path.dirname(path)

    files = _collect_files(raw, path, root_dir)
    if not files:
        raise ExtractionError.invalid_config(path, "No inputs were found in config file")

    log.debug("project_config_loaded", config=path, files=len(files))
    return ProjectConfig(config_path=path, root_dir=root_dir, files=tuple(files))
