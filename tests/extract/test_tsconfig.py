"""Tests for tsconfig loading and file-set resolution."""

import json
from pathlib import Path

import pytest

from sigdrift.core.errors import ErrorCode, ExtractionError
from sigdrift.extract import analyze_project
from sigdrift.extract.tsconfig import is_source_file, load_project_config, matches_glob


def _touch(root: Path, *relpaths: str, content: str = "export function f(): void {}\n") -> None:
    for rel in relpaths:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)


def _config(root: Path, data: object, name: str = "tsconfig.json") -> Path:
    path = root / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data))
    return path


def _relative_files(root: Path, config_path: Path) -> list[str]:
    return [str(Path(p).relative_to(root)) for p in load_project_config(config_path).files]


class TestIsSourceFile:
    @pytest.mark.parametrize("name", ["a.ts", "b.tsx", "c.mts", "d.cts"])
    def test_sources_accepted(self, name: str) -> None:
        assert is_source_file(name)

    @pytest.mark.parametrize("name", ["a.d.ts", "b.d.mts", "c.js", "d.json"])
    def test_declarations_and_others_rejected(self, name: str) -> None:
        assert not is_source_file(name)


class TestMatchesGlob:
    def test_double_star_matches_zero_directories(self) -> None:
        assert matches_glob("/r/src/a.ts", "/r/src/**/*.ts")

    def test_double_star_matches_nested(self) -> None:
        assert matches_glob("/r/src/x/y/a.ts", "/r/src/**/*.ts")

    def test_other_tree_not_matched(self) -> None:
        assert not matches_glob("/r/lib/a.ts", "/r/src/**/*.ts")

    def test_single_star_stays_in_one_directory(self) -> None:
        assert matches_glob("/r/src/a.ts", "/r/src/*.ts")
        assert not matches_glob("/r/src/sub/c.ts", "/r/src/*.ts")

    def test_question_mark_does_not_match_separator(self) -> None:
        assert matches_glob("/r/a/b.ts", "/r/a/?.ts")
        assert not matches_glob("/r/a/b.ts", "/r/a?b.ts")


class TestLoadProjectConfig:
    """File-set resolution tests."""

    def test_given_no_file_settings_when_loaded_then_all_sources_below_root(
        self, tmp_path: Path
    ) -> None:
        """Without files or include, every source below the config is selected."""
        # Given
        _touch(tmp_path, "src/a.ts", "src/nested/b.tsx", "index.ts", "src/types.d.ts", "src/c.js")
        config_path = _config(tmp_path, {"compilerOptions": {"strict": True}})

        # When
        files = _relative_files(tmp_path, config_path)

        # Then
        assert files == ["index.ts", "src/a.ts", "src/nested/b.tsx"]

    def test_given_node_modules_when_loaded_then_never_included(self, tmp_path: Path) -> None:
        _touch(tmp_path, "src/a.ts", "node_modules/pkg/index.ts")
        config_path = _config(tmp_path, {"include": ["**/*"], "exclude": []})

        assert _relative_files(tmp_path, config_path) == ["src/a.ts"]

    def test_given_include_dir_when_loaded_then_only_that_tree(self, tmp_path: Path) -> None:
        _touch(tmp_path, "src/a.ts", "src/deep/b.ts", "scripts/build.ts")
        config_path = _config(tmp_path, {"include": ["src"]})

        assert _relative_files(tmp_path, config_path) == ["src/a.ts", "src/deep/b.ts"]

    def test_given_include_glob_when_loaded_then_matching_files(self, tmp_path: Path) -> None:
        _touch(tmp_path, "src/a.ts", "src/b.tsx", "src/sub/c.ts")
        config_path = _config(tmp_path, {"include": ["src/**/*.ts"]})

        assert _relative_files(tmp_path, config_path) == ["src/a.ts", "src/sub/c.ts"]

    def test_given_exclude_when_loaded_then_subtree_skipped(self, tmp_path: Path) -> None:
        _touch(tmp_path, "src/a.ts", "src/generated/g.ts")
        config_path = _config(tmp_path, {"include": ["src"], "exclude": ["src/generated"]})

        assert _relative_files(tmp_path, config_path) == ["src/a.ts"]

    def test_given_single_star_include_when_loaded_then_nested_files_skipped(
        self, tmp_path: Path
    ) -> None:
        _touch(tmp_path, "src/a.ts", "src/sub/c.ts")
        config_path = _config(tmp_path, {"include": ["src/*.ts"]})

        assert _relative_files(tmp_path, config_path) == ["src/a.ts"]

    def test_given_single_star_exclude_when_loaded_then_nested_files_kept(
        self, tmp_path: Path
    ) -> None:
        _touch(tmp_path, "src/a.ts", "src/sub/b.ts")
        config_path = _config(tmp_path, {"include": ["src"], "exclude": ["src/*.ts"]})

        assert _relative_files(tmp_path, config_path) == ["src/sub/b.ts"]

    def test_given_out_dir_when_loaded_then_excluded_by_default(self, tmp_path: Path) -> None:
        _touch(tmp_path, "src/a.ts", "dist/a.ts")
        config_path = _config(tmp_path, {"compilerOptions": {"outDir": "dist"}})

        assert _relative_files(tmp_path, config_path) == ["src/a.ts"]

    def test_given_files_list_when_loaded_then_only_those(self, tmp_path: Path) -> None:
        _touch(tmp_path, "src/a.ts", "src/b.ts")
        config_path = _config(tmp_path, {"files": ["src/b.ts"]})

        assert _relative_files(tmp_path, config_path) == ["src/b.ts"]

    def test_given_missing_listed_file_when_loaded_then_error(self, tmp_path: Path) -> None:
        config_path = _config(tmp_path, {"files": ["src/missing.ts"]})

        with pytest.raises(ExtractionError) as exc_info:
            load_project_config(config_path)

        assert exc_info.value.code == ErrorCode.EXTRACTION_INVALID_CONFIG

    def test_given_comments_and_trailing_commas_when_loaded_then_parsed(
        self, tmp_path: Path
    ) -> None:
        """tsconfig files are JSON with comments."""
        # Given
        _touch(tmp_path, "src/a.ts")
        (tmp_path / "tsconfig.json").write_text(
            "{\n"
            "  // line comment\n"
            '  "include": ["src/**/*", ],  /* block */\n'
            '  "compilerOptions": {"paths": {"@/*": ["src/*"]},},\n'
            "}\n"
        )

        # When
        files = _relative_files(tmp_path, tmp_path / "tsconfig.json")

        # Then
        assert files == ["src/a.ts"]

    def test_given_relative_extends_when_loaded_then_parent_paths_resolved_from_parent(
        self, tmp_path: Path
    ) -> None:
        # Given
        _touch(tmp_path, "app/src/a.ts", "app/other/b.ts")
        _config(tmp_path, {"include": ["app/src"]}, name="base.json")
        config_path = _config(tmp_path, {"extends": "../base"}, name="app/tsconfig.json")

        # When
        files = load_project_config(config_path).files

        # Then
        assert files == (str(tmp_path / "app" / "src" / "a.ts"),)

    def test_given_child_include_when_extending_then_child_wins(self, tmp_path: Path) -> None:
        _touch(tmp_path, "src/a.ts", "lib/b.ts")
        _config(tmp_path, {"include": ["src"]}, name="base.json")
        config_path = _config(tmp_path, {"extends": "./base.json", "include": ["lib"]})

        assert _relative_files(tmp_path, config_path) == ["lib/b.ts"]

    def test_given_package_extends_when_loaded_then_found_in_node_modules(
        self, tmp_path: Path
    ) -> None:
        _touch(tmp_path, "src/a.ts")
        _config(
            tmp_path,
            {"compilerOptions": {"strict": True}},
            name="node_modules/@tsconfig/node18/tsconfig.json",
        )
        config_path = _config(tmp_path, {"extends": "@tsconfig/node18/tsconfig.json"})

        assert _relative_files(tmp_path, config_path) == ["src/a.ts"]

    def test_given_unresolvable_extends_when_loaded_then_error(self, tmp_path: Path) -> None:
        config_path = _config(tmp_path, {"extends": "./nope.json"})

        with pytest.raises(ExtractionError, match="extends"):
            load_project_config(config_path)

    def test_given_circular_extends_when_loaded_then_error(self, tmp_path: Path) -> None:
        _config(tmp_path, {"extends": "./b.json"}, name="a.json")
        config_path = _config(tmp_path, {"extends": "./a.json"}, name="b.json")

        with pytest.raises(ExtractionError, match="circular"):
            load_project_config(config_path)

    def test_given_missing_config_when_loaded_then_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(ExtractionError) as exc_info:
            load_project_config(tmp_path / "tsconfig.json")

        assert exc_info.value.code == ErrorCode.EXTRACTION_CONFIG_NOT_FOUND

    def test_given_invalid_json_when_loaded_then_invalid_config(self, tmp_path: Path) -> None:
        (tmp_path / "tsconfig.json").write_text("{ nope")

        with pytest.raises(ExtractionError) as exc_info:
            load_project_config(tmp_path / "tsconfig.json")

        assert exc_info.value.code == ErrorCode.EXTRACTION_INVALID_CONFIG

    def test_given_no_sources_when_loaded_then_no_inputs_error(self, tmp_path: Path) -> None:
        config_path = _config(tmp_path, {})

        with pytest.raises(ExtractionError, match="No inputs were found"):
            load_project_config(config_path)

    def test_given_include_not_list_when_loaded_then_invalid_config(self, tmp_path: Path) -> None:
        config_path = _config(tmp_path, {"include": "src"})

        with pytest.raises(ExtractionError, match="list of strings"):
            load_project_config(config_path)


class TestAnalyzeProject:
    """End-to-end extraction over a project directory."""

    def test_given_project_when_analyzed_then_snapshot_covers_all_files(
        self, tmp_path: Path
    ) -> None:
        # Given
        _touch(tmp_path, "src/a.ts", content="export function a(x: number): string { return ''; }")
        _touch(tmp_path, "src/b.ts", content="export interface B { id: string }")
        config_path = _config(tmp_path, {"include": ["src"]})

        # When
        snapshot = analyze_project(config_path)

        # Then
        key = f"fn:{tmp_path / 'src' / 'a.ts'}::a"
        assert snapshot.symbols.functions[key].return_type == "string"
        assert f"iface:{tmp_path / 'src' / 'b.ts'}::B" in snapshot.symbols.interfaces

    def test_given_two_runs_when_analyzed_then_equal_snapshots(self, tmp_path: Path) -> None:
        """Analysis is deterministic and keeps no state across calls."""
        _touch(tmp_path, "src/a.ts")
        config_path = _config(tmp_path, {})

        assert analyze_project(config_path) == analyze_project(config_path)
