"""Tests for versioned snapshot persistence."""

import json
from pathlib import Path

import pytest
from builders import fn, param, snapshot_of

from sigdrift.core.errors import (
    ErrorCode,
    SnapshotFormatError,
    SnapshotNotFoundError,
    SnapshotVersionError,
    ValidationError,
)
from sigdrift.storage.snapshots import StoredSnapshotMetadata, load_snapshot, save_snapshot
from sigdrift.symbols.models import ProjectSnapshot


def _write_json(path: Path, data: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data))


def _envelope(version: object = 1) -> dict[str, object]:
    return {
        "metadata": {
            "version": version,
            "createdAt": "2024-01-01T00:00:00.000Z",
            "tsConfigPath": "/x",
        },
        "snapshot": {"symbols": {"functions": {}, "interfaces": {}, "types": {}}},
    }


class TestSaveSnapshot:
    """Snapshot writing tests."""

    def test_given_snapshot_when_saved_then_round_trips(self, tmp_path: Path) -> None:
        # Given
        snapshot = snapshot_of(fn("greet", param("name"), returns="string"))

        # When
        written = save_snapshot(
            snapshot,
            "tsconfig.json",
            output_path="out/snap.json",
            base_dir=tmp_path,
            git_ref="main",
            git_sha="a" * 40,
        )
        stored = load_snapshot(written, base_dir=tmp_path)

        # Then
        assert written == tmp_path / "out" / "snap.json"
        assert stored.snapshot == snapshot
        assert stored.metadata.version == 1
        assert stored.metadata.git_ref == "main"
        assert stored.metadata.git_sha == "a" * 40
        assert stored.metadata.ts_config_path == str(tmp_path / "tsconfig.json")

    def test_given_no_git_info_when_saved_then_keys_omitted(self, tmp_path: Path) -> None:
        written = save_snapshot(ProjectSnapshot(), "tsconfig.json", base_dir=tmp_path)

        metadata = json.loads(written.read_text())["metadata"]

        assert set(metadata) == {"version", "createdAt", "tsConfigPath"}
        assert metadata["createdAt"].endswith("Z")

    def test_given_no_output_path_when_saved_then_default_location(self, tmp_path: Path) -> None:
        written = save_snapshot(ProjectSnapshot(), "tsconfig.json", base_dir=tmp_path)

        assert written == tmp_path / ".sigdrift" / "snapshot.json"

    def test_given_traversing_output_when_saved_then_nothing_written(self, tmp_path: Path) -> None:
        base = tmp_path / "repo"
        base.mkdir()

        with pytest.raises(ValidationError) as exc_info:
            save_snapshot(
                ProjectSnapshot(), "tsconfig.json", output_path="../evil.json", base_dir=base
            )

        assert exc_info.value.code == ErrorCode.VALIDATION_PATH_TRAVERSAL
        assert not (tmp_path / "evil.json").exists()

    def test_given_traversing_config_when_saved_then_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValidationError):
            save_snapshot(ProjectSnapshot(), "../../tsconfig.json", base_dir=tmp_path)

    def test_given_existing_file_when_saved_then_replaced(self, tmp_path: Path) -> None:
        target = tmp_path / "snap.json"
        target.write_text("old")

        save_snapshot(
            ProjectSnapshot(), "tsconfig.json", output_path="snap.json", base_dir=tmp_path
        )

        assert json.loads(target.read_text())["metadata"]["version"] == 1


class TestLoadSnapshot:
    """Snapshot loading failure modes."""

    def test_given_missing_file_when_loaded_then_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(SnapshotNotFoundError) as exc_info:
            load_snapshot("nope.json", base_dir=tmp_path)

        assert "nope.json" in exc_info.value.message

    def test_given_invalid_json_when_loaded_then_format_error(self, tmp_path: Path) -> None:
        (tmp_path / "bad.json").write_text("{not json")

        with pytest.raises(SnapshotFormatError) as exc_info:
            load_snapshot("bad.json", base_dir=tmp_path)

        assert exc_info.value.code == ErrorCode.SNAPSHOT_INVALID_JSON

    @pytest.mark.parametrize(
        "data",
        [
            [],
            {},
            {"metadata": {"version": 1}},
            {"snapshot": {}},
            {"metadata": {"version": "1"}, "snapshot": {}},
            {"metadata": {"version": True}, "snapshot": {}},
            {"metadata": "x", "snapshot": {}},
        ],
    )
    def test_given_missing_fields_when_loaded_then_malformed(
        self, tmp_path: Path, data: object
    ) -> None:
        _write_json(tmp_path / "s.json", data)

        with pytest.raises(SnapshotFormatError) as exc_info:
            load_snapshot("s.json", base_dir=tmp_path)

        assert exc_info.value.code == ErrorCode.SNAPSHOT_MALFORMED
        assert "missing required fields" in exc_info.value.message

    def test_given_future_version_when_loaded_then_version_error(self, tmp_path: Path) -> None:
        """Snapshots from another format version are rejected, naming both versions."""
        # Given
        _write_json(tmp_path / "s.json", _envelope(version=99))

        # When
        with pytest.raises(SnapshotVersionError) as exc_info:
            load_snapshot("s.json", base_dir=tmp_path)

        # Then
        assert "99" in exc_info.value.message
        assert "1" in exc_info.value.message

    def test_given_bad_symbol_contents_when_loaded_then_malformed(self, tmp_path: Path) -> None:
        data = _envelope()
        data["snapshot"] = {"symbols": {"functions": {"fn:x::f": {"name": "f"}}}}
        _write_json(tmp_path / "s.json", data)

        with pytest.raises(SnapshotFormatError) as exc_info:
            load_snapshot("s.json", base_dir=tmp_path)

        assert exc_info.value.code == ErrorCode.SNAPSHOT_MALFORMED

    def test_given_missing_symbols_key_when_loaded_then_malformed(self, tmp_path: Path) -> None:
        data = _envelope()
        data["snapshot"] = {}
        _write_json(tmp_path / "s.json", data)

        with pytest.raises(SnapshotFormatError):
            load_snapshot("s.json", base_dir=tmp_path)

    def test_given_traversal_when_loaded_then_validation_error(self, tmp_path: Path) -> None:
        with pytest.raises(ValidationError):
            load_snapshot("../../etc/passwd", base_dir=tmp_path)

    def test_given_valid_file_when_loaded_then_metadata_parsed(self, tmp_path: Path) -> None:
        _write_json(tmp_path / "s.json", _envelope())

        stored = load_snapshot("s.json", base_dir=tmp_path)

        assert stored.metadata == StoredSnapshotMetadata(
            version=1, created_at="2024-01-01T00:00:00.000Z", ts_config_path="/x"
        )
        assert len(stored.snapshot.symbols) == 0


class TestStoredSnapshotMetadata:
    def test_create_stamps_current_version(self) -> None:
        metadata = StoredSnapshotMetadata.create("/p/tsconfig.json", git_ref="v1")

        assert metadata.version == 1
        assert metadata.git_ref == "v1"
        assert metadata.git_sha is None
        assert metadata.to_dict()["gitRef"] == "v1"
