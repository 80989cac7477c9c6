from __future__ import annotations

import json
from pathlib import Path

import allure
import pytest
from click.testing import CliRunner

from reso_cmdlets.main import reso_cmdlets
from reso_cmdlets.testing import CommandTestScope

pytestmark = [
    allure.epic("CLI"),
    allure.feature("Cmdlets"),
]


@pytest.fixture()
def scope() -> CommandTestScope:
    return CommandTestScope()


def _json_lines(output: str) -> list[dict]:
    return [json.loads(line) for line in output.splitlines() if line.startswith("{")]


def test_get_file_type_reports_detected_type(
    scope: CommandTestScope,
    tmp_path: Path,
    gif_bytes: bytes,
) -> None:
    image = tmp_path / "picture.bin"
    image.write_bytes(gif_bytes)

    result = scope.execute("get-file-type", str(image))

    assert result.exit_code == 0
    assert _json_lines(result.output) == [
        {"path": str(image), "mime": "image/gif", "extension": "gif"},
    ]


def test_get_file_type_missing_path_fails_fast(scope: CommandTestScope, tmp_path: Path) -> None:
    result = scope.execute("get-file-type", str(tmp_path / "missing.bin"))

    assert result.exit_code == 1
    assert "Path not found" in result.output


def test_get_file_type_silently_continue_reports_error(
    scope: CommandTestScope,
    tmp_path: Path,
    gif_bytes: bytes,
) -> None:
    image = tmp_path / "picture.gif"
    image.write_bytes(gif_bytes)

    result = scope.execute(
        "get-file-type",
        str(tmp_path / "missing.bin"),
        str(image),
        parameters={"error_action": "SilentlyContinue"},
    )

    assert result.exit_code == 0
    assert result.output.count("ERROR [WriteError]: Path not found") == 1
    assert _json_lines(result.output) == []


def test_get_file_type_ignore_writes_nothing(scope: CommandTestScope, tmp_path: Path) -> None:
    result = scope.execute(
        "get-file-type",
        str(tmp_path / "missing.bin"),
        parameters={"error_action": "ignore"},
    )

    assert result.exit_code == 0
    assert "ERROR" not in result.output


def test_get_file_type_directory_requires_recurse(scope: CommandTestScope, tmp_path: Path) -> None:
    result = scope.execute("get-file-type", str(tmp_path), parameters={"error_action": "stop"})

    assert result.exit_code == 0
    assert "Pass --recurse" in result.output


def test_get_file_type_recurse_bridges_scan_logs(
    scope: CommandTestScope,
    tmp_path: Path,
    gif_bytes: bytes,
    pdf_bytes: bytes,
) -> None:
    (tmp_path / "nested").mkdir()
    (tmp_path / "a.gif").write_bytes(gif_bytes)
    (tmp_path / "nested" / "b.pdf").write_bytes(pdf_bytes)
    (tmp_path / "notes.txt").write_text("no magic here")

    result = scope.execute(
        "get-file-type",
        str(tmp_path),
        parameters={"recurse": True, "verbose": True},
    )

    assert result.exit_code == 0
    assert {entry["mime"] for entry in _json_lines(result.output)} == {
        "image/gif",
        "application/pdf",
        None,
    }
    assert "VERBOSE: Scanning" in result.output
    assert result.output.count("VERBOSE: Scanned") == 3
    assert "VERBOSE: Scan finished: files=3 unknown=1" in result.output


def test_get_file_type_recurse_without_verbose_hides_info_logs(
    scope: CommandTestScope,
    tmp_path: Path,
    gif_bytes: bytes,
) -> None:
    (tmp_path / "a.gif").write_bytes(gif_bytes)

    result = scope.execute("get-file-type", str(tmp_path), parameters={"recurse": True})

    assert result.exit_code == 0
    assert "VERBOSE" not in result.output
    assert len(_json_lines(result.output)) == 1


def test_get_file_type_recurse_bridges_warnings(scope: CommandTestScope, tmp_path: Path) -> None:
    empty = tmp_path / "empty"
    empty.mkdir()

    result = scope.execute("get-file-type", str(empty), parameters={"recurse": True})

    assert result.exit_code == 0
    assert "WARNING: No files found under" in result.output


def test_rename_item_renames_file(scope: CommandTestScope, tmp_path: Path) -> None:
    source = tmp_path / "a.txt"
    source.write_text("a")

    result = scope.execute("rename-item", str(source), "b.txt")

    assert result.exit_code == 0
    assert (tmp_path / "b.txt").read_text() == "a"
    assert not source.exists()


def test_rename_item_refuses_existing_without_force(
    scope: CommandTestScope,
    tmp_path: Path,
) -> None:
    (tmp_path / "a.txt").write_text("a")
    (tmp_path / "b.txt").write_text("b")

    refused = scope.execute("rename-item", str(tmp_path / "a.txt"), "b.txt")
    assert refused.exit_code == 1
    assert "Destination already exists" in refused.output
    assert (tmp_path / "b.txt").read_text() == "b"

    forced = scope.execute(
        "rename-item",
        str(tmp_path / "a.txt"),
        "b.txt",
        parameters={"force": True},
    )
    assert forced.exit_code == 0
    assert (tmp_path / "b.txt").read_text() == "a"


def test_rename_item_rejects_path_as_new_name(scope: CommandTestScope, tmp_path: Path) -> None:
    (tmp_path / "a.txt").write_text("a")

    result = scope.execute(
        "rename-item",
        str(tmp_path / "a.txt"),
        "sub/b.txt",
        parameters={"error_action": "stop"},
    )

    assert result.exit_code == 0
    assert "NewName must be a plain file name" in result.output
    assert (tmp_path / "a.txt").exists()


def test_new_directory_then_force(scope: CommandTestScope, tmp_path: Path) -> None:
    target = tmp_path / "x" / "y"

    created = scope.execute("new-directory", str(target))
    assert created.exit_code == 0
    assert target.is_dir()

    again = scope.execute("new-directory", str(target))
    assert again.exit_code == 1
    assert "Item already exists" in again.output

    forced = scope.execute("new-directory", str(target), parameters={"force": True})
    assert forced.exit_code == 0
    assert "WARNING: Directory already exists" in forced.output


def test_get_location_prints_working_directory(tmp_path: Path) -> None:
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=tmp_path):
        result = runner.invoke(reso_cmdlets, ["get-location"])
        assert result.exit_code == 0
        assert result.output.strip() == str(Path.cwd())


def test_convert_record_id_outputs_parts(scope: CommandTestScope) -> None:
    result = scope.execute("convert-record-id", "U-owner/R-1", "R-2", parameters={"verbose": True})

    assert result.exit_code == 0
    assert _json_lines(result.output) == [
        {"owner_id": "U-owner", "record_id": "R-1"},
        {"owner_id": None, "record_id": "R-2"},
    ]
    assert "VERBOSE: 'R-2' has no owner prefix" in result.output


def test_convert_record_id_failure_is_sticky(scope: CommandTestScope) -> None:
    result = scope.execute(
        "convert-record-id",
        "bad",
        "R-2",
        parameters={"error_action": "silentlycontinue"},
    )

    assert result.exit_code == 0
    assert "ERROR [WriteError]: Invalid record id: 'bad'" in result.output
    assert _json_lines(result.output) == []


def test_error_action_from_environment() -> None:
    scope = CommandTestScope(env={"RESO_CMDLETS_ERROR_ACTION": "ignore"})

    result = scope.execute("convert-record-id", "bad")

    assert result.exit_code == 0
    assert "ERROR" not in result.output


def test_error_action_option_overrides_environment() -> None:
    scope = CommandTestScope(env={"RESO_CMDLETS_ERROR_ACTION": "ignore"})

    result = scope.execute("convert-record-id", "bad", parameters={"error_action": "continue"})

    assert result.exit_code == 1
    assert "Invalid record id" in result.output
