"""End-to-end tests for the command-line entry point."""

import json
from pathlib import Path
from typing import Any

import pytest
import yaml

from go_oas_generator.cli import (
    EXIT_CONFIGURATION_ERROR,
    EXIT_GENERATION_ERROR,
    EXIT_INVALID_SPEC,
    EXIT_SUCCESS,
    main,
)
from go_oas_generator.utils.file_utils import clean_output_directory, list_go_files, write_files_to_disk


def _write_spec(tmp_path: Path, spec: dict[str, Any], name: str = "openapi.json") -> Path:
    spec_file = tmp_path / name
    if spec_file.suffix == ".json":
        spec_file.write_text(json.dumps(spec), encoding="utf-8")
    else:
        spec_file.write_text(yaml.safe_dump(spec), encoding="utf-8")
    return spec_file


def _break_directive(spec: dict[str, Any]) -> dict[str, Any]:
    spec["paths"]["/test/{name}"]["get"]["x-primary-response"]["status-code"] = "404"
    return spec


class TestMain:
    def test_generates_responses_file(
        self, tmp_path: Path, spec_dict: dict[str, Any], capsys: pytest.CaptureFixture[str]
    ) -> None:
        spec_file = _write_spec(tmp_path, spec_dict)
        output_dir = tmp_path / "out"

        exit_code = main([str(spec_file), "-o", str(output_dir), "-p", "petstore"])

        assert exit_code == EXIT_SUCCESS
        assert list_go_files(output_dir) == [output_dir / "client_responses.go"]
        assert "package petstore" in (output_dir / "client_responses.go").read_text(encoding="utf-8")
        assert "generated successfully" in capsys.readouterr().out

    def test_yaml_spec(self, tmp_path: Path, spec_dict: dict[str, Any]) -> None:
        spec_file = _write_spec(tmp_path, spec_dict, "openapi.yaml")
        output_dir = tmp_path / "out"

        assert main([str(spec_file), "--output", str(output_dir)]) == EXIT_SUCCESS
        assert "func ParseGetTestByNameResponse" in (output_dir / "client_responses.go").read_text(encoding="utf-8")

    def test_verbose_summary(
        self, tmp_path: Path, spec_dict: dict[str, Any], capsys: pytest.CaptureFixture[str]
    ) -> None:
        spec_file = _write_spec(tmp_path, spec_dict)

        assert main([str(spec_file), "-o", str(tmp_path / "out"), "--verbose"]) == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert "Generated 1 files:\n  client_responses.go\n" in out

    def test_invalid_json(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        spec_file = tmp_path / "broken.json"
        spec_file.write_text("{not json", encoding="utf-8")

        assert main([str(spec_file), "-o", str(tmp_path / "out")]) == EXIT_INVALID_SPEC
        assert "Invalid specification file" in capsys.readouterr().err

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        spec_file = tmp_path / "broken.yaml"
        spec_file.write_text("paths: [unclosed", encoding="utf-8")

        assert main([str(spec_file), "-o", str(tmp_path / "out")]) == EXIT_INVALID_SPEC

    def test_missing_spec_file(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([str(tmp_path / "missing.json")])

        assert exc_info.value.code == 2

    def test_configuration_error(
        self, tmp_path: Path, spec_dict: dict[str, Any], capsys: pytest.CaptureFixture[str]
    ) -> None:
        spec_file = _write_spec(tmp_path, _break_directive(spec_dict))

        assert main([str(spec_file), "-o", str(tmp_path / "out")]) == EXIT_CONFIGURATION_ERROR
        err = capsys.readouterr().err
        assert "operation 'getTestByName'" in err
        assert "[status-code]" in err

    def test_continue_on_error(
        self, tmp_path: Path, spec_dict: dict[str, Any], capsys: pytest.CaptureFixture[str]
    ) -> None:
        spec_file = _write_spec(tmp_path, _break_directive(spec_dict))
        output_dir = tmp_path / "out"

        exit_code = main([str(spec_file), "-o", str(output_dir), "-v", "--continue-on-error"])

        assert exit_code == EXIT_SUCCESS
        assert "Skipped 1 operations: getTestByName" in capsys.readouterr().out
        generated = (output_dir / "client_responses.go").read_text(encoding="utf-8")
        assert "GetTestByNameResponse" not in generated

    def test_conflicting_content_types(self, tmp_path: Path, spec_dict: dict[str, Any]) -> None:
        spec_dict["paths"]["/cat"]["get"]["responses"]["200"]["content"]["text/x-json"] = {"schema": {"type": "string"}}
        spec_file = _write_spec(tmp_path, spec_dict)

        assert main([str(spec_file), "-o", str(tmp_path / "out")]) == EXIT_CONFIGURATION_ERROR

    def test_schema_error(self, tmp_path: Path, spec_dict: dict[str, Any]) -> None:
        del spec_dict["components"]["schemas"]["Error"]
        spec_file = _write_spec(tmp_path, spec_dict)

        assert main([str(spec_file), "-o", str(tmp_path / "out")]) == EXIT_GENERATION_ERROR

    def test_failed_run_restores_output(self, tmp_path: Path, spec_dict: dict[str, Any]) -> None:
        output_dir = tmp_path / "out"
        output_dir.mkdir()
        (output_dir / "previous.go").write_text("package previous\n", encoding="utf-8")
        spec_file = _write_spec(tmp_path, _break_directive(spec_dict))

        assert main([str(spec_file), "-o", str(output_dir)]) == EXIT_CONFIGURATION_ERROR
        assert list_go_files(output_dir) == [output_dir / "previous.go"]

    def test_successful_run_replaces_output(self, tmp_path: Path, spec_dict: dict[str, Any]) -> None:
        output_dir = tmp_path / "out"
        output_dir.mkdir()
        (output_dir / "stale.go").write_text("package stale\n", encoding="utf-8")
        spec_file = _write_spec(tmp_path, spec_dict)

        assert main([str(spec_file), "-o", str(output_dir)]) == EXIT_SUCCESS
        assert list_go_files(output_dir) == [output_dir / "client_responses.go"]


class TestFileUtils:
    def test_write_files_returns_sorted_paths(self, tmp_path: Path) -> None:
        files = {tmp_path / "b" / "z.go": "package b\n", tmp_path / "a.go": "package a\n"}

        written = write_files_to_disk(files)

        assert written == [tmp_path / "a.go", tmp_path / "b" / "z.go"]
        assert (tmp_path / "b" / "z.go").read_text(encoding="utf-8") == "package b\n"

    def test_clean_keeps_the_directory(self, tmp_path: Path) -> None:
        output_dir = tmp_path / "out"
        (output_dir / "nested").mkdir(parents=True)
        (output_dir / "nested" / "old.go").write_text("package old\n", encoding="utf-8")
        (output_dir / "notes.txt").write_text("notes\n", encoding="utf-8")

        clean_output_directory(output_dir)

        assert output_dir.is_dir()
        assert list(output_dir.iterdir()) == []

    def test_list_go_files_of_missing_directory(self, tmp_path: Path) -> None:
        assert list_go_files(tmp_path / "nowhere") == []

    def test_clean_creates_missing_directory(self, tmp_path: Path) -> None:
        clean_output_directory(tmp_path / "new" / "out")

        assert (tmp_path / "new" / "out").is_dir()
