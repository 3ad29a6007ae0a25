#!/usr/bin/env python3

import json
import shutil
from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from model_convert_codegen.cli_utils import reconstruct_command_line
from model_convert_codegen.model_convert_codegen import model_convert_codegen
from model_convert_codegen.pipeline.generator import FILES_TO_GENERATE

TEST_DATA = Path(__file__).parent / "test_data"


@pytest.fixture
def workspace(tmp_path):
    shutil.copy(TEST_DATA / "entity_model.json", tmp_path / "entity_model.json")
    config = json.loads((TEST_DATA / "config.json").read_text())
    config["output"]["directory"] = str(tmp_path / "convert")
    (tmp_path / "config.json").write_text(json.dumps(config))
    return tmp_path


class TestCli:
    """Test cases for the model_convert_codegen command"""

    def test_generate(self, workspace):
        result = CliRunner().invoke(
            model_convert_codegen,
            [str(workspace / "entity_model.json"), "-c", str(workspace / "config.json")],
        )
        assert result.exit_code == 0, result.output
        assert "7 written, 0 failed" in result.output
        for name in FILES_TO_GENERATE:
            assert (workspace / "convert" / name).is_file()

    def test_header_records_command(self, workspace):
        CliRunner().invoke(
            model_convert_codegen,
            [str(workspace / "entity_model.json"), "-c", str(workspace / "config.json"), "--driver", "mysql"],
        )
        header = (workspace / "convert" / "generated_convert.py").read_text().splitlines()[0]
        assert header == (
            "# Code generated by model_convert_codegen v1.0.0 : "
            "model_convert_codegen entity_model.json --config config.json --driver mysql, DO NOT EDIT."
        )

    def test_flags_override_config(self, workspace):
        output_dir = workspace / "elsewhere"
        result = CliRunner().invoke(
            model_convert_codegen,
            [
                str(workspace / "entity_model.json"),
                "-c",
                str(workspace / "config.json"),
                "--driver",
                "mysql",
                "--output-dir",
                str(output_dir),
                "--workers",
                "2",
            ],
        )
        assert result.exit_code == 0, result.output
        assert 'LIKE_OPERATOR = "LIKE"' in (output_dir / "generated_filter.py").read_text()
        assert not (workspace / "convert").exists()

    def test_without_config(self, workspace, monkeypatch):
        monkeypatch.chdir(workspace)
        result = CliRunner().invoke(model_convert_codegen, ["entity_model.json", "-o", "out"])
        assert result.exit_code == 0, result.output
        assert (workspace / "out" / "generated_convert.py").is_file()

    def test_empty_model(self, tmp_path):
        (tmp_path / "empty.json").write_text("{}")
        result = CliRunner().invoke(model_convert_codegen, [str(tmp_path / "empty.json"), "-o", str(tmp_path / "out")])
        assert result.exit_code == 0
        assert "No models found" in result.output

    def test_unknown_formatter_backend(self, workspace):
        (workspace / "bad.json").write_text(json.dumps({"formatter": {"backend": "yapf"}}))
        result = CliRunner().invoke(
            model_convert_codegen,
            [str(workspace / "entity_model.json"), "-c", str(workspace / "bad.json")],
        )
        assert result.exit_code == 1
        assert "Unknown formatter backend" in result.output

    def test_invalid_workers(self, workspace):
        result = CliRunner().invoke(model_convert_codegen, [str(workspace / "entity_model.json"), "--workers", "0"])
        assert result.exit_code == 2


class TestCliUtils:
    """Test cases for CLI utilities"""

    def test_reconstruct_command_line_without_context(self):
        assert reconstruct_command_line(model_convert_codegen) == "model_convert_codegen"

    def test_reconstruct_command_line_with_context(self):
        params = {
            "config": None,
            "driver": "postgres",
            "output_dir": "/nonexistent/generated/convert",
            "workers": 4,
            "verbose": True,
            "model_path": "/nonexistent/entity_model.json",
        }
        with click.Context(model_convert_codegen) as ctx:
            ctx.params.update(params)
            result = reconstruct_command_line()
        assert result == (
            "model_convert_codegen entity_model.json --driver postgres --output-dir convert --workers 4"
        )

    def test_paths_shown_by_name_in_any_directory(self, tmp_path, monkeypatch):
        (tmp_path / "models").mkdir()
        (tmp_path / "models" / "entity_model.json").write_text("{}")
        params = {"model_path": "models/entity_model.json", "driver": "mysql"}

        for cwd in (tmp_path, tmp_path / "models"):
            monkeypatch.chdir(cwd)
            with click.Context(model_convert_codegen) as ctx:
                ctx.params.update(params)
                assert reconstruct_command_line() == "model_convert_codegen entity_model.json --driver mysql"
