"""
Tests for the atomic writer.
"""

from __future__ import annotations

import pytest

from model_convert_codegen.pipeline.errors import WriteError
from model_convert_codegen.pipeline.writer import AtomicWriter


class TestAtomicWriter:
    """Tests for AtomicWriter."""

    def test_write_new_file(self, tmp_path):
        path = tmp_path / "generated_convert.py"
        AtomicWriter().write(path, "x = 1\n")
        assert path.read_text() == "x = 1\n"

    def test_replace_existing_file(self, tmp_path):
        path = tmp_path / "generated_convert.py"
        path.write_text("old = True\n")
        AtomicWriter().write(path, "new = True\n")
        assert path.read_text() == "new = True\n"

    def test_no_temporary_files_left(self, tmp_path):
        path = tmp_path / "generated_convert.py"
        AtomicWriter().write(path, "x = 1\n")
        assert [p.name for p in tmp_path.iterdir()] == ["generated_convert.py"]

    def test_invalid_python_not_written(self, tmp_path):
        path = tmp_path / "generated_convert.py"
        path.write_text("old = True\n")
        with pytest.raises(WriteError, match="not valid"):
            AtomicWriter().write(path, "def broken(:\n")
        assert path.read_text() == "old = True\n"

    def test_skip_validation(self, tmp_path):
        path = tmp_path / "notes.txt"
        AtomicWriter().write(path, "not python (", validate=False)
        assert path.read_text() == "not python ("

    def test_custom_validation(self, tmp_path):
        def reject(content):
            raise WriteError("rejected")

        with pytest.raises(WriteError, match="rejected"):
            AtomicWriter(validate_python=reject).write(tmp_path / "a.py", "x = 1\n")

    def test_non_atomic(self, tmp_path):
        path = tmp_path / "generated_convert.py"
        AtomicWriter(atomic=False).write(path, "x = 1\n")
        assert path.read_text() == "x = 1\n"

    def test_missing_directory(self, tmp_path):
        with pytest.raises(WriteError, match="could not write"):
            AtomicWriter().write(tmp_path / "missing" / "generated_convert.py", "x = 1\n")
