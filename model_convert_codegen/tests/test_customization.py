#!/usr/bin/env python3

import logging

import pytest

from model_convert_codegen.customization import (
    get_function_names_from_dir,
    get_function_names_from_file,
    get_user_defined_functions,
)


class TestCustomization:
    """Test cases for discovery of user defined functions"""

    def test_file(self, tmp_path):
        path = tmp_path / "custom.py"
        path.write_text(
            "def user_to_graphql(m):\n"
            "    def helper():\n"
            "        pass\n"
            "\n"
            "\n"
            "async def load_users():\n"
            "    pass\n"
            "\n"
            "\n"
            "class UserConverter:\n"
            "    def convert(self):\n"
            "        pass\n"
            "\n"
            "\n"
            "user_search_to_mods = None\n"
        )
        assert get_function_names_from_file(path) == {"user_to_graphql", "load_users"}

    def test_directory(self, tmp_path):
        (tmp_path / "custom.py").write_text("def user_to_graphql(m):\n    return m\n")
        (tmp_path / "search.py").write_text("def user_search_to_mods(search):\n    return []\n")
        (tmp_path / "generated_convert.py").write_text("def generated_only(m):\n    return m\n")
        (tmp_path / "notes.txt").write_text("def not_python():\n")

        names = get_function_names_from_dir(tmp_path, ignore_files=["generated_convert.py"])
        assert names == frozenset({"user_to_graphql", "user_search_to_mods"})

    def test_unparsable_file_is_skipped(self, tmp_path, caplog):
        (tmp_path / "custom.py").write_text("def user_to_graphql(m):\n    return m\n")
        (tmp_path / "broken.py").write_text("def broken(:\n")

        with caplog.at_level(logging.ERROR):
            names = get_function_names_from_dir(tmp_path)

        assert names == frozenset({"user_to_graphql"})
        assert "broken.py" in caplog.text

    def test_defining_modules(self, tmp_path):
        (tmp_path / "custom.py").write_text("def user_to_graphql(m):\n    return m\n")
        (tmp_path / "search.py").write_text("def user_search_to_mods(search):\n    return []\n")
        (tmp_path / "generated_filter.py").write_text("def user_search_to_mods(search):\n    return []\n")

        functions = get_user_defined_functions(tmp_path, ignore_files=["generated_filter.py"])
        assert functions == {"user_to_graphql": "custom", "user_search_to_mods": "search"}

    def test_first_module_wins(self, tmp_path, caplog):
        (tmp_path / "b_search.py").write_text("def user_search_to_mods(search):\n    return []\n")
        (tmp_path / "a_search.py").write_text("def user_search_to_mods(search):\n    return None\n")

        with caplog.at_level(logging.WARNING):
            functions = get_user_defined_functions(tmp_path)

        assert functions == {"user_search_to_mods": "a_search"}
        assert "defined in both a_search and b_search" in caplog.text

    def test_missing_directory(self, tmp_path):
        assert get_function_names_from_dir(tmp_path / "missing") == frozenset()
        assert get_user_defined_functions(tmp_path / "missing") == {}

    def test_file_errors_propagate(self, tmp_path):
        path = tmp_path / "broken.py"
        path.write_text("def broken(:\n")
        with pytest.raises(SyntaxError):
            get_function_names_from_file(path)
