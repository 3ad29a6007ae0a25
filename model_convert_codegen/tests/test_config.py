"""
Tests for the generator configuration and the entity model.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from model_convert_codegen.config import DatabaseDriver, GeneratorConfig, PackageConfig, PluginConfig
from model_convert_codegen.naming import DEFAULT_ACRONYMS
from model_convert_codegen.structs import EntityModel, Field, Model, ModelKind

TEST_DATA = Path(__file__).parent / "test_data"


class TestGeneratorConfig:
    """Tests for GeneratorConfig."""

    def test_defaults(self):
        config = GeneratorConfig()
        assert config.plugin.database_driver is None
        assert config.override_prefix == "original"
        assert config.workers == 1
        assert config.formatter.backend == "black"
        assert config.acronyms == dict(DEFAULT_ACRONYMS)

    def test_from_dict(self):
        config = GeneratorConfig.from_dict(json.loads((TEST_DATA / "config.json").read_text()))
        assert config.backend == PackageConfig("app/models", "dm")
        assert config.frontend == PackageConfig("app/graphql/models", "fm")
        assert config.output.package_name == "convert"
        assert config.plugin.is_postgres
        assert config.formatter.line_length == 100

    def test_round_trip(self):
        config = GeneratorConfig.from_dict(
            {
                "backend": {"directory": "app/models", "package_name": "dm"},
                "plugin": {"database_driver": "mysql"},
                "acronyms": {"API": "Api"},
                "workers": 4,
                "formatter": {"backend": "ruff", "line_length": 120},
                "writer": {"atomic_write": False},
            }
        )
        assert GeneratorConfig.from_dict(config.to_dict()) == config

    def test_unknown_driver(self):
        with pytest.raises(ValueError):
            GeneratorConfig.from_dict({"plugin": {"database_driver": "oracle"}})

    def test_plugin_without_driver(self):
        plugin = PluginConfig()
        assert not plugin.is_postgres
        assert not PluginConfig(DatabaseDriver.MYSQL).is_postgres


class TestPackageConfig:
    @pytest.mark.parametrize(
        "directory,root,expected",
        [
            ("app/models", "", "app.models"),
            ("./app/models/", "", "app.models"),
            ("app\\models", "", "app.models"),
            ("models", "myproject", "myproject.models"),
            ("", "myproject.", "myproject"),
        ],
    )
    def test_import_path(self, directory, root, expected):
        assert PackageConfig(directory, "dm").import_path(root) == expected


class TestEntityModel:
    """Tests for the entity model structures."""

    def test_from_dict(self):
        entity_model = EntityModel.from_dict(json.loads((TEST_DATA / "entity_model.json").read_text()))
        assert [e.name for e in entity_model.enums] == ["Role", "UserSort", "SortDirection"]
        assert entity_model.enums[0].values[1].name == "MEMBER"
        assert entity_model.interfaces[0].implementations == ("User", "Organization")
        assert entity_model.scalars == ("DateTime",)

        models = {m.name: m for m in entity_model.models}
        user = models["User"]
        assert user.is_object
        assert user.backend_name == "User"
        assert user.primary_field.name == "id"
        assert [f.name for f in user.relation_fields] == ["organization"]

        create_input = models["UserCreateInput"]
        assert create_input.is_input and create_input.is_create_input
        assert models["UserWhere"].is_where
        assert models["UserOrdering"].is_ordering
        scalar_filters = [f.name for f in models["UserWhere"].fields if f.is_scalar_filter]
        assert scalar_filters == ["id", "name", "organizationId"]

    def test_round_trip(self):
        entity_model = EntityModel.from_dict(json.loads((TEST_DATA / "entity_model.json").read_text()))
        assert EntityModel.from_dict(entity_model.to_dict()) == entity_model

    def test_backend_name(self):
        assert Model("UserCreateInput", ModelKind.CREATE_INPUT, backend_model="User").backend_name == "User"
        assert Model("User").backend_name == "User"

    def test_field_ignores_unknown_keys(self):
        field = Field.from_dict({"name": "id", "type": "ID", "is_id": True, "directive": "@goField"})
        assert field == Field("id", "ID", is_id=True)

    def test_immutable(self):
        with pytest.raises(AttributeError):
            Model("User").name = "Account"

    @pytest.mark.parametrize(
        "type_name,expected",
        [("StringFilter", True), ("IDFilter", True), ("UserFilter", True), ("String", False), ("FilterMode", False)],
    )
    def test_scalar_filter(self, type_name, expected):
        assert Field("name", type_name).is_scalar_filter is expected
