"""
Entity model consumed by the convert templates.

The entity model describes the frontend (API) shapes that have to be
converted to and from backend (database) models. It is loaded once per
run and is never mutated while templates are rendered.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum as PyEnum


class ModelKind(str, PyEnum):
    """Role of a frontend model in the generated code."""

    OBJECT = "object"
    CREATE_INPUT = "create_input"
    UPDATE_INPUT = "update_input"
    INPUT = "input"
    FILTER = "filter"
    WHERE = "where"
    ORDERING = "ordering"
    PAYLOAD = "payload"
    CONNECTION = "connection"
    EDGE = "edge"


INPUT_KINDS = frozenset({ModelKind.CREATE_INPUT, ModelKind.UPDATE_INPUT, ModelKind.INPUT})


@dataclass(frozen=True)
class Field:
    """A field of a frontend model.

    Attributes:
        name: Field name on the frontend model
        type: Frontend type name (scalar, enum, model or filter type)
        backend_name: Column or attribute name on the backend model, derived from name when empty
        is_list: Whether the field holds a list of values
        is_id: Whether the field holds an ID (primary or foreign)
        is_primary_id: Whether the field is the primary key of its model
        is_enum: Whether the type is one of the entity model enums
        is_relation: Whether the field points to another model
        relation_model: Name of the related model for relation fields
    """

    name: str
    type: str
    backend_name: str = ""
    description: str = ""
    is_required: bool = False
    is_list: bool = False
    is_id: bool = False
    is_primary_id: bool = False
    is_enum: bool = False
    is_relation: bool = False
    relation_model: str | None = None

    @property
    def is_scalar_filter(self) -> bool:
        """Whether the type is a scalar filter input such as ``StringFilter``."""
        return self.type.endswith("Filter")

    @staticmethod
    def from_dict(d: dict) -> Field:
        return Field(**{k: v for k, v in d.items() if k in Field.__dataclass_fields__})


@dataclass(frozen=True)
class Model:
    """A frontend model and the backend model it maps to."""

    name: str
    kind: ModelKind = ModelKind.OBJECT
    fields: tuple[Field, ...] = ()
    backend_model: str = ""
    description: str = ""

    @property
    def is_object(self) -> bool:
        return self.kind == ModelKind.OBJECT

    @property
    def is_input(self) -> bool:
        return self.kind in INPUT_KINDS

    @property
    def is_create_input(self) -> bool:
        return self.kind == ModelKind.CREATE_INPUT

    @property
    def is_filter(self) -> bool:
        return self.kind == ModelKind.FILTER

    @property
    def is_where(self) -> bool:
        return self.kind == ModelKind.WHERE

    @property
    def is_ordering(self) -> bool:
        return self.kind == ModelKind.ORDERING

    @property
    def backend_name(self) -> str:
        """Backend model name, the frontend name when none is configured."""
        return self.backend_model or self.name

    @property
    def primary_field(self) -> Field | None:
        return next((f for f in self.fields if f.is_primary_id), None)

    @property
    def relation_fields(self) -> tuple[Field, ...]:
        return tuple(f for f in self.fields if f.is_relation)

    @staticmethod
    def from_dict(d: dict) -> Model:
        return Model(
            name=d["name"],
            kind=ModelKind(d.get("kind", ModelKind.OBJECT)),
            fields=tuple(Field.from_dict(f) for f in d.get("fields", [])),
            backend_model=d.get("backend_model", ""),
            description=d.get("description", ""),
        )


@dataclass(frozen=True)
class EnumValue:
    name: str
    description: str = ""


@dataclass(frozen=True)
class Enum:
    name: str
    values: tuple[EnumValue, ...] = ()
    description: str = ""

    @staticmethod
    def from_dict(d: dict) -> Enum:
        values = []
        for v in d.get("values", []):
            values.append(EnumValue(name=v) if isinstance(v, str) else EnumValue(**v))
        return Enum(name=d["name"], values=tuple(values), description=d.get("description", ""))


@dataclass(frozen=True)
class Interface:
    name: str
    description: str = ""
    implementations: tuple[str, ...] = ()

    @staticmethod
    def from_dict(d: dict) -> Interface:
        return Interface(
            name=d["name"],
            description=d.get("description", ""),
            implementations=tuple(d.get("implementations", [])),
        )


@dataclass(frozen=True)
class EntityModel:
    """Models, enums, interfaces and scalars driving generation."""

    models: tuple[Model, ...] = ()
    enums: tuple[Enum, ...] = ()
    interfaces: tuple[Interface, ...] = ()
    scalars: tuple[str, ...] = field(default_factory=tuple)

    @staticmethod
    def from_dict(d: dict) -> EntityModel:
        """Create an entity model from a dictionary (e.g. a loaded JSON document)."""
        return EntityModel(
            models=tuple(Model.from_dict(m) for m in d.get("models", [])),
            enums=tuple(Enum.from_dict(e) for e in d.get("enums", [])),
            interfaces=tuple(Interface.from_dict(i) for i in d.get("interfaces", [])),
            scalars=tuple(d.get("scalars", [])),
        )

    def to_dict(self) -> dict:
        """Convert the entity model to a dictionary."""
        return {
            "models": [
                {
                    "name": m.name,
                    "kind": m.kind.value,
                    "backend_model": m.backend_model,
                    "description": m.description,
                    "fields": [asdict(f) for f in m.fields],
                }
                for m in self.models
            ],
            "enums": [
                {
                    "name": e.name,
                    "description": e.description,
                    "values": [{"name": v.name, "description": v.description} for v in e.values],
                }
                for e in self.enums
            ],
            "interfaces": [
                {"name": i.name, "description": i.description, "implementations": list(i.implementations)}
                for i in self.interfaces
            ],
            "scalars": list(self.scalars),
        }
