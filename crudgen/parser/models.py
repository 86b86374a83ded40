"""Pydantic v2 models for the crudgen spec resolver.

Defines the parsed representation of a ``make-crud`` invocation: the closed
field-type and relation-kind enumerations, the ordered field and relation
specs, the derived name variants and the diagnostics collected while parsing.
Every model is frozen; a spec never changes after it has been parsed.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from . import inflect


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class FieldType(str, Enum):
    """Column types understood by the migration and validation generators."""
    STRING = "string"
    TEXT = "text"
    INTEGER = "integer"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    TIMESTAMP = "timestamp"
    JSON = "json"
    EMAIL = "email"

    @classmethod
    def resolve(cls, declared: str) -> "FieldType":
        """Map a declared type to its enum member, falling back to ``STRING``."""
        try:
            return cls(declared)
        except ValueError:
            return cls.STRING


class RelationKind(str, Enum):
    """Eloquent relationship kinds with a known accessor template."""
    HAS_MANY = "hasMany"
    HAS_ONE = "hasOne"
    BELONGS_TO = "belongsTo"
    BELONGS_TO_MANY = "belongsToMany"
    MORPH_MANY = "morphMany"
    MORPH_ONE = "morphOne"
    MORPH_TO = "morphTo"

    @classmethod
    def resolve(cls, declared: str) -> Optional["RelationKind"]:
        """Return the enum member for *declared*, or ``None`` when unknown."""
        try:
            return cls(declared)
        except ValueError:
            return None


class SpecOption(str, Enum):
    """The command-line option a diagnostic refers to."""
    FIELDS = "fields"
    RELATIONS = "relations"


# ---------------------------------------------------------------------------
# Fields
# ---------------------------------------------------------------------------

class FieldDefinition(BaseModel):
    """A single ``name:type`` entry from ``--fields``."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Column / attribute name")
    declared: str = Field(..., min_length=1, description="Type exactly as declared")

    @property
    def kind(self) -> FieldType:
        return FieldType.resolve(self.declared)

    @property
    def label(self) -> str:
        """Human label used in forms and tables, e.g. ``due_date`` -> ``Due Date``."""
        return inflect.title(self.name.replace("_", " "))


class FieldSpec(BaseModel):
    """Ordered, duplicate-free collection of field definitions.

    Order is declaration order and drives migration column order as well as
    form and table layout.
    """
    model_config = ConfigDict(frozen=True)

    fields: tuple[FieldDefinition, ...] = Field(default=())

    def names(self) -> list[str]:
        return [f.name for f in self.fields]

    def get(self, name: str) -> Optional[FieldDefinition]:
        for field in self.fields:
            if field.name == name:
                return field
        return None

    def __len__(self) -> int:
        return len(self.fields)

    def __contains__(self, name: object) -> bool:
        return any(f.name == name for f in self.fields)


# ---------------------------------------------------------------------------
# Relations
# ---------------------------------------------------------------------------

class Relation(BaseModel):
    """One ``kind:Related`` pair from ``--relations``."""
    model_config = ConfigDict(frozen=True)

    kind: str = Field(..., min_length=1, description="Relation kind as declared")
    related: str = Field(..., min_length=1, description="Related model name")

    @property
    def relation_kind(self) -> Optional[RelationKind]:
        return RelationKind.resolve(self.kind)

    @property
    def is_known(self) -> bool:
        return self.relation_kind is not None

    @property
    def foreign_key(self) -> str:
        """Foreign-key column this relation would own, e.g. ``Category`` -> ``category_id``."""
        return f"{inflect.snake(self.related)}_id"

    @property
    def related_table(self) -> str:
        return inflect.plural(inflect.snake(self.related))

    @property
    def collection_variable(self) -> str:
        """Variable holding every related record in forms, e.g. ``categories``."""
        return inflect.camel(inflect.plural(self.related))


class RelationSpec(BaseModel):
    """Relation kind -> related model names, grouped by kind.

    Kinds keep the order in which they were first declared; related names keep
    declaration order within their kind.  Unknown kinds are stored as-is.
    """
    model_config = ConfigDict(frozen=True)

    by_kind: dict[str, tuple[str, ...]] = Field(default_factory=dict)

    def relations(self) -> list[Relation]:
        """Flatten to ``Relation`` objects in grouped order."""
        return [
            Relation(kind=kind, related=related)
            for kind, targets in self.by_kind.items()
            for related in targets
        ]

    def targets(self, kind: RelationKind | str) -> tuple[str, ...]:
        key = kind.value if isinstance(kind, RelationKind) else kind
        return self.by_kind.get(key, ())

    def belongs_to(self) -> list[Relation]:
        """The only relations that own a physical foreign-key column."""
        return [
            Relation(kind=RelationKind.BELONGS_TO.value, related=related)
            for related in self.targets(RelationKind.BELONGS_TO)
        ]

    def kinds(self) -> list[str]:
        return list(self.by_kind.keys())

    def __bool__(self) -> bool:
        return any(self.by_kind.values())

    def __len__(self) -> int:
        return sum(len(targets) for targets in self.by_kind.values())


# ---------------------------------------------------------------------------
# Names
# ---------------------------------------------------------------------------

class NameVariants(BaseModel):
    """Every casing of the model name the templates need.

    Built once from the user-supplied name so that no two artifacts can render
    the same logical name differently.
    """
    model_config = ConfigDict(frozen=True)

    studly: str
    plural: str
    snake: str
    kebab: str
    camel: str
    plural_camel: str
    table: str

    @classmethod
    def from_name(cls, name: str) -> "NameVariants":
        studly = inflect.studly(name)
        plural = inflect.plural(studly)
        snake = inflect.snake(studly)
        return cls(
            studly=studly,
            plural=plural,
            snake=snake,
            kebab=inflect.kebab(studly),
            camel=inflect.camel(studly),
            plural_camel=inflect.camel(plural),
            table=inflect.plural(snake),
        )


# ---------------------------------------------------------------------------
# Diagnostics & result bundle
# ---------------------------------------------------------------------------

class SpecIssue(BaseModel):
    """A malformed ``--fields`` / ``--relations`` entry that was dropped."""
    model_config = ConfigDict(frozen=True)

    option: SpecOption
    index: int = Field(..., ge=0, description="0-based position of the entry")
    raw: str = Field(..., description="Entry text as given on the command line")
    reason: str

    def __str__(self) -> str:
        return f"--{self.option.value}[{self.index}] {self.raw!r}: {self.reason}"


class CrudSpec(BaseModel):
    """Output of the spec resolver, consumed by every artifact."""
    model_config = ConfigDict(frozen=True)

    names: NameVariants
    fields: FieldSpec
    relations: RelationSpec = Field(default_factory=RelationSpec)
    issues: tuple[SpecIssue, ...] = Field(default=())
    used_default_fields: bool = False

    @property
    def has_issues(self) -> bool:
        return bool(self.issues)
