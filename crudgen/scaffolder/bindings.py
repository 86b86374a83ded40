"""Placeholder value generators.

Each function here is a pure function of a :class:`CrudSpec` (plus the root
namespace where generated code references other classes) and returns the
exact text substituted for one stub placeholder.  The indentation baked into
the returned strings matches the bundled stubs.
"""

from __future__ import annotations

from typing import Callable

from crudgen.parser import inflect
from crudgen.parser.models import (
    CrudSpec,
    FieldDefinition,
    FieldType,
    Relation,
    RelationKind,
)


AUDIT_COLUMNS: tuple[str, ...] = ("created_by", "updated_by")

# Declared types that get an entry in the model's $casts.
CAST_TYPES: frozenset[str] = frozenset({"json", "array", "boolean", "date", "datetime", "decimal"})

TIMESTAMP_CASTS: tuple[tuple[str, str], ...] = (
    ("created_at", "datetime"),
    ("updated_at", "datetime"),
    ("deleted_at", "datetime"),
)

_MEMBER = " " * 4
_STATEMENT = " " * 8
_ARRAY_ITEM = " " * 8
_COLUMN = " " * 12
_RULE = " " * 12


# ---------------------------------------------------------------------------
# Model: fillable, casts, eager loads
# ---------------------------------------------------------------------------

def fillable_names(spec: CrudSpec) -> list[str]:
    """Declared fields, then audit columns, then one FK per ``belongsTo``."""
    names: list[str] = []
    for name in [*spec.fields.names(), *AUDIT_COLUMNS]:
        if name not in names:
            names.append(name)
    for relation in spec.relations.belongs_to():
        if relation.foreign_key not in names:
            names.append(relation.foreign_key)
    return names


def foreign_key_relations(spec: CrudSpec) -> list[Relation]:
    """``belongsTo`` relations with one entry per foreign key column."""
    seen: set[str] = set()
    relations: list[Relation] = []
    for relation in spec.relations.belongs_to():
        if relation.foreign_key in seen:
            continue
        seen.add(relation.foreign_key)
        relations.append(relation)
    return relations


def column_fields(spec: CrudSpec) -> list[FieldDefinition]:
    """Declared fields that are not also a ``belongsTo`` foreign key.

    A field named like a foreign key is emitted through the relation instead
    (``foreignId`` column, ``exists`` rule, ``<select>`` input).
    """
    keys = {relation.foreign_key for relation in foreign_key_relations(spec)}
    return [field for field in spec.fields.fields if field.name not in keys]


def render_fillable(spec: CrudSpec) -> str:
    return "".join(f"{_ARRAY_ITEM}'{name}',\n" for name in fillable_names(spec))


def cast_entries(spec: CrudSpec) -> list[tuple[str, str]]:
    """``(attribute, cast)`` pairs; ``decimal`` always casts to ``decimal:2``."""
    casts: list[tuple[str, str]] = []
    for field in spec.fields.fields:
        if field.declared in CAST_TYPES:
            cast = "decimal:2" if field.declared == "decimal" else field.declared
            casts.append((field.name, cast))
    casts.extend(TIMESTAMP_CASTS)
    return casts


def render_casts(spec: CrudSpec) -> str:
    return "".join(f"{_ARRAY_ITEM}'{name}' => '{cast}',\n" for name, cast in cast_entries(spec))


def eager_loads(spec: CrudSpec) -> list[str]:
    """Relations loaded with every query: the audit users plus each accessor."""
    loads = ["creator", "updater"]
    for relation in spec.relations.relations():
        if not relation.is_known:
            continue
        name = relation_method_name(relation)
        if name not in loads:
            loads.append(name)
    return loads


def render_eager_loads(spec: CrudSpec) -> str:
    return "".join(f"{_ARRAY_ITEM}'{name}',\n" for name in eager_loads(spec))


# ---------------------------------------------------------------------------
# Relations
# ---------------------------------------------------------------------------

_METHOD_NAMERS: dict[RelationKind, Callable[[str], str]] = {
    RelationKind.HAS_MANY: lambda related: inflect.camel(inflect.plural(related)),
    RelationKind.HAS_ONE: inflect.camel,
    RelationKind.BELONGS_TO: inflect.camel,
    RelationKind.BELONGS_TO_MANY: lambda related: inflect.camel(inflect.plural(related)),
    RelationKind.MORPH_MANY: lambda related: inflect.camel(inflect.plural(related)),
    RelationKind.MORPH_ONE: inflect.camel,
    RelationKind.MORPH_TO: lambda related: "parent",
}

# Kinds whose Eloquent call takes the related class as its first argument.
_CLASS_ARGUMENT_KINDS: frozenset[RelationKind] = frozenset({
    RelationKind.HAS_MANY,
    RelationKind.HAS_ONE,
    RelationKind.BELONGS_TO,
    RelationKind.BELONGS_TO_MANY,
    RelationKind.MORPH_MANY,
    RelationKind.MORPH_ONE,
})


def relation_method_name(relation: Relation) -> str:
    """Accessor name for a relation; unknown kinds fall back to ``camel(related)``."""
    kind = relation.relation_kind
    namer = _METHOD_NAMERS.get(kind) if kind is not None else None
    if namer is None:
        return inflect.camel(relation.related)
    return namer(relation.related)


def model_class(namespace: str, model: str) -> str:
    """Fully-qualified model class reference, e.g. ``\\App\\Models\\Comment``."""
    return f"\\{namespace}\\Models\\{inflect.studly(model)}"


def relation_method(relation: Relation, namespace: str) -> str:
    """Eloquent accessor method for one relation, or ``""`` for unknown kinds."""
    kind = relation.relation_kind
    if kind is None:
        return ""
    name = relation_method_name(relation)
    if kind in _CLASS_ARGUMENT_KINDS:
        call = f"$this->{kind.value}({model_class(namespace, relation.related)}::class)"
    else:
        call = f"$this->{kind.value}()"
    return (
        f"\n{_MEMBER}public function {name}()\n"
        f"{_MEMBER}{{\n"
        f"{_STATEMENT}return {call};\n"
        f"{_MEMBER}}}\n"
    )


def render_relations(spec: CrudSpec, namespace: str) -> str:
    """All accessor methods for the model class body.

    Two relations resolving to the same accessor name (e.g. two ``morphTo``
    declarations) produce a single method.
    """
    seen: set[str] = set()
    methods: list[str] = []
    for relation in spec.relations.relations():
        body = relation_method(relation, namespace)
        if not body:
            continue
        name = relation_method_name(relation)
        if name in seen:
            continue
        seen.add(name)
        methods.append(body)
    if not methods:
        return ""
    return f"\n{_MEMBER}// Relationships\n" + "".join(methods)


def render_repository_relations(spec: CrudSpec) -> str:
    """``with<Related>()`` eager-loading helpers for the repository."""
    seen: set[str] = set()
    methods: list[str] = []
    for relation in spec.relations.relations():
        if not relation.is_known:
            continue
        name = f"with{inflect.studly(relation.related)}"
        if name in seen:
            continue
        seen.add(name)
        methods.append(
            f"\n{_MEMBER}public function {name}()\n"
            f"{_MEMBER}{{\n"
            f"{_STATEMENT}return $this->model->with('{relation_method_name(relation)}')->get();\n"
            f"{_MEMBER}}}\n"
        )
    if not methods:
        return ""
    return f"\n{_MEMBER}// Relationship methods\n" + "".join(methods)


_SERVICE_METHOD_FORMATS: dict[RelationKind, str] = {
    RelationKind.HAS_MANY: "get{related}By{model}",
    RelationKind.BELONGS_TO: "get{related}For{model}",
}


def render_service_relations(spec: CrudSpec) -> str:
    """Service lookups for ``hasMany`` / ``belongsTo`` relations only."""
    names = spec.names
    seen: set[str] = set()
    methods: list[str] = []
    for relation in spec.relations.relations():
        kind = relation.relation_kind
        fmt = _SERVICE_METHOD_FORMATS.get(kind) if kind is not None else None
        if fmt is None:
            continue
        method = fmt.format(related=inflect.studly(relation.related), model=names.studly)
        if method in seen:
            continue
        seen.add(method)
        methods.append(
            f"\n{_MEMBER}public function {method}($id)\n"
            f"{_MEMBER}{{\n"
            f"{_STATEMENT}${names.camel} = $this->repository->find($id);\n"
            f"\n"
            f"{_STATEMENT}return ${names.camel}->{relation_method_name(relation)};\n"
            f"{_MEMBER}}}\n"
        )
    if not methods:
        return ""
    return f"\n{_MEMBER}// Relationship methods\n" + "".join(methods)


# ---------------------------------------------------------------------------
# Migration
# ---------------------------------------------------------------------------

_COLUMN_FORMATS: dict[FieldType, str] = {
    FieldType.STRING: "string('{name}')",
    FieldType.TEXT: "text('{name}')",
    FieldType.INTEGER: "integer('{name}')",
    FieldType.DECIMAL: "decimal('{name}', 8, 2)",
    FieldType.BOOLEAN: "boolean('{name}')",
    FieldType.DATE: "date('{name}')",
    FieldType.DATETIME: "dateTime('{name}')",
    FieldType.TIMESTAMP: "timestamp('{name}')",
    FieldType.JSON: "json('{name}')",
    FieldType.EMAIL: "string('{name}')",
}


def column_definition(field: FieldDefinition) -> str:
    """Schema builder call for one field, e.g. ``decimal('price', 8, 2)``."""
    fmt = _COLUMN_FORMATS.get(field.kind, _COLUMN_FORMATS[FieldType.STRING])
    return fmt.format(name=field.name)


def render_migration_fields(spec: CrudSpec) -> str:
    return "".join(
        f"{_COLUMN}$table->{column_definition(field)};\n" for field in column_fields(spec)
    )


def render_migration_foreign_keys(spec: CrudSpec) -> str:
    return "".join(
        f"{_COLUMN}$table->foreignId('{relation.foreign_key}')"
        f"->constrained('{relation.related_table}')->onDelete('cascade');\n"
        for relation in foreign_key_relations(spec)
    )


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def validation_rule(field: FieldDefinition) -> str:
    rule = "required"
    if field.declared in ("string", "text"):
        rule += "|string"
        if field.declared == "string":
            rule += "|max:255"
    elif field.declared == "email":
        rule += "|email"
    elif field.declared == "integer":
        rule += "|integer"
    return rule


def validation_rules(spec: CrudSpec) -> list[tuple[str, str]]:
    """Declared-field rules followed by one ``exists`` rule per ``belongsTo``."""
    rules = [(field.name, validation_rule(field)) for field in column_fields(spec)]
    for relation in foreign_key_relations(spec):
        rules.append((relation.foreign_key, f"required|exists:{relation.related_table},id"))
    return rules


def render_validation_rules(spec: CrudSpec) -> str:
    return "".join(f"{_RULE}'{attribute}' => '{rule}',\n" for attribute, rule in validation_rules(spec))


# ---------------------------------------------------------------------------
# Controller form data
# ---------------------------------------------------------------------------

def _form_action_body(spec: CrudSpec, namespace: str, view: str, with_model: bool) -> str:
    names = spec.names
    compact = [f"'{names.camel}'"] if with_model else []
    lines: list[str] = []
    for relation in foreign_key_relations(spec):
        variable = relation.collection_variable
        lines.append(
            f"{_STATEMENT}${variable} = {model_class(namespace, relation.related)}::all();"
        )
        compact.append(f"'{variable}'")
    if lines:
        lines.append("")
    if compact:
        lines.append(
            f"{_STATEMENT}return view('{names.kebab}.{view}', compact({', '.join(compact)}));"
        )
    else:
        lines.append(f"{_STATEMENT}return view('{names.kebab}.{view}');")
    return "\n".join(lines)


def render_create_action(spec: CrudSpec, namespace: str) -> str:
    """Body of the web controller's ``create()``: load ``belongsTo`` options."""
    return _form_action_body(spec, namespace, "create", with_model=False)


def render_edit_action(spec: CrudSpec, namespace: str) -> str:
    """Body of the web controller's ``edit()``: the record plus ``belongsTo`` options."""
    return _form_action_body(spec, namespace, "edit", with_model=True)


# ---------------------------------------------------------------------------
# Views
# ---------------------------------------------------------------------------

_INPUT_TYPES: dict[FieldType, str] = {
    FieldType.STRING: "text",
    FieldType.INTEGER: "number",
    FieldType.DECIMAL: "number",
    FieldType.DATE: "date",
    FieldType.DATETIME: "datetime-local",
    FieldType.TIMESTAMP: "datetime-local",
    FieldType.EMAIL: "email",
}

_TEXTAREA_TYPES: frozenset[FieldType] = frozenset({FieldType.TEXT, FieldType.JSON})

_FORM_INDENT = " " * 12


def form_field(field: FieldDefinition, model_variable: str) -> str:
    """Labelled form control for one field, pre-filled from ``old()`` or the record."""
    name = field.name
    value = f"old('{name}', ${model_variable}->{name} ?? '')"
    i = _FORM_INDENT
    if field.kind in _TEXTAREA_TYPES:
        control = (
            f'{i}    <textarea name="{name}" id="{name}" class="form-control" rows="4" required>'
            f"{{{{ {value} }}}}</textarea>\n"
        )
    elif field.kind is FieldType.BOOLEAN:
        control = (
            f'{i}    <input type="hidden" name="{name}" value="0">\n'
            f'{i}    <input type="checkbox" name="{name}" id="{name}" value="1" class="form-check-input"'
            f" {{{{ {value} ? 'checked' : '' }}}}>\n"
        )
    else:
        input_type = _INPUT_TYPES.get(field.kind, "text")
        step = ' step="0.01"' if field.kind is FieldType.DECIMAL else ""
        control = (
            f'{i}    <input type="{input_type}"{step} name="{name}" id="{name}" class="form-control"'
            f' value="{{{{ {value} }}}}" required>\n'
        )
    return (
        f'{i}<div class="form-group mb-3">\n'
        f'{i}    <label for="{name}">{field.label}</label>\n'
        f"{control}"
        f"{i}    @error('{name}')\n"
        f'{i}        <span class="text-danger">{{{{ $message }}}}</span>\n'
        f"{i}    @enderror\n"
        f"{i}</div>\n"
    )


def render_form_fields(spec: CrudSpec) -> str:
    return "".join(form_field(field, spec.names.camel) for field in column_fields(spec))


def relation_select(relation: Relation, model_variable: str) -> str:
    """``<select>`` over every related record for a ``belongsTo`` foreign key."""
    key = relation.foreign_key
    label = inflect.title(inflect.snake(relation.related).replace("_", " "))
    variable = relation.collection_variable
    i = _FORM_INDENT
    return (
        f'{i}<div class="form-group mb-3">\n'
        f'{i}    <label for="{key}">{label} <span class="text-danger">*</span></label>\n'
        f'{i}    <select name="{key}" id="{key}" class="form-control" required>\n'
        f'{i}        <option value="">Select {label}</option>\n'
        f"{i}        @foreach(${variable} as $item)\n"
        f'{i}            <option value="{{{{ $item->id }}}}"'
        f" {{{{ old('{key}', ${model_variable}->{key} ?? '') == $item->id ? 'selected' : '' }}}}>\n"
        f"{i}                {{{{ $item->name ?? $item->title ?? $item->id }}}}\n"
        f"{i}            </option>\n"
        f"{i}        @endforeach\n"
        f"{i}    </select>\n"
        f"{i}    @error('{key}')\n"
        f'{i}        <span class="text-danger">{{{{ $message }}}}</span>\n'
        f"{i}    @enderror\n"
        f"{i}</div>\n"
    )


def render_relation_fields(spec: CrudSpec) -> str:
    return "".join(
        relation_select(relation, spec.names.camel) for relation in foreign_key_relations(spec)
    )


def render_table_headers(spec: CrudSpec) -> str:
    return "".join(
        f"{' ' * 20}<th>{field.label}</th>\n" for field in spec.fields.fields
    )


def render_table_rows(spec: CrudSpec) -> str:
    variable = spec.names.camel
    return "".join(
        f"{' ' * 24}<td>{{{{ ${variable}->{field.name} }}}}</td>\n"
        for field in spec.fields.fields
    )


def render_show_fields(spec: CrudSpec) -> str:
    variable = spec.names.camel
    return "".join(
        f"{' ' * 12}<dt class=\"col-sm-3\">{field.label}</dt>\n"
        f"{' ' * 12}<dd class=\"col-sm-9\">{{{{ ${variable}->{field.name} }}}}</dd>\n"
        for field in spec.fields.fields
    )
