"""crudgen spec resolver.

Turns a model name plus the raw ``--fields`` / ``--relations`` option strings
into a frozen :class:`CrudSpec` that every artifact binder reads from.

Usage::

    from crudgen.parser import parse_spec

    spec = parse_spec("blog_post", "title:string,views:integer", "belongsTo:Category")
    print(spec.names.table)       # blog_posts
    print(spec.fields.names())    # ['title', 'views']
    print(spec.issues)            # ()
"""

from crudgen.parser.models import (
    CrudSpec,
    FieldDefinition,
    FieldSpec,
    FieldType,
    NameVariants,
    Relation,
    RelationKind,
    RelationSpec,
    SpecIssue,
    SpecOption,
)
from crudgen.parser.spec_parser import (
    DEFAULT_FIELDS,
    SpecValidationError,
    parse_fields,
    parse_relations,
    parse_spec,
)

__all__ = [
    "parse_spec",
    "parse_fields",
    "parse_relations",
    "DEFAULT_FIELDS",
    "SpecValidationError",
    "CrudSpec",
    "FieldDefinition",
    "FieldSpec",
    "FieldType",
    "NameVariants",
    "Relation",
    "RelationKind",
    "RelationSpec",
    "SpecIssue",
    "SpecOption",
]
