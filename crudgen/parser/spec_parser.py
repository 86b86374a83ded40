"""Parsing of the ``--fields`` and ``--relations`` options.

Both options are comma-separated lists of ``left:right`` pairs.  Entries that
do not split into exactly two non-empty tokens are dropped from the result
and reported as :class:`SpecIssue` diagnostics; generation itself carries on
unless the caller asks for strict validation.
"""

from __future__ import annotations

from typing import Optional

from .models import (
    CrudSpec,
    FieldDefinition,
    FieldSpec,
    NameVariants,
    RelationSpec,
    SpecIssue,
    SpecOption,
)


DEFAULT_FIELDS = "name:string,email:string,description:text"


class SpecValidationError(Exception):
    """Raised in strict mode when any spec entry had to be dropped."""

    def __init__(self, issues: list[SpecIssue] | tuple[SpecIssue, ...]):
        self.issues = list(issues)
        count = len(self.issues)
        super().__init__(
            f"{count} malformed spec entr{'y' if count == 1 else 'ies'}: "
            + "; ".join(str(issue) for issue in self.issues)
        )


# ---------------------------------------------------------------------------
# Entry splitting
# ---------------------------------------------------------------------------

def _split_pairs(
    option: Optional[str], which: SpecOption
) -> tuple[list[tuple[str, str]], list[SpecIssue]]:
    """Split ``a:b,c:d`` into trimmed pairs, collecting malformed entries.

    Blank entries (``"a:b,"``) are skipped without a diagnostic.
    """
    pairs: list[tuple[str, str]] = []
    issues: list[SpecIssue] = []
    if not option:
        return pairs, issues

    for index, entry in enumerate(option.split(",")):
        if not entry.strip():
            continue
        parts = entry.split(":")
        if len(parts) != 2:
            reason = (
                "missing ':' separator"
                if len(parts) == 1
                else f"expected exactly one ':' but found {len(parts) - 1}"
            )
            issues.append(SpecIssue(option=which, index=index, raw=entry, reason=reason))
            continue
        left, right = parts[0].strip(), parts[1].strip()
        if not left or not right:
            missing = "name" if not left else "type"
            if which is SpecOption.RELATIONS:
                missing = "relation kind" if not left else "related model"
            issues.append(
                SpecIssue(option=which, index=index, raw=entry, reason=f"empty {missing}")
            )
            continue
        pairs.append((left, right))

    return pairs, issues


# ---------------------------------------------------------------------------
# Public parsers
# ---------------------------------------------------------------------------

def parse_fields(option: Optional[str]) -> tuple[FieldSpec, list[SpecIssue]]:
    """Parse ``--fields`` into an ordered :class:`FieldSpec`.

    A repeated name replaces the earlier type but keeps the earlier position.
    The result may be empty; falling back to the defaults is the caller's job
    (see :func:`parse_spec`).
    """
    pairs, issues = _split_pairs(option, SpecOption.FIELDS)
    declared: dict[str, str] = {}
    for name, type_name in pairs:
        declared[name] = type_name
    spec = FieldSpec(
        fields=tuple(FieldDefinition(name=name, declared=t) for name, t in declared.items())
    )
    return spec, issues


def parse_relations(option: Optional[str]) -> tuple[RelationSpec, list[SpecIssue]]:
    """Parse ``--relations`` into a :class:`RelationSpec`.

    Unknown relation kinds are kept; the binders simply render nothing for
    them.  An exact repeat of a ``kind:Related`` pair is folded into one.
    """
    pairs, issues = _split_pairs(option, SpecOption.RELATIONS)
    grouped: dict[str, list[str]] = {}
    for kind, related in pairs:
        targets = grouped.setdefault(kind, [])
        if related not in targets:
            targets.append(related)
    spec = RelationSpec(by_kind={kind: tuple(targets) for kind, targets in grouped.items()})
    return spec, issues


def parse_spec(
    name: str,
    fields_option: Optional[str] = None,
    relations_option: Optional[str] = None,
    *,
    strict: bool = False,
) -> CrudSpec:
    """Resolve a model name and its options into a :class:`CrudSpec`.

    Args:
        name: Model name in any casing (``blog_post``, ``BlogPost``...).
        fields_option: Raw ``--fields`` value.  When absent, blank, or every
            entry is malformed, the three default fields are used instead.
        relations_option: Raw ``--relations`` value.
        strict: Raise :class:`SpecValidationError` instead of dropping
            malformed entries.

    Raises:
        ValueError: If *name* contains no identifier characters.
        SpecValidationError: In strict mode, if any entry was malformed.
    """
    names = NameVariants.from_name(name)
    if not names.studly:
        raise ValueError(f"Invalid model name: {name!r}")

    fields, field_issues = parse_fields(fields_option)
    used_default = False
    if not len(fields):
        fields, _ = parse_fields(DEFAULT_FIELDS)
        used_default = True

    relations, relation_issues = parse_relations(relations_option)
    issues = tuple(field_issues + relation_issues)
    if strict and issues:
        raise SpecValidationError(issues)

    return CrudSpec(
        names=names,
        fields=fields,
        relations=relations,
        issues=issues,
        used_default_fields=used_default,
    )
