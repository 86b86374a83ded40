"""Stub loading and placeholder substitution.

Stubs are plain PHP / Blade files carrying literal ``{{token}}`` markers.
They are located through a Jinja2 loader chain (a project-local override
directory first, then the stubs bundled with this package) but are *not*
rendered as Jinja2 templates: Blade uses the same ``{{ }}`` delimiters, so
substitution is a flat, order-independent find-and-replace of the literal
markers instead.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Mapping

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, TemplateNotFound


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_STUB_DIR = Path(__file__).parent / "stubs"

STUB_SUFFIX = ".stub"

_PLACEHOLDER = re.compile(r"\{\{([A-Za-z][A-Za-z0-9]*)\}\}")


class StubNotFoundError(Exception):
    """Raised when no stub exists for an artifact kind in any search path."""

    def __init__(self, stub: str, search_path: list[Path]) -> None:
        self.stub = stub
        self.search_path = search_path
        locations = ", ".join(str(p) for p in search_path)
        super().__init__(f"Stub '{stub}{STUB_SUFFIX}' not found (searched: {locations})")


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Loads named stubs and substitutes their placeholders.

    Stub names are artifact-kind strings such as ``"model"``,
    ``"views/index"`` or ``"layouts/app"``; the ``.stub`` suffix is implied.
    When *override_dir* is given, a stub found there shadows the bundled one
    of the same name.
    """

    def __init__(
        self,
        override_dir: str | Path | None = None,
        stub_dir: str | Path | None = None,
    ) -> None:
        self.stub_dir = Path(stub_dir) if stub_dir is not None else _DEFAULT_STUB_DIR
        self.override_dir = Path(override_dir) if override_dir is not None else None

        self.search_path: list[Path] = []
        if self.override_dir is not None:
            self.search_path.append(self.override_dir)
        self.search_path.append(self.stub_dir)

        self.env = Environment(
            loader=ChoiceLoader(
                [FileSystemLoader(str(p)) for p in self.search_path]
            ),
            autoescape=False,
            keep_trailing_newline=True,
        )

    # -- Loading -----------------------------------------------------------

    def load(self, stub: str) -> str:
        """Return the raw text of *stub*.

        Raises:
            StubNotFoundError: If no search-path entry provides the stub.
        """
        try:
            source, _filename, _uptodate = self.env.loader.get_source(
                self.env, f"{stub}{STUB_SUFFIX}"
            )
        except TemplateNotFound:
            raise StubNotFoundError(stub, self.search_path) from None
        return source

    # -- Rendering ---------------------------------------------------------

    def render(self, stub: str, replacements: Mapping[str, str]) -> str:
        """Load *stub* and substitute every ``{{key}}`` from *replacements*.

        Keys are given without braces.  Markers with no replacement are left
        untouched.
        """
        return substitute(self.load(stub), replacements)

    # -- Utility -----------------------------------------------------------

    def bundled_stub_files(self) -> list[tuple[str, Path]]:
        """``(relative name, file)`` pairs for every bundled stub."""
        return [
            (str(p.relative_to(self.stub_dir).as_posix()), p)
            for p in sorted(self.stub_dir.rglob(f"*{STUB_SUFFIX}"))
        ]


# ---------------------------------------------------------------------------
# Substitution
# ---------------------------------------------------------------------------

def substitute(text: str, replacements: Mapping[str, str]) -> str:
    """Replace ``{{key}}`` markers in a single pass.

    A single regex pass means inserted values are never rescanned, so a value
    that itself contains ``{{something}}`` (Blade output) is left alone.
    """

    def _replace(match: re.Match[str]) -> str:
        key = match.group(1)
        if key in replacements:
            return replacements[key]
        return match.group(0)

    return _PLACEHOLDER.sub(_replace, text)


def placeholders_in(text: str) -> set[str]:
    """Return the set of placeholder keys present in *text*."""
    return set(_PLACEHOLDER.findall(text))
