"""Shared pytest fixtures for the crudgen test suite.

Provides reusable fixtures for:
- A throw-away Laravel project skeleton (route files included)
- A GeneratorConfig anchored at that project
- A fixed clock so migration filenames are predictable
- Pre-parsed specs for the common scenarios
"""

from __future__ import annotations

import io
from datetime import datetime
from pathlib import Path

import pytest
from rich.console import Console

from crudgen.config import GeneratorConfig
from crudgen.parser import CrudSpec, parse_spec
from crudgen.scaffolder import CrudGenerator


FIXED_NOW = datetime(2024, 1, 15, 10, 30, 45)

WEB_ROUTES = "<?php\n\nuse Illuminate\\Support\\Facades\\Route;\n"
API_ROUTES = "<?php\n\nuse Illuminate\\Http\\Request;\nuse Illuminate\\Support\\Facades\\Route;\n"


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def laravel_project(tmp_path: Path) -> Path:
    """Minimal Laravel project root with both route files present."""
    root = tmp_path / "laravel-app"
    (root / "routes").mkdir(parents=True)
    (root / "routes" / "web.php").write_text(WEB_ROUTES, encoding="utf-8")
    (root / "routes" / "api.php").write_text(API_ROUTES, encoding="utf-8")
    yield root


@pytest.fixture
def bare_project(tmp_path: Path) -> Path:
    """Project root without any route files."""
    root = tmp_path / "bare-app"
    root.mkdir()
    yield root


# ---------------------------------------------------------------------------
# Configuration & generator
# ---------------------------------------------------------------------------

@pytest.fixture
def config(laravel_project: Path) -> GeneratorConfig:
    return GeneratorConfig(base_path=laravel_project)


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def generator(config: GeneratorConfig, fixed_clock) -> CrudGenerator:
    return CrudGenerator(config, clock=fixed_clock)


# ---------------------------------------------------------------------------
# Specs
# ---------------------------------------------------------------------------

@pytest.fixture
def default_spec() -> CrudSpec:
    """``blog_post`` with no options: the three default fields."""
    return parse_spec("blog_post")


@pytest.fixture
def post_spec() -> CrudSpec:
    """A post that belongs to a category and has many comments."""
    return parse_spec(
        "Post",
        "title:string,views:integer,price:decimal,published:boolean,meta:json",
        "belongsTo:Category,hasMany:Comment",
    )


@pytest.fixture
def relation_spec() -> CrudSpec:
    """Every known relation kind plus one unknown kind."""
    return parse_spec(
        "Article",
        "title:string",
        "hasMany:Comment,hasOne:Summary,belongsTo:Author,belongsToMany:Tag,"
        "morphMany:Image,morphOne:Cover,morphTo:Imageable,hasThrough:Country",
    )


# ---------------------------------------------------------------------------
# Console
# ---------------------------------------------------------------------------

@pytest.fixture
def console_output(monkeypatch: pytest.MonkeyPatch) -> io.StringIO:
    """Route the shared Rich console into a buffer, wide enough not to wrap."""
    buffer = io.StringIO()
    test_console = Console(file=buffer, width=200, color_system=None)
    monkeypatch.setattr("crudgen.utils.console", test_console)
    monkeypatch.setattr("crudgen.cli.console", test_console)
    return buffer
