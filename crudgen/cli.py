"""Command-line interface.

Usage::

    crudgen make-crud Product --fields "name:string,price:decimal" \\
        --relations "belongsTo:Category,hasMany:Review"
    crudgen publish-stubs --base-path /srv/shop
    crudgen publish-config --base-path /srv/shop
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from rich.markup import escape

from crudgen import __version__
from crudgen.config import ConfigError, GeneratorConfig
from crudgen.parser import SpecIssue, SpecValidationError, parse_spec
from crudgen.scaffolder import (
    ArtifactResult,
    ArtifactStatus,
    CrudGenerator,
    StubNotFoundError,
    publish_stubs,
)
from crudgen.utils import (
    console,
    display_path,
    print_error,
    print_info,
    print_issue_table,
    print_success,
    print_summary_table,
    print_warning,
)


EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INVALID_SPEC = 2


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _base_path(args: argparse.Namespace) -> Optional[Path]:
    return Path(args.base_path) if args.base_path else None


def _load_config(args: argparse.Namespace) -> GeneratorConfig:
    config_path = Path(args.config) if getattr(args, "config", None) else None
    config = GeneratorConfig.discover(_base_path(args), config_path)
    if getattr(args, "stubs", None):
        config = config.model_copy(update={"stubs_path": Path(args.stubs).resolve()})
    return config


def _result_rows(results: list[ArtifactResult], base: Path) -> list[tuple[str, str, str]]:
    return [(r.kind, r.status.value, display_path(r.path, base)) for r in results]


def _issue_rows(issues: Sequence[SpecIssue]) -> list[tuple[str, int, str, str]]:
    return [(f"--{i.option.value}", i.index, i.raw, i.reason) for i in issues]


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _cmd_make_crud(args: argparse.Namespace) -> int:
    config = _load_config(args)

    try:
        spec = parse_spec(args.name, args.fields, args.relations, strict=args.strict)
    except SpecValidationError as exc:
        print_error("Malformed spec entries, nothing was generated.")
        print_issue_table(_issue_rows(exc.issues))
        return EXIT_INVALID_SPEC
    except ValueError as exc:
        print_error(escape(str(exc)))
        return EXIT_ERROR

    for issue in spec.issues:
        print_warning(f"Ignoring malformed entry {escape(str(issue))}")
    if spec.used_default_fields and args.fields:
        print_warning("No usable --fields entries; falling back to the default fields.")
    if args.sample:
        print_info("[dim]--sample is accepted but not implemented yet; no sample data was generated.[/dim]")

    model = spec.names.studly
    console.print(f"[bold]Generating CRUD for[/bold] [cyan]{escape(model)}[/cyan]")

    report = CrudGenerator(config).generate(spec)
    print_summary_table(_result_rows(report.results, config.base_path), title=f"{model} CRUD")

    for result in report.with_status(ArtifactStatus.MISSING):
        print_warning(
            f"Route file {escape(display_path(result.path, config.base_path))} not found; "
            "register the route manually."
        )

    print_success(f"CRUD for {escape(model)} generated successfully!")
    print_info("Run: php artisan migrate")
    print_info(
        f"Bind {config.namespace}\\Repositories\\Contracts\\{model}RepositoryInterface "
        f"to {config.namespace}\\Repositories\\{model}Repository in a service provider."
    )
    print_info("Make sure you have a User model with an id field for the audit relations.")
    return EXIT_OK


def _cmd_publish_stubs(args: argparse.Namespace) -> int:
    config = _load_config(args)
    results = publish_stubs(config, force=args.force)
    print_summary_table(_result_rows(results, config.base_path), title="Stubs")

    skipped = [r for r in results if r.status is ArtifactStatus.SKIPPED]
    if skipped:
        print_warning(f"{len(skipped)} stub(s) already published; use --force to overwrite.")
    print_success(
        f"Stubs published to {escape(display_path(config.stubs_dir, config.base_path))}"
    )
    return EXIT_OK


def _cmd_publish_config(args: argparse.Namespace) -> int:
    config = GeneratorConfig.discover(_base_path(args))
    target = Path(args.output) if args.output else config.config_file

    if target.exists() and not args.force:
        print_warning(f"{escape(str(target))} already exists; use --force to overwrite.")
        return EXIT_OK

    config.save(target)
    print_success(f"Configuration written to {escape(str(target))}")
    return EXIT_OK


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crudgen",
        description="Generate a complete Laravel CRUD stack for a model",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  crudgen make-crud Product\n"
            "  crudgen make-crud blog_post --fields title:string,body:text\n"
            "  crudgen make-crud Post --relations belongsTo:Category,hasMany:Comment\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    make = subparsers.add_parser("make-crud", help="Generate CRUD files for a model")
    make.add_argument("name", help="Model name in any casing (e.g. Product, blog_post)")
    make.add_argument(
        "--fields",
        default=None,
        help="Comma-separated name:type pairs (default: name:string,email:string,description:text)",
    )
    make.add_argument(
        "--relations",
        default=None,
        help="Comma-separated kind:Model pairs, e.g. belongsTo:Category,hasMany:Comment",
    )
    make.add_argument(
        "--sample",
        action="store_true",
        help="Generate sample data (not implemented yet)",
    )
    make.add_argument(
        "--strict",
        action="store_true",
        help="Abort with exit code 2 if any --fields/--relations entry is malformed",
    )
    make.add_argument(
        "--stubs",
        default=None,
        help="Directory of stub overrides, relative to the current directory",
    )
    _add_project_arguments(make)
    make.set_defaults(handler=_cmd_make_crud)

    stubs = subparsers.add_parser("publish-stubs", help="Copy the bundled stubs into the project")
    stubs.add_argument("--force", action="store_true", help="Overwrite stubs already published")
    _add_project_arguments(stubs)
    stubs.set_defaults(handler=_cmd_publish_stubs)

    cfg = subparsers.add_parser("publish-config", help="Write crudgen.json with the active settings")
    cfg.add_argument(
        "--base-path",
        default=None,
        help="Laravel project root (default: $CRUDGEN_BASE_PATH or .)",
    )
    cfg.add_argument("--output", "-o", default=None, help="Destination file (default: <base>/crudgen.json)")
    cfg.add_argument("--force", action="store_true", help="Overwrite an existing file")
    cfg.set_defaults(handler=_cmd_publish_config)

    return parser


def _add_project_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--base-path",
        default=None,
        help="Laravel project root (default: $CRUDGEN_BASE_PATH or .)",
    )
    parser.add_argument("--config", default=None, help="Path to a crudgen.json file")


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entry point for ``crudgen`` and ``python -m crudgen``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        code = args.handler(args)
    except (ConfigError, StubNotFoundError) as exc:
        print_error(escape(str(exc)))
        code = EXIT_ERROR
    except OSError as exc:
        print_error(f"Could not write files: {escape(str(exc))}")
        code = EXIT_ERROR

    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
