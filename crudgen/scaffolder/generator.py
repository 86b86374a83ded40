"""Main scaffolding orchestrator.

Takes a resolved :class:`CrudSpec` plus a :class:`GeneratorConfig` and writes
the complete Laravel CRUD stack for one entity: model (and the shared base
model), migration, repository contract and implementation, service, web and
API controllers, form requests, the shared layout, four Blade views and the
route registrations.

Usage::

    from crudgen.config import GeneratorConfig
    from crudgen.parser import parse_spec
    from crudgen.scaffolder import CrudGenerator

    spec = parse_spec("blog_post", "title:string,body:text", "belongsTo:Category")
    report = CrudGenerator(GeneratorConfig(base_path=project)).generate(spec)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable

from crudgen.config import GeneratorConfig
from crudgen.parser.models import CrudSpec
from crudgen.utils import append_file, write_file

from . import bindings
from .results import ArtifactStatus, GenerationReport
from .templates import TemplateRenderer


MIGRATION_TIMESTAMP_FORMAT = "%Y_%m_%d_%H%M%S"


class ArtifactKind(str, Enum):
    """Every file the generator knows how to produce.

    The value doubles as the stub name (``views/index`` -> ``views/index.stub``).
    """
    BASE_MODEL = "base-model"
    MODEL = "model"
    MIGRATION = "migration"
    REPOSITORY_INTERFACE = "repository-interface"
    REPOSITORY = "repository"
    SERVICE = "service"
    CONTROLLER = "controller"
    API_CONTROLLER = "api-controller"
    STORE_REQUEST = "store-request"
    UPDATE_REQUEST = "update-request"
    LAYOUT = "layouts/app"
    VIEW_INDEX = "views/index"
    VIEW_CREATE = "views/create"
    VIEW_EDIT = "views/edit"
    VIEW_SHOW = "views/show"
    WEB_ROUTES = "routes/web"
    API_ROUTES = "routes/api"


VIEW_KINDS: tuple[ArtifactKind, ...] = (
    ArtifactKind.VIEW_INDEX,
    ArtifactKind.VIEW_CREATE,
    ArtifactKind.VIEW_EDIT,
    ArtifactKind.VIEW_SHOW,
)


@dataclass
class Artifact:
    """One planned write: which stub, where, and with what substitutions."""

    kind: ArtifactKind
    path: Path
    replacements: dict[str, str] = field(default_factory=dict)
    skip_if_exists: bool = False
    append: bool = False

    @property
    def stub(self) -> str:
        return self.kind.value


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class CrudGenerator:
    """Binds a :class:`CrudSpec` to the stubs and writes the results.

    Args:
        config: Destination layout and namespace.
        renderer: Stub renderer.  Defaults to one that prefers the project's
            published stubs (``config.stubs_dir``) over the bundled ones.
        clock: Returns the time stamped into the migration filename.
    """

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        renderer: TemplateRenderer | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.config = config or GeneratorConfig()
        self.renderer = renderer or TemplateRenderer(override_dir=self.config.stubs_dir)
        self.clock = clock

    # -- Public API --------------------------------------------------------

    def generate(self, spec: CrudSpec) -> GenerationReport:
        """Write every artifact for *spec* and report what happened.

        Writes are not transactional: if a stub is missing or a write fails,
        the exception propagates and the files already written stay on disk.
        """
        report = GenerationReport(
            entity=spec.names.studly,
            issues=list(spec.issues),
            used_default_fields=spec.used_default_fields,
        )
        for artifact in self.plan(spec):
            status = self.emit(artifact)
            report.add(artifact.kind.value, artifact.path, status)
        return report

    def plan(self, spec: CrudSpec) -> list[Artifact]:
        """Every artifact for *spec*, in emission order."""
        context = self._build_context(spec)
        return [
            self._base_model(context),
            self._model(spec, context),
            self._migration(spec, context),
            *self._repositories(spec, context),
            self._service(spec, context),
            *self._controllers(spec, context),
            *self._requests(spec, context),
            self._layout(),
            *self._views(spec, context),
            *self._routes(context),
        ]

    def emit(self, artifact: Artifact) -> ArtifactStatus:
        """Render and write one artifact."""
        if artifact.append:
            if not artifact.path.is_file():
                return ArtifactStatus.MISSING
            append_file(artifact.path, self.renderer.render(artifact.stub, artifact.replacements))
            return ArtifactStatus.APPENDED

        if artifact.skip_if_exists and artifact.path.exists():
            return ArtifactStatus.SKIPPED

        write_file(artifact.path, self.renderer.render(artifact.stub, artifact.replacements))
        return ArtifactStatus.CREATED

    # -- Context building --------------------------------------------------

    def _build_context(self, spec: CrudSpec) -> dict[str, str]:
        """Placeholders shared by every stub."""
        names = spec.names
        return {
            "namespace": self.config.namespace,
            "modelName": names.studly,
            "modelPlural": names.plural,
            "modelVariable": names.camel,
            "modelPluralVariable": names.plural_camel,
            "tableName": names.table,
            "viewPath": names.kebab,
        }

    def _path(self, setting: Path, filename: str) -> Path:
        return self.config.resolve(setting) / filename

    # -- Artifacts ---------------------------------------------------------

    def _base_model(self, context: dict[str, str]) -> Artifact:
        return Artifact(
            kind=ArtifactKind.BASE_MODEL,
            path=self._path(self.config.models_path, "BaseModel.php"),
            replacements={"namespace": context["namespace"]},
            skip_if_exists=True,
        )

    def _model(self, spec: CrudSpec, context: dict[str, str]) -> Artifact:
        namespace = self.config.namespace
        return Artifact(
            kind=ArtifactKind.MODEL,
            path=self._path(self.config.models_path, f"{spec.names.studly}.php"),
            replacements={
                **context,
                "fillable": bindings.render_fillable(spec),
                "casts": bindings.render_casts(spec),
                "relationWith": bindings.render_eager_loads(spec),
                "relations": bindings.render_relations(spec, namespace),
            },
        )

    def _migration(self, spec: CrudSpec, context: dict[str, str]) -> Artifact:
        stamp = self.clock().strftime(MIGRATION_TIMESTAMP_FORMAT)
        filename = f"{stamp}_create_{spec.names.table}_table.php"
        return Artifact(
            kind=ArtifactKind.MIGRATION,
            path=self._path(self.config.migrations_path, filename),
            replacements={
                **context,
                "migrationFields": bindings.render_migration_fields(spec),
                "foreignKeys": bindings.render_migration_foreign_keys(spec),
            },
        )

    def _repositories(self, spec: CrudSpec, context: dict[str, str]) -> list[Artifact]:
        model = spec.names.studly
        return [
            Artifact(
                kind=ArtifactKind.REPOSITORY_INTERFACE,
                path=self._path(self.config.interfaces_path, f"{model}RepositoryInterface.php"),
                replacements=dict(context),
            ),
            Artifact(
                kind=ArtifactKind.REPOSITORY,
                path=self._path(self.config.repositories_path, f"{model}Repository.php"),
                replacements={
                    **context,
                    "repositoryRelations": bindings.render_repository_relations(spec),
                },
            ),
        ]

    def _service(self, spec: CrudSpec, context: dict[str, str]) -> Artifact:
        return Artifact(
            kind=ArtifactKind.SERVICE,
            path=self._path(self.config.services_path, f"{spec.names.studly}Service.php"),
            replacements={
                **context,
                "serviceRelations": bindings.render_service_relations(spec),
            },
        )

    def _controllers(self, spec: CrudSpec, context: dict[str, str]) -> list[Artifact]:
        filename = f"{spec.names.studly}Controller.php"
        namespace = self.config.namespace
        return [
            Artifact(
                kind=ArtifactKind.CONTROLLER,
                path=self._path(self.config.controllers_path, filename),
                replacements={
                    **context,
                    "controllerRelations": bindings.render_create_action(spec, namespace),
                    "editControllerRelations": bindings.render_edit_action(spec, namespace),
                },
            ),
            Artifact(
                kind=ArtifactKind.API_CONTROLLER,
                path=self._path(self.config.api_controllers_path, filename),
                replacements=dict(context),
            ),
        ]

    def _requests(self, spec: CrudSpec, context: dict[str, str]) -> list[Artifact]:
        model = spec.names.studly
        rules = bindings.render_validation_rules(spec)
        return [
            Artifact(
                kind=ArtifactKind.STORE_REQUEST,
                path=self._path(self.config.requests_path, f"Store{model}Request.php"),
                replacements={**context, "rules": rules},
            ),
            Artifact(
                kind=ArtifactKind.UPDATE_REQUEST,
                path=self._path(self.config.requests_path, f"Update{model}Request.php"),
                replacements={**context, "rules": rules},
            ),
        ]

    def _layout(self) -> Artifact:
        return Artifact(
            kind=ArtifactKind.LAYOUT,
            path=self.config.layouts_dir / "app.blade.php",
            skip_if_exists=True,
        )

    def _views(self, spec: CrudSpec, context: dict[str, str]) -> list[Artifact]:
        view_dir = self.config.resolve(self.config.views_path) / spec.names.kebab
        fragments = {
            "fields": bindings.render_form_fields(spec),
            "relationFields": bindings.render_relation_fields(spec),
            "tableHeaders": bindings.render_table_headers(spec),
            "tableRows": bindings.render_table_rows(spec),
            "showFields": bindings.render_show_fields(spec),
        }
        artifacts: list[Artifact] = []
        for kind in VIEW_KINDS:
            view = kind.value.split("/", 1)[1]
            artifacts.append(
                Artifact(
                    kind=kind,
                    path=view_dir / f"{view}.blade.php",
                    replacements={**context, **fragments},
                )
            )
        return artifacts

    def _routes(self, context: dict[str, str]) -> list[Artifact]:
        return [
            Artifact(
                kind=ArtifactKind.WEB_ROUTES,
                path=self.config.resolve(self.config.web_routes_path),
                replacements=dict(context),
                append=True,
            ),
            Artifact(
                kind=ArtifactKind.API_ROUTES,
                path=self.config.resolve(self.config.api_routes_path),
                replacements=dict(context),
                append=True,
            ),
        ]
