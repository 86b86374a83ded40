"""crudgen scaffolder -- binds a resolved spec to stubs and writes Laravel code.

Takes a :class:`~crudgen.parser.CrudSpec` and a
:class:`~crudgen.config.GeneratorConfig` and renders the model, migration,
repository pair, service, controllers, form requests, Blade views and route
registrations for one entity.

Quick usage::

    from crudgen.config import GeneratorConfig
    from crudgen.parser import parse_spec
    from crudgen.scaffolder import CrudGenerator

    spec = parse_spec("Product", "name:string,price:decimal")
    report = CrudGenerator(GeneratorConfig(base_path="/srv/shop")).generate(spec)
    for result in report.results:
        print(result.kind, result.status.value, result.path)
"""

from crudgen.scaffolder.generator import Artifact, ArtifactKind, CrudGenerator
from crudgen.scaffolder.publisher import publish_stubs
from crudgen.scaffolder.results import ArtifactResult, ArtifactStatus, GenerationReport
from crudgen.scaffolder.templates import StubNotFoundError, TemplateRenderer

__all__ = [
    "CrudGenerator",
    "Artifact",
    "ArtifactKind",
    "ArtifactResult",
    "ArtifactStatus",
    "GenerationReport",
    "StubNotFoundError",
    "TemplateRenderer",
    "publish_stubs",
]
