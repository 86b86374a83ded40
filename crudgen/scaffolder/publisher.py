"""Copy the bundled stubs into a project for customisation.

Once published, the generator picks up the project's copies first (see
:class:`~crudgen.scaffolder.templates.TemplateRenderer`), so editing
``stubs/crud-generator/model.stub`` changes every model generated afterwards.
"""

from __future__ import annotations

import shutil

from crudgen.config import GeneratorConfig
from crudgen.utils import ensure_dir

from .results import ArtifactResult, ArtifactStatus
from .templates import STUB_SUFFIX, TemplateRenderer


def publish_stubs(
    config: GeneratorConfig,
    force: bool = False,
    renderer: TemplateRenderer | None = None,
) -> list[ArtifactResult]:
    """Copy every bundled stub to ``config.stubs_dir``.

    Existing files are left alone (``skipped``) unless *force* is set.

    Returns:
        One result per bundled stub, in name order.
    """
    renderer = renderer or TemplateRenderer()
    target_root = config.stubs_dir
    results: list[ArtifactResult] = []

    for name, source in renderer.bundled_stub_files():
        target = target_root / name
        kind = name[: -len(STUB_SUFFIX)]
        if target.exists() and not force:
            results.append(ArtifactResult(kind=kind, path=target, status=ArtifactStatus.SKIPPED))
            continue
        ensure_dir(target.parent)
        shutil.copyfile(source, target)
        results.append(ArtifactResult(kind=kind, path=target, status=ArtifactStatus.CREATED))

    return results
