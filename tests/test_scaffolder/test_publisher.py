"""Tests for stub publishing (crudgen.scaffolder.publisher)."""

from __future__ import annotations

from pathlib import Path

import pytest

from crudgen.config import GeneratorConfig
from crudgen.scaffolder import ArtifactStatus, TemplateRenderer, publish_stubs


pytestmark = pytest.mark.unit


class TestPublishStubs:
    def test_copies_every_bundled_stub(self, config: GeneratorConfig):
        results = publish_stubs(config)
        bundled = TemplateRenderer().bundled_stub_files()

        assert len(results) == len(bundled)
        assert all(r.status is ArtifactStatus.CREATED for r in results)
        for name, source in bundled:
            target = config.stubs_dir / name
            assert target.read_text(encoding="utf-8") == source.read_text(encoding="utf-8")

    def test_nested_stubs_keep_their_folders(self, config: GeneratorConfig):
        publish_stubs(config)
        assert (config.stubs_dir / "views" / "index.stub").is_file()
        assert (config.stubs_dir / "layouts" / "app.stub").is_file()

    def test_result_kinds_drop_suffix(self, config: GeneratorConfig):
        kinds = {r.kind for r in publish_stubs(config)}
        assert "model" in kinds
        assert "views/edit" in kinds

    def test_existing_files_are_kept(self, config: GeneratorConfig):
        publish_stubs(config)
        custom = config.stubs_dir / "model.stub"
        custom.write_text("mine\n", encoding="utf-8")

        results = publish_stubs(config)

        statuses = {r.kind: r.status for r in results}
        assert statuses["model"] is ArtifactStatus.SKIPPED
        assert custom.read_text(encoding="utf-8") == "mine\n"

    def test_force_overwrites(self, config: GeneratorConfig):
        publish_stubs(config)
        custom = config.stubs_dir / "model.stub"
        custom.write_text("mine\n", encoding="utf-8")

        results = publish_stubs(config, force=True)

        assert all(r.status is ArtifactStatus.CREATED for r in results)
        assert custom.read_text(encoding="utf-8") != "mine\n"

    def test_custom_stubs_path(self, laravel_project: Path):
        config = GeneratorConfig(base_path=laravel_project, stubs_path=Path("resources/stubs"))
        publish_stubs(config)
        assert (laravel_project / "resources" / "stubs" / "model.stub").is_file()
