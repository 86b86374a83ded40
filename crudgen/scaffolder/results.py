"""Outcome models for a generation pass.

Every artifact the generator touches yields one :class:`ArtifactResult`; a
:class:`GenerationReport` collects them in emission order together with the
spec diagnostics, so the CLI (and tests) can see exactly what happened
without re-reading the file system.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, computed_field

from crudgen.parser.models import SpecIssue


class ArtifactStatus(str, Enum):
    """What happened to one destination file."""
    CREATED = "created"      # written (new file or overwrite)
    SKIPPED = "skipped"      # shared artifact already present
    APPENDED = "appended"    # route snippet added to an existing file
    MISSING = "missing"      # route file absent, nothing written


class ArtifactResult(BaseModel):
    """Outcome for a single artifact."""

    kind: str = Field(..., description="Artifact kind, e.g. 'model' or 'views/index'")
    path: Path = Field(..., description="Destination path")
    status: ArtifactStatus


class GenerationReport(BaseModel):
    """Everything a ``make-crud`` run produced, in emission order."""

    entity: str = Field(..., description="Studly model name, e.g. 'BlogPost'")
    results: list[ArtifactResult] = Field(default_factory=list)
    issues: list[SpecIssue] = Field(default_factory=list)
    used_default_fields: bool = False

    def add(self, kind: str, path: Path, status: ArtifactStatus) -> ArtifactResult:
        result = ArtifactResult(kind=kind, path=path, status=status)
        self.results.append(result)
        return result

    def get(self, kind: str) -> ArtifactResult | None:
        for result in self.results:
            if result.kind == kind:
                return result
        return None

    def with_status(self, status: ArtifactStatus) -> list[ArtifactResult]:
        return [r for r in self.results if r.status is status]

    @computed_field  # type: ignore[misc]
    @property
    def written(self) -> int:
        """Files created or appended to."""
        return sum(
            1 for r in self.results
            if r.status in (ArtifactStatus.CREATED, ArtifactStatus.APPENDED)
        )
