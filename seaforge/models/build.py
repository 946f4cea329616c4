"""Workspace layout and build artifact models."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class BuildConfig(BaseModel):
    """Input/output record read by the SEA compiler.

    Serialized with its wire names: ``{"main": ..., "output": ...}``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    entry_file: str = Field(alias="main")
    output_file: str = Field(alias="output")

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


class BuildWorkspace(BaseModel):
    """Directory holding every intermediate and final artifact of a build.

    The workspace persists between builds; the blob left by the previous run
    is what makes the embedding step skippable.
    """

    model_config = ConfigDict(frozen=True)

    root: Path
    script_name: str = "main.js"
    config_name: str = "sea-config.json"
    blob_name: str = "sea-prep.blob"
    artifact_name: str = "seaforge-app.exe"

    @property
    def script_path(self) -> Path:
        return self.root / self.script_name

    @property
    def config_path(self) -> Path:
        return self.root / self.config_name

    @property
    def blob_path(self) -> Path:
        return self.root / self.blob_name

    @property
    def artifact_path(self) -> Path:
        return self.root / self.artifact_name

    @property
    def build_config(self) -> BuildConfig:
        return BuildConfig(entry_file=self.script_name, output_file=self.blob_name)


class BootstrapContext(BaseModel):
    """Configuration handed to the staged script's entry function."""

    model_config = ConfigDict(frozen=True)

    packaged: bool = True
    source_root: Path

    def to_script_literal(self) -> str:
        """Render as a JSON object literal using the script's camelCase keys."""
        return json.dumps(
            {"packaged": self.packaged, "sourceRoot": str(self.source_root)}
        )


class AssembleResult(BaseModel):
    """Outcome of one assemble pass."""

    model_config = ConfigDict(frozen=True)

    rebuilt: bool
    previous_digest: str | None = None
    new_digest: str


class ManifestContext(BaseModel):
    """Locates the AppX manifest used for identity registration."""

    model_config = ConfigDict(frozen=True)

    manifest_path: Path = Path("AppxManifest.xml")
    working_dir: Path = Path(".")

    @property
    def resolved_manifest(self) -> Path:
        if self.manifest_path.is_absolute():
            return self.manifest_path
        return self.working_dir / self.manifest_path
