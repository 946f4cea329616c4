"""Tests for BlobBuilder — config serialization and compiler delegation."""

from __future__ import annotations

import json

import pytest

from seaforge.core.builder import BlobBuilder
from seaforge.models.build import BuildConfig, BuildWorkspace
from seaforge.tools.base import BuildToolError


class _SilentCompiler:
    def compile(self, workspace_dir, config_file):
        pass


class TestBlobBuilder:
    def test_writes_config_with_wire_names(self, workspace: BuildWorkspace, fake_compiler):
        BlobBuilder(fake_compiler).build(workspace, workspace.build_config)
        data = json.loads(workspace.config_path.read_text(encoding="utf-8"))
        assert data == {"main": "main.js", "output": "sea-prep.blob"}

    def test_invokes_compiler_in_workspace(self, workspace: BuildWorkspace, fake_compiler):
        BlobBuilder(fake_compiler).build(workspace, workspace.build_config)
        assert fake_compiler.calls == [(workspace.root, "sea-config.json")]
        assert workspace.blob_path.read_bytes() == b"blob-v1"

    def test_custom_config(self, workspace: BuildWorkspace, fake_compiler):
        config = BuildConfig(entry_file="entry.js", output_file="other.blob")
        BlobBuilder(fake_compiler).build(workspace, config)
        assert (workspace.root / "other.blob").is_file()

    def test_compiler_failure_propagates(self, workspace: BuildWorkspace, fake_compiler):
        fake_compiler.fail = True
        with pytest.raises(BuildToolError) as exc_info:
            BlobBuilder(fake_compiler).build(workspace, workspace.build_config)
        assert exc_info.value.stderr == "boom"

    def test_missing_blob_is_build_error(self, workspace: BuildWorkspace):
        with pytest.raises(BuildToolError, match="no blob"):
            BlobBuilder(_SilentCompiler()).build(workspace, workspace.build_config)


class TestBuildConfig:
    def test_accepts_wire_names(self):
        config = BuildConfig.model_validate({"main": "a.js", "output": "b.blob"})
        assert config.entry_file == "a.js"
        assert config.output_file == "b.blob"

    def test_to_json_field_order(self):
        config = BuildConfig(entry_file="a.js", output_file="b.blob")
        assert config.to_json() == '{"main":"a.js","output":"b.blob"}'
