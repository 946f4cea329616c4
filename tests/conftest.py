"""Shared test fixtures and tool fakes for seaforge."""

from __future__ import annotations

import json
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from seaforge.config import ForgeSettings
from seaforge.core.environment import EnvironmentGuard
from seaforge.core.launcher import ArtifactExitError
from seaforge.core.orchestrator import Orchestrator
from seaforge.models.build import BuildWorkspace, ManifestContext
from seaforge.tools.base import BuildToolError, PatchToolError, RegistrationError


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeCompiler:
    """Writes ``payload`` to the config's output file instead of compiling."""

    def __init__(self, payload: bytes = b"blob-v1", *, fail: bool = False) -> None:
        self.payload = payload
        self.fail = fail
        self.calls: list[tuple[Path, str]] = []

    def compile(self, workspace_dir: Path, config_file: str) -> None:
        self.calls.append((workspace_dir, config_file))
        if self.fail:
            raise BuildToolError("compiler exploded", stderr="boom", returncode=1)
        config = json.loads((workspace_dir / config_file).read_text(encoding="utf-8"))
        (workspace_dir / config["output"]).write_bytes(self.payload)


class FakePatcher:
    """Appends the blob to the artifact, the way injection grows the binary."""

    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.calls: list[dict[str, Any]] = []

    def patch(
        self,
        workspace_dir: Path,
        artifact_name: str,
        resource_id: str,
        blob_name: str,
        sentinel: str,
    ) -> None:
        self.calls.append(
            {
                "artifact_name": artifact_name,
                "resource_id": resource_id,
                "blob_name": blob_name,
                "sentinel": sentinel,
            }
        )
        if self.fail:
            raise PatchToolError("postject failed", stderr="bad fuse", returncode=1)
        blob = (workspace_dir / blob_name).read_bytes()
        with open(workspace_dir / artifact_name, "ab") as fh:
            fh.write(b"|" + blob)


class FakeRegistrar:
    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.calls: list[ManifestContext] = []

    def register(self, manifest_context: ManifestContext) -> None:
        self.calls.append(manifest_context)
        if self.fail:
            raise RegistrationError("Add-AppxPackage failed", returncode=1)


class FakeLauncher:
    def __init__(self, exit_code: int = 0) -> None:
        self.exit_code = exit_code
        self.calls: list[tuple[Path, list[str]]] = []

    def run(self, artifact: Path, args: list[str]) -> int:
        self.calls.append((Path(artifact), list(args)))
        if self.exit_code != 0:
            raise ArtifactExitError(self.exit_code)
        return 0


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def workspace(tmp_path: Path) -> BuildWorkspace:
    """A not-yet-created workspace under the temp dir."""
    return BuildWorkspace(root=tmp_path / "build-tmp-msix")


@pytest.fixture
def source_script(tmp_path: Path) -> Path:
    src = tmp_path / "src" / "app.js"
    src.parent.mkdir(parents=True)
    src.write_text("console.log('hello');\n", encoding="utf-8")
    return src


@pytest.fixture
def host_binary(tmp_path: Path) -> Path:
    host = tmp_path / "node.exe"
    host.write_bytes(b"HOST-BINARY")
    return host


@pytest.fixture
def forge_settings(tmp_path: Path, source_script: Path, host_binary: Path) -> ForgeSettings:
    return ForgeSettings(
        workspace_dir=tmp_path / "build-tmp-msix",
        source_script=source_script,
        host_binary=host_binary,
        target_platform=sys.platform,
    )


@pytest.fixture
def passing_guard() -> EnvironmentGuard:
    return EnvironmentGuard(
        target_platform=sys.platform,
        runtime_executable="node",
        min_runtime_major=20,
        version_probe=lambda exe: "v20.11.1",
    )


@pytest.fixture
def fake_compiler() -> FakeCompiler:
    return FakeCompiler()


@pytest.fixture
def fake_patcher() -> FakePatcher:
    return FakePatcher()


@pytest.fixture
def fake_registrar() -> FakeRegistrar:
    return FakeRegistrar()


@pytest.fixture
def fake_launcher() -> FakeLauncher:
    return FakeLauncher()


@pytest.fixture
def make_orchestrator(
    forge_settings: ForgeSettings,
    passing_guard: EnvironmentGuard,
    fake_compiler: FakeCompiler,
    fake_patcher: FakePatcher,
    fake_registrar: FakeRegistrar,
    fake_launcher: FakeLauncher,
) -> Callable[..., Orchestrator]:
    """Factory fixture: an Orchestrator wired to the shared fakes.

    Tests tweak the fakes (payload, fail, exit_code) and read their call logs.
    """

    def _factory(**overrides: Any) -> Orchestrator:
        kwargs: dict[str, Any] = {
            "compiler": fake_compiler,
            "patcher": fake_patcher,
            "registrar": fake_registrar,
            "launcher": fake_launcher,
            "guard": passing_guard,
        }
        kwargs.update(overrides)
        settings = kwargs.pop("settings", forge_settings)
        return Orchestrator(settings, **kwargs)

    return _factory
