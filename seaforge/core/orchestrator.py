"""Pipeline orchestrator — wires the build steps into one fail-fast run.

Order of a run:

    environment check -> stage script -> assemble (build blob, embed if changed)
        -> register identity (only after a real embed) -> launch artifact

Every collaborator is injectable so tests can substitute fakes for the
compiler, patcher, registrar and launcher.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

from seaforge.config import ForgeSettings
from seaforge.core.assembler import ArtifactAssembler
from seaforge.core.builder import BlobBuilder
from seaforge.core.environment import EnvironmentGuard
from seaforge.core.launcher import ArtifactExitError, Launcher
from seaforge.core.pipeline import PipelineMachine, StageFailedError
from seaforge.core.stager import stage_script
from seaforge.models.build import AssembleResult, BuildWorkspace, ManifestContext
from seaforge.models.pipeline import PipelineReport, PipelineState
from seaforge.tools.base import Compiler, Patcher, Registrar
from seaforge.tools.compiler import SeaCompiler
from seaforge.tools.patcher import PostjectPatcher
from seaforge.tools.registrar import AppxRegistrar

logger = logging.getLogger(__name__)


def process_exit_code(code: int) -> int:
    """Map a child return code to a process exit status (signals -> 128+N)."""
    return 128 - code if code < 0 else code


class Orchestrator:
    """Runs the build-register-launch pipeline for one workspace.

    Parameters
    ----------
    settings:
        Build settings. Uses environment-driven defaults if not provided.
    compiler, patcher, registrar, launcher, guard:
        Collaborator overrides. Defaults are the real subprocess-backed
        implementations built from *settings*.
    """

    def __init__(
        self,
        settings: ForgeSettings | None = None,
        *,
        compiler: Compiler | None = None,
        patcher: Patcher | None = None,
        registrar: Registrar | None = None,
        launcher: Launcher | None = None,
        guard: EnvironmentGuard | None = None,
    ) -> None:
        self.settings = settings or ForgeSettings()
        s = self.settings

        self.workspace = BuildWorkspace(
            root=Path(s.workspace_dir).resolve(),
            artifact_name=s.artifact_name,
        )
        self.source_script = Path(s.source_script)
        self.manifest_context = ManifestContext(
            manifest_path=s.manifest_path, working_dir=Path.cwd()
        )

        self._guard = guard or EnvironmentGuard(
            s.target_platform, s.runtime_executable, s.min_runtime_major
        )
        self._assembler = ArtifactAssembler(
            BlobBuilder(compiler or SeaCompiler(s.runtime_executable)),
            patcher or PostjectPatcher(s.patcher_command),
        )
        self._registrar = registrar or AppxRegistrar(s.registrar_shell)
        self._launcher = launcher or Launcher()

        self.machine = PipelineMachine()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @contextmanager
    def _stage(self, stage: str, message: str) -> Iterator[None]:
        """Wrap a step: log, mark the run FAILED and re-raise with context."""
        try:
            yield
        except Exception as exc:
            exit_code = 1
            if isinstance(exc, ArtifactExitError):
                exit_code = process_exit_code(exc.exit_code)
            logger.error("%s: %s", message, exc)
            self.machine.fail(f"{stage}: {exc}")
            raise StageFailedError(stage, f"{message}: {exc}", exit_code=exit_code) from exc

    def host_binary(self) -> Path:
        """The executable copied as the base of the final artifact."""
        if self.settings.host_binary is not None:
            return Path(self.settings.host_binary)
        found = shutil.which(self.settings.runtime_executable)
        if found is None:
            raise FileNotFoundError(
                f"Host binary {self.settings.runtime_executable!r} not found on PATH"
            )
        return Path(found)

    # ------------------------------------------------------------------
    # Run lifecycle
    # ------------------------------------------------------------------

    def build(self) -> AssembleResult:
        """Stage, assemble and, if the artifact changed, register it."""
        self.machine = PipelineMachine()

        with self._stage("environment", "Unsupported environment"):
            self._guard.check()

        with self._stage("stage", "Error staging script"):
            stage_script(self.workspace, self.source_script)
        self.machine.advance(PipelineState.STAGED, str(self.workspace.script_path))

        with self._stage("assemble", "Error creating executable"):
            result = self._assembler.assemble(self.workspace, self.host_binary())
        self.machine.advance(
            PipelineState.BUILT if result.rebuilt else PipelineState.SKIPPED,
            result.new_digest,
        )

        # Skip identity registration if the executable wasn't updated.
        if result.rebuilt:
            logger.info("Registering AppX package")
            with self._stage("register", "Error registering AppX package"):
                self._registrar.register(self.manifest_context)
            self.machine.advance(PipelineState.REGISTERED)

        return result

    def run(self, args: Sequence[str] = ()) -> PipelineReport:
        """Build, then launch the artifact with *args* and wait for it."""
        result = self.build()

        self.machine.advance(PipelineState.RUNNING)
        with self._stage("launch", "Packaged executable failed"):
            exit_code = self._launcher.run(self.workspace.artifact_path, list(args))
        self.machine.advance(PipelineState.DONE, f"exit_code={exit_code}")

        return PipelineReport(
            exit_code=exit_code,
            rebuilt=result.rebuilt,
            registered=result.rebuilt,
            digest=result.new_digest,
            transitions=self.machine.history,
        )
