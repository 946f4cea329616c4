"""Script staging — writes the runtime-loadable script into the workspace.

The staged script is the user's script wrapped in an entry function that
receives a frozen bootstrap object, so packaged code reads its settings from
a parameter instead of process-wide globals::

    const __seaforgeBootstrap = Object.freeze({"packaged": true, "sourceRoot": "..."});
    (function (bootstrap) {
    <original script>
    })(__seaforgeBootstrap);
"""

from __future__ import annotations

import logging
from pathlib import Path

from seaforge.models.build import BootstrapContext, BuildWorkspace

logger = logging.getLogger(__name__)

BOOTSTRAP_BINDING = "__seaforgeBootstrap"


def render_bootstrap(context: BootstrapContext, source: str) -> str:
    """Return preamble + *source* wrapped in the bootstrap entry function."""
    preamble = (
        f"const {BOOTSTRAP_BINDING} = Object.freeze({context.to_script_literal()});\n"
        "(function (bootstrap) {\n"
    )
    if not source.endswith("\n"):
        source += "\n"
    return f"{preamble}{source}}})({BOOTSTRAP_BINDING});\n"


def stage_script(workspace: BuildWorkspace, source_script: Path) -> Path:
    """Write the bootstrapped copy of *source_script* into *workspace*.

    Creates the workspace if needed and overwrites any previously staged
    script. Filesystem errors propagate as ``OSError``.
    """
    workspace.root.mkdir(parents=True, exist_ok=True)

    source_path = Path(source_script).resolve()
    source = source_path.read_text(encoding="utf-8")
    context = BootstrapContext(packaged=True, source_root=source_path.parent)

    staged = workspace.script_path
    staged.write_text(render_bootstrap(context, source), encoding="utf-8")
    logger.info("Staged %s -> %s", source_path, staged)
    return staged
