"""Runtime configuration — env-driven.

Centralized settings using pydantic-settings. Reads from a .env file and
SEAFORGE_* environment variables.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ENTRY_SCRIPT = Path(__file__).parent / "data" / "entry.js"


class ForgeSettings(BaseSettings):
    """Build and launch settings with environment variable overrides.

    Examples
    --------
    Override via environment::

        export SEAFORGE_WORKSPACE_DIR=out/sea
        export SEAFORGE_LOG_LEVEL=DEBUG
        export SEAFORGE_RUNTIME_EXECUTABLE="C:/Program Files/nodejs/node.exe"

    Or via .env file::

        SEAFORGE_ARTIFACT_NAME=myapp.exe
        SEAFORGE_PATCHER_COMMAND='["npx", "--yes", "postject"]'
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SEAFORGE_",
        env_file_encoding="utf-8",
    )

    log_level: str = "INFO"

    # Workspace
    workspace_dir: Path = Path("build-tmp-msix")
    source_script: Path = DEFAULT_ENTRY_SCRIPT
    artifact_name: str = "seaforge-app.exe"

    # Runtime used both as compiler and as the host binary
    runtime_executable: str = "node"
    host_binary: Path | None = None
    min_runtime_major: int = 20
    target_platform: str = "win32"

    # External tools
    patcher_command: list[str] = ["npx", "postject"]
    registrar_shell: str = "powershell.exe"
    manifest_path: Path = Path("AppxManifest.xml")

