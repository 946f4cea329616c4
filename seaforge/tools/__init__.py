"""External tool adapters: SEA compiler, postject patcher, AppX registrar.

Each tool is reached through a small Protocol so the pipeline can be driven
by deterministic fakes in tests.
"""

from seaforge.tools.base import (
    BuildToolError,
    Compiler,
    Patcher,
    PatchToolError,
    RegistrationError,
    Registrar,
    ToolError,
    ToolResult,
    run_tool,
)
from seaforge.tools.compiler import SeaCompiler
from seaforge.tools.patcher import PostjectPatcher
from seaforge.tools.registrar import AppxRegistrar, developer_mode_enabled

__all__ = [
    "Compiler",
    "Patcher",
    "Registrar",
    "ToolError",
    "BuildToolError",
    "PatchToolError",
    "RegistrationError",
    "ToolResult",
    "run_tool",
    "SeaCompiler",
    "PostjectPatcher",
    "AppxRegistrar",
    "developer_mode_enabled",
]
