"""Seaforge: incremental single-executable builder with AppX identity.

Stages a script into a Node.js single executable application (SEA) blob,
embeds the blob into a copy of the runtime only when the blob's content
changed, registers the result as an AppX package so it carries an identity,
and launches it.
"""

__version__ = "0.1.0"
__description__ = (
    "Incremental single-executable build pipeline with AppX identity registration"
)

from seaforge.core.orchestrator import Orchestrator
from seaforge.cli.app import app as cli

__all__ = ["Orchestrator", "cli", "__version__"]
