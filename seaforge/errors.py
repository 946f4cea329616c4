"""Root of the seaforge error hierarchy.

Concrete errors live beside the code that raises them; filesystem failures
are left as the builtin ``OSError``.
"""

from __future__ import annotations


class SeaforgeError(RuntimeError):
    """Base class for pipeline failures."""
