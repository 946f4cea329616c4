"""AppX loose-file registration to give the executable a package identity.

Requires Windows Developer Mode. Useful commands when debugging::

    Add-AppxPackage -Register AppxManifest.xml -ForceUpdateFromAnyVersion
    Get-AppxPackage -Name <Publisher.PackageName>
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable

from seaforge.models.build import ManifestContext
from seaforge.tools.base import RegistrationError, run_tool

logger = logging.getLogger(__name__)

_APP_MODEL_UNLOCK_KEY = r"SOFTWARE\Microsoft\Windows\CurrentVersion\AppModelUnlock"
_DEV_MODE_VALUE = "AllowDevelopmentWithoutDevLicense"


def developer_mode_enabled() -> bool | None:
    """Return whether Windows Developer Mode is on.

    ``None`` means the state cannot be determined (not Windows, or the
    registry key is absent or unreadable).
    """
    if sys.platform != "win32":
        return None

    import winreg

    try:
        with winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, _APP_MODEL_UNLOCK_KEY) as key:
            value, _ = winreg.QueryValueEx(key, _DEV_MODE_VALUE)
    except OSError:
        return None
    return value == 1


class AppxRegistrar:
    """Registers an AppX manifest through PowerShell ``Add-AppxPackage``.

    ``-ForceUpdateFromAnyVersion`` keeps re-registration idempotent even when
    the manifest version did not change.

    Parameters
    ----------
    shell:
        The PowerShell executable.
    dev_mode_check:
        Returns True/False for Developer Mode, or None when unknown.
    """

    def __init__(
        self,
        shell: str = "powershell.exe",
        *,
        dev_mode_check: Callable[[], bool | None] = developer_mode_enabled,
    ) -> None:
        self.shell = shell
        self._dev_mode_check = dev_mode_check

    def build_command(self, manifest_context: ManifestContext) -> list[str]:
        script = (
            f"Add-AppxPackage -Register '{manifest_context.manifest_path}' "
            "-ForceUpdateFromAnyVersion"
        )
        return [self.shell, "-NoProfile", "-NonInteractive", "-Command", script]

    def register(self, manifest_context: ManifestContext) -> None:
        dev_mode = self._dev_mode_check()
        if dev_mode is False:
            raise RegistrationError(
                "Windows Developer Mode is disabled; enable it to register "
                "unpackaged AppX manifests."
            )
        if dev_mode is None:
            logger.warning("Could not determine Developer Mode state; trying anyway")

        manifest = manifest_context.resolved_manifest
        if not manifest.is_file():
            raise RegistrationError(f"AppX manifest not found: {manifest}")

        # If this fails with a version conflict, bump Version in the manifest.
        run_tool(
            self.build_command(manifest_context),
            cwd=manifest_context.working_dir,
            error_cls=RegistrationError,
        )
