"""Launches the final artifact and relays its output streams."""

from __future__ import annotations

import logging
import subprocess
import threading
from collections.abc import Sequence
from pathlib import Path
from typing import BinaryIO

from seaforge.errors import SeaforgeError

logger = logging.getLogger(__name__)

RELAY_CHUNK_SIZE = 8192


class LaunchError(SeaforgeError):
    """Raised when the artifact process cannot be started."""


class ArtifactExitError(SeaforgeError):
    """Raised when the launched artifact exits with a non-zero code.

    Negative codes mean the child was killed by that signal.
    """

    def __init__(self, exit_code: int) -> None:
        super().__init__(f"Artifact exited with exit_code={exit_code}")
        self.exit_code = exit_code


def _relay(source: BinaryIO, target: BinaryIO) -> None:
    """Copy *source* to *target* chunk by chunk until EOF, flushing each chunk."""
    for chunk in iter(lambda: source.read(RELAY_CHUNK_SIZE), b""):
        target.write(chunk)
        target.flush()
    source.close()


class Launcher:
    """Runs an executable to completion with live output relay.

    With no targets the child inherits this process's stdout/stderr, which
    is a byte-for-byte unbuffered relay. Explicit binary targets are fed by
    one pump thread per stream.

    Parameters
    ----------
    stdout, stderr:
        Optional binary streams receiving the child's output.
    """

    def __init__(
        self,
        stdout: BinaryIO | None = None,
        stderr: BinaryIO | None = None,
    ) -> None:
        self._stdout = stdout
        self._stderr = stderr

    def run(self, artifact: Path | str, args: Sequence[str] = ()) -> int:
        argv = [str(artifact), *args]
        logger.info("Running %s", argv[0])

        try:
            p = subprocess.Popen(
                argv,
                stdout=subprocess.PIPE if self._stdout is not None else None,
                stderr=subprocess.PIPE if self._stderr is not None else None,
                bufsize=0,
            )
        except OSError as exc:
            raise LaunchError(f"Could not start {argv[0]}: {exc}") from exc

        pumps = []
        if self._stdout is not None:
            pumps.append(
                threading.Thread(target=_relay, args=(p.stdout, self._stdout), daemon=True)
            )
        if self._stderr is not None:
            pumps.append(
                threading.Thread(target=_relay, args=(p.stderr, self._stderr), daemon=True)
            )
        for t in pumps:
            t.start()

        exit_code = p.wait()
        for t in pumps:
            t.join()

        if exit_code != 0:
            raise ArtifactExitError(exit_code)
        return exit_code
