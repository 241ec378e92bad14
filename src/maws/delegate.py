"""Launch the wrapped AWS CLI with session credentials injected."""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from collections.abc import Mapping, Sequence

from maws.credentials.models import SessionCredential
from maws.errors import DelegationFailedError

logger = logging.getLogger(__name__)

_SIGNAL_EXIT_BASE = 128


def build_environment(
    cred: SessionCredential,
    base: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Return a new environment map: ``base`` (default ``os.environ``) plus the credentials."""
    env = dict(os.environ if base is None else base)
    env.update(cred.env_overrides())
    return env


def export_shell(cred: SessionCredential) -> str:
    """Format the credentials as ``export`` statements for ``eval``."""
    return "\n".join(
        f"export {name}={shlex.quote(value)}" for name, value in cred.env_overrides().items()
    )


class ProcessDelegator:
    def __init__(self, command: str) -> None:
        self._command = command

    def delegate(self, cred: SessionCredential, args: Sequence[str]) -> int:
        """Run the wrapped command to completion and return its exit status.

        A normal exit code is returned unchanged; death by signal N becomes
        128 + N, as a shell would report it.
        """
        cmd = [self._command, *args]
        logger.debug("Delegating to %s with %d argument(s)", self._command, len(args))
        try:
            result = subprocess.run(cmd, env=build_environment(cred), check=False)
        except OSError as exc:
            raise DelegationFailedError(f"run {self._command}: {exc}") from exc
        if result.returncode < 0:
            # Killed by a signal: report it the way a shell does.
            logger.debug("%s killed by signal %d", self._command, -result.returncode)
            return _SIGNAL_EXIT_BASE - result.returncode
        logger.debug("%s exited with %d", self._command, result.returncode)
        return result.returncode
