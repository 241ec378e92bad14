"""Interactive MFA renewal: discover the device, exchange a one-time code."""

from __future__ import annotations

import enum
import logging
from datetime import datetime
from typing import Callable

import click

from maws.credentials.aws_cli import AWSCLIRunner
from maws.credentials.cache import CredentialCache
from maws.credentials.models import SessionCredential
from maws.errors import NoMFADeviceError, RenewalFailedError
from maws.utils.time import utc_now

logger = logging.getLogger(__name__)

TokenPrompt = Callable[[str], str]


class RenewalState(enum.Enum):
    START = "start"
    DEVICE_DISCOVERED = "device_discovered"
    CODE_ENTERED = "code_entered"
    CREDENTIAL_ISSUED = "credential_issued"
    PERSISTED = "persisted"
    FAILED = "failed"


def prompt_token_code(serial_number: str) -> str:
    """Read one line from stdin; the prompt itself goes to stderr."""
    logger.debug("Prompting for one-time code for %s", serial_number)
    code = click.prompt("OTP", default="", show_default=False, prompt_suffix=": ", err=True)
    return code.strip()


class MFARenewal:
    """Always performs a full refresh; never consults the cache."""

    def __init__(
        self,
        runner: AWSCLIRunner,
        cache: CredentialCache,
        prompt: TokenPrompt = prompt_token_code,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._runner = runner
        self._cache = cache
        self._prompt = prompt
        self._clock = clock
        self.state = RenewalState.START

    def renew(self) -> SessionCredential:
        self._transition(RenewalState.START)
        try:
            serial_number = self._discover_device()
            self._transition(RenewalState.DEVICE_DISCOVERED)

            token_code = self._prompt(serial_number)
            self._transition(RenewalState.CODE_ENTERED)

            cred = self._runner.get_session_token(serial_number, token_code).to_credential()
            if cred.is_expired(self._clock()):
                raise RenewalFailedError(
                    f"get-session-token returned credentials that already expired at "
                    f"{cred.expiration.isoformat()}"
                )
            self._transition(RenewalState.CREDENTIAL_ISSUED)

            self._cache.persist(cred)
        except BaseException:
            self._transition(RenewalState.FAILED)
            raise

        self._transition(RenewalState.PERSISTED)
        logger.info("Renewed session for profile %s: %r", self._runner.profile, cred)
        return cred

    def _discover_device(self) -> str:
        serials = self._runner.list_mfa_devices()
        if not serials:
            raise NoMFADeviceError(
                f"no MFA devices configured for profile {self._runner.profile}"
            )
        if len(serials) > 1:
            logger.info("Found %d MFA devices, using the first: %s", len(serials), serials[0])
        return serials[0]

    def _transition(self, state: RenewalState) -> None:
        logger.debug("Renewal state %s -> %s", self.state.value, state.value)
        self.state = state
