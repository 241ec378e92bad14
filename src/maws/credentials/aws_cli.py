"""Synchronous calls to the AWS CLI used during MFA renewal."""

from __future__ import annotations

import json
import logging
import subprocess
from typing import Any

from pydantic import ValidationError

from maws.credentials.models import MFADeviceList, SessionTokenDocument
from maws.errors import RenewalFailedError
from maws.utils.masking import redact_sensitive_fields

logger = logging.getLogger(__name__)


class AWSCLIRunner:
    """Runs ``aws --profile <profile> ...`` and decodes its JSON output.

    The child's stderr goes straight to the user's terminal; stdout is
    captured for parsing. There is no timeout.
    """

    def __init__(self, command: str, profile: str) -> None:
        self._command = command
        self._profile = profile

    @property
    def profile(self) -> str:
        return self._profile

    def list_mfa_devices(self) -> list[str]:
        """Return the serial numbers of the profile's MFA devices, in API order."""
        data = self._run_json(["iam", "list-mfa-devices", "--output", "json"])
        try:
            listing = MFADeviceList.model_validate(data)
        except ValidationError as exc:
            raise RenewalFailedError(
                f"decode list-mfa-devices response: {exc.error_count()} invalid field(s)"
            ) from exc
        return [device.serial_number for device in listing.devices]

    def get_session_token(self, serial_number: str, token_code: str) -> SessionTokenDocument:
        data = self._run_json(
            [
                "sts",
                "get-session-token",
                "--serial-number",
                serial_number,
                "--token-code",
                token_code,
                "--output",
                "json",
            ]
        )
        try:
            return SessionTokenDocument.model_validate(data)
        except ValidationError as exc:
            raise RenewalFailedError(
                f"decode get-session-token response: {exc.error_count()} invalid field(s)"
            ) from exc

    def _run_json(self, args: list[str]) -> Any:
        cmd = [self._command, "--profile", self._profile, *args]
        # Subcommand only, never the full argv: it carries the one-time code.
        subcmd = " ".join(args[:2])
        logger.debug("Running %s %s (profile=%s)", self._command, subcmd, self._profile)
        try:
            result = subprocess.run(
                cmd,
                check=False,
                stdout=subprocess.PIPE,
                text=True,
            )
        except OSError as exc:
            raise RenewalFailedError(f"execute {self._command} {subcmd}: {exc}") from exc

        if result.returncode != 0:
            raise RenewalFailedError(
                f"{self._command} {subcmd} failed (exit {result.returncode})"
            )

        try:
            data = json.loads(result.stdout)
        except json.JSONDecodeError as exc:
            raise RenewalFailedError(f"decode {subcmd} response: {exc.msg}") from exc

        logger.debug("%s response: %s", subcmd, redact_sensitive_fields(data))
        return data
