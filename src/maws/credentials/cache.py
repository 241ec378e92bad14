"""Durable single-record store for the current session credential."""

from __future__ import annotations

import contextlib
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from maws.credentials.models import SessionCredential, SessionTokenDocument
from maws.errors import CorruptCacheError, StorageError

logger = logging.getLogger(__name__)

_DIR_MODE = 0o700
_FILE_MODE = 0o600


class CredentialCache:
    """File-backed cache holding exactly one :class:`SessionCredential`.

    A missing file means "never renewed" and is not an error. A file that
    exists but cannot be parsed is always an error: the user has to delete it.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> SessionCredential | None:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("No cached session at %s", self._path)
            return None
        except UnicodeDecodeError as exc:
            raise CorruptCacheError(
                f"decode session token file {self._path}: not valid UTF-8; "
                "run 'maws delete-session-token' and retry"
            ) from exc
        except OSError as exc:
            raise StorageError(f"read session token file {self._path}: {exc}") from exc

        try:
            document = SessionTokenDocument.model_validate_json(raw)
        except ValidationError as exc:
            raise CorruptCacheError(
                f"decode session token file {self._path}: "
                f"{exc.error_count()} invalid field(s); "
                "run 'maws delete-session-token' and retry"
            ) from exc

        cred = document.to_credential()
        logger.debug("Loaded cached session %r", cred)
        return cred

    def persist(self, cred: SessionCredential) -> None:
        try:
            payload = SessionTokenDocument.from_credential(cred).to_json()
        except ValueError as exc:
            raise StorageError(f"encode session token for {self._path}: {exc}") from exc
        directory = self._path.parent
        try:
            directory.mkdir(mode=_DIR_MODE, parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"create data dir {directory}: {exc}") from exc

        tmp_name: str | None = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.", suffix=".tmp", dir=directory
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
                handle.write("\n")
                handle.flush()
                os.fsync(handle.fileno())
            os.chmod(tmp_name, _FILE_MODE)
            os.replace(tmp_name, self._path)
        except OSError as exc:
            if tmp_name is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
            raise StorageError(f"write session token file {self._path}: {exc}") from exc

        logger.info("Persisted session %r to %s", cred, self._path)

    def delete(self) -> None:
        try:
            self._path.unlink()
        except FileNotFoundError:
            logger.debug("No cached session to delete at %s", self._path)
            return
        except OSError as exc:
            raise StorageError(f"delete session token file {self._path}: {exc}") from exc
        logger.info("Deleted cached session %s", self._path)
