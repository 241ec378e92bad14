"""Returns a valid session credential, renewing it when needed."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from maws.credentials.cache import CredentialCache
from maws.credentials.models import SessionCredential
from maws.credentials.renewal import MFARenewal
from maws.utils.time import utc_now

logger = logging.getLogger(__name__)


class CredentialSource:
    def __init__(
        self,
        cache: CredentialCache,
        renewal: MFARenewal,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._cache = cache
        self._renewal = renewal
        self._clock = clock

    def obtain(self) -> SessionCredential:
        # CorruptCacheError propagates: a broken file is not the same as no file.
        cred = self._cache.load()
        if cred is None:
            logger.info("No cached session, renewing")
            return self._renewal.renew()
        if cred.is_expired(self._clock()):
            logger.info("Cached session expired at %s, renewing", cred.expiration.isoformat())
            return self._renewal.renew()
        return cred
