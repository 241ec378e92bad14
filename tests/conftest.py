from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from maws import config
from maws.credentials.models import SessionCredential

_MAWS_ENV_KEYS = ("MAWS_PROFILE", "MAWS_DATA_DIR", "MAWS_AWS_CLI", "LOG_LEVEL", "LOG_FILE")


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    # Never read the developer's real environment, .env or data directory.
    for key in _MAWS_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg"))
    monkeypatch.setattr(config, "load_dotenv", lambda **_: None)
    config._load_settings_cached.cache_clear()
    yield
    config._load_settings_cached.cache_clear()


def _make_credential(
    expiration: datetime | None = None,
    access_key_id: str = "ASIAEXAMPLEKEY123",
) -> SessionCredential:
    expires_at = expiration or (
        datetime.now(timezone.utc).replace(microsecond=0) + timedelta(hours=12)
    )
    return SessionCredential(
        access_key_id=access_key_id,
        secret_access_key="secret/with+chars",
        session_token="session-token-value",
        expiration=expires_at,
    )


@pytest.fixture
def credential() -> SessionCredential:
    return _make_credential()


@pytest.fixture
def cache_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "maws" / "session-token.json"


@pytest.fixture
def make_credential() -> Callable[..., SessionCredential]:
    return _make_credential
