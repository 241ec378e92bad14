"""Tests for SessionCredential and the AWS CLI JSON documents."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from maws.credentials.models import (
    MFADeviceList,
    SessionCredential,
    SessionTokenDocument,
)

_NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


def _response(expiration: object = "2026-10-20T00:00:00+00:00") -> dict[str, object]:
    return {
        "Credentials": {
            "AccessKeyId": "ASIAEXAMPLE",
            "SecretAccessKey": "secret",
            "SessionToken": "token",
            "Expiration": expiration,
        }
    }


class TestSessionCredential:
    def test_expired_at_exact_expiration(self, make_credential) -> None:
        assert make_credential(expiration=_NOW).is_expired(_NOW)

    def test_expired_in_past(self, make_credential) -> None:
        assert make_credential(expiration=_NOW - timedelta(seconds=1)).is_expired(_NOW)

    def test_valid_one_second_before(self, make_credential) -> None:
        assert not make_credential(expiration=_NOW + timedelta(seconds=1)).is_expired(_NOW)

    def test_expiry_compares_instants_across_offsets(self, make_credential) -> None:
        tokyo = timezone(timedelta(hours=9))
        cred = make_credential(expiration=datetime(2026, 10, 19, 21, 0, 1, tzinfo=tokyo))
        assert not cred.is_expired(_NOW)

    def test_repr_hides_secrets(self, credential: SessionCredential) -> None:
        text = repr(credential)
        assert credential.secret_access_key not in text
        assert credential.session_token not in text
        assert credential.access_key_id not in text
        assert "ASIAEXAM***" in text

    def test_env_overrides(self, credential: SessionCredential) -> None:
        assert credential.env_overrides() == {
            "AWS_ACCESS_KEY_ID": credential.access_key_id,
            "AWS_SECRET_ACCESS_KEY": credential.secret_access_key,
            "AWS_SESSION_TOKEN": credential.session_token,
        }


class TestSessionTokenDocument:
    def test_parses_get_session_token_response(self) -> None:
        cred = SessionTokenDocument.model_validate(_response()).to_credential()

        assert cred.access_key_id == "ASIAEXAMPLE"
        assert cred.secret_access_key == "secret"
        assert cred.session_token == "token"
        assert cred.expiration == datetime(2026, 10, 20, tzinfo=timezone.utc)

    def test_json_uses_aws_field_names_and_layout(self, make_credential) -> None:
        tz = timezone(timedelta(hours=-7))
        cred = make_credential(expiration=datetime(2026, 1, 2, 15, 4, 5, tzinfo=tz))

        data = json.loads(SessionTokenDocument.from_credential(cred).to_json())

        assert data == {
            "Credentials": {
                "AccessKeyId": cred.access_key_id,
                "SecretAccessKey": cred.secret_access_key,
                "SessionToken": cred.session_token,
                "Expiration": "2026-01-02T15:04:05-07:00",
            }
        }

    def test_ignores_extra_fields(self) -> None:
        payload = _response()
        payload["ResponseMetadata"] = {"RequestId": "abc"}
        assert SessionTokenDocument.model_validate(payload).credentials.session_token == "token"

    @pytest.mark.parametrize(
        "expiration",
        ["2026-10-20T00:00:00", "2026-10-20", 1700000000, None, "tomorrow"],
    )
    def test_rejects_bad_expiration(self, expiration: object) -> None:
        with pytest.raises(ValidationError):
            SessionTokenDocument.model_validate(_response(expiration))

    def test_rejects_missing_fields(self) -> None:
        payload = _response()
        del payload["Credentials"]["SessionToken"]  # type: ignore[attr-defined]
        with pytest.raises(ValidationError):
            SessionTokenDocument.model_validate(payload)


class TestMFADeviceList:
    def test_preserves_order(self) -> None:
        listing = MFADeviceList.model_validate(
            {
                "MFADevices": [
                    {"UserName": "me", "SerialNumber": "arn:aws:iam::1:mfa/first"},
                    {"UserName": "me", "SerialNumber": "arn:aws:iam::1:mfa/second"},
                ]
            }
        )
        assert [d.serial_number for d in listing.devices] == [
            "arn:aws:iam::1:mfa/first",
            "arn:aws:iam::1:mfa/second",
        ]

    def test_requires_devices_key(self) -> None:
        with pytest.raises(ValidationError):
            MFADeviceList.model_validate({"Devices": []})
