"""Session credential model and the AWS CLI JSON documents it travels in."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from maws.utils.masking import mask_value
from maws.utils.time import format_aws_time, parse_aws_time, utc_now

ENV_ACCESS_KEY_ID = "AWS_ACCESS_KEY_ID"
ENV_SECRET_ACCESS_KEY = "AWS_SECRET_ACCESS_KEY"
ENV_SESSION_TOKEN = "AWS_SESSION_TOKEN"


@dataclass(frozen=True)
class SessionCredential:
    """Immutable temporary AWS credentials issued by get-session-token."""

    access_key_id: str
    secret_access_key: str
    session_token: str
    expiration: datetime

    def __repr__(self) -> str:
        return (
            f"SessionCredential(access_key_id={mask_value(self.access_key_id, 8)}, "
            f"expiration={self.expiration.isoformat()})"
        )

    def is_expired(self, now: datetime | None = None) -> bool:
        """A credential expiring exactly at ``now`` is already dead."""
        return self.expiration <= (now or utc_now())

    def env_overrides(self) -> dict[str, str]:
        return {
            ENV_ACCESS_KEY_ID: self.access_key_id,
            ENV_SECRET_ACCESS_KEY: self.secret_access_key,
            ENV_SESSION_TOKEN: self.session_token,
        }


class CredentialsDocument(BaseModel):
    """The ``Credentials`` object as printed by ``aws sts get-session-token``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    access_key_id: str = Field(alias="AccessKeyId", min_length=1)
    secret_access_key: str = Field(alias="SecretAccessKey", min_length=1)
    session_token: str = Field(alias="SessionToken", min_length=1)
    expiration: datetime = Field(alias="Expiration")

    @field_validator("expiration", mode="before")
    @classmethod
    def _parse_expiration(cls, value: Any) -> datetime:
        # Only the exact AWS layout is accepted; pydantic's own datetime
        # coercion would also take epochs and naive values.
        return parse_aws_time(value)

    @field_serializer("expiration")
    def _format_expiration(self, value: datetime) -> str:
        return format_aws_time(value)


class SessionTokenDocument(BaseModel):
    """Top-level get-session-token response; also the cache file layout."""

    model_config = ConfigDict(extra="ignore")

    credentials: CredentialsDocument = Field(alias="Credentials")

    @classmethod
    def from_credential(cls, cred: SessionCredential) -> "SessionTokenDocument":
        return cls(
            Credentials=CredentialsDocument(
                AccessKeyId=cred.access_key_id,
                SecretAccessKey=cred.secret_access_key,
                SessionToken=cred.session_token,
                Expiration=format_aws_time(cred.expiration),
            )
        )

    def to_credential(self) -> SessionCredential:
        creds = self.credentials
        return SessionCredential(
            access_key_id=creds.access_key_id,
            secret_access_key=creds.secret_access_key,
            session_token=creds.session_token,
            expiration=creds.expiration,
        )

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)


class MFADevice(BaseModel):
    model_config = ConfigDict(extra="ignore")

    serial_number: str = Field(alias="SerialNumber", min_length=1)


class MFADeviceList(BaseModel):
    """Response of ``aws iam list-mfa-devices``."""

    model_config = ConfigDict(extra="ignore")

    devices: list[MFADevice] = Field(alias="MFADevices")
