"""Session credential lifecycle: cache, MFA renewal, and the source tying them together."""

from maws.credentials.aws_cli import AWSCLIRunner
from maws.credentials.cache import CredentialCache
from maws.credentials.models import SessionCredential, SessionTokenDocument
from maws.credentials.renewal import MFARenewal, RenewalState
from maws.credentials.source import CredentialSource

__all__ = [
    "AWSCLIRunner",
    "CredentialCache",
    "CredentialSource",
    "MFARenewal",
    "RenewalState",
    "SessionCredential",
    "SessionTokenDocument",
]
