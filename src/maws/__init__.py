"""maws: MFA session-credential cache for the AWS CLI."""

__version__ = "0.1.0"
