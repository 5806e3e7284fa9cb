"""Custom exceptions for SplitLedger."""

from .models import SplitIssue


class SplitLedgerError(Exception):
    """Base exception for all SplitLedger errors."""

    pass


class ConfigurationError(SplitLedgerError):
    """Raised when configuration is invalid or missing."""

    pass


class LedgerFileError(SplitLedgerError):
    """Raised when a ledger file cannot be read or parsed."""

    def __init__(self, path: str, message: str | None = None):
        self.path = path
        super().__init__(message or f"Could not load ledger from {path}")


class UnknownCurrencyError(SplitLedgerError):
    """Raised when a currency code is not in the currency table."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Unknown currency code: {code}")


class SplitValidationError(SplitLedgerError):
    """Raised in strict mode when transaction splits are malformed."""

    def __init__(self, issues: list[SplitIssue], message: str | None = None):
        self.issues = issues
        if message is None:
            lines = [f"{len(issues)} split issue(s) found:"]
            lines.extend(f"  - {issue.message}" for issue in issues)
            message = "\n".join(lines)
        super().__init__(message)
