"""Application-level exception types for authpay."""

from __future__ import annotations


class AuthPayError(Exception):
    """Base exception for authpay."""


class ConfigurationError(AuthPayError):
    """Raised when settings are missing or invalid."""


class UnknownActionError(AuthPayError):
    """Raised when an action key is not in the catalog."""


class ProofUnavailableError(AuthPayError):
    """Raised when a paid request has no payment proof to attach."""
