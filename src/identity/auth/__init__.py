"""Authentication provider factory.

Provides get_auth_provider() / set_auth_provider() to swap implementations.
The default is a StaticTokenAuthProvider loaded from settings.
"""

from identity.auth.port import AuthProvider, Principal
from identity.auth.static_adapter import StaticTokenAuthProvider
from shared.config import get_settings

_current_provider: AuthProvider | None = None


def get_auth_provider() -> AuthProvider:
    """Return the current auth provider. Defaults to the settings-backed static provider."""
    global _current_provider
    if _current_provider is None:
        _current_provider = StaticTokenAuthProvider.from_mapping(get_settings().auth_tokens)
    return _current_provider


def set_auth_provider(provider: AuthProvider) -> None:
    """Override the active auth provider (useful for tests)."""
    global _current_provider
    _current_provider = provider


def reset_auth_provider() -> None:
    """Reset to default provider."""
    global _current_provider
    _current_provider = None


__all__ = [
    "AuthProvider",
    "Principal",
    "StaticTokenAuthProvider",
    "get_auth_provider",
    "reset_auth_provider",
    "set_auth_provider",
]
