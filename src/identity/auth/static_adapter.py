"""In-memory token provider for development and testing.

Tokens are opaque strings mapped to principals. They can be preloaded from
settings (``STOREFRONT_AUTH_TOKENS='{"dev-admin": "1:admin"}'``) or issued at
runtime by tests.
"""

from uuid import uuid4

from identity.auth.port import AuthProvider, Principal
from identity.users import Role
from shared.errors import AuthenticationError


def parse_principal(value: str) -> Principal:
    """Parse ``"<user_id>:<role>"`` into a principal."""
    user_id, _, role = value.partition(":")
    return Principal(user_id=int(user_id), role=Role(role or Role.USER.value))


class StaticTokenAuthProvider(AuthProvider):
    def __init__(self, tokens: dict[str, Principal] | None = None) -> None:
        self.tokens: dict[str, Principal] = dict(tokens or {})

    @classmethod
    def from_mapping(cls, mapping: dict[str, str]) -> "StaticTokenAuthProvider":
        return cls({token: parse_principal(value) for token, value in mapping.items()})

    def issue(self, user_id: int, role: Role = Role.USER) -> str:
        token = f"tok_{uuid4().hex}"
        self.tokens[token] = Principal(user_id=user_id, role=role)
        return token

    def revoke(self, token: str) -> None:
        self.tokens.pop(token, None)

    def verify(self, token: str) -> Principal:
        principal = self.tokens.get(token)
        if principal is None:
            raise AuthenticationError()
        return principal
