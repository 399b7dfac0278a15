"""Authentication provider port (abstract interface).

Token issuance, format and expiry belong to the provider. The rest of the
application only ever sees a verified ``Principal``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from identity.users import Role


@dataclass(frozen=True)
class Principal:
    """The verified caller of a request."""

    user_id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


class AuthProvider(ABC):
    @abstractmethod
    def verify(self, token: str) -> Principal:
        """Return the principal for ``token`` or raise ``AuthenticationError``."""
        ...
