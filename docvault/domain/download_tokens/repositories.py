"""
Download Token Repositories

Repository interface for download token persistence.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from .entities import DownloadToken


class IDownloadTokenRepository(ABC):
    """
    Abstract repository interface for download tokens.

    Every method may raise a docvault.domain.errors.StorageError subclass.
    """

    @abstractmethod
    def create(self, token: DownloadToken) -> DownloadToken:
        """
        Persist a newly issued token.

        Returns:
            The stored token
        """
        pass

    @abstractmethod
    def find_valid_token(self, token: str, now: datetime) -> DownloadToken:
        """
        Look up a token that has not expired.

        Expiry is part of the lookup, so the two ways it can fail are
        errors rather than a None result. Whether the token was already
        used is not checked here.

        Args:
            token: Token string
            now: Instant to compare expires_at against

        Returns:
            The matching token

        Raises:
            TokenNotFound: If no token has this value
            TokenExpired: If the token's expires_at is not after now
        """
        pass

    @abstractmethod
    def mark_used(self, token: str, used_at: datetime) -> bool:
        """
        Atomically set used_at if it is still unset.

        Args:
            token: Token string
            used_at: Consumption instant

        Returns:
            True if this call consumed the token, False if it was already
            used (or no longer exists)
        """
        pass
