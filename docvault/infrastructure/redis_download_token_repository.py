"""
Redis Download Token Repository Implementation

Redis-based implementation of IDownloadTokenRepository. Each token is a
hash under "download_token:<token>" with a key TTL that outlives the
token's expiry.
"""

import logging
from datetime import datetime
from typing import Dict

import redis

from docvault.domain.download_tokens.entities import DownloadToken
from docvault.domain.download_tokens.repositories import IDownloadTokenRepository
from docvault.domain.errors import TokenExpired, TokenNotFound

from .storage_errors import redis_errors

logger = logging.getLogger(__name__)

# Sets used_at only if the hash still exists and used_at is unset.
_MARK_USED_SCRIPT = """
if redis.call('EXISTS', KEYS[1]) == 0 then
    return 0
end
return redis.call('HSETNX', KEYS[1], 'used_at', ARGV[1])
"""


class RedisDownloadTokenRepository(IDownloadTokenRepository):
    """
    Redis-based implementation of IDownloadTokenRepository.

    Keys are kept for retention_seconds past expires_at so that a recently
    expired token is still reported as expired instead of unknown.
    """

    def __init__(self, redis_client: redis.Redis, retention_seconds: int = 86400,
                 key_prefix: str = "download_token"):
        """
        Initialize with a Redis client.

        Args:
            redis_client: Client created with decode_responses=True
            retention_seconds: How long a key survives after expires_at
            key_prefix: Prefix for token keys
        """
        self.redis = redis_client
        self.retention_seconds = retention_seconds
        self.key_prefix = key_prefix

    def _make_key(self, token: str) -> str:
        return f"{self.key_prefix}:{token}"

    def create(self, token: DownloadToken) -> DownloadToken:
        """
        Save the token hash and set its TTL in one transaction.

        Tokens that are already expired are still written, with only the
        retention TTL.
        """
        key = self._make_key(token.token)
        ttl = token.get_remaining_seconds(token.created_at) + self.retention_seconds

        with redis_errors():
            token_id = self.redis.incr(f"{self.key_prefix}:id_seq")
            stored = DownloadToken(
                token=token.token,
                document_id=token.document_id,
                expires_at=token.expires_at,
                created_at=token.created_at,
                used_at=token.used_at,
                id=int(token_id),
            )
            mapping = {k: str(v) for k, v in stored.to_dict().items() if v is not None}

            pipe = self.redis.pipeline(transaction=True)
            pipe.hset(key, mapping=mapping)
            pipe.expire(key, max(ttl, 1))
            pipe.execute()

        return stored

    def find_valid_token(self, token: str, now: datetime) -> DownloadToken:
        with redis_errors():
            data = self.redis.hgetall(self._make_key(token))

        if not data:
            raise TokenNotFound(token)

        entity = DownloadToken.from_dict(self._decode(data))
        if entity.expires_at <= now:
            raise TokenExpired(token)
        return entity

    def mark_used(self, token: str, used_at: datetime) -> bool:
        with redis_errors():
            result = self.redis.eval(
                _MARK_USED_SCRIPT, 1, self._make_key(token), used_at.isoformat()
            )
        claimed = int(result) == 1
        if not claimed:
            logger.debug(f"Token {token[:8]}... was already used or no longer exists")
        return claimed

    @staticmethod
    def _decode(data: Dict) -> Dict[str, str]:
        decoded = {}
        for key, value in data.items():
            if isinstance(key, bytes):
                key = key.decode("utf-8")
            if isinstance(value, bytes):
                value = value.decode("utf-8")
            decoded[key] = value
        if "id" in decoded:
            decoded["id"] = int(decoded["id"])
        return decoded
