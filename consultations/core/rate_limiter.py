import logging
import threading
import time
from collections import defaultdict, deque
from uuid import uuid4

import redis

from consultations.core.config import settings

logger = logging.getLogger(__name__)


class LoginThrottle:
    """Sliding window over login attempts per client address.

    Redis makes the window shared by every API worker. While Redis cannot be
    reached the process-local window is used, so login stays limited per worker.
    """

    def __init__(self, client: redis.Redis | None = None, prefix: str = "consultations:login") -> None:
        self._client = client
        self._prefix = prefix
        self._local: dict[str, deque[float]] = defaultdict(deque)
        self._lock = threading.Lock()

    def hit(self, client_id: str, limit: int, window_seconds: int) -> int:
        """Record one attempt. Return 0 if it is allowed, else the seconds to wait."""
        if self._client is not None:
            try:
                return self._hit_shared(client_id, limit, window_seconds)
            except redis.RedisError:
                logger.warning("login_throttle_degraded client=%s", client_id)
        return self._hit_local(client_id, limit, window_seconds)

    def _hit_shared(self, client_id: str, limit: int, window_seconds: int) -> int:
        key = f"{self._prefix}:{client_id}"
        now_ms = int(time.time() * 1000)
        window_ms = window_seconds * 1000
        member = f"{now_ms}:{uuid4().hex}"

        # count the attempt first; a rejected attempt is taken back out below
        pipe = self._client.pipeline(transaction=True)
        pipe.zremrangebyscore(key, 0, now_ms - window_ms)
        pipe.zadd(key, {member: now_ms})
        pipe.zcard(key)
        pipe.zrange(key, 0, 0, withscores=True)
        pipe.expire(key, window_seconds + 1)
        _, _, attempts, oldest, _ = pipe.execute()

        if attempts <= limit:
            return 0
        self._client.zrem(key, member)
        oldest_ms = int(oldest[0][1]) if oldest else now_ms
        return max(1, (oldest_ms + window_ms - now_ms) // 1000)

    def _hit_local(self, client_id: str, limit: int, window_seconds: int) -> int:
        now = time.monotonic()
        with self._lock:
            attempts = self._local[client_id]
            while attempts and attempts[0] <= now - window_seconds:
                attempts.popleft()
            if len(attempts) >= limit:
                return max(1, int(attempts[0] + window_seconds - now))
            attempts.append(now)
            return 0

    def reset(self) -> None:
        with self._lock:
            self._local.clear()
        if self._client is None:
            return
        try:
            keys = list(self._client.scan_iter(match=f"{self._prefix}:*"))
            if keys:
                self._client.delete(*keys)
        except redis.RedisError:
            logger.warning("login_throttle_reset_failed")


def build_login_throttle(backend: str) -> LoginThrottle:
    if backend.strip().lower() != "redis":
        return LoginThrottle()
    client = redis.Redis.from_url(
        settings.rate_limit_redis_url,
        socket_connect_timeout=0.2,
        socket_timeout=0.2,
    )
    return LoginThrottle(client)


login_throttle = build_login_throttle(settings.rate_limit_backend)
