from typing import Optional
import logging

import redis

log = logging.getLogger(__name__)


class RedisStorage:
    """Persistencia clave/valor en Redis.

    Sin TTL por defecto: el carrito y la sesión viven hasta que se borran.
    """

    def __init__(self, url="redis://localhost:6379/0", ttl_seconds=None, client=None, prefix=""):
        self.client = client or redis.Redis.from_url(url, decode_responses=True)
        self.ttl = ttl_seconds
        self.prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def ping(self) -> bool:
        return bool(self.client.ping())

    def get(self, key: str) -> Optional[str]:
        try:
            return self.client.get(self._key(key))
        except UnicodeDecodeError as err:
            log.warning(f"Valor de {self._key(key)} no es UTF-8 ({err}). Se ignora.")
            return None

    def set(self, key: str, value: str) -> None:
        full_key = self._key(key)
        with self.client.pipeline() as pipe:
            pipe.set(full_key, value)
            if self.ttl:
                pipe.expire(full_key, self.ttl)
            pipe.execute()
        log.debug(f"Clave {full_key} actualizada en Redis.")

    def delete(self, key: str) -> None:
        self.client.delete(self._key(key))
        log.debug(f"Clave {self._key(key)} eliminada en Redis.")
