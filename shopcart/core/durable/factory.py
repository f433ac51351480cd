import os
from typing import Optional, Union
import logging

import redis

from shopcart.core.durable.store_file import FileStorage
from shopcart.core.durable.store_memory import MemoryStorage
from shopcart.core.durable.store_redis import RedisStorage

log = logging.getLogger(__name__)

Storage = Union[MemoryStorage, FileStorage, RedisStorage]


def open_storage(redis_url: Optional[str] = None, state_dir: Optional[str] = None) -> Storage:
    """Elige el backend de almacenamiento del cliente.

    Redis si hay URL (parámetro o REDIS_URL) y responde al ping; si no,
    archivos JSON en el directorio de estado.
    """
    redis_url = redis_url or os.getenv("REDIS_URL")
    if redis_url:
        try:
            storage = RedisStorage(url=redis_url)
            storage.ping()
            log.info("Almacenamiento del cliente usando Redis.")
            return storage
        except redis.RedisError as err:
            log.warning(f"No se pudo conectar a Redis ({err}). Usando archivos locales.")
    storage = FileStorage(directory=state_dir)
    log.info(f"Almacenamiento del cliente en {storage.directory}")
    return storage
