from typing import Dict, Optional
import logging

log = logging.getLogger(__name__)


class MemoryStorage:
    """Almacenamiento clave/valor en memoria, para pruebas o cuando no hay disco ni Redis."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._store: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._store.get(key)

    def set(self, key: str, value: str) -> None:
        self._store[key] = value
        log.debug(f"Clave {key} actualizada en memoria ({len(value)} bytes)")

    def delete(self, key: str) -> None:
        if key in self._store:
            del self._store[key]
        log.debug(f"Clave {key} eliminada en memoria.")
