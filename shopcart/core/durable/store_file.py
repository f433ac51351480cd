import os
import tempfile
from typing import Optional
import logging

log = logging.getLogger(__name__)

DEFAULT_STATE_DIR = os.path.join(os.path.expanduser("~"), ".shopcart")


class FileStorage:
    """Un archivo de texto por clave dentro de un directorio.

    Sobrevive reinicios del proceso, igual que el localStorage del navegador.
    La escritura es atómica (archivo temporal + os.replace).
    """

    def __init__(self, directory: Optional[str] = None):
        self.directory = directory or os.getenv("SHOPCART_STATE_DIR", DEFAULT_STATE_DIR)

    def _path(self, key: str) -> str:
        safe = "".join(c if c.isalnum() or c in "._-" else "_" for c in key)
        return os.path.join(self.directory, f"{safe}.json")

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not os.path.exists(path):
            return None
        try:
            with open(path, encoding="utf-8") as f:
                return f.read()
        except UnicodeDecodeError as err:
            # Bytes que no son UTF-8: se trata como clave ausente
            log.warning(f"Archivo {path} ilegible ({err}). Se ignora.")
            return None

    def set(self, key: str, value: str) -> None:
        os.makedirs(self.directory, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.directory, prefix=".tmp-")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp, self._path(key))
        except OSError:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise
        log.debug(f"Clave {key} guardada en {self.directory}")

    def delete(self, key: str) -> None:
        path = self._path(key)
        if os.path.exists(path):
            os.remove(path)
        log.debug(f"Clave {key} eliminada de {self.directory}")
