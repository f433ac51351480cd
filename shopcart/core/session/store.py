import json
from typing import Optional
import logging

from shopcart.core.session.models import SessionIdentity, UserProfile

log = logging.getLogger(__name__)

SESSION_KEY = "shopcart.session"


def load_session_or_default(raw: Optional[str]) -> SessionIdentity:
    """Lectura tolerante de la sesión: cualquier dato ilegible equivale a no tener sesión.

    Un perfil corrupto junto a un token válido descarta ambos, para no
    quedar nunca con token sin perfil.
    """
    if not raw:
        return SessionIdentity()
    try:
        data = json.loads(raw)
        token = data.get("token")
        user = data.get("user")
        if not token or not isinstance(token, str) or not user:
            return SessionIdentity()
        return SessionIdentity(token=token, profile=UserProfile.from_dict(user))
    except (ValueError, TypeError, KeyError, AttributeError) as err:
        log.warning(f"Sesión persistida ilegible ({err}). Se ignora.")
        return SessionIdentity()


class SessionStore:
    """Token bearer y perfil cacheado, guardados como un único registro."""

    def __init__(self, storage, key: str = SESSION_KEY):
        self.storage = storage
        self.key = key

    def set_session(self, token: str, profile: UserProfile) -> SessionIdentity:
        if not token:
            raise ValueError("Token vacío")
        session = SessionIdentity(token=token, profile=profile)
        self.storage.set(self.key, json.dumps(session.to_dict()))
        log.info(f"Sesión iniciada para {profile.email}")
        return session

    def load(self) -> SessionIdentity:
        return load_session_or_default(self.storage.get(self.key))

    def get_token(self) -> Optional[str]:
        return self.load().token

    def get_profile(self) -> Optional[UserProfile]:
        return self.load().profile

    def is_authenticated(self) -> bool:
        return self.load().is_authenticated

    def clear(self) -> None:
        self.storage.delete(self.key)
        log.info("Sesión cerrada.")
