from fastapi import Request, HTTPException, status
from jose import JWTError

from shopcart.core.security import decode_access_token


async def get_current_user(request: Request) -> dict:
    """Identidad del token bearer; no consulta la base (igual que el token emitido)."""
    header = request.headers.get("Authorization", "")
    token = header[7:] if header.startswith("Bearer ") else None
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    try:
        payload = decode_access_token(token)
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token invalid or expired")

    return {"id": payload["sub"], "name": payload.get("name"), "email": payload.get("email")}
