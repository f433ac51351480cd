# shopcart/routers/profile.py
from fastapi import APIRouter, Depends

from shopcart.core.dependencies import get_current_user

router = APIRouter(prefix="/api", tags=["Profile"])


@router.get("/profile")
async def profile(current_user: dict = Depends(get_current_user)):
    return {"user": current_user}
