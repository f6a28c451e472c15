"""Mock 2FA enrollment routes."""

from fastapi import APIRouter, Body

from services import two_factor

router = APIRouter(prefix="/api/auth/2fa")


@router.post("/setup")
async def setup() -> dict:
    return two_factor.setup()


@router.post("/verify")
async def verify(payload: dict | None = Body(None)) -> dict:
    code = (payload or {}).get("code")
    return two_factor.verify(code)


@router.post("/disable")
async def disable() -> dict:
    return two_factor.disable()
