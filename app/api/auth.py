# app/api/auth.py

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine

from app.db.engine import get_engine
from app.db.schema import users
from app.models.users import LoginRequest, UserOut
from app.security import verify_password

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=UserOut)
async def login(body: LoginRequest, engine: AsyncEngine = Depends(get_engine)) -> UserOut:
    """
    Check an email/password pair against the stored bcrypt hash.
    """
    stmt = select(users.c.id, users.c.name, users.c.email, users.c.password).where(
        users.c.email == body.email
    )

    async with engine.connect() as conn:
        row = (await conn.execute(stmt)).mappings().first()

    # Same response for unknown email and wrong password
    if row is None or not verify_password(body.password, row["password"]):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    return UserOut(id=row["id"], name=row["name"], email=row["email"])
