# app/api/deps.py
from fastapi import Depends, Header, HTTPException, status
from app.db.mongo import get_db

# Dependency for injecting the MongoDB database into endpoints/services
async def mongo_db(db = Depends(get_db)):
    # Returns the MongoDB database instance (async)
    return db

# The auth layer in front of this service authenticates the caller and
# forwards the user id; the engine only reads it.
async def current_user_id(x_user_id: str | None = Header(default=None)) -> str:
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authenticated user required")
    return x_user_id.strip()
