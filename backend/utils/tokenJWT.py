# utils/tokenJWT.py
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import jwt, JWTError
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from models.users import User
from models.store import Store
from models.token import RevokedToken

# Authorization scheme
bearer_scheme = HTTPBearer()


# Everything a request needs to know about its caller, built per request
@dataclass
class SessionContext:
    user: User
    store: Store
    token_id: str

    @property
    def store_id(self) -> int:
        return self.store.id

    @property
    def user_id(self) -> int:
        return self.user.id


# Generate a new JWT access token
def create_access_token(data: dict, expires_delta: timedelta = None):
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire, "jti": uuid.uuid4().hex})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def _decode(token: str) -> dict:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise credentials_exception
    # Ensure subject and token id are present in the payload
    if payload.get("sub") is None or payload.get("jti") is None:
        raise credentials_exception
    return payload


# Retrieve the session of the authenticated caller based on the JWT token
def get_session_context(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> SessionContext:
    payload = _decode(credentials.credentials)
    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if db.get(RevokedToken, payload["jti"]) is not None:
        raise unauthorized

    user = db.query(User).filter(User.email == payload["sub"]).first()
    if user is None:
        raise unauthorized

    store = db.get(Store, user.store_id) if user.store_id else None
    if store is None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="No store linked to this account")

    return SessionContext(user=user, store=store, token_id=payload["jti"])


def revoke_session(db: Session, ctx: SessionContext) -> None:
    db.add(RevokedToken(jti=ctx.token_id, user_id=ctx.user_id))
    db.commit()
