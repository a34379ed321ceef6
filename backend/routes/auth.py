# backend/routes/auth.py
from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy.orm import Session
from utils.hashing import get_password_hash, verify_password
from utils.tokenJWT import create_access_token, get_session_context, revoke_session, SessionContext
from utils.audit import write_log
from models.users import User
from models.store import Store
from schemas import user as schemas
from database import get_db
from sqlalchemy import func

router = APIRouter(tags=["Auth"])


def _client_ip(request: Request):
    return request.client.host if request and request.client else None


# Register a new owner together with their store
@router.post("/register", response_model=schemas.UserResponse, status_code=status.HTTP_201_CREATED)
def register(user: schemas.UserCreate, request: Request, db: Session = Depends(get_db)):
    # Normalize email input
    normalized_email = user.email.strip().lower()

    # Check for existing user
    db_user = db.query(User).filter(func.lower(User.email) == normalized_email).first()
    if db_user:
        write_log(
            db,
            user_id=None,
            action="REGISTER",
            resource="auth",
            status="FAIL",
            ip=_client_ip(request),
            meta={"email": user.email, "reason": "Email exists"},
        )
        raise HTTPException(status_code=400, detail="Email already registered")

    # Create the account, then its store, then link them in one commit
    new_user = User(
        email=normalized_email,
        password_hash=get_password_hash(user.password),
        role="owner",
        username=user.username,
        mobile=user.mobile,
    )
    db.add(new_user)
    db.flush()

    store = Store(store_name=user.store_name, owner_id=new_user.id)
    db.add(store)
    db.flush()

    new_user.store_id = store.id
    db.commit()
    db.refresh(new_user)

    # Log successful registration event
    write_log(
        db,
        user_id=new_user.id,
        store_id=store.id,
        action="REGISTER",
        resource="auth",
        status="SUCCESS",
        ip=_client_ip(request),
        meta={"email": new_user.email, "store_name": store.store_name},
    )

    return new_user


# Authenticate user and issue JWT token
@router.post("/login", response_model=schemas.Token)
def login(payload: schemas.UserLogin, request: Request, db: Session = Depends(get_db)):
    email = payload.email.strip().lower()
    db_user = db.query(User).filter(User.email == email).first()

    # Validate credentials and log failure on error
    if not db_user or not verify_password(payload.password, db_user.password_hash):
        write_log(db, user_id=(db_user.id if db_user else None), action="LOGIN", resource="auth",
                  status="FAIL", ip=_client_ip(request), meta={"email": payload.email})
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    # Generate access token
    access_token = create_access_token(data={"sub": db_user.email, "role": db_user.role})

    # Log successful login event
    write_log(db, user_id=db_user.id, store_id=db_user.store_id, action="LOGIN", resource="auth",
              status="SUCCESS", ip=_client_ip(request), meta={"email": db_user.email})

    return {"access_token": access_token, "token_type": "bearer"}


# Retrieve the caller and their store
@router.get("/me", response_model=schemas.SessionResponse)
def me(ctx: SessionContext = Depends(get_session_context)):
    return {"user": ctx.user, "store": ctx.store}


# Invalidate the presented token
@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(request: Request, db: Session = Depends(get_db), ctx: SessionContext = Depends(get_session_context)):
    revoke_session(db, ctx)
    write_log(db, user_id=ctx.user_id, store_id=ctx.store_id, action="LOGOUT", resource="auth",
              status="SUCCESS", ip=_client_ip(request))
