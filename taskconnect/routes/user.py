# ========================================
# taskconnect/routes/user.py
# ========================================

import logging
from fastapi import APIRouter, HTTPException, Depends, status

from taskconnect.exceptions import DuplicateAccount
from taskconnect.schemas.user import UserCreate, UserResponse, UserLogin, TokenResponse
from taskconnect.utils.auth import create_access_token, get_current_user, hash_password, password_matches
from taskconnect.utils.deps import get_user_store

router = APIRouter(prefix="/users")
logger = logging.getLogger(__name__)


# ✅ 1. REGISTER
@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=UserResponse)
async def register_user(user: UserCreate, users=Depends(get_user_store)):
    """Register a new professional body or worker."""

    existing_user = await users.find_by_email(user.email)
    if existing_user:
        raise DuplicateAccount()

    user_dict = user.model_dump()
    user_dict["password"] = hash_password(user.password)

    user_id = await users.create(user_dict)
    logger.info(f"Registered {user.role} account {user_id}")

    return {
        "id": user_id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "category": user.category
    }


# ✅ 2. LOGIN
@router.post("/login", response_model=TokenResponse)
async def login(user_credentials: UserLogin, users=Depends(get_user_store)):
    """Login and get a bearer token."""

    user = await users.find_by_email(user_credentials.email)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")

    if not password_matches(user_credentials.password, user["password"]):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    access_token = create_access_token(data={"sub": user["id"], "role": user["role"]})

    return {"access_token": access_token, "token_type": "bearer"}


# ✅ 3. GET MY PROFILE
@router.get("/profile", response_model=UserResponse)
async def get_profile(current_user: dict = Depends(get_current_user)):
    return current_user
