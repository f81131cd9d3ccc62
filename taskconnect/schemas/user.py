from pydantic import BaseModel, ConfigDict, EmailStr
from typing import Optional, Literal

# 1. For Registration (Input)
class UserCreate(BaseModel):
    name: str
    email: EmailStr
    password: str
    role: Literal["professional-body", "worker"]
    category: Optional[str] = None  # trade/skill category, workers only

# 2. For Login (Input)
class UserLogin(BaseModel):
    email: str
    password: str

# 3. For Responses (Output)
class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: EmailStr
    role: str
    category: Optional[str] = None

class TokenResponse(BaseModel):
    access_token: str
    token_type: str
