from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, EmailStr


class UserCreate(BaseModel):
    first_name: str
    last_name: Optional[str] = None
    email: EmailStr
    password: str


class UserUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    last_frost_date: Optional[date] = None


class UserRead(BaseModel):
    id: int
    first_name: str
    last_name: Optional[str]
    email: str
    role: str
    is_active: bool
    last_frost_date: Optional[date]
    created_at: datetime
    last_login: Optional[datetime]

    model_config = {"from_attributes": True}
