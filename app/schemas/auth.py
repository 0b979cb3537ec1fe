from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    # users.username and users.email are VARCHAR(255)
    username: str = Field(..., max_length=255)
    email: str = Field(..., max_length=255)
    password: str = Field(..., repr=False)


class LoginRequest(BaseModel):
    email: str
    password: str = Field(..., repr=False)


class RegisterResponse(BaseModel):
    token: str
    userId: int


class LoginResponse(BaseModel):
    token: str
    userId: int
    username: str
