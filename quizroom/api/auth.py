from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, constr

from quizroom.api.deps import get_user_service
from quizroom.core.security import Identity
from quizroom.models.orm import Role
from quizroom.services.users import UserService

router = APIRouter()

class Credentials(BaseModel):
    username: constr(strip_whitespace=True, min_length=1, max_length=150)
    password: constr(min_length=1)

class LoginResult(BaseModel):
    token: str
    token_type: str = "bearer"
    role: Role
    username: str

@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(payload: Credentials, users: UserService = Depends(get_user_service)):
    users.register(payload.username, payload.password)
    return {"message": "User registered as pupil"}

@router.post("/login", response_model=LoginResult)
def login(payload: Credentials, request: Request, users: UserService = Depends(get_user_service)):
    user = users.authenticate(payload.username, payload.password)
    token = request.app.state.tokens.issue(Identity(id=user.id, username=user.username, role=user.role))
    return LoginResult(token=token, role=user.role, username=user.username)
