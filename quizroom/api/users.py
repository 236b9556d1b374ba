from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, constr
from typing import List

from quizroom.api.deps import get_user_service
from quizroom.core.auth import get_current_user, require_roles
from quizroom.core.security import Identity
from quizroom.models.orm import Role
from quizroom.services.users import UserService

router = APIRouter()

class UserCreate(BaseModel):
    username: constr(strip_whitespace=True, min_length=1, max_length=150)
    password: constr(min_length=1)
    role: Role = Role.PUPIL

class RoleChange(BaseModel):
    role: Role

class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    role: Role

@router.post("", status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, user: Identity = Depends(get_current_user),
                users: UserService = Depends(get_user_service)):
    created = users.create(user, payload.username, payload.password, payload.role)
    return {"message": f"User {created.username} added as {created.role.value}", "id": created.id}

@router.get("", response_model=List[UserOut], dependencies=[Depends(require_roles(Role.OWNER))])
def list_users(users: UserService = Depends(get_user_service)):
    return users.list_users()

@router.put("/{user_id}/role")
def change_role(user_id: int, payload: RoleChange, user: Identity = Depends(require_roles(Role.OWNER)),
                users: UserService = Depends(get_user_service)):
    users.change_role(user, user_id, payload.role)
    return {"message": "Role updated"}

@router.delete("/{user_id}")
def delete_user(user_id: int, user: Identity = Depends(require_roles(Role.OWNER, Role.ADMIN)),
                users: UserService = Depends(get_user_service)):
    users.delete(user, user_id)
    return {"message": "User deleted"}
