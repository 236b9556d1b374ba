from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from quizroom.core.database import get_db
from quizroom.core.errors import Unauthorized
from quizroom.core.security import Identity
from quizroom.models.orm import Role
from quizroom.services.authorization import require
from quizroom.services.users import UserRepository

bearer = HTTPBearer(auto_error=False)

def get_current_user(
    request: Request,
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    db: Session = Depends(get_db),
) -> Identity:
    if creds is None or not creds.credentials:
        raise Unauthorized("Unauthorized")
    identity = request.app.state.tokens.verify(creds.credentials)
    # A token may outlive the account it was issued for
    if UserRepository(db).get(identity.id) is None:
        raise Unauthorized("Account no longer exists")
    return identity

def require_roles(*required: Role):
    def checker(user: Identity = Depends(get_current_user)) -> Identity:
        return require(user, required)
    return checker
