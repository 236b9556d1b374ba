from fastapi import Depends, Request
from sqlalchemy.orm import Session

from quizroom.core.database import get_db
from quizroom.services.users import UserService

def get_user_service(request: Request, db: Session = Depends(get_db)) -> UserService:
    state = request.app.state
    return UserService(db, state.settings, state.hasher)
