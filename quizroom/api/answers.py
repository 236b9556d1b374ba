from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, field_validator
from sqlalchemy.orm import Session

from quizroom.api.questions import normalize_letter
from quizroom.core.auth import get_current_user
from quizroom.core.database import get_db
from quizroom.core.errors import NotFound
from quizroom.core.security import Identity
from quizroom.services.questions import AnswerRepository, QuestionRepository

router = APIRouter()

class AnswerSubmit(BaseModel):
    question_id: int
    selected_option: str

    @field_validator("selected_option", mode="before")
    @classmethod
    def check_selected_option(cls, v):
        return normalize_letter(v)

@router.post("", status_code=status.HTTP_201_CREATED)
def submit_answer(payload: AnswerSubmit, user: Identity = Depends(get_current_user), db: Session = Depends(get_db)):
    if QuestionRepository(db).get(payload.question_id) is None:
        raise NotFound("Question not found")
    answer = AnswerRepository(db).insert(user.id, payload.question_id, payload.selected_option)
    return {"message": "Answer submitted", "id": answer.id}
