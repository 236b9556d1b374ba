from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, constr, field_validator
from typing import List, Optional
from sqlalchemy.orm import Session

from quizroom.core.auth import get_current_user, require_roles
from quizroom.core.database import get_db
from quizroom.core.errors import NotFound
from quizroom.core.security import Identity
from quizroom.models.orm import OPTION_LETTERS, Role
from quizroom.services.questions import QuestionRepository

router = APIRouter()

def normalize_letter(v: str) -> str:
    """Canonical option letter: a single uppercase A-D."""
    letter = v.strip().upper() if isinstance(v, str) else v
    if letter not in OPTION_LETTERS:
        raise ValueError("must be one of A, B, C, D")
    return letter

class QuestionIn(BaseModel):
    text: constr(strip_whitespace=True, min_length=1, max_length=500)
    option_a: constr(strip_whitespace=True, min_length=1, max_length=150)
    option_b: constr(strip_whitespace=True, min_length=1, max_length=150)
    option_c: constr(strip_whitespace=True, min_length=1, max_length=150)
    option_d: constr(strip_whitespace=True, min_length=1, max_length=150)
    correct_answer: str

    @field_validator("correct_answer", mode="before")
    @classmethod
    def check_correct_answer(cls, v):
        return normalize_letter(v)

class QuestionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    text: str
    option_a: str
    option_b: str
    option_c: str
    option_d: str
    correct_answer: Optional[str] = None

@router.get("", response_model=List[QuestionOut], response_model_exclude_none=True)
def list_questions(user: Identity = Depends(get_current_user), db: Session = Depends(get_db)):
    questions = [QuestionOut.model_validate(q) for q in QuestionRepository(db).list()]
    if user.role is Role.PUPIL:
        # Pupils answer blind
        for q in questions:
            q.correct_answer = None
    return questions

@router.post("", response_model=QuestionOut, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_roles(Role.OWNER, Role.ADMIN))])
def create_question(payload: QuestionIn, db: Session = Depends(get_db)):
    return QuestionRepository(db).insert(**payload.model_dump())

@router.put("/{question_id}", response_model=QuestionOut,
            dependencies=[Depends(require_roles(Role.OWNER, Role.ADMIN))])
def update_question(question_id: int, payload: QuestionIn, db: Session = Depends(get_db)):
    question = QuestionRepository(db).update(question_id, **payload.model_dump())
    if question is None:
        raise NotFound("Question not found")
    return question

@router.delete("/{question_id}", dependencies=[Depends(require_roles(Role.OWNER, Role.ADMIN))])
def delete_question(question_id: int, db: Session = Depends(get_db)):
    if not QuestionRepository(db).delete(question_id):
        raise NotFound("Question not found")
    return {"message": "Question deleted"}
