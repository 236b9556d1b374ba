from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import List
from sqlalchemy.orm import Session

from quizroom.core.auth import require_roles
from quizroom.core.database import get_db
from quizroom.core.security import Identity
from quizroom.models.orm import Role
from quizroom.services.statistics import StatisticsAggregator

router = APIRouter()

class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class PupilStatisticsOut(CamelModel):
    id: int
    username: str
    correct_answers: int
    incorrect_answers: int

class StatisticsOut(CamelModel):
    total_pupils: int
    total_teachers: int
    pupil_statistics: List[PupilStatisticsOut]

@router.get("", response_model=StatisticsOut)
def statistics(user: Identity = Depends(require_roles(Role.OWNER, Role.ADMIN, Role.PUPIL)),
               db: Session = Depends(get_db)):
    report = StatisticsAggregator(db).report(user)
    return StatisticsOut(
        total_pupils=report.total_pupils,
        total_teachers=report.total_teachers,
        pupil_statistics=[
            PupilStatisticsOut(id=p.id, username=p.username, correct_answers=p.correct_answers,
                               incorrect_answers=p.incorrect_answers)
            for p in report.pupil_statistics
        ],
    )
