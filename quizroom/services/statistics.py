"""
Per-pupil correctness statistics.

Owners and admins get every pupil's record together with the real pupil and
teacher counts. A pupil only ever sees their own record; the self view
reports ``total_pupils=1`` and ``total_teachers=0`` regardless of the real
counts.

The per-pupil queries are not wrapped in a transaction, so answers submitted
while the report is being built may be counted for some pupils and not for
others.
"""
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from quizroom.core.errors import StatisticsUnavailable
from quizroom.core.security import Identity
from quizroom.models.orm import Role
from quizroom.services.questions import AnswerRepository
from quizroom.services.users import UserRepository

logger = logging.getLogger(__name__)


@dataclass
class PupilStatistics:
    id: int
    username: str
    correct_answers: int = 0
    incorrect_answers: int = 0


@dataclass
class StatisticsReport:
    total_pupils: int
    total_teachers: int
    pupil_statistics: List[PupilStatistics] = field(default_factory=list)


def score_answers(pairs: Sequence[Tuple[str, str]]) -> Tuple[int, int]:
    """Split (selected_option, correct_answer) pairs into (correct, incorrect)."""
    correct = sum(1 for selected, expected in pairs if selected == expected)
    return correct, len(pairs) - correct


class StatisticsAggregator:
    def __init__(self, db: Session):
        self.users = UserRepository(db)
        self.answers = AnswerRepository(db)

    def collect(self) -> Tuple[int, int, List[PupilStatistics]]:
        total_pupils = self.users.count(Role.PUPIL)
        total_teachers = self.users.count(Role.ADMIN)
        records = []
        for pupil in self.users.list_pupils():
            correct, incorrect = score_answers(self.answers.answers_joined_with_questions(pupil.id))
            records.append(PupilStatistics(pupil.id, pupil.username, correct, incorrect))
        return total_pupils, total_teachers, records

    def report(self, identity: Identity) -> StatisticsReport:
        try:
            total_pupils, total_teachers, records = self.collect()
        except SQLAlchemyError as e:
            logger.error(f"Statistics aggregation failed: {e}")
            raise StatisticsUnavailable() from e

        if identity.role in (Role.OWNER, Role.ADMIN):
            return StatisticsReport(total_pupils, total_teachers, records)
        if identity.role is Role.PUPIL:
            own = next((r for r in records if r.username == identity.username), None)
            if own is None:
                logger.warning(f"No statistics record for pupil {identity.username} (id={identity.id})")
                own = PupilStatistics(identity.id, identity.username)
            return StatisticsReport(1, 0, [own])
        raise ValueError(f"Unhandled role: {identity.role!r}")
