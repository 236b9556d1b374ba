"""
Question and answer repositories.
"""
from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session

from quizroom.models.orm import Answer, Question


class QuestionRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, question_id: int) -> Optional[Question]:
        return self.db.get(Question, question_id)

    def list(self) -> List[Question]:
        return list(self.db.scalars(select(Question).order_by(Question.id)))

    def insert(self, **fields) -> Question:
        question = Question(**fields)
        self.db.add(question)
        self.db.commit()
        self.db.refresh(question)
        return question

    def update(self, question_id: int, **fields) -> Optional[Question]:
        question = self.get(question_id)
        if question is None:
            return None
        for key, value in fields.items():
            setattr(question, key, value)
        self.db.commit()
        self.db.refresh(question)
        return question

    def delete(self, question_id: int) -> bool:
        question = self.get(question_id)
        if question is None:
            return False
        self.db.delete(question)
        self.db.commit()
        return True


class AnswerRepository:
    def __init__(self, db: Session):
        self.db = db

    def insert(self, user_id: int, question_id: int, selected_option: str) -> Answer:
        answer = Answer(user_id=user_id, question_id=question_id, selected_option=selected_option)
        self.db.add(answer)
        self.db.commit()
        self.db.refresh(answer)
        return answer

    def answers_joined_with_questions(self, user_id: int) -> List[Tuple[str, str]]:
        """(selected_option, correct_answer) for every answer ``user_id`` gave."""
        stmt = (
            select(Answer.selected_option, Question.correct_answer)
            .join(Question, Answer.question_id == Question.id)
            .where(Answer.user_id == user_id)
            .order_by(Answer.id)
        )
        return [(row[0], row[1]) for row in self.db.execute(stmt).all()]
