from datetime import datetime
from typing import List
import enum

from sqlalchemy import CheckConstraint, DateTime, Enum as SQLEnum, ForeignKey, Index, Integer, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


class Role(str, enum.Enum):
    OWNER = "owner"
    ADMIN = "admin"
    PUPIL = "pupil"


class OptionLetter(str, enum.Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"


OPTION_LETTERS = tuple(letter.value for letter in OptionLetter)


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        Index("idx_users_role", "role"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str] = mapped_column(String(150), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(150), nullable=False)
    role: Mapped[Role] = mapped_column(
        SQLEnum(Role, native_enum=False, length=50, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=Role.PUPIL,
    )

    answers: Mapped[List["Answer"]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username!r}, role={self.role.value})>"


class Question(Base):
    __tablename__ = "questions"
    __table_args__ = (
        CheckConstraint(
            "correct_answer IN ('A', 'B', 'C', 'D')", name="ck_questions_correct_answer"
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    text: Mapped[str] = mapped_column(String(500), nullable=False)
    option_a: Mapped[str] = mapped_column(String(150), nullable=False)
    option_b: Mapped[str] = mapped_column(String(150), nullable=False)
    option_c: Mapped[str] = mapped_column(String(150), nullable=False)
    option_d: Mapped[str] = mapped_column(String(150), nullable=False)
    correct_answer: Mapped[str] = mapped_column(String(1), nullable=False)

    answers: Mapped[List["Answer"]] = relationship(
        back_populates="question", cascade="all, delete-orphan"
    )


class Answer(Base):
    __tablename__ = "answers"
    __table_args__ = (
        Index("idx_answers_user", "user_id"),
        Index("idx_answers_question", "question_id"),
        CheckConstraint(
            "selected_option IN ('A', 'B', 'C', 'D')", name="ck_answers_selected_option"
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    question_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("questions.id", ondelete="CASCADE"), nullable=False
    )
    selected_option: Mapped[str] = mapped_column(String(1), nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), nullable=False)

    user: Mapped["User"] = relationship(back_populates="answers")
    question: Mapped["Question"] = relationship(back_populates="answers")
