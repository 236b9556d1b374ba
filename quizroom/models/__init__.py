from quizroom.models.orm import Answer, Base, OPTION_LETTERS, OptionLetter, Question, Role, User

__all__ = ["Answer", "Base", "OPTION_LETTERS", "OptionLetter", "Question", "Role", "User"]
