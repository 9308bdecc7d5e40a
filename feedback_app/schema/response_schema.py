from pydantic import BaseModel, Field
from typing import Annotated, List, Literal, Optional, Union


class AnswerIn(BaseModel):
    """Answer as posted by a respondent; its shape is resolved against the question type."""
    questionId: str
    answerText: Optional[str] = None
    selectedOptions: Optional[List[str]] = None


class ResponseCreate(BaseModel):
    formId: str = Field(..., min_length=1)
    answers: List[AnswerIn] = []


class TextAnswer(BaseModel):
    type: Literal["text"] = "text"
    questionId: str
    answerText: str = ""

    def is_answered(self) -> bool:
        return bool(self.answerText)


class ChoiceAnswer(BaseModel):
    type: Literal["multiple-choice"] = "multiple-choice"
    questionId: str
    selectedOptions: List[str] = []

    def is_answered(self) -> bool:
        return len(self.selectedOptions) > 0


StoredAnswer = Annotated[Union[TextAnswer, ChoiceAnswer], Field(discriminator="type")]


class StoredAnswers(BaseModel):
    answers: List[StoredAnswer] = []
