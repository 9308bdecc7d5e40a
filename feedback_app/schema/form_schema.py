from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field, model_validator
from typing import List, Optional


class QuestionType(str, Enum):
    TEXT = "text"
    MULTIPLE_CHOICE = "multiple-choice"


class Question(BaseModel):
    id: str = Field(..., min_length=1)
    type: QuestionType
    questionText: str
    options: List[str] = []
    required: bool = False

    @model_validator(mode="after")
    def check_shape(self):
        self.questionText = self.questionText.strip()
        if not self.questionText:
            raise ValueError("Question text is required.")

        if self.type == QuestionType.TEXT:
            self.options = []
            return self

        options = [option.strip() for option in self.options]
        if not options:
            raise ValueError(f'Multiple-choice question "{self.questionText}" needs at least one option')
        if any(not option for option in options):
            raise ValueError(f'Options of "{self.questionText}" must be non-empty')
        if len(set(options)) != len(options):
            raise ValueError(f'Options of "{self.questionText}" must be unique')
        self.options = options
        return self


class FormCreate(BaseModel):
    title: str
    description: Optional[str] = None
    questions: List[Question] = []
    expiresAt: Optional[datetime] = None
