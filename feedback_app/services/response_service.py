from typing import List
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from feedback_app.schema.auth_schema import UserData
from feedback_app.schema.form_schema import QuestionType
from feedback_app.schema.response_schema import AnswerIn, ChoiceAnswer, ResponseCreate, StoredAnswers, TextAnswer
from feedback_app.models.form_model import Form
from feedback_app.models.response_model import FormResponse
from feedback_app.services.form_service import get_owned_form, serialize_form
from feedback_app.services.aggregation_service import (
    build_summary,
    build_tabular_view,
    export_filename,
    iter_csv_lines,
)
from feedback_app.exceptions import CustomException, InvalidInputException, NotFoundException
from feedback_app.constants.error import ERROR
from feedback_app.utils.date_utils import utc_now
from feedback_app.utils.logger_utils import handle_service_error, log_database_operation, log_warning
import logging

logger = logging.getLogger(__name__)


def serialize_response(response: FormResponse) -> dict:
    return {
        "id": response.id,
        "form": response.form_id,
        "answers": response.answers,
        "submittedAt": response.submitted_at,
    }


def resolve_answers(form: Form, answers: List[AnswerIn]):
    """
    Turn posted answers into answers tagged with their question's type and
    enforce the form's required questions.
    """
    questions = {question["id"]: question for question in form.questions}
    resolved = {}

    for answer in answers:
        question = questions.get(answer.questionId)
        if question is None:
            raise InvalidInputException(ERROR.UNKNOWN_QUESTION.format(question_id=answer.questionId))
        if answer.questionId in resolved:
            raise InvalidInputException(ERROR.DUPLICATE_ANSWER.format(question_id=answer.questionId))

        if question["type"] == QuestionType.MULTIPLE_CHOICE.value:
            selected = list(dict.fromkeys(
                option.strip() for option in answer.selectedOptions or [] if option.strip()
            ))
            resolved[answer.questionId] = ChoiceAnswer(questionId=answer.questionId, selectedOptions=selected)
        else:
            text = (answer.answerText or "").strip()
            resolved[answer.questionId] = TextAnswer(questionId=answer.questionId, answerText=text)

    for question in form.questions:
        if not question.get("required"):
            continue
        submitted = resolved.get(question["id"])
        if submitted is None or not submitted.is_answered():
            raise InvalidInputException(
                ERROR.REQUIRED_ANSWER_MISSING.format(question_text=question["questionText"])
            )

    # Keep the form's question order
    ordered = [resolved[q["id"]] for q in form.questions if q["id"] in resolved]
    return StoredAnswers(answers=ordered).model_dump(mode="json")["answers"]


def submit_response(db: Session, data: ResponseCreate):
    try:
        form = db.query(Form).filter(Form.id == data.formId).first()
        if not form:
            raise NotFoundException(ERROR.FORM_NOT_FOUND)

        if form.is_expired(utc_now()):
            log_warning(context="SUBMIT_RESPONSE", message=f"Rejected submission to expired form {form.id}")
            raise InvalidInputException(ERROR.FORM_EXPIRED)

        response = FormResponse(
            form_id=form.id,
            answers=resolve_answers(form, data.answers),
            submitted_at=utc_now(),
        )
        db.add(response)
        db.commit()
        db.refresh(response)
        log_database_operation("INSERT", "submit_response", {"form_id": form.id, "response_id": response.id})

        return {"responseId": response.id}

    except CustomException:
        raise
    except SQLAlchemyError as e:
        db.rollback()
        handle_service_error(
            error=e,
            context="submit_response",
            custom_exception=CustomException(status_code=500, message=ERROR.INTERNAL_ERROR)
        )


def _form_responses(db: Session, form_id: str, newest_first: bool):
    order = FormResponse.submitted_at.desc() if newest_first else FormResponse.submitted_at.asc()
    rows = db.query(FormResponse).filter(FormResponse.form_id == form_id).order_by(order).all()
    return [serialize_response(row) for row in rows]


def list_responses(db: Session, form_id: str, user: UserData):
    try:
        form = get_owned_form(db, form_id, user)
        return _form_responses(db, form.id, newest_first=True)

    except CustomException:
        raise
    except SQLAlchemyError as e:
        handle_service_error(
            error=e,
            context="list_responses",
            custom_exception=CustomException(status_code=500, message=ERROR.INTERNAL_ERROR)
        )


def export_csv(db: Session, form_id: str, user: UserData):
    """
    Returns the download filename and an iterator over the CSV lines,
    oldest response first.
    """
    try:
        form = get_owned_form(db, form_id, user)
        responses = _form_responses(db, form.id, newest_first=False)
        if not responses:
            raise NotFoundException(ERROR.NO_RESPONSES_TO_EXPORT)

        logger.info(f"Exporting {len(responses)} responses of form {form.id}")
        return export_filename(form.title), iter_csv_lines(serialize_form(form), responses)

    except CustomException:
        raise
    except SQLAlchemyError as e:
        handle_service_error(
            error=e,
            context="export_csv",
            custom_exception=CustomException(status_code=500, message=ERROR.INTERNAL_ERROR)
        )


def get_response_views(db: Session, form_id: str, user: UserData):
    try:
        form = serialize_form(get_owned_form(db, form_id, user), include_owner=True)
        responses = _form_responses(db, form_id, newest_first=True)
        return {
            "form": form,
            "totalResponses": len(responses),
            "tabular": build_tabular_view(form, responses),
            "summary": build_summary(form, responses),
        }

    except CustomException:
        raise
    except SQLAlchemyError as e:
        handle_service_error(
            error=e,
            context="get_response_views",
            custom_exception=CustomException(status_code=500, message=ERROR.INTERNAL_ERROR)
        )
