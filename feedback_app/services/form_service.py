from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from feedback_app.schema.auth_schema import UserData
from feedback_app.schema.form_schema import FormCreate
from feedback_app.models.form_model import Form
from feedback_app.models.response_model import FormResponse
from feedback_app.exceptions import CustomException, InvalidInputException, NotFoundException
from feedback_app.constants.error import ERROR
from feedback_app.utils.date_utils import to_naive_utc
from feedback_app.utils.logger_utils import handle_service_error, log_database_operation, log_debug
import logging

logger = logging.getLogger(__name__)


def serialize_form(form: Form, include_owner: bool = False) -> dict:
    data = {
        "id": form.id,
        "title": form.title,
        "description": form.description,
        "questions": form.questions,
        "createdAt": form.created_at,
        "updatedAt": form.updated_at,
        "expiresAt": form.expires_at,
        "isExpired": form.is_expired(),
    }
    if include_owner:
        data["admin"] = form.user_id
    return data


def get_owned_form(db: Session, form_id: str, user: UserData) -> Form:
    """
    Fetch a form only if it belongs to the caller. Someone else's form is
    reported exactly like a missing one.
    """
    form = db.query(Form).filter(Form.id == form_id, Form.user_id == user.id).first()
    if not form:
        raise NotFoundException(ERROR.FORM_NOT_OWNED)
    return form


def create_form(db: Session, data: FormCreate, user: UserData):
    try:
        title = data.title.strip()
        if not title:
            raise InvalidInputException(ERROR.REQUIRED_TITLE)

        seen = set()
        for question in data.questions:
            if question.id in seen:
                raise InvalidInputException(ERROR.DUPLICATE_QUESTION_ID.format(question_id=question.id))
            seen.add(question.id)

        description = data.description.strip() if data.description else None

        new_form = Form(
            user_id=user.id,
            title=title,
            description=description or None,
            questions=[q.model_dump(mode="json") for q in data.questions],
            expires_at=to_naive_utc(data.expiresAt),
        )

        db.add(new_form)
        db.commit()
        db.refresh(new_form)
        log_database_operation("INSERT", "create_form", {"form_id": new_form.id, "user_id": user.id})

        return serialize_form(new_form, include_owner=True)

    except CustomException:
        raise
    except SQLAlchemyError as e:
        db.rollback()
        handle_service_error(
            error=e,
            context="create_form",
            custom_exception=CustomException(status_code=500, message=ERROR.INTERNAL_ERROR)
        )


def list_own_forms(db: Session, user: UserData):
    try:
        forms = (
            db.query(Form)
            .filter(Form.user_id == user.id)
            .order_by(Form.created_at.desc())
            .all()
        )
        log_debug(context="LIST_FORMS", message=f"{len(forms)} forms for user {user.id}")
        return [serialize_form(form, include_owner=True) for form in forms]

    except SQLAlchemyError as e:
        handle_service_error(
            error=e,
            context="list_own_forms",
            custom_exception=CustomException(status_code=500, message=ERROR.INTERNAL_ERROR)
        )


def get_public_form(db: Session, form_id: str):
    try:
        form = db.query(Form).filter(Form.id == form_id).first()
        if not form:
            raise NotFoundException(ERROR.FORM_NOT_FOUND)
        return serialize_form(form)

    except CustomException:
        raise
    except SQLAlchemyError as e:
        handle_service_error(
            error=e,
            context="get_public_form",
            custom_exception=CustomException(status_code=500, message=ERROR.INTERNAL_ERROR)
        )


def get_own_form_details(db: Session, form_id: str, user: UserData):
    try:
        return serialize_form(get_owned_form(db, form_id, user), include_owner=True)

    except CustomException:
        raise
    except SQLAlchemyError as e:
        handle_service_error(
            error=e,
            context="get_own_form_details",
            custom_exception=CustomException(status_code=500, message=ERROR.INTERNAL_ERROR)
        )


def delete_form(db: Session, form_id: str, user: UserData):
    """
    Delete a form and every response submitted to it in one transaction.
    """
    try:
        form = get_owned_form(db, form_id, user)

        deleted_responses = (
            db.query(FormResponse)
            .filter(FormResponse.form_id == form.id)
            .delete(synchronize_session=False)
        )
        db.delete(form)
        db.commit()

        log_database_operation("DELETE", "delete_form", {"form_id": form_id, "responses": deleted_responses})
        logger.info(f"Form {form_id} deleted with {deleted_responses} responses")
        return {"id": form_id, "deletedResponses": deleted_responses}

    except CustomException:
        raise
    except SQLAlchemyError as e:
        db.rollback()
        handle_service_error(
            error=e,
            context="delete_form",
            custom_exception=CustomException(status_code=500, message=ERROR.INTERNAL_ERROR)
        )
