from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session
from feedback_app.config.database_config import get_db
from feedback_app.constants.messages import MESSAGE
from feedback_app.middleware.auth_middleware import auth_middleware
from feedback_app.schema.auth_schema import UserData
from feedback_app.schema.form_schema import FormCreate
from feedback_app.services import form_service, response_service
from feedback_app.utils.logger_utils import handle_route_error

form_controller = APIRouter()


@form_controller.post("", status_code=201, response_model=dict)
def handle_create_form(
    data: FormCreate,
    user: UserData = Depends(auth_middleware),
    db: Session = Depends(get_db),
):
    try:
        response = form_service.create_form(db, data, user)
        return {"statusCode": 201, "message": MESSAGE.FORM_CREATED, "data": response}
    except Exception as e:
        handle_route_error(error=e, context="POST /api/forms")


@form_controller.get("", response_model=dict)
def handle_list_forms(user: UserData = Depends(auth_middleware), db: Session = Depends(get_db)):
    try:
        response = form_service.list_own_forms(db, user)
        return {"statusCode": 200, "message": MESSAGE.FORMS_FETCHED, "data": response}
    except Exception as e:
        handle_route_error(error=e, context="GET /api/forms")


@form_controller.get("/{form_id}", response_model=dict)
def handle_get_public_form(form_id: str, db: Session = Depends(get_db)):
    """
    Public: this is what the shared submission link loads
    """
    try:
        response = form_service.get_public_form(db, form_id)
        return {"statusCode": 200, "message": MESSAGE.FORM_FETCHED, "data": response}
    except Exception as e:
        handle_route_error(error=e, context="GET /api/forms/{id}")


@form_controller.get("/{form_id}/admin-details", response_model=dict)
def handle_get_form_details(
    form_id: str,
    user: UserData = Depends(auth_middleware),
    db: Session = Depends(get_db),
):
    try:
        response = form_service.get_own_form_details(db, form_id, user)
        return {"statusCode": 200, "message": MESSAGE.FORM_FETCHED, "data": response}
    except Exception as e:
        handle_route_error(error=e, context="GET /api/forms/{id}/admin-details")


@form_controller.get("/{form_id}/responses", response_model=dict)
def handle_list_responses(
    form_id: str,
    user: UserData = Depends(auth_middleware),
    db: Session = Depends(get_db),
):
    try:
        response = response_service.list_responses(db, form_id, user)
        return {"statusCode": 200, "message": MESSAGE.RESPONSES_FETCHED, "data": response}
    except Exception as e:
        handle_route_error(error=e, context="GET /api/forms/{formId}/responses")


@form_controller.get("/{form_id}/responses/export-csv")
def handle_export_csv(
    form_id: str,
    user: UserData = Depends(auth_middleware),
    db: Session = Depends(get_db),
):
    try:
        filename, lines = response_service.export_csv(db, form_id, user)
        return StreamingResponse(
            lines,
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )
    except Exception as e:
        handle_route_error(error=e, context="GET /api/forms/{formId}/responses/export-csv")


@form_controller.get("/{form_id}/responses/summary", response_model=dict)
def handle_response_summary(
    form_id: str,
    user: UserData = Depends(auth_middleware),
    db: Session = Depends(get_db),
):
    try:
        response = response_service.get_response_views(db, form_id, user)
        return {"statusCode": 200, "message": MESSAGE.SUMMARY_FETCHED, "data": response}
    except Exception as e:
        handle_route_error(error=e, context="GET /api/forms/{formId}/responses/summary")


@form_controller.delete("/{form_id}", response_model=dict)
def handle_delete_form(
    form_id: str,
    user: UserData = Depends(auth_middleware),
    db: Session = Depends(get_db),
):
    try:
        response = form_service.delete_form(db, form_id, user)
        return {"statusCode": 200, "message": MESSAGE.FORM_DELETED, "data": response}
    except Exception as e:
        handle_route_error(error=e, context="DELETE /api/forms/{id}")
