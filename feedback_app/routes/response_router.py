from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from feedback_app.config.database_config import get_db
from feedback_app.constants.messages import MESSAGE
from feedback_app.schema.response_schema import ResponseCreate
from feedback_app.services import response_service
from feedback_app.utils.logger_utils import handle_route_error

response_controller = APIRouter()


@response_controller.post("", status_code=201, response_model=dict)
def handle_submit_response(data: ResponseCreate, db: Session = Depends(get_db)):
    """
    Public: anyone holding the form link may submit
    """
    try:
        response = response_service.submit_response(db, data)
        return {"statusCode": 201, "message": MESSAGE.RESPONSE_SUBMITTED, "data": response}
    except Exception as e:
        handle_route_error(error=e, context="POST /api/responses")
