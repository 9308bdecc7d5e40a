from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from feedback_app.services import auth_service
from feedback_app.schema.auth_schema import RegisterRequest, SignInRequest, ApiResponse, AuthData
from feedback_app.config.database_config import get_db
from feedback_app.constants.messages import MESSAGE
from feedback_app.utils.logger_utils import handle_route_error

auth_controller = APIRouter()


@auth_controller.post("/register", status_code=201, response_model=ApiResponse[AuthData])
def register_user(data: RegisterRequest, db: Session = Depends(get_db)):
    """
    Create an account and return a signed access token for it
    """
    try:
        response = auth_service.register_user(db, data)
        return {"statusCode": 201, "message": MESSAGE.USER_CREATED, "data": response}
    except Exception as e:
        handle_route_error(error=e, context="POST /api/auth/register")


@auth_controller.post("/login", response_model=ApiResponse[AuthData])
def login_user(data: SignInRequest, db: Session = Depends(get_db)):
    try:
        response = auth_service.sign_in_user(db, data)
        return {"statusCode": 200, "message": MESSAGE.AUTH_SUCCESS, "data": response}
    except Exception as e:
        handle_route_error(error=e, context="POST /api/auth/login")
