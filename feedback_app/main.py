from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from feedback_app.config.database_config import Base, engine
from feedback_app.config.env_config import settings
from feedback_app.config.logger_config import setup_logging
from feedback_app.exceptions import (
    CustomException,
    custom_exception_handler,
    internal_exception_handler,
    validation_exception_handler,
)
from feedback_app.models import form_model, response_model, user_model  # noqa: F401  register tables
from feedback_app.routes.auth_router import auth_controller
from feedback_app.routes.form_router import form_controller
from feedback_app.routes.response_router import response_controller
from feedback_app.utils.logger_utils import log_info

# Initialize logging
setup_logging()

app = FastAPI(
    title="Feedback Forms API",
    swagger_ui_parameters={
        "persistAuthorization": True
    }
)

log_info(context="APP_STARTUP", message="FastAPI application started")


@app.get("/health")
def server_life_check():
    return {"statusCode": 200, "data": "Your server is running successfully"}


Base.metadata.create_all(bind=engine)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(CustomException, custom_exception_handler)
app.add_exception_handler(Exception, internal_exception_handler)

app.include_router(auth_controller, prefix="/api/auth", tags=["Auth"])
app.include_router(form_controller, prefix="/api/forms", tags=["Forms"])
app.include_router(response_controller, prefix="/api/responses", tags=["Responses"])

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],  # GET, POST, DELETE
    allow_headers=["*"],  # Authorization, Content-Type
    expose_headers=["Content-Disposition"],  # CSV download filename
)
