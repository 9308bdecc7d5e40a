import uuid
from sqlalchemy import Column, String
from feedback_app.config.database_config import Base
from feedback_app.models.column_types import Timestamp
from feedback_app.utils.date_utils import utc_now


class User(Base):
    __tablename__ = "users"

    id = Column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        unique=True,
    )

    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)

    created_at = Column(Timestamp, default=utc_now, nullable=False)
