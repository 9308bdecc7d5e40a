import uuid
from sqlalchemy import Column, String, ForeignKey, JSON
from feedback_app.config.database_config import Base
from feedback_app.models.column_types import Timestamp
from feedback_app.utils.date_utils import utc_now


class FormResponse(Base):
    __tablename__ = "responses"

    id = Column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        unique=True,
    )

    form_id = Column(
        String(36),
        ForeignKey("forms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Ordered list of tagged answer documents, see schema.response_schema
    answers = Column(JSON, nullable=False, default=list)

    submitted_at = Column(Timestamp, default=utc_now, nullable=False, index=True)
