import uuid
from sqlalchemy import Column, String, Text, ForeignKey, JSON
from feedback_app.config.database_config import Base
from feedback_app.models.column_types import Timestamp
from feedback_app.utils.date_utils import utc_now


class Form(Base):
    __tablename__ = "forms"

    id = Column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        unique=True,
    )

    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    # Ordered list of question documents: {id, type, questionText, options, required}
    questions = Column(JSON, nullable=False, default=list)

    created_at = Column(Timestamp, default=utc_now, nullable=False)
    updated_at = Column(
        Timestamp,
        default=utc_now,
        onupdate=utc_now,
        nullable=False
    )
    expires_at = Column(Timestamp, nullable=True)

    def is_expired(self, now=None) -> bool:
        if self.expires_at is None:
            return False
        return (now or utc_now()) >= self.expires_at
