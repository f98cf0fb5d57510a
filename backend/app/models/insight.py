from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.db.base import Base


class SavedInsight(Base):
    """
    A dashboard view a user bookmarked.

    ``data_json`` holds the serialized chart data exactly as the client sent it.
    """

    __tablename__ = "saved_insights"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    type = Column(String, nullable=False)  # "favorite_role", "saved_report", ...
    data_json = Column(Text, nullable=False)
    name = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="saved_insights")
