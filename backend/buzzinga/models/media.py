from buzzinga.extensions import db
from .base import BaseModel


class Media(BaseModel):
    __tablename__ = "media"

    filename = db.Column(db.String(255), nullable=False, unique=True)
    original_name = db.Column(db.String(255), nullable=False)
    mime_type = db.Column(db.String(120), nullable=False, index=True)
    size = db.Column(db.Integer, nullable=False, default=0)
    path = db.Column(db.String(512), nullable=False)
    url = db.Column(db.String(512), nullable=False)
    alt = db.Column(db.String(255), nullable=True)
    caption = db.Column(db.Text, nullable=True)

    uploaded_by = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=True, index=True)
