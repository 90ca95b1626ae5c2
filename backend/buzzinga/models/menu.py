from buzzinga.extensions import db
from .base import BaseModel


class Menu(BaseModel):
    __tablename__ = "menus"

    name = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), nullable=False)
    location = db.Column(db.String(100), nullable=True)  # header, footer, sidebar
    items = db.Column(db.JSON, nullable=False, default=list)

    author_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False, index=True)
    author = db.relationship("User", lazy="joined")

    __table_args__ = (
        db.UniqueConstraint("slug", name="uq_menus_slug"),
    )
