from buzzinga.extensions import db
from .base import BaseModel


class Form(BaseModel):
    __tablename__ = "forms"

    name = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    fields = db.Column(db.JSON, nullable=False, default=list)
    settings = db.Column(db.JSON, nullable=False, default=dict)

    author_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False, index=True)
    author = db.relationship("User", lazy="joined")

    responses = db.relationship(
        "FormResponse",
        back_populates="form",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        db.UniqueConstraint("slug", name="uq_forms_slug"),
    )


class FormResponse(BaseModel):
    __tablename__ = "form_responses"

    form_id = db.Column(
        db.String(36),
        db.ForeignKey("forms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    data = db.Column(db.JSON, nullable=False, default=dict)
    ip_address = db.Column(db.String(64), nullable=True)
    user_agent = db.Column(db.String(512), nullable=True)

    form = db.relationship("Form", back_populates="responses")
