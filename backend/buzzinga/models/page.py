from buzzinga.extensions import db
from .base import BaseModel


class Page(BaseModel):
    __tablename__ = "pages"

    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), nullable=False)
    content = db.Column(db.JSON, nullable=False, default=dict)
    custom_css = db.Column(db.Text, nullable=True)
    custom_js = db.Column(db.Text, nullable=True)
    status = db.Column(db.String(20), nullable=False, default="DRAFT", index=True)
    description = db.Column(db.Text, nullable=True)
    keywords = db.Column(db.JSON, nullable=False, default=list)
    og_image = db.Column(db.String(512), nullable=True)
    is_home_page = db.Column(db.Boolean, nullable=False, default=False)

    author_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False, index=True)
    author = db.relationship("User", lazy="joined")

    __table_args__ = (
        db.UniqueConstraint("slug", name="uq_pages_slug"),
        # At most one home page per author, enforced by the store itself
        db.Index(
            "uq_pages_home_per_author",
            "author_id",
            unique=True,
            postgresql_where=db.text("is_home_page"),
            sqlite_where=db.text("is_home_page = 1"),
        ),
    )
