from buzzinga.extensions import db
from .base import BaseModel


class Collection(BaseModel):
    __tablename__ = "collections"

    name = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    fields = db.Column(db.JSON, nullable=False, default=dict)

    author_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False, index=True)
    author = db.relationship("User", lazy="joined")

    items = db.relationship(
        "CollectionItem",
        back_populates="collection",
        order_by="CollectionItem.created_at.desc()",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        db.UniqueConstraint("slug", name="uq_collections_slug"),
    )


class CollectionItem(BaseModel):
    __tablename__ = "collection_items"

    collection_id = db.Column(
        db.String(36),
        db.ForeignKey("collections.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    data = db.Column(db.JSON, nullable=False, default=dict)
    status = db.Column(db.String(20), nullable=False, default="draft")

    collection = db.relationship("Collection", back_populates="items")
