# Import every model so metadata is complete for create_all / migrations
from .user import User
from .page import Page
from .collection import Collection, CollectionItem
from .menu import Menu
from .form import Form, FormResponse
from .media import Media

__all__ = [
    "User",
    "Page",
    "Collection",
    "CollectionItem",
    "Menu",
    "Form",
    "FormResponse",
    "Media",
]
