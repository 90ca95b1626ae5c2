class CmsError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CmsError):
    status_code = 400


class DuplicateSlug(CmsError):
    status_code = 400

    def __init__(self, resource: str, slug: str):
        self.resource = resource
        self.slug = slug
        super().__init__(f"A {resource} with this slug already exists")


class Unauthenticated(CmsError):
    status_code = 401

    def __init__(self, message: str = "User not authenticated"):
        super().__init__(message)


class Forbidden(CmsError):
    status_code = 403

    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(message)


class NotFound(CmsError):
    status_code = 404

    def __init__(self, resource: str):
        self.resource = resource
        super().__init__(f"{resource.capitalize()} not found")


class StorageConflict(CmsError):
    """
    A transaction was aborted by a concurrent conflicting write.
    Nothing was applied; the caller may retry.
    """

    status_code = 409

    def __init__(self, message: str = "The request conflicted with a concurrent update, please retry"):
        super().__init__(message)
