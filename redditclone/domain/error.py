"""Domain layer errors.

Errors are grouped by kind so callers can branch on ``NotFoundError`` or
``ValidationError`` without knowing the concrete resource.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class InvalidURLError(ValidationError):
    """Raised when a link post carries a URL of the wrong shape."""

    def __init__(self, url: str | None):
        self.url = url
        super().__init__(f"url is invalid: {url!r}")


class InvalidCategoryError(ValidationError):
    """Raised for an unknown category name."""

    def __init__(self, category: str):
        self.category = category
        super().__init__(f"invalid category: {category!r}")


class InvalidPostTypeError(ValidationError):
    """Raised for an unknown post kind."""

    def __init__(self, post_type: str):
        self.post_type = post_type
        super().__init__(f"invalid post type: {post_type!r}")


class InvalidPostTextError(ValidationError):
    """Raised when a text post is created without text."""

    def __init__(self):
        super().__init__("text is required for text posts")


class BadCommentBodyError(ValidationError):
    """Raised when a comment body is empty."""

    def __init__(self):
        super().__init__("comment body is required")


class BadPayloadError(DomainError):
    """Raised when a mutating call has no caller identity attached."""

    def __init__(self, message: str = "bad payload"):
        super().__init__(message)


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class PostNotFoundError(NotFoundError):
    def __init__(self, post_id: str):
        super().__init__("post", post_id)


class CommentNotFoundError(NotFoundError):
    def __init__(self, comment_id: str):
        super().__init__("comment", comment_id)


class VoteNotFoundError(NotFoundError):
    """Raised when a user removes a vote they never cast."""

    def __init__(self, user_id: str):
        super().__init__("vote", user_id)


class StorageError(DomainError):
    """Backend failure, wrapped with the name of the failing operation.

    The original exception is kept as ``__cause__`` (``raise ... from``), so
    each layer that re-wraps adds one link to a traceable chain.
    """

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"{operation} failed")
