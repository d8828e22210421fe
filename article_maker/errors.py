from typing import Optional


class ArticleError(Exception):
    """Base for failures surfaced to the client as a JSON error body."""

    status_code = 500
    message = "Internal error"

    def __init__(self, message: Optional[str] = None, details: Optional[str] = None):
        super().__init__(message or self.message)
        self.message = message or self.message
        self.details = details

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class InvalidPayload(ArticleError):
    status_code = 400
    message = "Invalid request payload"


class StorageUnavailable(ArticleError):
    message = "Failed to create article directory"


class TemplateUnavailable(ArticleError):
    message = "Failed to read article template"


class PersistenceFailure(ArticleError):
    message = "Failed to save article content"
