from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse


class RecipeAppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(RecipeAppError):
    """Bad input shape or length. The form is not submitted."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class Unauthorized(RecipeAppError):
    """The requester does not own the row it tried to change."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFound(RecipeAppError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str, identifier) -> None:
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found")


class Conflict(RecipeAppError):
    """A unique key was already taken."""

    status_code = status.HTTP_409_CONFLICT


class BackendError(RecipeAppError):
    """Any other storage failure. The message is shown to the user as is."""

    status_code = status.HTTP_502_BAD_GATEWAY


def setup_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RecipeAppError)
    async def recipe_app_error_handler(request: Request, exc: RecipeAppError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})
