"""HTTP error mapping for use case failures"""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from src.libs.result import Error
from src.app.use_cases.wallet.errors import WalletErrorCode

ERROR_STATUS_CODES = {
    WalletErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    WalletErrorCode.ALREADY_PROCESSED: status.HTTP_409_CONFLICT,
    WalletErrorCode.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    WalletErrorCode.PERSISTENCE_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ClientError(Exception):
    """
    Raised by routes when a use case returns an error result

    The status code defaults to the one mapped for the error code.
    """

    def __init__(self, error: Error, status_code: int = None):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code or ERROR_STATUS_CODES.get(
            error.code, status.HTTP_400_BAD_REQUEST
        )


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": {"code": exc.error.code, "message": exc.error.message}},
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", []))
    message = first.get("msg", "Invalid request parameters")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": f"{location}: {message}" if location else message,
            }
        },
    )
