from typing import Any, Mapping, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from schemas import Envelope

DATA_CREATED = "Data Book Created Successfully"
DATA_FETCHED = "Data Book Fetched Successfully"
DATA_UPDATED = "Data book updated successfully"
DATA_DELETED = "Book deleted successfully"
NOT_FOUND = "Data not found"
VALIDATION_ERROR = "Validation Error"
INTERNAL_ERROR = "Internal Server Error"


def send_response(
    status_code: int,
    message: str,
    data: Any = None,
    headers: Optional[Mapping[str, str]] = None,
) -> JSONResponse:
    """Wrap ``data`` in the ``{message, data}`` envelope every endpoint returns."""
    envelope = Envelope(message=message, data=jsonable_encoder(data))
    return JSONResponse(status_code=status_code, content=envelope.model_dump(), headers=headers)
