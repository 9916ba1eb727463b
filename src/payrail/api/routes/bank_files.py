"""Bank file generation endpoint."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Request, Response
from pydantic import BaseModel, Field

from payrail.core.exceptions import EncodingError, UnsupportedFormatError
from payrail.services.bank_files import BankFileService

router = APIRouter(tags=["bank-files"])


class BankFileRequest(BaseModel):
    payments: list[dict[str, Any]] = Field(default_factory=list)
    metadata: dict[str, str] | None = None


@router.post("/bank-files/{format}")
def create_bank_file(format: str, body: BankFileRequest, request: Request) -> Response:
    """Generate a bank file and return it as an attachment."""
    service = BankFileService(getattr(request.app.state, "settings", None))
    try:
        result = service.generate(format, body.payments, body.metadata)
    except UnsupportedFormatError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except EncodingError as exc:
        raise HTTPException(
            status_code=422, detail={"message": str(exc), "index": exc.index}
        ) from exc

    return Response(
        content=result.content,
        media_type=result.content_type,
        headers={
            "Content-Disposition": f'attachment; filename="{result.filename}"',
            "X-Record-Count": str(result.record_count),
            "X-Total-Amount": str(result.total_amount),
        },
    )
