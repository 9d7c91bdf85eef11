import logging
from pathlib import PurePath
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status

from app.core.config import ALLOWED_UPLOAD_SUFFIX, MAX_UPLOAD_BYTES
from app.core.deps import get_penalty_config
from app.schemas.grading import BatchResultRead
from app.services.batch import process_batch
from app.services.csv_ingest import CsvDecodeError, decode_csv
from app.services.policy import PenaltyConfig

logger = logging.getLogger(__name__)

router = APIRouter()


def _ensure_csv_filename(filename: Optional[str]) -> None:
    if not filename or PurePath(filename).suffix.lower() != ALLOWED_UPLOAD_SUFFIX:
        raise HTTPException(status_code=400, detail="Only CSV files are allowed")


def _read_limited(upload: UploadFile) -> bytes:
    # one byte past the limit is enough to detect an oversize file
    content = upload.file.read(MAX_UPLOAD_BYTES + 1)
    if len(content) > MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"File too large (max {MAX_UPLOAD_BYTES // (1024 * 1024)}MB)",
        )
    return content


# plain def: decoding and scoring are CPU-bound and run in the threadpool
@router.post(
    "/upload",
    response_model=BatchResultRead,
    responses={
        400: {"description": "Missing/invalid file or no valid students"},
    },
)
def upload_grades(
    request: Request,
    csv_file: Optional[UploadFile] = File(None),
    config: PenaltyConfig = Depends(get_penalty_config),
):
    if csv_file is None:
        raise HTTPException(status_code=400, detail="No file was uploaded")

    _ensure_csv_filename(csv_file.filename)
    logger.info("File received: %s", csv_file.filename)

    try:
        content = _read_limited(csv_file)
    finally:
        csv_file.file.close()

    try:
        table = decode_csv(content)
    except CsvDecodeError as e:
        logger.error("Error processing CSV %s: %s", csv_file.filename, e)
        raise HTTPException(status_code=400, detail=str(e))

    result = process_batch(table.header, table.rows, config)

    # picked up by LoggingMiddleware for the access line
    request.state.batch_counts = (result.total_rows, result.valid_rows, result.invalid_rows)

    if not result.records:
        raise HTTPException(status_code=400, detail="No valid students found in file")

    return BatchResultRead.from_result(result)
