from fastapi.responses import JSONResponse

from app.processor.models import PipelineResult


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def pipeline_response(result: PipelineResult) -> JSONResponse:
    """Serialize a PipelineResult into the upload endpoint's JSON envelope."""
    if not result.success:
        return error_response(result.http_status, result.error_message)
    return JSONResponse(
        status_code=200,
        content={
            "success": True,
            "message": "File processed successfully",
            "data": {
                "filename": result.filename,
                "fileSize": result.file_size,
                "fileType": result.mime_type,
                "extractedText": result.extracted_text,
                "textLength": result.text_length,
                "aiAnalysis": result.analysis,
            },
        },
    )
