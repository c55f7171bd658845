
import logging
import os
from dotenv import load_dotenv
from fastapi import FastAPI, UploadFile, File, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from models import AuditInput, AuditReport, ErrorDetail, HealthResponse, PdfInput
from auditor import GEMINI_MODEL, analyze_security_plan
from errors import AuditError
from prompts import PDF_MIME_TYPE
from utils_pdf import count_pdf_pages, encode_pdf_bytes

load_dotenv()

# ── configurable via .env ──
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="Security Plan Auditor (Gemini)", version="1.0.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS, allow_credentials=True,
    allow_methods=["*"], allow_headers=["*"],
)


@app.exception_handler(AuditError)
async def audit_error_handler(request: Request, exc: AuditError):
    detail = ErrorDetail(**exc.to_detail())
    return JSONResponse(status_code=exc.http_status, content={"detail": detail.model_dump()})


def _audit_response(report: AuditReport) -> JSONResponse:
    return JSONResponse(content=report.model_dump(mode="json", by_alias=True))


@app.get("/health", response_model=HealthResponse)
async def health():
    return {"status": "ok", "gemini_model": GEMINI_MODEL}


@app.post("/analyze")
async def analyze(body: AuditInput):
    report = await run_in_threadpool(analyze_security_plan, body.root)
    return _audit_response(report)


@app.post("/analyze/pdf")
async def analyze_pdf(file: UploadFile = File(...)):
    """Upload a PDF directly instead of sending it base64-encoded."""
    is_pdf_name = (file.filename or "").lower().endswith(".pdf")
    if not is_pdf_name or (file.content_type and file.content_type != PDF_MIME_TYPE):
        raise HTTPException(status_code=400, detail="Por favor sube solo archivos PDF.")

    pdf_bytes = await file.read()
    try:
        pages = count_pdf_pages(pdf_bytes)
    except Exception as e:
        logger.warning("Rejected unreadable PDF %s: %s", file.filename, e)
        raise HTTPException(status_code=400, detail="El archivo no es un PDF legible.") from e
    logger.info("Received %s (%d pages, %d bytes)", file.filename, pages, len(pdf_bytes))

    data = PdfInput(content=encode_pdf_bytes(pdf_bytes))
    report = await run_in_threadpool(analyze_security_plan, data)
    return _audit_response(report)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("API_PORT", "8000")))
