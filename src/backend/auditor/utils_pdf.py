
import base64
from io import BytesIO

import pdfplumber


def strip_data_uri(value: str) -> str:
    """Drop a ``data:application/pdf;base64,`` style prefix if present."""
    if value.startswith("data:") and "," in value:
        return value.split(",", 1)[1]
    return value


def encode_pdf_bytes(pdf_bytes: bytes) -> str:
    return base64.b64encode(pdf_bytes).decode("ascii")


def count_pdf_pages(pdf_bytes: bytes) -> int:
    """Open the bytes with pdfplumber and return the page count.
    Raises if the bytes are not a readable PDF.
    """
    with pdfplumber.open(BytesIO(pdf_bytes)) as pdf:
        return len(pdf.pages)
