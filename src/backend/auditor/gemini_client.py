
import os
import requests
from dotenv import load_dotenv

load_dotenv()

# ── Gemini generation options (from .env) ──
GEMINI_BASE_URL = os.getenv("GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta")
GEMINI_TEMPERATURE = float(os.getenv("GEMINI_TEMPERATURE", "0.2"))
GEMINI_TIMEOUT = os.getenv("GEMINI_TIMEOUT")


class GeminiAPIError(Exception):
    """Non-2xx answer from the Gemini REST API, keeping the HTTP status."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"[{status_code}] {message}")


def _error_message(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or resp.reason or "Gemini request failed"
    err = body.get("error") if isinstance(body, dict) else None
    if isinstance(err, dict):
        return err.get("message") or resp.text
    # Proxies and gateways answer with {"error": "Forbidden"} or bare strings
    return str(err) if err else resp.text


class GeminiClient:
    def __init__(self, api_key: str, model: str, base_url: str = None, timeout: float = None):
        self.api_key = api_key
        self.model = model
        self.base_url = (base_url or GEMINI_BASE_URL).rstrip("/")
        if timeout is None and GEMINI_TIMEOUT:
            timeout = float(GEMINI_TIMEOUT)
        self.timeout = timeout

    def generate_json(self, parts: list[dict], schema: dict, temperature: float = None) -> str:
        """One generateContent call constrained to JSON output; returns the raw text."""
        payload = {
            "contents": [{"role": "user", "parts": parts}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": schema,
                "temperature": GEMINI_TEMPERATURE if temperature is None else temperature,
            },
        }
        r = requests.post(
            f"{self.base_url}/models/{self.model}:generateContent",
            json=payload,
            headers={"x-goog-api-key": self.api_key},
            timeout=self.timeout,
        )
        if not r.ok:
            raise GeminiAPIError(r.status_code, _error_message(r))

        candidates = r.json().get("candidates") or []
        if not candidates:
            return ""
        content_parts = candidates[0].get("content", {}).get("parts", [])
        return "".join(p.get("text", "") for p in content_parts)
