"""OneLogin session login token operations (API v1)."""
from __future__ import annotations

from ..client import ResourceRepository
from ..exceptions import DecodeError
from ..models import SessionLoginToken, SessionLoginTokenRequest
from ..resource import decode_json

SESSION_LOGIN_TOKENS_PATH = "/api/1/login/auth"


class SessionLoginTokensService:
    """Exchange user credentials for a session login token.

    The v1 endpoint wraps its result in ``{"status": {...}, "data": [...]}``;
    the first ``data`` entry is returned, with the status message copied to
    ``SessionLoginToken.status`` when the entry has none (e.g. when MFA is
    required and only a state token comes back).
    """

    def __init__(self, repository: ResourceRepository, base_url: str):
        self.repository = repository
        self.url = f"{base_url.rstrip('/')}{SESSION_LOGIN_TOKENS_PATH}"

    def create(self, request: SessionLoginTokenRequest) -> SessionLoginToken:
        raw = self.repository.create(self.url, request)
        payload = decode_json(raw)
        if not isinstance(payload, dict):
            raise DecodeError("Expected a JSON object from session login", raw.decode("utf-8", errors="replace"))

        data = payload.get("data")
        if isinstance(data, list):
            entry = data[0] if data else {}
        elif isinstance(data, dict):
            entry = data
        else:
            entry = payload
        if not isinstance(entry, dict):
            raise DecodeError("Unexpected session login payload", raw.decode("utf-8", errors="replace"))

        entry = dict(entry)
        status = payload.get("status")
        if "status" not in entry and isinstance(status, dict) and status.get("message"):
            entry["status"] = status["message"]
        try:
            return SessionLoginToken.model_validate(entry)
        except ValueError as exc:
            raise DecodeError(f"Response does not match SessionLoginToken: {exc}", raw.decode("utf-8", errors="replace")) from exc
