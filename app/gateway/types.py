"""Core types and DTOs for the Gemini gateway."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class CallStatus(str, Enum):
    """Outcome of one upstream call."""

    SUCCESS = "success"
    UPSTREAM_ERROR = "upstream_error"  # Non-2xx from the vendor, status/body forwarded
    TRANSPORT_ERROR = "transport_error"  # Network failure or undecodable body


class ResponseShape(str, Enum):
    """Recognized generateContent response layouts."""

    CANDIDATES = "candidates"  # {"candidates": [{"content": ...}]}
    OUTPUT = "output"  # {"output": [{"content": ...}]}
    UNRECOGNIZED = "unrecognized"  # anything else, returned pretty-printed


@dataclass(frozen=True)
class ExtractedText:
    shape: ResponseShape
    text: str


# ---------------------------------------------------------------------------
# Call result: unified DTO returned by the client, never raised
# ---------------------------------------------------------------------------


@dataclass
class ModelCallResult:
    """Result of a Gemini call, shaped for the HTTP response.

    ``status_code`` is the HTTP status the API layer should answer with:
    200 on success, the upstream status on UPSTREAM_ERROR, 500 on
    TRANSPORT_ERROR.
    """

    status: CallStatus = CallStatus.SUCCESS
    status_code: int = 200

    # Success
    model: str | None = None
    extracted: str | None = None
    shape: ResponseShape | None = None
    raw: Any = None

    # Failure
    body: str = ""
    hint: str = ""
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.status == CallStatus.SUCCESS

    def to_response_dict(self) -> dict[str, Any]:
        if self.status == CallStatus.TRANSPORT_ERROR:
            return {"ok": False, "error": self.error}

        if self.status == CallStatus.UPSTREAM_ERROR:
            data: dict[str, Any] = {"ok": False, "status": self.status_code, "body": self.body}
            if self.hint:
                data["hint"] = self.hint
            return data

        data = {"ok": True}
        if self.model is not None:
            data["model"] = self.model
        if self.extracted is not None:
            data["extracted"] = self.extracted
        data["raw"] = self.raw
        return data
