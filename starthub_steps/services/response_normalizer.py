import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from starthub_steps.services.http_service_client import ApiResponse
from starthub_steps.utils.json_access import finite_json, get_dict, get_str


@dataclass
class NormalizedResponse:
    status: int
    ok: bool
    body: Dict[str, Any] = field(default_factory=dict)
    firewall_id: Optional[str] = None
    error: Optional[str] = None


def parse_body(raw: bytes) -> Dict[str, Any]:
    text = raw.decode("utf-8", errors="replace") if raw else ""
    try:
        parsed = json.loads(text)
    except ValueError:
        parsed = None
    if isinstance(parsed, dict):
        return finite_json(parsed)
    # non-JSON (HTML error pages, empty bodies) is kept verbatim for diagnosis
    return {"raw": text}


def pretty_body(body: Any) -> str:
    return json.dumps(body, indent=2, sort_keys=True, ensure_ascii=False)


def is_success_status(status: int) -> bool:
    return 200 <= status < 300


def _firewall_id(body: Dict[str, Any]) -> Optional[str]:
    firewall = get_dict(body, "firewall")
    fid = get_str(firewall, "id")
    return fid if fid else None


def normalize_firewall_response(resp: ApiResponse) -> NormalizedResponse:
    body = parse_body(resp.raw_body)

    if not is_success_status(resp.status_code):
        message = get_str(body, "message") or f"HTTP {resp.status_code}"
        return NormalizedResponse(status=resp.status_code, ok=False, body=body, error=message)

    fid = _firewall_id(body)
    if fid is None:
        # a 2xx without the id is useless to downstream steps
        return NormalizedResponse(
            status=resp.status_code, ok=False, body=body, error="response missing firewall.id"
        )
    return NormalizedResponse(status=resp.status_code, ok=True, body=body, firewall_id=fid)
