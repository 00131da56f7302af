import logging
import requests
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from starthub_steps.config import DO_API_BASE_URL, HTTP_CONNECT_TIMEOUT_S, HTTP_READ_TIMEOUT_S

logger = logging.getLogger(__name__)


class ClientError(RuntimeError):
    def __init__(self, code: str, message: str, retryable: bool):
        super().__init__(message)
        self.code = code
        self.retryable = retryable


class TransportError(ClientError):
    """The request never got an HTTP response (timeout, refused, DNS)."""


class InvalidRequestError(ClientError):
    """The body could not be encoded as JSON, so nothing was sent."""


@dataclass(frozen=True)
class ApiResponse:
    status_code: int
    raw_body: bytes


class DigitalOceanClient:
    def __init__(
        self,
        base_url: str = DO_API_BASE_URL,
        connect_timeout_s: float = HTTP_CONNECT_TIMEOUT_S,
        read_timeout_s: float = HTTP_READ_TIMEOUT_S,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = (connect_timeout_s, read_timeout_s)
        self.session = session or requests.Session()

    def _headers(self, token: str) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Authorization": f"Bearer {token}",
        }

    def _post(self, token: str, path: str, body: Dict[str, Any]) -> ApiResponse:
        url = self.base_url + path
        try:
            resp = self.session.post(url, json=body, headers=self._headers(token), timeout=self.timeout)
        except requests.exceptions.InvalidJSONError as e:
            raise InvalidRequestError("INVALID_REQUEST", f"Request body for POST {url} is not valid JSON: {e}", False)
        except requests.Timeout as e:
            raise TransportError("SERVICE_TIMEOUT", f"POST {url} timed out: {e}", True)
        except requests.RequestException as e:
            raise TransportError("SERVICE_UNREACHABLE", f"POST {url} failed: {e}", True)

        logger.debug("POST %s -> HTTP %s", url, resp.status_code)
        return ApiResponse(status_code=resp.status_code, raw_body=resp.content or b"")

    def create_firewall(self, token: str, body: Dict[str, Any]) -> ApiResponse:
        return self._post(token, "/v2/firewalls", body)

    def assign_resources(self, token: str, project_id: str, urns: Iterable[str]) -> ApiResponse:
        return self._post(token, f"/v2/projects/{project_id}/resources", {"resources": list(urns)})


def assign_firewall_best_effort(client: DigitalOceanClient, token: str, project_id: str, firewall_id: str) -> bool:
    """Attach the firewall to a project. Failures only warn: the firewall exists either way."""
    try:
        resp = client.assign_resources(token, project_id, [f"do:firewall:{firewall_id}"])
    except ClientError as e:
        logger.warning("Could not assign firewall %s to project %s: %s", firewall_id, project_id, e)
        return False

    if resp.status_code < 200 or resp.status_code >= 300:
        logger.warning(
            "Project %s rejected firewall %s (HTTP %s): %s",
            project_id, firewall_id, resp.status_code,
            resp.raw_body.decode("utf-8", errors="replace"),
        )
        return False

    logger.info("Assigned firewall %s to project %s", firewall_id, project_id)
    return True
