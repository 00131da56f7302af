import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional

from starthub_steps.config import RICH_ACTION_KEY
from starthub_steps.models.enums import ErrorCode, PatchForm
from starthub_steps.schemas.envelopes import FirewallOutcome, StepInput
from starthub_steps.services.credential_resolver import (
    DEFAULT_SOURCES,
    CredentialMissingError,
    CredentialSource,
    resolve_credential,
)
from starthub_steps.services.http_service_client import (
    DigitalOceanClient,
    InvalidRequestError,
    TransportError,
    assign_firewall_best_effort,
)
from starthub_steps.services.input_decoder import params_of
from starthub_steps.services.request_synthesizer import association_target, synthesize_firewall_request
from starthub_steps.services.response_normalizer import (
    is_success_status,
    normalize_firewall_response,
    pretty_body,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1


@dataclass
class StepResult:
    patch: Dict[str, Any]
    exit_code: int


class FirewallStepRunner:
    """One invocation of the create-firewall step.

    Narrow form reports failure through the exit code and an empty patch. Rich
    form reports application failures inside the patch (``ok: false``, exit 0)
    and only exits non-zero for local errors that never reached the API.
    """

    def __init__(
        self,
        client: DigitalOceanClient,
        patch_form: PatchForm = PatchForm.NARROW,
        action_key: str = RICH_ACTION_KEY,
        credential_sources: Iterable[CredentialSource] = DEFAULT_SOURCES,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.client = client
        self.patch_form = PatchForm(patch_form)
        self.action_key = action_key
        self.credential_sources = tuple(credential_sources)
        self.environ = os.environ if environ is None else environ

    def _failure(self, code: ErrorCode, message: str, request: Dict[str, Any], status: int = 0,
                 response: Optional[Dict[str, Any]] = None, exit_code: int = EXIT_FAILED) -> StepResult:
        if self.patch_form == PatchForm.NARROW:
            return StepResult(patch={}, exit_code=EXIT_FAILED)
        outcome = FirewallOutcome(
            ok=False,
            status=status,
            request=request,
            error=f"{code.value}: {message}",
            response=response or {},
        )
        return StepResult(patch=outcome.to_patch(self.action_key), exit_code=exit_code)

    def run(self, step_input: StepInput) -> StepResult:
        params = params_of(step_input)

        try:
            token = resolve_credential(params, self.credential_sources, self.environ)
        except CredentialMissingError as e:
            logger.error("%s", e)
            return self._failure(ErrorCode.CREDENTIAL_MISSING, str(e), request={})

        body = synthesize_firewall_request(params)
        logger.info("Creating firewall %r", body.get("name"))

        try:
            api_response = self.client.create_firewall(token, body)
        except InvalidRequestError as e:
            logger.error("Request not sent (%s): %s", e.code, e)
            return self._failure(ErrorCode.INVALID_REQUEST, str(e), request={})
        except TransportError as e:
            logger.error("Never reached the API (%s, retryable=%s): %s", e.code, e.retryable, e)
            return self._failure(ErrorCode.TRANSPORT_ERROR, str(e), request=body)

        result = normalize_firewall_response(api_response)
        if not result.ok:
            code = ErrorCode.BAD_RESPONSE if is_success_status(result.status) else ErrorCode.APPLICATION_ERROR
            logger.error(
                "Firewall creation failed (HTTP %s): %s\n%s",
                result.status, result.error, pretty_body(result.body),
            )
            return self._failure(code, result.error, request=body, status=result.status,
                                 response=result.body, exit_code=EXIT_OK)

        logger.info("Created firewall %s (HTTP %s)", result.firewall_id, result.status)

        project_id = association_target(params)
        if project_id:
            assign_firewall_best_effort(self.client, token, project_id, result.firewall_id)

        if self.patch_form == PatchForm.NARROW:
            return StepResult(patch={"firewall_id": result.firewall_id}, exit_code=EXIT_OK)

        outcome = FirewallOutcome(
            ok=True,
            status=result.status,
            request=body,
            firewall_id=result.firewall_id,
            response=result.body,
        )
        return StepResult(patch=outcome.to_patch(self.action_key), exit_code=EXIT_OK)
