import logging
import sys
from typing import Any, Dict, Optional, TextIO

from pydantic import ValidationError

from starthub_steps.schemas.envelopes import StepInput
from starthub_steps.utils.json_access import finite_json

logger = logging.getLogger(__name__)


def decode_step_input(raw: str) -> StepInput:
    """Parse stdin text into a StepInput.

    Empty, malformed or wrongly shaped input falls back to an empty StepInput so
    a step can run first in a pipeline or by hand with no input at all.
    """
    if not raw or not raw.strip():
        return StepInput()
    try:
        decoded = StepInput.model_validate_json(raw)
    except (ValidationError, ValueError) as e:
        logger.debug("Ignoring unparseable step input: %s", e)
        return StepInput()
    # NaN and Infinity are accepted on the way in but are not valid JSON out
    return StepInput(state=finite_json(decoded.state), params=finite_json(decoded.params))


def read_step_input(stream: Optional[TextIO] = None) -> StepInput:
    stream = stream if stream is not None else sys.stdin
    try:
        raw = stream.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Could not read step input: %s", e)
        raw = ""
    return decode_step_input(raw)


def params_of(step_input: StepInput) -> Dict[str, Any]:
    params = step_input.params
    return params if isinstance(params, dict) else {}
