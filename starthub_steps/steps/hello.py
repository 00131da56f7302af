"""Template step: greets ``params.name`` and touches no external service."""

import logging
import sys
from typing import Optional, TextIO

from starthub_steps.config import LOG_LEVEL
from starthub_steps.logging_config import configure_logging
from starthub_steps.services.input_decoder import params_of, read_step_input
from starthub_steps.services.patch_emitter import emit_patch
from starthub_steps.utils.json_access import get_str

logger = logging.getLogger(__name__)


def run(stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> int:
    params = params_of(read_step_input(stdin))
    name = get_str(params, "name")
    if name is None:
        name = "world"
    logger.info("Greeting %s", name)
    emit_patch({"my_action": {"greeting": f"hello, {name}"}}, stdout)
    return 0


def main():
    configure_logging(LOG_LEVEL)
    sys.exit(run())


if __name__ == "__main__":
    main()
