"""Create a DigitalOcean firewall.

Reads ``{"state": ..., "params": ...}`` on stdin and writes one
``::starthub:state::`` line on stdout. Logs go to stderr.

Recognised params: ``name``, ``droplet_ids``, ``tags``, ``inbound_rules``,
``outbound_rules``, ``project_id``, ``raw_firewall`` and the token keys
``do_token`` / ``digitalocean_token``.
"""

import sys
from typing import Optional, TextIO

from starthub_steps.config import LOG_LEVEL, RICH_ACTION_KEY
from starthub_steps.logging_config import configure_logging
from starthub_steps.models.enums import PatchForm
from starthub_steps.services.http_service_client import DigitalOceanClient
from starthub_steps.services.input_decoder import read_step_input
from starthub_steps.services.patch_emitter import emit_patch
from starthub_steps.services.step_runner import FirewallStepRunner


def run(patch_form: PatchForm, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None,
        client: Optional[DigitalOceanClient] = None, environ=None) -> int:
    step_input = read_step_input(stdin)
    runner = FirewallStepRunner(
        client=client or DigitalOceanClient(),
        patch_form=patch_form,
        action_key=RICH_ACTION_KEY,
        environ=environ,
    )
    result = runner.run(step_input)
    emit_patch(result.patch, stdout)
    return result.exit_code


def main_narrow():
    configure_logging(LOG_LEVEL)
    sys.exit(run(PatchForm.NARROW))


def main_rich():
    configure_logging(LOG_LEVEL)
    sys.exit(run(PatchForm.RICH))


if __name__ == "__main__":
    main_narrow()
