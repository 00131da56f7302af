import json
import sys
from typing import Any, Dict, Optional, TextIO

from starthub_steps.config import STATE_SENTINEL


def format_patch_line(patch: Dict[str, Any]) -> str:
    # compact separators keep the JSON on one line right after the sentinel
    return STATE_SENTINEL + json.dumps(patch, separators=(",", ":"), allow_nan=False)


def emit_patch(patch: Dict[str, Any], stream: Optional[TextIO] = None) -> None:
    stream = stream if stream is not None else sys.stdout
    stream.write(format_patch_line(patch) + "\n")
    stream.flush()
