"""Build the DigitalOcean ``POST /v2/firewalls`` body from step params.

Fields are described by a declarative table of :class:`FieldSpec` entries and
merged by one generic function. Provider rules that cannot be expressed per
field (the non-empty ruleset requirement) are enforced afterwards.
"""

import copy
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from starthub_steps.config import DEFAULT_FIREWALL_NAME, RAW_FIREWALL_KEY
from starthub_steps.utils.json_access import dict_list, int_list, non_empty_str, str_list

logger = logging.getLogger(__name__)

ANYWHERE = {"addresses": ["0.0.0.0/0", "::/0"]}

ALLOW_ALL_OUTBOUND: List[Dict[str, Any]] = [
    {"protocol": "tcp", "ports": "all", "destinations": ANYWHERE},
    {"protocol": "udp", "ports": "all", "destinations": ANYWHERE},
    {"protocol": "icmp", "destinations": ANYWHERE},
]

RULE_DIRECTIONS = ("inbound_rules", "outbound_rules")


def _name(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _rules(value: Any) -> Optional[List[Dict[str, Any]]]:
    # an empty list, or one with only malformed entries, is no rule set at all
    rules = dict_list(value)
    return rules or None


@dataclass(frozen=True)
class FieldSpec:
    name: str
    coerce: Callable[[Any], Any]
    # None means the field is left out of the body when the caller omits it
    default: Optional[Callable[[], Any]] = None


FIREWALL_FIELDS: Sequence[FieldSpec] = (
    FieldSpec("name", _name, lambda: DEFAULT_FIREWALL_NAME),
    FieldSpec("droplet_ids", int_list, list),
    FieldSpec("tags", str_list, list),
    FieldSpec("inbound_rules", _rules),
    FieldSpec("outbound_rules", _rules),
)


def merge_fields(params: Mapping[str, Any], specs: Sequence[FieldSpec]) -> Dict[str, Any]:
    body: Dict[str, Any] = {}
    for spec in specs:
        value = spec.coerce(params.get(spec.name)) if spec.name in params else None
        if value is None and spec.name in params:
            logger.debug("Ignoring malformed %s in params", spec.name)
        if value is None and spec.default is not None:
            value = spec.default()
        if value is not None:
            body[spec.name] = value
    return body


def explicit_rule_directions(body: Mapping[str, Any]) -> List[str]:
    return [d for d in RULE_DIRECTIONS if body.get(d)]


def synthesize_firewall_request(params: Mapping[str, Any]) -> Dict[str, Any]:
    raw = params.get(RAW_FIREWALL_KEY)
    if isinstance(raw, dict):
        logger.info("Using caller-supplied %s payload as-is", RAW_FIREWALL_KEY)
        return raw

    body = merge_fields(params, FIREWALL_FIELDS)

    # The provider rejects a firewall with no rules in either direction.
    # One non-empty direction is trusted, even if the other is left out.
    if not explicit_rule_directions(body):
        body["outbound_rules"] = copy.deepcopy(ALLOW_ALL_OUTBOUND)
        logger.info("No rules supplied; defaulting to allow-all outbound")
    return body


def association_target(params: Mapping[str, Any]) -> Optional[str]:
    return non_empty_str(params, "project_id")
