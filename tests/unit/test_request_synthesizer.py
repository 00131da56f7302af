from starthub_steps.services.request_synthesizer import (
    ALLOW_ALL_OUTBOUND,
    FieldSpec,
    association_target,
    merge_fields,
    synthesize_firewall_request,
)

SSH_IN = {"protocol": "tcp", "ports": "22", "sources": {"addresses": ["10.0.0.0/8"]}}


def test_defaults_inject_outbound_allow_all_only():
    body = synthesize_firewall_request({})
    assert body["name"] == "starthub-firewall"
    assert body["droplet_ids"] == []
    assert body["tags"] == []
    assert body["outbound_rules"] == ALLOW_ALL_OUTBOUND
    assert not body.get("inbound_rules")


def test_explicit_inbound_only_is_not_widened():
    body = synthesize_firewall_request({"name": "web", "inbound_rules": [SSH_IN]})
    assert body["inbound_rules"] == [SSH_IN]
    assert "outbound_rules" not in body


def test_explicit_outbound_only_is_kept_as_given():
    out = [{"protocol": "tcp", "ports": "443", "destinations": {"addresses": ["0.0.0.0/0"]}}]
    body = synthesize_firewall_request({"outbound_rules": out})
    assert body["outbound_rules"] == out
    assert "inbound_rules" not in body


def test_malformed_rules_do_not_count_as_explicit():
    body = synthesize_firewall_request({"inbound_rules": "ssh"})
    assert "inbound_rules" not in body
    assert body["outbound_rules"] == ALLOW_ALL_OUTBOUND


def test_injected_default_is_a_copy():
    body = synthesize_firewall_request({})
    body["outbound_rules"][0]["destinations"]["addresses"].append("1.2.3.4/32")
    assert synthesize_firewall_request({})["outbound_rules"] == ALLOW_ALL_OUTBOUND
    assert "1.2.3.4/32" not in ALLOW_ALL_OUTBOUND[0]["destinations"]["addresses"]


def test_malformed_array_entries_are_dropped():
    body = synthesize_firewall_request({
        "droplet_ids": [101, "202", "abc", None, True, {"id": 3}],
        "tags": ["web", 7, "", "db"],
        "inbound_rules": [SSH_IN, "bogus", 5],
    })
    assert body["droplet_ids"] == [101, 202]
    assert body["tags"] == ["web", "db"]
    assert body["inbound_rules"] == [SSH_IN]


def test_blank_or_wrongly_typed_name_falls_back_to_default():
    assert synthesize_firewall_request({"name": "  "})["name"] == "starthub-firewall"
    assert synthesize_firewall_request({"name": 12})["name"] == "starthub-firewall"


def test_raw_payload_is_passed_through_untouched():
    raw = {"name": "exact", "inbound_rules": [], "whatever": True}
    body = synthesize_firewall_request({"raw_firewall": raw, "name": "ignored"})
    assert body is raw
    assert "outbound_rules" not in body


def test_merge_fields_omits_optional_fields_without_default():
    specs = [FieldSpec("a", lambda v: v), FieldSpec("b", lambda v: v, lambda: "dflt")]
    assert merge_fields({}, specs) == {"b": "dflt"}
    assert merge_fields({"a": 1, "b": 2}, specs) == {"a": 1, "b": 2}


def test_association_target():
    assert association_target({}) is None
    assert association_target({"project_id": ""}) is None
    assert association_target({"project_id": 9}) is None
    assert association_target({"project_id": "proj-1"}) == "proj-1"


def test_empty_rule_list_still_gets_default_outbound():
    body = synthesize_firewall_request({"inbound_rules": []})
    assert "inbound_rules" not in body
    assert body["outbound_rules"] == ALLOW_ALL_OUTBOUND

    body = synthesize_firewall_request({"inbound_rules": [], "outbound_rules": []})
    assert "inbound_rules" not in body
    assert body["outbound_rules"] == ALLOW_ALL_OUTBOUND


def test_rule_list_with_only_malformed_entries_counts_as_absent():
    body = synthesize_firewall_request({"inbound_rules": ["ssh", 22]})
    assert "inbound_rules" not in body
    assert body["outbound_rules"] == ALLOW_ALL_OUTBOUND


def test_empty_outbound_does_not_hide_explicit_inbound():
    body = synthesize_firewall_request({"inbound_rules": [SSH_IN], "outbound_rules": []})
    assert body["inbound_rules"] == [SSH_IN]
    assert "outbound_rules" not in body
