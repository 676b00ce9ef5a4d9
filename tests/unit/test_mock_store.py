"""Smoke tests for the in-memory store."""

import pytest

from cloudapi_double.backends.mock.store import DEFAULT_PACKAGES, InMemoryCloudStore


def test_key_crud(store):
    created = store.create_key("laptop", "ssh-rsa AAAA")
    assert created["fingerprint"].count(":") == 15

    assert store.get_key("laptop")["key"] == "ssh-rsa AAAA"
    assert len(store.list_keys()) == 1

    with pytest.raises(ValueError):
        store.create_key("laptop", "ssh-rsa BBBB")

    store.delete_key("laptop")
    assert store.get_key("laptop") is None

    with pytest.raises(KeyError):
        store.delete_key("laptop")


def test_returned_records_are_copies(store):
    store.create_key("laptop", "ssh-rsa AAAA")

    store.get_key("laptop")["name"] = "changed"

    assert store.get_key("laptop")["name"] == "laptop"


def test_filters_compare_booleans_as_lowercase_words(store):
    public = store.list_images({"public": "true"})
    assert len(public) == 2
    assert store.list_images({"public": "false"}) == []


def test_package_lookup_by_name_or_id(store):
    assert store.get_package("Small")["vcpus"] == 1
    assert store.get_package(DEFAULT_PACKAGES[1]["id"])["name"] == "Medium"
    assert store.get_package("Huge") is None


def test_machine_lifecycle(store):
    machine = store.create_machine("web", "Small", "", ["net1"], {"role": "web"}, {"env": "dev"})
    machine_id = machine["id"]
    assert machine["networks"] == ["net1"]
    assert machine["primaryIp"] in machine["ips"]
    assert store.count_machines() == 1

    store.stop_machine(machine_id)
    assert store.get_machine(machine_id)["state"] == "stopped"

    store.resize_machine(machine_id, "Medium")
    resized = store.get_machine(machine_id)
    assert resized["package"] == "Medium"
    assert resized["memory"] == 2048

    store.rename_machine(machine_id, "web-2")
    assert store.list_machines({"name": "web-2"})[0]["id"] == machine_id

    store.delete_machine(machine_id)
    assert store.count_machines() == 0


def test_machine_defaults_to_public_networks(store):
    machine = store.create_machine("", "", "", None, {}, {})

    public_ids = [n["id"] for n in store.list_networks() if n["public"]]
    assert machine["networks"] == public_ids
    assert machine["name"].startswith("machine-")


def test_machine_operations_on_missing_machine_raise(store):
    with pytest.raises(KeyError):
        store.stop_machine("missing")
    with pytest.raises(KeyError):
        store.list_machine_firewall_rules("missing")


def test_create_machine_with_unknown_image_raises(store):
    with pytest.raises(ValueError):
        store.create_machine("web", "Small", "no-such-image", None, {}, {})


def test_firewall_rule_state(store):
    rule = store.create_firewall_rule("FROM any TO all vms ALLOW tcp PORT 22", False)

    assert store.enable_firewall_rule(rule["id"])["enabled"] is True
    assert store.disable_firewall_rule(rule["id"])["enabled"] is False

    store.delete_firewall_rule(rule["id"])
    assert store.list_firewall_rules() == []


def test_empty_store_has_no_catalog():
    empty = InMemoryCloudStore()

    assert empty.list_images(None) == []
    assert empty.list_packages(None) == []
    assert empty.list_networks() == []
    with pytest.raises(ValueError):
        empty.create_machine("web", "", "", None, {}, {})
