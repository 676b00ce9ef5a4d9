"""Zero-value resource records rendered when a store returns nothing.

The shapes mirror the CloudAPI wire format: scalar fields carry their empty
value and nested collections render as null.
"""

from __future__ import annotations


def empty_key() -> dict:
    return {"name": "", "fingerprint": "", "key": ""}


def empty_image() -> dict:
    return {
        "id": "",
        "name": "",
        "os": "",
        "version": "",
        "type": "",
        "description": "",
        "requirements": None,
        "homepage": "",
        "published_at": "",
        "public": False,
        "state": "",
        "tags": None,
        "eula": "",
        "acl": None,
    }


def empty_package() -> dict:
    return {
        "name": "",
        "memory": 0,
        "disk": 0,
        "swap": 0,
        "vcpus": 0,
        "default": False,
        "id": "",
        "version": "",
        "description": "",
        "group": "",
    }


def empty_machine() -> dict:
    return {
        "id": "",
        "name": "",
        "type": "",
        "state": "",
        "memory": 0,
        "disk": 0,
        "ips": None,
        "metadata": None,
        "tags": None,
        "created": "",
        "updated": "",
        "package": "",
        "image": "",
        "primaryIp": "",
        "networks": None,
        "firewall_enabled": False,
    }


def empty_firewall_rule() -> dict:
    return {"id": "", "enabled": False, "rule": ""}


def empty_network() -> dict:
    return {"id": "", "name": "", "public": False, "description": ""}
