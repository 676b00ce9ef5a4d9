"""In-memory CloudAPI store for testing."""

from __future__ import annotations

import copy
import hashlib
import threading
import uuid
from datetime import datetime, timezone

DEFAULT_IMAGES = [
    {
        "id": "11223344-0a0a-ff99-11bb-0a1b2c3d4e5f",
        "name": "ubuntu14.04",
        "os": "linux",
        "version": "14.04",
        "type": "virtualmachine",
        "description": "Ubuntu 14.04 64-bit image",
        "requirements": {},
        "homepage": "https://docs.joyent.com/images/linux/ubuntu",
        "published_at": "2014-09-30T12:00:00Z",
        "public": True,
        "state": "active",
        "tags": {"role": "os"},
        "eula": "",
        "acl": [],
    },
    {
        "id": "11223344-0a0a-ee88-22ab-00aa11bb22cc",
        "name": "base64",
        "os": "smartos",
        "version": "14.2.0",
        "type": "smartmachine",
        "description": "A 64-bit SmartOS image with base packages",
        "requirements": {},
        "homepage": "https://docs.joyent.com/images/smartos/base",
        "published_at": "2014-08-20T12:00:00Z",
        "public": True,
        "state": "active",
        "tags": {"role": "os"},
        "eula": "",
        "acl": [],
    },
]

DEFAULT_PACKAGES = [
    {
        "name": "Small",
        "memory": 1024,
        "disk": 16384,
        "swap": 2048,
        "vcpus": 1,
        "default": True,
        "id": "11223344-1212-abab-3434-aabbccddeeff",
        "version": "1.0.2",
        "description": "Small package",
        "group": "Standard",
    },
    {
        "name": "Medium",
        "memory": 2048,
        "disk": 32768,
        "swap": 4096,
        "vcpus": 2,
        "default": False,
        "id": "11223344-1212-abab-3434-112233445566",
        "version": "1.0.2",
        "description": "Medium package",
        "group": "Standard",
    },
]

DEFAULT_NETWORKS = [
    {
        "id": "123abc4d-0011-aabb-2233-ccdd4455",
        "name": "Test-Joyent-Public",
        "public": True,
        "description": "",
    },
    {
        "id": "456def0a-33ff-7f8e-9a0b-33bb44cc",
        "name": "Test-Joyent-Private",
        "public": False,
        "description": "",
    },
]


def _now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def _fingerprint(key: str) -> str:
    digest = hashlib.md5(key.encode("utf-8")).hexdigest()
    return ":".join(digest[i:i + 2] for i in range(0, len(digest), 2))


def _as_filter_value(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _matches(item: dict, filters: dict[str, str] | None) -> bool:
    if not filters:
        return True
    for key, expected in filters.items():
        if key.startswith("tag."):
            actual = (item.get("tags") or {}).get(key[len("tag."):])
        else:
            actual = item.get(key)
        if actual is None or _as_filter_value(actual) != expected:
            return False
    return True


class InMemoryCloudStore:
    def __init__(self, images=None, packages=None, networks=None):
        self._lock = threading.RLock()
        self._keys: dict[str, dict] = {}
        self._images = {i["id"]: copy.deepcopy(i) for i in (images or [])}
        self._packages = {p["name"]: copy.deepcopy(p) for p in (packages or [])}
        self._networks = {n["id"]: copy.deepcopy(n) for n in (networks or [])}
        self._machines: dict[str, dict] = {}
        self._fw_rules: dict[str, dict] = {}
        self._next_ip = 2

    @classmethod
    def with_defaults(cls) -> "InMemoryCloudStore":
        return cls(images=DEFAULT_IMAGES, packages=DEFAULT_PACKAGES, networks=DEFAULT_NETWORKS)

    # --- Keys ---

    def list_keys(self) -> list[dict]:
        with self._lock:
            return copy.deepcopy(list(self._keys.values()))

    def get_key(self, name: str) -> dict | None:
        with self._lock:
            return copy.deepcopy(self._keys.get(name))

    def create_key(self, name: str, key: str) -> dict:
        with self._lock:
            if name in self._keys:
                raise ValueError(f"Key {name} already exists")
            record = {"name": name, "fingerprint": _fingerprint(key), "key": key}
            self._keys[name] = record
            return copy.deepcopy(record)

    def delete_key(self, name: str) -> None:
        with self._lock:
            if self._keys.pop(name, None) is None:
                raise KeyError(f"Key {name} not found")

    # --- Images ---

    def list_images(self, filters: dict[str, str] | None) -> list[dict]:
        with self._lock:
            return copy.deepcopy([i for i in self._images.values() if _matches(i, filters)])

    def get_image(self, image_id: str) -> dict | None:
        with self._lock:
            return copy.deepcopy(self._images.get(image_id))

    def put_image(self, image: dict) -> None:
        with self._lock:
            self._images[image["id"]] = copy.deepcopy(image)

    # --- Packages ---

    def list_packages(self, filters: dict[str, str] | None) -> list[dict]:
        with self._lock:
            return copy.deepcopy([p for p in self._packages.values() if _matches(p, filters)])

    def get_package(self, name: str) -> dict | None:
        with self._lock:
            return copy.deepcopy(self._find_package(name))

    def put_package(self, package: dict) -> None:
        with self._lock:
            self._packages[package["name"]] = copy.deepcopy(package)

    def _find_package(self, name: str) -> dict | None:
        if name in self._packages:
            return self._packages[name]
        for package in self._packages.values():
            if package.get("id") == name:
                return package
        return None

    def _default_package(self) -> dict | None:
        for package in self._packages.values():
            if package.get("default"):
                return package
        return next(iter(self._packages.values()), None)

    # --- Machines ---

    def list_machines(self, filters: dict[str, str] | None) -> list[dict]:
        with self._lock:
            return copy.deepcopy([m for m in self._machines.values() if _matches(m, filters)])

    def count_machines(self) -> int:
        with self._lock:
            return len(self._machines)

    def get_machine(self, machine_id: str) -> dict | None:
        with self._lock:
            return copy.deepcopy(self._machines.get(machine_id))

    def create_machine(self, name, package, image, networks, metadata, tags) -> dict:
        with self._lock:
            pkg = self._find_package(package) if package else self._default_package()
            if pkg is None:
                raise ValueError(f"Package {package} not found")

            if image:
                img = self._images.get(image)
                if img is None:
                    raise ValueError(f"Image {image} not found")
            else:
                img = next(iter(self._images.values()), {})

            if networks is None:
                networks = [n["id"] for n in self._networks.values() if n.get("public")]

            ip = f"10.88.88.{self._next_ip}"
            self._next_ip += 1
            now = _now()
            machine_id = str(uuid.uuid4())
            machine = {
                "id": machine_id,
                "name": name or f"machine-{machine_id[:8]}",
                "type": img.get("type", "virtualmachine"),
                "state": "running",
                "memory": pkg["memory"],
                "disk": pkg["disk"],
                "ips": [ip],
                "metadata": dict(metadata),
                "tags": dict(tags),
                "created": now,
                "updated": now,
                "package": pkg["name"],
                "image": img.get("id", ""),
                "primaryIp": ip,
                "networks": list(networks),
                "firewall_enabled": False,
            }
            self._machines[machine_id] = machine
            return copy.deepcopy(machine)

    def _update_machine(self, machine_id: str, **fields) -> None:
        with self._lock:
            machine = self._machines.get(machine_id)
            if machine is None:
                raise KeyError(f"Machine {machine_id} not found")
            machine.update(fields, updated=_now())

    def stop_machine(self, machine_id: str) -> None:
        self._update_machine(machine_id, state="stopped")

    def start_machine(self, machine_id: str) -> None:
        self._update_machine(machine_id, state="running")

    def reboot_machine(self, machine_id: str) -> None:
        self._update_machine(machine_id, state="running")

    def resize_machine(self, machine_id: str, package: str) -> None:
        with self._lock:
            pkg = self._find_package(package)
            if pkg is None:
                raise ValueError(f"Package {package} not found")
            self._update_machine(machine_id, package=pkg["name"], memory=pkg["memory"], disk=pkg["disk"])

    def rename_machine(self, machine_id: str, name: str) -> None:
        self._update_machine(machine_id, name=name)

    def enable_firewall_machine(self, machine_id: str) -> None:
        self._update_machine(machine_id, firewall_enabled=True)

    def disable_firewall_machine(self, machine_id: str) -> None:
        self._update_machine(machine_id, firewall_enabled=False)

    def delete_machine(self, machine_id: str) -> None:
        with self._lock:
            if self._machines.pop(machine_id, None) is None:
                raise KeyError(f"Machine {machine_id} not found")

    def list_machine_firewall_rules(self, machine_id: str) -> list[dict]:
        with self._lock:
            if machine_id not in self._machines:
                raise KeyError(f"Machine {machine_id} not found")
            return copy.deepcopy([r for r in self._fw_rules.values() if machine_id in r["rule"]])

    # --- Firewall rules ---

    def list_firewall_rules(self) -> list[dict]:
        with self._lock:
            return copy.deepcopy(list(self._fw_rules.values()))

    def get_firewall_rule(self, rule_id: str) -> dict | None:
        with self._lock:
            return copy.deepcopy(self._fw_rules.get(rule_id))

    def create_firewall_rule(self, rule: str, enabled: bool) -> dict:
        with self._lock:
            record = {"id": str(uuid.uuid4()), "enabled": enabled, "rule": rule}
            self._fw_rules[record["id"]] = record
            return copy.deepcopy(record)

    def _update_firewall_rule(self, rule_id: str, **fields) -> dict:
        with self._lock:
            record = self._fw_rules.get(rule_id)
            if record is None:
                raise KeyError(f"Firewall rule {rule_id} not found")
            record.update(fields)
            return copy.deepcopy(record)

    def update_firewall_rule(self, rule_id: str, rule: str, enabled: bool) -> dict:
        return self._update_firewall_rule(rule_id, rule=rule, enabled=enabled)

    def enable_firewall_rule(self, rule_id: str) -> dict:
        return self._update_firewall_rule(rule_id, enabled=True)

    def disable_firewall_rule(self, rule_id: str) -> dict:
        return self._update_firewall_rule(rule_id, enabled=False)

    def delete_firewall_rule(self, rule_id: str) -> None:
        with self._lock:
            if self._fw_rules.pop(rule_id, None) is None:
                raise KeyError(f"Firewall rule {rule_id} not found")

    # --- Networks ---

    def list_networks(self) -> list[dict]:
        with self._lock:
            return copy.deepcopy(list(self._networks.values()))

    def get_network(self, network_id: str) -> dict | None:
        with self._lock:
            return copy.deepcopy(self._networks.get(network_id))
