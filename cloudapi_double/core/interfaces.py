"""Abstract interfaces for the CloudAPI double.

The HTTP dispatch layer depends only on this protocol, never on a concrete
store. Resources travel as plain JSON-ready dicts. Operations that find
nothing may return None; the handlers substitute empty collections or
zero-value resources before rendering.
"""

from __future__ import annotations

from typing import Protocol


class CloudStore(Protocol):
    """Resource state behind the emulated CloudAPI."""

    # --- Keys ---

    def list_keys(self) -> list[dict] | None:
        ...

    def get_key(self, name: str) -> dict | None:
        ...

    def create_key(self, name: str, key: str) -> dict | None:
        ...

    def delete_key(self, name: str) -> None:
        ...

    # --- Images ---

    def list_images(self, filters: dict[str, str] | None) -> list[dict] | None:
        """List images, optionally filtered by exact field values."""
        ...

    def get_image(self, image_id: str) -> dict | None:
        ...

    # --- Packages ---

    def list_packages(self, filters: dict[str, str] | None) -> list[dict] | None:
        """List packages, optionally filtered by exact field values."""
        ...

    def get_package(self, name: str) -> dict | None:
        """Get a package by name or id."""
        ...

    # --- Machines ---

    def list_machines(self, filters: dict[str, str] | None) -> list[dict] | None:
        """List machines, optionally filtered by exact field values."""
        ...

    def count_machines(self) -> int:
        ...

    def get_machine(self, machine_id: str) -> dict | None:
        ...

    def create_machine(
        self,
        name: str,
        package: str,
        image: str,
        networks: list[str] | None,
        metadata: dict[str, str],
        tags: dict[str, str],
    ) -> dict | None:
        ...

    def stop_machine(self, machine_id: str) -> None:
        ...

    def start_machine(self, machine_id: str) -> None:
        ...

    def reboot_machine(self, machine_id: str) -> None:
        ...

    def resize_machine(self, machine_id: str, package: str) -> None:
        ...

    def rename_machine(self, machine_id: str, name: str) -> None:
        ...

    def enable_firewall_machine(self, machine_id: str) -> None:
        ...

    def disable_firewall_machine(self, machine_id: str) -> None:
        ...

    def delete_machine(self, machine_id: str) -> None:
        ...

    def list_machine_firewall_rules(self, machine_id: str) -> list[dict] | None:
        """List firewall rules that apply to one machine."""
        ...

    # --- Firewall rules ---

    def list_firewall_rules(self) -> list[dict] | None:
        ...

    def get_firewall_rule(self, rule_id: str) -> dict | None:
        ...

    def create_firewall_rule(self, rule: str, enabled: bool) -> dict | None:
        ...

    def update_firewall_rule(self, rule_id: str, rule: str, enabled: bool) -> dict | None:
        ...

    def enable_firewall_rule(self, rule_id: str) -> dict | None:
        ...

    def disable_firewall_rule(self, rule_id: str) -> dict | None:
        ...

    def delete_firewall_rule(self, rule_id: str) -> None:
        ...

    # --- Networks ---

    def list_networks(self) -> list[dict] | None:
        ...

    def get_network(self, network_id: str) -> dict | None:
        ...
