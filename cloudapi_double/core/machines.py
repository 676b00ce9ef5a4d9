"""Machine handler, including query-driven lifecycle actions.

A POST to ``/<account>/machines/<id>?action=<name>`` runs one lifecycle
transition. Actions are checked in the fixed order of MachineAction; an
unknown or missing action is rejected with 405.
"""

from __future__ import annotations

import logging
from enum import Enum

from cloudapi_double.core import resources
from cloudapi_double.core.handlers import list_or_empty, resource_or_empty
from cloudapi_double.core.interfaces import CloudStore
from cloudapi_double.core.query import parse_filters, query_param
from cloudapi_double.core.request import Request
from cloudapi_double.core.responses import NOT_ALLOWED, DispatchError, Response, json_response
from cloudapi_double.core.schemas import CreateMachineRequest, decode_body

logger = logging.getLogger(__name__)

FWRULES_SUFFIX = "/fwrules"


class MachineAction(str, Enum):
    STOP = "stop"
    START = "start"
    REBOOT = "reboot"
    RESIZE = "resize"
    RENAME = "rename"
    ENABLE_FIREWALL = "enable_firewall"
    DISABLE_FIREWALL = "disable_firewall"


def _run_action(action: MachineAction, machine_id: str, raw_query: str, store: CloudStore) -> None:
    if action is MachineAction.STOP:
        store.stop_machine(machine_id)
    elif action is MachineAction.START:
        store.start_machine(machine_id)
    elif action is MachineAction.REBOOT:
        store.reboot_machine(machine_id)
    elif action is MachineAction.RESIZE:
        store.resize_machine(machine_id, query_param(raw_query, "package"))
    elif action is MachineAction.RENAME:
        store.rename_machine(machine_id, query_param(raw_query, "name"))
    elif action is MachineAction.ENABLE_FIREWALL:
        store.enable_firewall_machine(machine_id)
    elif action is MachineAction.DISABLE_FIREWALL:
        store.disable_firewall_machine(machine_id)


def dispatch_action(request: Request, store: CloudStore, machine_id: str) -> Response:
    """Run the lifecycle action named by the ``action`` query parameter."""
    requested = query_param(request.raw_query, "action")
    for action in MachineAction:
        if requested == action.value:
            logger.info("Machine %s: %s", machine_id, action.value)
            _run_action(action, machine_id, request.raw_query, store)
            return json_response(202, None)
    return NOT_ALLOWED


def create_machine(request: Request, store: CloudStore) -> Response:
    opts = decode_body(CreateMachineRequest, request.body)
    machine = store.create_machine(
        opts.name,
        opts.package,
        opts.image,
        opts.networks,
        dict(opts.metadata),
        dict(opts.tags),
    )
    return resource_or_empty(201, machine, resources.empty_machine)


def handle_machines(request: Request, store: CloudStore, collection: str) -> Response:
    machine_id = request.resource_id(collection)

    if request.method == "GET":
        if not machine_id:
            return list_or_empty(store.list_machines(parse_filters(request.raw_query)))
        if machine_id.endswith(FWRULES_SUFFIX):
            owner = machine_id[: -len(FWRULES_SUFFIX)]
            return list_or_empty(store.list_machine_firewall_rules(owner))
        return resource_or_empty(200, store.get_machine(machine_id), resources.empty_machine)

    if request.method == "HEAD":
        if not machine_id:
            return json_response(200, store.count_machines())
        return NOT_ALLOWED

    if request.method == "POST":
        if not machine_id:
            return create_machine(request, store)
        return dispatch_action(request, store, machine_id)

    if request.method == "PUT":
        return NOT_ALLOWED

    if request.method == "DELETE":
        if not machine_id:
            return NOT_ALLOWED
        store.delete_machine(machine_id)
        return json_response(204, None)

    raise DispatchError(request.method, request.path)
