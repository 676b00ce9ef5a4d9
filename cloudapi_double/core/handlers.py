"""Resource handlers for keys, images, packages, firewall rules and networks.

Each handler takes the request, the store and the resolved collection path
(``/<account>/<family>``) and returns a Response. Store and decode errors
are raised unchanged; the router renders them as 500s.
"""

from __future__ import annotations

from cloudapi_double.core import resources
from cloudapi_double.core.interfaces import CloudStore
from cloudapi_double.core.query import parse_filters
from cloudapi_double.core.request import Request
from cloudapi_double.core.responses import (
    NOT_ALLOWED,
    NOT_FOUND,
    DispatchError,
    Response,
    json_response,
)
from cloudapi_double.core.schemas import CreateFwRuleOpts, CreateKeyOpts, decode_body


def list_or_empty(items) -> Response:
    """200 with the collection, rendering a missing result as []."""
    return json_response(200, items if items is not None else [])


def resource_or_empty(status: int, item, empty) -> Response:
    """Render ``item``, or the family's zero-value record when it is None."""
    return json_response(status, item if item is not None else empty())


def handle_keys(request: Request, store: CloudStore, collection: str) -> Response:
    key_name = request.resource_id(collection)

    if request.method == "GET":
        if not key_name:
            return list_or_empty(store.list_keys())
        return resource_or_empty(200, store.get_key(key_name), resources.empty_key)

    if request.method == "POST":
        if not key_name:
            opts = decode_body(CreateKeyOpts, request.body)
            key = store.create_key(opts.name, opts.key)
            return resource_or_empty(201, key, resources.empty_key)
        return NOT_ALLOWED

    if request.method == "PUT":
        return NOT_ALLOWED

    if request.method == "DELETE":
        if not key_name:
            return NOT_ALLOWED
        store.delete_key(key_name)
        return json_response(204, None)

    raise DispatchError(request.method, request.path)


def handle_images(request: Request, store: CloudStore, collection: str) -> Response:
    image_id = request.resource_id(collection)

    if request.method == "GET":
        if not image_id:
            return list_or_empty(store.list_images(parse_filters(request.raw_query)))
        return resource_or_empty(200, store.get_image(image_id), resources.empty_image)

    if request.method == "POST":
        # Creating an image from a machine is not emulated.
        if not image_id:
            return NOT_FOUND
        return NOT_ALLOWED

    if request.method in ("PUT", "DELETE"):
        return NOT_ALLOWED

    raise DispatchError(request.method, request.path)


def handle_packages(request: Request, store: CloudStore, collection: str) -> Response:
    package_name = request.resource_id(collection)

    if request.method == "GET":
        if not package_name:
            return list_or_empty(store.list_packages(parse_filters(request.raw_query)))
        return resource_or_empty(200, store.get_package(package_name), resources.empty_package)

    if request.method in ("POST", "PUT", "DELETE"):
        return NOT_ALLOWED

    raise DispatchError(request.method, request.path)


def handle_firewall_rules(request: Request, store: CloudStore, collection: str) -> Response:
    rule_id = request.resource_id(collection)

    if request.method == "GET":
        if not rule_id:
            return list_or_empty(store.list_firewall_rules())
        return resource_or_empty(200, store.get_firewall_rule(rule_id), resources.empty_firewall_rule)

    if request.method == "POST":
        if not rule_id:
            opts = decode_body(CreateFwRuleOpts, request.body)
            rule = store.create_firewall_rule(opts.rule, opts.enabled)
            return resource_or_empty(201, rule, resources.empty_firewall_rule)

        target, _, verb = rule_id.rpartition("/")
        if target and verb == "enable":
            rule = store.enable_firewall_rule(target)
            return resource_or_empty(200, rule, resources.empty_firewall_rule)
        if target and verb == "disable":
            rule = store.disable_firewall_rule(target)
            return resource_or_empty(200, rule, resources.empty_firewall_rule)

        opts = decode_body(CreateFwRuleOpts, request.body)
        rule = store.update_firewall_rule(rule_id, opts.rule, opts.enabled)
        return resource_or_empty(200, rule, resources.empty_firewall_rule)

    if request.method == "PUT":
        return NOT_ALLOWED

    if request.method == "DELETE":
        if not rule_id:
            return NOT_ALLOWED
        store.delete_firewall_rule(rule_id)
        return json_response(204, None)

    raise DispatchError(request.method, request.path)


def handle_networks(request: Request, store: CloudStore, collection: str) -> Response:
    network_id = request.resource_id(collection)

    if request.method == "GET":
        if not network_id:
            return list_or_empty(store.list_networks())
        return resource_or_empty(200, store.get_network(network_id), resources.empty_network)

    if request.method in ("POST", "PUT", "DELETE"):
        return NOT_ALLOWED

    raise DispatchError(request.method, request.path)
