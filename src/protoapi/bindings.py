"""HTTP binding extraction.

Selects the methods of a service that carry a usable HTTP rule and turns them
into the code-generation-friendly ``MethodBinding``/``ServiceUnit`` pair used
by the generation modules.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from .descriptors import HttpVerb, MessageRef, MethodDescriptor, ServiceDescriptor

logger = logging.getLogger(__name__)

SERVICE_SUFFIX = "Service"


@dataclass(frozen=True)
class MethodBinding:
    """HTTP exposure of one RPC method.

    Attributes:
        name: The method name, used verbatim as the property key
        verb: The HTTP verb
        path: The URL path template, used verbatim
        request: The request message
        response: The response message
    """

    name: str
    verb: HttpVerb
    path: str
    request: MessageRef
    response: MessageRef

    @property
    def request_type(self) -> str:
        return self.request.name

    @property
    def response_type(self) -> str:
        return self.response.name


@dataclass(frozen=True)
class ServiceUnit:
    """A service with at least one bound method.

    Attributes:
        name: The service name without its ``Service`` suffix
        bindings: Bound methods in declaration order
    """

    name: str
    bindings: tuple[MethodBinding, ...]


def service_base_name(name: str) -> str:
    """Strip the conventional ``Service`` suffix.

    Example:
        >>> service_base_name("UserService")
        'User'
    """
    if name.endswith(SERVICE_SUFFIX):
        return name[: -len(SERVICE_SUFFIX)]
    return name


def extract_binding(method: MethodDescriptor) -> MethodBinding | None:
    """Return the method's HTTP binding, or None when the method is unbound.

    A method is unbound when it has no decoded rule or the rule's path is
    empty.
    """
    rule = method.http
    if rule is None:
        return None
    if not rule.path:
        logger.debug("Method %s has an empty %s path; treating as unbound", method.name, rule.verb.value)
        return None
    return MethodBinding(
        name=method.name,
        verb=rule.verb,
        path=rule.path,
        request=method.input,
        response=method.output,
    )


def collect_service(service: ServiceDescriptor) -> ServiceUnit | None:
    """Build a ServiceUnit, or None when no method of the service is bound."""
    bindings = tuple(_bound_methods(service.methods))
    if not bindings:
        logger.debug("Service %s has no HTTP bindings; skipping", service.name)
        return None
    return ServiceUnit(name=service_base_name(service.name), bindings=bindings)


def _bound_methods(methods: Iterable[MethodDescriptor]) -> Iterable[MethodBinding]:
    for method in methods:
        binding = extract_binding(method)
        if binding is not None:
            yield binding
