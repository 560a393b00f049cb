"""Descriptor tree consumed by the generation pipeline.

The loader builds these structures from protobuf ``FileDescriptorProto``
messages. Cross-file references are already resolved: every request and
response type carries the path of the schema file that declares it, and the
``google.api.http`` annotation is already decoded into an ``HttpRule``.

Key classes:
- FileDescriptor: One schema file and the services it declares
- ServiceDescriptor: A service and its methods in declaration order
- MethodDescriptor: One RPC method with its decoded HTTP rule
- MessageRef: A message name plus the file that declares it
- HttpRule: A verb and URL path template pair
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class HttpVerb(str, Enum):
    """HTTP verbs supported by the generated wrappers.

    Members are declared in the order used to pick a winner when more than
    one verb field of an annotation is populated.
    """

    POST = "post"
    GET = "get"
    PUT = "put"
    DELETE = "delete"
    PATCH = "patch"


@dataclass(frozen=True)
class HttpRule:
    """Decoded ``google.api.http`` annotation.

    Attributes:
        verb: The HTTP verb of the binding
        path: The URL path template, kept verbatim
    """

    verb: HttpVerb
    path: str


@dataclass(frozen=True)
class MessageRef:
    """Reference to a message type.

    Attributes:
        name: The simple (unqualified) message name, e.g. "GetUserReq"
        file: Path of the schema file declaring the message, e.g. "proto/user/user.proto"
    """

    name: str
    file: str


@dataclass(frozen=True)
class MethodDescriptor:
    """One RPC method.

    Attributes:
        name: The method name as declared in the schema
        input: The request message
        output: The response message
        http: The decoded HTTP annotation, or None when absent or unusable
    """

    name: str
    input: MessageRef
    output: MessageRef
    http: HttpRule | None = None


@dataclass(frozen=True)
class ServiceDescriptor:
    name: str
    methods: list[MethodDescriptor] = field(default_factory=list)


@dataclass(frozen=True)
class FileDescriptor:
    """One schema file.

    Attributes:
        path: The logical file path as given to the compiler
        services: Services declared in the file, in declaration order
        generate: Whether wrappers should be emitted for this file's services
    """

    path: str
    services: list[ServiceDescriptor] = field(default_factory=list)
    generate: bool = True
