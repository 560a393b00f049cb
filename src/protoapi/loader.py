from __future__ import annotations

import logging
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Iterable, Sequence

from google.api import annotations_pb2
from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2
from google.protobuf.message import DecodeError

from .descriptors import (
    FileDescriptor,
    HttpRule,
    HttpVerb,
    MessageRef,
    MethodDescriptor,
    ServiceDescriptor,
)
from .errors import SchemaError

logger = logging.getLogger(__name__)


def read_request(data: bytes) -> plugin_pb2.CodeGeneratorRequest:
    """Decode a serialized ``CodeGeneratorRequest``.

    Raises:
        SchemaError: If the payload is not a valid request
    """
    request = plugin_pb2.CodeGeneratorRequest()
    try:
        request.ParseFromString(data)
    except DecodeError as exc:
        raise SchemaError("Failed to decode CodeGeneratorRequest") from exc
    return request


def read_descriptor_set(path: str | PathLike[str]) -> descriptor_pb2.FileDescriptorSet:
    """Read a ``FileDescriptorSet`` written by ``protoc --descriptor_set_out``.

    Raises:
        SchemaError: If the file does not hold a valid descriptor set
        FileNotFoundError: If the file does not exist
    """
    data = Path(path).read_bytes()
    descriptor_set = descriptor_pb2.FileDescriptorSet()
    try:
        descriptor_set.ParseFromString(data)
    except DecodeError as exc:
        raise SchemaError(f"Failed to decode descriptor set: {path}") from exc
    return descriptor_set


def load_request(request: plugin_pb2.CodeGeneratorRequest) -> list[FileDescriptor]:
    """Build descriptor trees for every file of a plugin request.

    Only the files listed in ``file_to_generate`` are marked for generation;
    the others are loaded so that type references into them resolve.
    """
    return _load_files(request.proto_file, set(request.file_to_generate))


def load_descriptor_set(
    descriptor_set: descriptor_pb2.FileDescriptorSet,
    files: Sequence[str] | None = None,
) -> list[FileDescriptor]:
    """Build descriptor trees for every file of a descriptor set.

    Args:
        descriptor_set: The parsed descriptor set
        files: Paths of the files to generate; all files when None

    Raises:
        SchemaError: If a requested file is not part of the set
    """
    known = [proto.name for proto in descriptor_set.file]
    if files is None:
        selected = set(known)
    else:
        missing = [name for name in files if name not in known]
        if missing:
            raise SchemaError(f"Files not found in descriptor set: {', '.join(missing)}")
        selected = set(files)
    return _load_files(descriptor_set.file, selected)


def decode_http_rule(options: descriptor_pb2.MethodOptions) -> HttpRule | None:
    """Decode the ``google.api.http`` annotation of a method.

    Verb fields are checked in ``HttpVerb`` declaration order and the first
    populated one wins. Returns None for a missing annotation, a ``custom``
    pattern, or an annotation that cannot be read.
    """
    try:
        if not options.HasExtension(annotations_pb2.http):
            return None
        rule = options.Extensions[annotations_pb2.http]
    except (KeyError, TypeError, ValueError) as exc:
        logger.debug("Unreadable google.api.http annotation: %s", exc)
        return None
    for verb in HttpVerb:
        if rule.HasField(verb.value):
            return HttpRule(verb=verb, path=getattr(rule, verb.value))
    logger.debug("google.api.http annotation has no supported verb: %s", rule.WhichOneof("pattern"))
    return None


@dataclass
class _TypeIndex:
    """Maps fully-qualified message names to their declaring file."""

    refs: dict[str, MessageRef] = field(default_factory=dict)

    def add_file(self, proto: descriptor_pb2.FileDescriptorProto) -> None:
        prefix = f".{proto.package}" if proto.package else ""
        for message in proto.message_type:
            self._add_message(prefix, message, proto.name)

    def _add_message(self, prefix: str, message: descriptor_pb2.DescriptorProto, file: str) -> None:
        full_name = f"{prefix}.{message.name}"
        self.refs[full_name] = MessageRef(name=message.name, file=file)
        for nested in message.nested_type:
            self._add_message(full_name, nested, file)

    def resolve(self, type_name: str, context: str) -> MessageRef:
        key = type_name if type_name.startswith(".") else f".{type_name}"
        ref = self.refs.get(key)
        if ref is None:
            raise SchemaError(f"Unresolvable message type {type_name!r} referenced by {context}")
        return ref


def _load_files(
    protos: Iterable[descriptor_pb2.FileDescriptorProto],
    selected: set[str],
) -> list[FileDescriptor]:
    protos = list(protos)
    index = _TypeIndex()
    for proto in protos:
        index.add_file(proto)
    return [_build_file(proto, index, proto.name in selected) for proto in protos]


def _build_file(proto: descriptor_pb2.FileDescriptorProto, index: _TypeIndex, generate: bool) -> FileDescriptor:
    # Dependencies contribute message types only.
    services = [_build_service(service, index, proto.name) for service in proto.service] if generate else []
    return FileDescriptor(path=proto.name, services=services, generate=generate)


def _build_service(
    service: descriptor_pb2.ServiceDescriptorProto,
    index: _TypeIndex,
    file: str,
) -> ServiceDescriptor:
    methods: list[MethodDescriptor] = []
    for method in service.method:
        context = f"{file}: {service.name}.{method.name}"
        http = decode_http_rule(method.options) if method.HasField("options") else None
        methods.append(
            MethodDescriptor(
                name=method.name,
                input=index.resolve(method.input_type, context),
                output=index.resolve(method.output_type, context),
                http=http,
            )
        )
    return ServiceDescriptor(name=service.name, methods=methods)
