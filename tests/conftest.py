from __future__ import annotations

import logging
from typing import Callable, Iterator

import pytest
from google.api import annotations_pb2
from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2

from protoapi.descriptors import HttpRule, HttpVerb, MessageRef, MethodDescriptor, ServiceDescriptor

MethodFactory = Callable[..., MethodDescriptor]


@pytest.fixture(autouse=True)
def _restore_protoapi_logger() -> Iterator[None]:
    logger = logging.getLogger("protoapi")
    handlers, level, propagate = logger.handlers[:], logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture()
def make_method() -> MethodFactory:
    def factory(
        name: str = "GetUser",
        verb: HttpVerb | None = HttpVerb.POST,
        path: str = "/api/UserService/GetUser",
        request: str = "GetUserReq",
        response: str = "GetUserResp",
        file: str = "proto/user/user.proto",
    ) -> MethodDescriptor:
        return MethodDescriptor(
            name=name,
            input=MessageRef(name=request, file=file),
            output=MessageRef(name=response, file=file),
            http=HttpRule(verb=verb, path=path) if verb is not None else None,
        )

    return factory


@pytest.fixture()
def user_service(make_method: MethodFactory) -> ServiceDescriptor:
    return ServiceDescriptor(name="UserService", methods=[make_method()])


@pytest.fixture()
def user_file_proto() -> descriptor_pb2.FileDescriptorProto:
    proto = descriptor_pb2.FileDescriptorProto(name="proto/user/user.proto", package="user", syntax="proto3")
    proto.dependency.append("google/api/annotations.proto")
    proto.message_type.add(name="GetUserReq")
    resp = proto.message_type.add(name="GetUserResp")
    resp.nested_type.add(name="Profile")
    service = proto.service.add(name="UserService")
    method = service.method.add(name="GetUser", input_type=".user.GetUserReq", output_type=".user.GetUserResp")
    method.options.Extensions[annotations_pb2.http].post = "/api/UserService/GetUser"
    service.method.add(name="Ping", input_type=".user.GetUserReq", output_type=".user.GetUserResp")
    return proto


@pytest.fixture()
def user_request(user_file_proto: descriptor_pb2.FileDescriptorProto) -> plugin_pb2.CodeGeneratorRequest:
    request = plugin_pb2.CodeGeneratorRequest()
    request.proto_file.append(user_file_proto)
    request.file_to_generate.append(user_file_proto.name)
    return request
