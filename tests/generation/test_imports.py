from __future__ import annotations

import random

import pytest

from protoapi.bindings import MethodBinding, extract_binding
from protoapi.descriptors import HttpVerb
from protoapi.generation.imports import (
    ImportGroup,
    join_import_path,
    logical_import_path,
    resolve_type_imports,
)


def _bindings(make_method) -> list[MethodBinding]:
    methods = [
        make_method(name="GetUser", request="GetUserReq", response="GetUserResp"),
        make_method(name="ListUsers", verb=HttpVerb.GET, request="ListUsersReq", response="ListUsersResp"),
        make_method(name="Touch", request="Empty", response="Empty", file="google/protobuf/empty.proto"),
        make_method(name="Update", verb=HttpVerb.PUT, request="GetUserReq", response="Empty",
                    file="./proto\\user\\user.proto"),
    ]
    bindings = [extract_binding(method) for method in methods]
    assert all(binding is not None for binding in bindings)
    return [binding for binding in bindings if binding is not None]


class TestLogicalImportPath:
    @pytest.mark.parametrize(
        ("file_path", "expected"),
        [
            pytest.param("proto/user/user.proto", "proto/user/user", id="plain"),
            pytest.param("./proto/user/user.proto", "proto/user/user", id="dot-slash"),
            pytest.param("proto\\user\\user.proto", "proto/user/user", id="backslashes"),
            pytest.param("proto_third/google/protobuf/struct.proto", "proto_third/google/protobuf/struct", id="third"),
            pytest.param("user.proto", "user", id="top-level"),
            pytest.param("", "", id="empty"),
        ],
    )
    def test_normalizes(self, file_path: str, expected: str) -> None:
        assert logical_import_path(file_path) == expected


class TestResolveTypeImports:
    def test_groups_sorts_and_deduplicates(self, make_method) -> None:
        group = resolve_type_imports(_bindings(make_method))
        assert group.as_dict() == {
            "google/protobuf/empty": ["Empty"],
            "proto/user/user": ["Empty", "GetUserReq", "GetUserResp", "ListUsersReq", "ListUsersResp"],
        }
        assert [path for path, _ in group] == ["google/protobuf/empty", "proto/user/user"]

    def test_shuffled_input_is_identical(self, make_method) -> None:
        bindings = _bindings(make_method)
        expected = resolve_type_imports(bindings)
        shuffled = list(bindings)
        for seed in range(5):
            random.Random(seed).shuffle(shuffled)
            assert resolve_type_imports(shuffled) == expected

    def test_skips_types_without_file(self, make_method) -> None:
        binding = extract_binding(make_method(file=""))
        assert binding is not None
        assert resolve_type_imports([binding]) == ImportGroup()
        assert len(resolve_type_imports([binding])) == 0


class TestJoinImportPath:
    @pytest.mark.parametrize(
        ("root", "path", "expected"),
        [
            pytest.param("@/api/proto-types", "proto/user/user", "@/api/proto-types/proto/user/user", id="adds-slash"),
            pytest.param("@/types/", "proto/user/user", "@/types/proto/user/user", id="keeps-slash"),
            pytest.param("@/types", "", "@/types", id="empty-path"),
            pytest.param("", "proto/user/user", "/proto/user/user", id="empty-root"),
        ],
    )
    def test_joins(self, root: str, path: str, expected: str) -> None:
        assert join_import_path(root, path) == expected
