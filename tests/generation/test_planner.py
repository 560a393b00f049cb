from __future__ import annotations

from protoapi.bindings import ServiceUnit, collect_service
from protoapi.descriptors import ServiceDescriptor
from protoapi.generation.planner import Flavor, plan_outputs, resolve_import
from protoapi.options import parse_options


def _unit(user_service: ServiceDescriptor) -> ServiceUnit:
    unit = collect_service(user_service)
    assert unit is not None
    return unit


class TestResolveImport:
    def test_override_wins(self) -> None:
        assert resolve_import("./api", "@/api/api") == "@/api/api"

    def test_empty_override_uses_default(self) -> None:
        assert resolve_import("./api", "") == "./api"


class TestPlanOutputs:
    def test_no_targets_no_jobs(self, user_service: ServiceDescriptor) -> None:
        assert plan_outputs(parse_options("service_import=@/api/api"), _unit(user_service)) == []

    def test_typed_jobs_carry_imports_and_root(self, user_service: ServiceDescriptor) -> None:
        config = parse_options("service_import=@/api/api,output_paths=src/api;admin/api:@/admin/http,types_import_path=@/t")
        jobs = plan_outputs(config, _unit(user_service))
        assert [(job.flavor, job.directory, job.service_import) for job in jobs] == [
            (Flavor.TYPED, "src/api", "@/api/api"),
            (Flavor.TYPED, "admin/api", "@/admin/http"),
        ]
        for job in jobs:
            assert job.types_root == "@/t"
            assert job.imports is not None
            assert job.imports.as_dict() == {"proto/user/user": ["GetUserReq", "GetUserResp"]}

    def test_untyped_jobs_fall_back_through_defaults(self, user_service: ServiceDescriptor) -> None:
        config = parse_options("service_import=@/api/api,output_paths_js=a;b:@/b")
        jobs = plan_outputs(config, _unit(user_service))
        assert [(job.flavor, job.directory, job.service_import) for job in jobs] == [
            (Flavor.UNTYPED, "a", "@/api/api"),
            (Flavor.UNTYPED, "b", "@/b"),
        ]
        assert all(job.imports is None and job.types_root is None for job in jobs)

        config = parse_options("service_import=@/api/api,service_import_js=@/api/api.js,output_paths_js=a")
        assert plan_outputs(config, _unit(user_service))[0].service_import == "@/api/api.js"

    def test_typed_jobs_come_before_untyped(self, user_service: ServiceDescriptor) -> None:
        config = parse_options("output_paths_js=js,output_paths=ts")
        jobs = plan_outputs(config, _unit(user_service))
        assert [(job.flavor, job.directory) for job in jobs] == [(Flavor.TYPED, "ts"), (Flavor.UNTYPED, "js")]

    def test_duplicate_targets_each_get_a_job(self, user_service: ServiceDescriptor) -> None:
        jobs = plan_outputs(parse_options("output_paths=a;a"), _unit(user_service))
        assert [job.directory for job in jobs] == ["a", "a"]

    def test_planning_does_not_change_config(self, user_service: ServiceDescriptor) -> None:
        config = parse_options("output_paths=a:@/x;b")
        plan_outputs(config, _unit(user_service))
        assert config == parse_options("output_paths=a:@/x;b")
        assert config.service_import == "./api"
