from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..bindings import ServiceUnit
from ..options import GenerationConfig, OutputTarget
from .imports import ImportGroup, resolve_type_imports


class Flavor(str, Enum):
    TYPED = "ts"
    UNTYPED = "js"

    @property
    def extension(self) -> str:
        return f".{self.value}"


@dataclass(frozen=True)
class RenderJob:
    """One file to render for one target directory.

    Attributes:
        flavor: Typed (TypeScript) or untyped (JavaScript) output
        directory: The target directory
        service_import: The effective client import for this target
        imports: Type imports, typed flavor only
        types_root: Root prefix of the type imports, typed flavor only
    """

    flavor: Flavor
    directory: str
    service_import: str
    imports: ImportGroup | None = None
    types_root: str | None = None


def resolve_import(flavor_default: str, override: str) -> str:
    return override or flavor_default


def plan_outputs(config: GenerationConfig, unit: ServiceUnit) -> list[RenderJob]:
    """Plan the render jobs of one service.

    Typed targets come first, then untyped targets, each in configuration
    order. A flavor without targets contributes no jobs.
    """
    jobs: list[RenderJob] = []
    if config.output_paths:
        imports = resolve_type_imports(unit.bindings)
        jobs.extend(
            _typed_job(target, config, imports) for target in config.output_paths
        )
    jobs.extend(
        RenderJob(
            flavor=Flavor.UNTYPED,
            directory=target.path,
            service_import=resolve_import(config.untyped_service_import, target.service_import),
        )
        for target in config.output_paths_js
    )
    return jobs


def _typed_job(target: OutputTarget, config: GenerationConfig, imports: ImportGroup) -> RenderJob:
    return RenderJob(
        flavor=Flavor.TYPED,
        directory=target.path,
        service_import=resolve_import(config.service_import, target.service_import),
        imports=imports,
        types_root=config.types_import_path,
    )
