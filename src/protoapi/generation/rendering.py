"""Source text emission for the generated API wrappers.

Each wrapper module imports a shared HTTP client as ``service`` and exports an
object with one arrow function per bound method, for example::

    export const userApi = {
      GetUser: (data: GetUserReq): Promise<GetUserResp> => service.post('/api/UserService/GetUser', data)
    };

The emitted text is byte-for-byte stable for identical input.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..bindings import MethodBinding, ServiceUnit, service_base_name
from .imports import ImportGroup, join_import_path
from .planner import Flavor, RenderJob

API_SUFFIX = "Api"


@dataclass(frozen=True)
class RenderedFile:
    filename: str
    code: str


def api_name(service_name: str) -> str:
    """Name of the exported API object for a declared service name.

    Example:
        >>> api_name("GoodsService")
        'goodsApi'
    """
    return api_identifier(service_base_name(service_name))


def api_identifier(base_name: str) -> str:
    return base_name[:1].lower() + base_name[1:] + API_SUFFIX


def render_typescript(
    unit: ServiceUnit,
    service_import: str,
    imports: ImportGroup,
    types_root: str,
) -> str:
    """Render the typed (TypeScript) wrapper of a service.

    Args:
        unit: The service and its bound methods
        service_import: Module the HTTP client is imported from
        imports: Request/response types grouped by import path
        types_root: Prefix prepended to every group's import path

    Returns:
        The module source, ending with a newline
    """
    lines = [f"import service from '{service_import}';"]
    for path, names in imports:
        lines.append(f"import type {{ {', '.join(names)} }} from '{join_import_path(types_root, path)}';")
    lines.append("")
    entries = [f"  {_typed_entry(binding)}" for binding in unit.bindings]
    lines.extend(_export_block(api_identifier(unit.name), entries))
    return "\n".join(lines)


def render_javascript(unit: ServiceUnit, service_import: str) -> str:
    """Render the untyped (JavaScript) wrapper of a service."""
    lines = [f"import service from '{service_import}';", ""]
    entries = [f"    {_untyped_entry(binding)}" for binding in unit.bindings]
    lines.extend(_export_block(api_identifier(unit.name), entries))
    return "\n".join(lines)


def render(job: RenderJob, unit: ServiceUnit) -> RenderedFile:
    if job.flavor is Flavor.TYPED:
        code = render_typescript(
            unit,
            job.service_import,
            job.imports if job.imports is not None else ImportGroup(),
            job.types_root or "",
        )
    else:
        code = render_javascript(unit, job.service_import)
    return RenderedFile(filename=api_identifier(unit.name) + job.flavor.extension, code=code)


def _typed_entry(binding: MethodBinding) -> str:
    signature = f"(data: {binding.request_type}): Promise<{binding.response_type}>"
    return f"{binding.name}: {signature} => {_call(binding)}"


def _untyped_entry(binding: MethodBinding) -> str:
    return f"{binding.name}: (data) => {_call(binding)}"


def _call(binding: MethodBinding) -> str:
    return f"service.{binding.verb.value}('{binding.path}', data)"


def _export_block(name: str, entries: list[str]) -> list[str]:
    lines = [f"export const {name} = {{"]
    lines.append(",\n".join(entries))
    lines.extend(["};", "", f"export default {name};", ""])
    return lines
