from .imports import ImportGroup, logical_import_path, resolve_type_imports
from .planner import Flavor, RenderJob, plan_outputs, resolve_import
from .rendering import RenderedFile, api_name, render, render_javascript, render_typescript

__all__ = [
    "Flavor",
    "ImportGroup",
    "RenderJob",
    "RenderedFile",
    "api_name",
    "logical_import_path",
    "plan_outputs",
    "render",
    "render_javascript",
    "render_typescript",
    "resolve_import",
    "resolve_type_imports",
]
