from .bindings import MethodBinding, ServiceUnit, collect_service, extract_binding
from .descriptors import FileDescriptor, HttpRule, HttpVerb, MessageRef, MethodDescriptor, ServiceDescriptor
from .errors import ConfigError, OutputError, ProtoapiError, SchemaError
from .generation import (
    Flavor,
    ImportGroup,
    RenderJob,
    plan_outputs,
    render_javascript,
    render_typescript,
    resolve_type_imports,
)
from .generator import generate
from .loader import decode_http_rule, load_descriptor_set, load_request
from .options import GenerationConfig, OutputTarget, parse_options
from .sync import StagedOutput, reset_directories

__all__ = [
    "ProtoapiError",
    "ConfigError",
    "SchemaError",
    "OutputError",
    "GenerationConfig",
    "OutputTarget",
    "parse_options",
    "HttpVerb",
    "HttpRule",
    "MessageRef",
    "MethodDescriptor",
    "ServiceDescriptor",
    "FileDescriptor",
    "MethodBinding",
    "ServiceUnit",
    "extract_binding",
    "collect_service",
    "ImportGroup",
    "resolve_type_imports",
    "Flavor",
    "RenderJob",
    "plan_outputs",
    "render_typescript",
    "render_javascript",
    "StagedOutput",
    "reset_directories",
    "generate",
    "decode_http_rule",
    "load_request",
    "load_descriptor_set",
]
