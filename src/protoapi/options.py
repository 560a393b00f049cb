from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_SERVICE_IMPORT = "./api"
DEFAULT_TYPES_IMPORT_PATH = "@/api/proto-types"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class OutputTarget:
    path: str
    service_import: str = ""


@dataclass(frozen=True)
class GenerationConfig:
    """Parsed plugin options for one invocation.

    Attributes:
        service_import: Client import of the typed flavor, and of the untyped
            flavor when ``service_import_js`` is empty
        service_import_js: Client import of the untyped flavor
        types_import_path: Root prefix of every type-only import
        output_paths: Targets of the typed (``.ts``) flavor
        output_paths_js: Targets of the untyped (``.js``) flavor
        atomic: Stage output and swap it over the live directories on success
    """

    service_import: str = DEFAULT_SERVICE_IMPORT
    service_import_js: str = ""
    types_import_path: str = DEFAULT_TYPES_IMPORT_PATH
    output_paths: tuple[OutputTarget, ...] = field(default_factory=tuple)
    output_paths_js: tuple[OutputTarget, ...] = field(default_factory=tuple)
    atomic: bool = True

    @property
    def untyped_service_import(self) -> str:
        return self.service_import_js or self.service_import

    def target_directories(self) -> list[str]:
        """Distinct target directories of both flavors, in first-seen order."""
        paths = [target.path for target in self.output_paths + self.output_paths_js]
        return list(dict.fromkeys(paths))


def parse_options(parameter: str | None) -> GenerationConfig:
    """Parse a ``key=value,key=value`` option string.

    Unknown keys are ignored and pairs without ``=`` are skipped. When a key
    repeats, the last occurrence wins.

    Raises:
        ConfigError: If the parameter is not a string or a value is unusable
    """
    config = GenerationConfig()
    if parameter is None:
        return config
    if not isinstance(parameter, str):
        raise ConfigError(f"Option string must be str, got {type(parameter).__name__}")
    if not parameter.strip():
        return config

    for pair in parameter.split(","):
        key, sep, value = pair.partition("=")
        if not sep:
            if pair.strip():
                logger.debug("Skipping option without '=': %r", pair)
            continue
        key = key.strip()
        value = value.strip()
        if key == "service_import":
            config = replace(config, service_import=value)
        elif key == "service_import_js":
            config = replace(config, service_import_js=value)
        elif key == "types_import_path":
            config = replace(config, types_import_path=value)
        elif key == "output_paths":
            config = replace(config, output_paths=parse_output_paths(value))
        elif key == "output_paths_js":
            config = replace(config, output_paths_js=parse_output_paths(value))
        elif key == "atomic":
            config = replace(config, atomic=_parse_bool(key, value))
        else:
            logger.debug("Ignoring unknown option %r", key)
    return config


def parse_output_paths(value: str) -> tuple[OutputTarget, ...]:
    """Parse a target list such as ``src/api;web/api:@/api/api``.

    Entries are separated by ``;``. The first ``:`` of an entry separates the
    directory from its service import override.
    """
    targets: list[OutputTarget] = []
    for entry in value.split(";"):
        entry = entry.strip()
        if not entry:
            continue
        path, sep, override = entry.partition(":")
        path = path.strip()
        if not path:
            logger.debug("Skipping output entry without a path: %r", entry)
            continue
        targets.append(OutputTarget(path=path, service_import=override.strip() if sep else ""))
    return tuple(targets)


def format_output_paths(targets: tuple[OutputTarget, ...] | list[OutputTarget]) -> str:
    parts = []
    for target in targets:
        if target.service_import:
            parts.append(f"{target.path}:{target.service_import}")
        else:
            parts.append(target.path)
    return ";".join(parts)


def _parse_bool(key: str, value: str) -> bool:
    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"Invalid boolean for option {key!r}: {value!r}")
