from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from ..bindings import MethodBinding

PROTO_EXTENSION = ".proto"


@dataclass(frozen=True)
class ImportGroup:
    """Type names to import, grouped by logical import path.

    Groups are held sorted by path and each group's names are sorted and
    unique, so equal inputs always render identically.
    """

    groups: tuple[tuple[str, tuple[str, ...]], ...] = ()

    def __iter__(self) -> Iterator[tuple[str, tuple[str, ...]]]:
        return iter(self.groups)

    def __len__(self) -> int:
        return len(self.groups)

    def as_dict(self) -> dict[str, list[str]]:
        return {path: list(names) for path, names in self.groups}


def logical_import_path(file_path: str) -> str:
    """Convert a schema file path to the path its generated types live under.

    Example:
        >>> logical_import_path("./proto/user/user.proto")
        'proto/user/user'
    """
    path = file_path.replace("\\", "/")
    if path.startswith("./"):
        path = path[2:]
    if path.endswith(PROTO_EXTENSION):
        path = path[: -len(PROTO_EXTENSION)]
    return path


def resolve_type_imports(bindings: Iterable[MethodBinding]) -> ImportGroup:
    """Group the request and response types of ``bindings`` by import path.

    Only the direct request and response types are collected; fields of those
    messages are not traversed.
    """
    grouped: dict[str, set[str]] = {}
    for binding in bindings:
        for ref in (binding.request, binding.response):
            path = logical_import_path(ref.file)
            if not path:
                continue
            grouped.setdefault(path, set()).add(ref.name)
    return ImportGroup(groups=tuple((path, tuple(sorted(grouped[path]))) for path in sorted(grouped)))


def join_import_path(root: str, path: str) -> str:
    if path and not root.endswith("/"):
        return f"{root}/{path}"
    return f"{root}{path}"
