from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from superast.sema.types import TypeShape, resolve_type


@dataclass
class NamedType:
    name: str
    shape: TypeShape
    node: Optional[Dict[str, Any]]   # the name's Ident, or the type for unnamed fields


def flatten_names(type_expr, names) -> List[NamedType]:
    """`a, b int` -> [a: int, b: int]; an unnamed field yields one entry named ""."""
    shape = resolve_type(type_expr)
    if not names:
        return [NamedType("", shape, type_expr)]
    return [NamedType(n["name"], shape, n) for n in names]


def flatten_field_list(field_list) -> List[NamedType]:
    if field_list is None:
        return []
    flat = []
    for f in field_list["list"]:
        flat.extend(flatten_names(f["type"], f["names"]))
    return flat
