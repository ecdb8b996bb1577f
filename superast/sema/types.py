from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from superast.ir.ids import IdAllocator
from superast.ir.ir_nodes import DataType

UNKNOWN = "unknown"
VECTOR = "vector"


@dataclass(frozen=True)
class TypeShape:
    """An id-less data type; turned into DataType nodes once per use site."""
    name: str
    sub: Optional[TypeShape] = None


def type_name(expr) -> str:
    """
    Flattened name of a named type: `T`, `*T` and `pkg.T` give "T", "T" and
    "pkg.T". Anything that is not a (pointer to a) possibly qualified name
    gives "".
    """
    if expr is None:
        return ""
    kind = expr["kind"]
    if kind == "Ident":
        return expr["name"]
    if kind == "StarExpr":
        return type_name(expr["x"])
    if kind == "SelectorExpr":
        base = type_name(expr["x"])
        return f"{base}.{expr['sel']['name']}" if base else ""
    return ""


def resolve_type(expr) -> TypeShape:
    name = type_name(expr)
    if name:
        return TypeShape(name)
    if expr is not None and expr["kind"] == "ArrayType":
        return TypeShape(VECTOR, resolve_type(expr["elt"]))
    return TypeShape(UNKNOWN)


def materialize(shape: TypeShape, ids: IdAllocator) -> DataType:
    # fresh ids on every call, parents before their element types
    node = DataType(id=ids.next_id(), name=shape.name)
    if shape.sub is not None:
        node.sub = materialize(shape.sub, ids)
    return node
