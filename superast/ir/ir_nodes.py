from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

# ==========================================
# Super-AST IR nodes
# ==========================================
# to_dict() emits keys in the order ids are allocated for a node's children,
# and leaves out optional fields that are unset instead of writing null.


@dataclass
class Block:
    id: int
    statements: List[Node] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "statements": [s.to_dict() for s in self.statements]}


@dataclass
class DataType:
    id: int
    name: str
    sub: Optional[DataType] = None   # element type of a "vector"

    def to_dict(self) -> Dict[str, Any]:
        d = {"id": self.id, "name": self.name}
        if self.sub is not None:
            d["data-type"] = self.sub.to_dict()
        return d


@dataclass
class Node:
    id: int
    line: int
    column: int

    def _head(self, node_type: str) -> Dict[str, Any]:
        return {"id": self.id, "line": self.line, "column": self.column, "type": node_type}


@dataclass
class Identifier(Node):
    kind: str                    # "identifier", a literal type name, "bool" or "nil"
    value: Any = None            # None only for "nil"

    def to_dict(self):
        d = self._head(self.kind)
        if self.value is not None:
            d["value"] = self.value
        return d


@dataclass
class Unary(Node):
    op: str
    operand: Expr

    def to_dict(self):
        d = self._head(self.op)
        d["expression"] = self.operand.to_dict()
        return d


@dataclass
class Binary(Node):
    op: str
    left: Expr
    right: Expr

    def to_dict(self):
        d = self._head(self.op)
        d["left"] = self.left.to_dict()
        d["right"] = self.right.to_dict()
        return d


@dataclass
class FuncCall(Node):
    name: str
    arguments: List[Expr] = field(default_factory=list)

    def to_dict(self):
        d = self._head("function-call")
        d["name"] = self.name
        d["arguments"] = [a.to_dict() for a in self.arguments]
        return d


@dataclass
class ErrorNode(Node):
    category: str
    description: str

    def to_dict(self):
        d = self._head("error")
        d["value"] = self.category
        d["description"] = self.description
        return d


@dataclass
class VarDecl(Node):
    name: str
    data_type: DataType
    init: Optional[Expr] = None

    def to_dict(self):
        d = self._head("variable-declaration")
        d["name"] = self.name
        d["data-type"] = self.data_type.to_dict()
        if self.init is not None:
            d["init"] = self.init.to_dict()
        return d


@dataclass
class FuncDecl(Node):
    name: str
    parameters: List[VarDecl]
    return_type: DataType
    block: Block

    def to_dict(self):
        d = self._head("function-declaration")
        d["name"] = self.name
        d["parameters"] = [p.to_dict() for p in self.parameters]
        d["return-type"] = self.return_type.to_dict()
        d["block"] = self.block.to_dict()
        return d


@dataclass
class StructDecl(Node):
    name: str
    attributes: List[VarDecl] = field(default_factory=list)

    def to_dict(self):
        d = self._head("struct-declaration")
        d["name"] = self.name
        d["attributes"] = [a.to_dict() for a in self.attributes]
        return d


@dataclass
class Conditional(Node):
    condition: Expr
    then: Block
    else_: Optional[Block] = None

    def to_dict(self):
        d = self._head("conditional")
        d["condition"] = self.condition.to_dict()
        d["then"] = self.then.to_dict()
        if self.else_ is not None:
            d["else"] = self.else_.to_dict()
        return d


@dataclass
class ForStmt(Node):
    kind: str                    # "for" or "while"
    block: Block
    init: Optional[Node] = None
    condition: Optional[Expr] = None
    post: Optional[Node] = None

    def to_dict(self):
        d = self._head(self.kind)
        if self.init is not None:
            d["init"] = self.init.to_dict()
        if self.condition is not None:
            d["condition"] = self.condition.to_dict()
        if self.post is not None:
            d["post"] = self.post.to_dict()
        d["block"] = self.block.to_dict()
        return d


@dataclass
class ReturnStmt(Node):
    expression: Optional[Expr] = None

    def to_dict(self):
        d = self._head("return")
        if self.expression is not None:
            d["expression"] = self.expression.to_dict()
        return d


Expr = Union[Identifier, Unary, Binary, FuncCall, ErrorNode]
Statement = Union[Expr, VarDecl, FuncDecl, StructDecl, Conditional, ForStmt, ReturnStmt]
