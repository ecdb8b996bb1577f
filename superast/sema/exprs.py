import logging
from typing import Optional

from superast.goparser.literals import parse_float, parse_int, unquote_char, unquote_string
from superast.ir.ids import IdAllocator
from superast.ir.ir_nodes import Binary, ErrorNode, Expr, FuncCall, Identifier, Unary

logger = logging.getLogger(__name__)

# Calls that every backend knows under a common name.
BUILTIN_RENAMES = {
    "fmt.Println": "print",
    "println": "print",
}

LITERAL_TYPES = {
    "INT": "int",
    "FLOAT": "double",
    "CHAR": "char",
    "STRING": "string",
}

_LITERAL_PARSERS = {
    "INT": parse_int,
    "FLOAT": parse_float,
    "CHAR": unquote_char,
    "STRING": unquote_string,
}

UNARY_OPS = {"+", "-", "!"}

BINARY_OPS = {
    "+": "+", "-": "-", "*": "*", "/": "/", "%": "%",
    "==": "==", "!=": "!=", "<": "<", "<=": "<=", ">": ">", ">=": ">=",
    "&&": "and", "||": "or",
}

_UNSUPPORTED = {
    "CompositeLit": ("composite-literal", "composite literals are not supported"),
    "FuncLit": ("function-literal", "function literals are not supported"),
    "SliceExpr": ("slice-expression", "slice expressions are not supported"),
    "TypeAssertExpr": ("type-assertion", "type assertions are not supported"),
    "KeyValueExpr": ("key-value", "keyed elements are not supported"),
    "ArrayType": ("type-expression", "types are not supported as values"),
    "MapType": ("type-expression", "types are not supported as values"),
    "ChanType": ("type-expression", "types are not supported as values"),
}


def dotted_name(expr) -> str:
    """`fmt.Println` -> "fmt.Println"; "" for anything but a chain of names."""
    if expr["kind"] == "Ident":
        return expr["name"]
    if expr["kind"] == "SelectorExpr":
        base = dotted_name(expr["x"])
        return f"{base}.{expr['sel']['name']}" if base else ""
    return ""


def literal_type(expr) -> Optional[str]:
    """IR type name of a literal, looking through a leading unary sign."""
    if expr["kind"] == "ParenExpr":
        return literal_type(expr["x"])
    if expr["kind"] == "BasicLit":
        return LITERAL_TYPES[expr["lit_kind"]]
    if expr["kind"] == "UnaryExpr" and expr["op"] in ("+", "-"):
        inner = literal_type(expr["x"])
        return inner if inner in ("int", "double") else None
    return None


class ExpressionNormalizer:
    """
    Native expression -> IR expression.

    Never fails: constructs outside the supported vocabulary come back as an
    ErrorNode in the position where they occur, so the surrounding expression
    keeps its shape.
    """

    def __init__(self, ids: IdAllocator):
        self.ids = ids

    def error(self, at, category: str, description: str) -> ErrorNode:
        logger.debug(f"unsupported expression at {at['line']}:{at['column']}: {description}")
        return ErrorNode(id=self.ids.next_id(), line=at["line"], column=at["column"],
                         category=category, description=description)

    def normalize(self, expr) -> Expr:
        kind = expr["kind"]
        handler = getattr(self, f"_norm_{kind}", None)
        if handler is not None:
            return handler(expr)
        category, description = _UNSUPPORTED.get(
            kind, ("unsupported-expression", f"{kind} expressions are not supported"))
        return self.error(expr, category, description)

    def _norm_Ident(self, expr):
        return Identifier(id=self.ids.next_id(), line=expr["line"], column=expr["column"],
                          kind="identifier", value=expr["name"])

    def _norm_BasicLit(self, expr):
        lit_kind = expr["lit_kind"]
        return Identifier(id=self.ids.next_id(), line=expr["line"], column=expr["column"],
                          kind=LITERAL_TYPES[lit_kind], value=_LITERAL_PARSERS[lit_kind](expr["value"]))

    def _norm_ParenExpr(self, expr):
        return self.normalize(expr["x"])

    def _norm_UnaryExpr(self, expr):
        op = expr["op"]
        if op not in UNARY_OPS:
            return self.error(expr, "unsupported-operator", f"unary operator {op} is not supported")
        node_id = self.ids.next_id()
        return Unary(id=node_id, line=expr["line"], column=expr["column"],
                     op=op, operand=self.normalize(expr["x"]))

    def _norm_BinaryExpr(self, expr):
        op = BINARY_OPS.get(expr["op"])
        if op is None:
            return self.error(expr, "unsupported-operator", f"binary operator {expr['op']} is not supported")
        return self._binary(expr, op, expr["x"], expr["y"])

    def _norm_IndexExpr(self, expr):
        return self._binary(expr, "[]", expr["x"], expr["index"])

    def _norm_SelectorExpr(self, expr):
        node_id = self.ids.next_id()
        left = self.normalize(expr["x"])
        sel = expr["sel"]
        right = Identifier(id=self.ids.next_id(), line=sel["line"], column=sel["column"],
                           kind="identifier", value=sel["name"])
        return Binary(id=node_id, line=expr["line"], column=expr["column"], op=".", left=left, right=right)

    def _norm_CallExpr(self, expr):
        name = dotted_name(expr["fun"])
        if not name:
            return self.error(expr, "unsupported-call", "only calls to named functions are supported")
        node_id = self.ids.next_id()
        args = [self.normalize(arg) for arg in expr["args"]]
        return FuncCall(id=node_id, line=expr["line"], column=expr["column"],
                        name=BUILTIN_RENAMES.get(name, name), arguments=args)

    def _binary(self, expr, op, x, y):
        node_id = self.ids.next_id()
        left = self.normalize(x)
        right = self.normalize(y)
        return Binary(id=node_id, line=expr["line"], column=expr["column"], op=op, left=left, right=right)
