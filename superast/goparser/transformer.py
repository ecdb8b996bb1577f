from typing import Any, Dict, List, Optional

from lark import Token, Transformer, v_args

from superast.errors import GoSyntaxError
from superast.goparser.literals import parse_float, parse_int, unquote_char, unquote_string

# ==========================================
# Native tree builder (lark Tree -> go/ast-shaped dicts)
# ==========================================
# Every node is a plain dict with a "kind" key named after the matching go/ast
# type plus "line"/"column". Keys starting with "_" are transient wrappers that
# only live until their parent rule has been transformed.

_LIT_KINDS = {
    "INT": "INT",
    "FLOAT": "FLOAT",
    "CHAR": "CHAR",
    "STRING": "STRING",
    "RAW_STRING": "STRING",
}

_LIT_CHECKS = {
    "INT": parse_int,
    "FLOAT": parse_float,
    "CHAR": unquote_char,
    "STRING": unquote_string,
}


def _position(at):
    if isinstance(at, dict):
        return at.get("line"), at.get("column")
    return getattr(at, "line", None), getattr(at, "column", None)


def _node(kind: str, at, **fields) -> Dict[str, Any]:
    line, column = _position(at)
    node = {"kind": kind, "line": line, "column": column}
    node.update(fields)
    return node


def _ident(token: Token) -> Dict[str, Any]:
    return _node("Ident", token, name=str(token))


def _is(child, kind: str) -> bool:
    return isinstance(child, dict) and child.get("kind") == kind


def _take(children: List[Any], kind: str) -> Optional[Dict[str, Any]]:
    """Pops the leading child when it is a wrapper of the given kind."""
    if children and _is(children[0], kind):
        return children.pop(0)
    return None


@v_args(meta=True)
class GoTreeBuilder(Transformer):

    # --- file level ---
    def start(self, meta, children):
        package = children[0]
        imports, decls = [], []
        for child in children[1:]:
            if isinstance(child, list):
                imports.extend(child)
            else:
                decls.append(child)
        return _node("File", package, package=package["name"], imports=imports, decls=decls)

    def package_clause(self, meta, children):
        return _node("PackageClause", children[0], name=str(children[0]))

    def import_decl(self, meta, children):
        return list(children)

    def import_spec(self, meta, children):
        alias = children[0] if len(children) == 2 else None
        path = children[-1]
        return _node("ImportSpec", path, name=alias, path=unquote_string(str(path)))

    def import_alias(self, meta, children):
        return str(children[0])

    # --- functions ---
    def func_decl(self, meta, children):
        recv = _take(children, "_Receiver")
        name, signature = children[0], children[1]
        body = children[2] if len(children) > 2 else None
        return _node(
            "FuncDecl", meta,
            name=_ident(name),
            recv=recv["list"] if recv else None,
            type=signature,
            body=body,
        )

    def receiver(self, meta, children):
        return {"kind": "_Receiver", "list": children[0]}

    def signature(self, meta, children):
        results = children[1] if len(children) > 1 else None
        return _node("FuncType", meta, params=children[0], results=results)

    def result(self, meta, children):
        child = children[0]
        if _is(child, "FieldList"):
            return child
        return _node("FieldList", meta, list=[_node("Field", child, names=[], type=child, tag=None)])

    def named_param(self, meta, children):
        return {"kind": "_Param", "name": children[0], "type": children[1]}

    def bare_param(self, meta, children):
        return {"kind": "_Param", "name": None, "type": children[0]}

    def parameters(self, meta, children):
        """
        Groups parameters the way go/parser does: in `(a, b int, c string)` the
        bare `a` is a name that shares the type of the next named parameter.
        Without any named parameter every entry is an unnamed field.
        """
        if not any(p["name"] is not None for p in children):
            fields = [_node("Field", p["type"], names=[], type=p["type"], tag=None) for p in children]
            return _node("FieldList", meta, list=fields)

        fields, pending = [], []
        for param in children:
            if param["name"] is None:
                if not _is(param["type"], "Ident"):
                    raise GoSyntaxError("mixed named and unnamed parameters", param["type"]["line"],
                                        param["type"]["column"])
                pending.append(param["type"])
                continue
            names = pending + [_ident(param["name"])]
            fields.append(_node("Field", names[0], names=names, type=param["type"], tag=None))
            pending = []
        if pending:
            raise GoSyntaxError("mixed named and unnamed parameters", pending[0]["line"], pending[0]["column"])
        return _node("FieldList", meta, list=fields)

    # --- types ---
    def type_name(self, meta, children):
        return _ident(children[0])

    def qualified_type(self, meta, children):
        return _node("SelectorExpr", meta, x=_ident(children[0]), sel=_ident(children[1]))

    def pointer_type(self, meta, children):
        return _node("StarExpr", meta, x=children[0])

    def slice_type(self, meta, children):
        return _node("ArrayType", meta, len=None, elt=children[0])

    def array_type(self, meta, children):
        return _node("ArrayType", meta, len=children[0], elt=children[1])

    def map_type(self, meta, children):
        return _node("MapType", meta, key=children[0], value=children[1])

    def struct_type(self, meta, children):
        return _node("StructType", meta, fields=_node("FieldList", meta, list=list(children)))

    def field_decl(self, meta, children):
        tag = str(children[2]) if len(children) > 2 else None
        return _node("Field", meta, names=children[0], type=children[1], tag=tag)

    def func_type(self, meta, children):
        signature = children[0]
        signature["line"], signature["column"] = meta.line, meta.column
        return signature

    def interface_type(self, meta, children):
        return _node("InterfaceType", meta)

    def chan_type(self, meta, children):
        return _node("ChanType", meta, value=children[0])

    def ident_list(self, meta, children):
        return [_ident(tok) for tok in children]

    # --- declarations ---
    def var_decl(self, meta, children):
        return _node("GenDecl", meta, tok="var", specs=list(children))

    def const_decl(self, meta, children):
        return _node("GenDecl", meta, tok="const", specs=list(children))

    def type_decl(self, meta, children):
        return _node("GenDecl", meta, tok="type", specs=list(children))

    def typed_spec(self, meta, children):
        values = children[2] if len(children) > 2 else []
        return _node("ValueSpec", meta, names=children[0], type=children[1], values=values)

    def untyped_spec(self, meta, children):
        return _node("ValueSpec", meta, names=children[0], type=None, values=children[1])

    def type_spec(self, meta, children):
        return _node("TypeSpec", meta, name=_ident(children[0]), type=children[1])

    # --- statements ---
    def block(self, meta, children):
        return _node("BlockStmt", meta, list=list(children))

    def decl_stmt(self, meta, children):
        return _node("DeclStmt", meta, decl=children[0])

    def labeled_stmt(self, meta, children):
        stmt = children[1] if len(children) > 1 else None
        return _node("LabeledStmt", meta, label=_ident(children[0]), stmt=stmt)

    def expression_stmt(self, meta, children):
        return _node("ExprStmt", meta, x=children[0])

    def send_stmt(self, meta, children):
        return _node("SendStmt", meta, chan=children[0], value=children[1])

    def inc_dec_stmt(self, meta, children):
        return _node("IncDecStmt", meta, x=children[0], tok=children[1])

    def inc_dec_op(self, meta, children):
        return str(children[0])

    def assignment(self, meta, children):
        return _node("AssignStmt", meta, lhs=children[0], tok=children[1], rhs=children[2])

    def assign_op(self, meta, children):
        return str(children[0])

    def short_var_decl(self, meta, children):
        return _node("AssignStmt", meta, lhs=children[0], tok=":=", rhs=children[1])

    def expr_list(self, meta, children):
        return list(children)

    def go_stmt(self, meta, children):
        return _node("GoStmt", meta, call=children[0])

    def defer_stmt(self, meta, children):
        return _node("DeferStmt", meta, call=children[0])

    def return_stmt(self, meta, children):
        return _node("ReturnStmt", meta, results=children[0] if children else [])

    def _branch(self, tok, meta, children):
        label = _ident(children[0]) if children else None
        return _node("BranchStmt", meta, tok=tok, label=label)

    def break_stmt(self, meta, children):
        return self._branch("break", meta, children)

    def continue_stmt(self, meta, children):
        return self._branch("continue", meta, children)

    def goto_stmt(self, meta, children):
        return self._branch("goto", meta, children)

    def fallthrough_stmt(self, meta, children):
        return self._branch("fallthrough", meta, children)

    def if_stmt(self, meta, children):
        init = _take(children, "_IfInit")
        cond, body = children[0], children[1]
        else_clause = children[2]["stmt"] if len(children) > 2 else None
        return _node("IfStmt", meta, init=init["stmt"] if init else None, cond=cond, body=body, **{"else": else_clause})

    def if_init(self, meta, children):
        return {"kind": "_IfInit", "stmt": children[0]}

    def else_clause(self, meta, children):
        return {"kind": "_Else", "stmt": children[0]}

    def switch_stmt(self, meta, children):
        init = _take(children, "_SwitchInit")
        tag = _take(children, "_SwitchTag")
        tag_stmt = tag["stmt"] if tag else None
        body = _node("BlockStmt", meta, list=list(children))
        init_stmt = init["stmt"] if init else None

        if tag_stmt is not None and self._is_type_guard(tag_stmt):
            return _node("TypeSwitchStmt", meta, init=init_stmt, assign=tag_stmt, body=body)
        tag_expr = tag_stmt["x"] if _is(tag_stmt, "ExprStmt") else None
        if tag_stmt is not None and tag_expr is None:
            raise GoSyntaxError("switch expression must be an expression", tag_stmt["line"], tag_stmt["column"])
        return _node("SwitchStmt", meta, init=init_stmt, tag=tag_expr, body=body)

    @staticmethod
    def _is_type_guard(stmt) -> bool:
        if _is(stmt, "ExprStmt"):
            expr = stmt["x"]
        elif _is(stmt, "AssignStmt") and stmt["tok"] == ":=" and len(stmt["rhs"]) == 1:
            expr = stmt["rhs"][0]
        else:
            return False
        return _is(expr, "TypeAssertExpr") and expr["type"] is None

    def switch_init(self, meta, children):
        return {"kind": "_SwitchInit", "stmt": children[0] if children else None}

    def switch_tag(self, meta, children):
        return {"kind": "_SwitchTag", "stmt": children[0]}

    def case_clause(self, meta, children):
        return _node("CaseClause", meta, list=children[0], body=list(children[1:]))

    def default_clause(self, meta, children):
        return _node("CaseClause", meta, list=None, body=list(children))

    def select_stmt(self, meta, children):
        return _node("SelectStmt", meta, body=_node("BlockStmt", meta, list=list(children)))

    def comm_clause(self, meta, children):
        return _node("CommClause", meta, comm=children[0], body=list(children[1:]))

    def for_stmt(self, meta, children):
        body = children[-1]
        header = children[0] if len(children) > 1 else {"kind": "_ForHeader"}
        if header["kind"] == "_Range":
            return _node(
                "RangeStmt", meta,
                key=header["key"], value=header["value"], tok=header["tok"], x=header["x"], body=body,
            )
        return _node(
            "ForStmt", meta,
            init=header.get("init"), cond=header.get("cond"), post=header.get("post"), body=body,
        )

    def while_header(self, meta, children):
        return {"kind": "_ForHeader", "cond": children[0]}

    def for_clause(self, meta, children):
        header = {"kind": "_ForHeader"}
        for part in children:
            header[part["slot"]] = part["value"]
        return header

    def for_init(self, meta, children):
        return {"slot": "init", "value": children[0]}

    def for_condition(self, meta, children):
        return {"slot": "cond", "value": children[0]}

    def for_post(self, meta, children):
        return {"slot": "post", "value": children[0]}

    def range_clause(self, meta, children):
        key = value = tok = None
        if len(children) == 3:
            lhs, tok = children[0], children[1]
            key = lhs[0]
            value = lhs[1] if len(lhs) > 1 else None
            if len(lhs) > 2:
                raise GoSyntaxError("range clause permits at most two iteration variables", meta.line, meta.column)
        return {"kind": "_Range", "key": key, "value": value, "tok": tok, "x": children[-1]}

    def range_assign(self, meta, children):
        return str(children[0])

    # --- expressions ---
    def logical_or(self, meta, children):
        return _node("BinaryExpr", meta, op="||", x=children[0], y=children[1])

    def logical_and(self, meta, children):
        return _node("BinaryExpr", meta, op="&&", x=children[0], y=children[1])

    def binary_expr(self, meta, children):
        return _node("BinaryExpr", meta, op=children[1], x=children[0], y=children[2])

    def rel_op(self, meta, children):
        return str(children[0])

    add_op = mul_op = unary_op = rel_op

    def unary(self, meta, children):
        return _node("UnaryExpr", meta, op=children[0], x=children[1])

    def selector(self, meta, children):
        return _node("SelectorExpr", meta, x=children[0], sel=_ident(children[1]))

    def type_assert(self, meta, children):
        return _node("TypeAssertExpr", meta, x=children[0], type=children[1])

    def type_guard(self, meta, children):
        return _node("TypeAssertExpr", meta, x=children[0], type=None)

    def index(self, meta, children):
        return _node("IndexExpr", meta, x=children[0], index=children[1])

    def slice_expr(self, meta, children):
        # bounds are positional only when both are present; callers never need them apart
        return _node("SliceExpr", meta, x=children[0], bounds=list(children[1:]))

    def call(self, meta, children):
        return _node("CallExpr", meta, fun=children[0], args=list(children[1:]))

    def name(self, meta, children):
        return _ident(children[0])

    def paren(self, meta, children):
        return _node("ParenExpr", meta, x=children[0])

    def literal(self, meta, children):
        token = children[0]
        lit_kind = _LIT_KINDS[token.type]
        try:
            _LIT_CHECKS[lit_kind](str(token))
        except ValueError as e:
            raise GoSyntaxError(f"invalid {lit_kind.lower()} literal {token}: {e}", token.line, token.column) from e
        return _node("BasicLit", token, lit_kind=lit_kind, value=str(token))

    def composite_lit(self, meta, children):
        type_expr, lit = children
        if not self._is_literal_type(type_expr):
            raise GoSyntaxError("invalid composite literal type", meta.line, meta.column)
        lit["type"] = type_expr
        lit["line"], lit["column"] = meta.line, meta.column
        return lit

    @staticmethod
    def _is_literal_type(expr) -> bool:
        # T, pkg.T, []T, [N]T and map[K]V; calls, parens and the like are not types
        if _is(expr, "SelectorExpr"):
            return _is(expr["x"], "Ident")
        return _is(expr, "Ident") or _is(expr, "ArrayType") or _is(expr, "MapType")

    def literal_value(self, meta, children):
        return _node("CompositeLit", meta, type=None, elts=list(children))

    def keyed_element(self, meta, children):
        return _node("KeyValueExpr", meta, key=children[0], value=children[1])

    def func_lit(self, meta, children):
        return _node("FuncLit", meta, type=children[0], body=children[1])
