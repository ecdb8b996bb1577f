from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Tuple

from superast.errors import UnsupportedSignatureError
from superast.goparser.walker import walk
from superast.ir.ids import IdAllocator
from superast.ir.ir_nodes import (
    Binary, Block, Conditional, ForStmt, FuncDecl, Identifier, ReturnStmt, StructDecl,
    Unary, VarDecl,
)
from superast.sema.exprs import ExpressionNormalizer, literal_type
from superast.sema.fields import flatten_field_list, flatten_names
from superast.sema.types import UNKNOWN, TypeShape, materialize, resolve_type
from superast.sema.validator import DEFAULT_ALLOWED_IMPORTS, DEFAULT_ENTRY_NAME, EntryValidator

logger = logging.getLogger(__name__)

_INT_TYPES = ("int", "int8", "int16", "int32", "int64",
              "uint", "uint8", "uint16", "uint32", "uint64", "uintptr")

# Go type name -> (literal kind, zero value)
ZERO_VALUES = {name: ("int", 0) for name in _INT_TYPES}
ZERO_VALUES.update({
    "float32": ("double", 0.0),
    "float64": ("double", 0.0),
    "double": ("double", 0.0),
    "rune": ("char", 0),
    "byte": ("char", 0),
    "char": ("char", 0),
    "string": ("string", ""),
    "bool": ("bool", False),
})

ASSIGN_OPS = {"=", "+=", "-=", "*=", "/=", "%="}

# Statement kinds that are rejected as a whole: (category, description)
REJECTED_STATEMENTS = {
    "RangeStmt": ("range", "range loops are not supported"),
    "SendStmt": ("send", "channel sends are not supported"),
    "SwitchStmt": ("switch", "switch statements are not supported"),
    "TypeSwitchStmt": ("type-switch", "type switches are not supported"),
    "SelectStmt": ("select", "select statements are not supported"),
    "DeferStmt": ("defer", "defer statements are not supported"),
    "GoStmt": ("go", "goroutines are not supported"),
    "LabeledStmt": ("label", "labeled statements are not supported"),
}


class SuperASTBuilder:
    """
    Walks a native Go tree once and builds the super-AST.

    Two stacks drive the output: _blocks holds the statement lists that are
    open (the last one receives new statements) and _markers records, for each
    native node being walked, how many of those lists to close when the walk
    leaves it. A node can arrange for lists to be closed when one of its
    children is left (_open), which is how an if statement closes its then
    branch before the else branch is walked.

    An instance converts exactly one file.
    """

    def __init__(self, entry_name: str = DEFAULT_ENTRY_NAME,
                 allowed_imports: Iterable[str] = DEFAULT_ALLOWED_IMPORTS,
                 entry_return_type: str = "void"):
        self.entry_name = entry_name
        self.entry_return_type = entry_return_type
        self.validator = EntryValidator(entry_name, allowed_imports)

        self.ids = IdAllocator()
        self.exprs = ExpressionNormalizer(self.ids)
        self.root = Block(id=self.ids.next_id())

        self._blocks: List[list] = [self.root.statements]
        self._markers: List[Tuple[dict, int]] = []
        self._closers: Dict[int, int] = {}
        self._used = False

    # ==========================================
    # driver
    # ==========================================
    def build(self, file_node) -> Block:
        if self._used:
            raise RuntimeError("SuperASTBuilder converts a single file; create a new instance")
        self._used = True
        walk(self, file_node)
        logger.debug(f"built super-AST with {self.ids.allocated} nodes")
        return self.root

    def visit(self, node):
        depth = len(self._markers)
        logger.debug(f"{'  ' * depth}{node['kind']} ({node['line']}:{node['column']})")
        handler = getattr(self, f"visit_{node['kind']}", None)
        if handler is None:
            category = REJECTED_STATEMENTS.get(node["kind"])
            if category is not None:
                self._reject(node, *category)
            else:
                logger.debug(f"{'  ' * depth}skipping {node['kind']}")
            return None
        if not handler(node):
            return None
        self._markers.append((node, self._closers.pop(id(node), 0)))
        return self

    def leave(self, node):
        _, pops = self._markers.pop()
        for _ in range(pops):
            self._blocks.pop()

    def _open(self, block: Block, closed_by):
        """Makes block the active one until the walk leaves native node closed_by."""
        self._blocks.append(block.statements)
        self._closers[id(closed_by)] = self._closers.get(id(closed_by), 0) + 1

    def _emit(self, stmt):
        self._blocks[-1].append(stmt)

    def _reject(self, node, category: str, description: str):
        self._emit(self.exprs.error(node, category, description))

    # ==========================================
    # declarations
    # ==========================================
    def visit_File(self, node):
        self.validator.validate(node)
        return True

    def visit_GenDecl(self, node):
        return True

    def visit_DeclStmt(self, node):
        return True

    def visit_TypeSpec(self, node):
        if node["type"]["kind"] != "StructType":
            logger.debug(f"skipping non-struct type {node['name']['name']}")
            return False
        name = node["name"]
        decl = StructDecl(id=self.ids.next_id(), line=name["line"], column=name["column"], name=name["name"])
        for f in flatten_field_list(node["type"]["fields"]):
            decl.attributes.append(VarDecl(
                id=self.ids.next_id(), line=f.node["line"], column=f.node["column"],
                name=f.name, data_type=materialize(f.shape, self.ids),
            ))
        self._emit(decl)
        return False

    def visit_ValueSpec(self, node):
        names, values = node["names"], node["values"]
        if values and len(values) != len(names):
            self._reject(node, "assignment", f"cannot assign {len(values)} values to {len(names)} variables")
            return False
        for i, named in enumerate(flatten_names(node["type"], names)):
            value = values[i] if values else None
            shape = named.shape if node["type"] is not None else self._infer(value)
            decl_id = self.ids.next_id()
            data_type = materialize(shape, self.ids)
            at = named.node
            if value is not None:
                init = self.exprs.normalize(value)
            else:
                init = self._zero_value(node["type"], shape, at)
            self._emit(VarDecl(id=decl_id, line=at["line"], column=at["column"],
                               name=named.name, data_type=data_type, init=init))
        return False

    def visit_FuncDecl(self, node):
        name = node["name"]["name"]
        signature = node["type"]
        results = flatten_field_list(signature["results"])
        if len(results) > 1:
            raise UnsupportedSignatureError(name, len(results), node["line"])

        fn_id = self.ids.next_id()
        params = [
            VarDecl(id=self.ids.next_id(), line=p.node["line"], column=p.node["column"],
                    name=p.name, data_type=materialize(p.shape, self.ids))
            for p in flatten_field_list(signature["params"])
        ]
        if results:
            ret_shape = results[0].shape
        elif name == self.entry_name and node["recv"] is None:
            ret_shape = TypeShape(self.entry_return_type)
        else:
            ret_shape = TypeShape("void")
        fn = FuncDecl(
            id=fn_id, line=node["line"], column=node["column"], name=name,
            parameters=params,
            return_type=materialize(ret_shape, self.ids),
            block=Block(id=self.ids.next_id()),
        )
        self._emit(fn)
        self._open(fn.block, node)
        return True

    # ==========================================
    # statements
    # ==========================================
    def visit_BlockStmt(self, node):
        return True

    def visit_ExprStmt(self, node):
        self._emit(self.exprs.normalize(node["x"]))
        return False

    def visit_AssignStmt(self, node):
        for stmt in self._assign(node):
            self._emit(stmt)
        return False

    def visit_IncDecStmt(self, node):
        self._emit(self._inc_dec(node))
        return False

    def visit_ReturnStmt(self, node):
        ret_id = self.ids.next_id()
        results = node["results"]
        expr = self.exprs.normalize(results[0]) if results else None
        self._emit(ReturnStmt(id=ret_id, line=node["line"], column=node["column"], expression=expr))
        return False

    def visit_BranchStmt(self, node):
        self._reject(node, node["tok"], f"{node['tok']} statements are not supported")
        return False

    def visit_IfStmt(self, node):
        if node["init"] is not None:
            # the init statement runs first; it is emitted ahead of the conditional
            for stmt in self._simple_statements(node["init"]):
                self._emit(stmt)
        cond_id = self.ids.next_id()
        cond = Conditional(
            id=cond_id, line=node["line"], column=node["column"],
            condition=self.exprs.normalize(node["cond"]),
            then=Block(id=self.ids.next_id()),
        )
        if node["else"] is not None:
            cond.else_ = Block(id=self.ids.next_id())
        self._emit(cond)
        if cond.else_ is not None:
            self._open(cond.else_, node["else"])
        self._open(cond.then, node["body"])
        return True

    def visit_ForStmt(self, node):
        init, post = node["init"], node["post"]
        for_id = self.ids.next_id()
        loop = ForStmt(
            id=for_id, line=node["line"], column=node["column"],
            kind="for" if init is not None or post is not None else "while",
            init=self._simple_statement(init) if init is not None else None,
            condition=self.exprs.normalize(node["cond"]) if node["cond"] is not None else None,
            post=self._simple_statement(post) if post is not None else None,
            block=None,
        )
        loop.block = Block(id=self.ids.next_id())
        self._emit(loop)
        self._open(loop.block, node)
        return True

    # ==========================================
    # helpers
    # ==========================================
    def _simple_statements(self, stmt) -> list:
        kind = stmt["kind"]
        if kind == "ExprStmt":
            return [self.exprs.normalize(stmt["x"])]
        if kind == "AssignStmt":
            return self._assign(stmt)
        if kind == "IncDecStmt":
            return [self._inc_dec(stmt)]
        category, description = REJECTED_STATEMENTS.get(
            kind, ("unsupported-statement", f"{kind} is not supported here"))
        return [self.exprs.error(stmt, category, description)]

    def _simple_statement(self, stmt):
        """A loop clause holds a single node; multi-assignments are rejected."""
        if stmt["kind"] == "AssignStmt" and len(stmt["lhs"]) != 1:
            return self.exprs.error(stmt, "assignment", "loop clauses may assign a single variable only")
        return self._simple_statements(stmt)[0]

    def _assign(self, node) -> list:
        lhs, rhs, tok = node["lhs"], node["rhs"], node["tok"]
        if len(lhs) != len(rhs):
            return [self.exprs.error(node, "assignment", f"cannot assign {len(rhs)} values to {len(lhs)} variables")]
        if tok != ":=" and tok not in ASSIGN_OPS:
            return [self.exprs.error(node, "unsupported-operator", f"assignment operator {tok} is not supported")]

        stmts = []
        for left, right in zip(lhs, rhs):
            if tok != ":=":
                bin_id = self.ids.next_id()
                stmts.append(Binary(
                    id=bin_id, line=left["line"], column=left["column"], op=tok,
                    left=self.exprs.normalize(left), right=self.exprs.normalize(right),
                ))
            elif left["kind"] != "Ident":
                stmts.append(self.exprs.error(left, "assignment", "non-name on left side of :="))
            else:
                decl_id = self.ids.next_id()
                data_type = materialize(self._infer(right), self.ids)
                stmts.append(VarDecl(
                    id=decl_id, line=left["line"], column=left["column"], name=left["name"],
                    data_type=data_type, init=self.exprs.normalize(right),
                ))
        return stmts

    def _inc_dec(self, node) -> Unary:
        unary_id = self.ids.next_id()
        return Unary(id=unary_id, line=node["line"], column=node["column"],
                     op=node["tok"], operand=self.exprs.normalize(node["x"]))

    @staticmethod
    def _infer(value) -> TypeShape:
        if value is None:
            return TypeShape(UNKNOWN)
        lit = literal_type(value)
        if lit is not None:
            return TypeShape(lit)
        if value["kind"] == "CompositeLit" and value["type"] is not None:
            return resolve_type(value["type"])
        return TypeShape(UNKNOWN)

    def _zero_value(self, type_expr, shape: TypeShape, at) -> Identifier:
        kind, value = "nil", None
        if type_expr is None or type_expr["kind"] != "StarExpr":
            kind, value = ZERO_VALUES.get(shape.name, ("nil", None))
        return Identifier(id=self.ids.next_id(), line=at["line"], column=at["column"], kind=kind, value=value)
