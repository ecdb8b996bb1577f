from typing import Any, Dict, Iterator


def iter_children(node: Dict[str, Any]) -> Iterator[Dict[str, Any]]:
    """
    Structural children of a native node, in source order.

    Only statement-level structure is walked; expressions, types and field
    lists are read directly by the node that owns them.
    """
    kind = node["kind"]
    if kind == "File":
        yield from node["decls"]
    elif kind == "FuncDecl":
        if node["body"] is not None:
            yield node["body"]
    elif kind == "GenDecl":
        yield from node["specs"]
    elif kind == "DeclStmt":
        yield node["decl"]
    elif kind == "BlockStmt":
        yield from node["list"]
    elif kind == "IfStmt":
        yield node["body"]
        if node["else"] is not None:
            yield node["else"]
    elif kind == "ForStmt":
        yield node["body"]


def walk(visitor, node: Dict[str, Any]):
    """
    Depth-first traversal in the manner of go/ast.Walk: visitor.visit(node)
    returns the visitor for the children (or None to skip them), and
    visitor.leave(node) is called once the children are done.
    """
    child_visitor = visitor.visit(node)
    if child_visitor is None:
        return
    for child in iter_children(node):
        walk(child_visitor, child)
    visitor.leave(node)
