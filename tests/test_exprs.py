import pytest

from superast.goparser.parser import GoParser
from superast.ir.ids import IdAllocator
from superast.ir.ir_nodes import Binary, ErrorNode, FuncCall, Identifier, Unary
from superast.sema.exprs import ExpressionNormalizer, dotted_name, literal_type

parser = GoParser()


def native(src: str):
    tree = parser.parse("package main\n\nfunc main() {\n\t_ = " + src + "\n}\n")
    return tree["decls"][0]["body"]["list"][0]["rhs"][0]


def normalize(src: str):
    return ExpressionNormalizer(IdAllocator()).normalize(native(src))


@pytest.mark.parametrize("src, kind, value", [
    ("x", "identifier", "x"),
    ("42", "int", 42),
    ("0x10", "int", 16),
    ("2.5", "double", 2.5),
    ("'a'", "char", 97),
    ('"a\\nb"', "string", "a\nb"),
    ("`raw\\n`", "string", "raw\\n"),
])
def test_leaves(src, kind, value):
    node = normalize(src)
    assert isinstance(node, Identifier)
    assert (node.kind, node.value) == (kind, value)


def test_logical_operators_are_renamed():
    node = normalize("a && b || c")
    assert node.op == "or"
    assert node.left.op == "and"


def test_parentheses_are_unwrapped():
    node = normalize("(1 + 2) * 3")
    assert isinstance(node, Binary) and node.op == "*"
    assert node.left.op == "+"


def test_unary():
    node = normalize("-5")
    assert isinstance(node, Unary) and node.op == "-"
    assert node.operand.value == 5
    assert normalize("!ok").op == "!"


def test_index_and_selector():
    index = normalize("xs[i]")
    assert (index.op, index.left.value, index.right.value) == ("[]", "xs", "i")
    sel = normalize("p.name")
    assert (sel.op, sel.left.value) == (".", "p")
    assert (sel.right.kind, sel.right.value) == ("identifier", "name")


@pytest.mark.parametrize("src, name", [
    ("fmt.Println(1)", "print"),
    ("println()", "print"),
    ("strings.ToUpper(s)", "strings.ToUpper"),
    ("len(xs)", "len"),
])
def test_call_names(src, name):
    node = normalize(src)
    assert isinstance(node, FuncCall)
    assert node.name == name


def test_call_arguments_keep_order():
    node = normalize('fmt.Println("a", 2, x)')
    assert [a.value for a in node.arguments] == ["a", 2, "x"]


@pytest.mark.parametrize("src, category", [
    ("a & b", "unsupported-operator"),
    ("a << 2", "unsupported-operator"),
    ("^a", "unsupported-operator"),
    ("*p", "unsupported-operator"),
    ("&x", "unsupported-operator"),
    ("<-ch", "unsupported-operator"),
    ("[]int{1, 2}", "composite-literal"),
    ("P{X: 1}", "composite-literal"),
    ("[]int", "type-expression"),
    ("func() {}", "function-literal"),
    ("xs[1:2]", "slice-expression"),
    ("v.(int)", "type-assertion"),
    ("f()(1)", "unsupported-call"),
])
def test_unsupported_become_error_nodes(src, category):
    node = normalize(src)
    assert isinstance(node, ErrorNode)
    assert node.category == category
    assert node.to_dict()["type"] == "error"


def test_error_node_stays_in_place():
    node = normalize("x + (a | b)")
    assert isinstance(node, Binary)
    assert node.left.value == "x"
    assert isinstance(node.right, ErrorNode)


def test_ids_follow_preorder():
    ids = IdAllocator(10)
    node = ExpressionNormalizer(ids).normalize(native("f(a + b, c)"))
    assert node.id == 10
    plus = node.arguments[0]
    assert [plus.id, plus.left.id, plus.right.id, node.arguments[1].id] == [11, 12, 13, 14]


def test_helpers():
    assert dotted_name(native("a.b.c")) == "a.b.c"
    assert dotted_name(native("f().x")) == ""
    assert literal_type(native("-1.5")) == "double"
    assert literal_type(native("'x'")) == "char"
    assert literal_type(native("x")) is None
