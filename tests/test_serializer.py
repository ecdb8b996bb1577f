import json

import pytest

from superast.ir.ir_nodes import Block, DataType, ErrorNode, FuncCall, Identifier, ReturnStmt, VarDecl
from superast.serializer import dumps, to_json


def sample_root() -> Block:
    root = Block(id=0)
    root.statements.append(VarDecl(
        id=1, line=2, column=5, name="s",
        data_type=DataType(id=2, name="string"),
        init=Identifier(id=3, line=2, column=10, kind="string", value="héllo"),
    ))
    root.statements.append(FuncCall(id=4, line=3, column=1, name="print"))
    root.statements.append(ReturnStmt(id=5, line=4, column=1))
    return root


def test_compact_output():
    text = to_json(sample_root())
    assert text.startswith('{"id":0,"statements":[{"id":1,"line":2,"column":5,"type":"variable-declaration"')
    assert " " not in text.replace("héllo", "")
    assert "héllo" in text


def test_pretty_output():
    text = to_json(sample_root(), pretty=True)
    assert text.splitlines()[1] == '  "id": 0,'
    assert json.loads(text) == json.loads(to_json(sample_root()))


def test_absent_fields_are_omitted():
    data = json.loads(to_json(sample_root()))
    call, ret = data["statements"][1], data["statements"][2]
    assert call["arguments"] == []
    assert "expression" not in ret
    assert None not in data["statements"][0].values()


def test_nil_identifier_and_error_node():
    nil = Identifier(id=7, line=1, column=1, kind="nil").to_dict()
    assert nil == {"id": 7, "line": 1, "column": 1, "type": "nil"}
    err = ErrorNode(id=8, line=2, column=3, category="switch", description="switch statements are not supported")
    assert list(err.to_dict().items()) == [
        ("id", 8), ("line", 2), ("column", 3), ("type", "error"),
        ("value", "switch"), ("description", "switch statements are not supported"),
    ]


def test_false_and_zero_values_are_kept():
    assert Identifier(id=1, line=1, column=1, kind="bool", value=False).to_dict()["value"] is False
    assert Identifier(id=1, line=1, column=1, kind="int", value=0).to_dict()["value"] == 0


def test_dumps_plain_dict():
    assert dumps({"b": 1, "a": [1, 2]}) == '{"b":1,"a":[1,2]}'


def test_non_finite_numbers_are_refused():
    with pytest.raises(ValueError):
        dumps({"value": float("inf")})
    with pytest.raises(ValueError):
        dumps({"value": float("nan")}, pretty=True)
