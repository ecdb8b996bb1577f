import json

from superast.ir.ir_nodes import Block


def dumps(data: dict, pretty: bool = False) -> str:
    # key order is fixed by the nodes, never sorted
    if pretty:
        return json.dumps(data, indent=2, ensure_ascii=False, allow_nan=False)
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def to_json(root: Block, pretty: bool = False) -> str:
    return dumps(root.to_dict(), pretty)
