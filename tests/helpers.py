import io
import json

from ulid import ULID

from maelstrom_node import Node


def counting_source(start: int = 1):
    n = start - 1

    def source() -> ULID:
        nonlocal n
        n += 1
        return ULID.from_int(n)
    return source


def req(type: str, msg_id=None, src="c1", dest="n1", **fields) -> dict:
    body = {"type": type, **fields}
    if msg_id is not None:
        body["msg_id"] = msg_id
    return {"src": src, "dest": dest, "body": body}


def drive(make_server, lines: list, **node_kwargs) -> tuple[list[dict], Node]:
    """Feed `lines` to a fresh node in-process and return its decoded replies."""
    stdin = io.StringIO("".join(
        (l if isinstance(l, str) else json.dumps(l)) + "\n" for l in lines
    ))
    stdout = io.StringIO()
    node = Node(stdin=stdin, stdout=stdout, stderr=io.StringIO(), **node_kwargs)
    make_server(node).node.main()
    out = stdout.getvalue()
    assert out == "" or out.endswith("\n")
    return [json.loads(l) for l in out.splitlines()], node
