import sys
from typing import Optional

from .codec import strict_utf8
from .idgen import IDGen
from .message import Echo, EchoOk, GenerateOk, Message
from .node import Node, run


class EchoServer:
    """Echo and unique-id workloads on top of a Node."""
    def __init__(self, node: Optional[Node] = None, idgen: Optional[IDGen] = None) -> None:
        self.node = node if node is not None else Node()
        self.idgen = idgen if idgen is not None else IDGen()

        def handle_echo(req: Message) -> None:
            body: Echo = req.body  # type: ignore
            self.node.log(f"Echoing {body.echo!r}")
            self.node.reply(req, EchoOk(echo=body.echo))
        self.node.on("echo", handle_echo)

        def handle_generate(req: Message) -> None:
            self.node.reply(req, GenerateOk(id=self.idgen.next()))
        self.node.on("generate", handle_generate)


def main() -> int:
    node = Node(stdin=strict_utf8(sys.stdin), stdout=strict_utf8(sys.stdout))
    return run(EchoServer(node).node)
