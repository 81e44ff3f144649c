import sys
from typing import Optional

from .codec import strict_utf8
from .echo import EchoServer
from .idgen import IDGen
from .message import Broadcast, BroadcastOk, Message, ReadOk, Topology, TopologyOk
from .node import Node, run


# Broadcast wraps around a Node using composition over inheritance
class BroadcastServer:
    def __init__(self, node: Optional[Node] = None, idgen: Optional[IDGen] = None) -> None:
        self.echo = EchoServer(node, idgen)
        self.node = self.echo.node
        # arrival order, duplicates kept
        self.messages: list[int] = []

        def handle_topology(req: Message) -> None:
            body: Topology = req.body  # type: ignore
            # single node: nothing to gossip to, so the topology is not kept
            self.node.log(f"Ignoring topology {body.topology}")
            self.node.reply(req, TopologyOk())
        self.node.on("topology", handle_topology)

        def handle_read(req: Message) -> None:
            self.node.reply(req, ReadOk(messages=list(self.messages)))
        self.node.on("read", handle_read)

        def handle_broadcast(req: Message) -> None:
            body: Broadcast = req.body  # type: ignore
            self.messages.append(body.message)
            self.node.reply(req, BroadcastOk())
        self.node.on("broadcast", handle_broadcast)


def main() -> int:
    node = Node(stdin=strict_utf8(sys.stdin), stdout=strict_utf8(sys.stdout))
    return run(BroadcastServer(node).node)
