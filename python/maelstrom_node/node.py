import sys
import threading
from typing import Callable, Optional, TextIO

from .codec import read_values, write_message
from .errors import DispatchError, NodeError
from .message import PAYLOAD_TYPES, Body, Init, InitOk, Message, body_type


class Node:
    """
    Node class for handling requests from the Maelstrom harness.

    Initialization:
    - register "init" handler

    Main loop:
    - read JSON values from stdin one at a time
    - parse each into a Message
    - ignore `*_ok` bodies, since this node never issues requests of its own
    - call the handler registered for the payload type, which replies

    Requests are handled strictly one after another: a reply is flushed
    before the next request is read.
    """
    def __init__(
        self,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
        ignore_unknown: bool = False,
    ) -> None:
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stderr = stderr if stderr is not None else sys.stderr
        self.ignore_unknown = ignore_unknown

        self.node_id = None
        self.node_ids = []
        self.next_msg_id = 0

        self.handlers = {}

        self.lock = threading.RLock()
        self.log_lock = threading.Lock()

        def handle_init(req: Message) -> None:
            body: Init = req.body  # type: ignore
            self.node_id = body.node_id
            self.node_ids = body.node_ids

            self.reply(req, InitOk())
            self.log(f"Node {self.node_id} initialized")
        self.on("init", handle_init)

    def main(self) -> None:
        for value in read_values(self.stdin):
            self.log(f"Received {value}")
            t = body_type(value)
            if self.ignore_unknown and t is not None and t not in PAYLOAD_TYPES:
                self.log(f"Ignoring unknown message type {t}")
                continue
            self.step(Message.parse(value))

    def step(self, req: Message) -> None:
        if req.body.REPLY:
            self.log(f"Ignoring reply {req.body.type}")
            return
        handler = self.handlers.get(req.body.type)
        if handler is None:
            raise DispatchError(f"No handler for {req.body.type}")
        handler(req)

    # Register a handler for a message type
    def on(self, type: str, handler: Callable[[Message], None]) -> None:
        if type in self.handlers:
            raise ValueError(f"Handler for {type} already registered.")
        self.handlers[type] = handler

    def reply(self, req: Message, body: Body) -> None:
        with self.lock:
            body = body.model_copy(update={
                "msg_id": self.next_msg_id,
                "in_reply_to": req.body.msg_id,
            })
            msg = Message(src=req.dest, dest=req.src, body=body)
            self.send(msg)
            self.next_msg_id += 1

    def send(self, msg: Message) -> None:
        with self.lock:
            self.log(f"Sending {msg}")
            write_message(self.stdout, msg)

    def log(self, msg: str) -> None:
        with self.log_lock:
            print(msg, file=self.stderr, flush=True)


def run(node: Node) -> int:
    """Drive `node` until EOF. Returns the process exit status."""
    try:
        node.main()
    except NodeError as e:
        for line in e.chain():
            node.log(line)
        return 1
    return 0
