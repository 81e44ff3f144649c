from typing import Annotated, Any, ClassVar, Literal, Optional, Union, get_args

from pydantic import BaseModel, Field, StrictInt, StrictStr, ValidationError

from .errors import InputError

# protocol fields are never coerced: "10", 10.0 and true are not integers
MsgId = Annotated[StrictInt, Field(ge=0)]


class Body(BaseModel):
    """
    Fields shared by every message body.

    The payload fields of each variant sit at the same JSON level as
    `msg_id` and `in_reply_to`, so every variant subclasses Body directly.
    """
    REPLY: ClassVar[bool] = False

    msg_id: Optional[MsgId] = None
    in_reply_to: Optional[MsgId] = None


class Init(Body):
    type: Literal["init"] = "init"
    node_id: StrictStr
    node_ids: list[StrictStr]


class InitOk(Body):
    REPLY: ClassVar[bool] = True
    type: Literal["init_ok"] = "init_ok"


class Echo(Body):
    type: Literal["echo"] = "echo"
    echo: StrictStr


class EchoOk(Body):
    REPLY: ClassVar[bool] = True
    type: Literal["echo_ok"] = "echo_ok"
    echo: StrictStr


class Generate(Body):
    type: Literal["generate"] = "generate"


class GenerateOk(Body):
    REPLY: ClassVar[bool] = True
    type: Literal["generate_ok"] = "generate_ok"
    id: StrictStr


class Broadcast(Body):
    type: Literal["broadcast"] = "broadcast"
    message: StrictInt


class BroadcastOk(Body):
    REPLY: ClassVar[bool] = True
    type: Literal["broadcast_ok"] = "broadcast_ok"


class Read(Body):
    type: Literal["read"] = "read"


class ReadOk(Body):
    REPLY: ClassVar[bool] = True
    type: Literal["read_ok"] = "read_ok"
    messages: list[StrictInt]


class Topology(Body):
    type: Literal["topology"] = "topology"
    topology: dict[StrictStr, list[StrictStr]]


class TopologyOk(Body):
    REPLY: ClassVar[bool] = True
    type: Literal["topology_ok"] = "topology_ok"


Payload = Annotated[
    Union[
        Init, InitOk,
        Echo, EchoOk,
        Generate, GenerateOk,
        Broadcast, BroadcastOk,
        Read, ReadOk,
        Topology, TopologyOk,
    ],
    Field(discriminator="type"),
]

PAYLOAD_TYPES = frozenset(c.model_fields["type"].default for c in get_args(get_args(Payload)[0]))


class Message(BaseModel):
    src: StrictStr
    dest: StrictStr
    body: Payload

    @staticmethod
    def parse(value: Any) -> "Message":
        try:
            return Message.model_validate(value)
        except ValidationError as e:
            raise InputError(f"could not deserialize message {value!r}") from e

    def to_json(self) -> str:
        return self.model_dump_json(exclude_none=True)


def body_type(value: Any) -> Optional[str]:
    """Best-effort peek at body.type of a raw decoded value."""
    if not isinstance(value, dict):
        return None
    body = value.get("body")
    if not isinstance(body, dict):
        return None
    t = body.get("type")
    return t if isinstance(t, str) else None
