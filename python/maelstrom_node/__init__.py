from .broadcast import BroadcastServer
from .echo import EchoServer
from .errors import DispatchError, InputError, NodeError, OutputError
from .idgen import IDGen
from .message import Message
from .node import Node

__version__ = "0.1.0"
