import io
import json
from typing import Any, Iterator, TextIO

from pydantic_core import PydanticSerializationError

from .errors import InputError, OutputError
from .message import Message

WHITESPACE = " \t\n\r"


def _incomplete(e: json.JSONDecodeError, buf: str) -> bool:
    # the decoder ran off the end of the buffer, so more input may finish the value
    return e.pos >= len(buf.rstrip(WHITESPACE)) or e.msg.startswith("Unterminated string")


def strict_utf8(stream: TextIO) -> TextIO:
    """Re-open the bytes under `stream` so invalid UTF-8 raises instead of being escaped."""
    return io.TextIOWrapper(stream.buffer, encoding="utf-8", errors="strict")


def _lines(stream: TextIO) -> Iterator[str]:
    try:
        yield from stream
    except UnicodeDecodeError as e:
        raise InputError("input is not valid UTF-8") from e


def read_values(stream: TextIO) -> Iterator[Any]:
    """
    Yield each JSON value from `stream` as soon as it is complete.

    Values are normally one per line, but any whitespace between values is
    accepted, several values may share a line, and a value may span lines.
    """
    decoder = json.JSONDecoder()
    buf = ""
    for line in _lines(stream):
        buf += line
        while True:
            start = len(buf) - len(buf.lstrip(WHITESPACE))
            if start == len(buf):
                buf = ""
                break
            try:
                value, end = decoder.raw_decode(buf, start)
            except json.JSONDecodeError as e:
                if _incomplete(e, buf):
                    break
                raise InputError(f"malformed JSON on input: {buf.strip()!r}") from e
            buf = buf[end:]
            yield value
    if buf.strip(WHITESPACE):
        raise InputError(f"truncated JSON at end of input: {buf.strip()!r}")


def write_message(stream: TextIO, msg: Message) -> None:
    try:
        line = msg.to_json()
    except PydanticSerializationError as e:
        raise OutputError(f"could not serialize {msg!r}") from e
    try:
        stream.write(line + "\n")
        stream.flush()
    except (OSError, ValueError) as e:
        raise OutputError(f"could not write {line}") from e
