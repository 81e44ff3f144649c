import threading
from typing import Callable, Optional

from ulid import ULID


class IDGen:
    """
    Hands out ULIDs that never repeat within this process.

    Whenever the source produces an id that does not sort after the last one
    issued, the last id is incremented instead, so the issued ids are strictly
    increasing.
    """
    def __init__(self, source: Callable[[], ULID] = ULID) -> None:
        self.source = source
        self.lock = threading.Lock()
        self.last: Optional[ULID] = None

    def next(self) -> str:
        with self.lock:
            u = self.source()
            if self.last is not None and int(u) <= int(self.last):
                u = ULID.from_int(int(self.last) + 1)
            self.last = u
            return str(u)
