class NodeError(Exception):
    """Fatal node failure. `stage` names where in the pipeline it happened."""
    stage = "node"

    def chain(self) -> list[str]:
        lines = [f"{self.stage} error: {self}"]
        cause = self.__cause__
        while cause is not None:
            lines.append(f"caused by: {type(cause).__name__}: {cause}")
            cause = cause.__cause__
        return lines


class InputError(NodeError):
    stage = "input"


class DispatchError(NodeError):
    stage = "dispatch"


class OutputError(NodeError):
    stage = "output"
