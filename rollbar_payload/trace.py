"""
Stack trace serialisation.

Turns an exception and its cause chain into the ``trace_chain`` body the
aggregator expects.  The serializer works against a small ``Throwable``
protocol so that exceptions captured elsewhere (another process, another
runtime) can be reported as long as something adapts them; native Python
exceptions are adapted by ``PythonThrowable``.

Runtime stack order follows the convention of the receiving service: the
innermost call comes first, and frames are emitted in reverse of that order.
"""

import builtins
import traceback
from dataclasses import dataclass
from types import TracebackType
from typing import Any, Dict, List, Optional, Protocol, Sequence, Set, Union, runtime_checkable


@dataclass(frozen=True)
class StackFrame:
    """A single element of a runtime stack trace."""

    class_name: Optional[str]
    filename: Optional[str]
    method: Optional[str]
    lineno: int = 0

    def to_dict(self) -> Dict[str, Any]:
        frame: Dict[str, Any] = {}
        if self.class_name is not None:
            frame["class_name"] = self.class_name
        if self.filename is not None:
            frame["filename"] = self.filename
        if self.method is not None:
            frame["method"] = self.method
        if self.lineno > 0:
            frame["lineno"] = self.lineno
        return frame


@runtime_checkable
class Throwable(Protocol):
    """What the serializer needs to know about a captured exception."""

    @property
    def class_name(self) -> str: ...

    @property
    def message(self) -> Optional[str]: ...

    def stack_trace(self) -> Sequence[StackFrame]:
        """Frames in runtime order, innermost call first."""
        ...

    def cause(self) -> Optional["Throwable"]: ...


class PythonThrowable:
    """Adapts a ``BaseException`` to the ``Throwable`` protocol."""

    def __init__(self, exc: BaseException):
        self.exc = exc

    @property
    def class_name(self) -> str:
        cls = type(self.exc)
        if cls.__module__ == builtins.__name__:
            return cls.__qualname__
        return f"{cls.__module__}.{cls.__qualname__}"

    @property
    def message(self) -> Optional[str]:
        text = str(self.exc)
        return text or None

    def stack_trace(self) -> List[StackFrame]:
        return frames_from_traceback(self.exc.__traceback__)

    def cause(self) -> Optional["PythonThrowable"]:
        exc = self.exc
        nxt = exc.__cause__
        if nxt is None and not exc.__suppress_context__:
            nxt = exc.__context__
        return PythonThrowable(nxt) if nxt is not None else None

    def __repr__(self) -> str:
        return f"PythonThrowable({self.exc!r})"


def frames_from_traceback(tb: Optional[TracebackType]) -> List[StackFrame]:
    """Runtime-ordered frames for a traceback, innermost call first."""
    frames = [_frame_from(frame, lineno) for frame, lineno in traceback.walk_tb(tb)]
    # walk_tb yields outermost first
    frames.reverse()
    return frames


def _frame_from(frame, lineno: Optional[int]) -> StackFrame:
    code = frame.f_code
    module = frame.f_globals.get("__name__")
    qualname = getattr(code, "co_qualname", code.co_name)
    owner = qualname.rpartition(".")[0].replace(".<locals>", "")
    if owner and module:
        class_name = f"{module}.{owner}"
    else:
        class_name = module or owner or None
    return StackFrame(
        class_name=class_name,
        filename=code.co_filename,
        method=code.co_name,
        lineno=lineno or 0,
    )


ThrowableLike = Union[BaseException, Throwable]


def as_throwable(value: ThrowableLike) -> Throwable:
    """Wrap a Python exception; pass protocol implementations through."""
    if isinstance(value, BaseException):
        return PythonThrowable(value)
    if isinstance(value, Throwable):
        return value
    raise TypeError(f"Cannot report {type(value).__name__} as a throwable")


def create_trace(throwable: Throwable) -> Dict[str, Any]:
    """Render one throwable as ``{"frames": [...], "exception": {...}}``."""
    elements = list(throwable.stack_trace())
    frames = [element.to_dict() for element in reversed(elements)]

    exception: Dict[str, Any] = {"class": throwable.class_name}
    if throwable.message is not None:
        exception["message"] = throwable.message

    return {"frames": frames, "exception": exception}


def _identity(throwable: Throwable) -> int:
    # Adapters may be rebuilt on every cause() call and need not be hashable
    if isinstance(throwable, PythonThrowable):
        return id(throwable.exc)
    return id(throwable)


def trace_chain(value: ThrowableLike) -> List[Dict[str, Any]]:
    """Serialise the full cause chain, root cause first.

    The walk stops at the first cause that was already visited so that a
    cyclic ``__context__`` chain cannot loop forever.
    """
    traces: List[Dict[str, Any]] = []
    seen: Set[int] = set()
    # Holding visited nodes keeps their ids from being reused mid-walk
    visited: List[Throwable] = []
    throwable: Optional[Throwable] = as_throwable(value)
    while throwable is not None and _identity(throwable) not in seen:
        seen.add(_identity(throwable))
        visited.append(throwable)
        traces.insert(0, create_trace(throwable))
        throwable = throwable.cause()
    return traces
