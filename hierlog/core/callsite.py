"""
Call-site introspection.

Frames are walked with ``inspect``; descriptors are only built when a call-site
attribute of a context is actually read.
"""
from __future__ import annotations

import inspect
from dataclasses import dataclass
from types import FrameType
from typing import Iterable, List, Optional, Tuple

# Modules under these packages are never reported as the call site.
INTERNAL_PACKAGES: Tuple[str, ...] = ("hierlog",)


@dataclass(frozen=True)
class FrameDescriptor:
    """One stack frame, as seen by formatters."""

    file_name: str
    line_number: int
    column_number: Optional[int]
    function_name: str
    type_name: Optional[str]


def _is_internal(frame: FrameType, packages: Tuple[str, ...]) -> bool:
    module = frame.f_globals.get("__name__") or ""
    return any(module == package or module.startswith(package + ".") for package in packages)


def _type_name(frame: FrameType) -> Optional[str]:
    qualname = getattr(frame.f_code, "co_qualname", frame.f_code.co_name)
    parts = qualname.split(".")
    if len(parts) > 1 and parts[-2] != "<locals>":
        return parts[-2]
    return None


def describe_frame(frame: FrameType) -> FrameDescriptor:
    """Build a descriptor for a single frame."""
    info = inspect.getframeinfo(frame, context=0)
    positions = getattr(info, "positions", None)
    column = None
    if positions is not None and positions.col_offset is not None:
        column = positions.col_offset + 1
    return FrameDescriptor(
        file_name=info.filename,
        line_number=info.lineno,
        column_number=column,
        function_name=info.function,
        type_name=_type_name(frame),
    )


def capture_call_stack(frame: Optional[FrameType] = None, limit: Optional[int] = None) -> List[FrameDescriptor]:
    """Descriptors from frame (default: the caller) outwards, innermost first."""
    if frame is None:
        current = inspect.currentframe()
        frame = current.f_back if current is not None else None
    stack: List[FrameDescriptor] = []
    while frame is not None and (limit is None or len(stack) < limit):
        stack.append(describe_frame(frame))
        frame = frame.f_back
    return stack


def find_caller_frame(internal_packages: Iterable[str] = INTERNAL_PACKAGES) -> Optional[FrameType]:
    """The innermost frame whose module is outside internal_packages (dotted package names)."""
    packages = tuple(internal_packages)
    frame = inspect.currentframe()
    while frame is not None and _is_internal(frame, packages):
        frame = frame.f_back
    return frame
