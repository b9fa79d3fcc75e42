from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Dict, List, NewType, Optional, Union

# Root-prefixed path that passed sanitization. Filesystem calls take only these.
SanitizedPath = NewType("SanitizedPath", str)


class Action(enum.Enum):
    SEND = None
    SAVE = "save"
    APPEND = "append"
    TOUCH = "touch"
    MAKEDIR = "makedir"
    REMOVE = "remove"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Action"]:
        """
        Map the raw ``action`` parameter to an Action.
        Returns None for unrecognized values (including the empty string).
        """
        for action in cls:
            if action.value == value:
                return action
        return None

    @property
    def verb(self) -> str:
        return self.value or "send"


class FailureKind(enum.Enum):
    NOT_FOUND = 404
    FORBIDDEN = 403


@dataclass(frozen=True)
class Failure:
    kind: FailureKind
    message: str

    @classmethod
    def not_found(cls, path: str) -> "Failure":
        return cls(FailureKind.NOT_FOUND, f"Path not found: {path}")

    @classmethod
    def forbidden(cls, message: str) -> "Failure":
        return cls(FailureKind.FORBIDDEN, message)


@dataclass(frozen=True)
class Success:
    message: str


@dataclass(frozen=True)
class StreamedBody:
    """File whose size the filesystem reports; the transport streams it."""
    path: str
    size: int
    mtime: float
    content_type: str


@dataclass(frozen=True)
class BufferedBody:
    """File read fully into memory because stat reported no size."""
    data: bytes
    mtime: float
    content_type: str

    @property
    def size(self) -> int:
        return len(self.data)


SendBody = Union[StreamedBody, BufferedBody]
OperationOutcome = Union[Success, StreamedBody, BufferedBody, Failure]


@dataclass(frozen=True)
class UploadedPayload:
    tempfile: Optional[str]
    filename: Optional[str] = None


@dataclass(frozen=True)
class GatewayRequest:
    path: str
    action: Optional[str] = None
    upload: Optional[UploadedPayload] = None


@dataclass
class GatewayResponse:
    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: Union[StreamedBody, List[bytes]] = field(default_factory=list)
