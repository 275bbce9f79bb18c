import threading
from dataclasses import dataclass, field
from typing import Dict


@dataclass
class CallContext:
    """Per-call state shared by the interceptors and the handler."""

    method: str
    invocation_metadata: Dict[str, str] = field(default_factory=dict)
    response_metadata: Dict[str, str] = field(default_factory=dict)
    _cancelled: threading.Event = field(default_factory=threading.Event, repr=False)

    def cancel(self) -> None:
        self._cancelled.set()

    def is_active(self) -> bool:
        return not self._cancelled.is_set()

    def set_response_header(self, key: str, value: str) -> None:
        self.response_metadata[key] = value
