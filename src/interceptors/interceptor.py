from abc import ABC, abstractmethod
from typing import Any, Callable, List

from server.call_context import CallContext


class Interceptor(ABC):
    """
    Stage wrapped around every call. Implementations may read or attach
    metadata, delay the call, or reject it by raising before `proceed()`.
    """

    @abstractmethod
    def intercept(self, context: CallContext, proceed: Callable[[], Any]) -> Any:
        pass


def run_pipeline(
    interceptors: List[Interceptor],
    context: CallContext,
    handler: Callable[[], Any],
) -> Any:
    """Run `handler` inside the interceptors, the first one outermost."""
    proceed = handler
    for interceptor in reversed(interceptors):
        proceed = _bind(interceptor, context, proceed)
    return proceed()


def _bind(
    interceptor: Interceptor, context: CallContext, proceed: Callable[[], Any]
) -> Callable[[], Any]:
    return lambda: interceptor.intercept(context, proceed)
