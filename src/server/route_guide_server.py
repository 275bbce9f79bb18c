import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Type

from pydantic import BaseModel, ValidationError

from exceptions.custom_exceptions import (
    InvalidArgumentError,
    UnavailableError,
    UnimplementedError,
)
from interceptors.interceptor import Interceptor, run_pipeline
from models.models import GetFeatureRequest, Point, Rectangle, UpdateFeatureRequest
from server.call_context import CallContext
from services.route_guide_service import RouteGuideService
from utils.constants import DEFAULT_SERVER_PORT, RpcMethod

logger = logging.getLogger(__name__)


@dataclass
class CallResult:
    response: Any
    response_metadata: Dict[str, str] = field(default_factory=dict)


def _coerce(model: Type[BaseModel], value: Any) -> Any:
    if isinstance(value, model):
        return value
    try:
        return model.model_validate(value)
    except ValidationError as exc:
        raise InvalidArgumentError(
            f"Malformed {model.__name__}", {"errors": exc.error_count()}
        ) from exc


class RouteGuideServer:
    """
    Dispatches decoded requests to the service through the interceptor chain.
    The RPC transport sits in front of `call` and is not part of this class.
    """

    def __init__(
        self,
        service: RouteGuideService,
        interceptors: List[Interceptor],
        port: int = DEFAULT_SERVER_PORT,
    ):
        self.service = service
        self.interceptors = interceptors
        self.port = port
        self._serving = False
        self._stopped = threading.Event()
        self._handlers: Dict[str, Callable[[Any, CallContext], Any]] = {
            RpcMethod.GET_FEATURE.value: self._get_feature,
            RpcMethod.LIST_FEATURES.value: self._list_features,
            RpcMethod.RECORD_ROUTE.value: self._record_route,
            RpcMethod.UPDATE_FEATURE.value: self._update_feature,
        }

    def _get_feature(self, request: Any, context: CallContext):
        return self.service.get_feature(_coerce(GetFeatureRequest, request))

    def _list_features(self, request: Any, context: CallContext) -> Iterator:
        return self.service.list_features(_coerce(Rectangle, request))

    def _record_route(self, request: Iterable[Any], context: CallContext):
        points = (_coerce(Point, point) for point in request)
        return self.service.record_route(points, context)

    def _update_feature(self, request: Any, context: CallContext):
        return self.service.update_feature(_coerce(UpdateFeatureRequest, request))

    def call(
        self,
        method: str,
        request: Any,
        metadata: Optional[Dict[str, str]] = None,
        context: Optional[CallContext] = None,
    ) -> CallResult:
        if not self._serving:
            raise UnavailableError("Server is not serving", {"method": method})
        handler = self._handlers.get(method)
        if handler is None:
            raise UnimplementedError(f"Unknown method: {method}")
        context = context or CallContext(
            method=method, invocation_metadata=dict(metadata or {})
        )
        response = run_pipeline(
            self.interceptors, context, lambda: handler(request, context)
        )
        return CallResult(
            response=response, response_metadata=dict(context.response_metadata)
        )

    def start(self) -> None:
        self._serving = True
        self._stopped.clear()
        logger.info(f"Server started, listening on {self.port}")

    def stop(self) -> None:
        """Stop serving requests. Resource cleanup belongs to the owner."""
        if not self._serving:
            return
        self._serving = False
        self._stopped.set()
        logger.info("Server stopped")

    def block_until_shutdown(self, timeout: Optional[float] = None) -> bool:
        return self._stopped.wait(timeout)
