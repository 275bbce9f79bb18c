import logging
from typing import Any, Callable

from interceptors.interceptor import Interceptor
from server.call_context import CallContext
from utils.constants import Headers

logger = logging.getLogger(__name__)


class HeaderServerInterceptor(Interceptor):
    def __init__(
        self,
        header_key: str = Headers.CUSTOM_SERVER_HEADER_KEY.value,
        header_value: str = Headers.CUSTOM_SERVER_HEADER_VALUE.value,
    ):
        self.header_key = header_key
        self.header_value = header_value

    def intercept(self, context: CallContext, proceed: Callable[[], Any]) -> Any:
        logger.info(f"header received from client: {context.invocation_metadata}")
        context.set_response_header(self.header_key, self.header_value)
        return proceed()
