import logging
import random
import time
from typing import Any, Callable

from exceptions.custom_exceptions import UnavailableError
from interceptors.interceptor import Interceptor
from server.call_context import CallContext
from utils.constants import LATENCY_TIERS

logger = logging.getLogger(__name__)


class LatencyInjectionInterceptor(Interceptor):
    """
    Delays calls before they reach the handler: 1% by 10s, 4% by 5s, 5% by
    2s, and the rest by `base_delay_ms`.
    """

    def __init__(
        self,
        enabled: bool = False,
        base_delay_ms: int = 0,
        rng: random.Random | None = None,
        sleeper: Callable[[float], None] = time.sleep,
    ):
        self.enabled = enabled
        self.base_delay_ms = base_delay_ms
        self.rng = rng or random.Random()
        self.sleeper = sleeper

    def pick_delay_ms(self) -> int:
        roll = self.rng.randrange(100)
        for upper_bound, delay_ms in LATENCY_TIERS:
            if roll < upper_bound:
                return delay_ms
        return self.base_delay_ms

    def intercept(self, context: CallContext, proceed: Callable[[], Any]) -> Any:
        if self.enabled:
            delay_ms = self.pick_delay_ms()
            if delay_ms > 0:
                logger.info(f"Injecting {delay_ms}ms delay for {context.method}")
                self.sleeper(delay_ms / 1000)
        logger.info(f"Processing request for {context.method}")
        return proceed()


class FaultInjectionInterceptor(Interceptor):
    """Rejects a fraction of calls with UnavailableError before the handler runs."""

    def __init__(self, rate: float = 0.0, rng: random.Random | None = None):
        self.rate = rate
        self.rng = rng or random.Random()

    def intercept(self, context: CallContext, proceed: Callable[[], Any]) -> Any:
        if self.rate > 0 and self.rng.random() < self.rate:
            logger.warning(f"Injecting fault for {context.method}")
            raise UnavailableError("Injected fault", {"method": context.method})
        return proceed()
