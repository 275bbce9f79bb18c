from dependency_injector import containers, providers
from clients.aws_client_factory import (
    LocalDevelopmentAwsClientFactory,
    ProductionAwsClientFactory,
)
from clients.dynamodb_client import init_dynamodb_client
from db.feature_repository import FeatureRepository
from interceptors.header_interceptor import HeaderServerInterceptor
from interceptors.latency_interceptor import (
    FaultInjectionInterceptor,
    LatencyInjectionInterceptor,
)
from server.route_guide_server import RouteGuideServer
from services.route_guide_service import RouteGuideService
from config.config import SETTINGS


class Container(containers.DeclarativeContainer):
    # Clients
    aws_client_factory = providers.Selector(
        providers.Object(SETTINGS.app_env),
        local=providers.Singleton(
            LocalDevelopmentAwsClientFactory,
            endpoint=SETTINGS.dynamodb_endpoint,
            region=SETTINGS.aws_region,
        ),
        development=providers.Singleton(
            LocalDevelopmentAwsClientFactory,
            endpoint=SETTINGS.dynamodb_endpoint,
            region=SETTINGS.aws_region,
        ),
        production=providers.Singleton(
            ProductionAwsClientFactory, region=SETTINGS.aws_region
        ),
    )
    dynamodb_client = providers.Resource(
        init_dynamodb_client,
        factory=aws_client_factory,
        table_name=SETTINGS.dynamodb_table_name,
    )

    # Repositories
    feature_repository = providers.Singleton(
        FeatureRepository,
        client=dynamodb_client,
        geohash_precision=SETTINGS.geohash_precision,
        full_geohash_precision=SETTINGS.full_geohash_precision,
    )

    # Services
    route_guide_service = providers.Singleton(
        RouteGuideService, repository=feature_repository
    )

    # Interceptors
    header_interceptor = providers.Singleton(HeaderServerInterceptor)
    fault_interceptor = providers.Singleton(
        FaultInjectionInterceptor, rate=SETTINGS.fault_injection_rate
    )
    latency_interceptor = providers.Singleton(
        LatencyInjectionInterceptor,
        enabled=SETTINGS.latency_injection_enabled,
        base_delay_ms=SETTINGS.latency_base_delay_ms,
    )

    # Server
    server = providers.Singleton(
        RouteGuideServer,
        service=route_guide_service,
        interceptors=providers.List(
            header_interceptor, fault_interceptor, latency_interceptor
        ),
        port=SETTINGS.server_port,
    )
