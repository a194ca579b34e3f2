from typing import Literal

import redis.asyncio as redis
from dependency_injector import containers, providers

from maxviews_quota.quota.evaluator import QuotaEvaluator
from maxviews_quota.quota.scanner import ModuleScanner
from maxviews_quota.quota.view_counter import ViewCounter
from maxviews_quota.service.content_catalog.json_file_catalog import (
    JsonFileContentCatalog,
)
from maxviews_quota.service.log_reader.null_log_reader import NullLogReader
from maxviews_quota.service.log_reader.solr_log_reader import SolrLogReader
from maxviews_quota.service.override_store.null_override_store import (
    NullOverrideStore,
)
from maxviews_quota.service.override_store.redis_override_store import (
    RedisOverrideStore,
)
from maxviews_quota.service.solr import SolrService
from maxviews_quota.strategy.extractor.base import NullUserIdExtractor
from maxviews_quota.strategy.extractor.bearer_token import BearerTokenUserIdExtractor
from maxviews_quota.strategy.extractor.cookie_user_id import CookieUserIdExtractor


def _as_bool(value: object) -> bool:
    return value.lower() == "true" if isinstance(value, str) else bool(value)


class AppConfiguration(providers.Configuration):
    def is_solr_log_enabled(self) -> Literal["true", "false"]:
        """Check if the access log is read from Solr."""
        if self.solr.base_url() and self.solr.log_collection():
            return "true"
        return "false"

    def is_redis_override_enabled(self) -> Literal["true", "false"]:
        """Check if overrides are read from Redis."""
        return "true" if self.redis.url() else "false"

    def is_jwt_enabled(self) -> Literal["true", "false"]:
        """Check if user ids can be read from JWT tokens."""
        return "true" if self.jwt_secret() else "false"


class Container(containers.DeclarativeContainer):
    """Dependency Injection Container for the max views quota service."""

    config = AppConfiguration()

    solr_service: providers.Singleton = providers.Singleton(
        SolrService,
        base_url=config.solr.base_url,
        username=config.solr.username,
        password=config.solr.password,
        proxy_url=config.solr.proxy_url,
    )

    redis_client: providers.Singleton = providers.Singleton(
        redis.from_url,
        config.redis.url,
    )

    log_reader: providers.Selector = providers.Selector(
        config.is_solr_log_enabled,
        true=providers.Singleton(
            SolrLogReader,
            solr_service=solr_service,
            collection=config.solr.log_collection,
        ),
        false=providers.Singleton(NullLogReader),
    )

    override_store: providers.Selector = providers.Selector(
        config.is_redis_override_enabled,
        true=providers.Singleton(
            RedisOverrideStore,
            redis_client=redis_client,
            key_prefix=config.redis.key_prefix,
        ),
        false=providers.Singleton(NullOverrideStore),
    )

    content_catalog: providers.Singleton = providers.Singleton(
        JsonFileContentCatalog,
        base_path=config.catalog_path,
    )

    view_counter: providers.Factory = providers.Factory(
        ViewCounter,
        log_reader=log_reader,
    )

    scanner: providers.Factory = providers.Factory(
        ModuleScanner,
        content_catalog=content_catalog,
    )

    evaluator: providers.Factory = providers.Factory(
        QuotaEvaluator,
        override_store=override_store,
        view_counter=view_counter,
    )

    null_user_id_extractor: providers.Singleton = providers.Singleton(NullUserIdExtractor)

    user_id_extractors: providers.Aggregate = providers.Aggregate(
        {
            "cookie": providers.Selector(
                config.is_jwt_enabled,
                true=providers.Singleton(
                    CookieUserIdExtractor,
                    cookie_name=config.cookie_name,
                    jwt_secret=config.jwt_secret,
                    verify_audience=config.jwt_verify_audience.as_(_as_bool),
                ),
                false=null_user_id_extractor,
            ),
            "bearer-token": providers.Selector(
                config.is_jwt_enabled,
                true=providers.Singleton(
                    BearerTokenUserIdExtractor,
                    jwt_secret=config.jwt_secret,
                    verify_audience=config.jwt_verify_audience.as_(_as_bool),
                ),
                false=null_user_id_extractor,
            ),
        }
    )
