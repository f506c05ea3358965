from file_migrator.config.settings import Settings
from file_migrator.origin.answer_payload_locator import AnswerPayloadLocator
from file_migrator.origin.base import BaseOriginLocator
from file_migrator.origin.direct_url_locator import DirectUrlLocator
from file_migrator.origin.http_client import OriginHttpClient
from file_migrator.origin.index_locator import IndexLocator


class OriginLocatorFactory:
    """Creates the origin locator strategy selected by settings."""

    STRATEGIES = ("direct_url", "index", "answer_payload")

    @classmethod
    def create(cls, settings: Settings, http_client: OriginHttpClient) -> BaseOriginLocator:
        strategy = settings.origin_strategy.lower()
        if strategy == "direct_url":
            return DirectUrlLocator(
                http_client,
                referer=settings.origin_referer or settings.origin_base_url,
            )
        if strategy == "index":
            return IndexLocator(
                http_client,
                base_url=settings.origin_base_url,
                api_key=settings.origin_api_key,
            )
        if strategy == "answer_payload":
            return AnswerPayloadLocator(
                http_client,
                base_url=settings.origin_base_url,
                api_key=settings.origin_api_key,
                upload_hosts=settings.upload_hosts(),
            )
        raise ValueError(
            f"Unknown origin strategy '{strategy}'. Choose from: {list(cls.STRATEGIES)}"
        )

    @staticmethod
    def build_http_client(settings: Settings) -> OriginHttpClient:
        return OriginHttpClient(
            timeout_seconds=settings.fetch_timeout_seconds,
            default_content_type=settings.default_content_type,
            max_attempts=settings.fetch_max_attempts,
            backoff_seconds=settings.fetch_retry_backoff_seconds,
            headers={"User-Agent": settings.origin_user_agent},
        )
