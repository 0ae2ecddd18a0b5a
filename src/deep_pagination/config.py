import os
from dataclasses import dataclass

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class SearchSettings:
    """Configuration surface for one search engine / index combination.

    Instances are passed explicitly to the paginator and the engine adapters,
    so several configurations (e.g. per-tenant index prefixes) can live side
    by side in one process.
    """

    engine_endpoint: str = "http://localhost:9200"
    index_prefix: str = "vendure"
    index_name_pattern: str | None = None
    default_page_size: int = 100
    max_page_size: int = 500
    exact_total_count: bool = True
    request_timeout: float = 10.0

    def __post_init__(self) -> None:
        if self.max_page_size < 1:
            raise ValueError("max_page_size must be >= 1")
        if self.default_page_size < 1:
            raise ValueError("default_page_size must be >= 1")
        if self.default_page_size > self.max_page_size:
            raise ValueError("default_page_size must not exceed max_page_size")
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be > 0")
        if not self.index_pattern:
            raise ValueError("index pattern must not be empty")

    @property
    def index_pattern(self) -> str:
        """Index (or wildcard pattern) searched by the paginator.

        Variant indices carry a timestamp suffix after every reindex, so the
        default pattern matches any version of ``<prefix>variants``.
        """
        if self.index_name_pattern:
            return self.index_name_pattern
        return f"{self.index_prefix}variants*"

    @classmethod
    def from_env(cls) -> "SearchSettings":
        return cls(
            engine_endpoint=os.getenv("ELASTICSEARCH_HOST", "http://localhost:9200"),
            index_prefix=os.getenv("ELASTICSEARCH_INDEX_PREFIX", "vendure"),
            index_name_pattern=os.getenv("DEEP_PAGINATION_INDEX_PATTERN") or None,
            default_page_size=int(os.getenv("DEEP_PAGINATION_DEFAULT_PAGE_SIZE", "100")),
            max_page_size=int(os.getenv("DEEP_PAGINATION_MAX_PAGE_SIZE", "500")),
            exact_total_count=_env_bool("DEEP_PAGINATION_EXACT_TOTAL", True),
            request_timeout=float(os.getenv("ELASTICSEARCH_TIMEOUT", "10")),
        )
