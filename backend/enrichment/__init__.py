from config import EnrichmentConfig
from enrichment.base import MetadataEnricher, NullEnricher
from enrichment.html_meta import HtmlMetaEnricher
from enrichment.types import LinkMetadata


def build_enricher(cfg: EnrichmentConfig) -> MetadataEnricher:
    if not cfg.enabled:
        return NullEnricher()
    return HtmlMetaEnricher(timeout=cfg.timeout_seconds, user_agent=cfg.user_agent)


__all__ = [
    "MetadataEnricher",
    "NullEnricher",
    "HtmlMetaEnricher",
    "LinkMetadata",
    "build_enricher",
]
