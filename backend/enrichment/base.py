from abc import ABC, abstractmethod

from enrichment.types import LinkMetadata


class MetadataEnricher(ABC):
    """
    Optional annotation step for a link.

    Implementations must not raise for remote failures: an unreachable or
    unparseable page yields an empty LinkMetadata. Resource create/update
    never depends on an enricher.
    """

    @abstractmethod
    async def enrich(self, url: str) -> LinkMetadata:
        ...


class NullEnricher(MetadataEnricher):
    """Used when enrichment is disabled in config."""

    async def enrich(self, url: str) -> LinkMetadata:
        return LinkMetadata()
