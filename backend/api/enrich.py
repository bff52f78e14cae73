from fastapi import APIRouter, Depends, Request

from auth.deps import get_current_user_id
from enrichment import MetadataEnricher
from schemas import EnrichRequest, EnrichOut
from services.validation import validate_link

router = APIRouter(prefix="/api/enrich", tags=["enrich"])


def get_enricher(request: Request) -> MetadataEnricher:
    return request.app.state.enricher


@router.post("", response_model=EnrichOut)
async def enrich_link(
    body: EnrichRequest,
    enricher: MetadataEnricher = Depends(get_enricher),
    user_id: str = Depends(get_current_user_id),
):
    url = validate_link(body.url)
    metadata = await enricher.enrich(url)
    return EnrichOut(**metadata.with_defaults())
