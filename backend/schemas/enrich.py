from pydantic import BaseModel


class EnrichRequest(BaseModel):
    url: str


class EnrichOut(BaseModel):
    title: str
    description: str
    suggested_tag: str
    favicon: str | None = None
