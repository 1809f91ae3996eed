"""Document classes used across the tests."""

from datetime import datetime
from typing import Annotated, ClassVar, List, Optional

from pydantic import BaseModel, Field

from es_bundle.mapping.document import Document, Property


class Variant(BaseModel):
    color: Annotated[str, Property(type="keyword")]
    size: Optional[str] = None
    stock: int = 0


class Category(BaseModel):
    name: str
    path: List[str] = []


class Product(Document):
    doc_type: ClassVar[str] = "product"

    title: Annotated[str, Property(analyzer="english", fields={"raw": {"type": "keyword"}})]
    sku: Annotated[str, Property(type="keyword")]
    price: float = 0.0
    in_stock: bool = True
    created_at: Optional[datetime] = None
    category: Optional[Category] = None
    variants: List[Variant] = []
    description: Optional[str] = Field(default=None, alias="desc")


class ContentPage(Document):
    title: Annotated[str, Property(analyzer="english", fields={"raw": {"type": "keyword"}})]
    slug: Annotated[str, Property(type="keyword")]
    body: Optional[str] = None
