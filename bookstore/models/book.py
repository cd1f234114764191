from sqlmodel import SQLModel, Field
from sqlalchemy import Column, JSON
from typing import Optional, List
from datetime import datetime
from decimal import Decimal

from bookstore.constants.order_status import BookAvailability


class Book(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(index=True)
    authors: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    categories: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    description: Optional[str] = None
    isbn: Optional[str] = Field(default=None, index=True)
    image_url: Optional[str] = None

    # null price is sold at 0
    price: Optional[Decimal] = Field(default=None, max_digits=10, decimal_places=2)
    availability: str = Field(default=BookAvailability.AVAILABLE.value, index=True)

    rating: Optional[float] = Field(default=None, index=True)
    ratings_count: int = Field(default=0)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def is_available(self) -> bool:
        return self.availability == BookAvailability.AVAILABLE.value
