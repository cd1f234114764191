import json
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import String, cast
from sqlmodel import Session, select

from bookstore.models.book import Book


class BookRepository:

    def __init__(self, session: Session):
        self.session = session

    def get(self, book_id: int) -> Optional[Book]:
        return self.session.get(Book, book_id)

    def search_query(
        self,
        q: Optional[str] = None,
        author: Optional[str] = None,
        category: Optional[str] = None,
        availability: Optional[str] = None,
        max_price: Optional[Decimal] = None,
    ):
        query = select(Book)

        if q:
            query = query.where(Book.title.ilike(f"%{q}%"))

        # authors/categories are JSON arrays; match on their text form
        if author:
            query = query.where(cast(Book.authors, String).ilike(f"%{author}%"))

        if category:
            query = query.where(cast(Book.categories, String).ilike(f"%{category}%"))

        if availability:
            query = query.where(Book.availability == availability)

        if max_price is not None:
            query = query.where(Book.price <= max_price)

        return query.order_by(Book.created_at.desc(), Book.id.desc())

    def popular(self, limit: int = 12, min_rating: float = 4.0) -> List[Book]:
        query = (
            select(Book)
            .where(Book.rating >= min_rating)
            .order_by(Book.rating.desc(), Book.ratings_count.desc(), Book.id)
            .limit(limit)
        )
        return self.session.exec(query).all()

    def new_releases(self, limit: int = 12) -> List[Book]:
        query = select(Book).order_by(Book.created_at.desc(), Book.id.desc()).limit(limit)
        return self.session.exec(query).all()

    def genre_query(self, genre: str):
        # exact element match inside the JSON array text, quotes included
        return (
            select(Book)
            .where(cast(Book.categories, String).like(f"%{json.dumps(genre)}%"))
            .order_by(Book.rating.desc().nulls_last(), Book.id)
        )

    def genres(self) -> List[str]:
        return self._distinct_values(Book.categories)

    def authors(self) -> List[str]:
        return self._distinct_values(Book.authors)

    def _distinct_values(self, column) -> List[str]:
        values = set()
        for names in self.session.exec(select(column)).all():
            values.update(names or [])
        return sorted(values)
