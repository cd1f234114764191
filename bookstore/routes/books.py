from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session

from bookstore.constants.order_status import BookAvailability
from bookstore.database import get_session
from bookstore.models.book import Book
from bookstore.repositories import BookRepository
from bookstore.utils.pagination import paginate

router = APIRouter()


def book_to_dict(book: Book) -> dict:
    return {
        "id": book.id,
        "title": book.title,
        "authors": book.authors,
        "categories": book.categories,
        "description": book.description,
        "isbn": book.isbn,
        "image_url": book.image_url,
        "price": book.price,
        "availability": book.availability,
        "rating": book.rating,
        "ratings_count": book.ratings_count,
    }


@router.get("/", summary="List books with pagination and filtering")
def list_books(
    page: int = 1,
    limit: int = 20,
    q: Optional[str] = Query(None, description="Search term for title"),
    author: Optional[str] = None,
    category: Optional[str] = None,
    availability: Optional[BookAvailability] = None,
    max_price: Optional[Decimal] = None,
    session: Session = Depends(get_session)
):
    query = BookRepository(session).search_query(
        q=q,
        author=author,
        category=category,
        availability=availability.value if availability else None,
        max_price=max_price,
    )

    data = paginate(session=session, query=query, page=page, limit=limit)
    data["results"] = [book_to_dict(b) for b in data["results"]]
    return data


@router.get("/featured/popular", summary="Top rated books")
def popular_books(
    limit: int = Query(12, ge=1, le=100),
    session: Session = Depends(get_session)
):
    books = BookRepository(session).popular(limit=limit)

    return {
        "total": len(books),
        "books": [book_to_dict(b) for b in books]
    }


@router.get("/featured/new-releases", summary="Most recently added books")
def new_releases(
    limit: int = Query(12, ge=1, le=100),
    session: Session = Depends(get_session)
):
    books = BookRepository(session).new_releases(limit=limit)

    return {
        "total": len(books),
        "books": [book_to_dict(b) for b in books]
    }


# ---------- LIST BOOKS BY GENRE ----------
@router.get("/genre/{genre}", summary="List books in a genre")
def books_by_genre(
    genre: str,
    page: int = 1,
    limit: int = 20,
    session: Session = Depends(get_session)
):
    query = BookRepository(session).genre_query(genre)

    data = paginate(session=session, query=query, page=page, limit=limit)
    data["genre"] = genre
    data["results"] = [book_to_dict(b) for b in data["results"]]
    return data


@router.get("/meta/genres")
def list_genres(session: Session = Depends(get_session)):
    return {"genres": BookRepository(session).genres()}


@router.get("/meta/authors")
def list_authors(session: Session = Depends(get_session)):
    return {"authors": BookRepository(session).authors()}


@router.get("/{book_id}")
def get_book(book_id: int, session: Session = Depends(get_session)):
    book = BookRepository(session).get(book_id)
    if not book:
        raise HTTPException(404, "Book not found")

    return book_to_dict(book)
