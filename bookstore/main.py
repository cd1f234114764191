import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bookstore.config import settings
from bookstore.database import create_db_and_tables
from bookstore.exceptions import BookstoreError
from bookstore.routes import books, cart, health, orders

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Run DB creation ONLY in local
    if settings.env == "local":
        create_db_and_tables()
    yield

app = FastAPI(title="BookStore API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(BookstoreError)
async def bookstore_error_handler(request: Request, exc: BookstoreError):
    detail = exc.message
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        detail = "Storage failure"
    return JSONResponse(status_code=exc.status_code, content={"detail": detail})


app.include_router(health.router, tags=["Health"])
app.include_router(books.router, prefix="/books", tags=["Books"])
app.include_router(cart.router, prefix="/cart", tags=["Cart"])
app.include_router(orders.router, prefix="/orders", tags=["Orders"])


@app.get("/")
def root():
    return {
        "books": [
            "/books", "/books/{book_id}", "/books/featured/popular",
            "/books/featured/new-releases", "/books/genre/{genre}",
            "/books/meta/genres", "/books/meta/authors"
        ],
        "cart": [
            "/cart", "/cart/count", "/cart/add", "/cart/update/{id}",
            "/cart/remove/{id}", "/cart/clear"
        ],
        "orders": [
            "/orders", "/orders/create", "/orders/{id}",
            "/orders/{id}/cancel", "/orders/{id}/reorder"
        ]
    }
