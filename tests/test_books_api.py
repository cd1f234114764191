from bookstore.constants.order_status import BookAvailability


class TestListBooks:
    def test_pagination(self, client, make_book):
        for n in range(5):
            make_book(title=f"Volume {n}")

        data = client.get("/books/?page=2&limit=2").json()

        assert data["total_items"] == 5
        assert data["total_pages"] == 3
        assert data["current_page"] == 2
        assert len(data["results"]) == 2

    def test_filters(self, client, make_book):
        make_book(title="Dune", authors=["Frank Herbert"], categories=["Science Fiction"], price="9.00")
        make_book(title="Emma", authors=["Jane Austen"], categories=["Romance"], price="5.00")
        make_book(
            title="Persuasion",
            authors=["Jane Austen"],
            categories=["Romance"],
            price="20.00",
            availability=BookAvailability.OUT_OF_STOCK,
        )

        by_author = client.get("/books/?author=Austen").json()
        assert {b["title"] for b in by_author["results"]} == {"Emma", "Persuasion"}

        by_title = client.get("/books/?q=dun").json()
        assert [b["title"] for b in by_title["results"]] == ["Dune"]

        cheap_available = client.get("/books/?category=Romance&max_price=10&availability=available").json()
        assert [b["title"] for b in cheap_available["results"]] == ["Emma"]


class TestBookDetail:
    def test_found(self, client, make_book):
        book = make_book(title="Dune", price="9.50")

        data = client.get(f"/books/{book.id}").json()

        assert data["title"] == "Dune"
        assert data["price"] == 9.5
        assert data["availability"] == "available"

    def test_missing(self, client):
        assert client.get("/books/999").status_code == 404


class TestFeatured:
    def test_popular_orders_by_rating_then_count(self, client, make_book):
        make_book(title="Loved", rating=4.8, ratings_count=10)
        make_book(title="Loved More", rating=4.8, ratings_count=900)
        make_book(title="Fine", rating=4.0, ratings_count=5)
        make_book(title="Meh", rating=3.9, ratings_count=5000)
        make_book(title="Unrated")

        data = client.get("/books/featured/popular").json()

        assert [b["title"] for b in data["books"]] == ["Loved More", "Loved", "Fine"]
        assert data["total"] == 3

    def test_popular_limit(self, client, make_book):
        for n in range(4):
            make_book(title=f"Hit {n}", rating=4.5)

        data = client.get("/books/featured/popular?limit=2").json()

        assert len(data["books"]) == 2

    def test_new_releases_newest_first(self, client, make_book):
        make_book(title="Old")
        make_book(title="Middle")
        make_book(title="New")

        data = client.get("/books/featured/new-releases?limit=2").json()

        assert [b["title"] for b in data["books"]] == ["New", "Middle"]


class TestGenre:
    def test_exact_genre_match(self, client, make_book):
        make_book(title="Dune", categories=["Science Fiction"], rating=4.2)
        make_book(title="Foundation", categories=["Science Fiction", "Classics"], rating=4.6)
        make_book(title="Fiction Anthology", categories=["Fiction"])

        data = client.get("/books/genre/Science Fiction").json()

        assert data["genre"] == "Science Fiction"
        assert data["total_items"] == 2
        assert [b["title"] for b in data["results"]] == ["Foundation", "Dune"]

    def test_genre_pagination(self, client, make_book):
        for n in range(3):
            make_book(title=f"Poems {n}", categories=["Poetry"])

        data = client.get("/books/genre/Poetry?page=2&limit=2").json()

        assert data["total_pages"] == 2
        assert len(data["results"]) == 1
        assert data["has_next"] is False


class TestMeta:
    def test_genres_are_unique_and_sorted(self, client, make_book):
        make_book(title="A", categories=["Romance", "Classics"])
        make_book(title="B", categories=["Classics"])

        assert client.get("/books/meta/genres").json() == {"genres": ["Classics", "Romance"]}

    def test_authors_are_unique_and_sorted(self, client, make_book):
        make_book(title="Emma", authors=["Jane Austen"])
        make_book(title="Good Omens", authors=["Terry Pratchett", "Neil Gaiman"])
        make_book(title="Persuasion", authors=["Jane Austen"])

        data = client.get("/books/meta/authors").json()

        assert data["authors"] == ["Jane Austen", "Neil Gaiman", "Terry Pratchett"]
