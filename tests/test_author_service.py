"""
Bookshelf Backend — Author Service Tests
===========================================

What:  Tests for AuthorService against an in-memory SQLite database.

What we test:
    ✅ Name-pair uniqueness on create (and its absence on update)
    ✅ Offset pagination: page size, total independent of page
    ✅ Search across first and last name
    ✅ Absent sentinel from find_one / update / remove
    ✅ Partial update leaves omitted fields alone
    ✅ Delete guard while books exist
"""

from datetime import date

import pytest

from bookshelf.exceptions import ConflictError
from bookshelf.schemas.author import AuthorCreate, AuthorUpdate
from bookshelf.schemas.book import BookCreate
from bookshelf.services.author_service import AuthorService
from bookshelf.services.book_service import BookService


async def _seed_authors(service, db, count):
    for i in range(count):
        await service.create(
            db, AuthorCreate(first_name=f"First{i:02d}", last_name=f"Last{i:02d}")
        )


class TestAuthorServiceCreate:
    """Tests for create and the name-pair invariant."""

    def setup_method(self):
        self.service = AuthorService()

    @pytest.mark.asyncio
    async def test_create_assigns_id_and_timestamps(self, db_session):
        author = await self.service.create(
            db_session,
            AuthorCreate(
                first_name="John",
                last_name="Doe",
                bio="Test author",
                birth_date=date(1970, 1, 1),
            ),
        )

        assert author.id == 1
        assert author.first_name == "John"
        assert author.birth_date == date(1970, 1, 1)
        assert author.created_at is not None
        assert author.updated_at is not None

    @pytest.mark.asyncio
    async def test_duplicate_name_pair_conflicts(self, db_session):
        await self.service.create(db_session, AuthorCreate(first_name="John", last_name="Doe"))

        with pytest.raises(ConflictError, match="already exists"):
            await self.service.create(
                db_session,
                AuthorCreate(first_name="John", last_name="Doe", bio="Different bio"),
            )

    @pytest.mark.asyncio
    async def test_same_first_name_different_last_name_allowed(self, db_session):
        await self.service.create(db_session, AuthorCreate(first_name="John", last_name="Doe"))
        other = await self.service.create(
            db_session, AuthorCreate(first_name="John", last_name="Smith")
        )

        assert other.id == 2


class TestAuthorServiceFindAll:
    """Tests for pagination and search."""

    def setup_method(self):
        self.service = AuthorService()

    @pytest.mark.asyncio
    async def test_defaults_return_first_ten_of_twenty_five(self, db_session):
        await _seed_authors(self.service, db_session, 25)

        page = await self.service.find_all(db_session)

        assert len(page.data) == 10
        assert page.total == 25
        assert page.page == 1
        assert page.limit == 10
        assert [a.id for a in page.data] == list(range(1, 11))

    @pytest.mark.asyncio
    async def test_last_page_is_partial_and_total_unchanged(self, db_session):
        await _seed_authors(self.service, db_session, 25)

        page = await self.service.find_all(db_session, page=3, limit=10)

        assert len(page.data) == 5
        assert page.total == 25

    @pytest.mark.asyncio
    async def test_page_past_the_end_is_empty(self, db_session):
        await _seed_authors(self.service, db_session, 3)

        page = await self.service.find_all(db_session, page=5, limit=2)

        assert page.data == []
        assert page.total == 3

    @pytest.mark.asyncio
    async def test_search_matches_first_or_last_name(self, db_session):
        await self.service.create(db_session, AuthorCreate(first_name="Ursula", last_name="Le Guin"))
        await self.service.create(db_session, AuthorCreate(first_name="Frank", last_name="Herbert"))
        await self.service.create(db_session, AuthorCreate(first_name="Herbert", last_name="George"))

        page = await self.service.find_all(db_session, search="Herbert")

        assert page.total == 2
        assert {a.first_name for a in page.data} == {"Frank", "Herbert"}

    @pytest.mark.asyncio
    async def test_search_treats_wildcards_literally(self, db_session):
        await self.service.create(db_session, AuthorCreate(first_name="Ann", last_name="Lee"))

        page = await self.service.find_all(db_session, search="%")

        assert page.total == 0

    @pytest.mark.asyncio
    async def test_non_positive_page_rejected(self, db_session):
        with pytest.raises(ValueError):
            await self.service.find_all(db_session, page=0)
        with pytest.raises(ValueError):
            await self.service.find_all(db_session, limit=0)


class TestAuthorServiceFindOneAndUpdate:
    """Tests for lookups and partial updates."""

    def setup_method(self):
        self.service = AuthorService()
        self.books = BookService()

    @pytest.mark.asyncio
    async def test_find_one_missing_returns_none(self, db_session):
        assert await self.service.find_one(db_session, 999) is None

    @pytest.mark.asyncio
    async def test_find_one_includes_books(self, db_session, make_isbn):
        author = await self.service.create(db_session, AuthorCreate(first_name="Jane", last_name="Doe"))
        await self.books.create(
            db_session, BookCreate(title="First", isbn=make_isbn(1), author_id=author.id)
        )

        found = await self.service.find_one(db_session, author.id)

        assert found is not None
        assert [b.title for b in found.books] == ["First"]

    @pytest.mark.asyncio
    async def test_update_overlays_only_provided_fields(self, db_session):
        author = await self.service.create(
            db_session, AuthorCreate(first_name="John", last_name="Doe", bio="Old bio")
        )

        updated = await self.service.update(db_session, author.id, AuthorUpdate(bio="New bio"))

        assert updated.bio == "New bio"
        assert updated.first_name == "John"
        assert updated.last_name == "Doe"

    @pytest.mark.asyncio
    async def test_empty_update_only_refreshes_updated_at(self, db_session):
        author = await self.service.create(
            db_session, AuthorCreate(first_name="John", last_name="Doe", bio="Bio")
        )
        author_id = author.id
        before = author.updated_at

        updated = await self.service.update(db_session, author_id, AuthorUpdate())

        assert updated.id == author_id
        assert updated.first_name == "John"
        assert updated.bio == "Bio"
        assert updated.updated_at >= before

    @pytest.mark.asyncio
    async def test_update_can_clear_optional_field(self, db_session):
        author = await self.service.create(
            db_session, AuthorCreate(first_name="John", last_name="Doe", bio="Bio")
        )

        updated = await self.service.update(db_session, author.id, AuthorUpdate(bio=None))

        assert updated.bio is None

    @pytest.mark.asyncio
    async def test_update_missing_returns_none(self, db_session):
        assert await self.service.update(db_session, 999, AuthorUpdate(bio="x")) is None

    @pytest.mark.asyncio
    async def test_update_does_not_recheck_name_uniqueness(self, db_session):
        await self.service.create(db_session, AuthorCreate(first_name="John", last_name="Doe"))
        other = await self.service.create(db_session, AuthorCreate(first_name="Jane", last_name="Roe"))

        updated = await self.service.update(
            db_session, other.id, AuthorUpdate(first_name="John", last_name="Doe")
        )

        assert (updated.first_name, updated.last_name) == ("John", "Doe")


class TestAuthorServiceRemove:
    """Tests for the delete guard."""

    def setup_method(self):
        self.service = AuthorService()
        self.books = BookService()

    @pytest.mark.asyncio
    async def test_remove_missing_returns_false(self, db_session):
        assert await self.service.remove(db_session, 999) is False

    @pytest.mark.asyncio
    async def test_remove_without_books_deletes(self, db_session):
        author = await self.service.create(db_session, AuthorCreate(first_name="John", last_name="Doe"))
        author_id = author.id

        assert await self.service.remove(db_session, author_id) is True
        assert await self.service.find_one(db_session, author_id) is None

    @pytest.mark.asyncio
    async def test_remove_with_books_conflicts_and_keeps_records(self, db_session, make_isbn):
        author = await self.service.create(db_session, AuthorCreate(first_name="John", last_name="Doe"))
        book = await self.books.create(
            db_session, BookCreate(title="T", isbn=make_isbn(1), author_id=author.id)
        )
        author_id, book_id = author.id, book.id

        with pytest.raises(ConflictError, match="associated books"):
            await self.service.remove(db_session, author_id)

        assert await self.service.find_one(db_session, author_id) is not None
        still_there = await self.books.find_one(db_session, book_id)
        assert still_there is not None
        assert still_there.author_id == author_id

    @pytest.mark.asyncio
    async def test_remove_succeeds_once_books_are_gone(self, db_session, make_isbn):
        author = await self.service.create(db_session, AuthorCreate(first_name="John", last_name="Doe"))
        book = await self.books.create(
            db_session, BookCreate(title="T", isbn=make_isbn(1), author_id=author.id)
        )
        author_id = author.id

        with pytest.raises(ConflictError):
            await self.service.remove(db_session, author_id)

        assert await self.books.remove(db_session, book.id) is True
        assert await self.service.remove(db_session, author_id) is True
