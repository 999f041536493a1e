import logging

import pytest
from sqlalchemy.exc import SQLAlchemyError

from pokemon_review.exceptions.base import RepositoryError
from pokemon_review.models import Category, Review
from pokemon_review.repositories.base_repository import BaseRepository


@pytest.fixture
def category_base_repo(db_session):
    return BaseRepository(Category, db_session)


@pytest.fixture
def review_base_repo(db_session):
    return BaseRepository(Review, db_session)


@pytest.mark.asyncio
class TestBaseRepositoryReads:

    async def test_list_all_returns_rows_ordered_by_id(self, category_base_repo, create_category):
        """
        Behavior:
                - Insert three categories, then call list_all().
                - Assert every row comes back, in insertion (id) order.
        """
        names = ["Fire", "Water", "Grass"]
        for name in names:
            await create_category(name)

        rows = await category_base_repo.list_all()

        assert [c.name for c in rows] == names
        assert [c.id for c in rows] == sorted(c.id for c in rows)

    async def test_list_all_empty_table(self, category_base_repo):
        assert await category_base_repo.list_all() == []

    async def test_get_by_id_found_and_missing(self, category_base_repo, create_category):
        """
        Behavior:
                - get_by_id() returns the entity for a known id.
                - get_by_id() returns None (does not raise) for an unknown id.
        """
        fire = await create_category("Fire")

        found = await category_base_repo.get_by_id(fire.id)
        assert found is not None
        assert found.name == "Fire"

        assert await category_base_repo.get_by_id(9999) is None

    async def test_exists(self, category_base_repo, create_category):
        fire = await create_category("Fire")

        assert await category_base_repo.exists(fire.id) is True
        assert await category_base_repo.exists(9999) is False

    async def test_find_all_by_filters_on_columns(self, review_base_repo, create_reviewer, create_pokemon, create_review):
        ash = await create_reviewer("Ash")
        pikachu = await create_pokemon("Pikachu")
        eevee = await create_pokemon("Eevee")
        await create_review(ash, pikachu, title="A")
        await create_review(ash, eevee, title="B")
        await create_review(ash, pikachu, title="C")

        rows = await review_base_repo.find_all_by(pokemon_id=pikachu.id)

        assert [r.title for r in rows] == ["A", "C"]

    async def test_find_all_by_unknown_field_raises(self, review_base_repo):
        """
        Behavior:
                - Filtering on an attribute the model does not have raises RepositoryError.
                - The offending names are reported in `fields`.
        """
        with pytest.raises(RepositoryError) as exc_info:
            await review_base_repo.find_all_by(colour="red")

        assert exc_info.value.fields == ["colour"]
        assert exc_info.value.http_status() == 500

    async def test_read_failure_is_wrapped_in_repository_error(self, category_base_repo, monkeypatch):
        """
        Behavior:
                - Make the session's execute() raise a SQLAlchemyError.
                - list_all(), get_by_id() and exists() all surface RepositoryError,
                  chained to the original error.
        """
        async def _boom(*args, **kwargs):
            raise SQLAlchemyError("connection lost")

        monkeypatch.setattr(category_base_repo.db, "execute", _boom)

        for call in (category_base_repo.list_all(), category_base_repo.get_by_id(1), category_base_repo.exists(1)):
            with pytest.raises(RepositoryError) as exc_info:
                await call
            assert isinstance(exc_info.value.__cause__, SQLAlchemyError)


@pytest.mark.asyncio
class TestBaseRepositoryMutations:

    async def test_add_assigns_id_and_commits(self, category_base_repo):
        category = Category(name="Electric")

        assert await category_base_repo.add(category) is True

        assert category.id is not None
        assert await category_base_repo.exists(category.id)

    async def test_add_failure_returns_false_and_rolls_back(self, review_base_repo, db_session, caplog):
        """
        Behavior:
                - Add a Review without its NOT NULL references.
                - add() returns False instead of raising.
                - The session is usable afterwards and nothing was persisted.
                - A structured "repo.add.failed" warning is logged.

        Importance:
                - Handlers rely on the boolean to answer 500 without try/except.
        """
        review = Review(title="Orphan", text="No reviewer", rating=3)

        with caplog.at_level(logging.WARNING, logger="pokemon_review.repositories.base_repository"):
            ok = await review_base_repo.add(review)

        assert ok is False
        assert await review_base_repo.list_all() == []

        failed = [r for r in caplog.records if r.getMessage() == "repo.add.failed"]
        assert failed
        assert failed[0].failure == "integrity"
        assert failed[0].constraint_kind == "not_null"

    async def test_merge_updates_scalar_fields(self, category_base_repo, create_category):
        fire = await create_category("Fire")
        fire_id = fire.id

        assert await category_base_repo.merge(Category(id=fire_id, name="Blaze")) is True

        reloaded = await category_base_repo.get_by_id(fire_id)
        assert reloaded.name == "Blaze"

    async def test_merge_leaves_unset_columns_untouched(self, review_base_repo, create_reviewer, create_pokemon, create_review):
        """
        Behavior:
                - Merge a Review carrying only scalar fields.
                - The stored reviewer/pokemon references are kept.
        """
        ash = await create_reviewer("Ash")
        pikachu = await create_pokemon("Pikachu")
        review = await create_review(ash, pikachu, title="Old", text="old", rating=1)
        ash_id, pikachu_id, review_id = ash.id, pikachu.id, review.id

        ok = await review_base_repo.merge(Review(id=review_id, title="New", text="new", rating=5))

        assert ok is True
        reloaded = await review_base_repo.get_by_id(review_id)
        assert (reloaded.title, reloaded.text, reloaded.rating) == ("New", "new", 5)
        assert reloaded.reviewer_id == ash_id
        assert reloaded.pokemon_id == pikachu_id

    async def test_remove(self, category_base_repo, create_category):
        fire = await create_category("Fire")
        fire_id = fire.id

        assert await category_base_repo.remove(fire) is True
        assert await category_base_repo.exists(fire_id) is False

    async def test_remove_none_is_a_failed_delete(self, category_base_repo):
        assert await category_base_repo.remove(None) is False

    async def test_remove_many_deletes_batch(self, category_base_repo, create_category):
        rows = [await create_category(n) for n in ("A", "B", "C")]

        assert await category_base_repo.remove_many(rows[:2]) is True

        remaining = await category_base_repo.list_all()
        assert [c.name for c in remaining] == ["C"]

    async def test_remove_many_empty_batch_succeeds(self, category_base_repo):
        assert await category_base_repo.remove_many([]) is True

    async def test_save_failure_rolls_back(self, category_base_repo, monkeypatch):
        """
        Behavior:
                - Force commit() to fail.
                - save() returns False and the pending row is gone after rollback.
        """
        async def _boom():
            raise SQLAlchemyError("disk full")

        monkeypatch.setattr(category_base_repo.db, "commit", _boom)

        assert await category_base_repo.add(Category(name="Ghost")) is False

        monkeypatch.undo()
        assert await category_base_repo.list_all() == []


@pytest.mark.asyncio
class TestBaseRepositoryIntegerRange:

    @pytest.mark.parametrize("entity_id", [2**31, -(2**31) - 1, 10**20])
    async def test_out_of_range_id_is_absent(self, category_base_repo, create_category, entity_id):
        """
        Behavior:
                - An id that does not fit the INTEGER key column never reaches the driver.
                - get_by_id() returns None and exists() returns False, as for any unknown id.
        """
        await create_category("Fire")

        assert await category_base_repo.get_by_id(entity_id) is None
        assert await category_base_repo.exists(entity_id) is False

    async def test_find_all_by_out_of_range_value_is_empty(self, review_base_repo):
        assert await review_base_repo.find_all_by(pokemon_id=10**20) == []

    async def test_unbindable_value_on_add_returns_false(self, review_base_repo, create_reviewer, create_pokemon):
        """
        Behavior:
                - The driver rejects a rating it cannot bind with OverflowError.
                - add() keeps its contract: rollback, log, return False.
        """
        ash = await create_reviewer("Ash")
        pikachu = await create_pokemon("Pikachu")
        review = Review(title="Huge", text="x", rating=10**20, reviewer_id=ash.id, pokemon_id=pikachu.id)

        assert await review_base_repo.add(review) is False
        assert await review_base_repo.list_all() == []
