import pytest
from movie_catalog.models import Movie, User
from movie_catalog.uow import SQLAlchemyReadOnlyUnitOfWork as ROuow
from movie_catalog.uow import SQLAlchemyUnitOfWork as RWuow
from tests.factories.movie import MovieFactory
from tests.factories.user import UserFactory


class TestSQLAlchemyReadOnlyUnitOfWork:
    def test_blocks_orm_flush_writes(self, app, db):
        """Flushing a pending object inside the RO scope raises."""
        with ROuow() as uow, pytest.raises(RuntimeError, match="ORM flush blocked"):
            uow.session.add(UserFactory.build())
            uow.session.flush()

    def test_allows_reads(self, app, db):
        MovieFactory.create_batch(2)
        with ROuow() as uow:
            assert len(uow.movies.list()) == 2

    def test_disallows_commit(self, app, db):
        with ROuow() as uow, pytest.raises(RuntimeError, match="does not allow commit"):
            uow.commit()

    def test_always_rolls_back_changes(self, app, db):
        with RWuow() as uow:
            user = UserFactory.build()
            uow.users.add(user)
            user_id = user.id

        with ROuow() as uow, pytest.raises(RuntimeError, match="ORM flush blocked"):
            u = uow.session.get(User, user_id)
            original_name = u.name
            u.name = "Mutated in RO"
            uow.session.flush()

        with RWuow() as uow:
            assert uow.session.get(User, user_id).name == original_name

    def test_guard_is_removed_on_exit(self, app, db, session):
        with ROuow():
            pass
        with RWuow() as uow:
            uow.movies.add(Movie(tmdb_id=1, title="Written after RO"))
        assert session.query(Movie).count() == 1
