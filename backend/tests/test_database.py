import pytest
from sqlalchemy import text

from boostkit.database import db_session
from boostkit.database import get_db
from boostkit.models.models import Option


def test_get_db_yields_and_closes(session_factory):
    generator = get_db(session_factory)
    db = next(generator)

    assert db.execute(text("SELECT 1")).scalar() == 1

    with pytest.raises(StopIteration):
        next(generator)


def test_db_session_commits(session_factory):
    with db_session(session_factory) as db:
        db.add(Option(option_name="committed", option_value={"a": 1}))

    with db_session(session_factory) as db:
        assert db.query(Option).filter(Option.option_name == "committed").count() == 1


def test_db_session_rolls_back_and_reraises(session_factory):
    with pytest.raises(ValueError):
        with db_session(session_factory) as db:
            db.add(Option(option_name="discarded", option_value=1))
            db.flush()
            raise ValueError("boom")

    with db_session(session_factory) as db:
        assert db.query(Option).filter(Option.option_name == "discarded").count() == 0
