import sqlite3

import pytest

from gocoin.db import Database


@pytest.fixture
def db(tmp_path):
    database = Database(tmp_path / "chain.db")
    yield database
    database.close()


def test_missing_block_is_none(db):
    assert db.block("deadbeef") is None


def test_save_and_load_block(db):
    db.save_block("abc", b"payload")
    assert db.block("abc") == b"payload"


def test_save_block_overwrites(db):
    db.save_block("abc", b"first")
    db.save_block("abc", b"second")
    assert db.block("abc") == b"second"


def test_checkpoint_initially_none(db):
    assert db.checkpoint() is None


def test_checkpoint_round_trip(db):
    db.save_checkpoint(b"state-1")
    assert db.checkpoint() == b"state-1"
    db.save_checkpoint(b"state-2")
    assert db.checkpoint() == b"state-2"


def test_checkpoint_and_blocks_are_separate(db):
    db.save_block("checkpoint", b"a block")
    assert db.checkpoint() is None
    db.save_checkpoint(b"state")
    assert db.block("checkpoint") == b"a block"


def test_data_persists_across_reopen(tmp_path):
    path = tmp_path / "persist.db"
    with Database(path) as first:
        first.save_block("h1", b"\x00\x01\x02")
        first.save_checkpoint(b"cp")
    with Database(path) as second:
        assert second.block("h1") == b"\x00\x01\x02"
        assert second.checkpoint() == b"cp"


def test_context_manager_closes(tmp_path):
    with Database(tmp_path / "closed.db") as database:
        database.save_block("x", b"y")
    with pytest.raises(sqlite3.ProgrammingError):
        database.block("x")