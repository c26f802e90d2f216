"""
시드 스크립트 테스트 - 재실행 시 중복 INSERT 없이 건너뛰는지 확인
"""
import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from db.models.user import User
from scripts.seed import seed


@pytest.fixture
def db():
    session = AsyncMock()
    session.add = MagicMock()
    session.add_all = MagicMock()
    return session


@pytest.fixture
def patched_seed(db):
    session_factory = MagicMock()
    session_factory.return_value.__aenter__ = AsyncMock(return_value=db)
    session_factory.return_value.__aexit__ = AsyncMock(return_value=False)

    with patch("scripts.seed.create_tables", new=AsyncMock()) as create_tables, \
            patch("scripts.seed.AsyncSessionLocal", new=session_factory), \
            patch("scripts.seed.engine") as engine:
        engine.dispose = AsyncMock()
        yield create_tables, engine


class TestSeed:
    def test_seed_empty_database(self, db, patched_seed):
        create_tables, engine = patched_seed
        db.get.return_value = None

        asyncio.run(seed())

        create_tables.assert_awaited_once_with(reset=False)
        assert db.add_all.call_count == 2
        db.add.assert_called_once()
        db.commit.assert_awaited_once()
        engine.dispose.assert_awaited_once()

    def test_seed_rerun_skips_insert(self, db, patched_seed, capsys):
        """이미 시드된 DB에서 다시 실행해도 INSERT 하지 않음"""
        _, engine = patched_seed
        db.get.return_value = User(username="admin")

        asyncio.run(seed())

        db.add_all.assert_not_called()
        db.commit.assert_not_awaited()
        engine.dispose.assert_awaited_once()
        assert "--reset" in capsys.readouterr().out

    def test_seed_reset_passes_flag(self, db, patched_seed):
        create_tables, _ = patched_seed
        db.get.return_value = None

        asyncio.run(seed(reset=True))

        create_tables.assert_awaited_once_with(reset=True)
        db.commit.assert_awaited_once()
