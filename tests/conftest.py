import os

# Keep the module-level engine off the on-disk database
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.pop("SESSION_RANDOM_SEED", None)

import random
from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session as DbSession, sessionmaker
from sqlalchemy.pool import StaticPool

import dotest.models.db  # noqa: F401
from dotest.app import app
from dotest.database import Base, get_db
from dotest.dependencies import get_content_cache, get_rng, get_session_store
from dotest.models.db import Chapter, ChapterItem, Question, Textbook
from dotest.services.cache_service import ContentCache
from dotest.services.session_service import SessionStore


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture
def db(session_factory) -> Iterator[DbSession]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store() -> SessionStore:
    return SessionStore()


@pytest.fixture
def content_cache() -> ContentCache:
    return ContentCache(ttl_seconds=60, max_entries=16)


@pytest.fixture
def client(session_factory, store: SessionStore, content_cache: ContentCache) -> Iterator[TestClient]:
    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_session_store] = lambda: store
    app.dependency_overrides[get_content_cache] = lambda: content_cache
    app.dependency_overrides[get_rng] = lambda: random.Random(7)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


QUESTION_TEXTS = {
    "A": "名詞",
    "B": "動詞",
    "C": "形容詞",
    "D": "副詞",
}


def seed_content(db: DbSession, sets: dict[str, int] | None = None) -> dict[str, str]:
    """Store textbook E01 with chapter E01-C00 and its questions.

    `sets` maps set number to question count. Returns question id -> correct
    option text.
    """
    sets = sets if sets is not None else {"01": 12, "02": 4}
    db.add(
        Textbook(
            book_id="E01",
            title="English Grammar",
            subject="英語",
            publisher="Sample Press",
            chapter_count=2,
            question_count=sum(sets.values()),
        )
    )
    db.add(Chapter(chapter_id="E01-C00", book_id="E01", title="Parts of speech", order=0))
    db.add(Chapter(chapter_id="E01-C01", book_id="E01", title="Tenses", order=1))
    db.add_all(
        [
            ChapterItem(
                item_id="E01-C00-I01",
                chapter_id="E01-C00",
                book_id="E01",
                title="Nouns",
                order=1,
                full_text="Nouns name things.\\nThey can be counted.",
                page_reference="P12",
            ),
            ChapterItem(
                item_id="E01-C00-I02",
                chapter_id="E01-C00",
                book_id="E01",
                title="Verbs",
                order=2,
                page_reference="P13, P14",
            ),
            ChapterItem(
                item_id="E01-C00-I03",
                chapter_id="E01-C00",
                book_id="E01",
                title="Adjectives",
                order=3,
                page_reference="P16-P18",
            ),
        ]
    )

    answers = {}
    labels = "ABCD"
    for set_number, count in sets.items():
        for sequence in range(1, count + 1):
            question_id = f"E01-C00-{set_number}-{sequence:03d}"
            label = labels[sequence % 4]
            db.add(
                Question(
                    question_id=question_id,
                    book_id="E01",
                    chapter_id="E01-C00",
                    question_text=f"Which part of speech? ({question_id})",
                    option_a=QUESTION_TEXTS["A"],
                    option_b=QUESTION_TEXTS["B"],
                    option_c=QUESTION_TEXTS["C"],
                    option_d=QUESTION_TEXTS["D"],
                    correct_answer=label,
                    explanation=f"See P12 and P16-P18 ({label})",
                )
            )
            answers[question_id] = QUESTION_TEXTS[label]
    db.commit()
    return answers


@pytest.fixture
def answers(db: DbSession) -> dict[str, str]:
    return seed_content(db)
