"""Shared fixtures for the formbuilder tests."""

import logging
from typing import Optional

import pytest
from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

import formbuilder.logging as formbuilder_logging
from formbuilder import ArrayTranslator, Base, FormHelper


class User(Base):
    __tablename__ = "user"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(64))
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)


MESSAGES = {
    "en": {
        "email": "E-mail address",
        "fields": {
            "title": "Title of the post",
        },
    },
    "de": {
        "email": "E-Mail-Adresse",
    },
}


@pytest.fixture
def translator() -> ArrayTranslator:
    return ArrayTranslator(MESSAGES)


@pytest.fixture
def helper(translator: ArrayTranslator) -> FormHelper:
    return FormHelper(None, translator)


@pytest.fixture
def user_model() -> type[User]:
    return User


@pytest.fixture
def fresh_logger(monkeypatch):
    monkeypatch.setattr(formbuilder_logging, "_handlers", {})
    yield logging.getLogger("formbuilder")
    log = logging.getLogger("formbuilder")
    for handler in list(log.handlers):
        log.removeHandler(handler)
        handler.close()
    log.setLevel(logging.NOTSET)
