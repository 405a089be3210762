"""Tests for model kinds and conversion helpers."""

import pytest
from sqlalchemy import create_engine, select
from sqlalchemy.orm import Session

from formbuilder import Base, ModelCollection, ModelKind, model_kind


class TestModelKind:
    def test_plain_values(self):
        assert model_kind({"a": 1}) is ModelKind.plain
        assert model_kind([1, 2]) is ModelKind.plain
        assert model_kind("text") is ModelKind.plain

    def test_record(self, user_model):
        assert model_kind(user_model(name="ada")) is ModelKind.record

    def test_collection(self):
        assert model_kind(ModelCollection()) is ModelKind.collection

    def test_declared_kind(self):
        class Rows:
            __model_kind__ = ModelKind.collection

        assert model_kind(Rows()) is ModelKind.collection

    def test_invalid_declared_kind(self):
        class Broken:
            __model_kind__ = "record"

        with pytest.raises(TypeError, match="invalid model kind"):
            model_kind(Broken())


class TestRecord:
    def test_to_dict_uses_column_order(self, user_model):
        user = user_model(id=3, name="ada")
        assert list(user.to_dict().items()) == [("id", 3), ("name", "ada"), ("email", None)]


class TestModelCollection:
    def test_all_returns_plain_list(self):
        collection = ModelCollection([1, 2])
        assert collection.all() == [1, 2]
        assert type(collection.all()) is list

    def test_from_iterable(self):
        assert ModelCollection.from_result(iter([1, 2])) == [1, 2]

    def test_from_result(self, user_model):
        engine = create_engine("sqlite://")
        Base.metadata.create_all(engine)

        with Session(engine) as session:
            session.add_all([user_model(id=1, name="ada"), user_model(id=2, name="bob")])
            session.commit()

            users = ModelCollection.from_result(session.execute(select(user_model).order_by(user_model.id)))

            assert [user.name for user in users] == ["ada", "bob"]
            assert model_kind(users) is ModelKind.collection
