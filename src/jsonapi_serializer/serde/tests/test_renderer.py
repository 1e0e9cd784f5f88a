import datetime
import decimal

import pytest


@pytest.fixture
def target_class():
    from ..renderer import ReprRenderer

    return ReprRenderer


def test_singleton(target_class):
    from ..models import (
        LinkageRepr,
        LinksRepr,
        ResourceIdRepr,
        ResourceRepr,
        SingletonDocumentRepr,
    )

    target = target_class()

    result = target(
        SingletonDocumentRepr(
            links=LinksRepr(
                self_="/people/1",
            ),
            data=ResourceRepr(
                type="people",
                id="1",
                attributes=[
                    ("first_name", "Jane"),
                    ("age", 42),
                ],
                relationships=[
                    (
                        "job",
                        LinkageRepr(
                            links=LinksRepr(
                                self_="/people/1/relationships/employer/",
                                related="/people/1/employer/",
                            ),
                        ),
                    ),
                    (
                        "friends",
                        LinkageRepr(
                            links=LinksRepr(
                                self_="/people/1/relationships/friends/",
                                related="/people/1/friends/",
                            ),
                            data=[
                                ResourceIdRepr(
                                    type="people",
                                    id="2",
                                ),
                            ],
                        ),
                    ),
                    (
                        "manager",
                        LinkageRepr(data=None),
                    ),
                ],
            ),
        ),
    )
    assert result == {
        "links": {
            "self": "/people/1",
        },
        "data": {
            "type": "people",
            "id": "1",
            "attributes": {
                "first_name": "Jane",
                "age": 42,
            },
            "relationships": {
                "job": {
                    "links": {
                        "self": "/people/1/relationships/employer/",
                        "related": "/people/1/employer/",
                    },
                },
                "friends": {
                    "links": {
                        "self": "/people/1/relationships/friends/",
                        "related": "/people/1/friends/",
                    },
                    "data": [
                        {
                            "type": "people",
                            "id": "2",
                        },
                    ],
                },
                "manager": {
                    "data": None,
                },
            },
        },
    }


def test_collection(target_class):
    from ..models import CollectionDocumentRepr, LinksRepr, ResourceRepr

    target = target_class()

    result = target(
        CollectionDocumentRepr(
            links=LinksRepr(
                self_="/people/?q=a",
                first="/people/?q=a&page[number]=0",
                next="/people/?q=a&page[number]=1",
                last="/people/?q=a&page[number]=1",
            ),
            data=[
                ResourceRepr(
                    type="people",
                    id="1",
                    attributes=[("first_name", "Jane")],
                    links=LinksRepr(self_="/people/1/"),
                ),
                ResourceRepr(
                    type="people",
                    id="2",
                    links=LinksRepr(self_="/people/2/"),
                ),
            ],
        ),
    )
    assert result == {
        "links": {
            "self": "/people/?q=a",
            "first": "/people/?q=a&page[number]=0",
            "next": "/people/?q=a&page[number]=1",
            "last": "/people/?q=a&page[number]=1",
        },
        "data": [
            {
                "type": "people",
                "id": "1",
                "attributes": {
                    "first_name": "Jane",
                },
                "links": {
                    "self": "/people/1/",
                },
            },
            {
                "type": "people",
                "id": "2",
                "links": {
                    "self": "/people/2/",
                },
            },
        ],
    }


def test_empty_collection(target_class):
    from ..models import CollectionDocumentRepr, LinksRepr

    target = target_class()

    result = target(
        CollectionDocumentRepr(
            links=LinksRepr(
                self_="/people/?page[number]=2",
                prev="/people/?page[number]=1",
            ),
            data=[],
        ),
    )
    assert result == {
        "links": {
            "self": "/people/?page[number]=2",
            "prev": "/people/?page[number]=1",
        },
        "data": [],
    }


def test_meta_and_jsonapi(target_class):
    from ..models import CollectionDocumentRepr

    target = target_class()

    result = target(
        CollectionDocumentRepr(
            jsonapi={"version": "1.0"},
            meta={"total": 0},
            data=[],
        ),
    )
    assert result == {
        "jsonapi": {"version": "1.0"},
        "meta": {"total": 0},
        "data": [],
    }


def test_error_document(target_class):
    from ..models import ErrorDocumentRepr, ErrorRepr, SourceRepr

    target = target_class()

    result = target(
        ErrorDocumentRepr(
            errors=[
                ErrorRepr(
                    status="400",
                    title="Invalid pagination parameter",
                    source=SourceRepr(parameter="page.number"),
                ),
            ],
        ),
    )
    assert result == {
        "errors": [
            {
                "status": "400",
                "title": "Invalid pagination parameter",
                "source": {
                    "parameter": "page.number",
                },
            },
        ],
    }


def test_attribute_values(target_class):
    from ..models import ResourceRepr, SingletonDocumentRepr

    target = target_class()

    result = target(
        SingletonDocumentRepr(
            data=ResourceRepr(
                type="people",
                id="1",
                attributes=[
                    ("salary", decimal.Decimal("1.50")),
                    ("birthday", datetime.date(1970, 1, 2)),
                    ("avatar", b"\x00\x01"),
                    ("tags", ["a", "b"]),
                    ("address", {"city": "Tokyo", "zip": None}),
                    ("active", True),
                ],
            ),
        ),
    )
    assert result["data"]["attributes"] == {
        "salary": "1.50",
        "birthday": "1970-01-02",
        "avatar": "AAE=",
        "tags": ["a", "b"],
        "address": {"city": "Tokyo", "zip": None},
        "active": True,
    }

    result = target_class(render_decimal_as_str=False)(
        SingletonDocumentRepr(
            data=ResourceRepr(
                type="people",
                id="1",
                attributes=[("salary", decimal.Decimal("1.50"))],
            ),
        ),
    )
    assert result["data"]["attributes"] == {"salary": 1.5}


def test_unsupported_attribute(target_class):
    from ..models import ResourceRepr, SingletonDocumentRepr

    target = target_class()

    with pytest.raises(TypeError) as excinfo:
        target(
            SingletonDocumentRepr(
                data=ResourceRepr(
                    type="people",
                    id="1",
                    attributes=[("x", {"y": [object()]})],
                ),
            ),
        )
    assert str(excinfo.value).startswith("/data/attributes/x/y/0:")


def test_naive_datetime(target_class):
    from ..models import ResourceRepr, SingletonDocumentRepr

    target = target_class()

    with pytest.raises(ValueError):
        target(
            SingletonDocumentRepr(
                data=ResourceRepr(
                    type="people",
                    id="1",
                    attributes=[
                        ("a", datetime.datetime(1970, 1, 1, 0, 0, 0)),
                    ],
                ),
            ),
        )

    result = target(
        SingletonDocumentRepr(
            data=ResourceRepr(
                type="people",
                id="1",
                attributes=[
                    ("a", datetime.datetime(1970, 1, 1, 0, 0, 0, tzinfo=datetime.timezone.utc)),
                ],
            ),
        )
    )
    assert result["data"]["attributes"]["a"] == "1970-01-01T00:00:00+00:00"

    target = target_class(assume_naive_timezone_as=datetime.timezone(datetime.timedelta(hours=9)))
    result = target(
        SingletonDocumentRepr(
            data=ResourceRepr(
                type="people",
                id="1",
                attributes=[
                    ("a", datetime.datetime(1970, 1, 1, 9, 0, 0)),
                ],
            ),
        )
    )
    assert result["data"]["attributes"]["a"] == "1970-01-01T00:00:00+00:00"
