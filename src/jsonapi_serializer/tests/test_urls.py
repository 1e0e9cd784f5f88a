import pytest


@pytest.mark.parametrize(
    ("input", "expected"),
    [
        ("", []),
        ("a=b&c=d", [("a", "b"), ("c", "d")]),
        ("a=b&a=c", [("a", "b"), ("a", "c")]),
        ("a=&b=1", [("a", ""), ("b", "1")]),
        ("page%5Bnumber%5D=3", [("page[number]", "3")]),
    ],
)
def test_parse_query(input, expected):
    from ..urls import parse_query

    assert parse_query(input) == expected


@pytest.mark.parametrize(
    ("input", "expected"),
    [
        ([], ""),
        ([("q", "a"), ("page[number]", "1")], "q=a&page[number]=1"),
        ([("q", "a b&c")], "q=a%20b%26c"),
        ([("filter[name]", "x/y")], "filter[name]=x%2Fy"),
    ],
)
def test_encode_query(input, expected):
    from ..urls import encode_query

    assert encode_query(input) == expected


def test_override_query_parameters():
    from ..urls import override_query_parameters

    assert override_query_parameters(
        [("page[number]", "3"), ("q", "a"), ("page[number]", "4"), ("r", "b")],
        [("page[number]", "5")],
    ) == [("q", "a"), ("r", "b"), ("page[number]", "5")]


class TestURL:
    @pytest.fixture
    def target_class(self):
        from ..urls import URL

        return URL

    def test_parse(self, target_class):
        url = target_class.parse("http://example.com/api/people/123?a=b&c=d#x")
        assert url.scheme == "http"
        assert url.netloc == "example.com"
        assert url.path == "/api/people/123"
        assert url.query == "a=b&c=d"
        assert url.fragment == "x"
        assert url.query_parameters == [("a", "b"), ("c", "d")]
        assert url.path_and_query == "/api/people/123?a=b&c=d"
        assert target_class.parse(url) is url

    @pytest.mark.parametrize(
        ("input", "segments", "trailing_slash", "expected"),
        [
            ("http://example.com/people/?q=a", ("1",), False, "http://example.com/people/1"),
            ("http://example.com/people", ("1",), True, "http://example.com/people/1/"),
            (
                "http://example.com/people/1",
                ("relationships", "job"),
                True,
                "http://example.com/people/1/relationships/job/",
            ),
            ("http://example.com/people/", ("a/b",), False, "http://example.com/people/a%2Fb"),
            ("http://example.com", (), True, "http://example.com/"),
        ],
    )
    def test_join(self, target_class, input, segments, trailing_slash, expected):
        url = target_class.parse(input)
        assert str(url.join(*segments, trailing_slash=trailing_slash)) == expected

    def test_override_query(self, target_class):
        url = target_class.parse("http://example.com/people/?q=a&page[number]=3")
        assert (
            str(url.override_query([("page[number]", "4")]))
            == "http://example.com/people/?q=a&page[number]=4"
        )
        assert (
            str(url.override_query([("page[number]", "0")], base=[("r", "b")]))
            == "http://example.com/people/?r=b&page[number]=0"
        )


class TestURLBuilder:
    @pytest.fixture
    def target_class(self):
        from ..urls import URLBuilder

        return URLBuilder

    def test_self(self, target_class):
        url = "http://example.com/api/people/123?a=b&c=d"
        assert target_class(url).self_() == url
        assert target_class(url, absolute=False).self_() == "/api/people/123?a=b&c=d"

    def test_self_without_path(self, target_class):
        assert target_class("http://example.com?a=b", absolute=False).self_() == "/?a=b"
        assert target_class("http://example.com", absolute=False).self_() == "/"

    def test_self_without_fragment(self, target_class):
        assert target_class("http://example.com/people/#top").self_() == "http://example.com/people/"

    @pytest.mark.parametrize(
        ("input", "id", "expected"),
        [
            ("http://example.com/people/1", "1", "/people/1"),
            ("http://example.com/people/1/", "1", "/people/1"),
            ("http://example.com/people/1?a=b", "1", "/people/1"),
            ("http://example.com/people/", "1", "/people/1"),
            ("http://example.com/people/10", "1", "/people/10/1"),
            ("http://example.com/people/a%20b", "a b", "/people/a%20b"),
            ("http://example.com/items/1,2", "1,2", "/items/1,2"),
            ("http://example.com/items/1%2C2/", "1,2", "/items/1%2C2"),
            ("http://example.com/items/urn:x", "urn:x", "/items/urn:x"),
            ("http://example.com/items/a+b", "a b", "/items/a+b/a%20b"),
        ],
    )
    def test_singleton(self, target_class, input, id, expected):
        target = target_class(input)
        assert target.singleton(id).path == expected
        assert target.singleton(id).query == ""

    def test_relationship_links(self, target_class):
        target = target_class("http://example.com/people/?q=a")
        resource_url = target.resource("1")
        assert target.member_self(resource_url) == "http://example.com/people/1/"
        assert (
            target.relationship_self(resource_url, "employer")
            == "http://example.com/people/1/relationships/employer/"
        )
        assert (
            target.relationship_related(resource_url, "employer")
            == "http://example.com/people/1/employer/"
        )

    def test_page(self, target_class):
        target = target_class("http://example.com/people/?q=a&page.number=2", absolute=False)
        assert target.page([("q", "a"), ("page[number]", "1")]) == "/people/?q=a&page[number]=1"
