import pytest

from .testing import Person, build_registry


class TestRegistry:
    @pytest.fixture
    def target(self):
        return build_registry()

    def test_lookup(self, target):
        from ..models import ResourceDescriptor

        assert "people" in target
        assert "companies" in target
        assert "jobs" not in target
        assert len(target) == 2
        assert [d.name for d in target] == ["people", "companies"]
        assert isinstance(target["people"], ResourceDescriptor)

    def test_unknown(self, target):
        from ..exceptions import UnknownResourceTypeError

        with pytest.raises(UnknownResourceTypeError) as excinfo:
            target["jobs"]
        assert excinfo.value.message == (
            'no resource known as "jobs" (known resources are companies, and people)'
        )

    def test_forward_and_self_references(self, target):
        people = target["people"]
        assert people.relationships["job"].destination is target["companies"]
        assert people.relationships["friends"].destination is people

    def test_relationship_paths(self, target):
        people = target["people"]
        assert people.relationships["job"].path == "employer"
        assert people.relationships["friends"].path == "friends"

    def test_unresolvable_destination(self):
        from ..declarative import Registry, ToOne
        from ..exceptions import UnknownResourceTypeError

        registry = Registry()
        people = registry.resource("people", relationships=[ToOne("job", "companies")])
        with pytest.raises(UnknownResourceTypeError):
            people.relationships["job"].destination

    def test_duplicate(self, target):
        from ..exceptions import InvalidDeclarationError

        with pytest.raises(InvalidDeclarationError):
            target.resource("people")


class TestResource:
    def test_attributes(self):
        from ..declarative import Attr, resource

        descr = resource(
            "people",
            attributes=[
                "first_name",
                Attr("surname", field="last_name"),
                Attr("initials", field=lambda p: p.first_name[0] + p.last_name[0]),
            ],
        )
        assert list(descr.attributes) == ["first_name", "surname", "initials"]
        person = Person(first_name="Jane", last_name="Doe", id=1)
        assert descr.get_attributes(person) == {
            "first_name": "Jane",
            "surname": "Doe",
            "initials": "JD",
        }

    def test_identifier_field(self):
        from ..declarative import resource

        descr = resource("people", id=lambda p: f"{p.last_name}-{p.id}")
        person = Person(first_name="Jane", last_name="Doe", id=1)
        assert descr.get_identity(person) == "Doe-1"

    def test_destination_by_descriptor(self):
        from ..declarative import ToMany, resource
        from ..serde.interfaces import RelationshipType

        companies = resource("companies")
        people = resource("people", relationships=[ToMany("employers", companies)])
        rel = people.relationships["employers"]
        assert rel.destination is companies
        assert rel.type is RelationshipType.TO_MANY

    def test_destination_by_callable(self):
        from ..declarative import ToOne, resource

        companies = resource("companies")
        people = resource("people", relationships=[ToOne("job", lambda: companies)])
        assert people.relationships["job"].destination is companies

    def test_destination_by_name_without_registry(self):
        from ..declarative import ToOne, resource
        from ..exceptions import InvalidDeclarationError

        with pytest.raises(InvalidDeclarationError):
            resource("people", relationships=[ToOne("job", "companies")])

    @pytest.mark.parametrize(
        ("attributes", "relationships"),
        [
            (["name", "name"], []),
            (["job"], ["job"]),
            ([], ["job", "job"]),
        ],
    )
    def test_duplicate_members(self, attributes, relationships):
        from ..declarative import ToOne, resource
        from ..exceptions import InvalidDeclarationError

        companies = resource("companies")
        with pytest.raises(InvalidDeclarationError):
            resource(
                "people",
                attributes=attributes,
                relationships=[ToOne(name, companies) for name in relationships],
            )

    def test_invalid_declaration(self):
        from ..declarative import resource
        from ..exceptions import InvalidDeclarationError

        with pytest.raises(InvalidDeclarationError):
            resource("people", attributes=[1])
