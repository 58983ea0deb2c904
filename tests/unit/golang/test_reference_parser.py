import pytest

from gostub.golang import ReferenceParser
from gostub.needle import L
from gostub.spec import (
    InterfaceRef,
    MalformedReferenceError,
    UnrecognizedInterfaceError,
    UnresolvedImportError,
)
from gostub.test_utils import FakeFormatter


@pytest.fixture
def formatter():
    return FakeFormatter({"http": "net/http", "shapes": "example.com/shapes"})


@pytest.fixture
def parser(formatter):
    return ReferenceParser(formatter)


def test_fully_qualified_reference_is_split_at_last_dot(parser):
    assert parser.parse("net/http.ResponseWriter") == InterfaceRef(
        "net/http", "ResponseWriter"
    )
    assert parser.parse("example.com/shapes.Client") == InterfaceRef(
        "example.com/shapes", "Client"
    )


def test_whitespace_is_rejected_before_any_io(parser, formatter):
    with pytest.raises(MalformedReferenceError) as excinfo:
        parser.parse("io reader")

    assert excinfo.value.pointer == L.error.reference.whitespace
    assert excinfo.value.reference == "io reader"
    assert formatter.calls == []


def test_empty_reference_is_malformed(parser):
    with pytest.raises(MalformedReferenceError):
        parser.parse("")


@pytest.mark.parametrize(
    "reference, pointer",
    [
        ("net/http/", L.error.reference.trailing_slash),
        ("net/http.", L.error.reference.trailing_dot),
        ("net/http/httputil", L.error.reference.invalid),
        ("example.com/pkg/sub.Id.Extra", L.error.reference.invalid),
    ],
)
def test_malformed_qualified_references(parser, formatter, reference, pointer):
    with pytest.raises(MalformedReferenceError) as excinfo:
        parser.parse(reference)

    assert excinfo.value.pointer == pointer
    assert formatter.calls == []


def test_malformed_reference_message_is_rendered_from_catalogue(parser):
    with pytest.raises(MalformedReferenceError) as excinfo:
        parser.parse("net/http/")

    assert str(excinfo.value) == (
        "interface name cannot end with a '/' character: net/http/"
    )


def test_bare_reference_is_inferred_through_formatter(parser, formatter):
    ref = parser.parse("http.ResponseWriter")

    assert ref == InterfaceRef("net/http", "ResponseWriter")
    source, _ = formatter.calls[0]
    assert "var i http.ResponseWriter" in source


def test_builtin_reference_is_unrecognized(parser):
    with pytest.raises(UnrecognizedInterfaceError):
        parser.parse("error")


def test_unknown_package_is_unresolved(parser, formatter):
    with pytest.raises(UnresolvedImportError) as excinfo:
        parser.parse("nosuch.Thing")

    assert excinfo.value.reference == "nosuch.Thing"
    assert "nosuch" in excinfo.value.detail
    assert len(formatter.calls) == 1


def test_formatter_failure_is_unresolved_import():
    parser = ReferenceParser(FakeFormatter(error="goimports: boom"))

    with pytest.raises(UnresolvedImportError) as excinfo:
        parser.parse("http.Handler")

    assert excinfo.value.detail == "goimports: boom"
