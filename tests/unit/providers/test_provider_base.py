"""Tests for converter declarations and roles."""

import pytest

from msgbody.providers.base import (
    BodyReader,
    BodyWriter,
    Role,
    consumes,
    declared_media_types,
    produces,
)


@consumes("text/plain", "text/html")
@produces("application/json")
class Both(BodyReader, BodyWriter):
    def is_readable(self, target_type):
        return target_type is str

    def is_writeable(self, target_type):
        return target_type is dict

    def read_from(self, target_type, media_type, stream):
        return stream.read().decode()

    def write_to(self, obj, target_type, media_type, stream):
        stream.write(repr(obj).encode())


class Undeclared(BodyReader):
    def is_readable(self, target_type):
        return True

    def read_from(self, target_type, media_type, stream):
        return stream.read()


def test_decorators_set_role_specific_declarations():
    assert Both.consumes == ("text/plain", "text/html")
    assert Both.produces == ("application/json",)


def test_declared_media_types_keeps_roles_apart():
    both = Both()

    assert declared_media_types(both, Role.READER) == ("text/plain", "text/html")
    assert declared_media_types(both, Role.WRITER) == ("application/json",)


def test_declared_media_types_none_when_undeclared():
    assert declared_media_types(Undeclared(), Role.READER) is None
    assert declared_media_types(Undeclared(), Role.WRITER) is None


def test_declared_media_types_preserves_duplicates(make_converter):
    converter = make_converter("Dup", consumes=["text/plain", "text/plain"])()

    assert declared_media_types(converter, Role.READER) == ("text/plain", "text/plain")


def test_declared_media_types_accepts_single_string(make_converter):
    converter = make_converter("Single", produces="text/csv")()

    assert declared_media_types(converter, Role.WRITER) == ("text/csv",)


def test_empty_declaration_counts_as_undeclared(make_converter):
    converter = make_converter("Empty", consumes=[])()

    assert declared_media_types(converter, Role.READER) is None


def test_decorator_requires_media_types():
    with pytest.raises(ValueError):
        consumes()


def test_role_predicates():
    both = Both()

    assert Role.READER.accepts(both, str)
    assert not Role.READER.accepts(both, dict)
    assert Role.WRITER.accepts(both, dict)
    assert not Role.WRITER.accepts(both, str)


def test_role_of():
    assert Role.of(Both) == (Role.READER, Role.WRITER)
    assert Role.of(Undeclared) == (Role.READER,)
    assert Role.of(int) == ()


def test_role_string_form():
    assert str(Role.READER) == "reader"
    assert Role.WRITER.base_class is BodyWriter
    assert Role.READER.declaration == "consumes"
    assert Role.WRITER.declaration == "produces"


def test_writer_size_defaults_to_unknown():
    assert Both().get_size({"a": 1}) == -1
