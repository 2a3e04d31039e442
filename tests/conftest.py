"""Configure pytest environment for all tests."""

import logging
from typing import Callable, Iterable, Optional, Sequence

import pytest

from msgbody.discovery import ServiceFinder
from msgbody.providers.base import BodyReader, BodyWriter


@pytest.fixture
def make_converter() -> Callable[..., type]:
    """Build throwaway converter classes.

    ``handles`` lists the target types the predicate accepts; ``consumes`` and
    ``produces`` become the class declarations; ``roles`` picks the bases.
    """

    def factory(
        name: str,
        handles: Iterable[type] = (object,),
        consumes: Optional[Sequence[str]] = None,
        produces: Optional[Sequence[str]] = None,
        roles: Sequence[str] = ("reader", "writer"),
    ) -> type:
        accepted = tuple(handles)
        bases = []
        if "reader" in roles:
            bases.append(BodyReader)
        if "writer" in roles:
            bases.append(BodyWriter)

        def accepts(self, target_type):
            return isinstance(target_type, type) and issubclass(target_type, accepted)

        namespace = {
            "consumes": consumes,
            "produces": produces,
            "is_readable": accepts,
            "is_writeable": accepts,
            "read_from": lambda self, target_type, media_type, stream: stream.read(),
            "write_to": lambda self, obj, target_type, media_type, stream: stream.write(obj),
            "__repr__": lambda self: f"<{name}>",
        }
        return type(name, tuple(bases), namespace)

    return factory


@pytest.fixture
def finder() -> ServiceFinder:
    """A ServiceFinder that ignores installed entry points."""

    return ServiceFinder(discover_entry_points=False)


@pytest.fixture
def restore_msgbody_logging():
    """Restore msgbody logger state changed by a test."""

    names = ["msgbody", "msgbody.discovery", "msgbody.registry"]
    saved = {name: logging.getLogger(name).level for name in names}
    handlers = list(logging.getLogger("msgbody").handlers)
    yield
    root = logging.getLogger("msgbody")
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)
