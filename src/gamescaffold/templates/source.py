"""
Template sources: resolve an archive id to a readable archive stream.
"""

from __future__ import annotations

import io
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, ContextManager, Dict, Iterable, Iterator, Optional, Protocol, Tuple

from ..config.models import CATALOG_FILENAME, TemplateCatalog, TemplateDescriptor, load_catalog
from ..errors import TemplateNotFound, TemplateUnreadable
from ..util import is_within

logger = logging.getLogger(__name__)

OpenedTemplate = Tuple[BinaryIO, TemplateDescriptor]


class TemplateSource(Protocol):
    """
    Anything that can open a template archive by id.

    `open` is a context manager; the stream it yields is closed when the block
    exits, whether or not it raised.
    """

    def open(self, archive_id: str) -> ContextManager[OpenedTemplate]:
        ...


class DirectoryTemplateSource:
    """
    Templates stored as zip archives in one directory, described by a
    `templates.toml` catalog in that directory.
    """

    def __init__(self, root: Path | str, *, catalog_name: str = CATALOG_FILENAME) -> None:
        self.root = Path(root).expanduser().resolve()
        self.catalog_path = self.root / catalog_name
        self._catalog: Optional[TemplateCatalog] = None

    @property
    def catalog(self) -> TemplateCatalog:
        if self._catalog is None:
            self._catalog = load_catalog(self.catalog_path)
        return self._catalog

    def describe(self, archive_id: str) -> TemplateDescriptor:
        descriptor = self.catalog.get(archive_id)
        if descriptor is None:
            known = ", ".join(self.catalog.ids()) or "none"
            raise TemplateNotFound(f"Unknown template '{archive_id}' (available: {known})", path=self.catalog_path)
        return descriptor

    @contextmanager
    def open(self, archive_id: str) -> Iterator[OpenedTemplate]:
        descriptor = self.describe(archive_id)
        archive_path = self.root / descriptor.archive_name
        if not is_within(archive_path, self.root):
            raise TemplateUnreadable(
                f"Archive for template '{archive_id}' lies outside the template directory",
                path=archive_path,
            )
        try:
            stream = archive_path.open("rb")
        except OSError as exc:
            raise TemplateUnreadable(f"Unable to open archive for template '{archive_id}': {exc}", path=archive_path) from exc
        logger.debug("Opened template %s from %s", archive_id, archive_path)
        with stream:
            yield stream, descriptor


class InMemoryTemplateSource:
    """
    Templates held as archive bytes, for callers that ship templates as
    package resources or build them on the fly.
    """

    def __init__(self, templates: Iterable[Tuple[TemplateDescriptor, bytes]] = ()) -> None:
        self._templates: Dict[str, Tuple[TemplateDescriptor, bytes]] = {}
        for descriptor, payload in templates:
            self.add(descriptor, payload)

    def add(self, descriptor: TemplateDescriptor, payload: bytes) -> None:
        self._templates[descriptor.archive_id] = (descriptor, payload)

    @contextmanager
    def open(self, archive_id: str) -> Iterator[OpenedTemplate]:
        try:
            descriptor, payload = self._templates[archive_id]
        except KeyError:
            raise TemplateNotFound(f"Unknown template '{archive_id}'") from None
        with io.BytesIO(payload) as stream:
            yield stream, descriptor
