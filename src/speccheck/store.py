"""The :class:`SpecStore` -- owner of one loaded spec and its validator session.

A store moves from *unloaded* to *loaded* exactly once per session. The
document is parsed on the first :meth:`SpecStore.load` call and returned from
memory afterwards; :meth:`SpecStore.reload` starts a new session by re-reading
the source and clearing the validator's registered schemas and compiled cache.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from speccheck.exceptions import SpecLoadError
from speccheck.models import SpecDocument
from speccheck.parser import extract_document, load_spec
from speccheck.validation.session import ValidatorSession

logger = logging.getLogger(__name__)


class SpecStore:
    """Load a spec once and share it read-only.

    Args:
        source: File path (or ``-`` for stdin) used when :meth:`load` is
            called without an explicit source.
        session: Validator session bound to this store. A fresh
            :class:`~speccheck.validation.session.ValidatorSession` is
            created when omitted.

    Example::

        store = SpecStore("specification/http/1.0/openapi.json")
        doc = store.load()
        schema, all_schemas = resolve_schema(doc, "CallToolResponse")
        report = validate(schema, all_schemas, payload, session=store.session)
    """

    def __init__(
        self,
        source: Optional[str] = None,
        session: Optional[ValidatorSession] = None,
    ) -> None:
        self._source = source
        self._session = session if session is not None else ValidatorSession()
        self._document: Optional[SpecDocument] = None
        self._lock = threading.Lock()

    @property
    def source(self) -> Optional[str]:
        """The configured or most recently loaded source."""
        return self._source

    @property
    def session(self) -> ValidatorSession:
        """The validator session whose cache lives as long as the loaded document."""
        return self._session

    @property
    def is_loaded(self) -> bool:
        return self._document is not None

    @property
    def document(self) -> SpecDocument:
        """The loaded document.

        Raises:
            SpecLoadError: If nothing has been loaded yet.
        """
        if self._document is None:
            raise SpecLoadError("No spec loaded; call load() first")
        return self._document

    def load(self, source: Optional[str] = None) -> SpecDocument:
        """Load the spec, or return it from memory if already loaded.

        Passing a *source* different from the one already loaded starts a
        new session, exactly like :meth:`reload`.

        Raises:
            SpecLoadError: If the source is unreadable or not JSON/YAML.
            SpecFormatError: If the document lacks ``components.schemas`` or
                ``paths``.
        """
        with self._lock:
            if source is None:
                source = self._source
            if source is None:
                raise SpecLoadError("No spec source configured")
            if self._document is not None and source == self._source:
                return self._document
            return self._load_locked(source)

    def reload(self) -> SpecDocument:
        """Re-read the source and clear the validator session."""
        with self._lock:
            if self._source is None:
                raise SpecLoadError("No spec source configured")
            return self._load_locked(self._source)

    def _load_locked(self, source: str) -> SpecDocument:
        raw = load_spec(source)
        document = extract_document(raw, source)
        if self._document is not None:
            self._session.clear()
        self._document = document
        self._source = source
        logger.debug(
            "Loaded spec %s: %d schemas, %d paths",
            source,
            len(document.components_schemas),
            len(document.paths),
        )
        return document
