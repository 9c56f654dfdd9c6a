#! /usr/bin/env python
"""Writes XML from Python data structures using a simple DTD

The data to be written is a nested structure of dictionaries (or other
mappings), lists and simple values that mirrors the element structure
described by the DTD.  For example, given::

    <!ELEMENT book (title, author+, chapter*)>
    <!ELEMENT title (#PCDATA)>
    <!ELEMENT author (#PCDATA)>
    <!ELEMENT chapter (#PCDATA)>

the data::

    {'book': {'title': 'T', 'author': ['A1', 'A2']}}

is written as a book element containing a title followed by two author
elements."""

import logging
from collections.abc import Mapping
from types import MappingProxyType

from . import structures as dtd
from .builder import XMLBuilder
from .loader import load_dtd_source
from .parser import DTDParser


def is_blank(data):
    """Tests if *data* counts as no data at all

    None, False, strings containing only white space and empty
    collections are all blank.  Numbers, including 0, are not."""
    if data is None or data is False:
        return True
    if isinstance(data, str):
        return not data.strip()
    if isinstance(data, (Mapping, list, tuple, set, frozenset)):
        return len(data) == 0
    return False


def as_list(data):
    """Returns *data* as a list

    None becomes the empty list, lists and tuples are returned as
    lists and anything else (including a mapping) becomes a list
    containing a single item."""
    if data is None:
        return []
    elif isinstance(data, (list, tuple)):
        return list(data)
    else:
        return [data]


class DTD(object):

    """A parsed DTD

    src
        The DTD to load, in any of the forms accepted by
        :py:func:`~dtdxml.loader.load_dtd_source`.

    session
        An optional :py:class:`requests.Session` used when *src* is an
        http(s) URL.

    The DTD is loaded and parsed when the object is created, parse
    errors are raised from the constructor.  Once created the DTD is
    not modified and may be shared by any number of writers."""

    def __init__(self, src, session=None):
        #: the text of the DTD
        self.source = load_dtd_source(src, session)
        #: the list of all declarations, in order, including comments
        self.declarations = DTDParser(self.source).parse_dtd()
        elements = {}
        for d in self.declarations:
            if isinstance(d, dtd.ElementDeclaration):
                if d.name in elements:
                    # the last declaration wins
                    logging.debug("Redeclaration of <%s> replaces %s",
                                  d.name, str(elements[d.name]))
                elements[d.name] = d.model
        #: a read-only mapping from element name to content model
        self.elements = MappingProxyType(elements)

    def get_element_model(self, name):
        """Returns the content model of element *name*

        If there is no element called *name* None is returned."""
        return self.elements.get(name, None)

    def write_xml(self, data, root=None, builder=None, strict=False,
                  atomic=False):
        """Writes *data* as XML

        data
            The data to write, see :py:meth:`XMLWriter.write`

        root
            The optional name of the root element

        builder
            An optional :py:class:`~dtdxml.builder.XMLBuilder` to write
            to; by default a new builder is created.

        strict, atomic
            Set the corresponding :py:class:`XMLWriter` options.

        Returns the builder."""
        w = XMLWriter(self, builder)
        w.strict_optional = strict
        w.atomic = atomic
        w.write(data, root)
        return w.builder


class XMLWriter(object):

    """Writes data to an XML builder following a :py:class:`DTD`

    dtd
        The :py:class:`DTD` that defines the document structure.

    builder
        The :py:class:`~dtdxml.builder.XMLBuilder` to write to; by
        default a new builder is created.

    The content model of each element is matched against the data
    depth first.  Element references match when the data is a mapping
    containing a key with the element's name, concatenations pass the
    same data to each of their children in turn and alternations try
    each child until one matches.

    A writer must not be shared between threads, create one writer for
    each document being written."""

    def __init__(self, dtd, builder=None):
        self.dtd = dtd
        if builder is None:
            builder = XMLBuilder()
        #: the builder to which output is written
        self.builder = builder
        self.strict_optional = False
        """Controls the handling of optional content

        When False (the default) an optional (?) particle always
        matches.  When True an optional particle that fails to match
        after writing some output, indicating that data was present
        but did not match, causes the match to fail."""
        self.atomic = False
        """Controls the handling of partial output

        When False (the default) output is written as matching
        proceeds and is not removed if the match subsequently fails.
        This may leave partial, invalid, output in the builder when
        an alternative fails or when :py:meth:`write` raises an error.
        When True the output written by a failed match is discarded."""
        #: the number of elements and data items written so far
        self.nwritten = 0

    def write(self, data, root=None):
        """Writes a document

        data
            A mapping from the name of the root element to the data for
            that element.  Unless *root* is given the mapping must have
            exactly one key.

        root
            The optional name of the root element.

        Raises :py:class:`~dtdxml.structures.WriteError` if the data
        cannot be written.  There is no return value."""
        if not isinstance(data, Mapping):
            raise dtd.MultipleOrMissingRoots(
                "Expected a mapping from root element name to data")
        if root is None:
            if len(data) != 1:
                raise dtd.MultipleOrMissingRoots(
                    "Expected exactly one root element, found %i" %
                    len(data))
            root = next(iter(data))
        elif root not in data:
            raise dtd.MultipleOrMissingRoots(
                "No data for root element <%s>" % root)
        mark = self.builder.mark()
        try:
            result = self.write_element(root, data)
            if not result:
                raise dtd.MissingRequired(
                    "<%s>: data does not match content model %s" %
                    (root, str(self.get_model(root))))
        except dtd.WriteError:
            if self.atomic:
                self.builder.rollback(mark)
            raise

    def get_model(self, name):
        model = self.dtd.get_element_model(name)
        if model is None:
            raise dtd.UnknownElement(name)
        return model

    def write_element(self, name, data):
        """Writes element *name* using *data*[*name*]

        Returns True if the element's content matched."""
        model = self.get_model(name)
        self.nwritten += 1
        with self.builder.element(name):
            result = self.match(model, data[name])
        if not result:
            logging.debug("<%s> did not match %s", name, str(model))
        return result

    def match(self, model, data):
        """Matches *model* against *data* writing output as it goes

        model
            A :py:class:`~dtdxml.structures.ContentModel` instance.

        data
            The data for this part of the model.

        Returns True if the model matched."""
        if isinstance(model, dtd.Terminal):
            return self.match_terminal(model, data)
        elif isinstance(model, dtd.Group):
            if model.kind == dtd.Group.Concatenation:
                return self.match_concatenation(model, data)
            else:
                return self.match_alternation(model, data)
        elif isinstance(model, dtd.Quantified):
            if model.kind == dtd.Quantified.Question:
                return self.match_optional(model, data)
            else:
                return self.match_repeat(model, data)
        else:
            raise TypeError("Unexpected content model %s" % repr(model))

    def match_terminal(self, model, data):
        if model.is_empty():
            if not (is_blank(data) or data is True):
                raise dtd.EmptyMismatch(
                    "Expected EMPTY data; got %s" % repr(data))
            return True
        elif model.is_pcdata():
            if data is not None:
                self.nwritten += 1
                self.builder.text(str(data))
            return True
        elif isinstance(data, Mapping) and model.ref in data:
            return self.write_element(model.ref, data)
        else:
            # the data does not support this alternative
            return False

    def match_concatenation(self, model, data):
        mark = self.builder.mark()
        for child in model.children:
            if not self.match(child, data):
                self._discard(mark)
                return False
        return True

    def match_alternation(self, model, data):
        for child in model.children:
            mark = self.builder.mark()
            if self.match(child, data):
                return True
            self._discard(mark)
        return False

    def match_repeat(self, model, data):
        if is_blank(data):
            return model.kind == dtd.Quantified.Star
        inner = model.inner
        if (isinstance(inner, dtd.Terminal) and inner.is_element() and
                isinstance(data, Mapping)):
            items = [{inner.ref: d} for d in as_list(data.get(inner.ref))]
        else:
            items = as_list(data)
        if model.kind == dtd.Quantified.Plus and not items:
            return False
        mark = self.builder.mark()
        for item in items:
            if not self.match(inner, item):
                self._discard(mark)
                return False
        return True

    def match_optional(self, model, data):
        mark = self.builder.mark()
        written = self.nwritten
        if self.match(model.inner, data):
            return True
        self._discard(mark)
        if self.strict_optional and written != self.nwritten:
            # data was present but did not match
            return False
        return True

    def _discard(self, mark):
        if self.atomic:
            self.builder.rollback(mark)
