#! /usr/bin/env python
"""A minimal XML builder

The builder records a tree of elements and character data as it is
written and serialises the tree on demand.  It does no validation of
its own, element names are written exactly as given."""

from contextlib import contextmanager


#: replacement text for the characters escaped in character data
CHAR_DATA_ESCAPES = {'&': '&amp;', '<': '&lt;', '>': '&gt;', '\r': '&#xD;'}


def escape_char_data(src):
    """Returns a string with XML reserved characters escaped.

    We also escape return characters to prevent them being ignored."""
    return ''.join(CHAR_DATA_ESCAPES.get(c, c) for c in src)


def escape_char_data7(src):
    """Returns a string with reserved and non-ASCII characters escaped.

    Characters outside the ASCII range are written as hexadecimal
    character references."""
    dst = []
    for c in src:
        code = ord(c)
        if code > 0xFFFF:
            dst.append("&#x%06X;" % code)
        elif code > 0xFF:
            dst.append("&#x%04X;" % code)
        elif code > 0x7F:
            dst.append("&#x%02X;" % code)
        else:
            dst.append(CHAR_DATA_ESCAPES.get(c, c))
    return ''.join(dst)


class BuilderElement(object):

    """An element recorded by :py:class:`XMLBuilder`

    name
        The name of the element.

    The children of the element are held in :py:attr:`children`,
    character data is represented by strings and child elements by
    further BuilderElement instances."""

    def __init__(self, name):
        self.name = name
        self.children = []

    def is_mixed(self):
        """True if this element contains character data"""
        for child in self.children:
            if isinstance(child, str):
                return True
        return False

    def get_value(self):
        """Returns the character data content of the element"""
        return ''.join(child for child in self.children
                       if isinstance(child, str))

    def generate_xml(self, escape_function=escape_char_data, indent='',
                     tab='\t'):
        """A generator function that returns strings representing the
        serialised version of this element::

            # the element's serialised output can be obtained as a
            # single string
            ''.join(e.generate_xml())"""
        if tab:
            ws = '\n' + indent
            indent = indent + tab
        else:
            ws = ''
        if self.is_mixed():
            # inline all children
            indent = ''
            tab = ''
        if not self.children:
            yield '%s<%s/>' % (ws, self.name)
            return
        yield '%s<%s>' % (ws, self.name)
        for child in self.children:
            if isinstance(child, str):
                yield escape_function(child)
            else:
                for s in child.generate_xml(escape_function, indent, tab):
                    yield s
        if not tab:
            # if we weren't tabbing children we need to skip closing
            # white space
            ws = ''
        yield '%s</%s>' % (ws, self.name)


class XMLBuilder(object):

    """Builds an XML document

    Elements are opened with :py:meth:`element`, which returns a
    context manager that closes the element again on exit, character
    data is added to the innermost open element with
    :py:meth:`text`::

        b = XMLBuilder()
        with b.element('note'):
            b.text('Hello')
        str(b) == '<?xml version="1.0" encoding="UTF-8"?>\\n<note>Hello</note>'

    Output written to the builder can be discarded with
    :py:meth:`mark` and :py:meth:`rollback`."""

    def __init__(self):
        #: the list of top-level elements
        self.children = []
        self.stack = []

    def get_root(self):
        """Returns the first top-level element or None"""
        for child in self.children:
            if isinstance(child, BuilderElement):
                return child
        return None

    def _current_children(self):
        if self.stack:
            return self.stack[-1].children
        else:
            return self.children

    @contextmanager
    def element(self, name):
        """Opens a new element called *name*

        The element is closed when the context exits, even if the exit
        is caused by an exception."""
        e = BuilderElement(name)
        self._current_children().append(e)
        self.stack.append(e)
        try:
            yield e
        finally:
            self.stack.pop()

    def text(self, data):
        """Adds character data to the current element

        Empty strings are ignored.  Character data cannot be added
        outside an element."""
        if not data:
            return
        if not self.stack:
            raise ValueError("Character data outside the root element")
        self.stack[-1].children.append(data)

    def mark(self):
        """Returns an object recording the current output position"""
        return (len(self.stack), len(self._current_children()))

    def rollback(self, mark):
        """Discards all output written since *mark* was obtained

        The builder must be in the same element as it was when
        :py:meth:`mark` was called."""
        depth, nchildren = mark
        if depth != len(self.stack):
            raise ValueError("rollback across an open element")
        del self._current_children()[nchildren:]

    def generate_xml(self, escape_function=escape_char_data, tab='\t'):
        if tab:
            yield '<?xml version="1.0" encoding="UTF-8"?>'
        else:
            yield '<?xml version="1.0" encoding="UTF-8"?>\n'
        for child in self.children:
            for s in child.generate_xml(escape_function, '', tab):
                yield s

    def write_xml(self, writer, escape_function=escape_char_data,
                  tab='\t'):
        for s in self.generate_xml(escape_function, tab):
            writer.write(s)

    def __str__(self):
        return ''.join(self.generate_xml())
