#! /usr/bin/env python
"""Data structures for simple Document Type Definitions

This module defines the exceptions raised by the package, the classes
used to represent content models and the classes that represent the
declarations found in a DTD."""


class DTDError(Exception):

    """Base class for all exceptions raised by this package."""
    pass


class LoadError(DTDError):

    """Raised when a DTD source cannot be loaded."""
    pass


class ParseError(DTDError):

    """Base class for errors found while parsing a DTD."""
    pass


class UnrecognizedToken(ParseError):

    """Raised when the tokenizer cannot recognise the next lexeme."""
    pass


class UnexpectedToken(ParseError):

    """Raised when a lexeme is found where a term was required."""
    pass


class UnbalancedGroup(ParseError):

    """Raised when a parenthesised group is not closed."""
    pass


class InvalidDeclaration(ParseError):

    """Raised when the DTD contains a malformed declaration."""
    pass


class Unsupported(ParseError):

    """Raised when the DTD contains an unsupported declaration

    tag
        The name of the declaration, e.g., "ENTITY"."""

    def __init__(self, tag):
        ParseError.__init__(self, tag)
        self.tag = tag

    def __str__(self):
        return "%s declarations are not supported" % self.tag


class WriteError(DTDError):

    """Base class for errors raised while writing XML."""
    pass


class MultipleOrMissingRoots(WriteError):

    """Raised when the data does not identify a single root element."""
    pass


class EmptyMismatch(WriteError):

    """Raised when data is supplied for an element declared EMPTY."""
    pass


class MissingRequired(WriteError):

    """Raised when the data does not supply required content."""
    pass


class UnknownElement(WriteError):

    """Raised when an element has not been declared

    name
        The name of the undeclared element."""

    def __init__(self, name):
        WriteError.__init__(self, name)
        self.name = name

    def __str__(self):
        return "<%s> has not been declared" % self.name


class ContentModel(object):

    """Abstract class for the nodes of a content model

    Content models are built by the parser using the methods defined
    here and are not modified once they have been built.  Two models
    compare equal, and have the same hash, if they have the same
    structure."""

    def star(self):
        """Returns a new model matching zero or more of this model."""
        return Quantified(Quantified.Star, self)

    def plus(self):
        """Returns a new model matching one or more of this model."""
        return Quantified(Quantified.Plus, self)

    def question(self):
        """Returns a new model matching an optional instance of this
        model."""
        return Quantified(Quantified.Question, self)

    def concatenate(self, other):
        """Returns a new model matching this model followed by *other*"""
        return self._combine(other, Group.Concatenation)

    def alternate(self, other):
        """Returns a new model matching this model or *other*"""
        return self._combine(other, Group.Alternation)

    def _combine(self, other, kind):
        # groups of the same kind are flattened, never nested
        if self.is_group(kind):
            if other.is_group(kind):
                return Group(kind, self.children + other.children)
            else:
                return Group(kind, self.children + [other])
        elif other.is_group(kind):
            return Group(kind, [self] + other.children)
        else:
            return Group(kind, [self, other])

    def is_group(self, kind=None):
        """Returns True if this node is a group

        kind
            Optionally restricts the test to groups of the given kind."""
        return False

    def check_model(self):
        """Checks the structure of this model

        Raises ValueError if a group has fewer than two children or
        contains a group of its own kind.  Descends the whole model."""
        raise NotImplementedError

    def __ne__(self, other):
        return not self == other


class Terminal(ContentModel):

    """A leaf node of a content model

    ref
        Either the name of an element or one of the special values
        :py:attr:`PCDATA` and :py:attr:`EMPTY`."""

    #: ref value representing parsed character data
    PCDATA = "#PCDATA"

    #: ref value representing empty content
    EMPTY = "EMPTY"

    def __init__(self, ref):
        self.ref = ref

    def is_pcdata(self):
        return self.ref == Terminal.PCDATA

    def is_empty(self):
        return self.ref == Terminal.EMPTY

    def is_element(self):
        """True if this terminal refers to a named element"""
        return not (self.is_pcdata() or self.is_empty())

    def check_model(self):
        if not self.ref:
            raise ValueError("Terminal with no name")

    def __eq__(self, other):
        return isinstance(other, Terminal) and self.ref == other.ref

    def __hash__(self):
        return hash(self.ref)

    def __str__(self):
        return self.ref

    def __repr__(self):
        return "Terminal(%s)" % repr(self.ref)


class Quantified(ContentModel):

    """A node that repeats, or makes optional, a single inner node

    kind
        One of the constants :py:attr:`Star`, :py:attr:`Plus` or
        :py:attr:`Question`.

    inner
        The :py:class:`ContentModel` being quantified."""

    #: Quantifier constant for '*', zero or more
    Star = 1
    #: Quantifier constant for '+', one or more
    Plus = 2
    #: Quantifier constant for '?', zero or one
    Question = 3

    symbols = {Star: '*', Plus: '+', Question: '?'}
    names = {Star: 'Star', Plus: 'Plus', Question: 'Question'}

    def __init__(self, kind, inner):
        if kind not in Quantified.symbols:
            raise ValueError("Unknown quantifier: %s" % repr(kind))
        self.kind = kind
        self.inner = inner

    def is_required(self):
        """True if at least one instance of the inner model is needed"""
        return self.kind == Quantified.Plus

    def is_multiple(self):
        """True if the inner model may be repeated"""
        return self.kind in (Quantified.Star, Quantified.Plus)

    def check_model(self):
        if not isinstance(self.inner, ContentModel):
            raise ValueError("Quantified node must wrap a single model")
        self.inner.check_model()

    def __eq__(self, other):
        return (isinstance(other, Quantified) and
                self.kind == other.kind and self.inner == other.inner)

    def __hash__(self):
        return hash((self.kind, self.inner))

    def __str__(self):
        return "%s%s" % (str(self.inner), Quantified.symbols[self.kind])

    def __repr__(self):
        return "Quantified(%s, %s)" % (
            Quantified.names[self.kind], repr(self.inner))


class Group(ContentModel):

    """A node that combines two or more child nodes

    kind
        One of :py:attr:`Concatenation` or :py:attr:`Alternation`.

    children
        A list of at least two :py:class:`ContentModel` instances."""

    #: Group constant for ',' (a sequence)
    Concatenation = 1
    #: Group constant for '|' (a choice)
    Alternation = 2

    separators = {Concatenation: ',', Alternation: '|'}
    names = {Concatenation: 'Concatenation', Alternation: 'Alternation'}

    def __init__(self, kind, children):
        if kind not in Group.separators:
            raise ValueError("Unknown group type: %s" % repr(kind))
        children = list(children)
        if len(children) < 2:
            raise ValueError("Group requires at least two children")
        self.kind = kind
        self.children = children

    def is_group(self, kind=None):
        return kind is None or self.kind == kind

    def check_model(self):
        if len(self.children) < 2:
            raise ValueError("Group with fewer than two children")
        for child in self.children:
            if child.is_group(self.kind):
                raise ValueError(
                    "Group nested directly in group of the same kind")
            child.check_model()

    def __eq__(self, other):
        return (isinstance(other, Group) and self.kind == other.kind and
                self.children == other.children)

    def __hash__(self):
        return hash((self.kind, tuple(self.children)))

    def __str__(self):
        return "(%s)" % Group.separators[self.kind].join(
            str(child) for child in self.children)

    def __repr__(self):
        return "Group(%s, [%s])" % (
            Group.names[self.kind],
            ", ".join(repr(child) for child in self.children))


class Declaration(object):

    """Abstract class for the declarations in a DTD"""
    pass


class Comment(Declaration):

    """A comment found between declarations"""

    def __init__(self, text):
        #: the text of the comment
        self.text = text


class ElementDeclaration(Declaration):

    """An element type declaration

    name
        The name of the element.

    model
        The :py:class:`ContentModel` of the element."""

    def __init__(self, name, model):
        if not isinstance(model, ContentModel):
            raise TypeError(
                "Expected ContentModel; got %s" % repr(model))
        self.name = name
        self.model = model


class EntityDeclaration(Declaration):

    """Entity declarations are not supported

    Creating an instance always raises :py:class:`Unsupported`."""

    def __init__(self, *args):
        raise Unsupported("ENTITY")


class AttListDeclaration(Declaration):

    """Attribute list declarations are not supported

    Creating an instance always raises :py:class:`Unsupported`."""

    def __init__(self, *args):
        raise Unsupported("ATTLIST")
