#! /usr/bin/env python
"""Parses simple Document Type Definitions

The grammar understood by this module is a small subset of the DTD
syntax defined by XML: element type declarations and comments.  Entity
and attribute list declarations are recognised only so that they can
be rejected."""

import logging
import re

from . import structures as dtd


#: the punctuation characters that form single-character lexemes
PUNCTUATION = "(),|?*+"

TERMINAL_RE = re.compile(r"#PCDATA|[A-Za-z0-9_.:\-]+")

DECLARATION_RE = re.compile(r"<!(--|[A-Za-z]+)\s*(.*?)>", re.DOTALL)


def is_terminal(lexeme):
    """Tests if *lexeme* is a terminal: #PCDATA, EMPTY or a name"""
    return lexeme is not None and TERMINAL_RE.fullmatch(lexeme) is not None


def get_lexeme(src):
    """Splits the next lexeme from the front of *src*

    Returns a tuple of (lexeme, remainder).  Leading and trailing white
    space is ignored.  If *src* is empty, or contains only white
    space, the lexeme returned is None and the remainder is the empty
    string.

    Raises :py:class:`~dtdxml.structures.UnrecognizedToken` if *src*
    does not start with a punctuation character or a terminal."""
    src = src.strip() if src else ''
    if not src:
        return None, ''
    if src[0] in PUNCTUATION:
        return src[0], src[1:]
    match = TERMINAL_RE.match(src)
    if match is None:
        raise dtd.UnrecognizedToken("Unknown string %s" % repr(src[:20]))
    return match.group(0), src[match.end():]


class ContentModelParser(object):

    """Parses a single content model expression

    src
        The text of the expression, e.g., "(title, author+)".

    The parser holds the unconsumed text in :py:attr:`src` and must not
    be shared between parses, create a new parser for each
    expression.

    The expression is parsed strictly left to right.  The two binary
    operators have the same precedence and the right-hand side of each
    takes everything that follows it, so "a, b | c" is parsed as a
    sequence of a followed by the choice (b | c) whereas "a | b, c"
    is a choice between a and the sequence (b, c).  Quantifiers apply
    to everything parsed so far at the current level."""

    def __init__(self, src):
        #: the text that remains to be parsed
        self.src = src

    def next_lexeme(self):
        """Consumes and returns the next lexeme (None at the end)"""
        lexeme, self.src = get_lexeme(self.src)
        return lexeme

    def push_back(self, lexeme):
        self.src = lexeme + self.src

    def parse_content_spec(self):
        """Parses the whole of :py:attr:`src`

        Returns the :py:class:`~dtdxml.structures.ContentModel` and
        raises :py:class:`~dtdxml.structures.UnexpectedToken` if any
        text remains unparsed."""
        model = self.parse_model()
        lexeme = self.next_lexeme()
        if lexeme is not None:
            raise dtd.UnexpectedToken(
                "Unexpected %s after content model %s" %
                (repr(lexeme), str(model)))
        model.check_model()
        return model

    def parse_model(self):
        """Parses an expression from the front of :py:attr:`src`

        Parsing stops at the end of the text or at the first lexeme
        that cannot continue the expression, such lexemes are left in
        :py:attr:`src`."""
        lexeme = self.next_lexeme()
        if lexeme == '(':
            model = self.parse_model()
            lexeme = self.next_lexeme()
            if lexeme != ')':
                raise dtd.UnbalancedGroup(
                    "Missing ) at %s" % repr((lexeme or '') + self.src))
        elif is_terminal(lexeme):
            model = dtd.Terminal(lexeme)
        else:
            raise dtd.UnexpectedToken(
                "Expected ( or name, found %s" % repr(lexeme))
        while True:
            lexeme = self.next_lexeme()
            if lexeme == ',':
                model = model.concatenate(self.parse_model())
            elif lexeme == '|':
                model = model.alternate(self.parse_model())
            elif lexeme == '*':
                model = model.star()
            elif lexeme == '+':
                model = model.plus()
            elif lexeme == '?':
                model = model.question()
            else:
                if lexeme is not None:
                    self.push_back(lexeme)
                break
        return model


def parse_content_model(src):
    """Parses *src* as a complete content model expression"""
    return ContentModelParser(src).parse_content_spec()


class DTDParser(object):

    """Parses the declarations in a DTD

    src
        The text of the DTD.

    As with :py:class:`ContentModelParser` the parser consumes
    :py:attr:`src` as it goes and must be used for a single parse
    only."""

    def __init__(self, src):
        self.src = src

    def parse_dtd(self):
        """Parses all declarations

        Returns a list of :py:class:`~dtdxml.structures.Declaration`
        instances in the order in which they appear."""
        declarations = []
        self.src = self.src.strip()
        while self.src:
            declarations.append(self.parse_declaration())
            self.src = self.src.strip()
        return declarations

    def parse_declaration(self):
        """Parses a single declaration from the front of the source"""
        match = DECLARATION_RE.match(self.src)
        if match is None:
            raise dtd.InvalidDeclaration(
                "Invalid DTD at %s" % repr(self.src[:20]))
        tag, body = match.group(1), match.group(2)
        self.src = self.src[match.end():]
        if tag == '--':
            if body.endswith('--'):
                body = body[:-2]
            return dtd.Comment(body)
        elif tag == 'ELEMENT':
            return self.parse_element_decl(body)
        elif tag == 'ENTITY':
            return dtd.EntityDeclaration(body)
        elif tag == 'ATTLIST':
            return dtd.AttListDeclaration(body)
        else:
            raise dtd.InvalidDeclaration(
                "Unknown declaration <!%s at %s" % (tag, repr(body[:20])))

    def parse_element_decl(self, body):
        """Parses the body of an ELEMENT declaration

        body
            The text following "<!ELEMENT" up to, but not including,
            the closing ">"."""
        fields = body.split(None, 1)
        if len(fields) < 2:
            raise dtd.InvalidDeclaration(
                "ELEMENT declaration requires a name and content model: "
                "%s" % repr(body))
        name, content_spec = fields[0], fields[1].strip()
        model = parse_content_model(content_spec)
        logging.debug("Declared <%s> with content model %s", name, str(model))
        return dtd.ElementDeclaration(name, model)


def parse_dtd(src):
    """Parses the text of a DTD returning a list of declarations"""
    return DTDParser(src).parse_dtd()
