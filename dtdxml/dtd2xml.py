#! /usr/bin/env python
"""Writes an XML document from JSON data using a simple DTD

Usage::

    python -m dtdxml.dtd2xml [options] DTD DATA

DTD is a file name, URL or the text of the DTD, DATA is the name of a
JSON file containing the data to write, or '-' to read standard input.
Options may also be supplied using a JSON settings file containing a
DTD2XML section, for example::

    {"DTD2XML": {"level": 20, "strict": true, "tab": "  "}}

Command line options override values in the settings file."""

import json
import logging
import sys
from optparse import OptionParser

from . import structures as dtd
from .builder import escape_char_data, escape_char_data7
from .writer import DTD, XMLWriter


def add_options(parser):
    """Defines the command line options on *parser*"""
    parser.add_option(
        "-r", "--root", dest="root", action="store", default=None,
        help="name of the root element")
    parser.add_option(
        "--strict", dest="strict", action="store_true", default=None,
        help="fail when optional data is present but does not match")
    parser.add_option(
        "--atomic", dest="atomic", action="store_true", default=None,
        help="discard output from failed matches")
    parser.add_option(
        "-t", "--tab", dest="tab", action="store", default=None,
        help="indent string, use '' for no indentation")
    parser.add_option(
        "-a", "--ascii", dest="ascii", action="store_true", default=None,
        help="escape all non-ASCII characters")
    parser.add_option(
        "-o", "--output", dest="output", action="store", default=None,
        help="write output to this file instead of stdout")
    parser.add_option(
        "-v", action="count", dest="logging", default=None,
        help="increase verbosity of output up to 3x")
    parser.add_option(
        "--settings", dest="settings", action="store", default=None,
        help="path to the settings file")


def load_settings(options):
    """Returns the settings dictionary

    The settings file named in *options* is loaded (if given) and the
    values of the DTD2XML section are overridden by any command line
    options."""
    settings = {}
    if options.settings:
        with open(options.settings, 'rb') as f:
            settings = json.loads(f.read().decode('utf-8'))
    settings = settings.setdefault('DTD2XML', {})
    if options.logging is not None:
        settings['level'] = (
            logging.ERROR, logging.WARNING, logging.INFO,
            logging.DEBUG)[min(options.logging, 3)]
    settings.setdefault('level', logging.ERROR)
    for name in ('strict', 'atomic', 'ascii'):
        value = getattr(options, name)
        if value is not None:
            settings[name] = value
        else:
            settings.setdefault(name, False)
    if options.tab is not None:
        settings['tab'] = options.tab
    else:
        settings.setdefault('tab', '\t')
    return settings


def load_data(path):
    if path == '-':
        return json.load(sys.stdin)
    with open(path, 'rb') as f:
        return json.loads(f.read().decode('utf-8-sig'))


def main(argv=None):
    parser = OptionParser(usage="%prog [options] DTD DATA")
    add_options(parser)
    (options, args) = parser.parse_args(argv)
    if len(args) != 2:
        parser.error("expected DTD and DATA arguments")
    settings = load_settings(options)
    logging.basicConfig(level=settings['level'])
    try:
        grammar = DTD(args[0])
        w = XMLWriter(grammar)
        w.strict_optional = settings['strict']
        w.atomic = settings['atomic']
        w.write(load_data(args[1]), options.root)
    except (dtd.DTDError, IOError, UnicodeDecodeError,
            json.JSONDecodeError) as err:
        logging.error("%s: %s", err.__class__.__name__, str(err))
        return 1
    if settings['ascii']:
        escape_function = escape_char_data7
    else:
        escape_function = escape_char_data
    if options.output:
        with open(options.output, 'w', encoding='utf-8') as f:
            w.builder.write_xml(f, escape_function, settings['tab'])
            f.write('\n')
    else:
        w.builder.write_xml(sys.stdout, escape_function, settings['tab'])
        sys.stdout.write('\n')
    return 0


if __name__ == '__main__':
    sys.exit(main())
