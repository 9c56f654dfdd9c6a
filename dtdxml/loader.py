#! /usr/bin/env python
"""Loads the text of a DTD from a string, file or URL"""

import logging
import os
import os.path
from urllib.parse import unquote, urlsplit

import requests

from .structures import LoadError


def load_dtd_source(src, session=None):
    """Returns the text of a DTD

    src
        One of: a file-like object with a read method; bytes, which
        are decoded as UTF-8; the path (a string or path-like object)
        of an existing file; a file, http or https URL; or the text of
        the DTD itself.

    session
        An optional :py:class:`requests.Session` used to fetch http(s)
        URLs.

    Raises :py:class:`~dtdxml.structures.LoadError` if the DTD cannot
    be loaded."""
    if hasattr(src, 'read'):
        data = src.read()
        if isinstance(data, bytes):
            data = decode_dtd(data)
        return data
    if isinstance(src, bytes):
        return decode_dtd(src)
    if isinstance(src, os.PathLike):
        src = os.fspath(src)
    if '<' not in src and os.path.isfile(src):
        return load_file(src)
    url = urlsplit(src) if '<' not in src else None
    if url is not None and url.scheme.lower() == 'file':
        return load_file(unquote(url.path))
    if url is not None and url.scheme.lower() in ('http', 'https') and \
            url.netloc:
        return load_url(src, session)
    return src


def decode_dtd(data):
    """Decodes the bytes *data* as UTF-8

    A leading byte order mark is removed.  Raises
    :py:class:`~dtdxml.structures.LoadError` if *data* is not valid
    UTF-8."""
    try:
        return data.decode('utf-8-sig')
    except UnicodeDecodeError as err:
        raise LoadError("Could not decode DTD: %s" % str(err))


def load_file(path):
    """Returns the text of the DTD stored in the file at *path*"""
    logging.debug("Loading DTD from file %s", path)
    try:
        with open(path, 'r', encoding='utf-8-sig') as f:
            return f.read()
    except IOError as err:
        raise LoadError("Could not load DTD from %s: %s" % (path, str(err)))
    except UnicodeDecodeError as err:
        raise LoadError("Could not decode DTD in %s: %s" % (path, str(err)))


def load_url(url, session=None):
    """Returns the text of the DTD at the http(s) *url*"""
    logging.debug("Loading DTD from %s", url)
    try:
        if session is None:
            r = requests.get(url)
        else:
            r = session.get(url)
    except requests.RequestException as err:
        raise LoadError("Could not load DTD from %s: %s" % (url, str(err)))
    if r.status_code != 200:
        raise LoadError("Could not load DTD from %s: %i %s" %
                        (url, r.status_code, r.reason))
    return r.text
