#! /usr/bin/env python
"""The module creates some basic constants to describe the dtdxml package."""

title_name = "dtdxml"
name = "dtdxml"
copyright = "\xA92026, the dtdxml authors"

major_version = "0.1"
build_date = "20261019"
version = "%s.%s" % (major_version, build_date)

title = (
    "dtdxml: "
    "writes XML documents from Python data using a simple DTD")

home = "https://pypi.org/project/dtdxml/"
