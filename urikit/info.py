#! /usr/bin/env python
"""The module creates some basic constants to describe the urikit package."""

title_name = "urikit"
name = "urikit"
copyright = "\xA92024, urikit authors"

major_version = "0.1"
build_date = "20241019"
version = "%s.%s" % (major_version, build_date)

title = (
    "urikit: "
    "URI composition, percent-escaping and path normalization")
