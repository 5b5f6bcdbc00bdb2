# Copyright 2018-2024 IETF Trust, All Rights Reserved
# -*- coding: utf-8 indent-with-tabs: 0 -*-

import io
import os

from idnits import txtparser, xmlparser
from idnits.log import log

# ----------------------------------------------------------------------

def get_type(filename, raw):
    "Decide between 'txt' and 'xml' from the file extension, else the content"
    __, ext = os.path.splitext(filename or '')
    ext = ext.lower()
    if ext == '.xml':
        return 'xml'
    elif ext == '.txt':
        return 'txt'
    if raw.lstrip(b'\xef\xbb\xbf \t\r\n').startswith(b'<'):
        return 'xml'
    return 'txt'

def parse(filename, raw=None, options=None):
    """Parse the document in file filename, or given as raw bytes, into a
    TxtDoc or XmlDoc.  Raises nits.ParseError if it can't be parsed."""
    if raw is None:
        with io.open(filename, "rb") as file:
            raw = file.read()
    elif isinstance(raw, str):
        raw = raw.encode('utf-8')
    name = os.path.basename(filename) if filename else None
    type = get_type(name, raw)
    log("Parsing %s as %s" % (name, type))
    if type == 'xml':
        return xmlparser.parse(raw, name)
    else:
        return txtparser.parse(raw, name)
