# Copyright The IETF Trust 2018-2024, All Rights Reserved
# -*- coding: utf-8 -*-

# Static values
__version__  = '3.0.0'
NAME         = 'idnits'
VERSION      = [ int(i) if i.isdigit() else i for i in __version__.split('.') ]

DESCRIPTION  = """Report issues with a draft or RFC document.

The idnits program inspects Internet-Draft and RFC documents, in plain
text or xml2rfc v3 format, for a variety of conditions that should be
adjusted to bring the document into line with policies from the IETF,
the IETF Trust, and the RFC Editor.

The determination of which issues are to be reported is based on:

 * Requirements in https://authors.ietf.org/en/required-content
 * Requirements in https://www.ietf.org/id-info/checklist
 * Additional requirements captured from ADs and authors over time

"""

class Options(object):
    def __init__(self, **kwargs):
        for k,v in kwargs.items():
            if not k.startswith('__'):
                setattr(self, k, v)

    def copy(self, **kwargs):
        values = dict(vars(self))
        values.update(kwargs)
        return Options(**values)

default_options = Options(debug=False, docs=[], mode='normal', offline=False, output='pretty',
                          silent=False, verbose=False, version=False, year=None, )


def check_nits(raw, filename, options=default_options):
    "Parse a document and run every check on it, returning the list of nits"
    from idnits.checks import Checker
    from idnits.parser import parse

    doc = parse(filename, raw=raw)
    return Checker(doc, options).check()
