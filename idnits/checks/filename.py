# Copyright The IETF Trust 2024, All Rights Reserved
# -*- coding: utf-8 -*-
"""Checks of the submitted file name against the name the document declares"""

import os
import re

from idnits import modes, settings
from idnits.nits import ERR, report, rule

FILENAME_BAD_CHARACTERS = rule('FILENAME_BAD_CHARACTERS', ERR, ERR, ERR)
FILENAME_EXT_MISMATCH   = rule('FILENAME_EXT_MISMATCH',   ERR, ERR, ERR)
FILENAME_TOO_LONG       = rule('FILENAME_TOO_LONG',       ERR, ERR, ERR)
FILENAME_NOT_DOCNAME    = rule('FILENAME_NOT_DOCNAME',    ERR, ERR, ERR)
DOCNAME_MALFORMED       = rule('DOCNAME_MALFORMED',       ERR, ERR, ERR)

NAMING_REF = settings.AUTHORS_GUIDE_URL + '/en/naming-your-internet-draft'

BASENAME_RE = re.compile(r'^[a-z0-9-]+$')
REVISION_RE = re.compile(r'-\d\d$')

def split_filename(filename):
    base, ext = os.path.splitext(os.path.basename(filename))
    return base, ext.lstrip('.').lower()

def declared_name(doc):
    "The name the document gives itself, without revision, or None"
    if doc.type == 'xml':
        name = doc.root.get('docName')
        if not name and doc.root.get('number'):
            name = 'rfc%s' % doc.root.get('number').strip()
    elif doc.doc_kind == 'rfc' and doc.data.header.rfc_number:
        name = 'rfc%s' % doc.data.header.rfc_number
    else:
        name = doc.data.slug if doc.data.slug and doc.data.slug.startswith('draft-') else None
    if name:
        name = REVISION_RE.sub('', name.strip())
    return name or None

def is_malformed_draft_name(base):
    """A draft name starts with 'draft-', has no empty components, and has
    at least an individual or stream part plus a distinguishing name."""
    name = REVISION_RE.sub('', base)
    if not name.startswith('draft-') or '--' in name or name.endswith('-'):
        return True
    return len(name.split('-')) < 3

# ----------------------------------------------------------------------

async def validate_filename(doc, mode=modes.NORMAL, **kwargs):
    nits = []
    if not doc.filename:
        return nits
    base, ext = split_filename(doc.filename)
    if not BASENAME_RE.match(base):
        report(nits, FILENAME_BAD_CHARACTERS, mode,
            "The filename '%s' contains characters other than lowercase letters, digits and dashes." % base,
            ref=NAMING_REF)
    if ext != doc.type:
        report(nits, FILENAME_EXT_MISMATCH, mode,
            "The filename extension '.%s' doesn't match the document format (%s)." % (ext, doc.type),
            ref=NAMING_REF)
    filename = os.path.basename(doc.filename)
    if len(filename) > settings.MAX_FILENAME_LENGTH:
        report(nits, FILENAME_TOO_LONG, mode,
            "The filename '%s' is %s characters long; at most %s are allowed."
                % (filename, len(filename), settings.MAX_FILENAME_LENGTH),
            ref=NAMING_REF)
    name = declared_name(doc)
    if name and REVISION_RE.sub('', base) != name:
        report(nits, FILENAME_NOT_DOCNAME, mode,
            "The filename '%s' doesn't match the document name '%s'." % (base, name),
            ref=NAMING_REF)
    return nits

async def validate_docname(doc, mode=modes.NORMAL, **kwargs):
    "Draft names need the structure draft-<source>[-<wg>]-<name>"
    nits = []
    if doc.doc_kind != 'draft' or not doc.filename:
        return nits
    base, __ = split_filename(doc.filename)
    if is_malformed_draft_name(base):
        report(nits, DOCNAME_MALFORMED, mode,
            "The document name '%s' is malformed; expected 'draft-', the individual or stream, "
            "and a distinguishing name separated by single dashes." % base,
            ref=NAMING_REF)
    return nits
