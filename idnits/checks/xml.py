# Copyright 2018-2024 IETF Trust, All Rights Reserved
# -*- coding: utf-8 indent-with-tabs: 0 -*-
"""Checks of the xml2rfc vocabulary which only apply to xml documents"""

import re

from xml2rfc.writers.base import deprecated_element_tags

from idnits import modes, patterns, settings
from idnits.nits import ERR, WARN, NONE, Pos, plural, report, rule
from idnits.xmlparser import XI

DEPRECATED_ELEMENT        = rule('DEPRECATED_ELEMENT',        WARN, WARN, WARN)
MISSING_IPR_ATTRIBUTE     = rule('MISSING_IPR_ATTRIBUTE',     ERR,  ERR,  ERR)
UNKNOWN_IPR_ATTRIBUTE     = rule('UNKNOWN_IPR_ATTRIBUTE',     WARN, WARN, WARN)
DISALLOWED_IPR_ATTRIBUTE  = rule('DISALLOWED_IPR_ATTRIBUTE',  ERR,  ERR,  ERR)
WORKGROUP_NOT_GROUP       = rule('WORKGROUP_NOT_GROUP',       WARN, WARN, WARN)
CODE_BEGINS_IN_SOURCECODE = rule('CODE_BEGINS_IN_SOURCECODE', WARN, WARN, NONE)
CODE_BEGINS_IN_TEXT       = rule('CODE_BEGINS_IN_TEXT',       WARN, WARN, NONE)
TEXT_LOOKS_LIKE_REF       = rule('TEXT_LOOKS_LIKE_REF',       WARN, WARN, NONE)
MISSING_XREF_TARGET       = rule('MISSING_XREF_TARGET',       ERR,  WARN, ERR)
XREF_TARGET_NOT_ANCHOR    = rule('XREF_TARGET_NOT_ANCHOR',    ERR,  WARN, ERR)
EXTERNAL_ENTITY           = rule('EXTERNAL_ENTITY',           WARN, WARN, NONE)

supported_ipr = [
    'trust200902',
    'noModificationTrust200902',
    'noDerivativesTrust200902',
    'pre5378Trust200902',
]

disallowed_ipr = [
    'noModificationTrust200902',
    'noDerivativesTrust200902',
]

# Elements with running text which could hold a citation
text_tags = [ 'annotation', 'blockquote', 'dd', 'dt', 'li', 'name', 'refcontent', 't', 'td', 'th', 'title', ]

def lines(elements):
    return [ Pos(e.sourceline, None) for e in elements ]

def vocabulary(anchor):
    return settings.RFCXML_VOCABULARY_URL + '#' + anchor

# ----------------------------------------------------------------------

async def validate_deprecated_elements(doc, mode=modes.NORMAL, **kwargs):
    "Deprecated v2 elements appear"
    nits = []
    if doc.type != 'xml':
        return nits
    found = list(doc.root.iter(*list(deprecated_element_tags)))
    if found:
        tags = sorted(set( e.tag for e in found ))
        report(nits, DEPRECATED_ELEMENT, mode,
            "Found %s deprecated xml element%s: %s" % (plural(found) + (', '.join('<%s>' % t for t in tags), )),
            ref=settings.RFCXML_VOCABULARY_URL, lines=lines(found))
    return nits

async def validate_ipr(doc, mode=modes.NORMAL, **kwargs):
    """The <rfc> ipr attribute must be present and recognized, and an IETF
    stream document must allow derivative works."""
    nits = []
    if doc.type != 'xml':
        return nits
    root = doc.root
    ipr = root.get('ipr')
    if ipr is None:
        report(nits, MISSING_IPR_ATTRIBUTE, mode, "Expected an ipr attribute on <rfc>, but found none.",
            ref=vocabulary('ipr'), lines=lines([root]))
        return nits
    if not ipr in supported_ipr:
        report(nits, UNKNOWN_IPR_ATTRIBUTE, mode, "Found an unrecognized ipr attribute on <rfc>: %s" % ipr,
            ref=vocabulary('ipr'), lines=lines([root]))
    stream = root.get('submissionType', 'IETF')
    if stream == 'IETF' and ipr in disallowed_ipr:
        report(nits, DISALLOWED_IPR_ATTRIBUTE, mode, "Found a disallowed ipr attribute for stream IETF: %s" % ipr,
            ref=vocabulary('ipr'), lines=lines([root]))
    return nits

async def validate_workgroup(doc, mode=modes.NORMAL, **kwargs):
    "<workgroup> content should end with 'Group'"
    nits = []
    if doc.type != 'xml':
        return nits
    for e in doc.root.findall('./front/workgroup'):
        wg = (e.text or '').strip()
        if wg and not wg.endswith('Group'):
            report(nits, WORKGROUP_NOT_GROUP, mode,
                "Expected a <workgroup> entry ending in 'Group', but found '%s'" % wg,
                ref=vocabulary('workgroup'), lines=lines([e]))
    return nits

async def validate_code_markers(doc, mode=modes.NORMAL, **kwargs):
    """'<CODE BEGINS>' inside <sourcecode markers="true"> duplicates what the
    renderer produces; in running text it suggests code outside <sourcecode>."""
    nits = []
    if doc.type != 'xml':
        return nits
    found = [ e for e in doc.root.iter('sourcecode')
                if e.text and patterns.CODE_BEGINS_RE.search(e.text) and e.get('markers') == 'true' ]
    if found:
        report(nits, CODE_BEGINS_IN_SOURCECODE, mode,
            'Found %s instance%s of "<CODE BEGINS>" in <sourcecode> which will cause duplicate markers in the output' % plural(found),
            ref=vocabulary('markers'), lines=lines(found))
    found = [ e for e in doc.root.iter('t') if patterns.CODE_BEGINS_RE.search(''.join(e.itertext())) ]
    if found:
        report(nits, CODE_BEGINS_IN_TEXT, mode,
            'Found %s instance%s of "<CODE BEGINS>" in text.  If this is the start of a code block, it should be put in a <sourcecode> element' % plural(found),
            ref=vocabulary('sourcecode'), lines=lines(found))
    return nits

async def validate_text_references(doc, mode=modes.NORMAL, **kwargs):
    "Text that looks like a citation should probably be an <xref>"
    nits = []
    if doc.type != 'xml':
        return nits
    found = []
    for e in doc.root.iter(*text_tags):
        text = ' '.join([ t for t in [e.text, e.tail] if t and t.strip() ])
        match = patterns.CITATION_RE.search(text)
        if match:
            found.append((e, match.group(0)))
    if found:
        report(nits, TEXT_LOOKS_LIKE_REF, mode,
            "Found %s instance%s of text that looks like a citation and maybe should use <xref> instead: %s"
                % (plural(found) + (', '.join(sorted(set( m for e, m in found ))), )),
            ref=vocabulary('xref'), lines=lines([ e for e, m in found ]))
    return nits

async def validate_xrefs(doc, mode=modes.NORMAL, **kwargs):
    "Every <xref> needs a target matching an anchor in the document"
    nits = []
    if doc.type != 'xml':
        return nits
    root = doc.root
    missing = [ e for e in root.iter('xref') if not e.get('target') ]
    if missing:
        report(nits, MISSING_XREF_TARGET, mode,
            "Found %s instance%s of <xref> with no target" % plural(missing),
            ref=vocabulary('target'), lines=lines(missing))
    anchors = set()
    for attr in ['anchor', 'pn', 'slugifiedName']:
        anchors.update( e.get(attr) for e in root.iter() if isinstance(e.tag, str) and e.get(attr) )
    # references pulled in by xi:include or an entity carry the anchor of the bibxml file
    hrefs = [ e.get('href', '') for e in root.iter(XI + 'include') ] + [ e.url for e in doc.external_entities ]
    for href in hrefs:
        match = re.search(r'reference\.(.+)\.xml$', href)
        if match:
            anchors.add(match.group(1).replace('.', '', 1) if match.group(1).startswith('RFC.') else match.group(1))
    unmatched = [ e for e in root.iter('xref') if e.get('target') and not e.get('target') in anchors ]
    if unmatched:
        report(nits, XREF_TARGET_NOT_ANCHOR, mode,
            "Found %s instance%s of <xref> with unmatched target: %s"
                % (plural(unmatched) + (', '.join(sorted(set( e.get('target') for e in unmatched ))), )),
            ref=vocabulary('target'), lines=lines(unmatched))
    return nits

async def validate_external_entities(doc, mode=modes.NORMAL, **kwargs):
    "External entities aren't expanded by idnits, and are deprecated in v3"
    nits = []
    if doc.type != 'xml':
        return nits
    for entity in doc.external_entities:
        report(nits, EXTERNAL_ENTITY, mode,
            "Found an external entity declaration, which will not be resolved: %s %s \"%s\"" % (entity.name, entity.type, entity.url),
            ref=vocabulary('xinclude'))
    return nits
