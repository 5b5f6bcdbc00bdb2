# Copyright The IETF Trust 2024, All Rights Reserved
# -*- coding: utf-8 -*-
"""Required sections: presence, shape and, for xml, the allowed children.

Text documents are checked against the section markers and accumulated
content found by the text parser.  Xml documents are checked on the
element tree: <abstract> in <front>, top-level <section> elements in
<middle> and <back> recognized by their name, <author> elements and
<references> titles.
"""

import re

from idnits import modes, patterns, settings
from idnits.nits import ERR, WARN, COMM, NONE, Pos, plural, report, rule
from idnits.xmlparser import section_name

MISSING_ABSTRACT_SECTION                = rule('MISSING_ABSTRACT_SECTION',                ERR,  ERR,  ERR)
INVALID_ABSTRACT_SECTION                = rule('INVALID_ABSTRACT_SECTION')
INVALID_ABSTRACT_SECTION_CHILD          = rule('INVALID_ABSTRACT_SECTION_CHILD')
INVALID_ABSTRACT_SECTION_REF            = rule('INVALID_ABSTRACT_SECTION_REF')
EMPTY_ABSTRACT_SECTION                  = rule('EMPTY_ABSTRACT_SECTION')
INVALID_DOCUMENT_STRUCTURE              = rule('INVALID_DOCUMENT_STRUCTURE',              ERR,  ERR,  ERR)
MISSING_INTRODUCTION_SECTION            = rule('MISSING_INTRODUCTION_SECTION')
INVALID_INTRODUCTION_SECTION            = rule('INVALID_INTRODUCTION_SECTION')
INVALID_INTRODUCTION_SECTION_CHILD      = rule('INVALID_INTRODUCTION_SECTION_CHILD')
EMPTY_INTRODUCTION_SECTION              = rule('EMPTY_INTRODUCTION_SECTION')
MISSING_SECURITY_CONSIDERATIONS_SECTION = rule('MISSING_SECURITY_CONSIDERATIONS_SECTION')
INVALID_SECURITY_CONSIDERATIONS_SECTION = rule('INVALID_SECURITY_CONSIDERATIONS_SECTION')
INVALID_SECURITY_CONSIDERATIONS_SECTION_CHILD = rule('INVALID_SECURITY_CONSIDERATIONS_SECTION_CHILD')
EMPTY_SECURITY_CONSIDERATIONS_SECTION   = rule('EMPTY_SECURITY_CONSIDERATIONS_SECTION')
MISSING_AUTHOR_SECTION                  = rule('MISSING_AUTHOR_SECTION')
EMPTY_AUTHOR_SECTION                    = rule('EMPTY_AUTHOR_SECTION')
TOO_MANY_AUTHORS                        = rule('TOO_MANY_AUTHORS',                        COMM, COMM, NONE)
EMPTY_AUTHOR_ORGANIZATION               = rule('EMPTY_AUTHOR_ORGANIZATION',               WARN, WARN, NONE)
MISSING_AUTHOR_FULLNAME                 = rule('MISSING_AUTHOR_FULLNAME',                 WARN, WARN, NONE)
MISSING_AUTHOR_FULLNAME_WITH_ASCII      = rule('MISSING_AUTHOR_FULLNAME_WITH_ASCII',      WARN, WARN, NONE)
INVALID_AUTHOR_ROLE                     = rule('INVALID_AUTHOR_ROLE',                     WARN, WARN, NONE)
MISSING_REFERENCES_TITLE                = rule('MISSING_REFERENCES_TITLE')
INVALID_REFERENCES_TITLE                = rule('INVALID_REFERENCES_TITLE')
EMPTY_REFERENCES_SECTION                = rule('EMPTY_REFERENCES_SECTION')
MISSING_IANA_CONSIDERATIONS_SECTION     = rule('MISSING_IANA_CONSIDERATIONS_SECTION')
MISSING_IANA_CONSIDERATIONS_SECTION_RFC = rule('MISSING_IANA_CONSIDERATIONS_SECTION',     COMM, COMM, NONE)
INVALID_IANA_CONSIDERATIONS_SECTION     = rule('INVALID_IANA_CONSIDERATIONS_SECTION')
INVALID_IANA_CONSIDERATIONS_SECTION_CHILD = rule('INVALID_IANA_CONSIDERATIONS_SECTION_CHILD')
EMPTY_IANA_CONSIDERATIONS_SECTION       = rule('EMPTY_IANA_CONSIDERATIONS_SECTION')

ABSTRACT_CHILDREN = set([ 'dl', 'ol', 't', 'ul', ])
SECTION_CHILDREN = set([
    'artset', 'artwork', 'aside', 'blockquote', 'contact', 'dl', 'figure', 'iref', 'name',
    'ol', 'section', 'sourcecode', 't', 'table', 'texttable', 'ul',
])
AUTHOR_ROLES = [ None, 'editor', ]
REFERENCES_TITLES = [ 'References', 'Normative References', 'Informative References', ]

INTRODUCTION_NAME_RE = re.compile(r'^(introduction|overview|background)$', re.I)
SECURITY_CONSIDERATIONS_NAME_RE = re.compile(r'^security considerations$', re.I)
IANA_CONSIDERATIONS_NAME_RE = re.compile(r'^iana considerations$', re.I)

def ref(anchor):
    return settings.REQUIRED_CONTENT_URL + '#' + anchor

def pos(e):
    return [ Pos(e.sourceline, None) ]

# ----------------------------------------------------------------------
# Helpers

def check_txt_structure(doc, mode):
    "Returns a list with an INVALID_DOCUMENT_STRUCTURE nit if the header or title is missing"
    nits = []
    if not doc.has_header:
        report(nits, INVALID_DOCUMENT_STRUCTURE, mode,
            "The document header or title could not be found; the document structure is invalid.",
            ref=ref('first-page-header'))
    return nits

def check_txt_section(doc, mode, name, label, missing, empty, anchor):
    nits = check_txt_structure(doc, mode)
    if nits:
        return nits
    marker = doc.data.markers.get(name)
    if marker is None or not marker.found:
        report(nits, missing, mode, "The %s section is missing." % label, ref=ref(anchor))
    elif not doc.data.content.get(name):
        report(nits, empty, mode, "The %s section is empty." % label, ref=ref(anchor),
            lines=[ Pos(marker.start, None) ])
    return nits

def find_section(root, regex):
    "The first top-level <section> in <middle> or <back> whose name matches regex"
    for section in root.findall('middle/section') + root.findall('back/section'):
        name = section_name(section)
        if name and regex.search(name.strip()):
            return section
    return None

def check_xml_section(doc, mode, section, label, invalid, invalid_child, anchor):
    """Check that section has element content, all from the allowed
    children of a <section>"""
    nits = []
    children = [ c for c in section if isinstance(c.tag, str) and c.tag != 'name' ]
    if not children:
        report(nits, invalid, mode, "The %s section has no content." % label,
            ref=ref(anchor), lines=pos(section))
    for c in children:
        if not c.tag in SECTION_CHILDREN:
            report(nits, invalid_child, mode, "The %s section contains an invalid element: <%s>." % (label, c.tag),
                ref=settings.RFCXML_VOCABULARY_URL + '#section', lines=pos(c))
    return nits

# ----------------------------------------------------------------------
# Checks

async def validate_abstract_section(doc, mode=modes.NORMAL, **kwargs):
    """The document must have an abstract, consisting of paragraphs and
    lists only, and without references."""
    if doc.type == 'txt':
        return check_txt_section(doc, mode, patterns.ABSTRACT, 'abstract',
            MISSING_ABSTRACT_SECTION, EMPTY_ABSTRACT_SECTION, 'abstract')
    nits = []
    abstract = doc.root.find('front/abstract')
    if abstract is None:
        report(nits, MISSING_ABSTRACT_SECTION, mode, "The abstract section is missing.", ref=ref('abstract'))
        return nits
    children = [ c for c in abstract if isinstance(c.tag, str) ]
    if not children:
        report(nits, INVALID_ABSTRACT_SECTION, mode, "The abstract section must contain at least one paragraph.",
            ref=ref('abstract'), lines=pos(abstract))
    for c in children:
        if not c.tag in ABSTRACT_CHILDREN:
            report(nits, INVALID_ABSTRACT_SECTION_CHILD, mode,
                "The abstract section may only contain <%s> elements, found <%s>." % ('>, <'.join(sorted(ABSTRACT_CHILDREN)), c.tag),
                ref=settings.RFCXML_VOCABULARY_URL + '#abstract', lines=pos(c))
    xrefs = list(abstract.iter('xref'))
    if xrefs:
        report(nits, INVALID_ABSTRACT_SECTION_REF, mode,
            "The abstract section should not contain references (found %s <xref> element%s)." % plural(xrefs),
            ref=ref('abstract'), lines=[ Pos(x.sourceline, None) for x in xrefs ])
    return nits

async def validate_introduction_section(doc, mode=modes.NORMAL, **kwargs):
    if doc.type == 'txt':
        return check_txt_section(doc, mode, patterns.INTRODUCTION, 'introduction',
            MISSING_INTRODUCTION_SECTION, EMPTY_INTRODUCTION_SECTION, 'introduction')
    section = find_section(doc.root, INTRODUCTION_NAME_RE)
    if section is None:
        nits = []
        report(nits, MISSING_INTRODUCTION_SECTION, mode, "The introduction section is missing.", ref=ref('introduction'))
        return nits
    return check_xml_section(doc, mode, section, 'introduction',
        INVALID_INTRODUCTION_SECTION, INVALID_INTRODUCTION_SECTION_CHILD, 'introduction')

async def validate_security_considerations_section(doc, mode=modes.NORMAL, **kwargs):
    if doc.type == 'txt':
        return check_txt_section(doc, mode, patterns.SECURITY_CONSIDERATIONS, 'security considerations',
            MISSING_SECURITY_CONSIDERATIONS_SECTION, EMPTY_SECURITY_CONSIDERATIONS_SECTION, 'security-considerations')
    section = find_section(doc.root, SECURITY_CONSIDERATIONS_NAME_RE)
    if section is None:
        nits = []
        report(nits, MISSING_SECURITY_CONSIDERATIONS_SECTION, mode, "The security considerations section is missing.",
            ref=ref('security-considerations'))
        return nits
    return check_xml_section(doc, mode, section, 'security considerations',
        INVALID_SECURITY_CONSIDERATIONS_SECTION, INVALID_SECURITY_CONSIDERATIONS_SECTION_CHILD, 'security-considerations')

async def validate_author_section(doc, mode=modes.NORMAL, **kwargs):
    """There must be at least one author, and normally no more than five.
    In xml, each author needs a full name and an organization, and the
    only role allowed is 'editor'."""
    nits = []
    if doc.type == 'txt':
        nits = check_txt_section(doc, mode, patterns.AUTHOR_ADDRESS, "author's address",
            MISSING_AUTHOR_SECTION, EMPTY_AUTHOR_SECTION, 'authors-addresses')
        authors = doc.data.header.authors
        if len(authors) > settings.MAX_AUTHORS:
            report(nits, TOO_MANY_AUTHORS, mode,
                "The document lists %s authors on the front page; there should be no more than %s." % (len(authors), settings.MAX_AUTHORS),
                ref=ref('authors-addresses'))
        return nits

    authors = doc.root.findall('front/author')
    if not authors:
        report(nits, MISSING_AUTHOR_SECTION, mode, "The document has no <author> elements.", ref=ref('authors-addresses'))
        return nits
    if len(authors) > settings.MAX_AUTHORS:
        report(nits, TOO_MANY_AUTHORS, mode,
            "The document lists %s authors; there should be no more than %s." % (len(authors), settings.MAX_AUTHORS),
            ref=ref('authors-addresses'))
    for author in authors:
        name = author.get('fullname') or ' '.join([ n for n in [author.get('initials'), author.get('surname')] if n ]) or 'An author'
        org = author.findtext('organization')
        if not (org and org.strip()):
            report(nits, EMPTY_AUTHOR_ORGANIZATION, mode, "%s has no organization." % name,
                ref=settings.RFCXML_VOCABULARY_URL + '#organization', lines=pos(author))
        if not author.get('fullname'):
            if any( author.get(a) for a in ['asciiFullname', 'asciiInitials', 'asciiSurname'] ):
                report(nits, MISSING_AUTHOR_FULLNAME_WITH_ASCII, mode,
                    "%s has ascii name attributes, but no fullname attribute." % name,
                    ref=settings.RFCXML_VOCABULARY_URL + '#fullname', lines=pos(author))
            elif author.get('initials') or author.get('surname'):
                report(nits, MISSING_AUTHOR_FULLNAME, mode, "%s has no fullname attribute." % name,
                    ref=settings.RFCXML_VOCABULARY_URL + '#fullname', lines=pos(author))
        role = author.get('role')
        if not role in AUTHOR_ROLES:
            report(nits, INVALID_AUTHOR_ROLE, mode,
                "%s has an invalid role: '%s'. The only allowed value is 'editor'." % (name, role),
                ref=settings.RFCXML_VOCABULARY_URL + '#role', lines=pos(author))
    return nits

async def validate_references_section(doc, mode=modes.NORMAL, **kwargs):
    "References sections, if present, need a recognized title"
    nits = []
    if doc.type == 'txt':
        marker = doc.data.markers.get(patterns.REFERENCES)
        if marker is not None and marker.found and not doc.data.content.get(patterns.REFERENCES):
            report(nits, EMPTY_REFERENCES_SECTION, mode, "The references section is empty.",
                ref=ref('references'), lines=[ Pos(marker.start, None) ])
        return nits
    for section in doc.root.findall('back//references'):
        title = section_name(section)
        if not (title and title.strip()):
            report(nits, MISSING_REFERENCES_TITLE, mode, "A references section has no title.",
                ref=ref('references'), lines=pos(section))
        elif not title.strip() in REFERENCES_TITLES:
            report(nits, INVALID_REFERENCES_TITLE, mode,
                "Invalid references section title '%s'. Expected one of: %s." % (title.strip(), ', '.join(REFERENCES_TITLES)),
                ref=ref('references'), lines=pos(section))
    return nits

async def validate_iana_considerations_section(doc, mode=modes.NORMAL, **kwargs):
    """Drafts must have an IANA considerations section.  For a published
    RFC the section may have been removed, so that is only a comment."""
    missing = MISSING_IANA_CONSIDERATIONS_SECTION_RFC if doc.doc_kind == 'rfc' else MISSING_IANA_CONSIDERATIONS_SECTION
    if doc.type == 'txt':
        return check_txt_section(doc, mode, patterns.IANA_CONSIDERATIONS, 'IANA considerations',
            missing, EMPTY_IANA_CONSIDERATIONS_SECTION, 'iana-considerations')
    section = find_section(doc.root, IANA_CONSIDERATIONS_NAME_RE)
    if section is None:
        nits = []
        report(nits, missing, mode, "The IANA considerations section is missing.", ref=ref('iana-considerations'))
        return nits
    return check_xml_section(doc, mode, section, 'IANA considerations',
        INVALID_IANA_CONSIDERATIONS_SECTION, INVALID_IANA_CONSIDERATIONS_SECTION_CHILD, 'iana-considerations')
