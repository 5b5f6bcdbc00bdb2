# Copyright The IETF Trust 2024, All Rights Reserved
# -*- coding: utf-8 -*-
"""Regular expressions and lookup tables shared by the text parser and the
checks: header and section headings, reference forms, RFC 2119 keywords and
boilerplate, license text, addresses, and the RFC status hierarchy."""

import re

from collections import namedtuple

# ----------------------------------------------------------------------
# Text layout

# Left and right column of a first-page header line
LINE_VALUES_EXTRACT_RE = re.compile(r'^(?P<left>.*?)\s{2,}(?P<right>\S.*)$')
# Initials and surname, such as 'J. Doe', 'J.R. Doe', 'J. Doe, Ed.'
AUTHOR_NAME_RE = re.compile(r"^(?:[A-Z]\.[ -]?){1,3}\s?[A-Z][A-Za-z'-]+(?:\s[A-Z][A-Za-z'-]+)?(?:,? Ed\.)?$", re.I)
DATE_RE = re.compile(r'^(?:(?P<day>[0-9]{1,2})\s)?(?P<month>[a-z]{3,})\.?\s(?:(?P<mday>[0-9]{1,2}),\s)?(?P<year>[0-9]{4})$', re.I)

SECTION_RE = re.compile(r'^\d+\.\s+.+$')
SUBSECTION_RE = re.compile(r'^\d+\.\d+\.\s+(.+)$')
TOC_RE = re.compile(r'\.+\s*\d+$')
PAGE_HEADER_RE = re.compile(r'^(Internet.Draft|INTERNET.DRAFT)')
SPACING_RE = re.compile(r'[A-Za-z][a-z] {2} ? ?[a-z]')
HYPHENATED_LINE_RE = re.compile(r'[a-z]{2,}-$')
# Numbered subsection heading, such as "3.1.  Overview"
HEADING_NUMBER_RE = re.compile(r'^\d+(\.\d+)+\.?\s+\S')

# ----------------------------------------------------------------------
# Section headings

AUTHORS_OR_EDITORS_ADDRESSES_RE = r'''(Authors?|Editors?)[‘’‛'`"]s? Address(es)?'''
AUTHOR_INFORMATION_RE = r'[0-9a-z.]*\s*authors? information'
AUTHOR_CONTACT_INFORMATION_RE = r'''[0-9a-z.]*\s*(author|editor)(?:[‘’‛'`"]s?|s)?\s+contact information'''
CONTACT_INFORMATION_RE = r'[0-9a-z.]*\s*contact information'
AUTHOR_EDITORS_RE = r'[0-9a-z.]*\s*(author|editor)s?:?'

AUTHOR_SECTION_RE = re.compile(r'^(%s)$' % '|'.join([
        r'(\d+\.\s+)?' + AUTHORS_OR_EDITORS_ADDRESSES_RE,
        AUTHOR_INFORMATION_RE,
        AUTHOR_CONTACT_INFORMATION_RE,
        CONTACT_INFORMATION_RE,
        AUTHOR_EDITORS_RE,
    ]), re.I)

ABSTRACT = 'abstract'
INTRODUCTION = 'introduction'
SECURITY_CONSIDERATIONS = 'security_considerations'
AUTHOR_ADDRESS = 'author_address'
REFERENCES = 'references'
IANA_CONSIDERATIONS = 'iana_considerations'

SECTIONS = [ ABSTRACT, INTRODUCTION, SECURITY_CONSIDERATIONS, AUTHOR_ADDRESS, REFERENCES, IANA_CONSIDERATIONS, ]

SectionMatcher = namedtuple('SectionMatcher', ['name', 'regex'])

section_matchers = [
    SectionMatcher(INTRODUCTION,            re.compile(r'^\d+\.\s+(Introduction|Overview|Background)$', re.I)),
    SectionMatcher(SECURITY_CONSIDERATIONS, re.compile(r'^\d+\.\s+Security Considerations$', re.I)),
    SectionMatcher(AUTHOR_ADDRESS,          AUTHOR_SECTION_RE),
    SectionMatcher(REFERENCES,              re.compile(r'^\d+\.\s+((Normative|Informative)\s+)?References$', re.I)),
    SectionMatcher(IANA_CONSIDERATIONS,     re.compile(r'^\d+\.\s+IANA Considerations$', re.I)),
]

NORMATIVE_REFERENCES = 'normative_references'
INFORMATIVE_REFERENCES = 'informative_references'
UNCLASSIFIED_REFERENCES = 'unclassified_references'

subsection_matchers = [
    SectionMatcher(NORMATIVE_REFERENCES,    re.compile(r'^\d+\.(\d+\.)?\s+Normative\s+References$', re.I)),
    SectionMatcher(INFORMATIVE_REFERENCES,  re.compile(r'^\d+\.(\d+\.)?\s+Informative\s+References$', re.I)),
    SectionMatcher(UNCLASSIFIED_REFERENCES, re.compile(r'^\d+\.\d+\.\s+([a-zA-Z]+\s+)*References?$', re.I)),
]

def match_section(line):
    for m in section_matchers:
        if m.regex.search(line):
            return m.name
    return None

def match_subsection(line):
    for m in subsection_matchers:
        if m.regex.search(line):
            return m.name
    return None

# ----------------------------------------------------------------------
# References

RFC_REFERENCE_RE = re.compile(r'\bRFC\s?(\d+)\b|\[RFC(\d+)\]', re.I)
NON_RFC_REFERENCE_RE = re.compile(r'\[(?!RFC\d+)[a-zA-Z0-9-.]+\]', re.I)
DRAFT_VERSION_RE = re.compile(r'-\d{2}$')

# 'Obsoletes: RFC 1234, 5678' lines, applied to the whitespace-normalized text
OBSOLETES_RE = re.compile(r'(?:obsoletes|replaces)\s*:\s*((?:rfc\s*[0-9]+(?:,|\s|and)*\s*)+)', re.I)
UPDATES_RE = re.compile(r'updates\s*:\s*((?:rfc\s*[0-9]+(?:,|\s|and)*\s*)+)', re.I)

# 'This document obsoletes RFC 1234 and 5678' in running text
ABSTRACT_OBSOLETES_RE = re.compile(r'(?:obsoletes|replaces) ((?:\[?rfcs? ?)?[0-9]+\]?(?:, | and )?)+', re.I)
ABSTRACT_UPDATES_RE = re.compile(r'updates ((?:\[?rfcs? ?)?[0-9]+\]?(?:, | and )?)+', re.I)
NUMBER_RE = re.compile(r'\b[0-9]+\b')

def extract_rfc_numbers(text, regex):
    numbers = []
    for match in regex.finditer(text):
        numbers += NUMBER_RE.findall(match.group(0))
    return numbers

# Text that looks like a citation, in xml text which should use <xref>
CITATION_RE = re.compile(r"\[(([0-9A-Z]|I-?D.)[0-9A-Za-z-]*( [0-9A-Z-]+)?|(IEEE|ieee)[A-Za-z0-9.-]+|(ITU ?|ITU-T ?|G\.)[A-Za-z0-9.-]+)\]")

# ----------------------------------------------------------------------
# RFC 2119 keywords and boilerplate

KEYWORDS_RE = re.compile(r'\b((NOT)\s)?(MUST|REQUIRED|SHALL|SHOULD|RECOMMENDED|OPTIONAL|MAY)(\s(NOT))?\b')
INVALID_COMBINATIONS_RE = re.compile(r'(MUST not|SHALL not|SHOULD not|not RECOMMENDED|MAY NOT|NOT REQUIRED|NOT OPTIONAL)')
RFC2119_CITATION_RE = re.compile(r'\[RFC ?2119\]|\bRFC ?2119\b', re.I)
RFC8174_CITATION_RE = re.compile(r'\[RFC ?8174\]|\bRFC ?8174\b', re.I)

_keyword_list = r'The key words "MUST", "MUST NOT", "REQUIRED", "SHALL", "SHALL NOT", "SHOULD", "SHOULD NOT", "RECOMMENDED", '

boilerplate_patterns = {
    'rfc2119': re.compile(_keyword_list + r'?("NOT RECOMMENDED", )?"MAY", and "OPTIONAL" in this document are to be interpreted as described in( BCP 14,)? RFC ?2119[.,;]', re.I),
    'rfc2119_alt': re.compile(_keyword_list + r'?("NOT RECOMMENDED", )?"MAY", and "OPTIONAL" in this document are to be interpreted as described in "Key words for use in RFCs to Indicate Requirement Levels" \[RFC2119\]', re.I),
    'rfc8174': re.compile(_keyword_list + r'"NOT RECOMMENDED", "MAY", and "OPTIONAL" in this document are to be interpreted as described in BCP ?14 \[RFC2119\] \[RFC8174\]', re.I),
}

_common_parts = [
    r'The key words ',
    r'"MUST", "MUST NOT", "REQUIRED", "SHALL"',
    r'"SHALL NOT", "SHOULD", "SHOULD NOT", "RECOMMENDED"',
    r'"NOT RECOMMENDED", "MAY", and "OPTIONAL"',
]

boilerplate_parts = {
    'rfc2119': [ re.compile(p) for p in _common_parts + [
        r'in this document are to be interpreted as described in',
    ] ] + [ re.compile(r'RFC ?2119[.,;]?', re.I) ],
    'rfc2119_alt': [ re.compile(p) for p in _common_parts + [
        r'in this document are to be interpreted as described in',
    ] ] + [ re.compile(r'"Key words for use in RFCs to Indicate Requirement Levels" \[RFC2119\]', re.I) ],
    'rfc8174': [ re.compile(p) for p in _common_parts + [
        r'in this document are to be interpreted as described in BCP 14',
    ] ] + [ re.compile(r'\[RFC2119\] \[RFC8174\]', re.I) ],
}

def boilerplate_keywords(text):
    "The distinct keywords listed in any boilerplate found in text"
    keywords = []
    for regex in boilerplate_patterns.values():
        match = regex.search(text)
        if match:
            for kw in KEYWORDS_RE.finditer(match.group(0)):
                if not kw.group(0) in keywords:
                    keywords.append(kw.group(0))
    return keywords

def has_boilerplate_match(text, *groups):
    """True if, for any of the given groups of boilerplate parts, the leading
    part (and possibly more of the following ones) occurs in the text."""
    for parts in groups:
        count = 0
        for part in parts:
            if part.search(text):
                count += 1
            else:
                break
        if count > 0:
            return True
    return False

# ----------------------------------------------------------------------
# License and code blocks

REVISED_BSD_LICENSE_RE = re.compile(r'Code Components extracted from this document must include Revised BSD License text as described in Section 4\.e of the Trust Legal Provisions and are provided without warranty as described in the Revised BSD License\.')
CODE_BEGINS_RE = re.compile(r'<CODE BEGINS>', re.I)
CODE_ENDS_RE = re.compile(r'<CODE ENDS>', re.I)
INLINE_CODE_RE = re.compile(r'/\*|\*/|^ *#')
COPYRIGHT_RE = re.compile(r'Copyright \(c\) (?P<year>\d{4}) IETF Trust')

# ----------------------------------------------------------------------
# Addresses

IPV4_RE = re.compile(r'\b[0-9]+\.[0-9]+\.[0-9]+\.[0-9]+\b')
IPV6_LOOSE_RE = re.compile(r'(?<![\w:.])(?:[0-9a-f]{0,4}:){2,7}(?:[0-9]+\.[0-9]+\.[0-9]+\.[0-9]+|[0-9a-f]{0,4})(?![\w:])', re.I)
FQDN_RE = re.compile(r'(?<![\w.-])(?P<domain>(?:[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?\.)+(?:[a-z]{2,63}|xn--[a-z0-9-]{1,59}))(?![\w@-]|\.[\w-])', re.I)

# Second-level names which are file names rather than domains
FILE_EXTENSIONS = set([
    'txt', 'xml', 'html', 'htm', 'pdf', 'json', 'yang', 'xsd', 'dtd', 'rnc', 'py', 'js', 'md', 'png', 'svg', 'jpg', 'gif', 'css', 'csv', 'zip', 'gz', 'tgz', 'tar', 'sh', 'abnf', 'asn', 'mib', 'cbor', 'cddl', 'exe', 'c', 'h',
])

# Example and reserved names per RFC 2606 and RFC 6761, and the names of
# the organizations which publish the documents themselves
EXAMPLE_DOMAINS = [ 'example.com', 'example.net', 'example.org', ]
RESERVED_TLDS = [ 'example', 'test', 'invalid', 'localhost', 'local', 'arpa', ]
ALLOWED_DOMAINS = [ 'ietf.org', 'rfc-editor.org', 'iana.org', 'irtf.org', 'iab.org', 'ietf.info', 'w3.org', 'ieee.org', 'iso.org', 'itu.int', 'doi.org', 'github.com', ]

# ----------------------------------------------------------------------
# Document status

Status = namedtuple('Status', ['name', 'regex', 'weight'])

rfc_status_hierarchy = [
    Status('Internet Standard',     re.compile(r'^internet standard|^standard$', re.I), 5),
    Status('Draft Standard',        re.compile(r'^draft standard', re.I), 4),
    Status('Proposed Standard',     re.compile(r'^proposed standard|^standards? track', re.I), 3),
    Status('Best Current Practice', re.compile(r'^best current practice|^bcp\b', re.I), 3),
    Status('Experimental',          re.compile(r'^experimental', re.I), 2),
    Status('Informational',         re.compile(r'^informational', re.I), 1),
    Status('Historic',              re.compile(r'^historic', re.I), 0),
]

# Values of the <rfc category="..."> attribute
CATEGORIES = [ 'std', 'bcp', 'info', 'exp', 'historic', ]

def extract_status_name(text):
    "Map status text such as 'Standards Track' to the name of the status it implies"
    if text:
        text = text.strip()
        for status in rfc_status_hierarchy:
            if status.regex.search(text):
                return status.name
    return None

def get_status_weight(text):
    "The rank of a status in the hierarchy, or None if not recognized"
    if text:
        text = text.strip()
        for status in rfc_status_hierarchy:
            if status.regex.search(text):
                return status.weight
    return None
