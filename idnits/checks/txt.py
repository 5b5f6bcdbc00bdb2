# Copyright The IETF Trust 2024, All Rights Reserved
# -*- coding: utf-8 -*-
"""Layout checks which only apply to plain-text documents"""

from idnits import modes, patterns, settings
from idnits.nits import ERR, WARN, NONE, Pos, plural, report, rule

LINE_TOO_LONG              = rule('LINE_TOO_LONG',              ERR,  WARN, WARN)
RAGGED_RIGHT               = rule('RAGGED_RIGHT',               ERR,  WARN, NONE)
HYPHENATED_LINE_BREAKS     = rule('HYPHENATED_LINE_BREAKS',     WARN, WARN, NONE)
COMMENT_OUT_OF_CODE_BLOCK  = rule('COMMENT_OUT_OF_CODE_BLOCK',  WARN, WARN, WARN)
CODE_BLOCK_MISSING_LICENSE = rule('CODE_BLOCK_MISSING_LICENSE', WARN, WARN, NONE)
UNCATEGORIZED_REFERENCES   = rule('UNCATEGORIZED_REFERENCES',   ERR,  WARN, NONE)

async def validate_line_length(doc, mode=modes.NORMAL, **kwargs):
    nits = []
    if doc.type != 'txt':
        return nits
    too_long = [ l for l in doc.lines if len(l.txt.rstrip('\f')) > settings.MAX_LINE_LENGTH ]
    if too_long:
        longest = max(too_long, key=lambda l: len(l.txt))
        report(nits, LINE_TOO_LONG, mode,
            "Found %s line%s longer than %s characters; the longest is line %s, with %s characters."
                % (plural(too_long) + (settings.MAX_LINE_LENGTH, longest.num, len(longest.txt))),
            ref=settings.REQUIRED_CONTENT_URL,
            lines=[ Pos(l.num, settings.MAX_LINE_LENGTH + 1) for l in too_long ])
    return nits

async def validate_line_extra_spacing(doc, mode=modes.NORMAL, **kwargs):
    "Too many lines with extra spacing between words indicates a justified right margin"
    nits = []
    if doc.type != 'txt':
        return nits
    lines = doc.data.possible_issues.lines_with_spaces
    if len(lines) > settings.MAX_RAGGED_LINES:
        report(nits, RAGGED_RIGHT, mode,
            "The document seems to contain %s line%s with intra-line extra spacing; the text should be ragged-right, not justified." % plural(lines),
            ref=settings.REQUIRED_CONTENT_URL, lines=lines)
    return nits

async def validate_hyphenated_line_breaks(doc, mode=modes.NORMAL, **kwargs):
    nits = []
    if doc.type != 'txt':
        return nits
    lines = doc.data.possible_issues.hyphenated_lines
    if lines:
        report(nits, HYPHENATED_LINE_BREAKS, mode,
            "Found %s line%s ending with a hyphenated word break; words should not be hyphenated across lines." % plural(lines),
            lines=lines)
    return nits

async def validate_code_comments(doc, mode=modes.NORMAL, **kwargs):
    nits = []
    if doc.type != 'txt':
        return nits
    lines = doc.data.possible_issues.inline_code
    if lines:
        report(nits, COMMENT_OUT_OF_CODE_BLOCK, mode,
            "Found something which looks like a code comment -- if you have code sections in the document, "
            "please surround them with '<CODE BEGINS>' and '<CODE ENDS>' lines.",
            ref=settings.DOC_PAGE_URL.format(name='rfc8879'), lines=lines)
    return nits

async def validate_code_block_licenses(doc, mode=modes.NORMAL, **kwargs):
    nits = []
    if doc.type != 'txt':
        return nits
    contains = doc.data.contains
    if contains.code_blocks and not contains.revised_bsd_license:
        report(nits, CODE_BLOCK_MISSING_LICENSE, mode,
            "A code-block is detected, but the document does not contain a license declaration.",
            ref=settings.TRUST_LICENSE_INFO_URL)
    return nits

async def validate_reference_categories(doc, mode=modes.NORMAL, **kwargs):
    """References should be split into Normative and Informative subsections"""
    nits = []
    if doc.type != 'txt':
        return nits
    extracted = doc.data.extracted
    categorized = [ patterns.NORMATIVE_REFERENCES, patterns.INFORMATIVE_REFERENCES, ]
    refs = [ r for r in extracted.reference_section_rfc + extracted.reference_section_draft_references
                if not r.subsection in categorized ]
    if refs:
        marker = doc.data.markers.get(patterns.REFERENCES)
        report(nits, UNCATEGORIZED_REFERENCES, mode,
            "Found %s reference%s which are not in a Normative or Informative References section." % plural(refs),
            ref=settings.REQUIRED_CONTENT_URL + '#references',
            lines=[ Pos(marker.start, None) ] if marker and marker.found else None)
    return nits
