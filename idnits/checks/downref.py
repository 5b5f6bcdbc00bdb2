# Copyright The IETF Trust 2024, All Rights Reserved
# -*- coding: utf-8 -*-
"""Checks of the documents listed in the references sections, against the
downref registry, the RFC Editor's status information and the datatracker's
draft states.  All of them depend on remote data; they are skipped in
submission mode and when running offline."""

import asyncio

from idnits import modes, patterns, settings
from idnits.nits import ERR, WARN, COMM, NONE, report, rule
from idnits.utils import normalize_draft_references
from idnits.xmlparser import REF_TYPE_INFORMATIVE, REF_TYPE_NORMATIVE, REF_TYPE_UNKNOWN, get_refs

DOWNREF_DRAFT                   = rule('DOWNREF_DRAFT',                   ERR,  WARN, NONE)
UNDEFINED_STATUS                = rule('UNDEFINED_STATUS',                COMM, COMM, NONE)
UNKNOWN_STATUS                  = rule('UNKNOWN_STATUS',                  COMM, COMM, NONE)
OBSOLETE_DOCUMENT               = rule('OBSOLETE_DOCUMENT',               ERR,  WARN, NONE)
OBSOLETE_INFORMATIVE_REFERENCE  = rule('OBSOLETE_INFORMATIVE_REFERENCE',  ERR,  WARN, NONE)
OBSOLETE_UNCLASSIFIED_REFERENCE = rule('OBSOLETE_UNCLASSIFIED_REFERENCE', ERR,  WARN, NONE)
UNDEFINED_STATE                 = rule('UNDEFINED_STATE',                 WARN, WARN, NONE)
INVALID_STATE_FOR_DRAFT         = rule('INVALID_STATE_FOR_DRAFT',         WARN, WARN, NONE)

def skip(mode, remote, offline):
    return mode == modes.SUBMISSION or offline or remote is None or remote.offline

def rfc_page(number):
    return settings.RFC_INFO_PAGE_URL.format(number=number)

def doc_page(name):
    return settings.DOC_PAGE_URL.format(name=name)

def referenced_rfcs(doc, subsection, ref_type):
    "RFC numbers (as strings) listed in the given kind of references section"
    if doc.type == 'txt':
        return [ r.value for r in doc.data.extracted.reference_section_rfc
                    if r.subsection == subsection and r.value.isdigit() ]
    return [ label.split()[1] for label, type in get_refs(doc.root).items()
                if type == ref_type and label.startswith('RFC ') ]

def referenced_drafts(doc):
    if doc.type == 'txt':
        return normalize_draft_references([ r.value for r in doc.data.extracted.reference_section_draft_references ])
    return [ label for label in get_refs(doc.root) if label.startswith('draft-') ]

async def fetch_rfc_info(remote, numbers):
    return await asyncio.gather(*[ remote.rfc_info(n) for n in numbers ])

# ----------------------------------------------------------------------

async def validate_downrefs(doc, mode=modes.NORMAL, remote=None, offline=False, **kwargs):
    "References to documents listed in the downref registry"
    nits = []
    if skip(mode, remote, offline):
        return nits
    if doc.type == 'txt':
        labels = [ 'RFC %s' % r.value for r in doc.data.extracted.reference_section_rfc ]
        labels += referenced_drafts(doc)
    else:
        labels = [ l for l in get_refs(doc.root) if l.startswith('RFC ') or l.startswith('draft-') ]
    for match in await remote.downrefs(labels):
        report(nits, DOWNREF_DRAFT, mode, "Draft %s is listed in the Downref Registry." % match,
            ref=doc_page(match.replace(' ', '').lower()))
    return nits

async def validate_normative_references(doc, mode=modes.NORMAL, remote=None, offline=False, **kwargs):
    """Normative references to RFCs must have a known status, and must
    not be obsolete."""
    nits = []
    if skip(mode, remote, offline):
        return nits
    numbers = referenced_rfcs(doc, patterns.NORMATIVE_REFERENCES, REF_TYPE_NORMATIVE)
    for number, info in zip(numbers, await fetch_rfc_info(remote, numbers)):
        if not info or not info['status']:
            report(nits, UNDEFINED_STATUS, mode,
                "RFC %s does not have a defined status or could not be fetched." % number, ref=rfc_page(number))
            continue
        if patterns.get_status_weight(info['status']) is None:
            report(nits, UNKNOWN_STATUS, mode,
                'RFC %s has an unrecognized status: "%s".' % (number, info['status']), ref=rfc_page(number))
        if info['obsoleted_by']:
            report(nits, OBSOLETE_DOCUMENT, mode,
                "The referenced document RFC %s is obsolete and has been replaced by: %s." % (number, ', '.join(info['obsoleted_by'])),
                ref=rfc_page(number))
    return nits

async def validate_informative_references(doc, mode=modes.NORMAL, remote=None, offline=False, **kwargs):
    nits = []
    if skip(mode, remote, offline):
        return nits
    numbers = referenced_rfcs(doc, patterns.INFORMATIVE_REFERENCES, REF_TYPE_INFORMATIVE)
    for number, info in zip(numbers, await fetch_rfc_info(remote, numbers)):
        if not info or not info['status']:
            report(nits, UNDEFINED_STATUS, mode,
                "The informative reference RFC %s does not have a defined status or could not be fetched." % number,
                ref=rfc_page(number))
            continue
        if info['obsoleted_by']:
            report(nits, OBSOLETE_INFORMATIVE_REFERENCE, mode,
                "The informative reference RFC %s is obsolete and has been replaced by: %s." % (number, ', '.join(info['obsoleted_by'])),
                ref=rfc_page(number))
    return nits

async def validate_unclassified_references(doc, mode=modes.NORMAL, remote=None, offline=False, **kwargs):
    nits = []
    if skip(mode, remote, offline):
        return nits
    numbers = referenced_rfcs(doc, patterns.UNCLASSIFIED_REFERENCES, REF_TYPE_UNKNOWN)
    for number, info in zip(numbers, await fetch_rfc_info(remote, numbers)):
        if not info or not info['status']:
            report(nits, UNDEFINED_STATUS, mode,
                "The unclassified reference RFC %s does not have a defined status or could not be fetched." % number,
                ref=rfc_page(number))
            continue
        if info['obsoleted_by']:
            report(nits, OBSOLETE_UNCLASSIFIED_REFERENCE, mode,
                "The unclassified reference RFC %s is obsolete and has been replaced by: %s." % (number, ', '.join(info['obsoleted_by'])),
                ref=rfc_page(number))
    return nits

async def validate_draft_references(doc, mode=modes.NORMAL, remote=None, offline=False, **kwargs):
    "Referenced drafts must exist, and must not have been published as an RFC"
    nits = []
    if skip(mode, remote, offline):
        return nits
    drafts = referenced_drafts(doc)
    infos = await asyncio.gather(*[ remote.draft_info(d) for d in drafts ])
    for draft, info in zip(drafts, infos):
        if not info or not info['state']:
            report(nits, UNDEFINED_STATE, mode,
                "The draft reference %s does not have a defined state or could not be fetched." % draft,
                ref=doc_page(draft))
        elif info['state'].lower() == 'rfc':
            report(nits, INVALID_STATE_FOR_DRAFT, mode,
                "The draft reference %s is already published as an RFC and should not be referenced as a draft." % draft,
                ref=doc_page(draft))
    return nits
