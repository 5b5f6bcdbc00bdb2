# Copyright The IETF Trust 2024, All Rights Reserved
# -*- coding: utf-8 -*-

import asyncio
import datetime

from idnits import modes, patterns, settings
from idnits.document import month_number
from idnits.nits import WARN, NONE, Pos, report, rule
from idnits.utils import normalize_text

MISSING_DOC_DATE          = rule('MISSING_DOC_DATE',          WARN, WARN, WARN)
DOC_DATE_IN_PAST          = rule('DOC_DATE_IN_PAST',          WARN, WARN, WARN)
DOC_DATE_IN_FUTURE        = rule('DOC_DATE_IN_FUTURE',        WARN, WARN, WARN)
MISSING_DOC_CATEGORY      = rule('MISSING_DOC_CATEGORY',      WARN, WARN, WARN)
INVALID_DOC_CATEGORY      = rule('INVALID_DOC_CATEGORY',      WARN, WARN, WARN)
OBSOLETES_NOT_IN_ABSTRACT = rule('OBSOLETES_NOT_IN_ABSTRACT', WARN, WARN, NONE)
OBSOLETES_NOT_IN_RFC      = rule('OBSOLETES_NOT_IN_RFC',      WARN, WARN, NONE)
UPDATES_NOT_IN_ABSTRACT   = rule('UPDATES_NOT_IN_ABSTRACT',   WARN, WARN, NONE)
UPDATES_NOT_IN_RFC        = rule('UPDATES_NOT_IN_RFC',        WARN, WARN, NONE)
OBSOLETES_RFC_NOT_FOUND   = rule('OBSOLETES_RFC_NOT_FOUND',   WARN, WARN, NONE)
OBSOLETES_OBSOLETED_RFC   = rule('OBSOLETES_OBSOLETED_RFC',   WARN, WARN, NONE)
UPDATES_RFC_NOT_FOUND     = rule('UPDATES_RFC_NOT_FOUND',     WARN, WARN, NONE)
UPDATES_OBSOLETED_RFC     = rule('UPDATES_OBSOLETED_RFC',     WARN, WARN, NONE)
UPDATES_UPDATED_RFC       = rule('UPDATES_UPDATED_RFC',       WARN, WARN, NONE)
COPYRIGHT_YEAR_MISMATCH   = rule('COPYRIGHT_YEAR_MISMATCH',   WARN, WARN, WARN)

DATE_REF = settings.RFCXML_VOCABULARY_URL + '#date'
CATEGORY_REF = settings.RFCXML_VOCABULARY_URL + '#category'
ABSTRACT_REF = settings.REQUIRED_CONTENT_URL + '#abstract'

def complete_date(year, month, day, today):
    """Fill in a missing month or day the way xml2rfc does: from today's
    date if consistent with the given parts, else with the middle of the
    month.  Returns None for an invalid date."""
    year = year or today.year
    if not month:
        month = today.month if year == today.year else 1
    if not day:
        day = today.day if (year, month) == (today.year, today.month) else 15
    try:
        return datetime.date(year, month, day)
    except ValueError:
        return None

def difference(a, b):
    "Items of a not in b, in order and without duplicates"
    result = []
    for i in a:
        if not i in b and not i in result:
            result.append(i)
    return result

# ----------------------------------------------------------------------

async def validate_date(doc, mode=modes.NORMAL, today=None, **kwargs):
    """The document date should be within a few days of today"""
    nits = []
    today = today or datetime.date.today()
    lines = None
    if doc.type == 'txt':
        docdate = doc.data.header.date
        if docdate is None or month_number(docdate.month) is None:
            report(nits, MISSING_DOC_DATE, mode, 'The document date could not be determined.', ref=DATE_REF)
            return nits
        date = complete_date(docdate.year, month_number(docdate.month), docdate.day, today)
    else:
        e = doc.root.find('front/date')
        if e is None:
            report(nits, MISSING_DOC_DATE, mode, 'The document date could not be determined.', ref=DATE_REF)
            return nits
        lines = [ Pos(e.sourceline, None) ]
        year, month, day = e.get('year'), e.get('month'), e.get('day')
        try:
            date = complete_date(int(year) if year else None, month_number(month) if month else None,
                                 int(day) if day else None, today)
        except ValueError:
            date = None
        if date is None:
            report(nits, MISSING_DOC_DATE, mode, 'The document date could not be determined.', ref=DATE_REF, lines=lines)
            return nits

    days = (date - today).days
    if days < -settings.DATE_TOLERANCE_DAYS:
        report(nits, DOC_DATE_IN_PAST, mode,
            "The document date is %s days in the past. Is this intentional?" % -days, ref=DATE_REF, lines=lines)
    elif days > settings.DATE_TOLERANCE_DAYS:
        report(nits, DOC_DATE_IN_FUTURE, mode,
            "The document date is %s days in the future. Is this intentional?" % days, ref=DATE_REF, lines=lines)
    return nits

async def validate_category(doc, mode=modes.NORMAL, **kwargs):
    """RFCs must carry a category; drafts are exempt, since they state an
    intended status instead."""
    nits = []
    if doc.type == 'txt':
        if doc.doc_kind != 'rfc':
            return nits
        category = doc.data.header.category
        if not category:
            report(nits, MISSING_DOC_CATEGORY, mode, 'The document category is missing from the first page header.',
                ref=settings.REQUIRED_CONTENT_URL + '#first-page-header')
        elif patterns.get_status_weight(category) is None:
            report(nits, INVALID_DOC_CATEGORY, mode,
                'The document category has an invalid value: "%s".' % category,
                ref=settings.REQUIRED_CONTENT_URL + '#first-page-header')
        return nits

    category = doc.root.get('category')
    docname = doc.root.get('docName') or ''
    if not docname.startswith('draft-') and not category:
        report(nits, MISSING_DOC_CATEGORY, mode, 'The document category attribute is missing on the <rfc> element.',
            ref=CATEGORY_REF, lines=[ Pos(doc.root.sourceline, None) ])
    elif category and not category in patterns.CATEGORIES:
        report(nits, INVALID_DOC_CATEGORY, mode,
            'The document category has an invalid value. Allowed values are std, bcp, info, exp and historic.',
            ref=CATEGORY_REF, lines=[ Pos(doc.root.sourceline, None) ])
    return nits

async def validate_obsolete_update_ref(doc, mode=modes.NORMAL, remote=None, offline=False, **kwargs):
    """The RFCs listed in the obsoletes and updates attributes should be
    the ones the abstract says are obsoleted or updated, and should not
    already be obsolete."""
    nits = []
    if mode == modes.SUBMISSION or doc.type == 'txt':
        return nits

    obsoletes = patterns.NUMBER_RE.findall(doc.root.get('obsoletes', ''))
    updates = patterns.NUMBER_RE.findall(doc.root.get('updates', ''))
    abstract = doc.root.find('front/abstract')
    text = normalize_text(' '.join(abstract.itertext())) if abstract is not None else ''
    obsoletes_abs = patterns.extract_rfc_numbers(text, patterns.ABSTRACT_OBSOLETES_RE)
    updates_abs = patterns.extract_rfc_numbers(text, patterns.ABSTRACT_UPDATES_RE)

    for num in difference(obsoletes, obsoletes_abs):
        report(nits, OBSOLETES_NOT_IN_ABSTRACT, mode,
            "The document states that it obsoletes RFC %s but doesn't explicitly mention it in the <abstract> section." % num,
            ref=ABSTRACT_REF)
    for num in difference(obsoletes_abs, obsoletes):
        report(nits, OBSOLETES_NOT_IN_RFC, mode,
            "The document abstract states that it obsoletes RFC %s but it's not mentioned in the obsoletes <rfc> attribute." % num,
            ref=ABSTRACT_REF)
    for num in difference(updates, updates_abs):
        report(nits, UPDATES_NOT_IN_ABSTRACT, mode,
            "The document states that it updates RFC %s but doesn't explicitly mention it in the <abstract> section." % num,
            ref=ABSTRACT_REF)
    for num in difference(updates_abs, updates):
        report(nits, UPDATES_NOT_IN_RFC, mode,
            "The document abstract states that it updates RFC %s but it's not mentioned in the updates <rfc> attribute." % num,
            ref=ABSTRACT_REF)

    if offline or remote is None or remote.offline:
        return nits

    obsoletes_info = await asyncio.gather(*[ remote.rfc_info(n) for n in obsoletes ])
    updates_info = await asyncio.gather(*[ remote.rfc_info(n) for n in updates ])
    obsoletes_ref = settings.RFCXML_VOCABULARY_URL + '#obsoletes'
    updates_ref = settings.RFCXML_VOCABULARY_URL + '#updates'
    for num, info in zip(obsoletes, obsoletes_info):
        if not info:
            report(nits, OBSOLETES_RFC_NOT_FOUND, mode,
                "The <rfc> element states that it obsoletes RFC %s but no matching RFC could be found on rfc-editor.org." % num,
                ref=obsoletes_ref)
        elif info['obsoleted_by']:
            report(nits, OBSOLETES_OBSOLETED_RFC, mode,
                "The <rfc> element states that it obsoletes RFC %s but it's already obsoleted by %s." % (num, ', '.join(info['obsoleted_by'])),
                ref=obsoletes_ref)
    for num, info in zip(updates, updates_info):
        if not info:
            report(nits, UPDATES_RFC_NOT_FOUND, mode,
                "The <rfc> element states that it updates RFC %s but no matching RFC could be found on rfc-editor.org." % num,
                ref=updates_ref)
        elif info['obsoleted_by']:
            report(nits, UPDATES_OBSOLETED_RFC, mode,
                "The <rfc> element states that it updates RFC %s but it's already obsoleted by %s." % (num, ', '.join(info['obsoleted_by'])),
                ref=updates_ref)
        elif info['updated_by']:
            report(nits, UPDATES_UPDATED_RFC, mode,
                "The <rfc> element states that it updates RFC %s but it's already updated by %s." % (num, ', '.join(info['updated_by'])),
                ref=updates_ref)
    return nits

async def validate_copyright_year(doc, mode=modes.NORMAL, year=None, today=None, **kwargs):
    "The copyright notice should carry the year of publication"
    nits = []
    if doc.type == 'txt':
        expected = year or (today or datetime.date.today()).year
        found = [ y for y in doc.data.copyright_years if y != int(expected) ]
        if found:
            report(nits, COPYRIGHT_YEAR_MISMATCH, mode,
                "The copyright year %s does not match the expected year %s." % (found[0], expected),
                ref=settings.TRUST_LICENSE_INFO_URL)
        return nits

    if not year:
        return nits
    e = doc.root.find('front/date')
    if e is not None and e.get('year') and e.get('year').strip() != str(year):
        report(nits, COPYRIGHT_YEAR_MISMATCH, mode,
            "The document date year %s does not match the expected copyright year %s." % (e.get('year').strip(), year),
            ref=DATE_REF, lines=[ Pos(e.sourceline, None) ])
    return nits
