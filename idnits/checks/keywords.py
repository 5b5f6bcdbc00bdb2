# Copyright The IETF Trust 2024, All Rights Reserved
# -*- coding: utf-8 -*-
"""Use of the RFC 2119 / RFC 8174 requirement level keywords, and of the
boilerplate which gives them their meaning."""

from idnits import modes, patterns, settings
from idnits.nits import ERR, WARN, COMM, NONE, Pos, plural, report, rule
from idnits.utils import normalize_text
from idnits.xmlparser import XI, running_text

REQLEVEL_INFO_MISSING        = rule('REQLEVEL_INFO_MISSING',        ERR,  WARN, NONE)
MISSING_REQLEVEL_BOILERPLATE = rule('MISSING_REQLEVEL_BOILERPLATE', WARN, WARN, NONE)
UNUSED_REQLEVEL_BOILERPLATE  = rule('UNUSED_REQLEVEL_BOILERPLATE',  WARN, WARN, NONE)
BAD_KEYWORD_COMBINATION      = rule('BAD_KEYWORD_COMBINATION',      COMM, COMM, NONE)
SIMILAR_REQLEVEL_BOILERPLATE = rule('SIMILAR_REQLEVEL_BOILERPLATE', ERR,  ERR,  NONE)
KEYWORD_NOT_IN_BOILERPLATE   = rule('KEYWORD_NOT_IN_BOILERPLATE',   WARN, WARN, NONE)

BCP14_REF = settings.REQUIRED_CONTENT_URL + '#requirements-language'

def used_keywords(text):
    "Keywords used in text, outside of the boilerplate itself"
    for regex in patterns.boilerplate_patterns.values():
        text = regex.sub(' ', text)
    return [ m.group(0) for m in patterns.KEYWORDS_RE.finditer(text) ]

def xml_cites_2119(root, text):
    for e in root.iter('xref'):
        if e.get('target', '').upper().replace(' ', '') == 'RFC2119':
            return True
    for e in root.iter('reference'):
        if (e.get('anchor') or '').upper().replace(' ', '') == 'RFC2119':
            return True
    for e in root.iter(XI + 'include'):
        if 'reference.RFC.2119.xml' in e.get('href', ''):
            return True
    return bool(patterns.RFC2119_CITATION_RE.search(text))

# ----------------------------------------------------------------------

async def validate_keywords(doc, mode=modes.NORMAL, **kwargs):
    """Requirement level keywords need the boilerplate (and a reference to
    RFC 2119), and the boilerplate should only be there if they're used."""
    nits = []
    if doc.type == 'txt':
        text = normalize_text(doc.body)
        has_boilerplate = doc.data.boilerplate.rfc2119 or doc.data.boilerplate.rfc8174
        similar = doc.data.boilerplate.similar_boilerplate
        cites_2119 = doc.data.references.rfc2119
        listed = doc.data.extracted.boilerplate_2119_keywords
        combos = [ Pos(k.line, k.col) for k in doc.data.possible_issues.misspelled_keywords ]
        combo_words = [ k.keyword for k in doc.data.possible_issues.misspelled_keywords ]
    else:
        text = running_text(doc.root)
        bp = patterns.boilerplate_patterns
        has_boilerplate = any( r.search(text) for r in bp.values() )
        similar = patterns.has_boilerplate_match(text, *patterns.boilerplate_parts.values())
        cites_2119 = xml_cites_2119(doc.root, text)
        listed = patterns.boilerplate_keywords(text)
        combo_words = [ m.group(0) for m in patterns.INVALID_COMBINATIONS_RE.finditer(text) ]
        combos = None

    used = used_keywords(text)

    if used and not has_boilerplate:
        if not cites_2119:
            report(nits, REQLEVEL_INFO_MISSING, mode,
                "The document uses RFC 2119 keywords, but has neither the RFC 2119 boilerplate nor a reference to RFC 2119.",
                ref=BCP14_REF)
        else:
            report(nits, MISSING_REQLEVEL_BOILERPLATE, mode,
                "The document uses RFC 2119 keywords and references RFC 2119, but has no RFC 2119 boilerplate.",
                ref=BCP14_REF)
    if has_boilerplate and not used:
        report(nits, UNUSED_REQLEVEL_BOILERPLATE, mode,
            "The document has RFC 2119 boilerplate, but doesn't use any RFC 2119 keywords.",
            ref=BCP14_REF)
    if similar and not has_boilerplate:
        report(nits, SIMILAR_REQLEVEL_BOILERPLATE, mode,
            "The document contains text similar to the RFC 2119 boilerplate, but it doesn't match the boilerplate.",
            ref=BCP14_REF)
    if combo_words:
        report(nits, BAD_KEYWORD_COMBINATION, mode,
            "Found %s badly formed combination%s of RFC 2119 keywords: %s." % (plural(combo_words) + (', '.join(sorted(set(combo_words))), )),
            ref=BCP14_REF, lines=combos)
    if has_boilerplate:
        extra = []
        for kw in used:
            if not kw in listed and not kw in extra and not patterns.INVALID_COMBINATIONS_RE.fullmatch(kw):
                extra.append(kw)
        if extra:
            report(nits, KEYWORD_NOT_IN_BOILERPLATE, mode,
                "The document uses %s, which %s not listed in the RFC 2119 boilerplate." % (', '.join('"%s"' % k for k in extra), 'is' if len(extra) == 1 else 'are'),
                ref=BCP14_REF)
    return nits
