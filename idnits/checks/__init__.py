# Copyright 2018-2024 IETF Trust, All Rights Reserved
# -*- coding: utf-8 indent-with-tabs: 0 -*-

import asyncio

from collections import namedtuple

from idnits import default_options, modes
from idnits.log import log
from idnits.nits import group
from idnits.remote import RemoteLookup

from idnits.checks import addresses, downref, filename, keywords, metadata, sections, txt, xml

# fmt is the document type a check applies to: 'any', 'txt' or 'xml'.  The
# checks themselves also look at doc.type, so this only saves work.
Check = namedtuple('Check', [ 'fmt', 'func', ])

checks = [
    # Structure
    Check('any', sections.validate_abstract_section),
    Check('any', sections.validate_introduction_section),
    Check('any', sections.validate_security_considerations_section),
    Check('any', sections.validate_author_section),
    Check('any', sections.validate_references_section),
    Check('any', sections.validate_iana_considerations_section),
    Check('txt', txt.validate_reference_categories),

    # References
    Check('any', downref.validate_downrefs),
    Check('any', downref.validate_normative_references),
    Check('any', downref.validate_informative_references),
    Check('any', downref.validate_unclassified_references),
    Check('any', downref.validate_draft_references),

    # Metadata
    Check('any', metadata.validate_date),
    Check('any', metadata.validate_category),
    Check('xml', metadata.validate_obsolete_update_ref),
    Check('any', metadata.validate_copyright_year),
    Check('any', filename.validate_filename),
    Check('any', filename.validate_docname),

    # Text content
    Check('any', keywords.validate_keywords),
    Check('any', addresses.validate_fqdn),
    Check('any', addresses.validate_ipv4),
    Check('any', addresses.validate_ipv6),

    # Plain text layout
    Check('txt', txt.validate_line_length),
    Check('txt', txt.validate_line_extra_spacing),
    Check('txt', txt.validate_hyphenated_line_breaks),
    Check('txt', txt.validate_code_comments),
    Check('txt', txt.validate_code_block_licenses),

    # xml2rfc vocabulary
    Check('xml', xml.validate_deprecated_elements),
    Check('xml', xml.validate_ipr),
    Check('xml', xml.validate_workgroup),
    Check('xml', xml.validate_code_markers),
    Check('xml', xml.validate_text_references),
    Check('xml', xml.validate_xrefs),
    Check('xml', xml.validate_external_entities),
]


class Checker(object):
    """Run the registered checks on a parsed document.

    The checks run concurrently, but their nits are collected in the order
    the checks are registered, so the output doesn't depend on which
    remote lookup happens to finish first.
    """

    def __init__(self, doc, options=default_options, remote=None):
        self.doc = doc
        self.options = options
        self.mode = modes.get_mode(getattr(options, 'mode', None))
        self.offline = bool(getattr(options, 'offline', False))
        self.remote = remote
        self.nits = dict(err=[], warn=[], comm=[])

    def get_checks(self):
        return [ c for c in checks if c.fmt in ['any', self.doc.type] ]

    async def run(self):
        if self.remote is None:
            with RemoteLookup(offline=self.offline) as self.remote:
                return await self.run()
        selected = self.get_checks()
        log("Running %s checks in %s mode" % (len(selected), self.mode))
        results = await asyncio.gather(*[ c.func(self.doc, mode=self.mode, remote=self.remote,
                                                 offline=self.offline, year=getattr(self.options, 'year', None))
                                          for c in selected ], return_exceptions=True)
        for r in results:
            if isinstance(r, BaseException):
                raise r
        found = []
        for r in results:
            for nit in r:
                if not nit in found:
                    found.append(nit)
        self.nits = group(found)
        return found

    def check(self):
        return asyncio.run(self.run())
