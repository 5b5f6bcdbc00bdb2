# Copyright The IETF Trust 2024, All Rights Reserved
# -*- coding: utf-8 -*-

from unittest import IsolatedAsyncioTestCase

from idnits import modes, txtparser, xmlparser
from idnits.checks import sections
from idnits.nits import COMM, ERR, WARN
from idnits.test_data import TXT_DRAFT, TXT_FILENAME, XML_DRAFT, XML_FILENAME, txt_draft, xml_draft

ALL_SECTIONS = [
    sections.validate_abstract_section,
    sections.validate_introduction_section,
    sections.validate_security_considerations_section,
    sections.validate_author_section,
    sections.validate_references_section,
    sections.validate_iana_considerations_section,
]

def codes(nits):
    return [ n.code for n in nits ]

AUTHOR = '<author fullname="John Doe" initials="J." surname="Doe"><organization>Example Inc</organization></author>'
ABSTRACT = '<abstract><t>An abstract.</t></abstract>'


class TxtSectionTests(IsolatedAsyncioTestCase):

    async def test_complete_draft(self):
        doc = txtparser.parse(TXT_DRAFT, TXT_FILENAME)
        for validate in ALL_SECTIONS:
            self.assertEqual(await validate(doc), [], validate.__name__)

    async def test_invalid_structure(self):
        doc = txtparser.parse('Just a line of text without any header structure.\n')
        for mode in modes.MODES:
            nits = await sections.validate_abstract_section(doc, mode=mode)
            self.assertEqual(codes(nits), ['INVALID_DOCUMENT_STRUCTURE'])
            self.assertEqual(nits[0].severity, ERR)

    async def test_missing_introduction(self):
        doc = txtparser.parse(txt_draft('Abstract\n\n   A short abstract.\n'))
        nits = await sections.validate_introduction_section(doc, mode=modes.NORMAL)
        self.assertEqual([ (n.code, n.severity) for n in nits ], [('MISSING_INTRODUCTION_SECTION', ERR)])
        nits = await sections.validate_introduction_section(doc, mode=modes.FORGIVE_CHECKLIST)
        self.assertEqual([ (n.code, n.severity) for n in nits ], [('MISSING_INTRODUCTION_SECTION', WARN)])
        nits = await sections.validate_introduction_section(doc, mode=modes.SUBMISSION)
        self.assertEqual(nits, [])

    async def test_missing_abstract_in_every_mode(self):
        doc = txtparser.parse(txt_draft('1.  Introduction\n\n   Some text.\n'))
        for mode in modes.MODES:
            nits = await sections.validate_abstract_section(doc, mode=mode)
            self.assertEqual([ (n.code, n.severity) for n in nits ], [('MISSING_ABSTRACT_SECTION', ERR)])

    async def test_empty_section(self):
        doc = txtparser.parse(txt_draft('1.  Introduction\n\n2.  Security Considerations\n\n   Nothing to see.\n'))
        nits = await sections.validate_introduction_section(doc)
        self.assertEqual(codes(nits), ['EMPTY_INTRODUCTION_SECTION'])
        self.assertEqual(nits[0].lines[0].line, 10)
        self.assertEqual(await sections.validate_security_considerations_section(doc), [])

    async def test_missing_author_section(self):
        doc = txtparser.parse(txt_draft('1.  Introduction\n\n   Some text.\n'))
        nits = await sections.validate_author_section(doc, mode=modes.NORMAL)
        self.assertEqual([ (n.code, n.severity) for n in nits ], [('MISSING_AUTHOR_SECTION', ERR)])
        nits = await sections.validate_author_section(doc, mode=modes.FORGIVE_CHECKLIST)
        self.assertEqual([ (n.code, n.severity) for n in nits ], [('MISSING_AUTHOR_SECTION', WARN)])
        self.assertEqual(await sections.validate_author_section(doc, mode=modes.SUBMISSION), [])

    async def test_too_many_authors(self):
        header = [ ('Network Working Group', 'A. One'), ('Internet-Draft', 'B. Two'), ('', 'C. Three'),
                   ('', 'D. Four'), ('', 'E. Five'), ('', 'F. Six'), ('', '4 March 2024'), ]
        doc = txtparser.parse(txt_draft("Author's Address\n\n   A. One\n", header=header))
        self.assertEqual(len(doc.data.header.authors), 6)
        for mode in [ modes.NORMAL, modes.FORGIVE_CHECKLIST ]:
            nits = await sections.validate_author_section(doc, mode=mode)
            self.assertEqual([ (n.code, n.severity) for n in nits ], [('TOO_MANY_AUTHORS', COMM)])
        self.assertEqual(await sections.validate_author_section(doc, mode=modes.SUBMISSION), [])

    async def test_empty_references(self):
        doc = txtparser.parse(txt_draft('9.  References\n\n10.  Other\n\n   Text.\n'))
        nits = await sections.validate_references_section(doc)
        self.assertEqual(codes(nits), ['EMPTY_REFERENCES_SECTION'])

    async def test_missing_iana_considerations(self):
        draft = txtparser.parse(txt_draft('1.  Introduction\n\n   Some text.\n'))
        nits = await sections.validate_iana_considerations_section(draft)
        self.assertEqual([ (n.code, n.severity) for n in nits ], [('MISSING_IANA_CONSIDERATIONS_SECTION', ERR)])
        rfc = txtparser.parse(txt_draft('1.  Introduction\n\n   Some text.\n', header=[
            ('Internet Engineering Task Force (IETF)', 'J. Doe'),
            ('Request for Comments: 9999', 'March 2024'),
        ]))
        nits = await sections.validate_iana_considerations_section(rfc)
        self.assertEqual([ (n.code, n.severity) for n in nits ], [('MISSING_IANA_CONSIDERATIONS_SECTION', COMM)])


class XmlSectionTests(IsolatedAsyncioTestCase):

    async def test_complete_draft(self):
        doc = xmlparser.parse(XML_DRAFT, XML_FILENAME)
        for validate in ALL_SECTIONS:
            self.assertEqual(await validate(doc), [], validate.__name__)

    async def test_missing_abstract(self):
        doc = xmlparser.parse(xml_draft(front=AUTHOR))
        for mode in modes.MODES:
            nits = await sections.validate_abstract_section(doc, mode=mode)
            self.assertEqual([ (n.code, n.severity) for n in nits ], [('MISSING_ABSTRACT_SECTION', ERR)])

    async def test_abstract_with_reference(self):
        doc = xmlparser.parse(xml_draft(front='<abstract><t>See <xref target="RFC2119"/>.</t></abstract>'))
        nits = await sections.validate_abstract_section(doc, mode=modes.NORMAL)
        self.assertEqual([ (n.code, n.severity) for n in nits ], [('INVALID_ABSTRACT_SECTION_REF', ERR)])
        nits = await sections.validate_abstract_section(doc, mode=modes.FORGIVE_CHECKLIST)
        self.assertEqual([ (n.code, n.severity) for n in nits ], [('INVALID_ABSTRACT_SECTION_REF', WARN)])
        self.assertEqual(await sections.validate_abstract_section(doc, mode=modes.SUBMISSION), [])

    async def test_abstract_children(self):
        doc = xmlparser.parse(xml_draft(front='<abstract><t>Text.</t><figure><artwork>x</artwork></figure></abstract>'))
        nits = await sections.validate_abstract_section(doc)
        self.assertEqual(codes(nits), ['INVALID_ABSTRACT_SECTION_CHILD'])
        self.assertIn('<figure>', nits[0].msg)
        doc = xmlparser.parse(xml_draft(front='<abstract></abstract>'))
        self.assertEqual(codes(await sections.validate_abstract_section(doc)), ['INVALID_ABSTRACT_SECTION'])

    async def test_section_children(self):
        doc = xmlparser.parse(xml_draft(front=ABSTRACT, middle='''
            <section><name>Introduction</name><t>Text.</t><abstract/></section>
            <section><name>Security Considerations</name></section>
        '''))
        nits = await sections.validate_introduction_section(doc)
        self.assertEqual(codes(nits), ['INVALID_INTRODUCTION_SECTION_CHILD'])
        nits = await sections.validate_security_considerations_section(doc)
        self.assertEqual(codes(nits), ['INVALID_SECURITY_CONSIDERATIONS_SECTION'])
        nits = await sections.validate_iana_considerations_section(doc)
        self.assertEqual(codes(nits), ['MISSING_IANA_CONSIDERATIONS_SECTION'])

    async def test_authors(self):
        doc = xmlparser.parse(xml_draft(front='''
            <author fullname="John Doe"><organization/></author>
            <author initials="R." surname="Roe"><organization>Example Inc</organization></author>
            <author initials="A." surname="Person" asciiSurname="Person"><organization>Example Inc</organization></author>
            <author fullname="Jane Doe" role="contributor"><organization>Example Inc</organization></author>
        '''))
        nits = await sections.validate_author_section(doc)
        self.assertEqual(codes(nits), [
            'EMPTY_AUTHOR_ORGANIZATION',
            'MISSING_AUTHOR_FULLNAME',
            'MISSING_AUTHOR_FULLNAME_WITH_ASCII',
            'INVALID_AUTHOR_ROLE',
        ])
        self.assertTrue(all( n.severity == WARN for n in nits ))
        self.assertEqual(await sections.validate_author_section(doc, mode=modes.SUBMISSION), [])

    async def test_no_authors(self):
        doc = xmlparser.parse(xml_draft(front=ABSTRACT))
        nits = await sections.validate_author_section(doc)
        self.assertEqual(codes(nits), ['MISSING_AUTHOR_SECTION'])

    async def test_too_many_authors(self):
        doc = xmlparser.parse(xml_draft(front=AUTHOR * 6))
        nits = await sections.validate_author_section(doc)
        self.assertEqual([ (n.code, n.severity) for n in nits ], [('TOO_MANY_AUTHORS', COMM)])

    async def test_references_titles(self):
        doc = xmlparser.parse(xml_draft(back='''
            <references><name>Normative References</name></references>
            <references><name>Bibliography</name></references>
            <references></references>
        '''))
        nits = await sections.validate_references_section(doc)
        self.assertEqual(codes(nits), ['INVALID_REFERENCES_TITLE', 'MISSING_REFERENCES_TITLE'])
        self.assertIn("'Bibliography'", nits[0].msg)
