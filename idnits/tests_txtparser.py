# Copyright The IETF Trust 2024, All Rights Reserved
# -*- coding: utf-8 -*-

from unittest import TestCase

from idnits import patterns
from idnits.nits import ParseError
from idnits.test_data import TXT_DRAFT, TXT_FILENAME, txt_draft
from idnits.txtparser import parse, parse_date


class HeaderTests(TestCase):

    def test_first_line_source_and_author(self):
        doc = parse('Short Source                    J. Doe\n')
        self.assertEqual(doc.data.header.source, 'Short Source')
        self.assertEqual([ a.name for a in doc.data.header.authors ], ['J. Doe'])

    def test_draft_header(self):
        doc = parse(TXT_DRAFT, TXT_FILENAME)
        header = doc.data.header
        self.assertEqual(doc.doc_kind, 'draft')
        self.assertEqual(header.source, 'Network Working Group')
        self.assertEqual(len(header.authors), 1)
        self.assertEqual(header.authors[0].name, 'J. Doe')
        self.assertEqual(header.authors[0].org, 'Example Inc')
        self.assertEqual(header.intended_status, 'Proposed Standard')
        self.assertEqual((header.date.day, header.date.month, header.date.year), (4, 'March', 2024))
        self.assertEqual(header.expires.isoformat(), '2024-09-05')
        self.assertEqual(doc.data.title, 'An Example Protocol')
        self.assertEqual(doc.data.slug, 'draft-doe-example-protocol-00')
        self.assertTrue(doc.has_header)

    def test_rfc_header(self):
        text = txt_draft('', header=[
            ('Internet Engineering Task Force (IETF)', 'J. Doe'),
            ('Request for Comments: 9999', 'Example Inc'),
            ('Obsoletes: 1234, 5678', 'R. Roe'),
            ('Category: Standards Track', 'Other Org'),
            ('ISSN: 2070-1721', 'March 2024'),
        ])
        doc = parse(text, 'rfc9999.txt')
        header = doc.data.header
        self.assertEqual(doc.doc_kind, 'rfc')
        self.assertEqual(header.rfc_number, '9999')
        self.assertEqual(header.obsoletes, ['1234', '5678'])
        self.assertEqual(header.category, 'Proposed Standard')
        self.assertEqual(header.issn, '2070-1721')
        self.assertEqual([ (a.name, a.org) for a in header.authors ], [('J. Doe', 'Example Inc'), ('R. Roe', 'Other Org')])
        self.assertEqual((header.date.day, header.date.month, header.date.year), (None, 'March', 2024))

    def test_gap_closes_organization(self):
        text = txt_draft('', header=[
            ('Network Working Group', 'J. Doe'),
            ('Internet-Draft', ''),
            ('Intended status: Informational', 'R. Roe'),
            ('Expires: 5 September 2024', 'Example Inc'),
            ('', '4 March 2024'),
        ])
        doc = parse(text)
        self.assertEqual([ (a.name, a.org) for a in doc.data.header.authors ], [('J. Doe', ''), ('R. Roe', 'Example Inc')])

    def test_parse_date(self):
        self.assertEqual(parse_date('March 4, 2024').day, 4)
        self.assertIsNone(parse_date('March 2024').day)
        self.assertIsNone(parse_date('Not a date'))
        self.assertIsNone(parse_date('31 February 2024'))


class SectionTests(TestCase):

    def setUp(self):
        self.doc = parse(TXT_DRAFT, TXT_FILENAME)
        self.lines = TXT_DRAFT.split('\n')

    def line_of(self, text):
        return self.lines.index(text) + 1

    def test_sections_found(self):
        markers = self.doc.data.markers
        for name in patterns.SECTIONS:
            self.assertTrue(markers[name].found, name)
            self.assertTrue(markers[name].closed, name)
            self.assertGreaterEqual(markers[name].end, markers[name].start, name)

    def test_table_of_contents_does_not_open_sections(self):
        markers = self.doc.data.markers
        self.assertEqual(markers[patterns.INTRODUCTION].start, self.line_of('1.  Introduction'))
        self.assertEqual(markers[patterns.SECURITY_CONSIDERATIONS].start, self.line_of('2.  Security Considerations'))
        self.assertEqual(markers[patterns.REFERENCES].start, self.line_of('4.  Normative References'))
        self.assertEqual(markers[patterns.AUTHOR_ADDRESS].start, self.line_of("Author's Address"))

    def test_section_closes_at_next_heading(self):
        markers = self.doc.data.markers
        self.assertEqual(markers[patterns.IANA_CONSIDERATIONS].end, self.line_of('4.  Normative References') - 1)
        self.assertEqual(markers[patterns.AUTHOR_ADDRESS].end, len(self.lines))

    def test_content(self):
        content = self.doc.data.content
        self.assertEqual(content[patterns.ABSTRACT], ['This document describes an example protocol.'])
        self.assertEqual(content[patterns.IANA_CONSIDERATIONS], ['This document has no IANA actions.'])
        self.assertIn('Email: jdoe@example.com', content[patterns.AUTHOR_ADDRESS])

    def test_page_count(self):
        self.assertEqual(self.doc.data.page_count, 2)

    def test_reference_subsections(self):
        text = txt_draft(
            '7.  References\n'
            '\n'
            '7.1.  Normative References\n'
            '\n'
            '   [RFC2119]  Bradner, S., "Key words", RFC 2119.\n'
            '\n'
            '7.2.  Informative References\n'
            '\n'
            '   [RFC4086]  Eastlake, D., "Randomness", RFC 4086.\n'
            '   [I-D.ietf-foo-bar]  Doe, J., "Foo", Work in Progress.\n'
            '\n'
            '7.3.  Other References\n'
            '\n'
            '   [RFC1234]  Someone, "Something", RFC 1234.\n'
        )
        doc = parse(text)
        refs = doc.data.extracted.reference_section_rfc
        self.assertEqual([ (r.value, r.subsection) for r in refs ], [
            ('2119', patterns.NORMATIVE_REFERENCES),
            ('4086', patterns.INFORMATIVE_REFERENCES),
            ('1234', patterns.UNCLASSIFIED_REFERENCES),
        ])
        drafts = doc.data.extracted.reference_section_draft_references
        self.assertEqual([ (r.value, r.subsection) for r in drafts ], [('[I-D.ietf-foo-bar]', patterns.INFORMATIVE_REFERENCES)])

    def test_subsection_headings_in_content(self):
        doc = parse(txt_draft(
            '2.  Security Considerations\n'
            '\n'
            '   Overview.\n'
            '\n'
            '2.1.  Replay\n'
            '\n'
            '   Replays are rejected.\n'
        ))
        self.assertEqual(doc.data.content[patterns.SECURITY_CONSIDERATIONS],
            ['Overview.', '2.1.  Replay', 'Replays are rejected.'])

    def test_idempotent(self):
        again = parse(TXT_DRAFT, TXT_FILENAME)
        self.assertEqual(self.doc, again)

    def test_lines_split_once(self):
        lines = self.doc.lines
        self.assertIs(self.doc.lines, lines)
        self.assertEqual([ l.txt for l in lines ], self.lines)


class ElementTests(TestCase):

    def test_references_outside_reference_section(self):
        doc = parse(TXT_DRAFT, TXT_FILENAME)
        extracted = doc.data.extracted
        self.assertEqual(extracted.non_reference_section_rfc, ['2119', '8174'])
        self.assertEqual([ r.value for r in extracted.reference_section_rfc ], ['2119', '8174'])
        self.assertTrue(doc.data.references.rfc2119)

    def test_references_outside_reference_section_listed_once(self):
        doc = parse(txt_draft(
            '1.  Introduction\n'
            '\n'
            '   See RFC 2119 and [I-D.ietf-foo-bar].  RFC 2119 again, and\n'
            '   [I-D.ietf-foo-bar] again.\n'
        ))
        extracted = doc.data.extracted
        self.assertEqual(extracted.non_reference_section_rfc, ['2119'])
        self.assertEqual(extracted.non_reference_section_draft_references, ['[I-D.ietf-foo-bar]'])

    def test_boilerplate(self):
        doc = parse(TXT_DRAFT, TXT_FILENAME)
        self.assertTrue(doc.data.boilerplate.rfc8174)
        self.assertFalse(doc.data.boilerplate.rfc2119)
        self.assertIn('NOT RECOMMENDED', doc.data.extracted.boilerplate_2119_keywords)

    def test_addresses(self):
        doc = parse(TXT_DRAFT, TXT_FILENAME)
        extracted = doc.data.extracted
        self.assertIn('192.0.2.1', extracted.ipv4)
        self.assertIn('www.example.com', extracted.fqdn_domains)
        self.assertEqual(extracted.ipv6, [])

    def test_section_numbers_are_not_addresses(self):
        doc = parse(txt_draft('1.2.3.4.  Deeply Nested Section\n\n   Use 2001:db8::1 please.\n'))
        self.assertEqual(doc.data.extracted.ipv4, [])
        self.assertEqual(doc.data.extracted.ipv6, ['2001:db8::1'])

    def test_keywords_and_misspellings(self):
        doc = parse(txt_draft('   Clients MUST not send this, and MAY NOT retry.\n'))
        self.assertEqual([ k.keyword for k in doc.data.possible_issues.misspelled_keywords ], ['MUST not', 'MAY NOT'])
        self.assertEqual(doc.data.possible_issues.misspelled_keywords[0].line, 10)
        self.assertIn('MAY NOT', [ k.keyword for k in doc.data.extracted.keywords_2119 ])

    def test_code_blocks(self):
        doc = parse(txt_draft(
            '   # a comment outside\n'
            '   <CODE BEGINS>\n'
            '   /* inside */\n'
            '   <CODE ENDS>\n'
        ))
        self.assertTrue(doc.data.contains.code_blocks)
        self.assertFalse(doc.data.contains.revised_bsd_license)
        self.assertEqual([ p.line for p in doc.data.possible_issues.inline_code ], [10])

    def test_extra_spacing(self):
        doc = parse(txt_draft('   This  line  has  justified  spacing.\n   This line does not.\n'))
        self.assertEqual([ p.line for p in doc.data.possible_issues.lines_with_spaces ], [10])

    def test_hyphenated_line(self):
        doc = parse(txt_draft('   This line ends with a hyphen-\n   ated word.\n'))
        self.assertEqual([ p.line for p in doc.data.possible_issues.hyphenated_lines ], [10])

    def test_copyright_year(self):
        doc = parse(TXT_DRAFT, TXT_FILENAME)
        self.assertEqual(doc.data.copyright_years, [2024])


class ErrorTests(TestCase):

    def test_invalid_utf8(self):
        with self.assertRaises(ParseError) as cm:
            parse(b'First line\nSecond \xff line\n')
        self.assertEqual(cm.exception.code, 'TXT_PARSING_FAILED')
        self.assertIn('line 2', cm.exception.msg)

    def test_str_and_bytes(self):
        self.assertEqual(parse(TXT_DRAFT, TXT_FILENAME), parse(TXT_DRAFT.encode('utf-8'), TXT_FILENAME))

    def test_kind_from_filename(self):
        self.assertEqual(parse('Some text\n', 'rfc1234.txt').doc_kind, 'rfc')
        self.assertEqual(parse('Some text\n', 'draft-foo-bar-00.txt').doc_kind, 'draft')
        self.assertEqual(parse('Some text\n', 'notes.txt').doc_kind, 'unknown')
