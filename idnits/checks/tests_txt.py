# Copyright The IETF Trust 2024, All Rights Reserved
# -*- coding: utf-8 -*-

from unittest import IsolatedAsyncioTestCase

from idnits import modes, txtparser, xmlparser
from idnits.checks import txt
from idnits.nits import ERR, WARN
from idnits.test_data import TXT_DRAFT, TXT_FILENAME, XML_DRAFT, txt_draft

LICENSE = (
    '   Code Components extracted from this document must include Revised\n'
    '   BSD License text as described in Section 4.e of the Trust Legal\n'
    '   Provisions and are provided without warranty as described in the\n'
    '   Revised BSD License.\n'
    '\n'
)

CODE = (
    '   <CODE BEGINS>\n'
    '   int main() { return 0; } /* not flagged */\n'
    '   <CODE ENDS>\n'
)

ALL_LAYOUT = [
    txt.validate_line_length,
    txt.validate_line_extra_spacing,
    txt.validate_hyphenated_line_breaks,
    txt.validate_code_comments,
    txt.validate_code_block_licenses,
    txt.validate_reference_categories,
]

def severities(nits):
    return [ (n.code, n.severity) for n in nits ]


class LayoutTests(IsolatedAsyncioTestCase):

    async def test_clean_draft(self):
        doc = txtparser.parse(TXT_DRAFT, TXT_FILENAME)
        for validate in ALL_LAYOUT:
            self.assertEqual(await validate(doc), [], validate.__name__)

    async def test_xml_is_skipped(self):
        doc = xmlparser.parse(XML_DRAFT)
        for validate in ALL_LAYOUT:
            self.assertEqual(await validate(doc), [], validate.__name__)

    async def test_line_length(self):
        doc = txtparser.parse(txt_draft('   ' + 'x' * 69 + '\n'))
        self.assertEqual(await txt.validate_line_length(doc), [])
        doc = txtparser.parse(txt_draft('   ' + 'x' * 70 + '\n\n   ' + 'y' * 75 + '\n'))
        nits = await txt.validate_line_length(doc, mode=modes.NORMAL)
        self.assertEqual(severities(nits), [('LINE_TOO_LONG', ERR)])
        self.assertIn('Found 2 lines longer than 72 characters', nits[0].msg)
        self.assertIn('the longest is line 12, with 78 characters', nits[0].msg)
        self.assertEqual([ (p.line, p.col) for p in nits[0].lines ], [(10, 73), (12, 73)])
        for mode in [ modes.FORGIVE_CHECKLIST, modes.SUBMISSION ]:
            nits = await txt.validate_line_length(doc, mode=mode)
            self.assertEqual(severities(nits), [('LINE_TOO_LONG', WARN)])

    async def test_ragged_right(self):
        justified = '   This is  justified text.\n'
        doc = txtparser.parse(txt_draft(justified * 50))
        self.assertEqual(await txt.validate_line_extra_spacing(doc), [])
        doc = txtparser.parse(txt_draft(justified * 51))
        nits = await txt.validate_line_extra_spacing(doc)
        self.assertEqual(severities(nits), [('RAGGED_RIGHT', ERR)])
        self.assertEqual(len(nits[0].lines), 51)
        self.assertEqual(await txt.validate_line_extra_spacing(doc, mode=modes.SUBMISSION), [])

    async def test_hyphenation(self):
        doc = txtparser.parse(txt_draft('   The client opens a connec-\n   tion to the server.\n'))
        nits = await txt.validate_hyphenated_line_breaks(doc)
        self.assertEqual(severities(nits), [('HYPHENATED_LINE_BREAKS', WARN)])
        self.assertEqual(nits[0].lines[0].line, 10)
        self.assertEqual(await txt.validate_hyphenated_line_breaks(doc, mode=modes.SUBMISSION), [])
        doc = txtparser.parse(txt_draft('   The client uses the well-\n   Known port.\n'))
        self.assertEqual(await txt.validate_hyphenated_line_breaks(doc), [])

    async def test_code_comments(self):
        doc = txtparser.parse(txt_draft('   Some text.\n   /* a comment */\n'))
        nits = await txt.validate_code_comments(doc, mode=modes.SUBMISSION)
        self.assertEqual(severities(nits), [('COMMENT_OUT_OF_CODE_BLOCK', WARN)])
        self.assertEqual((nits[0].lines[0].line, nits[0].lines[0].col), (11, 4))
        doc = txtparser.parse(txt_draft(CODE))
        self.assertEqual(await txt.validate_code_comments(doc), [])

    async def test_code_block_license(self):
        doc = txtparser.parse(txt_draft(CODE))
        nits = await txt.validate_code_block_licenses(doc)
        self.assertEqual(severities(nits), [('CODE_BLOCK_MISSING_LICENSE', WARN)])
        self.assertEqual(await txt.validate_code_block_licenses(doc, mode=modes.SUBMISSION), [])
        doc = txtparser.parse(txt_draft(LICENSE + CODE))
        self.assertEqual(await txt.validate_code_block_licenses(doc), [])

    async def test_reference_categories(self):
        doc = txtparser.parse(txt_draft(
            '7.  References\n'
            '\n'
            '7.1.  Normative References\n'
            '\n'
            '   [RFC2119]  Bradner, S., "Key words", RFC 2119.\n'
            '\n'
            '7.2.  Other References\n'
            '\n'
            '   [RFC1234]  Someone, "Something", RFC 1234.\n'
        ))
        nits = await txt.validate_reference_categories(doc)
        self.assertEqual(severities(nits), [('UNCATEGORIZED_REFERENCES', ERR)])
        self.assertIn('Found 1 reference which are not', nits[0].msg)
        self.assertEqual(nits[0].lines[0].line, 10)
        nits = await txt.validate_reference_categories(doc, mode=modes.FORGIVE_CHECKLIST)
        self.assertEqual(severities(nits), [('UNCATEGORIZED_REFERENCES', WARN)])

    async def test_references_without_subsections(self):
        doc = txtparser.parse(txt_draft(
            '7.  References\n'
            '\n'
            '   [RFC2119]  Bradner, S., "Key words", RFC 2119.\n'
            '   [I-D.ietf-foo-bar]  Doe, J., "Foo", Work in Progress.\n'
        ))
        nits = await txt.validate_reference_categories(doc)
        self.assertIn('Found 2 references', nits[0].msg)
