# Copyright 2018-2024 IETF Trust, All Rights Reserved
# -*- coding: utf-8 indent-with-tabs: 0 -*-

from unittest import TestCase

from idnits import modes, parser
from idnits.nits import COMM, ERR, NONE, WARN, ParseError, group, has_errors, report, rule, severity
from idnits.test_data import TXT_DRAFT, XML_DRAFT
from idnits.utils import normalize_draft_reference, split_lines


class ParserTests(TestCase):

    def test_get_type(self):
        self.assertEqual(parser.get_type('draft-foo-00.xml', b'whatever'), 'xml')
        self.assertEqual(parser.get_type('draft-foo-00.TXT', b'<rfc/>'), 'txt')
        self.assertEqual(parser.get_type(None, b'\xef\xbb\xbf  <?xml version="1.0"?><rfc/>'), 'xml')
        self.assertEqual(parser.get_type('draft-foo-00', b'Network Working Group'), 'txt')

    def test_parse_raw(self):
        doc = parser.parse('/some/where/draft-doe-example-protocol-00.txt', raw=TXT_DRAFT)
        self.assertEqual(doc.type, 'txt')
        self.assertEqual(doc.filename, 'draft-doe-example-protocol-00.txt')
        doc = parser.parse(None, raw=XML_DRAFT.encode('utf-8'))
        self.assertEqual(doc.type, 'xml')
        self.assertIsNone(doc.filename)

    def test_invalid_utf8(self):
        with self.assertRaises(ParseError) as cm:
            parser.parse('draft-foo-00.txt', raw=b'Line one\nLine \xff two\n')
        self.assertEqual(cm.exception.code, 'TXT_PARSING_FAILED')
        self.assertIn('line 2', cm.exception.msg)


class ModeTests(TestCase):

    def test_get_mode(self):
        self.assertEqual(modes.get_mode(None), modes.NORMAL)
        self.assertEqual(modes.get_mode('Submission'), modes.SUBMISSION)
        self.assertEqual(modes.get_mode('forgive_checklist'), modes.FORGIVE_CHECKLIST)
        self.assertEqual(modes.get_mode('lenient'), modes.FORGIVE_CHECKLIST)
        self.assertEqual(modes.get_mode('strict'), modes.NORMAL)
        with self.assertRaises(ValueError):
            modes.get_mode('sloppy')


class NitTests(TestCase):

    def test_severity(self):
        r = rule('SOME_RULE', ERR, WARN, NONE)
        self.assertEqual([ severity(r, m) for m in modes.MODES ], [ERR, WARN, NONE])
        with self.assertRaises(RuntimeError):
            severity(r, 'sloppy')

    def test_report(self):
        r = rule('SOME_RULE', COMM, WARN, NONE)
        nits = []
        nit = report(nits, r, modes.NORMAL, 'Something', ref='https://example.com/')
        self.assertEqual(nits, [nit])
        self.assertEqual((nit.severity, nit.code, nit.msg, nit.ref, nit.lines), (COMM, 'SOME_RULE', 'Something', 'https://example.com/', None))
        self.assertIsNone(report(nits, r, modes.SUBMISSION, 'Something'))
        self.assertEqual(len(nits), 1)

    def test_group(self):
        nits = []
        report(nits, rule('A', WARN), modes.NORMAL, 'a')
        report(nits, rule('B', ERR), modes.NORMAL, 'b')
        self.assertTrue(has_errors(nits))
        grouped = group(nits)
        self.assertEqual(list(grouped.keys()), [ERR, WARN, COMM])
        self.assertEqual([ n.code for n in grouped[WARN] ], ['A'])
        self.assertFalse(has_errors(grouped[WARN]))


class UtilTests(TestCase):

    def test_split_lines(self):
        self.assertEqual([ (l.num, l.txt) for l in split_lines('a\nb\n') ], [(1, 'a'), (2, 'b'), (3, '')])

    def test_normalize_draft_reference(self):
        self.assertEqual(normalize_draft_reference('[I-D.ietf-foo-bar]'), 'draft-ietf-foo-bar')
        self.assertEqual(normalize_draft_reference('draft-ietf-foo-bar-03'), 'draft-ietf-foo-bar')
        self.assertIsNone(normalize_draft_reference('[RFC2119]'))
