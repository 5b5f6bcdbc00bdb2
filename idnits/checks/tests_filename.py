# Copyright The IETF Trust 2024, All Rights Reserved
# -*- coding: utf-8 -*-

from unittest import IsolatedAsyncioTestCase, TestCase

from idnits import modes, txtparser, xmlparser
from idnits.checks import filename
from idnits.nits import ERR
from idnits.test_data import TXT_DRAFT, TXT_FILENAME, XML_DRAFT, XML_FILENAME, txt_draft, xml_draft

def codes(nits):
    return [ n.code for n in nits ]


class NameTests(TestCase):

    def test_split_filename(self):
        self.assertEqual(filename.split_filename('/tmp/x/draft-foo-bar-00.TXT'), ('draft-foo-bar-00', 'txt'))
        self.assertEqual(filename.split_filename('draft-foo-bar'), ('draft-foo-bar', ''))

    def test_declared_name(self):
        self.assertEqual(filename.declared_name(txtparser.parse(TXT_DRAFT)), 'draft-doe-example-protocol')
        self.assertEqual(filename.declared_name(xmlparser.parse(XML_DRAFT)), 'draft-doe-example-protocol')
        self.assertEqual(filename.declared_name(xmlparser.parse(xml_draft(attrs='number="9999"'))), 'rfc9999')
        self.assertIsNone(filename.declared_name(xmlparser.parse(xml_draft(attrs='ipr="trust200902"'))))

    def test_malformed_draft_name(self):
        for name in ['draft-doe-example-protocol-00', 'draft-ietf-quic-transport', 'draft-doe-foo']:
            self.assertFalse(filename.is_malformed_draft_name(name), name)
        for name in ['draft-doe-00', 'doe-example-protocol-00', 'draft-doe--foo', 'draft-doe-foo-']:
            self.assertTrue(filename.is_malformed_draft_name(name), name)


class FilenameTests(IsolatedAsyncioTestCase):

    async def test_matching_names(self):
        doc = txtparser.parse(TXT_DRAFT, '/var/tmp/' + TXT_FILENAME)
        self.assertEqual(await filename.validate_filename(doc), [])
        doc = xmlparser.parse(XML_DRAFT, XML_FILENAME)
        self.assertEqual(await filename.validate_filename(doc), [])
        doc = xmlparser.parse(xml_draft(attrs='number="9999" category="std"'), 'rfc9999.xml')
        self.assertEqual(await filename.validate_filename(doc), [])

    async def test_no_filename(self):
        doc = txtparser.parse(TXT_DRAFT)
        self.assertEqual(await filename.validate_filename(doc), [])
        self.assertEqual(await filename.validate_docname(doc), [])

    async def test_bad_characters(self):
        doc = txtparser.parse(TXT_DRAFT, 'Draft_Doe.txt')
        for mode in modes.MODES:
            nits = await filename.validate_filename(doc, mode=mode)
            self.assertEqual(codes(nits), ['FILENAME_BAD_CHARACTERS', 'FILENAME_NOT_DOCNAME'])
            self.assertTrue(all( n.severity == ERR for n in nits ))

    async def test_extension_mismatch(self):
        doc = txtparser.parse(TXT_DRAFT, 'draft-doe-example-protocol-00.xml')
        nits = await filename.validate_filename(doc)
        self.assertEqual(codes(nits), ['FILENAME_EXT_MISMATCH'])
        self.assertIn("'.xml'", nits[0].msg)

    async def test_too_long(self):
        name = 'draft-doe-' + 'x' * 40 + '-00.txt'
        doc = txtparser.parse(txt_draft('Abstract\n'), name)
        nits = await filename.validate_filename(doc)
        self.assertEqual(codes(nits), ['FILENAME_TOO_LONG', 'FILENAME_NOT_DOCNAME'])
        self.assertIn('is 57 characters long; at most 50', nits[0].msg)

    async def test_docname(self):
        doc = xmlparser.parse(XML_DRAFT, 'draft-doe-other-00.xml')
        nits = await filename.validate_filename(doc)
        self.assertEqual(codes(nits), ['FILENAME_NOT_DOCNAME'])
        self.assertIn("'draft-doe-example-protocol'", nits[0].msg)


class DocnameTests(IsolatedAsyncioTestCase):

    async def test_wellformed(self):
        doc = txtparser.parse(TXT_DRAFT, TXT_FILENAME)
        self.assertEqual(await filename.validate_docname(doc), [])

    async def test_malformed(self):
        doc = txtparser.parse(TXT_DRAFT, 'draft-doe-00.txt')
        for mode in modes.MODES:
            nits = await filename.validate_docname(doc, mode=mode)
            self.assertEqual([ (n.code, n.severity) for n in nits ], [('DOCNAME_MALFORMED', ERR)])

    async def test_rfc_is_skipped(self):
        doc = xmlparser.parse(xml_draft(attrs='number="9999" category="std"'), 'rfc9999.xml')
        self.assertEqual(await filename.validate_docname(doc), [])
