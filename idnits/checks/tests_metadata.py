# Copyright The IETF Trust 2024, All Rights Reserved
# -*- coding: utf-8 -*-

import datetime
import requests_mock

from unittest import IsolatedAsyncioTestCase, TestCase

from idnits import modes, settings, txtparser, xmlparser
from idnits.checks import metadata
from idnits.nits import WARN
from idnits.remote import RemoteLookup
from idnits.test_data import TXT_DRAFT, TXT_FILENAME, XML_DRAFT, XML_FILENAME, txt_draft, xml_draft

TODAY = datetime.date(2024, 3, 4)

def codes(nits):
    return [ n.code for n in nits ]


class CompleteDateTests(TestCase):

    def test_complete_date(self):
        self.assertEqual(metadata.complete_date(2024, 3, 1, TODAY), datetime.date(2024, 3, 1))
        self.assertEqual(metadata.complete_date(2024, 3, None, TODAY), TODAY)
        self.assertEqual(metadata.complete_date(2023, 7, None, TODAY), datetime.date(2023, 7, 15))
        self.assertEqual(metadata.complete_date(None, None, None, TODAY), TODAY)
        self.assertIsNone(metadata.complete_date(2024, 2, 30, TODAY))


class DateTests(IsolatedAsyncioTestCase):

    async def test_txt_date(self):
        doc = txtparser.parse(TXT_DRAFT, TXT_FILENAME)
        self.assertEqual(await metadata.validate_date(doc, today=TODAY), [])
        self.assertEqual(await metadata.validate_date(doc, today=TODAY + datetime.timedelta(days=3)), [])
        nits = await metadata.validate_date(doc, today=TODAY + datetime.timedelta(days=4))
        self.assertEqual([ (n.code, n.severity) for n in nits ], [('DOC_DATE_IN_PAST', WARN)])
        self.assertIn('4 days in the past', nits[0].msg)
        nits = await metadata.validate_date(doc, today=TODAY - datetime.timedelta(days=10))
        self.assertEqual(codes(nits), ['DOC_DATE_IN_FUTURE'])

    async def test_txt_missing_date(self):
        doc = txtparser.parse(txt_draft('Abstract\n', header=[('Network Working Group', 'J. Doe'), ('Internet-Draft', 'Example Inc')]))
        for mode in modes.MODES:
            nits = await metadata.validate_date(doc, mode=mode, today=TODAY)
            self.assertEqual([ (n.code, n.severity) for n in nits ], [('MISSING_DOC_DATE', WARN)])

    async def test_xml_date(self):
        doc = xmlparser.parse(XML_DRAFT, XML_FILENAME)
        self.assertEqual(await metadata.validate_date(doc, today=TODAY), [])
        doc = xmlparser.parse(xml_draft(front='<date year="2023" month="Jan"/>'))
        nits = await metadata.validate_date(doc, today=TODAY)
        self.assertEqual(codes(nits), ['DOC_DATE_IN_PAST'])
        self.assertEqual(nits[0].lines[0].line, doc.root.find('front/date').sourceline)

    async def test_xml_missing_or_invalid_date(self):
        doc = xmlparser.parse(xml_draft())
        self.assertEqual(codes(await metadata.validate_date(doc, today=TODAY)), ['MISSING_DOC_DATE'])
        doc = xmlparser.parse(xml_draft(front='<date year="2024" month="Smarch"/>'))
        self.assertEqual(codes(await metadata.validate_date(doc, today=TODAY)), [])
        doc = xmlparser.parse(xml_draft(front='<date year="twenty" month="March"/>'))
        self.assertEqual(codes(await metadata.validate_date(doc, today=TODAY)), ['MISSING_DOC_DATE'])


class CategoryTests(IsolatedAsyncioTestCase):

    async def test_draft_exempt(self):
        doc = txtparser.parse(TXT_DRAFT, TXT_FILENAME)
        self.assertEqual(await metadata.validate_category(doc), [])
        doc = xmlparser.parse(xml_draft(attrs='docName="draft-doe-example-protocol-00" ipr="trust200902"'))
        self.assertEqual(await metadata.validate_category(doc), [])

    async def test_txt_rfc_category(self):
        doc = txtparser.parse(txt_draft('', header=[
            ('Internet Engineering Task Force (IETF)', 'J. Doe'),
            ('Request for Comments: 9999', 'Example Inc'),
            ('Category: Standards Track', 'March 2024'),
        ]))
        self.assertEqual(await metadata.validate_category(doc), [])
        doc = txtparser.parse(txt_draft('', header=[
            ('Internet Engineering Task Force (IETF)', 'J. Doe'),
            ('Request for Comments: 9999', 'March 2024'),
        ]))
        self.assertEqual(codes(await metadata.validate_category(doc)), ['MISSING_DOC_CATEGORY'])
        doc = txtparser.parse(txt_draft('', header=[
            ('Internet Engineering Task Force (IETF)', 'J. Doe'),
            ('Request for Comments: 9999', 'Example Inc'),
            ('Category: Whimsical', 'March 2024'),
        ]))
        nits = await metadata.validate_category(doc)
        self.assertEqual(codes(nits), ['INVALID_DOC_CATEGORY'])
        self.assertIn('Whimsical', nits[0].msg)

    async def test_xml_rfc_category(self):
        doc = xmlparser.parse(xml_draft(attrs='number="9999" ipr="trust200902"'))
        self.assertEqual(codes(await metadata.validate_category(doc)), ['MISSING_DOC_CATEGORY'])
        doc = xmlparser.parse(xml_draft(attrs='number="9999" ipr="trust200902" category="fun"'))
        self.assertEqual(codes(await metadata.validate_category(doc)), ['INVALID_DOC_CATEGORY'])
        doc = xmlparser.parse(xml_draft(attrs='number="9999" ipr="trust200902" category="info"'))
        self.assertEqual(await metadata.validate_category(doc), [])


class ObsoletesUpdatesTests(IsolatedAsyncioTestCase):

    def setUp(self):
        super().setUp()
        self.requests_mock = requests_mock.Mocker()
        self.requests_mock.start()

    def tearDown(self):
        self.requests_mock.stop()
        super().tearDown()

    def doc(self, attrs, abstract):
        return xmlparser.parse(xml_draft(attrs='docName="draft-doe-example-protocol-00" ipr="trust200902" %s' % attrs,
            front='<abstract><t>%s</t></abstract>' % abstract))

    async def test_abstract_cross_check(self):
        doc = self.doc('obsoletes="1234" updates="5678, 4321"',
            'This document obsoletes RFC 1234 and updates RFC 5678 and RFC 8888.')
        nits = await metadata.validate_obsolete_update_ref(doc, offline=True)
        self.assertEqual(codes(nits), ['UPDATES_NOT_IN_ABSTRACT', 'UPDATES_NOT_IN_RFC'])
        self.assertIn('RFC 4321', nits[0].msg)
        self.assertIn('RFC 8888', nits[1].msg)

    async def test_obsoletes_cross_check(self):
        doc = self.doc('obsoletes="1234"', 'This document replaces RFC 2345.')
        nits = await metadata.validate_obsolete_update_ref(doc, offline=True)
        self.assertEqual(codes(nits), ['OBSOLETES_NOT_IN_ABSTRACT', 'OBSOLETES_NOT_IN_RFC'])

    async def test_remote_checks(self):
        self.requests_mock.get(settings.RFC_INFO_URL.format(number=1234), json={'status': 'Historic', 'obsoleted_by': ['RFC9999']})
        self.requests_mock.get(settings.RFC_INFO_URL.format(number=5678), json={'status': 'Proposed Standard', 'updated_by': ['RFC7777']})
        self.requests_mock.get(settings.RFC_INFO_URL.format(number=4321), status_code=404)
        doc = self.doc('obsoletes="1234" updates="5678, 4321"',
            'This document obsoletes RFC 1234 and updates RFC 5678 and RFC 4321.')
        nits = await metadata.validate_obsolete_update_ref(doc, remote=RemoteLookup())
        self.assertEqual(codes(nits), ['OBSOLETES_OBSOLETED_RFC', 'UPDATES_UPDATED_RFC', 'UPDATES_RFC_NOT_FOUND'])
        self.assertIn('RFC9999', nits[0].msg)

    async def test_skipped(self):
        doc = self.doc('obsoletes="1234"', 'Nothing.')
        self.assertEqual(await metadata.validate_obsolete_update_ref(doc, mode=modes.SUBMISSION, remote=RemoteLookup()), [])
        self.assertEqual(await metadata.validate_obsolete_update_ref(txtparser.parse(TXT_DRAFT)), [])
        self.assertFalse(self.requests_mock.called)


class CopyrightYearTests(IsolatedAsyncioTestCase):

    async def test_txt(self):
        doc = txtparser.parse(TXT_DRAFT, TXT_FILENAME)
        self.assertEqual(await metadata.validate_copyright_year(doc, year=2024), [])
        self.assertEqual(await metadata.validate_copyright_year(doc, today=TODAY), [])
        nits = await metadata.validate_copyright_year(doc, year=2025)
        self.assertEqual([ (n.code, n.severity) for n in nits ], [('COPYRIGHT_YEAR_MISMATCH', WARN)])
        nits = await metadata.validate_copyright_year(doc, mode=modes.SUBMISSION, today=datetime.date(2025, 1, 2))
        self.assertEqual([ (n.code, n.severity) for n in nits ], [('COPYRIGHT_YEAR_MISMATCH', WARN)])

    async def test_xml(self):
        doc = xmlparser.parse(XML_DRAFT, XML_FILENAME)
        self.assertEqual(await metadata.validate_copyright_year(doc), [])
        self.assertEqual(await metadata.validate_copyright_year(doc, year=2024), [])
        self.assertEqual(codes(await metadata.validate_copyright_year(doc, year=2025)), ['COPYRIGHT_YEAR_MISMATCH'])
