# Copyright 2018-2024 IETF Trust, All Rights Reserved
# -*- coding: utf-8 indent-with-tabs: 0 -*-

from unittest import IsolatedAsyncioTestCase, TestCase, mock

from idnits import Options, check_nits, default_options, modes, txtparser, xmlparser
from idnits.checks import Check, Checker, checks
from idnits.nits import ERR, WARN, Nit
from idnits.remote import RemoteLookup
from idnits.test_data import TXT_DRAFT, TXT_FILENAME, XML_DRAFT, XML_FILENAME, txt_draft

OPTIONS = default_options.copy(offline=True, year=2024)

async def first_check(doc, **kwargs):
    return [ Nit(WARN, 'FIRST', 'First', None, None), Nit(WARN, 'SHARED', 'Shared', None, None) ]

async def second_check(doc, **kwargs):
    return [ Nit(ERR, 'SECOND', 'Second', None, None), Nit(WARN, 'SHARED', 'Shared', None, None) ]

async def failing_check(doc, **kwargs):
    raise RuntimeError('check failed')


class CheckerTests(TestCase):

    def test_clean_documents(self):
        for doc in [ txtparser.parse(TXT_DRAFT, TXT_FILENAME), xmlparser.parse(XML_DRAFT, XML_FILENAME) ]:
            checker = Checker(doc, OPTIONS)
            nits = checker.check()
            self.assertEqual(checker.nits['err'], [], doc.type)
            # only the date can be stale, depending on when the tests run
            self.assertTrue(set( n.code for n in nits ) <= set(['DOC_DATE_IN_PAST']), doc.type)

    def test_get_checks(self):
        txt_checks = Checker(txtparser.parse(TXT_DRAFT), OPTIONS).get_checks()
        xml_checks = Checker(xmlparser.parse(XML_DRAFT), OPTIONS).get_checks()
        self.assertTrue(all( c.fmt in ['any', 'txt'] for c in txt_checks ))
        self.assertTrue(all( c.fmt in ['any', 'xml'] for c in xml_checks ))
        self.assertEqual(len(txt_checks) + len(xml_checks), len(checks) + len([ c for c in checks if c.fmt == 'any' ]))

    def test_mode(self):
        doc = txtparser.parse(TXT_DRAFT)
        self.assertEqual(Checker(doc).mode, modes.NORMAL)
        self.assertEqual(Checker(doc, Options(mode='lenient')).mode, modes.FORGIVE_CHECKLIST)
        with self.assertRaises(ValueError):
            Checker(doc, Options(mode='sloppy'))

    def test_registration_order(self):
        doc = txtparser.parse(txt_draft('1.  Introduction\n\n   ' + 'x' * 80 + '\n'))
        codes = [ n.code for n in Checker(doc, OPTIONS).check() ]
        self.assertIn('MISSING_ABSTRACT_SECTION', codes)
        self.assertIn('LINE_TOO_LONG', codes)
        self.assertLess(codes.index('MISSING_ABSTRACT_SECTION'), codes.index('LINE_TOO_LONG'))

    def test_severity_grouping_and_duplicates(self):
        doc = txtparser.parse(TXT_DRAFT)
        with mock.patch('idnits.checks.checks', [ Check('any', first_check), Check('txt', second_check), Check('xml', failing_check) ]):
            checker = Checker(doc, OPTIONS)
            nits = checker.check()
        self.assertEqual([ n.code for n in nits ], ['FIRST', 'SHARED', 'SECOND'])
        self.assertEqual([ n.code for n in checker.nits['err'] ], ['SECOND'])
        self.assertEqual([ n.code for n in checker.nits['warn'] ], ['FIRST', 'SHARED'])
        self.assertEqual(checker.nits['comm'], [])

    def test_check_exception_propagates(self):
        doc = txtparser.parse(TXT_DRAFT)
        with mock.patch('idnits.checks.checks', [ Check('any', first_check), Check('any', failing_check) ]):
            with self.assertRaises(RuntimeError):
                Checker(doc, OPTIONS).check()

    def test_check_nits(self):
        nits = check_nits(TXT_DRAFT, TXT_FILENAME, OPTIONS)
        self.assertFalse(any( n.severity == ERR for n in nits ))


class OfflineTests(IsolatedAsyncioTestCase):

    async def test_remote_lookup(self):
        doc = xmlparser.parse(XML_DRAFT, XML_FILENAME)
        checker = Checker(doc, OPTIONS)
        await checker.run()
        self.assertTrue(checker.remote.offline)
        remote = RemoteLookup(offline=True)
        checker = Checker(doc, default_options.copy(year=2024), remote=remote)
        with mock.patch.object(remote, '_request') as request:
            await checker.run()
        self.assertIs(checker.remote, remote)
        request.assert_not_called()

    async def test_own_remote_lookup_closed(self):
        doc = xmlparser.parse(XML_DRAFT, XML_FILENAME)
        with mock.patch.object(RemoteLookup, 'close') as close:
            await Checker(doc, OPTIONS).run()
        close.assert_called_once_with()
        remote = RemoteLookup(offline=True)
        with mock.patch.object(remote, 'close') as close:
            await Checker(doc, OPTIONS, remote=remote).run()
        close.assert_not_called()
