# Copyright The IETF Trust 2024, All Rights Reserved
# -*- coding: utf-8 -*-

import asyncio
import requests
import requests_mock

from unittest import IsolatedAsyncioTestCase, TestCase, mock

from idnits import settings
from idnits.remote import RemoteLookup, normalize_label, normalize_rfc_list, parse_downref_registry


class HelperTests(TestCase):

    def test_normalize_label(self):
        self.assertEqual(normalize_label('rfc0793'), 'RFC 793')
        self.assertEqual(normalize_label('RFC 2119'), 'RFC 2119')
        self.assertEqual(normalize_label(' Draft-IETF-Foo-Bar '), 'draft-ietf-foo-bar')

    def test_normalize_rfc_list(self):
        self.assertEqual(normalize_rfc_list(None), [])
        self.assertEqual(normalize_rfc_list(['RFC9000', ' ', 9001, '']), ['RFC9000', '9001'])

    def test_parse_downref_registry(self):
        html = '''<html><body><table>
            <tr><td><a href="/doc/rfc3174/">RFC 3174</a></td></tr>
            <tr><td><a href="https://datatracker.ietf.org/doc/draft-ietf-foo-bar-05/">draft-ietf-foo-bar</a></td></tr>
            <tr><td><a href="/doc/search/">Search</a></td></tr>
            <tr><td><a name="anchor">No link</a></td></tr>
        </table></body></html>'''
        self.assertEqual(parse_downref_registry(html), set(['RFC 3174', 'draft-ietf-foo-bar']))


class RemoteLookupTests(IsolatedAsyncioTestCase):

    def setUp(self):
        super().setUp()
        self.requests_mock = requests_mock.Mocker()
        self.requests_mock.start()
        self.remote = RemoteLookup()

    def tearDown(self):
        self.requests_mock.stop()
        super().tearDown()

    async def test_rfc_info(self):
        self.requests_mock.get(settings.RFC_INFO_URL.format(number=793),
            json={'status': 'INTERNET STANDARD', 'obsoleted_by': ['RFC9293'], 'updated_by': None, 'title': 'TCP'})
        info = await self.remote.rfc_info('0793')
        self.assertEqual(info, {'status': 'INTERNET STANDARD', 'obsoleted_by': ['RFC9293'], 'updated_by': []})

    async def test_failures(self):
        self.requests_mock.get(settings.RFC_INFO_URL.format(number=1), status_code=404)
        self.requests_mock.get(settings.RFC_INFO_URL.format(number=2), text='not json')
        self.requests_mock.get(settings.RFC_INFO_URL.format(number=3), exc=requests.exceptions.ConnectTimeout)
        self.requests_mock.get(settings.RFC_INFO_URL.format(number=4), json=['a', 'list'])
        with self.assertLogs(settings.LOGGER_NAME, level='INFO') as logs:
            infos = await asyncio.gather(*[ self.remote.rfc_info(n) for n in [1, 2, 3, 4] ])
        self.assertEqual(infos, [None, None, None, None])
        self.assertTrue(any( 'HTTP status code = 404' in l for l in logs.output ))

    async def test_memoized(self):
        self.requests_mock.get(settings.DRAFT_INFO_URL.format(name='draft-ietf-foo-bar'), json={'state': 'Active'})
        results = await asyncio.gather(*[ self.remote.draft_info('draft-ietf-foo-bar') for i in range(5) ])
        self.assertEqual(results, [{'state': 'Active'}] * 5)
        self.assertEqual(await self.remote.draft_info('draft-ietf-foo-bar'), {'state': 'Active'})
        self.assertEqual(self.requests_mock.call_count, 1)

    async def test_timeout(self):
        self.requests_mock.get(settings.DRAFT_INFO_URL.format(name='draft-ietf-foo-bar'), json={'state': 'Active'})
        await self.remote.draft_info('draft-ietf-foo-bar')
        self.assertEqual(self.requests_mock.last_request.timeout, settings.REQUESTS_TIMEOUT)

    async def test_downrefs(self):
        self.requests_mock.get(settings.DOWNREF_REGISTRY_URL, text='<html><body><p><a href="/doc/rfc3174/">RFC 3174</a></p></body></html>')
        labels = await self.remote.downrefs(['RFC 3174', 'RFC 2119', 'rfc3174'])
        self.assertEqual(labels, ['RFC 3174', 'rfc3174'])

    async def test_offline(self):
        remote = RemoteLookup(offline=True)
        self.assertIsNone(await remote.rfc_info(2119))
        self.assertIsNone(await remote.draft_info('draft-ietf-foo-bar'))
        self.assertIsNone(await remote.downref_registry())
        self.assertEqual(await remote.downrefs(['RFC 2119']), [])
        self.assertFalse(self.requests_mock.called)

    async def test_session_closed(self):
        with mock.patch.object(requests.Session, 'close') as close:
            with RemoteLookup() as remote:
                self.requests_mock.get(settings.DRAFT_INFO_URL.format(name='draft-ietf-foo-bar'), json={'state': 'Active'})
                self.assertEqual(await remote.draft_info('draft-ietf-foo-bar'), {'state': 'Active'})
                close.assert_not_called()
            close.assert_called_once_with()
