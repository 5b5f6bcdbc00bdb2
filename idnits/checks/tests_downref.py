# Copyright The IETF Trust 2024, All Rights Reserved
# -*- coding: utf-8 -*-

import requests
import requests_mock

from unittest import IsolatedAsyncioTestCase

from idnits import modes, settings, txtparser, xmlparser
from idnits.checks import downref
from idnits.nits import COMM, ERR, WARN
from idnits.remote import RemoteLookup
from idnits.test_data import txt_draft, xml_draft

REFERENCES = txt_draft(
    '7.  References\n'
    '\n'
    '7.1.  Normative References\n'
    '\n'
    '   [RFC2119]  Bradner, S., "Key words", RFC 2119.\n'
    '   [I-D.ietf-foo-bar]  Doe, J., "Foo", Work in Progress.\n'
    '\n'
    '7.2.  Informative References\n'
    '\n'
    '   [RFC4086]  Eastlake, D., "Randomness", RFC 4086.\n'
    '\n'
    '7.3.  Other References\n'
    '\n'
    '   [RFC1234]  Someone, "Something", RFC 1234.\n'
)

REGISTRY = '''<html><body><table>
<tr><td><a href="/doc/draft-ietf-foo-bar/">draft-ietf-foo-bar</a></td></tr>
<tr><td><a href="https://datatracker.ietf.org/doc/rfc4086/">RFC 4086</a></td></tr>
<tr><td><a href="/group/iesg/">IESG</a></td></tr>
</table></body></html>'''

def rfc_url(number):
    return settings.RFC_INFO_URL.format(number=number)

def draft_url(name):
    return settings.DRAFT_INFO_URL.format(name=name)

def codes(nits):
    return [ n.code for n in nits ]


class DownrefTestCase(IsolatedAsyncioTestCase):

    def setUp(self):
        super().setUp()
        self.requests_mock = requests_mock.Mocker()
        self.requests_mock.start()
        self.remote = RemoteLookup()
        self.txt = txtparser.parse(REFERENCES)

    def tearDown(self):
        self.requests_mock.stop()
        super().tearDown()


class DownrefRegistryTests(DownrefTestCase):

    def setUp(self):
        super().setUp()
        self.requests_mock.get(settings.DOWNREF_REGISTRY_URL, text=REGISTRY)
        self.xml = xmlparser.parse(xml_draft(back='''
            <references><name>Normative References</name>
              <xi:include href="https://bib.ietf.org/public/rfc/bibxml3/reference.I-D.ietf-foo-bar.xml"/>
              <reference anchor="RFC2119"/>
            </references>'''))

    async def test_downref_by_mode(self):
        nits = await downref.validate_downrefs(self.xml, mode=modes.NORMAL, remote=self.remote)
        self.assertEqual([ (n.code, n.severity) for n in nits ], [('DOWNREF_DRAFT', ERR)])
        self.assertIn('draft-ietf-foo-bar', nits[0].msg)
        nits = await downref.validate_downrefs(self.xml, mode=modes.FORGIVE_CHECKLIST, remote=self.remote)
        self.assertEqual([ (n.code, n.severity) for n in nits ], [('DOWNREF_DRAFT', WARN)])
        nits = await downref.validate_downrefs(self.xml, mode=modes.SUBMISSION, remote=self.remote)
        self.assertEqual(nits, [])

    async def test_registry_fetched_once(self):
        await downref.validate_downrefs(self.xml, remote=self.remote)
        await downref.validate_downrefs(self.txt, remote=self.remote)
        self.assertEqual(self.requests_mock.call_count, 1)

    async def test_txt_downrefs(self):
        nits = await downref.validate_downrefs(self.txt, remote=self.remote)
        self.assertEqual(codes(nits), ['DOWNREF_DRAFT', 'DOWNREF_DRAFT'])
        self.assertIn('RFC 4086', nits[0].msg)
        self.assertIn('draft-ietf-foo-bar', nits[1].msg)

    async def test_offline(self):
        self.assertEqual(await downref.validate_downrefs(self.xml, remote=self.remote, offline=True), [])
        self.assertEqual(await downref.validate_downrefs(self.xml, remote=RemoteLookup(offline=True)), [])
        self.assertFalse(self.requests_mock.called)

    async def test_registry_unavailable(self):
        self.requests_mock.get(settings.DOWNREF_REGISTRY_URL, status_code=500)
        self.assertEqual(await downref.validate_downrefs(self.xml, remote=self.remote), [])


class ReferenceStatusTests(DownrefTestCase):

    async def test_normative_references(self):
        self.requests_mock.get(rfc_url(2119), json={'status': 'BEST CURRENT PRACTICE', 'obsoleted_by': [], 'updated_by': ['RFC8174']})
        nits = await downref.validate_normative_references(self.txt, remote=self.remote)
        self.assertEqual(nits, [])

    async def test_obsolete_normative_reference(self):
        self.requests_mock.get(rfc_url(2119), json={'status': 'Proposed Standard', 'obsoleted_by': ['9000']})
        nits = await downref.validate_normative_references(self.txt, mode=modes.NORMAL, remote=self.remote)
        self.assertEqual([ (n.code, n.severity) for n in nits ], [('OBSOLETE_DOCUMENT', ERR)])
        self.assertIn('RFC 2119 is obsolete and has been replaced by: 9000.', nits[0].msg)
        nits = await downref.validate_normative_references(self.txt, mode=modes.FORGIVE_CHECKLIST, remote=self.remote)
        self.assertEqual([ (n.code, n.severity) for n in nits ], [('OBSOLETE_DOCUMENT', WARN)])
        nits = await downref.validate_normative_references(self.txt, mode=modes.SUBMISSION, remote=self.remote)
        self.assertEqual(nits, [])

    async def test_undefined_and_unknown_status(self):
        self.requests_mock.get(rfc_url(2119), status_code=404)
        nits = await downref.validate_normative_references(self.txt, remote=self.remote)
        self.assertEqual([ (n.code, n.severity) for n in nits ], [('UNDEFINED_STATUS', COMM)])
        remote = RemoteLookup()
        self.requests_mock.get(rfc_url(2119), json={'status': 'Unknown Status', 'obsoleted_by': []})
        nits = await downref.validate_normative_references(self.txt, mode=modes.FORGIVE_CHECKLIST, remote=remote)
        self.assertEqual([ (n.code, n.severity) for n in nits ], [('UNKNOWN_STATUS', COMM)])

    async def test_lookup_failure_is_not_fatal(self):
        self.requests_mock.get(rfc_url(2119), exc=requests.exceptions.ConnectTimeout)
        nits = await downref.validate_normative_references(self.txt, remote=self.remote)
        self.assertEqual(codes(nits), ['UNDEFINED_STATUS'])

    async def test_informative_references(self):
        self.requests_mock.get(rfc_url(4086), json={'status': 'Best Current Practice', 'obsoleted_by': ['9000']})
        nits = await downref.validate_informative_references(self.txt, remote=self.remote)
        self.assertEqual(codes(nits), ['OBSOLETE_INFORMATIVE_REFERENCE'])
        self.assertIn('The informative reference RFC 4086 is obsolete and has been replaced by: 9000.', nits[0].msg)

    async def test_unclassified_references(self):
        self.requests_mock.get(rfc_url(1234), json={'status': 'Historic', 'obsoleted_by': ['RFC 5678']})
        nits = await downref.validate_unclassified_references(self.txt, remote=self.remote)
        self.assertEqual(codes(nits), ['OBSOLETE_UNCLASSIFIED_REFERENCE'])

    async def test_xml_reference_types(self):
        doc = xmlparser.parse(xml_draft(back='''
            <references><name>Informative References</name>
              <reference anchor="RFC4086"/>
            </references>'''))
        self.requests_mock.get(rfc_url(4086), json={'status': 'Best Current Practice', 'obsoleted_by': []})
        self.assertEqual(await downref.validate_normative_references(doc, remote=self.remote), [])
        self.assertEqual(await downref.validate_informative_references(doc, remote=self.remote), [])
        self.assertEqual(self.requests_mock.call_count, 1)


class DraftStateTests(DownrefTestCase):

    async def test_published_draft(self):
        self.requests_mock.get(draft_url('draft-ietf-foo-bar'), json={'state': 'RFC'})
        nits = await downref.validate_draft_references(self.txt, remote=self.remote)
        self.assertEqual([ (n.code, n.severity) for n in nits ], [('INVALID_STATE_FOR_DRAFT', WARN)])

    async def test_active_draft(self):
        self.requests_mock.get(draft_url('draft-ietf-foo-bar'), json={'state': 'Active'})
        self.assertEqual(await downref.validate_draft_references(self.txt, remote=self.remote), [])

    async def test_undefined_state(self):
        self.requests_mock.get(draft_url('draft-ietf-foo-bar'), status_code=404)
        nits = await downref.validate_draft_references(self.txt, remote=self.remote)
        self.assertEqual([ (n.code, n.severity) for n in nits ], [('UNDEFINED_STATE', WARN)])

    async def test_submission_mode(self):
        self.assertEqual(await downref.validate_draft_references(self.txt, mode=modes.SUBMISSION, remote=self.remote), [])
        self.assertFalse(self.requests_mock.called)


class XmlDraftReferenceTests(DownrefTestCase):

    def xml(self, reference):
        return xmlparser.parse(xml_draft(back='''
            <references><name>Normative References</name>
              %s
            </references>''' % reference))

    async def assertDownref(self, reference):
        nits = await downref.validate_downrefs(self.xml(reference), remote=self.remote)
        self.assertEqual(codes(nits), ['DOWNREF_DRAFT'])
        self.assertIn('draft-ietf-foo-bar ', nits[0].msg)

    async def test_versioned_anchor(self):
        self.requests_mock.get(settings.DOWNREF_REGISTRY_URL, text=REGISTRY)
        await self.assertDownref('<reference anchor="draft-ietf-foo-bar-03"/>')

    async def test_series_info_name(self):
        self.requests_mock.get(settings.DOWNREF_REGISTRY_URL, text=REGISTRY)
        await self.assertDownref('''<reference anchor="I-D.ietf-foo-bar">
                <seriesInfo name="Internet-Draft" value="draft-ietf-foo-bar-03"/>
              </reference>''')

    async def test_id_anchor(self):
        self.requests_mock.get(settings.DOWNREF_REGISTRY_URL, text=REGISTRY)
        await self.assertDownref('<reference anchor="I-D.ietf-foo-bar"/>')

    async def test_versioned_include(self):
        self.requests_mock.get(settings.DOWNREF_REGISTRY_URL, text=REGISTRY)
        await self.assertDownref('<xi:include href="https://bib.ietf.org/public/rfc/bibxml3/reference.I-D.draft-ietf-foo-bar-03.xml"/>')

    async def test_not_in_registry(self):
        self.requests_mock.get(settings.DOWNREF_REGISTRY_URL, text=REGISTRY)
        nits = await downref.validate_downrefs(self.xml('<reference anchor="I-D.ietf-foo-baz"/>'), remote=self.remote)
        self.assertEqual(nits, [])

    async def test_draft_state_for_id_anchor(self):
        self.requests_mock.get(draft_url('draft-ietf-foo-bar'), json={'state': 'RFC'})
        nits = await downref.validate_draft_references(self.xml('<reference anchor="I-D.ietf-foo-bar"/>'), remote=self.remote)
        self.assertEqual([ (n.code, n.severity) for n in nits ], [('INVALID_STATE_FOR_DRAFT', WARN)])
        self.assertIn('draft-ietf-foo-bar ', nits[0].msg)

    async def test_undefined_state_for_versioned_draft(self):
        self.requests_mock.get(draft_url('draft-ietf-foo-bar'), status_code=404)
        nits = await downref.validate_draft_references(self.xml('<reference anchor="draft-ietf-foo-bar-03"/>'), remote=self.remote)
        self.assertEqual(codes(nits), ['UNDEFINED_STATE'])
