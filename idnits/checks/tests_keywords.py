# Copyright The IETF Trust 2024, All Rights Reserved
# -*- coding: utf-8 -*-

from unittest import IsolatedAsyncioTestCase

from idnits import modes, txtparser, xmlparser
from idnits.checks import keywords
from idnits.nits import COMM, ERR, WARN
from idnits.test_data import TXT_DRAFT, TXT_FILENAME, XML_DRAFT, XML_FILENAME, txt_draft, xml_draft

# The RFC 2119 boilerplate, without "NOT RECOMMENDED"
BOILERPLATE_2119 = (
    '   The key words "MUST", "MUST NOT", "REQUIRED", "SHALL", "SHALL NOT",\n'
    '   "SHOULD", "SHOULD NOT", "RECOMMENDED", "MAY", and "OPTIONAL" in this\n'
    '   document are to be interpreted as described in RFC 2119.\n'
    '\n'
)

def severities(nits):
    return [ (n.code, n.severity) for n in nits ]

def codes(nits):
    return [ n.code for n in nits ]


class TxtKeywordTests(IsolatedAsyncioTestCase):

    async def test_clean_draft(self):
        doc = txtparser.parse(TXT_DRAFT, TXT_FILENAME)
        self.assertEqual(await keywords.validate_keywords(doc), [])

    async def test_keywords_without_boilerplate_or_reference(self):
        doc = txtparser.parse(txt_draft('   Clients MUST reconnect.\n'))
        nits = await keywords.validate_keywords(doc, mode=modes.NORMAL)
        self.assertEqual(severities(nits), [('REQLEVEL_INFO_MISSING', ERR)])
        nits = await keywords.validate_keywords(doc, mode=modes.FORGIVE_CHECKLIST)
        self.assertEqual(severities(nits), [('REQLEVEL_INFO_MISSING', WARN)])
        self.assertEqual(await keywords.validate_keywords(doc, mode=modes.SUBMISSION), [])

    async def test_keywords_with_reference_only(self):
        doc = txtparser.parse(txt_draft('   Clients MUST reconnect, see [RFC2119].\n'))
        nits = await keywords.validate_keywords(doc)
        self.assertEqual(severities(nits), [('MISSING_REQLEVEL_BOILERPLATE', WARN)])

    async def test_unused_boilerplate(self):
        doc = txtparser.parse(txt_draft(BOILERPLATE_2119 + '   Nothing is required here.\n'))
        nits = await keywords.validate_keywords(doc)
        self.assertEqual(severities(nits), [('UNUSED_REQLEVEL_BOILERPLATE', WARN)])

    async def test_keyword_not_in_boilerplate(self):
        doc = txtparser.parse(txt_draft(BOILERPLATE_2119 + '   Reconnecting is NOT RECOMMENDED.\n'))
        nits = await keywords.validate_keywords(doc)
        self.assertEqual(codes(nits), ['KEYWORD_NOT_IN_BOILERPLATE'])
        self.assertIn('"NOT RECOMMENDED", which is not listed', nits[0].msg)

    async def test_bad_combination(self):
        doc = txtparser.parse(txt_draft(BOILERPLATE_2119 + '   Clients MUST not reconnect.\n'))
        nits = await keywords.validate_keywords(doc)
        self.assertEqual(severities(nits), [('BAD_KEYWORD_COMBINATION', COMM)])
        self.assertIn('MUST not', nits[0].msg)
        self.assertEqual((nits[0].lines[0].line, nits[0].lines[0].col), (14, 12))

    async def test_similar_boilerplate(self):
        doc = txtparser.parse(txt_draft(
            '   The key words "MUST" and "SHOULD" in this document are to be\n'
            '   read as in RFC 2119.\n'
        ))
        nits = await keywords.validate_keywords(doc, mode=modes.FORGIVE_CHECKLIST)
        self.assertEqual(severities(nits), [
            ('MISSING_REQLEVEL_BOILERPLATE', WARN),
            ('SIMILAR_REQLEVEL_BOILERPLATE', ERR),
        ])


class XmlKeywordTests(IsolatedAsyncioTestCase):

    async def test_clean_draft(self):
        doc = xmlparser.parse(XML_DRAFT, XML_FILENAME)
        self.assertEqual(await keywords.validate_keywords(doc), [])

    async def test_keywords_without_boilerplate(self):
        doc = xmlparser.parse(xml_draft(middle='<section><name>Introduction</name><t>Clients MUST reconnect.</t></section>'))
        self.assertEqual(codes(await keywords.validate_keywords(doc)), ['REQLEVEL_INFO_MISSING'])
        doc = xmlparser.parse(xml_draft(
            middle='<section><name>Introduction</name><t>Clients MUST reconnect.</t></section>',
            back='<references><name>Normative References</name>'
                 '<xi:include href="https://bib.ietf.org/public/rfc/bibxml/reference.RFC.2119.xml"/></references>'))
        self.assertEqual(codes(await keywords.validate_keywords(doc)), ['MISSING_REQLEVEL_BOILERPLATE'])

    async def test_keywords_in_code_are_ignored(self):
        doc = xmlparser.parse(xml_draft(middle='<section><name>Code</name><sourcecode>MUST = 1</sourcecode></section>'))
        self.assertEqual(await keywords.validate_keywords(doc), [])

    async def test_bad_combination(self):
        doc = xmlparser.parse(xml_draft(middle='''
            <section><name>Introduction</name>
              <t>The key words "MUST", "MUST NOT", "REQUIRED", "SHALL", "SHALL NOT", "SHOULD",
              "SHOULD NOT", "RECOMMENDED", "NOT RECOMMENDED", "MAY", and "OPTIONAL" in this
              document are to be interpreted as described in BCP 14 <xref target="RFC2119"/>
              <xref target="RFC8174"/> when, and only when, they appear in all capitals, as
              shown here.</t>
              <t>Servers SHOULD not close the connection.</t>
            </section>'''))
        nits = await keywords.validate_keywords(doc)
        self.assertEqual(codes(nits), ['BAD_KEYWORD_COMBINATION'])
        self.assertIsNone(nits[0].lines)
