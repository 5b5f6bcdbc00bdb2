# Copyright The IETF Trust 2024, All Rights Reserved
# -*- coding: utf-8 -*-

from unittest import IsolatedAsyncioTestCase, TestCase

from idnits import modes, txtparser, xmlparser
from idnits.checks import addresses
from idnits.test_data import TXT_DRAFT, TXT_FILENAME, XML_DRAFT, txt_draft, xml_draft

def codes(nits):
    return [ n.code for n in nits ]


class DomainTests(TestCase):

    def test_is_example_domain(self):
        for domain in ['example.com', 'www.example.org', 'foo.test', 'host.example', 'www.ietf.org', 'mail.example.net.']:
            self.assertTrue(addresses.is_example_domain(domain), domain)
        for domain in ['www.foo.com', 'example.com.au', 'notexample.com']:
            self.assertFalse(addresses.is_example_domain(domain), domain)

    def test_is_file_name(self):
        self.assertTrue(addresses.is_file_name('draft-foo.txt'))
        self.assertTrue(addresses.is_file_name('module.YANG'))
        self.assertFalse(addresses.is_file_name('www.foo.com'))


class TxtAddressTests(IsolatedAsyncioTestCase):

    async def test_clean_draft(self):
        doc = txtparser.parse(TXT_DRAFT, TXT_FILENAME)
        self.assertEqual(await addresses.validate_fqdn(doc), [])
        self.assertEqual(await addresses.validate_ipv4(doc), [])
        self.assertEqual(await addresses.validate_ipv6(doc), [])

    async def test_fqdn(self):
        doc = txtparser.parse(txt_draft(
            '   Connect to www.foo.com, or to www.foo.com again, and fetch\n'
            '   config.json from www.example.com.\n'
        ))
        nits = await addresses.validate_fqdn(doc)
        self.assertEqual(codes(nits), ['FQDN_NOT_EXAMPLE'])
        self.assertIn("'www.foo.com'", nits[0].msg)
        self.assertEqual(await addresses.validate_fqdn(doc, mode=modes.SUBMISSION), [])

    async def test_ipv4(self):
        doc = txtparser.parse(txt_draft(
            '   Hosts 10.0.0.1, 224.0.0.1, 8.8.8.8, 192.0.2.1, 127.0.0.1 and\n'
            '   999.1.1.1 are mentioned.\n'
        ))
        nits = await addresses.validate_ipv4(doc)
        self.assertEqual(codes(nits), ['IPV4_PRIVATE_NOT_EXAMPLE', 'IPV4_MULTICAST_NOT_EXAMPLE', 'IPV4_GENERIC_NOT_EXAMPLE'])
        self.assertIn('10.0.0.1', nits[0].msg)
        self.assertIn('8.8.8.8', nits[2].msg)

    async def test_ipv6(self):
        doc = txtparser.parse(txt_draft('   Use fd00::1, fe80::1, 2001:db8::1, ::1 and 2001:4860::8888.\n'))
        nits = await addresses.validate_ipv6(doc)
        self.assertEqual(codes(nits), ['IPV6_LOCAL_NOT_EXAMPLE', 'IPV6_LINK_NOT_EXAMPLE', 'IPV6_GENERIC_NOT_EXAMPLE'])
        self.assertIn('2001:4860::8888', nits[2].msg)


class XmlAddressTests(IsolatedAsyncioTestCase):

    async def test_clean_draft(self):
        doc = xmlparser.parse(XML_DRAFT)
        self.assertEqual(await addresses.validate_fqdn(doc), [])
        self.assertEqual(await addresses.validate_ipv4(doc), [])

    async def test_code_is_ignored(self):
        doc = xmlparser.parse(xml_draft(middle='''
            <section><name>Introduction</name>
              <t>See www.foo.com and 10.1.2.3 for details.</t>
              <sourcecode>host.bar.com 10.9.9.9</sourcecode>
            </section>'''))
        nits = await addresses.validate_fqdn(doc)
        self.assertEqual(len(nits), 1)
        self.assertIn('www.foo.com', nits[0].msg)
        nits = await addresses.validate_ipv4(doc)
        self.assertEqual(codes(nits), ['IPV4_PRIVATE_NOT_EXAMPLE'])
        self.assertIn('10.1.2.3', nits[0].msg)
