# Copyright 2018-2024 IETF Trust, All Rights Reserved
# -*- coding: utf-8 indent-with-tabs: 0 -*-

from unittest import IsolatedAsyncioTestCase

from idnits import modes, txtparser, xmlparser
from idnits.checks import xml
from idnits.nits import ERR, WARN
from idnits.test_data import TXT_DRAFT, XML_DRAFT, XML_FILENAME, xml_draft

ALL_XML = [
    xml.validate_deprecated_elements,
    xml.validate_ipr,
    xml.validate_workgroup,
    xml.validate_code_markers,
    xml.validate_text_references,
    xml.validate_xrefs,
    xml.validate_external_entities,
]

def severities(nits):
    return [ (n.code, n.severity) for n in nits ]

def codes(nits):
    return [ n.code for n in nits ]

def section(content):
    return '<section anchor="intro"><name>Introduction</name>%s</section>' % content


class XmlCheckTests(IsolatedAsyncioTestCase):

    async def test_clean_draft(self):
        doc = xmlparser.parse(XML_DRAFT, XML_FILENAME)
        for validate in ALL_XML:
            self.assertEqual(await validate(doc), [], validate.__name__)

    async def test_txt_is_skipped(self):
        doc = txtparser.parse(TXT_DRAFT)
        for validate in ALL_XML:
            self.assertEqual(await validate(doc), [], validate.__name__)

    async def test_deprecated_elements(self):
        doc = xmlparser.parse(xml_draft(middle=section('<t>A <spanx>b</spanx><vspace/>c <spanx>d</spanx></t>')))
        nits = await xml.validate_deprecated_elements(doc, mode=modes.SUBMISSION)
        self.assertEqual(severities(nits), [('DEPRECATED_ELEMENT', WARN)])
        self.assertIn('Found 3 deprecated xml elements: <spanx>, <vspace>', nits[0].msg)
        self.assertEqual(len(nits[0].lines), 3)
        self.assertIsNone(nits[0].lines[0].col)

    async def test_ipr(self):
        doc = xmlparser.parse(xml_draft(attrs='docName="draft-doe-example-protocol-00"'))
        for mode in modes.MODES:
            nits = await xml.validate_ipr(doc, mode=mode)
            self.assertEqual(severities(nits), [('MISSING_IPR_ATTRIBUTE', ERR)])
        doc = xmlparser.parse(xml_draft(attrs='ipr="full3978"'))
        self.assertEqual(severities(await xml.validate_ipr(doc)), [('UNKNOWN_IPR_ATTRIBUTE', WARN)])
        doc = xmlparser.parse(xml_draft(attrs='ipr="noDerivativesTrust200902"'))
        self.assertEqual(severities(await xml.validate_ipr(doc)), [('DISALLOWED_IPR_ATTRIBUTE', ERR)])
        doc = xmlparser.parse(xml_draft(attrs='ipr="noDerivativesTrust200902" submissionType="independent"'))
        self.assertEqual(await xml.validate_ipr(doc), [])

    async def test_workgroup(self):
        doc = xmlparser.parse(xml_draft(front='<workgroup>Foo Working</workgroup>'))
        nits = await xml.validate_workgroup(doc)
        self.assertEqual(codes(nits), ['WORKGROUP_NOT_GROUP'])
        self.assertIn("'Foo Working'", nits[0].msg)
        doc = xmlparser.parse(xml_draft(front='<workgroup></workgroup>'))
        self.assertEqual(await xml.validate_workgroup(doc), [])

    async def test_code_markers(self):
        doc = xmlparser.parse(xml_draft(middle=section(
            '<sourcecode markers="true">&lt;CODE BEGINS&gt;\nint x;\n</sourcecode>'
            '<sourcecode>&lt;CODE BEGINS&gt;\nint y;\n</sourcecode>'
            '<t>&lt;CODE BEGINS&gt; int z;</t>'
        )))
        nits = await xml.validate_code_markers(doc)
        self.assertEqual(codes(nits), ['CODE_BEGINS_IN_SOURCECODE', 'CODE_BEGINS_IN_TEXT'])
        self.assertIn('Found 1 instance of', nits[0].msg)
        self.assertEqual(await xml.validate_code_markers(doc, mode=modes.SUBMISSION), [])

    async def test_text_references(self):
        doc = xmlparser.parse(xml_draft(middle=section('<t>See [RFC1234] and <xref target="intro"/> [I-D.foo].</t>')))
        nits = await xml.validate_text_references(doc)
        self.assertEqual(codes(nits), ['TEXT_LOOKS_LIKE_REF'])
        self.assertIn('[RFC1234]', nits[0].msg)

    async def test_xrefs(self):
        doc = xmlparser.parse(xml_draft(middle=section('<t><xref/> and <xref target="nowhere"/> and <xref target="intro"/></t>')))
        nits = await xml.validate_xrefs(doc, mode=modes.FORGIVE_CHECKLIST)
        self.assertEqual(severities(nits), [('MISSING_XREF_TARGET', WARN), ('XREF_TARGET_NOT_ANCHOR', WARN)])
        self.assertIn('unmatched target: nowhere', nits[1].msg)
        nits = await xml.validate_xrefs(doc, mode=modes.SUBMISSION)
        self.assertEqual(severities(nits), [('MISSING_XREF_TARGET', ERR), ('XREF_TARGET_NOT_ANCHOR', ERR)])

    async def test_xref_to_included_reference(self):
        doc = xmlparser.parse(xml_draft(
            middle=section('<t><xref target="I-D.ietf-foo-bar"/></t>'),
            back='<references><name>Informative References</name>'
                 '<xi:include href="https://bib.ietf.org/public/rfc/bibxml3/reference.I-D.ietf-foo-bar.xml"/></references>'))
        self.assertEqual(await xml.validate_xrefs(doc), [])


class EntityTests(IsolatedAsyncioTestCase):

    raw = (b'<?xml version="1.0" encoding="utf-8"?>\n'
           b'<!DOCTYPE rfc [\n'
           b'<!ENTITY RFC2119 SYSTEM "https://bib.ietf.org/public/rfc/bibxml/reference.RFC.2119.xml">\n'
           b']>\n'
           b'<rfc docName="draft-doe-example-protocol-00" ipr="trust200902"><front><title>Test</title></front>'
           b'<middle><section><name>Introduction</name><t>See <xref target="RFC2119"/>.</t></section></middle>'
           b'<back><references><name>Normative References</name>&RFC2119;</references></back></rfc>\n')

    async def test_external_entities(self):
        doc = xmlparser.parse(self.raw)
        nits = await xml.validate_external_entities(doc)
        self.assertEqual(severities(nits), [('EXTERNAL_ENTITY', WARN)])
        self.assertIn('RFC2119 SYSTEM', nits[0].msg)
        self.assertEqual(await xml.validate_external_entities(doc, mode=modes.SUBMISSION), [])

    async def test_xref_to_entity(self):
        doc = xmlparser.parse(self.raw)
        self.assertEqual(await xml.validate_xrefs(doc), [])
