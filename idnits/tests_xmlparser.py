# Copyright The IETF Trust 2024, All Rights Reserved
# -*- coding: utf-8 -*-

from unittest import TestCase

from idnits.nits import ParseError
from idnits.test_data import XML_DRAFT, XML_FILENAME, xml_draft
from idnits.xmlparser import (REF_TYPE_INFORMATIVE, REF_TYPE_NORMATIVE, REF_TYPE_UNKNOWN,
    extract_entities, get_refs, parse, running_text)


class ParseTests(TestCase):

    def test_parse(self):
        doc = parse(XML_DRAFT, XML_FILENAME)
        self.assertEqual(doc.type, 'xml')
        self.assertEqual(doc.doc_kind, 'draft')
        self.assertEqual(doc.root.tag, 'rfc')
        self.assertEqual(doc.root.get('docName'), 'draft-doe-example-protocol-00')
        self.assertEqual(doc.external_entities, [])

    def test_rfc_kind(self):
        doc = parse(xml_draft(attrs='number="9999" ipr="trust200902"'), 'rfc9999.xml')
        self.assertEqual(doc.doc_kind, 'rfc')

    def test_malformed(self):
        with self.assertRaises(ParseError) as cm:
            parse('<rfc><front></rfc>')
        self.assertEqual(cm.exception.code, 'XML_PARSING_FAILED')

    def test_comments_removed(self):
        doc = parse(xml_draft(middle='<!-- a comment --><section><name>Introduction</name><t>Text</t></section>'))
        self.assertEqual([ e.tag for e in doc.root.find('middle') ], ['section'])


class EntityTests(TestCase):

    raw = (b'<?xml version="1.0" encoding="utf-8"?>\n'
           b'<!DOCTYPE rfc [\n'
           b'<!ENTITY RFC2119 SYSTEM "https://bib.ietf.org/public/rfc/bibxml/reference.RFC.2119.xml">\n'
           b']>\n'
           b'<rfc docName="draft-doe-example-protocol-00"><front><title>Test</title></front>'
           b'<back><references><name>Normative References</name>&RFC2119;</references></back></rfc>\n')

    def test_extract_entities(self):
        raw, entities = extract_entities(self.raw)
        self.assertEqual(len(entities), 1)
        self.assertEqual(entities[0].name, 'RFC2119')
        self.assertEqual(entities[0].type, 'SYSTEM')
        self.assertEqual(entities[0].url, 'https://bib.ietf.org/public/rfc/bibxml/reference.RFC.2119.xml')
        self.assertNotIn(b'&RFC2119;', raw)
        self.assertNotIn(b'<!ENTITY', raw)

    def test_extract_entities_on_one_line(self):
        raw, entities = extract_entities(
            b'<!DOCTYPE rfc [<!ENTITY A SYSTEM "https://example.com/a.xml"><!ENTITY B PUBLIC "https://example.com/b.xml">]>'
            b'<rfc>&A;&B;</rfc>')
        self.assertEqual([ (e.name, e.type, e.url) for e in entities ], [
            ('A', 'SYSTEM', 'https://example.com/a.xml'),
            ('B', 'PUBLIC', 'https://example.com/b.xml'),
        ])
        self.assertEqual(raw, b'<!DOCTYPE rfc []><rfc></rfc>')

    def test_parse_with_entities(self):
        doc = parse(self.raw)
        self.assertEqual([ e.name for e in doc.external_entities ], ['RFC2119'])
        self.assertEqual(len(doc.root.findall('back/references/reference')), 0)


class ReferenceTests(TestCase):

    def test_get_refs(self):
        doc = parse(xml_draft(back='''
            <references>
              <name>References</name>
              <references>
                <name>Normative References</name>
                <reference anchor="RFC2119"/>
                <xi:include href="https://bib.ietf.org/public/rfc/bibxml3/reference.I-D.ietf-foo-bar.xml"/>
              </references>
              <references>
                <name>Informative References</name>
                <reference anchor="SOMETHING">
                  <seriesInfo name="RFC" value="4086"/>
                </reference>
                <reference anchor="I-D.doe-other">
                  <seriesInfo name="Internet-Draft" value="draft-doe-other-02"/>
                </reference>
              </references>
            </references>
            <references>
              <name>Further Reading</name>
              <xi:include href="https://bib.ietf.org/public/rfc/bibxml/reference.RFC.1234.xml"/>
            </references>
        '''))
        refs = get_refs(doc.root)
        self.assertEqual(list(refs.items()), [
            ('RFC 2119', REF_TYPE_NORMATIVE),
            ('draft-ietf-foo-bar', REF_TYPE_NORMATIVE),
            ('RFC 4086', REF_TYPE_INFORMATIVE),
            ('draft-doe-other', REF_TYPE_INFORMATIVE),
            ('RFC 1234', REF_TYPE_UNKNOWN),
        ])

    def test_draft_labels(self):
        doc = parse(xml_draft(back='''
            <references><name>Normative References</name>
              <reference anchor="draft-ietf-foo-bar-03"/>
              <reference anchor="I-D.doe-thing"/>
              <reference anchor="I-D.ietf-baz">
                <seriesInfo name="Internet-Draft" value="draft-ietf-baz-11"/>
              </reference>
              <xi:include href="https://bib.ietf.org/public/rfc/bibxml3/reference.I-D.draft-ietf-qux-00.xml"/>
              <reference anchor="ISO.3166"/>
            </references>'''))
        self.assertEqual(list(get_refs(doc.root)), [
            'draft-ietf-foo-bar', 'draft-doe-thing', 'draft-ietf-baz', 'draft-ietf-qux', 'ISO.3166',
        ])

    def test_running_text(self):
        doc = parse(xml_draft(middle='''
            <section><name>Introduction</name>
              <t>See <xref target="RFC2119"/> and
                 <xref target="RFC8174">the update</xref>.</t>
              <sourcecode>int x = 192.168.0.1;</sourcecode>
            </section>
        '''))
        text = running_text(doc.root)
        self.assertIn('See [RFC2119] and the update.', text)
        self.assertNotIn('192.168.0.1', text)
        # the document itself is unchanged
        self.assertIsNone(doc.root.find('.//xref').text)
