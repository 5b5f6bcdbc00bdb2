# Copyright The IETF Trust 2022-2024, All Rights Reserved
# -*- coding: utf-8 -*-
import copy
import re

from lxml import etree

from idnits.document import ExternalEntity, XmlDoc
from idnits.log import log
from idnits.nits import ParseError
from idnits.utils import normalize_draft_reference, normalize_text

XINCLUDE_NS = 'http://www.w3.org/2001/XInclude'
XI = '{%s}' % XINCLUDE_NS

ENTITY_DECL_RE = re.compile(rb'<!ENTITY\s+([a-zA-Z0-9-._]+)\s+(SYSTEM|PUBLIC)\s+"([^"]*)"\s*>')

REF_TYPE_NORMATIVE = 'normative'
REF_TYPE_INFORMATIVE = 'informative'
REF_TYPE_UNKNOWN = 'unknown'


def extract_entities(raw):
    """Remove external entity declarations, and references to them, from
    the raw document.  Returns the cleaned bytes and the removed entities."""
    entities = []
    def collect(match):
        name, type, url = [ g.decode('utf-8', errors='replace') for g in match.groups() ]
        entities.append(ExternalEntity(name=name, type=type, url=url))
        return b''
    raw = ENTITY_DECL_RE.sub(collect, raw)
    for entity in entities:
        raw = raw.replace(b'&%s;' % entity.name.encode('utf-8'), b'')
    return raw, entities


def parse(raw, filename=None):
    """Parse an xml2rfc document given as bytes or str.

    External entities are never fetched or expanded; they are recorded on
    the returned XmlDoc so that the checks can report them.  Raises
    ParseError('XML_PARSING_FAILED', ...) for malformed input."""
    if isinstance(raw, str):
        raw = raw.encode('utf-8')
    raw, entities = extract_entities(raw)
    parser = etree.XMLParser(remove_comments=True, remove_pis=True, resolve_entities=False,
                             no_network=True, load_dtd=False)
    try:
        tree = etree.ElementTree(etree.fromstring(raw, parser=parser))
    except (etree.XMLSyntaxError, ValueError) as e:
        log("Failed parsing %s: %s" % (filename, e))
        raise ParseError('XML_PARSING_FAILED', str(e)) from e
    root = tree.getroot()
    name = (filename or '').lower()
    if root.get('number') or (name.startswith('rfc') and not root.get('docName')):
        doc_kind = 'rfc'
    elif root.get('docName') or name.startswith('draft-'):
        doc_kind = 'draft'
    else:
        doc_kind = 'unknown'
    return XmlDoc(filename=filename, body=raw.decode('utf-8', errors='replace'), tree=tree,
                  external_entities=entities, doc_kind=doc_kind)


# ----------------------------------------------------------------------
# References

def draft_label(label):
    "The versionless draft name for an 'I-D.x' or 'draft-x-NN' label, else None"
    name = normalize_draft_reference(label)
    if name and name.lower().startswith('draft-'):
        return name
    return None


def document_name(ref):
    """Get a document label ('RFC 1234' or a versionless draft name) from a
    <reference> or <xi:include> element, or '' if none can be determined."""
    if ref.tag == XI + 'include':
        href = ref.get('href', '')
        name = re.search(r'reference\.RFC\.(\d{4})\.xml', href)
        if name:
            return 'RFC %d' % int(name.group(1))
        name = re.search(r'reference\.(I-D\..*)\.xml', href)
        if name:
            return draft_label(name.group(1)) or ''
        return ''
    anchor = (ref.get('anchor') or '').strip()
    match = re.match(r'^RFC ?(\d+)$', anchor, re.I)
    if match:
        return 'RFC %d' % int(match.group(1))
    for info in ref.findall('./seriesInfo'):
        value = (info.get('value') or '').strip()
        if not value:
            continue
        if info.get('name') == 'RFC':
            return 'RFC %d' % int(value) if value.isdigit() else ''
        elif info.get('name') == 'Internet-Draft':
            return draft_label(value) or value
    return draft_label(anchor) or anchor


def section_name(section):
    name = section.findtext('name')
    if name is None and 'title' in section.keys():
        name = section.get('title')
    return name


def reference_section_type(name):
    "Determine reference type from name of references section"
    if name:
        name = name.lower()
        if 'normative' in name:
            return REF_TYPE_NORMATIVE
        elif 'informative' in name:
            return REF_TYPE_INFORMATIVE
    return REF_TYPE_UNKNOWN


def reference_sections(root):
    "All <references> elements, including nested ones"
    return root.findall('back//references')


def get_refs(root):
    """Map the label of each referenced document to the type of the
    references section it's listed in, in document order."""
    refs = {}
    for section in reference_sections(root):
        ref_type = reference_section_type(section_name(section))
        # a nested section without a type of its own inherits its parent's
        parent = section.getparent()
        if ref_type == REF_TYPE_UNKNOWN and parent is not None and parent.tag == 'references':
            ref_type = reference_section_type(section_name(parent))
        for ref in section.iterchildren('reference', 'referencegroup', XI + 'include'):
            name = document_name(ref)
            if name and not name in refs:
                refs[name] = ref_type
    return refs


def running_text(root):
    "The whitespace-normalized text of the document, leaving out code and artwork"
    root = copy.deepcopy(root)
    etree.strip_elements(root, 'sourcecode', 'artwork', with_tail=False)
    # render empty cross-references the way they appear in text output
    for xref in root.iter('xref'):
        if not xref.text and len(xref) == 0 and xref.get('target'):
            xref.text = '[%s]' % xref.get('target')
    return normalize_text(''.join(root.itertext()))
