# Copyright The IETF Trust 2017-2024, All Rights Reserved
# -*- coding: utf-8 -*-
"""Single-pass structure recovery for plain-text drafts and RFCs.

The first page header is read as two columns: on the left the stream or
workgroup, document label and metadata fields, on the right the authors,
their organizations and the date.  The header ends at the first gap; the
next line is the title, the one after it the slug.  After that, numbered
and author-address headings open the sections the checks look at, and
each line is scanned for references, keywords, addresses and layout
issues independently of where it occurs.
"""

import re

from idnits import patterns as p
from idnits.document import Author, DocDate, Keyword, Marker, MisspelledKeyword, Ref, TxtData, TxtDoc
from idnits.log import log
from idnits.nits import ParseError, Pos
from idnits.utils import normalize_text, split_lines


def decode(raw):
    "Decode utf-8 input, reporting the line of any invalid byte sequence"
    if isinstance(raw, str):
        return raw
    try:
        return raw.decode('utf-8')
    except UnicodeDecodeError as e:
        line = raw[:e.start].count(b'\n') + 1
        raise ParseError('TXT_PARSING_FAILED', "Error while parsing line %d: invalid utf-8 byte 0x%02x in column %d"
            % (line, raw[e.start], e.start - raw.rfind(b'\n', 0, e.start)))


def parse_date(text):
    "Parse '4 March 2024', 'March 4, 2024' or 'March 2024'; None if not a date"
    if not text:
        return None
    match = p.DATE_RE.match(text.strip())
    if not match:
        return None
    day = match.group('day') or match.group('mday')
    date = DocDate(int(day) if day else None, match.group('month'), int(match.group('year')))
    if date.as_date() is None:
        return None
    return date


class TxtParser():

    def __init__(self, filename, text):
        self.filename = filename
        self.text = text.replace('\r\n', '\n').replace('\r', '\n').expandtabs()
        self.data = TxtData()
        self.data.markers = dict( (name, Marker()) for name in ['header', ] + p.SECTIONS )
        self.doc_kind = None
        self.section = None
        self.subsection = None
        self.in_code_block = False
        self.last_right_line = 0

    def parse(self):
        self.scan_text()
        lines = split_lines(self.text)
        num = 0
        try:
            for i, (num, line) in enumerate(lines):
                next_line = lines[i+1].txt if i+1 < len(lines) else ''
                self.parse_line(num, line, next_line)
            self.close_section(num)
        except ParseError:
            raise
        except Exception as e:
            log("Failed parsing %s at line %d" % (self.filename, num), e=e)
            raise ParseError('TXT_PARSING_FAILED', "Error while parsing line %d: %s" % (num, e)) from e
        return TxtDoc(filename=self.filename, body=self.text, data=self.data,
            doc_kind=self.doc_kind or self.guess_kind())

    def guess_kind(self):
        name = (self.filename or '').lower()
        if name.startswith('rfc'):
            return 'rfc'
        elif name.startswith('draft-'):
            return 'draft'
        return 'unknown'

    # ------------------------------------------------------------------
    # Whole-text scans

    def scan_text(self):
        text = normalize_text(self.text)
        data = self.data
        bp = p.boilerplate_patterns
        data.boilerplate.rfc2119 = bool(bp['rfc2119'].search(text) or bp['rfc2119_alt'].search(text))
        data.boilerplate.rfc8174 = bool(bp['rfc8174'].search(text))
        data.extracted.boilerplate_2119_keywords = p.boilerplate_keywords(text)
        data.boilerplate.similar_boilerplate = p.has_boilerplate_match(text, *p.boilerplate_parts.values())
        data.extracted.obsoletes_rfc += p.extract_rfc_numbers(text, p.OBSOLETES_RE)
        data.extracted.updates_rfc += p.extract_rfc_numbers(text, p.UPDATES_RE)
        data.contains.revised_bsd_license = bool(p.REVISED_BSD_LICENSE_RE.search(text))

    # ------------------------------------------------------------------
    # Per-line processing

    def parse_line(self, num, line, next_line):
        data = self.data
        markers = data.markers
        stripped = line.strip()

        if '\f' in line:
            data.page_count += 1
            return
        if not stripped:
            return

        self.extract_elements(num, line, stripped, next_line)

        header = markers['header']
        if not header.found:
            self.parse_first_line(num, stripped)
            return
        elif not header.closed:
            if num > header.end + 1:
                header.closed = True
                data.title = stripped
                data.title_line = num
                return
            header.end = num
            self.parse_header_line(num, line, stripped)
            return

        if data.title and num == data.title_line + 1:
            data.slug = stripped
            data.slug_line = num
            return

        # Abstract
        abstract = markers[p.ABSTRACT]
        if stripped == 'Abstract':
            self.close_section(num - 1)
            self.open_section(p.ABSTRACT, num)
            return
        elif self.section == p.ABSTRACT and not abstract.closed:
            if stripped.startswith('Status of') or not line.startswith('  '):
                self.close_section(num - 1)

        # Sections
        if p.SECTION_RE.match(stripped) or p.AUTHOR_SECTION_RE.match(stripped):
            name = p.match_section(stripped)
            self.close_section(num - 1)
            self.subsection = None
            if name:
                self.open_section(name, num)
                if name == p.REFERENCES:
                    self.subsection = p.match_subsection(stripped)
            return

        # Subsections
        if p.SUBSECTION_RE.match(stripped) and not p.TOC_RE.search(stripped):
            self.subsection = p.match_subsection(stripped)
            if self.section and not markers[self.section].closed:
                data.content[self.section].append(stripped)
            return

        if self.section and not markers[self.section].closed:
            data.content[self.section].append(stripped)

    def open_section(self, name, num):
        marker = self.data.markers[name]
        marker.start = num
        marker.end = 0
        marker.closed = False
        self.data.content[name] = []
        self.section = name

    def close_section(self, num):
        if self.section:
            marker = self.data.markers[self.section]
            if not marker.closed:
                marker.end = max(num, marker.start)
                marker.closed = True
        self.section = None

    # ------------------------------------------------------------------
    # Header

    def parse_first_line(self, num, stripped):
        header = self.data.markers['header']
        header.start = num
        header.end = num
        match = p.LINE_VALUES_EXTRACT_RE.match(stripped)
        if match:
            self.data.header.source = match.group('left').strip()
            self.parse_right_column(num, match.group('right').strip())
        else:
            self.data.header.source = stripped
        self.parse_left_column(self.data.header.source)

    def parse_header_line(self, num, line, stripped):
        match = p.LINE_VALUES_EXTRACT_RE.match(line.rstrip())
        if match:
            left, right = match.group('left').strip(), match.group('right').strip()
        else:
            left, right = stripped, None
        if left:
            self.parse_left_column(left)
        if right:
            self.parse_right_column(num, right)
        elif left and not self.data.header.date:
            date = parse_date(left)
            if date:
                self.data.header.date = date

    def parse_left_column(self, left):
        header = self.data.header
        label, __, value = left.partition(':')
        value = value.strip()
        if re.search(r'Internet[- ]Draft', left, re.I):
            self.doc_kind = 'draft'
        elif left.startswith('Request for Comments'):
            header.rfc_number = value or None
            self.doc_kind = 'rfc'
        elif label.startswith('Intended'):
            header.intended_status = p.extract_status_name(value) or value
        elif label.startswith('Obsoletes'):
            header.obsoletes = p.NUMBER_RE.findall(value)
        elif label.startswith('Updates'):
            header.updates = p.NUMBER_RE.findall(value)
        elif label.startswith('Category'):
            header.category = p.extract_status_name(value) or value
        elif label.startswith('ISSN'):
            header.issn = value
        elif label.startswith('Expires'):
            date = parse_date(value)
            if date:
                header.expires = date.as_date()

    def parse_right_column(self, num, right):
        header = self.data.header
        if header.date:
            # nothing but the date is expected after the date
            return
        date = parse_date(right)
        if date:
            header.date = date
            return
        if p.AUTHOR_NAME_RE.match(right):
            if header.authors and num > self.last_right_line + 1:
                # a blank right column ends the affiliation of earlier authors
                self.set_org('')
            header.authors.append(Author(name=right))
        elif header.authors:
            self.set_org(right)
        else:
            header.authors.append(Author(name=right))
        self.last_right_line = num

    def set_org(self, org):
        "Set the organization of the trailing authors which don't have one yet"
        for author in reversed(self.data.header.authors):
            if author.org is not None:
                break
            author.org = org

    # ------------------------------------------------------------------
    # Lexical elements

    def extract_elements(self, num, line, stripped, next_line):
        data = self.data
        extracted = data.extracted
        issues = data.possible_issues
        in_references = self.section == p.REFERENCES

        for match in p.RFC_REFERENCE_RE.finditer(stripped):
            number = match.group(1) or match.group(2)
            if in_references:
                if not any( r.value == number for r in extracted.reference_section_rfc ):
                    extracted.reference_section_rfc.append(Ref(number, self.subsection))
            elif not number in extracted.non_reference_section_rfc:
                extracted.non_reference_section_rfc.append(number)

        for match in p.NON_RFC_REFERENCE_RE.finditer(stripped):
            name = match.group(0)
            if in_references:
                if not any( r.value == name for r in extracted.reference_section_draft_references ):
                    extracted.reference_section_draft_references.append(Ref(name, self.subsection))
            elif not name in extracted.non_reference_section_draft_references:
                extracted.non_reference_section_draft_references.append(name)

        if p.RFC2119_CITATION_RE.search(stripped):
            data.references.rfc2119 = True
        if p.RFC8174_CITATION_RE.search(stripped):
            data.references.rfc8174 = True

        for match in p.KEYWORDS_RE.finditer(stripped):
            extracted.keywords_2119.append(Keyword(match.group(0), num))
        for match in p.INVALID_COMBINATIONS_RE.finditer(line):
            issues.misspelled_keywords.append(MisspelledKeyword(match.group(0), num, match.start()+1))

        header = data.markers['header']
        in_header = not header.found or not header.closed
        if not in_header and p.SPACING_RE.search(stripped) and not p.PAGE_HEADER_RE.match(stripped):
            issues.lines_with_spaces.append(Pos(num, len(line)))

        if p.CODE_BEGINS_RE.search(stripped):
            self.in_code_block = True
            data.contains.code_blocks = True
        if p.CODE_ENDS_RE.search(stripped):
            self.in_code_block = False

        if not self.in_code_block:
            match = p.INLINE_CODE_RE.search(line)
            if match:
                issues.inline_code.append(Pos(num, match.start()+1))
            if not in_header and p.HYPHENATED_LINE_RE.search(stripped) and re.match(r'^\s*[a-z]', next_line):
                issues.hyphenated_lines.append(Pos(num, len(line.rstrip())))

        for match in p.FQDN_RE.finditer(stripped):
            extracted.fqdn_domains.append(match.group('domain'))
        heading = p.HEADING_NUMBER_RE.match(stripped)
        for match in p.IPV4_RE.finditer(stripped):
            if heading and match.start() == 0:
                continue
            extracted.ipv4.append(match.group(0))
        for match in p.IPV6_LOOSE_RE.finditer(stripped):
            extracted.ipv6.append(match.group(0))

        match = p.COPYRIGHT_RE.search(stripped)
        if match:
            data.copyright_years.append(int(match.group('year')))


def parse(raw, filename=None):
    """Parse a plain-text document, given as bytes or str.

    Raises ParseError('TXT_PARSING_FAILED', ...) if the document can't be
    decoded or parsed."""
    text = decode(raw)
    return TxtParser(filename, text).parse()
