# Copyright The IETF Trust 2024, All Rights Reserved
# -*- coding: utf-8 -*-
"""The parsed document handed to the checks.

A document is either a TxtDoc or an XmlDoc; checks tell them apart by the
``type`` attribute ('txt' or 'xml').  Neither is modified after parsing.
"""

import datetime

from dataclasses import dataclass, field
from functools import cached_property
from typing import Literal, Optional

from lxml import etree

from idnits.utils import split_lines

DocKind = Literal["draft", "rfc", "unknown"]


@dataclass
class Author:
    name: str
    # None: not yet known; '': no affiliation
    org: Optional[str] = None


@dataclass
class DocDate:
    day: Optional[int]
    month: str
    year: int

    def as_date(self):
        """The date, or None if the month name isn't recognized or the date is invalid.
        A missing day defaults to the first of the month."""
        month = month_number(self.month)
        if month is None:
            return None
        try:
            return datetime.date(self.year, month, self.day or 1)
        except ValueError:
            return None


@dataclass
class Header:
    source: Optional[str] = None
    authors: list[Author] = field(default_factory=list)
    date: Optional[DocDate] = None
    expires: Optional[datetime.date] = None
    intended_status: Optional[str] = None
    category: Optional[str] = None
    issn: Optional[str] = None
    obsoletes: list[str] = field(default_factory=list)
    updates: list[str] = field(default_factory=list)
    rfc_number: Optional[str] = None


@dataclass
class Marker:
    start: int = 0
    end: int = 0
    closed: bool = False

    @property
    def found(self):
        return self.start > 0


@dataclass
class Ref:
    value: str
    subsection: Optional[str] = None


@dataclass
class Keyword:
    keyword: str
    line: int


@dataclass
class ExtractedElements:
    fqdn_domains: list[str] = field(default_factory=list)
    ipv4: list[str] = field(default_factory=list)
    ipv6: list[str] = field(default_factory=list)
    keywords_2119: list[Keyword] = field(default_factory=list)
    boilerplate_2119_keywords: list[str] = field(default_factory=list)
    obsoletes_rfc: list[str] = field(default_factory=list)
    updates_rfc: list[str] = field(default_factory=list)
    reference_section_rfc: list[Ref] = field(default_factory=list)
    non_reference_section_rfc: list[str] = field(default_factory=list)
    reference_section_draft_references: list[Ref] = field(default_factory=list)
    non_reference_section_draft_references: list[str] = field(default_factory=list)


@dataclass
class MisspelledKeyword:
    keyword: str
    line: int
    col: int


@dataclass
class PossibleIssues:
    # entries are nits.Pos values
    lines_with_spaces: list = field(default_factory=list)
    inline_code: list = field(default_factory=list)
    misspelled_keywords: list[MisspelledKeyword] = field(default_factory=list)
    hyphenated_lines: list = field(default_factory=list)


@dataclass
class Boilerplate:
    rfc2119: bool = False
    rfc8174: bool = False
    similar_boilerplate: bool = False


@dataclass
class Contains:
    code_blocks: bool = False
    revised_bsd_license: bool = False


@dataclass
class References:
    "Whether the text cites RFC 2119 and RFC 8174 anywhere"
    rfc2119: bool = False
    rfc8174: bool = False


@dataclass
class TxtData:
    page_count: int = 1
    header: Header = field(default_factory=Header)
    title: Optional[str] = None
    title_line: int = 0
    slug: Optional[str] = None
    slug_line: int = 0
    content: dict[str, list[str]] = field(default_factory=dict)
    markers: dict[str, Marker] = field(default_factory=dict)
    extracted: ExtractedElements = field(default_factory=ExtractedElements)
    possible_issues: PossibleIssues = field(default_factory=PossibleIssues)
    boilerplate: Boilerplate = field(default_factory=Boilerplate)
    references: References = field(default_factory=References)
    contains: Contains = field(default_factory=Contains)
    copyright_years: list[int] = field(default_factory=list)


@dataclass
class TxtDoc:
    filename: Optional[str]
    body: str
    data: TxtData = field(default_factory=TxtData)
    doc_kind: DocKind = "unknown"
    type: str = field(default="txt", init=False)

    @cached_property
    def lines(self):
        return split_lines(self.body)

    @property
    def has_header(self):
        return self.data.markers.get('header', Marker()).found and self.data.title is not None


@dataclass
class ExternalEntity:
    name: str
    type: str
    url: str


@dataclass
class XmlDoc:
    filename: Optional[str]
    body: str
    tree: etree._ElementTree
    external_entities: list[ExternalEntity] = field(default_factory=list)
    doc_kind: DocKind = "unknown"
    type: str = field(default="xml", init=False)

    @property
    def root(self):
        return self.tree.getroot()


month_names = [ 'january', 'february', 'march', 'april', 'may', 'june', 'july', 'august', 'september', 'october', 'november', 'december' ]

def month_number(name):
    "Month number from a full or abbreviated (at least 3 letters) English month name"
    if not name:
        return None
    name = name.strip().lower().rstrip('.')
    if name.isdigit():
        n = int(name)
        return n if 1 <= n <= 12 else None
    if len(name) < 3:
        return None
    for i, month in enumerate(month_names, start=1):
        if month.startswith(name) or name == month:
            return i
    return None
