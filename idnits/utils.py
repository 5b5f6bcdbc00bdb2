# Copyright The IETF Trust 2018-2024, All Rights Reserved
# -*- coding: utf-8 -*-

import re
import shutil
import textwrap

from collections import namedtuple

from idnits.patterns import DRAFT_VERSION_RE


Line = namedtuple('Line', ['num', 'txt'])

def split_lines(text):
    "Number the lines of a text, starting with 1"
    return [ Line(n, l) for (n, l) in enumerate(text.split('\n'), start=1) ]

def normalize_text(text):
    "Collapse all runs of whitespace to a single space"
    return re.sub(r'\s+', ' ', text).strip()

def normalize_draft_reference(ref):
    """Normalize a reference label to a draft name without version number:
    '[I-D.ietf-foo-bar]' and 'draft-ietf-foo-bar-03' both give
    'draft-ietf-foo-bar'.  Returns None for labels which don't name a draft."""
    name = ref.strip()
    name = re.sub(r'^\[|\]$', '', name)
    name = re.sub(r'^I-D\.(?:draft-)?', 'draft-', name, flags=re.I)
    name = DRAFT_VERSION_RE.sub('', name)
    if 'draft' not in name.lower():
        return None
    return name

def normalize_draft_references(refs):
    names = []
    for ref in refs:
        name = normalize_draft_reference(ref)
        if name:
            names.append(name)
    return names

def wrap(s, w=120, i=None):
    termsize = shutil.get_terminal_size((80, 24))
    cols = min(w, max(termsize[0], 60))

    lines = s.split('\n')
    wrapped = []
    # Preserve any indentation (after the general indentation)
    for line in lines:
        prev_indent = ' '*(i or 4)
        indent_match = re.search(r'^(\W+)', line)
        # Change the existing wrap indentation to the original one
        if (indent_match and not i):
            prev_indent = indent_match.group(0)
        wrapped.append(textwrap.fill(line, width=cols, subsequent_indent=prev_indent))
    return '\n'.join(wrapped)
