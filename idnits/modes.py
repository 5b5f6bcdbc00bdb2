# Copyright The IETF Trust 2024, All Rights Reserved
# -*- coding: utf-8 -*-

NORMAL = 'normal'
FORGIVE_CHECKLIST = 'forgive-checklist'
SUBMISSION = 'submission'

MODES = [ NORMAL, FORGIVE_CHECKLIST, SUBMISSION, ]

# Older command line spellings
aliases = {
    'lenient': FORGIVE_CHECKLIST,
    'forgive': FORGIVE_CHECKLIST,
    'strict': NORMAL,
}

def get_mode(name):
    """Map a mode name given on the command line (or by a caller) to one of
    the MODES, raising ValueError for unknown names."""
    if name is None:
        return NORMAL
    key = name.strip().lower().replace('_', '-')
    key = aliases.get(key, key)
    if key not in MODES:
        raise ValueError("Unknown mode: %s (expected one of %s)" % (name, ', '.join(MODES)))
    return key
