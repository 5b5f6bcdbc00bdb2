# Copyright The IETF Trust 2018-2024, All Rights Reserved
# -*- coding: utf-8 -*-

from collections import namedtuple

from idnits import modes

ERR  = 'err'
WARN = 'warn'
COMM = 'comm'
NONE = 'none'

SEVERITIES = [ ERR, WARN, COMM, ]
longform = dict(err='error', warn='warning', comm='comment')

Nit  = namedtuple('Nit',  [ 'severity', 'code', 'msg', 'ref', 'lines', ])
Pos  = namedtuple('Pos',  [ 'line', 'col', ])

# Severity of a nit code in each of the three modes:
#              normal  forgive-checklist  submission
Rule = namedtuple('Rule', [ 'code', 'norm', 'easy', 'subm', ])


class ParseError(Exception):
    "The document could not be parsed at all; no checks can be run."

    def __init__(self, code, msg):
        super().__init__(msg)
        self.code = code
        self.msg = msg

    def __str__(self):
        return "%s: %s" % (self.code, self.msg)


def rule(code, norm=ERR, easy=WARN, subm=NONE):
    return Rule(code, norm, easy, subm)

def severity(r, mode):
    if   mode == modes.NORMAL:
        return r.norm
    elif mode == modes.FORGIVE_CHECKLIST:
        return r.easy
    elif mode == modes.SUBMISSION:
        return r.subm
    else:
        raise RuntimeError("Internal error: Unexpected mode: %s" % mode)

def report(nits, r, mode, msg, ref=None, lines=None):
    """Append a nit for rule r to the list nits, unless the rule is
    suppressed in the given mode.  Returns the nit, or None."""
    s = severity(r, mode)
    if s == NONE:
        return None
    nit = Nit(s, r.code, msg, ref, lines)
    nits.append(nit)
    return nit

def plural(l):
    n = len(l) if not isinstance(l, int) else l
    return n, ('' if n==1 else 's')

def has_errors(nits):
    return any( n.severity == ERR for n in nits )

def group(nits):
    "Group a list of nits by severity, in severity order"
    grouped = dict( (s, []) for s in SEVERITIES )
    for n in nits:
        grouped[n.severity].append(n)
    return grouped
