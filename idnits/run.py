# Copyright The IETF Trust 2018-2024, All Rights Reserved
# -*- coding: utf-8 indent-with-tabs: 0 -*-

import argparse
import datetime
import json
import os
import sys

from importlib import metadata

import idnits
import idnits.checks
import idnits.parser

from idnits import log, modes
from idnits.nits import ParseError, SEVERITIES, has_errors, longform
from idnits.utils import wrap

# ----------------------------------------------------------------------

def show_version(verbose=False):
    # Show version information, then exit
    print('%s %s' % (idnits.NAME, idnits.__version__))
    if verbose:
        try:
            requires = metadata.requires(idnits.NAME) or []
        except metadata.PackageNotFoundError:
            requires = []
        for req in requires:
            name = req.split(';')[0].split('[')[0]
            for c in '<>=!~ ':
                name = name.split(c)[0]
            try:
                print('  %s %s' % (name, metadata.version(name)))
            except metadata.PackageNotFoundError:
                pass

def die(*args):
    sys.stderr.write('Error: ' + ' '.join(args))
    sys.stderr.write('\n')
    sys.exit(1)

def format_lines(filename, nit):
    if not nit.lines:
        return []
    result = []
    for pos in nit.lines:
        if pos.col:
            result.append("%s(%s:%s)" % (filename, pos.line, pos.col))
        else:
            result.append("%s(%s)" % (filename, pos.line))
    return result

def summary(nits):
    parts = []
    for s in SEVERITIES:
        count = len([ n for n in nits if n.severity == s ])
        parts.append("%s %s%s" % (count, longform[s], '' if count==1 else 's'))
    return "Found %s." % ', '.join(parts)

def output_pretty(filename, nits, verbose=False):
    sys.stdout.write("Inspecting file %s\n" % filename)
    for s in SEVERITIES:
        found = [ n for n in nits if n.severity == s ]
        if not found:
            continue
        sys.stdout.write("\n%ss:\n\n" % longform[s].capitalize())
        for nit in found:
            sys.stdout.write(wrap("  * [%s] %s" % (nit.code, nit.msg), i=4))
            sys.stdout.write("\n")
            if nit.ref:
                sys.stdout.write("    See %s\n" % nit.ref)
            lines = format_lines(os.path.basename(filename), nit)
            if lines and verbose:
                for l in lines:
                    sys.stdout.write("      %s\n" % l)
            elif lines:
                more = len(lines) - 3
                sys.stdout.write("    At %s%s\n" % (', '.join(lines[:3]), " and %s more" % more if more > 0 else ''))
    sys.stdout.write("\n%s\n\n" % summary(nits))

def as_json(filename, size, nits):
    result = dict(
        result='fail' if has_errors(nits) else 'pass',
        file=dict(path=filename, size=size),
        nits=[],
    )
    for nit in nits:
        item = dict(code=nit.code, desc=nit.msg)
        if nit.ref:
            item['ref'] = nit.ref
        if nit.lines:
            item['line'] = [ dict(line=p.line, col=p.col) if p.col else dict(line=p.line) for p in nit.lines ]
        result['nits'].append(item)
    return result

def check_file(filename, options):
    """Parse and check one file, write the report in the selected format,
    and return True if the file passed."""
    try:
        size = os.path.getsize(filename)
        doc = idnits.parser.parse(filename, options=options)
    except OSError as e:
        die('Could not read %s:' % filename, str(e))
    except ParseError as e:
        if options.output == 'json':
            json.dump(dict(result='fail', file=dict(path=filename, size=size),
                           nits=[dict(code=e.code, desc=e.msg)]), sys.stdout, indent=2)
            sys.stdout.write('\n')
        elif options.output == 'count':
            sys.stdout.write("1\n")
        else:
            sys.stdout.write("Inspecting file %s\n\nErrors:\n\n" % filename)
            sys.stdout.write(wrap("  * [%s] %s" % (e.code, e.msg), i=4))
            sys.stdout.write("\n\n")
        return False

    checker = idnits.checks.Checker(doc, options)
    nits = checker.check()

    if options.output == 'json':
        json.dump(as_json(filename, size, nits), sys.stdout, indent=2)
        sys.stdout.write('\n')
    elif options.output == 'count':
        sys.stdout.write("%s\n" % len(nits))
    else:
        output_pretty(filename, nits, verbose=options.verbose)
    return not has_errors(nits)

def main(argv=None):
    # Populate options
    argparser = argparse.ArgumentParser(description=idnits.DESCRIPTION.split('\n')[0])
    argparser.add_argument('docs', metavar='DOC', nargs='*', help="document to check")

    argparser.add_argument('-d', '--debug', action='store_true', help="show debug information")
    argparser.add_argument('-m', '--mode', choices=modes.MODES + ['lenient', ], default=modes.NORMAL,
        help="the mode to run in, default=%(default)s ")
    argparser.add_argument('-o', '--output', choices=['pretty', 'json', 'count', ], default='pretty',
        help="the output format, default=%(default)s ")
    argparser.add_argument('-y', '--year', type=int, default=None,
        help="the expected copyright year, default is the current year for text documents")
    argparser.add_argument('--offline', action='store_true', help="don't look up document status remotely")
    argparser.add_argument('-s', '--silent', action='store_true', help="only set the exit code")
    argparser.add_argument('-v', '--verbose', action='store_true', help="be more verbose")
    argparser.add_argument('-V', '--version', action='store_true', help="show version information, then exit")

    options = argparser.parse_args(argv)
    for o in vars(options):
        assert hasattr(idnits.default_options, o), "Internal error: Missing a default option value for '%s'"%o

    if options.version:
        show_version(verbose=options.verbose)
        sys.exit(0)

    if not options.docs:
        argparser.print_usage(sys.stderr)
        die('No document given')

    options.mode = modes.get_mode(options.mode)
    if options.year is not None and not 1970 <= options.year <= datetime.date.today().year + 1:
        die('Unexpected year: %s' % options.year)
    log.configure(options)

    failed = 0
    for filename in options.docs:
        if options.silent:
            stdout = sys.stdout
            sys.stdout = open(os.devnull, 'w')
            try:
                passed = check_file(filename, options)
            finally:
                sys.stdout.close()
                sys.stdout = stdout
        else:
            passed = check_file(filename, options)
        if not passed:
            failed += 1

    sys.exit(1 if failed else 0)
