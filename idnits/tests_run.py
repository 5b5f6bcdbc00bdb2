# Copyright The IETF Trust 2018-2024, All Rights Reserved
# -*- coding: utf-8 -*-

import io
import json
import os
import shutil
import tempfile

from unittest import TestCase, mock

import idnits

from idnits.nits import Nit, Pos, WARN
from idnits.run import as_json, format_lines, main, summary
from idnits.test_data import TXT_DRAFT, TXT_FILENAME, XML_FILENAME, txt_draft


class HelperTests(TestCase):

    def test_summary(self):
        nits = [ Nit(WARN, 'A', 'a', None, None), Nit(WARN, 'B', 'b', None, None), Nit('comm', 'C', 'c', None, None) ]
        self.assertEqual(summary(nits), 'Found 0 errors, 2 warnings, 1 comment.')

    def test_format_lines(self):
        nit = Nit(WARN, 'A', 'a', None, [ Pos(3, 7), Pos(12, None) ])
        self.assertEqual(format_lines('draft.txt', nit), ['draft.txt(3:7)', 'draft.txt(12)'])
        self.assertEqual(format_lines('draft.txt', nit._replace(lines=None)), [])

    def test_as_json(self):
        nits = [ Nit('err', 'A', 'a', 'https://example.com/', [ Pos(3, 7), Pos(4, None) ]), Nit(WARN, 'B', 'b', None, None) ]
        self.assertEqual(as_json('draft.txt', 42, nits), {
            'result': 'fail',
            'file': {'path': 'draft.txt', 'size': 42},
            'nits': [
                {'code': 'A', 'desc': 'a', 'ref': 'https://example.com/', 'line': [{'line': 3, 'col': 7}, {'line': 4}]},
                {'code': 'B', 'desc': 'b'},
            ],
        })
        self.assertEqual(as_json('draft.txt', 42, nits[1:])['result'], 'pass')


class MainTests(TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.clean = self.write(TXT_FILENAME, TXT_DRAFT)
        self.broken = self.write('draft-doe-example-protocol-01.txt', txt_draft('1.  Introduction\n\n   Text.\n'))

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def write(self, name, content):
        path = os.path.join(self.tmpdir, name)
        with io.open(path, 'w', encoding='utf-8') as file:
            file.write(content)
        return path

    def run_main(self, *args):
        "Run the command line, returning the exit code and the output"
        with mock.patch('sys.stdout', new_callable=io.StringIO) as stdout, \
             mock.patch('sys.stderr', new_callable=io.StringIO) as stderr:
            with self.assertRaises(SystemExit) as cm:
                main(list(args))
        return cm.exception.code, stdout.getvalue(), stderr.getvalue()

    def test_json_output(self):
        code, out, err = self.run_main('--offline', '-y', '2024', '-o', 'json', self.clean)
        self.assertEqual(code, 0)
        result = json.loads(out)
        self.assertEqual(result['result'], 'pass')
        self.assertEqual(result['file'], {'path': self.clean, 'size': os.path.getsize(self.clean)})
        self.assertTrue(set( n['code'] for n in result['nits'] ) <= set(['DOC_DATE_IN_PAST']))

    def test_failing_document(self):
        code, out, err = self.run_main('--offline', '-o', 'json', self.broken)
        self.assertEqual(code, 1)
        result = json.loads(out)
        self.assertEqual(result['result'], 'fail')
        self.assertIn('MISSING_ABSTRACT_SECTION', [ n['code'] for n in result['nits'] ])

    def test_pretty_output(self):
        code, out, err = self.run_main('--offline', '-m', 'lenient', self.broken)
        self.assertEqual(code, 1)
        self.assertTrue(out.startswith('Inspecting file %s' % self.broken))
        self.assertIn('\nErrors:\n', out)
        self.assertIn('\nWarnings:\n', out)
        self.assertIn('  * [MISSING_ABSTRACT_SECTION]', out)
        self.assertIn('  * [MISSING_AUTHOR_SECTION]', out)
        self.assertIn('    See ', out)
        self.assertRegex(out, r'Found \d+ errors?, \d+ warnings?, \d+ comments?\.')

    def test_count_output(self):
        code, out, err = self.run_main('--offline', '-o', 'count', '-m', 'submission', self.broken)
        self.assertEqual(code, 1)
        self.assertRegex(out, r'^\d+\n$')
        self.assertGreater(int(out), 0)

    def test_silent(self):
        code, out, err = self.run_main('--offline', '-s', self.clean, self.broken)
        self.assertEqual(code, 1)
        self.assertEqual(out, '')

    def test_parse_error(self):
        path = self.write(XML_FILENAME, '<rfc><front></rfc>')
        code, out, err = self.run_main('-o', 'json', path)
        self.assertEqual(code, 1)
        result = json.loads(out)
        self.assertEqual(result['result'], 'fail')
        self.assertEqual(result['nits'][0]['code'], 'XML_PARSING_FAILED')
        code, out, err = self.run_main(path)
        self.assertIn('[XML_PARSING_FAILED]', out)

    def test_missing_file(self):
        code, out, err = self.run_main(os.path.join(self.tmpdir, 'draft-doe-missing-00.txt'))
        self.assertEqual(code, 1)
        self.assertIn('Could not read', err)

    def test_usage_errors(self):
        code, out, err = self.run_main()
        self.assertEqual(code, 1)
        self.assertIn('No document given', err)
        code, out, err = self.run_main('-y', '1900', self.clean)
        self.assertEqual(code, 1)
        self.assertIn('Unexpected year', err)
        code, out, err = self.run_main('-m', 'sloppy', self.clean)
        self.assertEqual(code, 2)

    def test_version(self):
        code, out, err = self.run_main('-V')
        self.assertEqual(code, 0)
        self.assertEqual(out.splitlines()[0], 'idnits %s' % idnits.__version__)
