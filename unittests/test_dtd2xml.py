#! /usr/bin/env python

import io
import json
import os.path
import shutil
import tempfile
import unittest
from unittest import mock

from dtdxml import dtd2xml


XML_DECL = '<?xml version="1.0" encoding="UTF-8"?>'

TEST_DATA_DIR = os.path.join(
    os.path.split(os.path.abspath(__file__))[0], 'data_dtd')


def suite():
    loader = unittest.TestLoader()
    return unittest.TestSuite((
        loader.loadTestsFromTestCase(SettingsTests),
        loader.loadTestsFromTestCase(CommandTests)
    ))


class SettingsTests(unittest.TestCase):

    def setUp(self):        # noqa
        self.d = tempfile.mkdtemp('.d', 'dtdxml-')

    def tearDown(self):     # noqa
        shutil.rmtree(self.d, True)

    def options(self, *args):
        parser = dtd2xml.OptionParser()
        dtd2xml.add_options(parser)
        options, args = parser.parse_args(list(args))
        return options

    def test_defaults(self):
        settings = dtd2xml.load_settings(self.options())
        self.assertTrue(settings['level'] == dtd2xml.logging.ERROR)
        self.assertTrue(settings['strict'] is False)
        self.assertTrue(settings['atomic'] is False)
        self.assertTrue(settings['ascii'] is False)
        self.assertTrue(settings['tab'] == '\t')

    def test_options(self):
        settings = dtd2xml.load_settings(
            self.options('-vv', '--strict', '--atomic', '-a', '-t', '  '))
        self.assertTrue(settings['level'] == dtd2xml.logging.INFO)
        self.assertTrue(settings['strict'] is True)
        self.assertTrue(settings['atomic'] is True)
        self.assertTrue(settings['ascii'] is True)
        self.assertTrue(settings['tab'] == '  ')
        settings = dtd2xml.load_settings(self.options('-vvvvv'))
        self.assertTrue(settings['level'] == dtd2xml.logging.DEBUG)

    def test_file(self):
        path = os.path.join(self.d, 'settings.json')
        with open(path, 'w') as f:
            json.dump({'DTD2XML': {'level': 10, 'strict': True, 'tab': ''},
                       'Other': {'level': 50}}, f)
        settings = dtd2xml.load_settings(
            self.options('--settings', path))
        self.assertTrue(settings['level'] == 10)
        self.assertTrue(settings['strict'] is True)
        self.assertTrue(settings['atomic'] is False)
        self.assertTrue(settings['tab'] == '')
        # command line options override the file
        settings = dtd2xml.load_settings(
            self.options('--settings', path, '-v', '-t', '\t'))
        self.assertTrue(settings['level'] == dtd2xml.logging.WARNING)
        self.assertTrue(settings['tab'] == '\t')


class CommandTests(unittest.TestCase):

    def setUp(self):        # noqa
        self.d = tempfile.mkdtemp('.d', 'dtdxml-')
        self.dtd_path = os.path.join(self.d, 'note.dtd')
        with open(self.dtd_path, 'w', encoding='utf-8') as f:
            f.write("<!ELEMENT note (#PCDATA)>\n<!ELEMENT other (#PCDATA)>")
        self.data_path = os.path.join(self.d, 'note.json')
        with open(self.data_path, 'w', encoding='utf-8') as f:
            json.dump({'note': 'Caf\xe9 & more'}, f)
        self.out_path = os.path.join(self.d, 'note.xml')

    def tearDown(self):     # noqa
        shutil.rmtree(self.d, True)

    def read_output(self):
        with open(self.out_path, 'r', encoding='utf-8') as f:
            return f.read()

    def test_output_file(self):
        result = dtd2xml.main(['-o', self.out_path, '-t', '',
                               self.dtd_path, self.data_path])
        self.assertTrue(result == 0)
        output = self.read_output()
        self.assertTrue(
            output == XML_DECL + '\n<note>Caf\xe9 &amp; more</note>\n',
            repr(output))

    def test_ascii(self):
        result = dtd2xml.main(['-o', self.out_path, '-t', '', '--ascii',
                               self.dtd_path, self.data_path])
        self.assertTrue(result == 0)
        self.assertTrue(self.read_output() ==
                        XML_DECL + '\n<note>Caf&#xE9; &amp; more</note>\n')

    def test_book(self):
        result = dtd2xml.main(
            ['-o', self.out_path,
             os.path.join(TEST_DATA_DIR, 'book.dtd'),
             os.path.join(TEST_DATA_DIR, 'book.json')])
        self.assertTrue(result == 0)
        self.assertTrue(
            self.read_output() == XML_DECL + '\n<book>\n\t<title>T</title>'
            '\n\t<author>A1</author>\n\t<author>A2</author>\n</book>\n')

    def test_stdout(self):
        with mock.patch('sys.stdout', new_callable=io.StringIO) as stdout:
            result = dtd2xml.main(['-t', '', self.dtd_path, self.data_path])
        self.assertTrue(result == 0)
        self.assertTrue(stdout.getvalue() ==
                        XML_DECL + '\n<note>Caf\xe9 &amp; more</note>\n')

    def test_stdin(self):
        data = io.StringIO(json.dumps({'note': 'hi'}))
        with mock.patch('sys.stdin', data):
            result = dtd2xml.main(['-o', self.out_path, '-t', '',
                                   self.dtd_path, '-'])
        self.assertTrue(result == 0)
        self.assertTrue(self.read_output() ==
                        XML_DECL + '\n<note>hi</note>\n')

    def test_root(self):
        path = os.path.join(self.d, 'two.json')
        with open(path, 'w', encoding='utf-8') as f:
            json.dump({'note': 'one', 'other': 'two'}, f)
        result = dtd2xml.main(['-o', self.out_path, self.dtd_path, path])
        self.assertTrue(result == 1)
        result = dtd2xml.main(['-o', self.out_path, '-t', '',
                               '-r', 'other', self.dtd_path, path])
        self.assertTrue(result == 0)
        self.assertTrue(self.read_output() ==
                        XML_DECL + '\n<other>two</other>\n')

    def test_errors(self):
        result = dtd2xml.main(
            ['-o', self.out_path,
             os.path.join(TEST_DATA_DIR, 'book.dtd'),
             os.path.join(TEST_DATA_DIR, 'no_author.json')])
        self.assertTrue(result == 1)
        self.assertFalse(os.path.exists(self.out_path))
        # missing data file
        result = dtd2xml.main(
            [self.dtd_path, os.path.join(self.d, 'missing.json')])
        self.assertTrue(result == 1)
        # bad JSON
        path = os.path.join(self.d, 'bad.json')
        with open(path, 'w') as f:
            f.write("{'note': ")
        result = dtd2xml.main([self.dtd_path, path])
        self.assertTrue(result == 1)
        # bad DTD
        result = dtd2xml.main(["<!ELEMENT note (a, b>", self.data_path])
        self.assertTrue(result == 1)

    def test_encoding_errors(self):
        dtd_path = os.path.join(self.d, 'latin1.dtd')
        with open(dtd_path, 'wb') as f:
            f.write("<!-- caf\xe9 -->\n<!ELEMENT note (#PCDATA)>".encode(
                'latin-1'))
        result = dtd2xml.main([dtd_path, self.data_path])
        self.assertTrue(result == 1)
        data_path = os.path.join(self.d, 'latin1.json')
        with open(data_path, 'wb') as f:
            f.write('{"note": "caf\xe9"}'.encode('latin-1'))
        result = dtd2xml.main(['-o', self.out_path, self.dtd_path,
                               data_path])
        self.assertTrue(result == 1)
        self.assertFalse(os.path.exists(self.out_path))

    def test_usage(self):
        with mock.patch('sys.stderr', new_callable=io.StringIO):
            try:
                dtd2xml.main([self.dtd_path])
                self.fail("Missing DATA argument")
            except SystemExit as err:
                self.assertTrue(err.code == 2)


if __name__ == "__main__":
    unittest.main()
