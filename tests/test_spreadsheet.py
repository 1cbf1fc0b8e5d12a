#!/usr/bin/env python

import io
import os
import tempfile
import unittest
from datamashup.container.container import DEFAULT_PERMISSIONS
from datamashup.errors import ParseError
from datamashup.packager.spreadsheet import SpreadsheetPackage, open_spreadsheet_package
from tests.helpers import build_workbook, build_xml, build_zip, wrap_xml, read_zip, FORMULA, SIGNED_PERMISSIONS


class SpreadsheetPackageTest(unittest.TestCase):
    def test_open_utf16(self):
        package = open_spreadsheet_package(build_workbook(build_xml()))

        self.assertIsNotNone(package.datamashup)
        self.assertEqual(package.datamashup.entry.path, 'customXml/item1.xml')
        self.assertEqual(package.datamashup.encoding, 'utf-16-le')
        self.assertIsNone(package.datamashup.error)
        self.assertEqual(package.get_formula(), FORMULA)

    def test_open_utf8(self):
        package = open_spreadsheet_package(build_workbook(build_xml(), encoding='utf-8'))
        self.assertEqual(package.datamashup.encoding, 'utf-8')
        self.assertEqual(package.get_formula(), FORMULA)

    def test_no_power_query(self):
        data = build_workbook(None)
        package = open_spreadsheet_package(data)

        self.assertIsNone(package.datamashup)
        self.assertIsNone(package.get_formula())
        package.set_formula('ignored')
        self.assertEqual(read_zip(package.save()), read_zip(data))

    def test_malformed_power_query(self):
        data = build_workbook(wrap_xml('%%%% not base64 %%%%'))
        package = open_spreadsheet_package(data)

        self.assertIsNotNone(package.datamashup)
        self.assertEqual(package.datamashup.error, ParseError.BASE64_DECODE_ERROR)
        self.assertIn('DataMashup', package.datamashup.xml)
        self.assertIsNone(package.get_formula())

        package.set_formula('ignored')
        self.assertEqual(read_zip(package.save()), read_zip(data))

    def test_undecodable_custom_xml(self):
        data = build_zip({
            'xl/workbook.xml': '<workbook />',
            'customXml/item1.xml': b'<DataMashup xmlns="x">\xff\xfe</DataMashup>',
        })
        package = open_spreadsheet_package(data)

        self.assertIsNotNone(package.datamashup)
        self.assertEqual(package.datamashup.error, ParseError.XML_DECODE_ERROR)
        self.assertNotEqual(package.datamashup.error, ParseError.DATAMASHUP_NOT_FOUND)
        self.assertTrue(package.datamashup.outcome.message)
        self.assertIsNone(package.get_formula())

    def test_element_without_attributes(self):
        xml = build_xml().replace('<DataMashup xmlns="http://schemas.microsoft.com/DataMashup">', '<DataMashup>')
        for encoding in ('utf-16-le', 'utf-8'):
            package = open_spreadsheet_package(build_workbook(xml, encoding=encoding))
            self.assertIsNotNone(package.datamashup)
            self.assertEqual(package.datamashup.encoding, encoding)
            self.assertEqual(package.get_formula(), FORMULA)

    def test_set_formula_resets_permissions(self):
        package = open_spreadsheet_package(build_workbook(build_xml()))
        self.assertEqual(package.container.permissions, SIGNED_PERMISSIONS)

        package.set_formula('X')
        self.assertEqual(package.get_formula(), 'X')
        self.assertEqual(package.container.permissions, DEFAULT_PERMISSIONS)

    def test_save_and_reopen(self):
        data = build_workbook(build_xml())
        package = open_spreadsheet_package(data)
        package.set_formula('let Source = "edited" in Source')
        saved = package.save()

        reopened = open_spreadsheet_package(saved)
        self.assertEqual(reopened.get_formula(), 'let Source = "edited" in Source')
        self.assertEqual(reopened.container.permissions, DEFAULT_PERMISSIONS)
        self.assertEqual(reopened.datamashup.encoding, 'utf-16-le')

        before, after = read_zip(data), read_zip(saved)
        self.assertEqual(list(before), list(after))
        for name in before:
            if name != 'customXml/item1.xml':
                self.assertEqual(before[name], after[name])

    def test_save_keeps_surrounding_xml(self):
        data = build_workbook(build_xml())
        package = open_spreadsheet_package(data)
        package.set_formula('Y')
        saved = read_zip(package.save())['customXml/item1.xml']

        self.assertTrue(saved.startswith(b'\xff\xfe'))
        text = saved.decode('utf-16-le')
        self.assertTrue(text.startswith('\ufeff<?xml version="1.0" encoding="utf-16"?><DataMashup xmlns='))
        self.assertTrue(text.endswith('</DataMashup>'))

    def test_idempotent_save(self):
        package = open_spreadsheet_package(build_workbook(build_xml()))
        package.set_formula('Y')
        self.assertEqual(package.save(), package.save())

    def test_open_file_like(self):
        package = SpreadsheetPackage.open(io.BytesIO(build_workbook(build_xml())))
        self.assertEqual(package.get_formula(), FORMULA)

    def test_file_round_trip(self):
        with tempfile.TemporaryDirectory() as tmp:
            in_path = os.path.join(tmp, 'book.xlsx')
            out_path = os.path.join(tmp, 'book_out.xlsx')
            with open(in_path, 'wb') as f:
                f.write(build_workbook(build_xml()))

            package = SpreadsheetPackage.from_file(in_path)
            package.set_formula('Z')
            result = package.save_to(out_path)

            self.assertTrue(result['success'])
            self.assertTrue(result['has_datamashup'])
            self.assertEqual(SpreadsheetPackage.from_file(out_path).get_formula(), 'Z')
            self.assertEqual(sorted(os.listdir(tmp)), ['book.xlsx', 'book_out.xlsx'])
