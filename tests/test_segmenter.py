"""Tests for splitting the export into day fragments."""

import unittest

from src.subparser.errors import DocumentParseError
from src.subparser.parsers.segmenter import (
    find_day_markers,
    parse_markup,
    split_documents,
)
from tests.fixtures import day, export


class TestSplitDocuments(unittest.TestCase):
    def test_no_markers_yields_no_fragments(self):
        self.assertEqual(split_documents("<html><body><p>leer</p></body></html>"), [])
        self.assertEqual(split_documents(""), [])

    def test_sentinel_only_yields_no_fragments(self):
        self.assertEqual(split_documents('<a name="oben"></a><h2>x</h2>'), [])

    def test_fragments_are_exact_slices(self):
        markup = (
            'intro<a name="oben"></a>\n'
            '<a name="13.10.2023">a</a>\nFirst\n'
            'x<a name="16.10.2023">b</a>Second'
        )
        fragments = split_documents(markup)
        self.assertEqual(
            fragments,
            [
                '<a name="13.10.2023">a</a>\nFirst\nx',
                '<a name="16.10.2023">b</a>Second',
            ],
        )

    def test_fragments_cover_document_from_first_marker(self):
        markup = export(day("13.10.2023"), day("16.10.2023"), day("17.10.2023"))
        fragments = split_documents(markup)
        self.assertEqual(len(fragments), 3)
        first = markup.index('<a name="13.10.2023">')
        self.assertEqual("".join(fragments), markup[first:])
        for fragment, date in zip(fragments, ["13.10.2023", "16.10.2023", "17.10.2023"]):
            self.assertTrue(fragment.startswith(f'<a name="{date}">'))
            self.assertEqual(fragment.count("<h2>"), 1)

    def test_positions_ignore_entities_and_crlf(self):
        markup = 'x&nbsp;&auml;\r\n<a name="a">1</a>&amp;\r\n  <a name="b">2</a>'
        self.assertEqual(
            split_documents(markup),
            ['<a name="a">1</a>&amp;\r\n  ', '<a name="b">2</a>'],
        )

    def test_duplicate_marker_names_split_at_each_occurrence(self):
        markup = '<a name="13.10.2023">1</a>one<a name="13.10.2023">2</a>two'
        self.assertEqual(
            split_documents(markup),
            ['<a name="13.10.2023">1</a>one', '<a name="13.10.2023">2</a>two'],
        )

    def test_anchor_without_name_is_not_a_marker(self):
        markup = '<a href="#oben">top</a><a name="d">1</a>rest'
        self.assertEqual(split_documents(markup), ['<a name="d">1</a>rest'])

    def test_rejects_non_string_input(self):
        with self.assertRaises(DocumentParseError):
            split_documents(None)
        with self.assertRaises(DocumentParseError):
            split_documents(b"<a name='d'></a>")


class TestFindDayMarkers(unittest.TestCase):
    def test_document_order_without_sentinel(self):
        document = parse_markup(export(day("1.1.2024"), day("2.1.2024")))
        self.assertEqual(
            [marker["name"] for marker in find_day_markers(document)],
            ["1.1.2024", "2.1.2024"],
        )


if __name__ == "__main__":
    unittest.main()
