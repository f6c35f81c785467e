#!/usr/bin/env python3
"""
Performance tests for bookmark importer
Tests parsing and reconciling large bookmark collections
"""

import sys
import unittest
import time
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from bookmark_importer import (
    PartialBookmark,
    Tag,
    Category,
    parse_bookmark_html,
    process_bookmarks_for_import,
)


class TestPerformance(unittest.TestCase):
    """Test performance characteristics of bookmark importing"""

    def setUp(self):
        """Set up test data"""
        self.large_bookmark_count = 5000
        self.folder_count = 50

    def create_large_bookmark_html(self, count: int, folders: int) -> str:
        """Create an export with many bookmarks spread over folders"""
        html_content = '''<!DOCTYPE NETSCAPE-Bookmark-file-1>
<TITLE>Bookmarks</TITLE>
<H1>Bookmarks</H1>
<DL>
'''
        per_folder = count // folders
        for f in range(folders):
            html_content += f'<DT><H3>Folder {f}</H3>\n<DL>\n'
            for j in range(per_folder):
                i = f * per_folder + j
                tags = f"tag{i % 40},Tag{(i + 1) % 40}"
                html_content += (f'<DT><A HREF="https://example{i % 100}.com/page{i}" '
                                 f'ADD_DATE="{1600000000 + i}" TAGS="{tags}">Bookmark {i}</A></DT>\n')
            html_content += '</DL>\n</DT>\n'

        html_content += '</DL>\n'
        return html_content

    def test_large_document_parsing(self):
        """Test parsing of a large export"""
        html = self.create_large_bookmark_html(self.large_bookmark_count, self.folder_count)

        start_time = time.time()
        bookmarks = parse_bookmark_html(html)
        parse_time = time.time() - start_time

        self.assertEqual(len(bookmarks), self.large_bookmark_count)
        self.assertEqual(bookmarks[0].category.name, "Folder 0")
        self.assertEqual(bookmarks[-1].category.name, f"Folder {self.folder_count - 1}")
        self.assertLess(parse_time, 30.0, f"Parsing took too long: {parse_time:.2f}s")

        print(f"Parsed {len(bookmarks)} bookmarks in {parse_time:.2f}s")

    def test_flat_list_parsing(self):
        """A single huge list must not make every entry rescan its siblings"""
        html = "<DL>\n" + "".join(
            f'<DT><A HREF="https://flat{i}.example.com">Flat {i}</A></DT>\n'
            for i in range(self.large_bookmark_count)) + "</DL>"

        start_time = time.time()
        bookmarks = parse_bookmark_html(html)
        parse_time = time.time() - start_time

        self.assertEqual(len(bookmarks), self.large_bookmark_count)
        self.assertTrue(all(b.category is None for b in bookmarks))
        self.assertLess(parse_time, 30.0, f"Flat list parsing took too long: {parse_time:.2f}s")

    def test_reconciliation_scaling(self):
        """Test that reconciliation stays linear in the number of records"""
        existing_tags = [Tag(id=f"existing-{i}", name=f"tag{i}") for i in range(20)]
        existing_categories = [Category(id="existing-cat", name="folder 0")]
        records = [
            PartialBookmark(
                url=f"https://example.com/{i}",
                tags=[Tag(id=f"p{i}a", name=f"Tag{i % 40}"), Tag(id=f"p{i}b", name=f"topic{i % 7}")],
                category=Category(id=f"Folder {i % 10}", name=f"Folder {i % 10}"),
            )
            for i in range(20000)
        ]

        start_time = time.time()
        result = process_bookmarks_for_import(records, existing_tags, existing_categories)
        reconcile_time = time.time() - start_time

        self.assertEqual(len(result.bookmarks), 20000)
        # tag20..tag39 and topic0..topic6 are new
        self.assertEqual(len(result.new_tags), 27)
        # "Folder 0" matches the existing "folder 0"
        self.assertEqual(len(result.new_categories), 9)
        self.assertLess(reconcile_time, 10.0,
                        f"Reconciliation took too long: {reconcile_time:.2f}s")

        print(f"Reconciled {len(records)} bookmarks in {reconcile_time:.2f}s")


if __name__ == '__main__':
    unittest.main()
