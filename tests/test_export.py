"""
Tests for deduper.export module.
"""

import csv
import shutil
import tempfile
import unittest
from pathlib import Path

from deduper.core.config import DeduperConfig
from deduper.dedup import StringDeduplicator
from deduper.export import CSVExporter, TextExporter
from deduper.utils.exceptions import ExportError


class TestExporters(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.output_dir = Path(self.test_dir)

        self.deduper = StringDeduplicator(
            DeduperConfig(normalize="company", ignored_suffixes="company")
        )
        self.deduper.import_strings(
            ["Acme Inc", "ACME, Inc.", "Globex", "Acme Inc", "Initech LLC"]
        )

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_text_export(self):
        exporter = TextExporter(output_dir=self.output_dir)
        lines = self.deduper.get_duplicates(include_original=True, add_empty_string=True)

        self.assertTrue(exporter.export(lines, "dupes.txt"))

        content = (self.output_dir / "dupes.txt").read_text(encoding="utf-8")
        self.assertEqual(content, "Acme Inc\nAcme Inc\nACME, Inc.\n\n")
        self.assertEqual(exporter.lines_written, 4)

    def test_text_export_creates_directories(self):
        exporter = TextExporter(output_dir=self.output_dir)
        self.assertTrue(exporter.export(self.deduper.get_uniques(), "nested/uniques.txt"))

        content = (self.output_dir / "nested" / "uniques.txt").read_text(encoding="utf-8")
        self.assertEqual(content.splitlines(), ["Acme Inc", "Globex", "Initech LLC"])

    def test_text_export_failure_returns_false(self):
        blocker = self.output_dir / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")

        exporter = TextExporter(output_dir=self.output_dir)
        self.assertFalse(exporter.export(["Acme"], "blocker/out.txt"))

    def test_text_write_raises(self):
        (self.output_dir / "blocker").write_text("", encoding="utf-8")

        exporter = TextExporter(output_dir=self.output_dir)
        with self.assertRaises(ExportError) as ctx:
            exporter.write(["Acme"], "blocker/out.txt")

        self.assertEqual(ctx.exception.format, "text")

    def test_absolute_path_ignores_output_dir(self):
        target = self.output_dir / "absolute.txt"
        exporter = TextExporter(output_dir="somewhere/else")

        self.assertTrue(exporter.export(["Acme"], target))
        self.assertTrue(target.exists())

    def test_csv_export(self):
        exporter = CSVExporter(output_dir=self.output_dir)
        self.assertTrue(exporter.export(self.deduper.groups(), "groups"))

        output_file = self.output_dir / "groups.csv"
        self.assertTrue(output_file.exists())

        with open(output_file, "r", newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))

        self.assertEqual(len(rows), 4)
        self.assertEqual(rows[0]["group"], "1")
        self.assertEqual(rows[0]["key"], "acme")
        self.assertEqual(rows[0]["value"], "Acme Inc")
        self.assertEqual(rows[0]["count"], "2")
        self.assertEqual(rows[0]["representative"], "True")
        self.assertEqual(rows[1]["value"], "ACME, Inc.")
        self.assertEqual(rows[1]["representative"], "False")
        self.assertEqual(rows[3]["group"], "3")
        self.assertEqual(rows[3]["key"], "initech")


if __name__ == '__main__':
    unittest.main()
