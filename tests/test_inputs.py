import io
import os
import tempfile
import unittest

from logchain.inputs.file_input import FileInput

RECORDS = """[info] server started {port: 8080}

{"level": "error", "message": "disk full", "meta": {"free": 0}}
garbage line
"""


class TestFileInput(unittest.TestCase):
    def setUp(self):
        with tempfile.NamedTemporaryFile(mode='w', suffix='.log', delete=False) as f:
            f.write(RECORDS)
            self.path = f.name

    def tearDown(self):
        os.unlink(self.path)

    def test_reads_records(self):
        file_input = FileInput(self.path)
        with self.assertLogs('logchain.inputs.file_input', level='WARNING'):
            records = list(file_input)

        self.assertEqual([r.level for r in records], ['info', 'error'])
        self.assertEqual(records[0].meta, {'port': 8080})
        self.assertEqual(records[1].meta, {'free': 0})
        self.assertEqual(file_input.skipped, 1)

    def test_annotate(self):
        with self.assertLogs('logchain.inputs.file_input', level='WARNING'):
            records = list(FileInput(self.path, annotate=True))
        self.assertEqual(records[1].meta['line_number'], 3)
        self.assertEqual(records[1].meta['source_file'], self.path)

    def test_stream(self):
        records = list(FileInput(stream=io.StringIO('[warn] low memory\n')))
        self.assertEqual(len(records), 1)
        self.assertEqual(records[0].message, 'low memory')

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            list(FileInput('/nonexistent/records.log'))

    def test_requires_source(self):
        with self.assertRaises(ValueError):
            FileInput()


if __name__ == "__main__":
    unittest.main()
