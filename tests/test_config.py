import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout

import yaml

from logchain import ConfigurationError, LogInfo
from logchain.config import levels
from logchain.config.loader import build_format, create_sample_config, load_config
from logchain.main import main
from logchain.schemas.log_info import PADDED_KEY


def write_temp(content, suffix):
    with tempfile.NamedTemporaryFile(mode='w', suffix=suffix, delete=False) as f:
        f.write(content)
        return f.name


class TestIniConfig(unittest.TestCase):
    def setUp(self):
        self.paths = []

    def tearDown(self):
        for path in self.paths:
            os.unlink(path)

    def _write(self, content, suffix='.ini'):
        path = write_temp(content, suffix)
        self.paths.append(path)
        return path

    def test_load_and_build(self):
        path = self._write("""
[logging]
level = WARNING

[format]
chain = label, json

[format.label]
label = api
message = true
""")
        config = load_config(path)

        self.assertEqual(config['logging']['level'], 'WARNING')
        self.assertEqual(config['format'], [
            {'name': 'label', 'options': {'label': 'api', 'message': True}},
            {'name': 'json', 'options': {}}
        ])

        result = build_format(config).transform(LogInfo('info', 'hi'))
        self.assertEqual(json.loads(result.message), {'level': 'info', 'message': '[api] hi'})

    def test_list_and_mapping_options(self):
        path = self._write("""
[format]
chain = pad_levels, metadata

[format.pad_levels]
widths = info: 7, error: 8

[format.metadata]
fill_except = c, d
""")
        config = load_config(path)
        self.assertEqual(config['format'][0]['options'], {'widths': {'info': 7, 'error': 8}})
        self.assertEqual(config['format'][1]['options'], {'fill_except': ['c', 'd']})

        result = build_format(config).transform(LogInfo('info', 'hi', {'a': 1, 'c': 3}))
        self.assertEqual(result.message, '   hi')
        self.assertEqual(result.meta['metadata'], {'a': 1})
        self.assertEqual(result.meta[PADDED_KEY], {'info': '   '})
        self.assertEqual(result.meta['c'], 3)

    def test_timestamp_pattern_not_interpolated(self):
        path = self._write("""
[format]
chain = timestamp

[format.timestamp]
pattern = %Y-%m-%d
""")
        result = build_format(load_config(path)).transform(LogInfo('info', 'hi'))
        self.assertRegex(result.meta['timestamp'], r'^\d{4}-\d{2}-\d{2}$')

    def test_logging_defaults(self):
        path = self._write("""
[format]
chain = simple
""")
        config = load_config(path)
        self.assertEqual(config['logging']['level'], 'INFO')
        self.assertIn('%(message)s', config['logging']['format'])

    def test_unknown_format_rejected(self):
        path = self._write("""
[format]
chain = timestamp, sparkle
""")
        with self.assertRaises(ConfigurationError):
            load_config(path)

    def test_bad_mapping_rejected(self):
        path = self._write("""
[format]
chain = colorize

[format.colorize]
colors = info blue
""")
        with self.assertRaises(ConfigurationError):
            load_config(path)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_config('/nonexistent/logchain.ini')


class TestYamlConfig(unittest.TestCase):
    def setUp(self):
        self.paths = []

    def tearDown(self):
        for path in self.paths:
            os.unlink(path)

    def _write(self, content):
        path = write_temp(content, '.yaml')
        self.paths.append(path)
        return path

    def test_load_and_build(self):
        path = self._write("""
logging:
  level: DEBUG
format:
  - timestamp:
      alias: time
  - metadata:
      fill_except: [timestamp, time]
  - json
""")
        config = load_config(path)
        self.assertEqual([stage['name'] for stage in config['format']], ['timestamp', 'metadata', 'json'])

        result = build_format(config).transform(LogInfo('info', 'hi', {'user': 'alice'}))
        parsed = json.loads(result.message)
        self.assertEqual(parsed['metadata'], {'user': 'alice'})
        self.assertEqual(parsed['time'], parsed['timestamp'])

    def test_invalid_options_rejected_at_build(self):
        path = self._write("""
format:
  - label:
      colour: red
""")
        with self.assertRaises(ConfigurationError):
            build_format(load_config(path))

    def test_invalid_stage_entry(self):
        path = self._write("""
format:
  - 42
""")
        with self.assertRaises(ConfigurationError):
            load_config(path)

    def test_invalid_yaml(self):
        path = self._write("format: [unclosed")
        with self.assertRaises(ConfigurationError):
            load_config(path)

    def test_empty_chain_rejected(self):
        path = self._write("logging:\n  level: INFO\n")
        with self.assertRaises(ConfigurationError):
            build_format(load_config(path))

    def test_string_width_rejected(self):
        path = self._write("""
format:
  - pad_levels:
      widths: {info: '7'}
""")
        with self.assertRaises(ConfigurationError):
            build_format(load_config(path))

    def test_boolean_width_rejected(self):
        path = self._write("""
format:
  - pad_levels:
      widths: {info: true}
""")
        with self.assertRaises(ConfigurationError):
            build_format(load_config(path))

    def test_widths_must_be_mapping(self):
        path = self._write("""
format:
  - pad_levels:
      widths: [7]
""")
        with self.assertRaises(ConfigurationError):
            build_format(load_config(path))

    def test_colors_must_be_mapping(self):
        path = self._write("""
format:
  - cli:
      colors: red
""")
        with self.assertRaises(ConfigurationError):
            build_format(load_config(path))

    def test_bad_width_reported_by_command_line(self):
        path = self._write("""
format:
  - pad_levels:
      widths: {info: '7'}
  - simple
""")
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = main(['--config', path, '--log', '[info] hi'])

        self.assertEqual(code, 1)
        self.assertEqual(out.getvalue(), '')
        self.assertIn('[ERROR]', err.getvalue())
        self.assertIn('info', err.getvalue())

    def test_sample_config(self):
        with tempfile.TemporaryDirectory() as directory:
            path = os.path.join(directory, 'sample.yaml')
            create_sample_config(path)

            with open(path, 'r', encoding='utf-8') as f:
                raw = yaml.safe_load(f)
            self.assertIn('format', raw)

            fmt = build_format(load_config(path))
            parsed = json.loads(fmt.transform(LogInfo('info', 'hi', {'user': 'alice'})).message)
            self.assertEqual(parsed['label'], 'app')
            self.assertEqual(parsed['metadata'], {'user': 'alice'})
            self.assertEqual(parsed['ms'], '+0ms')


class TestLevels(unittest.TestCase):
    def test_presets(self):
        self.assertEqual(levels.levels()['error'], 0)
        self.assertEqual(levels.levels(levels.CLI)['silly'], 9)
        self.assertEqual(levels.colors(levels.SYSLOG)['info'], 'green')

    def test_unknown_preset(self):
        with self.assertRaises(KeyError):
            levels.levels('npm')


if __name__ == "__main__":
    unittest.main()
