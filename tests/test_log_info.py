import unittest

from logchain import LogInfo, RecordParseError
from logchain.schemas.log_info import PADDED_KEY


class TestLogInfo(unittest.TestCase):
    def test_with_meta_returns_new_record(self):
        info = LogInfo('info', 'hello')
        updated = info.with_meta('user', 'alice')
        self.assertEqual(info.meta, {})
        self.assertEqual(updated.meta, {'user': 'alice'})

    def test_with_meta_last_write_wins(self):
        info = LogInfo('info', 'hello').with_meta('k', 1).with_meta('k', 2)
        self.assertEqual(info.meta, {'k': 2})

    def test_without_meta(self):
        info = LogInfo('info', 'hello', {'a': 1, 'b': 2})
        self.assertEqual(info.without_meta('a').meta, {'b': 2})
        self.assertEqual(info.without_meta('missing').meta, {'a': 1, 'b': 2})
        self.assertEqual(info.meta, {'a': 1, 'b': 2})

    def test_str_is_message(self):
        info = LogInfo('error', 'Connection failed', {'retry': 3})
        self.assertEqual(str(info), 'Connection failed')

    def test_flat_value(self):
        info = LogInfo('info', 'hi', {'user': 'alice'})
        self.assertEqual(info.to_flat_value(), {'level': 'info', 'message': 'hi', 'user': 'alice'})

    def test_internal_keys_hidden_from_flat_value(self):
        info = LogInfo('info', 'hi', {'user': 'alice', PADDED_KEY: {'info': ' '}})
        self.assertEqual(info.public_meta(), {'user': 'alice'})
        self.assertEqual(info.to_flat_value(), {'level': 'info', 'message': 'hi', 'user': 'alice'})
        self.assertIn(PADDED_KEY, info.to_value()['meta'])

    def test_bytes_round_trip(self):
        info = LogInfo('INFO', 'Test message', {'user': 'Alice', 'attempts': 3})
        restored = LogInfo.from_bytes(info.to_bytes())
        self.assertEqual(restored, info)

    def test_from_value(self):
        info = LogInfo.from_value({
            'level': 'DEBUG',
            'message': 'Another test message',
            'meta': {'id': 12345, 'status': 'pending'}
        })
        self.assertEqual(info.level, 'DEBUG')
        self.assertEqual(info.meta, {'id': 12345, 'status': 'pending'})

    def test_from_value_rejects_bad_input(self):
        with self.assertRaises(RecordParseError):
            LogInfo.from_value(['not', 'an', 'object'])
        with self.assertRaises(RecordParseError):
            LogInfo.from_value({'message': 'no level'})
        with self.assertRaises(RecordParseError):
            LogInfo.from_value({'level': 'info', 'message': 42})

    def test_from_bytes_rejects_invalid_json(self):
        with self.assertRaises(RecordParseError):
            LogInfo.from_bytes(b'{not json')


class TestLogInfoParse(unittest.TestCase):
    def test_bracketed(self):
        info = LogInfo.parse('[WARN] Something happened')
        self.assertEqual(info.level, 'WARN')
        self.assertEqual(info.message, 'Something happened')
        self.assertEqual(info.meta, {})

    def test_bracketed_with_meta(self):
        info = LogInfo.parse('[DEBUG] Processing {user: "Alice", count: 5, mode: fast}')
        self.assertEqual(info.level, 'DEBUG')
        self.assertEqual(info.message, 'Processing')
        self.assertEqual(info.meta, {'user': 'Alice', 'count': 5, 'mode': 'fast'})

    def test_json(self):
        info = LogInfo.parse('{"level":"INFO","message":"Test","meta":{"id":123}}')
        self.assertEqual(info.level, 'INFO')
        self.assertEqual(info.message, 'Test')
        self.assertEqual(info.meta, {'id': 123})

    def test_invalid(self):
        with self.assertRaises(RecordParseError):
            LogInfo.parse('no brackets here')
        with self.assertRaises(RecordParseError):
            LogInfo.parse('[unterminated message')


if __name__ == "__main__":
    unittest.main()
