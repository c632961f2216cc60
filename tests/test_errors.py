import unittest

from client_app.previews import PreviewRegistry
from shared.errors import ErrorChannel, ErrorKind


class ErrorChannelTests(unittest.TestCase):
    def test_report_keeps_history_and_notifies(self):
        channel = ErrorChannel()
        seen = []
        channel.add_listener(seen.append)

        error = channel.report(ErrorKind.UPLOAD_FAILED, "Error uploading file", RuntimeError("x"))

        self.assertEqual(channel.errors, [error])
        self.assertEqual(seen, [error])
        self.assertIs(channel.last, error)

    def test_removed_listener_is_not_called(self):
        channel = ErrorChannel()
        seen = []
        remove = channel.add_listener(seen.append)
        remove()
        remove()

        channel.report(ErrorKind.CHAT_FAILED, "Error asking AI")

        self.assertEqual(seen, [])

    def test_failing_listener_does_not_break_reporting(self):
        channel = ErrorChannel()
        seen = []

        def broken(error):
            raise RuntimeError("listener bug")

        channel.add_listener(broken)
        channel.add_listener(seen.append)

        channel.report(ErrorKind.PROFILE_PICTURE_NOT_FOUND, "No profile picture found")

        self.assertEqual(len(seen), 1)


class PreviewRegistryTests(unittest.TestCase):
    def test_create_resolve_revoke(self):
        registry = PreviewRegistry()
        url = registry.create(b"abc", "image/png")

        self.assertTrue(url.startswith("blob:"))
        self.assertEqual(registry.resolve(url), (b"abc", "image/png"))
        self.assertEqual(registry.as_data_url(url), "data:image/png;base64,YWJj")

        registry.revoke(url)
        registry.revoke(url)
        registry.revoke(None)

        self.assertIsNone(registry.resolve(url))
        self.assertEqual(registry.live_count, 0)


if __name__ == "__main__":
    unittest.main()
