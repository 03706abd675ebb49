import unittest

from agents.tools.theme.content_digest import build_content_digest
from services.page_tree import PageTree


class ContentDigestTests(unittest.TestCase):
    def test_heading_description_and_excerpt(self):
        tree = PageTree(
            '<html><head><meta name="description" content="We build things"><script>var x = 1;</script></head>'
            "<body><h1>Hello World</h1><p>Body copy</p><script>ignored()</script><style>.a{}</style></body></html>"
        )
        digest = build_content_digest(tree)
        self.assertEqual(digest.heading, "Hello World")
        self.assertEqual(digest.description, "We build things")
        self.assertEqual(digest.excerpt, "Hello World\nBody copy")

    def test_raw_text_format(self):
        tree = PageTree('<head><meta name="description" content="Desc"></head><body><h1>Head</h1></body>')
        self.assertEqual(build_content_digest(tree).raw_text, "Heading: Head\nDescription: Desc\nContent: Head")

    def test_missing_fields_are_empty(self):
        digest = build_content_digest(PageTree("<body></body>"))
        self.assertEqual((digest.heading, digest.description, digest.excerpt), ("", "", ""))
        self.assertEqual(digest.raw_text, "Heading: \nDescription: \nContent: ")

    def test_excerpt_is_hard_truncated(self):
        tree = PageTree(f"<body><p>{'a' * 600}</p></body>")
        self.assertEqual(len(build_content_digest(tree).excerpt), 500)
        self.assertEqual(len(build_content_digest(tree, excerpt_limit=10).excerpt), 10)

    def test_captured_inner_text_is_used(self):
        tree = PageTree.from_snapshot({
            "html": "<body><h1>Raw</h1></body>",
            "bodyText": "Rendered\ntext",
            "headingText": "Rendered heading",
        })
        digest = build_content_digest(tree)
        self.assertEqual(digest.heading, "Rendered heading")
        self.assertEqual(digest.excerpt, "Rendered\ntext")


if __name__ == "__main__":
    unittest.main()
