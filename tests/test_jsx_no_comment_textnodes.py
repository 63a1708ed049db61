"""
Tests for the jsx-no-comment-textnodes rule.
"""

import unittest

from react_lint.linter import Linter
from react_lint.rules import RULES


def lint(code):
    rules = {rule_id: "off" for rule_id in RULES}
    rules["jsx-no-comment-textnodes"] = "error"
    return Linter().verify(code, rules)


class TestJsxNoCommentTextnodes(unittest.TestCase):
    """Test cases for comment-looking JSX text."""

    def test_real_comments_are_allowed(self):
        code = """
        <div>{/* comment */}</div>;
        <div /* comment */></div>;
        <div className={"foo" /* comment */}></div>;
        """
        self.assertEqual(lint(code), [])

    def test_plain_text_is_allowed(self):
        self.assertEqual(lint("<div>http://example.com is a link</div>;"), [])

    def test_comment_text_is_reported(self):
        code = """
        <div>// comment</div>;
        <div>/* comment */</div>;
        <div>
          // comment
        </div>;
        <div>
          /* comment */
        </div>;
        """
        problems = lint(code)
        self.assertEqual([p.line for p in problems], [2, 3, 4, 7])
        self.assertTrue(all(p.message_id == "putCommentInBraces" for p in problems))


if __name__ == '__main__':
    unittest.main()
