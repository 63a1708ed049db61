"""
Tests for the jsx-key rule.
"""

import unittest

from react_lint.context import SourceCode
from react_lint.linter import Linter
from react_lint.rules import RULES


def lint(code, options=None, settings=None):
    """Run jsx-key alone over code."""
    rules = {rule_id: "off" for rule_id in RULES}
    rules["jsx-key"] = ["error", options] if options else "error"
    return Linter().verify(code, rules, settings)


def shorthand_fragment_in_array(comments=()):
    """
    Build ``[<></>];`` by hand, with no source ranges.
    """
    loc = {"start": {"line": 1, "column": 1}, "end": {"line": 1, "column": 6}}
    fragment = {
        "type": "JSXFragment",
        "openingFragment": {"type": "JSXOpeningFragment"},
        "children": [],
        "closingFragment": {"type": "JSXClosingFragment"},
        "loc": loc,
        "range": [1, 6],
    }
    program = {
        "type": "Program",
        "body": [{
            "type": "ExpressionStatement",
            "expression": {"type": "ArrayExpression", "elements": [fragment], "range": [0, 7]},
        }],
        "comments": list(comments),
    }
    return SourceCode("[<></>];", program)


class TestMissingKeys(unittest.TestCase):
    """Test cases for missing keys in arrays and iterator callbacks."""

    def test_keyed_array_is_valid(self):
        self.assertEqual(lint('[<App key="a" />, <App key="b" />];'), [])

    def test_non_element_entries_are_ignored(self):
        self.assertEqual(lint("[1, 'two', null, foo];"), [])

    def test_missing_keys_in_array(self):
        code = "\n".join([
            "const items = [",
            "  <li />,",
            '  <li key="b" />,',
            "  <li />,",
            "];",
        ])
        problems = lint(code)
        self.assertEqual([p.line for p in problems], [2, 4])
        self.assertTrue(all(p.message_id == "missingElementKey" for p in problems))
        self.assertEqual(problems[0].message, 'Missing "key" prop for element in array.')

    def test_map_callback(self):
        problems = lint("[1, 2].map(() => <div />);")
        self.assertEqual(len(problems), 1)
        self.assertIn("iterator", problems[0].message)

    def test_keyed_map_callback_is_valid(self):
        self.assertEqual(lint("xs.map(x => <li key={x.id} />);"), [])

    def test_every_branch_of_a_return_is_checked(self):
        code = 'xs.map(function (x) { return x ? <a /> : <b key="b" />; });'
        problems = lint(code)
        self.assertEqual(len(problems), 1)
        self.assertEqual(problems[0].message_id, "missingElementKey")

    def test_logical_result(self):
        self.assertEqual(len(lint("xs.map(x => x.ok && <Item />);")), 1)

    def test_multiple_returns(self):
        code = "\n".join([
            "xs.map((x) => {",
            "  if (x) {",
            "    return <a />;",
            "  }",
            "  return <b />;",
            "});",
        ])
        self.assertEqual([p.line for p in lint(code)], [3, 5])

    def test_array_from(self):
        self.assertEqual(len(lint("Array.from(xs, x => <li />);")), 1)
        self.assertEqual(lint("Array.from(xs);"), [])

    def test_callback_passed_by_reference_is_not_followed(self):
        self.assertEqual(lint("xs.map(render);"), [])

    def test_inner_function_results_do_not_count(self):
        code = "\n".join([
            "xs.map(() => {",
            "  function inner() {",
            "    return <div />;",
            "  }",
            '  return <span key="k" />;',
            "});",
        ])
        self.assertEqual(lint(code), [])

    def test_nested_maps(self):
        problems = lint("xs.map(x => ys.map(y => <i />));")
        self.assertEqual(len(problems), 1)

    def test_children_to_array_suppresses_checks(self):
        self.assertEqual(lint("React.Children.toArray([<li />, <li />]);"), [])
        self.assertEqual(lint("Children.toArray(xs.map(x => <li />));"), [])

    def test_suppression_ends_with_the_call(self):
        code = "Children.toArray([<li />]); [<li />];"
        self.assertEqual(len(lint(code)), 1)

    def test_deep_children_owner_is_not_exempt(self):
        self.assertEqual(len(lint("a.b.Children.toArray([<li />]);")), 1)

    def test_element_children_only_get_duplicate_checks(self):
        self.assertEqual(lint("<ul><li /><li /></ul>;"), [])


class TestDuplicateKeys(unittest.TestCase):
    """Test cases for duplicate key detection."""

    def test_every_occurrence_is_reported(self):
        code = '[<a key="a" />, <a key="a" />, <a key="a" />];'
        problems = lint(code)
        self.assertEqual(len(problems), 3)
        self.assertTrue(all(p.message_id == "nonUniqueKeys" for p in problems))

    def test_first_occurrence_is_reported_once(self):
        code = '[<a key="a" />, <a key="a" />, <a key="a" />];'
        columns = [p.column for p in lint(code)]
        self.assertEqual(len(columns), len(set(columns)))

    def test_duplicates_among_element_children(self):
        problems = lint('<ul><li key="x" /><li key="x" /></ul>;')
        self.assertEqual(len(problems), 2)

    def test_unresolved_keys_are_ignored(self):
        self.assertEqual(lint("[<a key={k} />, <a key={k} />];"), [])

    def test_values_of_different_types_differ(self):
        self.assertEqual(lint('[<a key="1" />, <a key={1} />];'), [])

    def test_template_key_matches_string_key(self):
        problems = lint('[<a key={`a`} />, <a key="a" />];')
        self.assertEqual(len(problems), 2)

    def test_warn_on_duplicates_disabled(self):
        code = '[<a key="a" />, <a key="a" />];'
        self.assertEqual(lint(code, {"warnOnDuplicates": False}), [])


class TestKeyBeforeSpread(unittest.TestCase):
    """Test cases for checkKeyMustBeforeSpread."""

    def test_key_after_spread(self):
        code = '<div {...props} key="a" />;'
        problems = lint(code, {"checkKeyMustBeforeSpread": True})
        self.assertEqual([p.message_id for p in problems], ["keyBeforeSpread"])
        self.assertEqual(lint(code), [])

    def test_key_before_spread(self):
        code = '<div key="a" {...props} />;'
        self.assertEqual(lint(code, {"checkKeyMustBeforeSpread": True}), [])

    def test_spread_without_key(self):
        problems = lint("<div {...props} />;", {"checkKeyMustBeforeSpread": True})
        self.assertEqual([p.message_id for p in problems], ["keyBeforeSpread"])


class TestFragmentShorthand(unittest.TestCase):
    """Test cases for checkFragmentShorthand and the fragment factory name."""

    def test_not_checked_by_default(self):
        self.assertEqual(lint(shorthand_fragment_in_array()), [])

    def test_default_factory_name(self):
        problems = lint(shorthand_fragment_in_array(), {"checkFragmentShorthand": True})
        self.assertEqual(len(problems), 1)
        self.assertEqual(problems[0].message_id, "missingFragmentKey")
        self.assertEqual(
            problems[0].message,
            'Missing "key" prop for element in array. Shorthand fragment tags do not '
            "support key props: use React.Fragment instead.",
        )

    def test_factory_name_from_settings(self):
        settings = {"react": {"pragma": "Preact", "fragment": "Pfragment"}}
        problems = lint(shorthand_fragment_in_array(), {"checkFragmentShorthand": True}, settings)
        self.assertIn("use Preact.Pfragment instead", problems[0].message)

    def test_shorthand_fragments_in_source(self):
        code = "[\n  <></>,\n  <></>\n];"
        problems = lint(code, {"checkFragmentShorthand": True})
        self.assertEqual([p.line for p in problems], [2, 3])
        self.assertEqual([p.column for p in problems], [2, 2])
        self.assertTrue(all(p.message_id == "missingFragmentKey" for p in problems))
        self.assertEqual(lint(code), [])

    def test_fragment_pragma_comment_in_source(self):
        code = "/* @jsxFrag Preact.Fragment */\n[\n  <></>,\n  <></>\n];"
        settings = {"react": {"jsxFragmentFactory": "Other.Fragment"}}
        problems = lint(code, {"checkFragmentShorthand": True}, settings)
        self.assertEqual([p.line for p in problems], [3, 4])
        self.assertIn("use Preact.Fragment instead", problems[1].message)

    def test_duplicate_keys_among_fragment_children(self):
        problems = lint('<><li key="a" /><li key="a" /></>;')
        self.assertEqual([p.message_id for p in problems], ["nonUniqueKeys", "nonUniqueKeys"])

    def test_source_pragma_beats_settings(self):
        comment = {"type": "Block", "value": "* @jsxFrag Preact.Fragment "}
        settings = {"react": {"jsxFragmentFactory": "h.Frag"}}
        problems = lint(
            shorthand_fragment_in_array([comment]), {"checkFragmentShorthand": True}, settings
        )
        self.assertIn("use Preact.Fragment instead", problems[0].message)


if __name__ == '__main__':
    unittest.main()
