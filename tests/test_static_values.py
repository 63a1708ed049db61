"""
Tests for constant resolution and value enumeration.
"""

import unittest

from react_lint.static_values import (
    get_static_value,
    js_string,
    potential_value_nodes,
    value_identity,
)


def literal(value, raw=None):
    return {"type": "Literal", "value": value, "raw": raw if raw is not None else repr(value)}


def identifier(name):
    return {"type": "Identifier", "name": name}


def container(expression):
    return {"type": "JSXExpressionContainer", "expression": expression}


def template(quasis, expressions):
    elements = []
    for i, text in enumerate(quasis):
        elements.append({
            "type": "TemplateElement",
            "value": {"raw": text, "cooked": text},
            "tail": i == len(quasis) - 1,
        })
    return {"type": "TemplateLiteral", "quasis": elements, "expressions": expressions}


def conditional(test, consequent, alternate):
    return {"type": "ConditionalExpression", "test": test, "consequent": consequent, "alternate": alternate}


def logical(operator, left, right):
    return {"type": "LogicalExpression", "operator": operator, "left": left, "right": right}


class TestGetStaticValue(unittest.TestCase):
    """Test cases for the static value resolver."""

    def test_absent_node_is_unresolved(self):
        self.assertFalse(get_static_value(None).resolved)

    def test_literals_resolve_to_their_value(self):
        for value in ("foo", "", 3, 2.5, True, False, None):
            result = get_static_value(literal(value))
            self.assertTrue(result.resolved)
            self.assertEqual(result.value, value)

    def test_expression_container_is_unwrapped(self):
        result = get_static_value(container(literal("_blank")))
        self.assertTrue(result.resolved)
        self.assertEqual(result.value, "_blank")

    def test_non_literal_expressions_are_unresolved(self):
        call = {"type": "CallExpression", "callee": identifier("f"), "arguments": []}
        for node in (identifier("x"), call, conditional(identifier("c"), literal("a"), literal("a"))):
            self.assertFalse(get_static_value(node).resolved)
            self.assertFalse(get_static_value(container(node)).resolved)

    def test_template_concatenates_in_source_order(self):
        node = template(["a-", "-b-", ""], [literal(1.0), literal(True)])
        result = get_static_value(node)
        self.assertTrue(result.resolved)
        self.assertEqual(result.value, "a-1-b-true")

    def test_template_keeps_trailing_text(self):
        node = template(["x", "y"], [literal(None)])
        self.assertEqual(get_static_value(node).value, "xnully")

    def test_template_without_expressions(self):
        self.assertEqual(get_static_value(template(["plain"], [])).value, "plain")

    def test_template_with_unresolvable_interpolation(self):
        node = template(["a", "b", "c"], [literal("ok"), identifier("x")])
        self.assertFalse(get_static_value(node).resolved)

    def test_regex_literal_is_unresolved(self):
        node = {"type": "Literal", "value": None, "raw": "/a/", "regex": {"pattern": "a", "flags": ""}}
        self.assertFalse(get_static_value(node).resolved)

    def test_malformed_nodes_are_unresolved(self):
        for node in ({}, {"type": 1}, "Literal", 42, []):
            self.assertFalse(get_static_value(node).resolved)


class TestPotentialValueNodes(unittest.TestCase):
    """Test cases for the branch-aware enumerator."""

    def test_leaf_yields_itself(self):
        node = literal("a")
        self.assertEqual(list(potential_value_nodes(node)), [node])

    def test_absent_node_yields_nothing(self):
        self.assertEqual(list(potential_value_nodes(None)), [])

    def test_nested_branches_in_order(self):
        a, b, c, d = literal("a"), literal("b"), identifier("c"), literal("d")
        test = identifier("never")
        node = container(conditional(test, logical("||", a, b), conditional(test, c, d)))
        self.assertEqual(list(potential_value_nodes(node)), [a, b, c, d])

    def test_conditional_test_is_not_a_value(self):
        test = literal("_blank")
        node = conditional(test, literal("x"), literal("y"))
        self.assertNotIn(test, list(potential_value_nodes(node)))

    def test_assignment_yields_right_hand_side(self):
        right = literal("noreferrer")
        node = {"type": "AssignmentExpression", "operator": "=", "left": identifier("r"), "right": right}
        self.assertEqual(list(potential_value_nodes(node)), [right])

    def test_enumeration_is_repeatable(self):
        node = logical("&&", identifier("a"), conditional(identifier("t"), literal(1), literal(2)))
        self.assertEqual(list(potential_value_nodes(node)), list(potential_value_nodes(node)))


class TestJsString(unittest.TestCase):

    def test_conversions(self):
        self.assertEqual(js_string(True), "true")
        self.assertEqual(js_string(False), "false")
        self.assertEqual(js_string(None), "null")
        self.assertEqual(js_string(1), "1")
        self.assertEqual(js_string(1.0), "1")
        self.assertEqual(js_string(1.5), "1.5")
        self.assertEqual(js_string("s"), "s")


class TestValueIdentity(unittest.TestCase):

    def test_types_never_collide(self):
        self.assertNotEqual(value_identity("1"), value_identity(1))
        self.assertNotEqual(value_identity(True), value_identity(1))
        self.assertNotEqual(value_identity(None), value_identity("null"))

    def test_numbers_compare_by_value(self):
        self.assertEqual(value_identity(1), value_identity(1.0))


if __name__ == '__main__':
    unittest.main()
