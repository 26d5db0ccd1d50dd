import dataclasses
import unittest

from assertion import Assertion, get_assertion
from assertion_style import Comparator, Wrapper
from tests.fake_ast import parse_expr, parse_nodes


class GetAssertionTest(unittest.TestCase):
    def test_recognizes_expect_style(self):
        node = parse_expr("Expect(err).NotTo(HaveOccurred())")
        assertion = get_assertion(node)

        self.assertIsNotNone(assertion)
        self.assertIs(assertion.wrapper, Wrapper.EXPECT)
        self.assertIs(assertion.comparator, Comparator.NOT_TO)
        self.assertTrue(assertion.negated)
        self.assertEqual(assertion.subject["name"], "err")
        self.assertEqual(assertion.matcher["name"], "HaveOccurred")
        self.assertIs(assertion.node, node)

    def test_assertion_keeps_only_checked_parts(self):
        fields = {f.name for f in dataclasses.fields(Assertion)}
        self.assertEqual(fields, {"node", "wrapper", "subject", "comparator", "comparator_node", "matcher"})

    def test_recognizes_omega_style(self):
        assertion = get_assertion(parse_expr("Ω(x).Should(BeNil())"))

        self.assertIsNotNone(assertion)
        self.assertIs(assertion.wrapper, Wrapper.OMEGA)
        self.assertIs(assertion.comparator, Comparator.SHOULD)
        self.assertFalse(assertion.negated)

    def test_matcher_is_opaque(self):
        assertion = get_assertion(parse_expr("Expect(x).To(Equal(1, 2))"))
        self.assertIsNotNone(assertion)
        self.assertEqual(assertion.matcher["name"], "Equal")

        assertion = get_assertion(parse_expr("Expect(x).To(matcher)"))
        self.assertIsNotNone(assertion)

    def test_rejects_wrong_shapes(self):
        for text in (
            "err",
            "BeNil()",
            "Expect(err)",
            "Expect(err).Should",
            "Expect(err).Should()",
            "Expect(err).Should(BeNil(), 1)",
            "Expect().Should(BeNil())",
            "Expect(a, b).Should(BeNil())",
            "Expect.Should(BeNil())",
            "(Expect(err)).Should(BeNil())",
            "gomega::Expect(err).Should(BeNil())",
            "g.Expect(err).Should(BeNil())",
            "Eventually(err).Should(BeNil())",
            "Expect(err).Must(BeNil())",
            "Expect(err).should(BeNil())",
        ):
            with self.subTest(text=text):
                self.assertIsNone(get_assertion(parse_expr(text)))

    def test_nested_assertions_are_found_independently(self):
        nodes = parse_nodes("Expect(Expect(x).To(BeNil())).To(Succeed())")
        assertions = [a for a in map(get_assertion, nodes) if a is not None]

        self.assertEqual(len(assertions), 2)
        self.assertEqual(assertions[0].matcher["name"], "Succeed")
        self.assertEqual(assertions[1].matcher["name"], "BeNil")


if __name__ == "__main__":
    unittest.main()
