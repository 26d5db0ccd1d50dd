import unittest

from assertion import get_assertion
from fixes import apply_fixes
from style_rule import InconsistentStyleRule
from tests.fake_ast import parse_expr


def check(text, allow_fix=True):
    return InconsistentStyleRule().apply(get_assertion(parse_expr(text)), allow_fix=allow_fix)


class InconsistentStyleRuleTest(unittest.TestCase):
    def test_consistent_assertions_are_not_reported(self):
        for text in (
            "Ω(x).Should(BeNil())",
            "Ω(x).ShouldNot(BeNil())",
            "Expect(x).To(BeNil())",
            "Expect(x).ToNot(BeNil())",
            "Expect(x).NotTo(BeNil())",
        ):
            with self.subTest(text=text):
                self.assertEqual(check(text), (None, False))

    def test_mixed_styles_are_reported_with_fix(self):
        for text, fixed in (
            ("Expect(x).Should(Equal(1))", "Expect(x).To(Equal(1))"),
            ("Expect(x).ShouldNot(Equal(1))", "Expect(x).NotTo(Equal(1))"),
            ("Ω(x).To(Equal(1))", "Ω(x).Should(Equal(1))"),
            ("Ω(x).ToNot(Equal(1))", "Ω(x).ShouldNot(Equal(1))"),
            ("Ω(x).NotTo(Equal(1))", "Ω(x).ShouldNot(Equal(1))"),
        ):
            with self.subTest(text=text):
                diagnostic, rewrote = check(text)
                self.assertTrue(rewrote)
                self.assertEqual(diagnostic.check, "style")
                self.assertEqual(len(diagnostic.suggested_fixes), 1)
                self.assertEqual(len(diagnostic.suggested_fixes[0].text_edits), 1)

                source, applied, skipped = apply_fixes(text.encode("utf-8"), [diagnostic])
                self.assertEqual((applied, skipped), (1, 0))
                self.assertEqual(source.decode("utf-8"), fixed)

                self.assertEqual(check(fixed), (None, False))

    def test_message_names_both_parts(self):
        diagnostic, _ = check("Ω(x).NotTo(BeNil())")
        self.assertEqual(diagnostic.message, "inconsistent assertion style (Ω + NotTo)")
        self.assertEqual(diagnostic.suggested_fixes[0].message, "change NotTo to ShouldNot")

    def test_suppressed_fix_still_reports(self):
        diagnostic, rewrote = check("Expect(err).Should(BeNil())", allow_fix=False)

        self.assertFalse(rewrote)
        self.assertEqual(diagnostic.message, "inconsistent assertion style (Expect + Should)")
        self.assertEqual(diagnostic.suggested_fixes, ())


if __name__ == "__main__":
    unittest.main()
