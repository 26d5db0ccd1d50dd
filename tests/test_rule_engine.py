import unittest

from engine_factory import build_engine
from fixes import apply_fixes
from tests.fake_ast import parse_nodes


ERROR_NAMES = {"err", "doStuff"}


def is_error(node):
    return node.get("name") in ERROR_NAMES


def run(text, checks=None):
    return build_engine(is_error, checks).run(parse_nodes(text))


def fix(text, diagnostics):
    source, _, _ = apply_fixes(text.encode("utf-8"), diagnostics)
    return source.decode("utf-8")


class RuleEngineTest(unittest.TestCase):
    def test_error_checked_with_be_nil_in_mixed_style(self):
        text = "Expect(err).Should(BeNil())"
        diagnostics = run(text)

        self.assertEqual(
            [d.message for d in diagnostics],
            [
                "unidiomatic matcher: consider using HaveOccurred instead of BeNil in this assertion",
                "inconsistent assertion style (Expect + Should)",
            ],
        )
        nilness, style = diagnostics
        self.assertEqual(len(nilness.suggested_fixes), 1)
        self.assertEqual(style.suggested_fixes, ())
        self.assertEqual(fix(text, diagnostics), "Expect(err).NotTo(HaveOccurred())")

    def test_idiomatic_assertions_are_quiet(self):
        for text in (
            "Ω(x).Should(BeNil())",
            "Expect(doStuff()).To(Succeed())",
            "Expect(err).ToNot(HaveOccurred())",
        ):
            with self.subTest(text=text):
                self.assertEqual(run(text), [])

    def test_custom_matcher_only_gets_style_check(self):
        self.assertEqual(run("Expect(err).To(MyCustomMatcher())"), [])

        diagnostics = run("Expect(err).Should(MyCustomMatcher())")
        self.assertEqual(
            [d.message for d in diagnostics],
            ["inconsistent assertion style (Expect + Should)"],
        )
        self.assertEqual(fix("Expect(err).Should(MyCustomMatcher())", diagnostics), "Expect(err).To(MyCustomMatcher())")

    def test_nilness_fix_without_inversion_keeps_style_fix(self):
        text = "Expect(doStuff()).Should(BeNil())"
        diagnostics = run(text)

        self.assertEqual([d.check for d in diagnostics], ["nilness", "style"])
        self.assertEqual(len(diagnostics[1].suggested_fixes), 1)
        self.assertEqual(fix(text, diagnostics), "Expect(doStuff()).To(Succeed())")

    def test_selected_checks_only(self):
        text = "Expect(err).Should(BeNil())"

        style_only = run(text, ["style"])
        self.assertEqual([d.check for d in style_only], ["style"])
        self.assertEqual(len(style_only[0].suggested_fixes), 1)

        nilness_only = run(text, ["nilness"])
        self.assertEqual([d.check for d in nilness_only], ["nilness"])

    def test_assertions_inside_matcher_arguments_are_checked(self):
        text = "Expect(x).To(ContainElement(Ω(y).To(BeNil())))"
        diagnostics = run(text)

        self.assertEqual(
            [d.message for d in diagnostics],
            ["inconsistent assertion style (Ω + To)"],
        )
        self.assertEqual(diagnostics[0].start, text.encode("utf-8").index("Ω".encode("utf-8")))

    def test_diagnostics_follow_source_order(self):
        text = "Expect(err).To(BeNil());\nΩ(x).To(BeNil())"
        diagnostics = run(text)

        self.assertEqual([(d.check, d.line) for d in diagnostics], [("nilness", 1), ("style", 2)])
        self.assertEqual(
            fix(text, diagnostics),
            "Expect(err).NotTo(HaveOccurred());\nΩ(x).Should(BeNil())",
        )


if __name__ == "__main__":
    unittest.main()
