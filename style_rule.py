from assertion_style import get_style, render_in_style
from base_rule import BaseRule
from diagnostics import SuggestedFix, diagnostic_at, edit_name


class InconsistentStyleRule(BaseRule):
    """
    Warns when an assertion mixes the two naming styles, e.g. Expect(x).Should(...).
    The fix rewrites the comparator into the wrapper's style.
    """

    name = "style"

    def apply(self, assertion, allow_fix=True):
        wrapper_style = get_style(assertion.wrapper)
        if wrapper_style == get_style(assertion.comparator):
            return None, False

        fixes = []
        if allow_fix:
            fixed = render_in_style(wrapper_style, assertion.negated)
            fixes.append(
                SuggestedFix(
                    message=f"change {assertion.comparator.value} to {fixed.value}",
                    text_edits=(edit_name(assertion.comparator_node, fixed.value),),
                )
            )

        diagnostic = diagnostic_at(
            assertion.node,
            f"inconsistent assertion style ({assertion.wrapper.value} + {assertion.comparator.value})",
            self.name,
            fixes,
        )
        return diagnostic, bool(fixes)
