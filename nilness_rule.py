from enum import Enum

from assertion import call_args, is_call, plain_identifier
from assertion_style import get_style, render_in_style
from base_rule import BaseRule
from diagnostics import SuggestedFix, diagnostic_at, edit_name


class KnownMatcher(Enum):
    UNKNOWN = ""
    BE_NIL = "BeNil"
    HAVE_OCCURRED = "HaveOccurred"
    SUCCEED = "Succeed"

    @classmethod
    def from_name(cls, name):
        if not name:
            return cls.UNKNOWN
        for member in cls:
            if member.value == name:
                return member
        return cls.UNKNOWN

    @property
    def matches_nil(self):
        """
        Whether the matcher succeeds when the actual value is nil.
        """
        return self is not KnownMatcher.HAVE_OCCURRED


def get_known_matcher(assertion):
    """
    Returns (callee_node, KnownMatcher) for matchers like BeNil(); anything
    else (arguments, qualified names, custom matchers) is UNKNOWN.
    """
    matcher = assertion.matcher
    if not is_call(matcher) or call_args(matcher):
        return None, KnownMatcher.UNKNOWN

    callee = matcher.get("callee")
    known = KnownMatcher.from_name(plain_identifier(callee))
    if known is KnownMatcher.UNKNOWN:
        return None, KnownMatcher.UNKNOWN
    return callee, known


class NilnessRule(BaseRule):
    """
    Picks the most fitting of BeNil/HaveOccurred/Succeed for the subject:

        Expect(err).NotTo(HaveOccurred())     err is an error value
        Expect(doStuff()).To(Succeed())       doStuff() returns an error
        Expect(ptr).To(BeNil())               anything else

    Switching between matchers of opposite nil-polarity also inverts the
    comparator, so the suggested fix keeps the meaning of the assertion.
    """

    name = "nilness"

    def __init__(self, type_info):
        self.type_info = type_info

    def matches(self, assertion):
        return get_known_matcher(assertion)[1] is not KnownMatcher.UNKNOWN

    def expected_matcher(self, assertion):
        if not self.type_info(assertion.subject):
            return KnownMatcher.BE_NIL
        if is_call(assertion.subject):
            return KnownMatcher.SUCCEED
        return KnownMatcher.HAVE_OCCURRED

    def apply(self, assertion, allow_fix=True):
        matcher_node, actual = get_known_matcher(assertion)
        if actual is KnownMatcher.UNKNOWN:
            return None, False

        expected = self.expected_matcher(assertion)
        if actual is expected:
            return None, False

        fix_message = f"change matcher to {expected.value}"
        edits = [edit_name(matcher_node, expected.value)]

        needs_inverting = actual.matches_nil != expected.matches_nil
        if needs_inverting:
            inverted = render_in_style(get_style(assertion.wrapper), not assertion.negated)
            edits.append(edit_name(assertion.comparator_node, inverted.value))
            fix_message += " and invert the assertion"

        diagnostic = diagnostic_at(
            assertion.node,
            f"unidiomatic matcher: consider using {expected.value} "
            f"instead of {actual.value} in this assertion",
            self.name,
            [SuggestedFix(message=fix_message, text_edits=tuple(edits))],
        )
        return diagnostic, needs_inverting
