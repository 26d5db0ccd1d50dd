from dataclasses import dataclass

from clang.cindex import CursorKind

from assertion_style import Comparator, Wrapper


_QUALIFIER_KINDS = {CursorKind.NAMESPACE_REF, CursorKind.TYPE_REF}


@dataclass(frozen=True)
class Assertion:
    """
    A recognized `Wrapper(Subject).Comparator(Matcher)` call, e.g.
    `Ω(x).Should(BeNil())` or `Expect(err).NotTo(HaveOccurred())`.
    """

    node: dict
    wrapper: Wrapper
    subject: dict
    comparator: Comparator
    comparator_node: dict
    matcher: dict

    @property
    def negated(self):
        return self.comparator.negated


def is_call(node):
    return node is not None and node.get("kind") == CursorKind.CALL_EXPR


def call_args(node):
    return node.get("args") or []


def plain_identifier(node):
    """
    Returns the name of an unqualified reference (`Foo`, not `ns::Foo`), or None.
    """
    if node is None or node.get("kind") != CursorKind.DECL_REF_EXPR:
        return None
    if any(child.get("kind") in _QUALIFIER_KINDS for child in node.get("children", [])):
        return None
    return node.get("name") or None


def get_assertion(node):
    if not is_call(node) or len(call_args(node)) != 1:
        return None

    comparator_node = node.get("callee")
    if comparator_node is None or comparator_node.get("kind") != CursorKind.MEMBER_REF_EXPR:
        return None

    receiver = comparator_node.get("children") or []
    wrapper_call = receiver[0] if receiver else None
    if not is_call(wrapper_call) or len(call_args(wrapper_call)) != 1:
        return None

    wrapper_node = wrapper_call.get("callee")
    wrapper = Wrapper.from_name(plain_identifier(wrapper_node))
    if wrapper is None:
        return None

    comparator = Comparator.from_name(comparator_node.get("name"))
    if comparator is None:
        return None

    return Assertion(
        node=node,
        wrapper=wrapper,
        subject=call_args(wrapper_call)[0],
        comparator=comparator,
        comparator_node=comparator_node,
        matcher=call_args(node)[0],
    )
