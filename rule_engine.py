import logging

from assertion import get_assertion


logger = logging.getLogger(__name__)


class RuleEngine:
    """
    Applies a sequence of assertion rules to a flat list of AST nodes
    and collects their diagnostics.

    Rules run in order on every recognized assertion. Once a rule's fix
    rewrites the comparator token, later rules for the same assertion still
    report but are asked not to suggest fixes of their own.
    """

    def __init__(self, rules):
        self.rules = rules

    def check(self, assertion):
        diagnostics = []
        allow_fix = True

        for rule in self.rules:
            if not rule.matches(assertion):
                continue

            diagnostic, rewrote_comparator = rule.apply(assertion, allow_fix=allow_fix)
            if diagnostic is not None:
                logger.debug("%s: line %s: %s", rule.name, diagnostic.line, diagnostic.message)
                diagnostics.append(diagnostic)
            if rewrote_comparator:
                allow_fix = False

        return diagnostics

    def run(self, nodes):
        diagnostics = []

        # Matched assertions are not skipped over: assertion-shaped calls in
        # their arguments are nodes of their own and get checked as well.
        for node in nodes:
            assertion = get_assertion(node)
            if assertion is None:
                continue

            logger.debug(
                "assertion %s(...).%s(...) on line %s",
                assertion.wrapper.value,
                assertion.comparator.value,
                node.get("line"),
            )
            diagnostics.extend(self.check(assertion))

        return diagnostics
