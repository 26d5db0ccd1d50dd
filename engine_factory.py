from nilness_rule import NilnessRule
from rule_engine import RuleEngine
from style_rule import InconsistentStyleRule


ALL_CHECKS = {"nilness", "style"}


def _normalized_checks(enabled_checks):
    if not enabled_checks:
        return set(ALL_CHECKS)
    return {c for c in enabled_checks if c in ALL_CHECKS}


def build_engine(type_info, enabled_checks=None):
    checks = _normalized_checks(enabled_checks)
    rules = []

    # Nilness goes first: its fix may invert the comparator, which the
    # style rule would otherwise rewrite a second time.
    if "nilness" in checks:
        rules.append(NilnessRule(type_info))

    if "style" in checks:
        rules.append(InconsistentStyleRule())

    return RuleEngine(rules)
