class BaseRule:
    name = None

    def matches(self, assertion):
        return True

    def apply(self, assertion, allow_fix=True):
        """
        Checks one assertion.

        Returns a (diagnostic, rewrote_comparator) pair: the diagnostic is None
        when the assertion is fine, and rewrote_comparator tells the rules that
        run after this one whether the suggested fix already edits the
        comparator token (`Should`, `To`, ...).
        """
        raise NotImplementedError("apply() must be implemented")
