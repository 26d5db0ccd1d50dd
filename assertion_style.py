from enum import Enum


class Style(Enum):
    SHOULD = "should"
    EXPECT = "expect"


class Wrapper(Enum):
    """
    Functions wrapping the value under test, e.g. Expect(x).
    """

    OMEGA = "Ω"
    EXPECT = "Expect"

    @classmethod
    def from_name(cls, name):
        for member in cls:
            if member.value == name:
                return member
        return None


class Comparator(Enum):
    """
    Methods called on a wrapped value that take the matcher, e.g. .To(...).
    """

    SHOULD = "Should"
    SHOULD_NOT = "ShouldNot"
    TO = "To"
    TO_NOT = "ToNot"
    NOT_TO = "NotTo"

    @classmethod
    def from_name(cls, name):
        for member in cls:
            if member.value == name:
                return member
        return None

    @property
    def negated(self):
        return self in _NEGATED


_NEGATED = {Comparator.SHOULD_NOT, Comparator.TO_NOT, Comparator.NOT_TO}

_STYLES = {
    Wrapper.OMEGA: Style.SHOULD,
    Comparator.SHOULD: Style.SHOULD,
    Comparator.SHOULD_NOT: Style.SHOULD,
    Wrapper.EXPECT: Style.EXPECT,
    Comparator.TO: Style.EXPECT,
    Comparator.TO_NOT: Style.EXPECT,
    Comparator.NOT_TO: Style.EXPECT,
}


def get_style(token):
    style = _STYLES.get(token) if isinstance(token, (Wrapper, Comparator)) else None
    if style is None:
        raise ValueError(f"not an assertion wrapper or comparator: {token!r}")
    return style


def render_in_style(style, negated):
    if style is Style.SHOULD:
        return Comparator.SHOULD_NOT if negated else Comparator.SHOULD
    if style is Style.EXPECT:
        return Comparator.NOT_TO if negated else Comparator.TO
    raise ValueError(f"unknown assertion style: {style!r}")
