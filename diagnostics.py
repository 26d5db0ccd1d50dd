from dataclasses import dataclass, field


@dataclass(frozen=True)
class TextEdit:
    start: int
    end: int
    new_text: str

    def to_dict(self):
        return {"start": self.start, "end": self.end, "new_text": self.new_text}


@dataclass(frozen=True)
class SuggestedFix:
    """
    A named group of edits. The edits of one fix are applied together or not at all.
    """

    message: str
    text_edits: tuple = ()

    def to_dict(self):
        return {
            "message": self.message,
            "text_edits": [edit.to_dict() for edit in self.text_edits],
        }


@dataclass(frozen=True)
class Diagnostic:
    start: int
    end: int
    line: int | None
    column: int | None
    message: str
    check: str
    suggested_fixes: tuple = field(default_factory=tuple)

    def to_dict(self):
        return {
            "severity": "warning",
            "source": "rule",
            "check": self.check,
            "line": self.line,
            "column": self.column,
            "start": self.start,
            "end": self.end,
            "message": self.message,
            "suggested_fixes": [fix.to_dict() for fix in self.suggested_fixes],
        }


def edit_name(node, new_text):
    start, end = node["name_span"]
    return TextEdit(start=start, end=end, new_text=new_text)


def diagnostic_at(node, message, check, suggested_fixes=()):
    start, end = node["extent"]
    return Diagnostic(
        start=start,
        end=end,
        line=node.get("line"),
        column=node.get("column"),
        message=message,
        check=check,
        suggested_fixes=tuple(suggested_fixes),
    )
