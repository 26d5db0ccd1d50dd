import logging


logger = logging.getLogger(__name__)


def _overlaps(edit, other):
    if edit.start == edit.end or other.start == other.end:
        return edit.start == other.start
    return edit.start < other.end and other.start < edit.end


def select_edits(diagnostics):
    """
    Collects the edits of the first suggested fix of every diagnostic.

    A fix is taken as a whole: if any of its edits collides with an edit that
    was already accepted, the entire fix is skipped. Edits identical to an
    accepted one are merged.
    Returns (edits, applied_fixes, skipped_fixes).
    """
    accepted = []
    applied = 0
    skipped = 0

    for diagnostic in diagnostics:
        if not diagnostic.suggested_fixes:
            continue
        fix = diagnostic.suggested_fixes[0]

        new_edits = [edit for edit in fix.text_edits if edit not in accepted]
        conflict = any(_overlaps(edit, other) for edit in new_edits for other in accepted)
        if conflict:
            logger.warning(
                "skipping fix '%s' on line %s: it overlaps an earlier fix",
                fix.message,
                diagnostic.line,
            )
            skipped += 1
            continue

        accepted.extend(new_edits)
        applied += 1

    return accepted, applied, skipped


def apply_edits(source, edits):
    """
    Applies non-overlapping edits to source bytes. Offsets are byte offsets.
    """
    out = source
    for edit in sorted(edits, key=lambda e: (e.start, e.end), reverse=True):
        out = out[: edit.start] + edit.new_text.encode("utf-8") + out[edit.end :]
    return out


def apply_fixes(source, diagnostics):
    edits, applied, skipped = select_edits(diagnostics)
    return apply_edits(source, edits), applied, skipped
