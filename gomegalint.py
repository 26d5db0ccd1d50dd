import json
import logging
import os
import sys
import time

from clang.cindex import Diagnostic as ClangDiagnostic

from ast_parser import parse_cpp_file
from ast_walker import walk_ast
from engine_factory import ALL_CHECKS, build_engine
from fixes import apply_fixes
from type_info import ErrorTypeInfo


logger = logging.getLogger("gomegalint")

USAGE = "Usage: gomegalint [--text] [--fix] [--checks nilness,style] [-v] FILE... [-- CLANG_ARGS...]"


def _round_ms(value):
    return round(max(0.0, float(value)), 3)


def _timing_ms(parse_ms, traversal_ms, interpretation_ms):
    total = parse_ms + traversal_ms + interpretation_ms
    return {
        "parse": _round_ms(parse_ms),
        "traversal": _round_ms(traversal_ms),
        "interpretation": _round_ms(interpretation_ms),
        "total": _round_ms(total),
    }


def _clang_items(translation_unit, target_file):
    severity_map = {
        ClangDiagnostic.Ignored: "info",
        ClangDiagnostic.Note: "info",
        ClangDiagnostic.Warning: "warning",
        ClangDiagnostic.Error: "error",
        ClangDiagnostic.Fatal: "error",
    }
    items = []

    for diag in translation_unit.diagnostics:
        loc = diag.location
        loc_file = loc.file.name if loc and loc.file else None
        if loc_file and os.path.realpath(loc_file) != target_file:
            continue

        items.append(
            {
                "severity": severity_map.get(diag.severity, "info"),
                "source": "clang",
                "check": None,
                "line": loc.line if loc else None,
                "column": loc.column if loc else None,
                "message": diag.spelling,
                "suggested_fixes": [],
            }
        )

    return items


def _has_blocking_parse_errors(clang_items):
    return any(item.get("severity") == "error" for item in clang_items)


def _limited_analysis_item(first_error_line=None):
    return {
        "severity": "warning",
        "source": "runtime",
        "check": None,
        "line": first_error_line if isinstance(first_error_line, int) else None,
        "column": None,
        "message": (
            "Assertion checks were skipped because parser errors were found. "
            "Fix parser errors first, then run analysis again."
        ),
        "suggested_fixes": [],
    }


def _summary(items):
    out = {"error": 0, "warning": 0, "info": 0}
    by_check = {}
    for item in items:
        sev = item.get("severity", "info")
        if sev not in out:
            sev = "info"
        out[sev] += 1

        check = item.get("check")
        if check:
            by_check[check] = by_check.get(check, 0) + 1

    out["total"] = out["error"] + out["warning"] + out["info"]
    out["by_check"] = by_check
    return out


def _print_item(display_name, item):
    line = item.get("line")
    column = item.get("column")
    location = display_name
    if isinstance(line, int):
        location += f":{line}"
        if isinstance(column, int):
            location += f":{column}"
    print(f"{location}: {item.get('message', '').strip()}")


def _parse_args(argv):
    """
    Returns (options, error). Everything after "--" goes to clang untouched.
    """
    options = {
        "text": False,
        "fix": False,
        "verbose": False,
        "checks": None,
        "files": [],
        "clang_args": [],
    }

    args = list(argv)
    if "--" in args:
        idx = args.index("--")
        options["clang_args"] = args[idx + 1 :]
        args = args[:idx]

    while args:
        arg = args.pop(0)
        if arg == "--text":
            options["text"] = True
        elif arg == "--fix":
            options["fix"] = True
        elif arg in ("-v", "--verbose"):
            options["verbose"] = True
        elif arg == "--checks":
            if not args:
                return options, "Missing value after --checks (expected comma-separated check names)."
            raw_checks = args.pop(0)
            checks = [c.strip().lower() for c in raw_checks.split(",") if c.strip()]
            unknown = sorted({c for c in checks if c not in ALL_CHECKS})
            if unknown:
                return options, (
                    "Unknown check(s): "
                    + ", ".join(unknown)
                    + ". Valid checks: "
                    + ", ".join(sorted(ALL_CHECKS))
                    + "."
                )
            options["checks"] = checks
        elif arg.startswith("-") and arg != "-":
            return options, f"Unknown option: {arg}. {USAGE}"
        else:
            options["files"].append(arg)

    if not options["files"]:
        return options, "No files provided."
    return options, None


def lint_file(filename, engine, *, fix=False, clang_args=None):
    """
    Parses, walks and checks one file. Returns the result payload for it.
    """
    display_name = os.path.basename(filename)
    target_file = os.path.realpath(filename)

    parse_start = time.perf_counter()
    translation_unit = parse_cpp_file(filename, extra_args=clang_args)
    parse_ms = (time.perf_counter() - parse_start) * 1000.0

    traversal_start = time.perf_counter()
    nodes = []
    walk_ast(translation_unit.cursor, nodes, target_file=target_file)
    traversal_ms = (time.perf_counter() - traversal_start) * 1000.0

    clang_items = _clang_items(translation_unit, target_file)
    blocking_parse_errors = _has_blocking_parse_errors(clang_items)

    interpretation_ms = 0.0
    diagnostics = []
    if not blocking_parse_errors:
        interpretation_start = time.perf_counter()
        diagnostics = engine.run(nodes)
        interpretation_ms = (time.perf_counter() - interpretation_start) * 1000.0

    items = list(clang_items) + [d.to_dict() for d in diagnostics]
    if blocking_parse_errors:
        error_lines = [item.get("line") for item in clang_items if item.get("severity") == "error"]
        first_error_line = min((ln for ln in error_lines if isinstance(ln, int)), default=None)
        items.append(_limited_analysis_item(first_error_line))

    fixed = 0
    if fix and diagnostics:
        with open(filename, "rb") as f:
            source = f.read()
        new_source, fixed, skipped = apply_fixes(source, diagnostics)
        if fixed:
            with open(filename, "wb") as f:
                f.write(new_source)
            logger.info("%s: applied %d fix(es), skipped %d", display_name, fixed, skipped)

    return {
        "file": display_name,
        "path": target_file,
        "ok": True,
        "error": None,
        "items": items,
        "summary": _summary(items),
        "fixed": fixed,
        "timing_ms": _timing_ms(parse_ms, traversal_ms, interpretation_ms),
    }


def _failed_result(filename, message):
    return {
        "file": os.path.basename(filename),
        "path": None,
        "ok": False,
        "error": message,
        "items": [
            {
                "severity": "error",
                "source": "runtime",
                "check": None,
                "line": None,
                "column": None,
                "message": message,
                "suggested_fixes": [],
            }
        ],
        "summary": {"error": 1, "warning": 0, "info": 0, "total": 1, "by_check": {}},
        "fixed": 0,
        "timing_ms": _timing_ms(0.0, 0.0, 0.0),
    }


def main(argv=None):
    options, error = _parse_args(sys.argv[1:] if argv is None else argv)

    logging.basicConfig(
        level=logging.DEBUG if options["verbose"] else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    json_mode = not options["text"]
    if error:
        if json_mode:
            print(json.dumps({"ok": False, "error": error}))
        else:
            print(error)
        return 2

    selected_checks = sorted(set(options["checks"]) if options["checks"] is not None else ALL_CHECKS)
    engine = build_engine(ErrorTypeInfo(), selected_checks)

    overall_start = time.perf_counter()
    results = []
    found = False

    for filename in options["files"]:
        try:
            result = lint_file(
                filename,
                engine,
                fix=options["fix"],
                clang_args=options["clang_args"],
            )
        except (OSError, RuntimeError) as exc:
            message = f"Failed to parse {os.path.basename(filename)}: {exc}"
            logger.error(message)
            result = _failed_result(filename, message)

        results.append(result)
        found = found or bool(result["summary"]["by_check"])

        if json_mode:
            continue

        for item in result["items"]:
            if item.get("source") == "rule" or item.get("severity") == "error":
                _print_item(result["file"], item)
        if result["fixed"]:
            print(f"{result['file']}: applied {result['fixed']} fix(es)")

    if json_mode:
        total_ms = _round_ms((time.perf_counter() - overall_start) * 1000.0)
        print(
            json.dumps(
                {
                    "ok": True,
                    "results": results,
                    "timing_ms": {"total": total_ms},
                    "checks": selected_checks,
                }
            )
        )

    return 1 if found else 0


if __name__ == "__main__":
    sys.exit(main())
