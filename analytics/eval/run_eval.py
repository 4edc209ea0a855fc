"""
Evaluation harness -- runs eval_questions.jsonl through the interpreter
over the seeded sample dataset and generates analytics/reports/eval_report.md.

Checks (each only when the question declares an expectation):
  - Operation        (count | sum | avg | time_series)
  - Group column     (group_by)
  - Value column     (sum / avg field)
  - Date column & unit (time series)
  - Limit            (parsed row count)
  - Filter           (column + literal)
  - Expected errors  (e.g. blank question rejected)
  - Latency          (end-to-end ms)
"""
from __future__ import annotations

import datetime
import json
import sys
import time
from pathlib import Path
from typing import Any

EVAL_PATH = Path(__file__).resolve().parent / "eval_questions.jsonl"
REPORT_PATH = Path(__file__).resolve().parents[1] / "reports" / "eval_report.md"

_CHECKS: list[tuple[str, str]] = [
    # (expectation key, operation descriptor key)
    ("expected_operation", "metricOp"),
    ("expected_group_by", "groupBy"),
    ("expected_value_column", "metricField"),
    ("expected_date_column", "dateColumn"),
    ("expected_time_unit", "timeUnit"),
    ("expected_limit", "limit"),
    ("expected_filter", "filter"),
]


def _load_questions() -> list[dict[str, Any]]:
    lines = EVAL_PATH.read_text(encoding="utf-8").splitlines()
    return [json.loads(line) for line in lines if line.strip()]


def _actual(operation: dict[str, Any], key: str) -> Any:
    if key == "metricOp" and operation.get("type") == "time_series":
        return "time_series"
    return operation.get(key)


def _run_one(q: dict[str, Any], dataset) -> dict[str, Any]:
    """Run a single question through the analysis pipeline."""
    from src.interpreter.errors import AnalysisError
    from src.interpreter.service import analyze

    question = q["question"]
    t0 = time.perf_counter()
    try:
        payload = analyze(question, dataset).to_dict()
        error = None
    except AnalysisError as exc:
        payload = None
        error = type(exc).__name__
    latency = int((time.perf_counter() - t0) * 1000)

    if "expected_error" in q:
        ok = error == q["expected_error"]
        return {"question": question, "error": error, "latency_ms": latency,
                "failed_checks": [] if ok else ["expected_error"], "success": ok, "sql": ""}

    if payload is None:
        return {"question": question, "error": error, "latency_ms": latency,
                "failed_checks": ["unexpected_error"], "success": False, "sql": ""}

    operation = payload["operation"]
    failed = [
        exp_key for exp_key, op_key in _CHECKS
        if exp_key in q and _actual(operation, op_key) != q[exp_key]
    ]
    return {
        "question": question,
        "error": None,
        "latency_ms": latency,
        "failed_checks": failed,
        "success": not failed,
        "sql": payload["sql"],
        "rows_returned": len(payload["table"]["rows"]),
        "summary": payload["analysis"]["summary"],
    }


def _generate_report(results: list[dict[str, Any]]) -> str:
    """Generate the Markdown eval report."""
    total = len(results)
    now = datetime.datetime.now().strftime("%Y-%m-%d %H:%M")
    successes = sum(1 for r in results if r["success"])
    success_rate = (successes / total * 100) if total else 0

    latencies = sorted(r["latency_ms"] for r in results)
    avg_lat = sum(latencies) / len(latencies) if latencies else 0
    p50_lat = latencies[len(latencies) // 2] if latencies else 0
    max_lat = latencies[-1] if latencies else 0

    lines: list[str] = []
    lines.append("# Evaluation Report")
    lines.append("")
    lines.append(f"> Generated: {now}  |  Questions: **{total}**  |  Interpreter: heuristic")
    lines.append("")
    lines.append("## Summary")
    lines.append("")
    lines.append("| Metric | Value |")
    lines.append("|--------|-------|")
    lines.append(f"| Overall success rate | **{success_rate:.0f}%** ({successes}/{total}) |")
    lines.append(f"| Mean latency (ms) | {avg_lat:.0f} |")
    lines.append(f"| p50 latency (ms) | {p50_lat} |")
    lines.append(f"| Max latency (ms) | {max_lat} |")
    lines.append("")

    example = next((r for r in results if r["success"] and r["sql"]), None)
    if example:
        lines.append("## Example")
        lines.append("")
        lines.append(f"**Question:** *\"{example['question']}\"*")
        lines.append("")
        lines.append("```sql")
        lines.append(example["sql"])
        lines.append("```")
        lines.append("")
        lines.append(example["summary"])
        lines.append("")

    lines.append("## Per-Question Results")
    lines.append("")
    lines.append("| # | Question | Rows | Latency | Pass | Failed checks |")
    lines.append("|---|----------|------|---------|------|---------------|")
    for i, r in enumerate(results, 1):
        qtext = r["question"][:55] + ("..." if len(r["question"]) > 55 else "")
        rows = str(r.get("rows_returned", "--"))
        p = "OK" if r["success"] else "ERROR"
        failed = ", ".join(r["failed_checks"]) or "--"
        lines.append(f"| {i} | {qtext} | {rows} | {r['latency_ms']} | {p} | {failed} |")
    lines.append("")

    return "\n".join(lines)


def run():
    from pipelines.seed.seed_data import build_sample_dataset

    if sys.platform == "win32":
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")  # type: ignore[attr-defined]

    questions = _load_questions()
    dataset = build_sample_dataset()
    print(f"Loaded {len(questions)} eval questions over {dataset.row_count} sample rows.\n")

    results = []
    for i, q in enumerate(questions, 1):
        r = _run_one(q, dataset)
        status = "PASS" if r["success"] else "FAIL"
        print(f"  [{i:2d}/{len(questions)}] {status}  {r['question'][:50]:<50}  {r['latency_ms']:>4d}ms")
        results.append(r)

    REPORT_PATH.parent.mkdir(parents=True, exist_ok=True)
    REPORT_PATH.write_text(_generate_report(results), encoding="utf-8")
    print(f"\nReport written to {REPORT_PATH}")

    total = len(results)
    successes = sum(1 for r in results if r["success"])
    print(f"\n{'='*50}")
    print(f"  Success: {successes}/{total} ({successes/total*100:.0f}%)")
    print(f"{'='*50}")


if __name__ == "__main__":
    run()
