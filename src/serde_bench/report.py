"""Render a ComparisonReport as plain text."""

from serde_bench.analysis import ComparisonReport

WIDTH = 78

_HEADER = f"| {'Format':<16} | {'Size (bytes)':>12} | {'Encode (ms)':>11} | {'Decode (ms)':>11} | {'Total (ms)':>10} |"
_RULE = f"|{'-' * 18}|{'-' * 14}|{'-' * 13}|{'-' * 13}|{'-' * 12}|"

_GAIN_WORDS = {
    "encode": ("faster", "slower"),
    "decode": ("faster", "slower"),
    "size": ("smaller", "larger"),
}


def _ms(seconds: float) -> str:
    return f"{seconds * 1000:.4f}"


def _gain(value: float | None, metric: str) -> str:
    if value is None:
        return "n/a"
    better, worse = _GAIN_WORDS[metric]
    return f"{abs(value):.1f}% {better if value >= 0 else worse}"


def render_table(report: ComparisonReport) -> list[str]:
    lines = [_HEADER, _RULE]
    for name, r in report.results.items():
        lines.append(
            f"| {name:<16} | {r.encoded_size:>12} | {_ms(r.encode_avg):>11} "
            f"| {_ms(r.decode_avg):>11} | {_ms(r.total_avg):>10} |"
        )
    return lines


def render(report: ComparisonReport) -> str:
    """Format a report for a terminal. Never recomputes measured values."""
    lines = ["COMPARISON", "=" * WIDTH]
    lines.extend(render_table(report))
    lines.append("=" * WIDTH)

    if report.results:
        encode = report.best("encode")
        decode = report.best("decode")
        size = report.best("size")
        lines.append("")
        lines.append("RANKING")
        lines.append("-" * WIDTH)
        lines.append(f"Fastest encode : {encode.codec} ({_ms(encode.encode_avg)} ms)")
        lines.append(f"Fastest decode : {decode.codec} ({_ms(decode.decode_avg)} ms)")
        lines.append(f"Smallest size  : {size.codec} ({size.encoded_size} bytes)")
        for metric, order in report.rankings.items():
            lines.append(f"  {metric:<7}: {' < '.join(order)}")

        lines.append("")
        lines.append(f"GAINS vs {report.baseline}")
        lines.append("-" * WIDTH)
        if not report.has_baseline:
            lines.append(f"Baseline {report.baseline!r} has no result; gains not available.")
        elif not report.gains:
            lines.append("No other codecs to compare.")
        for name, gains in report.gains.items():
            lines.append(f"  {name}:")
            lines.append(f"    encode : {_gain(gains['encode'], 'encode')}")
            lines.append(f"    decode : {_gain(gains['decode'], 'decode')}")
            lines.append(f"    size   : {_gain(gains['size'], 'size')}")

        lines.append("")
        lines.append(f"PROJECTED BANDWIDTH at {report.requests_per_second:,} requests/second (not measured)")
        lines.append("-" * WIDTH)
        for name, projection in report.bandwidth.items():
            lines.append(f"  {name:<16}: {projection.value:10.2f} {projection.unit}")
        for name, projection in report.savings.items():
            lines.append(f"  saved by {name} vs {report.baseline}: {projection.value:.2f} {projection.unit}")

    if report.exclusions:
        lines.append("")
        lines.append("EXCLUDED")
        lines.append("-" * WIDTH)
        for name, reason in report.exclusions.items():
            lines.append(f"  {name}: {reason}")

    return "\n".join(lines)
