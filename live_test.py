import json
import sys
import time
from pathlib import Path

from deduper.core.config import DeduperConfig
from deduper.dedup import StringDeduplicator
from deduper.export import TextExporter
from deduper.sources import HttpLineSource
from deduper.utils.exceptions import SourceError
from deduper.utils.logging import setup_logging

ADVERTISERS_URL = "https://s3.amazonaws.com/ym-hosting/tomtest/advertisers.txt"


def main():
    setup_logging(level="INFO")

    log_file = Path("results.log")
    output_file = Path("output.txt")

    config = DeduperConfig(normalize="company", ignored_suffixes="company")
    deduper = StringDeduplicator(config)

    start = time.time()
    try:
        deduper.import_strings(HttpLineSource(ADVERTISERS_URL))
    except SourceError as e:
        print(f"Import failed: {e}")
        sys.exit(1)
    import_duration = time.time() - start

    start = time.time()
    exporter = TextExporter()
    ok = exporter.export(deduper.get_duplicates(include_original=True), output_file)
    export_duration = time.time() - start

    stats = deduper.get_statistics()
    metrics = {
        "performance": {
            "import": f"{import_duration:.2f}s",
            "export": f"{export_duration:.2f}s",
        },
        "coverage": {
            "lines_read": stats.lines_read,
            "groups": stats.groups,
            "duplicate_groups": stats.duplicate_groups,
            "lines_written": exporter.lines_written if ok else "ERROR: export failed",
        },
    }

    with open(log_file, "w", encoding="utf-8") as f:
        f.write("=== DEDUPER LIVE TEST ===\n")
        f.write(f"Source: {ADVERTISERS_URL}\n\n")
        f.write("=== PERFORMANCE METRICS ===\n")
        f.write(json.dumps(metrics["performance"], indent=2))
        f.write("\n\n=== COVERAGE METRICS ===\n")
        f.write(json.dumps(metrics["coverage"], indent=2))
        f.write(f"\n\nTest Completed: {time.ctime()}\n")

    print(f"\nLive test complete. Results persistent in {log_file}")


if __name__ == "__main__":
    main()
