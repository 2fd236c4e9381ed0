#!/usr/bin/env python3
"""Example script summarising the bundled floral formula dataset.

This script loads the dataset and displays record counts per order and
per symmetry, the families with more than one formula, and a few sample
formulae with their explanations.
"""

import sys
from collections import Counter
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from floral.dataset import count_by_order, count_by_symmetry, default_data_path, load
from floral.explain import explain
from floral.render import render
from floral.ui import format_header


def main() -> None:
    data_path = default_data_path()

    print(f"Loading formulae from: {data_path}")
    records = load(data_path)
    print(f"Loaded {len(records)} formulae")

    # Records per order
    print("\n" + "=" * 60)
    print("FORMULAE BY ORDER")
    print("=" * 60)

    for order, count in count_by_order(records).most_common():
        print(f"  {order:<20} {count:>3}")

    # Records per symmetry
    print("\n" + "=" * 60)
    print("FORMULAE BY SYMMETRY")
    print("=" * 60)

    for kind, count in count_by_symmetry(records).most_common():
        print(f"  {kind.name.lower():<20} {count:>3}")

    # Families recorded more than once (e.g. staminate and carpellate flowers)
    print("\n" + "=" * 60)
    print("FAMILIES WITH SEVERAL FORMULAE")
    print("=" * 60)

    families = Counter(record.family for record in records)
    for record in records:
        if families[record.family] > 1:
            print(f"  {format_header(record)}")

    # Sample formulae
    print("\n" + "=" * 60)
    print("SAMPLE FORMULAE (first 10)")
    print("=" * 60)

    for record in records[:10]:
        print(f"\n{format_header(record)}")
        print(render(record))

    # One explanation in full
    print("\n" + "=" * 60)
    print("SAMPLE EXPLANATION")
    print("=" * 60 + "\n")

    sample = next((r for r in records if r.adnation.is_present), records[0])
    print(format_header(sample))
    print(explain(sample))


if __name__ == "__main__":
    main()
