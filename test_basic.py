#!/usr/bin/env python3
"""Basic test script to verify the ranking engine functionality."""

import os
import sys

# Add the project root to the Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from fuzzy_ranker.core.engine import Ranker
from fuzzy_ranker.core.matcher import exact_match, fuzzy_match_indices


def test_basic_functionality():
    """Test basic ranking functionality."""
    print("🚀 Testing Fuzzy Ranker")
    print("=" * 50)

    ranker = Ranker()

    candidates = [
        "src/main.rs",
        "src/lib.rs",
        "src/matcher/fuzzy.rs",
        "docs/readme.md",
        "tests/test_main.py",
        "Cargo.toml",
    ]
    print(f"📊 Ranking {len(candidates)} candidates")

    test_cases = [
        ("main", "Fuzzy match"),
        ("'lib", "Exact substring"),
        ("^src rs$", "Prefix and suffix"),
        ("src !fuzzy", "Negation"),
        ("toml | md", "Alternation"),
        ("xyz123", "No match"),
        ("", "Empty query"),
    ]

    print("\n🔍 Running test cases...")
    print("-" * 50)

    for query, description in test_cases:
        print(f"\nQuery: '{query}' ({description})")
        results = ranker.match_candidates(candidates, query)
        print(f"  📋 Matches: {len(results)}")
        for match in results[:3]:
            print(f"    {candidates[match.index]} (score: {match.score}, indices: {list(match.indices)})")

    assert exact_match("hello", "hello") == 140
    score, indices = fuzzy_match_indices("hello world", "hello")
    assert score == 134 and indices == (0, 1, 2, 3, 4)

    stats = ranker.get_stats()
    print("\n📈 Ranker statistics:")
    print(f"  Total scans: {stats['total_scans']}")
    print(f"  Candidates scored: {stats['candidates_scored']}")
    print(f"  Average time: {stats['average_execution_time_ms']:.2f}ms")

    assert stats["total_scans"] == len(test_cases)
    print("\n✅ All basic tests completed!")


if __name__ == "__main__":
    test_basic_functionality()
