"""Tests for card usage statistics."""

from __future__ import annotations

from pimpampum.engine.stats import CardStats, CombatStats


class TestCardStats:
    """Tests for CardStats."""

    def test_rates(self) -> None:
        """Test win correlation and interrupt rate percentages."""
        stats = CardStats(plays=8, plays_by_winner=6, interrupted=2)

        assert stats.win_correlation == 75.0
        assert stats.interrupt_rate == 25.0

    def test_rates_without_plays(self) -> None:
        """Test rates are zero for unplayed cards."""
        stats = CardStats()

        assert stats.win_correlation == 0.0
        assert stats.interrupt_rate == 0.0


class TestCombatStats:
    """Tests for CombatStats."""

    def test_record_updates_name_and_type(self) -> None:
        """Test every record touches both keyings."""
        stats = CombatStats()

        stats.record_play("Cop", "PhysicalAttack")
        stats.record_play("Cop", "PhysicalAttack")
        stats.record_winner_play("Cop", "PhysicalAttack")
        stats.record_play("Concentracio", "Focus")
        stats.record_interrupted("Concentracio", "Focus")

        assert stats.card_stats["Cop"] == CardStats(plays=2, plays_by_winner=1)
        assert stats.card_type_stats["Focus"] == CardStats(plays=1, interrupted=1)

    def test_merge(self) -> None:
        """Test merging adds counters and keeps disjoint keys."""
        first = CombatStats()
        first.record_play("Cop", "PhysicalAttack")
        second = CombatStats()
        second.record_play("Cop", "PhysicalAttack")
        second.record_play("Escut", "Defense")

        first.merge(second)

        assert first.card_stats["Cop"].plays == 2
        assert first.card_stats["Escut"].plays == 1
        assert first.card_type_stats["PhysicalAttack"].plays == 2

    def test_merge_does_not_alias(self) -> None:
        """Test merged entries are copies, not shared objects."""
        first = CombatStats()
        second = CombatStats()
        second.record_play("Escut", "Defense")

        first.merge(second)
        second.record_play("Escut", "Defense")

        assert first.card_stats["Escut"].plays == 1

    def test_combine_order_independent(self) -> None:
        """Test combining snapshots in any order gives the same totals."""
        snapshots = []
        for name in ("Cop", "Escut", "Cop"):
            snapshot = CombatStats()
            snapshot.record_play(name, "Any")
            snapshots.append(snapshot)

        forward = CombatStats.combine(snapshots)
        backward = CombatStats.combine(reversed(snapshots))

        assert forward == backward
        assert forward.card_type_stats["Any"].plays == 3

    def test_by_plays(self) -> None:
        """Test entries sort by play count."""
        stats = CombatStats()
        stats.record_play("Escut", "Defense")
        for _ in range(3):
            stats.record_play("Cop", "PhysicalAttack")

        assert [name for name, _ in stats.by_plays()] == ["Cop", "Escut"]
        assert [label for label, _ in stats.by_plays(types=True)] == [
            "PhysicalAttack",
            "Defense",
        ]
