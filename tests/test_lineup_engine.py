"""
Unit tests for the lineup partition engine.

Tests membership operations, capacity handling, reordering and the
invariants that must hold after every operation.
"""
import random
import unittest

from gameroster.models import Lineup, Player, RosterPool, Zone
from gameroster.services.lineup_engine import (
    CapacityExceeded, InvalidCapacity, InvalidIndex, LineupError, PartitionEngine,
    PlayerAlreadyAssigned, PlayerNotInZone, UnknownPlayer
)


def make_pool(*ids: str) -> RosterPool:
    return RosterPool(Player(id=pid, team_id="t1", name=f"Player {pid}") for pid in ids)


class TestPartitionEngine(unittest.TestCase):
    """Test cases for PartitionEngine operations."""

    def setUp(self) -> None:
        """Set up test fixtures."""
        self.pool = make_pool("A", "B", "C", "D", "E", "F", "G", "H")
        self.engine = PartitionEngine(self.pool)

    def test_new_engine_is_empty(self) -> None:
        """Test default engine state."""
        self.assertEqual(self.engine.starter_slots, 5)
        self.assertEqual(self.engine.starters, ())
        self.assertEqual(self.engine.substitutes, ())
        self.assertEqual(self.engine.available_players(), list(self.pool.ids))
        self.assertEqual(self.engine.lineup, Lineup.empty(5))

    def test_add_to_starters_appends_in_order(self) -> None:
        """Test that starters keep the order they were added in."""
        for pid in ("C", "A", "B"):
            self.engine.add_to_starters(pid)

        self.assertEqual(self.engine.starters, ("C", "A", "B"))
        self.assertEqual(self.engine.zone_of("A"), Zone.STARTER)
        self.assertEqual(self.engine.available_players(), ["D", "E", "F", "G", "H"])

    def test_sixth_starter_rejected_when_full(self) -> None:
        """Test that a sixth starter is rejected with the first five unchanged."""
        for pid in ("A", "B", "C", "D", "E"):
            self.engine.add_to_starters(pid)

        with self.assertRaises(CapacityExceeded) as ctx:
            self.engine.add_to_starters("F")

        self.assertEqual(ctx.exception.starter_slots, 5)
        self.assertEqual(ctx.exception.starter_count, 5)
        self.assertEqual(self.engine.starters, ("A", "B", "C", "D", "E"))
        self.assertEqual(self.engine.zone_of("F"), Zone.AVAILABLE)
        self.assertTrue(self.engine.is_full())
        self.assertEqual(self.engine.open_slots(), 0)

    def test_add_already_assigned_player_rejected(self) -> None:
        """Test that a player must leave its zone before being added elsewhere."""
        self.engine.add_to_starters("A")
        self.engine.add_to_substitutes("B")
        before = self.engine.lineup

        with self.assertRaises(PlayerAlreadyAssigned):
            self.engine.add_to_starters("A")
        with self.assertRaises(PlayerAlreadyAssigned):
            self.engine.add_to_substitutes("A")
        with self.assertRaises(PlayerAlreadyAssigned) as ctx:
            self.engine.add_to_starters("B")

        self.assertEqual(ctx.exception.zone, Zone.SUBSTITUTE)
        self.assertEqual(self.engine.lineup, before)

    def test_add_unknown_player_rejected(self) -> None:
        """Test that only roster pool players can be assigned."""
        with self.assertRaises(UnknownPlayer):
            self.engine.add_to_starters("nobody")
        with self.assertRaises(UnknownPlayer):
            self.engine.add_to_substitutes("nobody")
        self.assertTrue(self.engine.lineup.is_empty)

    def test_substitutes_have_no_capacity(self) -> None:
        """Test that the bench accepts any number of players."""
        self.engine.set_starter_capacity(1)
        for pid in self.pool.ids:
            self.engine.add_to_substitutes(pid)

        self.assertEqual(self.engine.substitutes, self.pool.ids)
        self.assertEqual(self.engine.available_players(), [])

    def test_remove_compacts_order(self) -> None:
        """Test removing from the middle of a zone."""
        for pid in ("A", "B", "C"):
            self.engine.add_to_starters(pid)
        for pid in ("D", "E", "F"):
            self.engine.add_to_substitutes(pid)

        self.assertTrue(self.engine.remove_from_starters("B"))
        self.assertTrue(self.engine.remove_from_substitutes("D"))

        self.assertEqual(self.engine.starters, ("A", "C"))
        self.assertEqual(self.engine.substitutes, ("E", "F"))
        self.assertEqual(self.engine.zone_of("B"), Zone.AVAILABLE)
        self.assertEqual(self.engine.available_players(), ["B", "D", "G", "H"])

    def test_remove_missing_is_noop(self) -> None:
        """Test that removing a player not in the zone changes nothing."""
        self.engine.add_to_starters("A")
        self.engine.add_to_substitutes("B")
        before = self.engine.lineup

        self.assertFalse(self.engine.remove_from_starters("B"))
        self.assertFalse(self.engine.remove_from_substitutes("A"))
        self.assertFalse(self.engine.remove_from_starters("nobody"))
        self.assertEqual(self.engine.lineup, before)

    def test_promote_to_starter(self) -> None:
        """Test moving a substitute to the end of the starters."""
        self.engine.add_to_starters("A")
        self.engine.add_to_substitutes("B")
        self.engine.add_to_substitutes("C")

        self.engine.promote_to_starter("C")

        self.assertEqual(self.engine.starters, ("A", "C"))
        self.assertEqual(self.engine.substitutes, ("B",))

    def test_promote_when_full_keeps_player_on_bench(self) -> None:
        """Test that a failed promotion leaves the substitute where it was."""
        self.engine.set_starter_capacity(2)
        self.engine.add_to_starters("A")
        self.engine.add_to_starters("B")
        self.engine.add_to_substitutes("C")
        self.engine.add_to_substitutes("D")
        before = self.engine.lineup

        with self.assertRaises(CapacityExceeded) as ctx:
            self.engine.promote_to_starter("C")

        self.assertEqual(ctx.exception.player_id, "C")
        self.assertEqual(self.engine.lineup, before)
        self.assertEqual(self.engine.substitutes, ("C", "D"))

    def test_promote_requires_substitute(self) -> None:
        """Test promoting a player that is not on the bench."""
        self.engine.add_to_starters("A")
        with self.assertRaises(PlayerNotInZone):
            self.engine.promote_to_starter("A")
        with self.assertRaises(PlayerNotInZone):
            self.engine.promote_to_starter("B")

    def test_demote_middle_starter_to_end_of_bench(self) -> None:
        """Test demoting the middle starter to the end of the bench."""
        for pid in ("A", "B", "C"):
            self.engine.add_to_starters(pid)
        self.engine.add_to_substitutes("D")

        self.engine.demote_to_substitute("B")

        self.assertEqual(self.engine.starters, ("A", "C"))
        self.assertEqual(self.engine.substitutes, ("D", "B"))

    def test_demote_works_when_over_capacity(self) -> None:
        """Test that demotion has no capacity check."""
        for pid in ("A", "B", "C"):
            self.engine.add_to_starters(pid)
        self.engine.set_starter_capacity(1)

        self.engine.demote_to_substitute("A")

        self.assertEqual(self.engine.starters, ("B", "C"))
        self.assertEqual(self.engine.substitutes, ("A",))

    def test_demote_requires_starter(self) -> None:
        """Test demoting a player that is not a starter."""
        self.engine.add_to_substitutes("A")
        with self.assertRaises(PlayerNotInZone):
            self.engine.demote_to_substitute("A")

    def test_reorder_moves_within_zone(self) -> None:
        """Test reordering starters forwards and backwards."""
        for pid in ("A", "B", "C", "D"):
            self.engine.add_to_starters(pid)

        self.engine.reorder(Zone.STARTER, 0, 2)
        self.assertEqual(self.engine.starters, ("B", "C", "A", "D"))

        self.engine.reorder(Zone.STARTER, 3, 0)
        self.assertEqual(self.engine.starters, ("D", "B", "C", "A"))

        self.engine.reorder(Zone.STARTER, 1, 1)
        self.assertEqual(self.engine.starters, ("D", "B", "C", "A"))

    def test_reorder_is_local_to_zone(self) -> None:
        """Test that reordering substitutes leaves starters and membership alone."""
        for pid in ("A", "B"):
            self.engine.add_to_starters(pid)
        for pid in ("C", "D", "E"):
            self.engine.add_to_substitutes(pid)
        available_before = self.engine.available_players()

        self.engine.reorder(Zone.SUBSTITUTE, 2, 0)

        self.assertEqual(self.engine.substitutes, ("E", "C", "D"))
        self.assertEqual(self.engine.starters, ("A", "B"))
        self.assertEqual(self.engine.available_players(), available_before)

    def test_reorder_invalid_index(self) -> None:
        """Test reordering with indices outside the zone."""
        for pid in ("A", "B"):
            self.engine.add_to_starters(pid)
        before = self.engine.lineup

        for from_index, to_index in ((2, 0), (0, 2), (-1, 0), (0, -1)):
            with self.assertRaises(InvalidIndex):
                self.engine.reorder(Zone.STARTER, from_index, to_index)

        with self.assertRaises(InvalidIndex) as ctx:
            self.engine.reorder(Zone.SUBSTITUTE, 0, 0)
        self.assertEqual(ctx.exception.size, 0)
        self.assertEqual(self.engine.lineup, before)

    def test_reorder_available_zone_rejected(self) -> None:
        """Test that the derived available list cannot be reordered."""
        with self.assertRaises(ValueError):
            self.engine.reorder(Zone.AVAILABLE, 0, 1)

    def test_set_starter_capacity_validation(self) -> None:
        """Test capacity bounds."""
        self.engine.set_starter_capacity(1)
        self.assertEqual(self.engine.starter_slots, 1)
        self.engine.set_starter_capacity(50)
        self.assertEqual(self.engine.starter_slots, 50)

        for bad in (0, 51, -3, 2.5, "7", None, True):
            with self.assertRaises(InvalidCapacity):
                self.engine.set_starter_capacity(bad)
        self.assertEqual(self.engine.starter_slots, 50)

    def test_lowering_capacity_keeps_starters(self) -> None:
        """Test that lowering capacity keeps starters and blocks additions."""
        for pid in ("A", "B", "C", "D", "E"):
            self.engine.add_to_starters(pid)

        self.engine.set_starter_capacity(3)

        self.assertEqual(self.engine.starters, ("A", "B", "C", "D", "E"))
        self.assertTrue(self.engine.lineup.over_capacity)
        with self.assertRaises(CapacityExceeded):
            self.engine.add_to_starters("F")

        self.engine.remove_from_starters("E")
        self.engine.remove_from_starters("D")
        with self.assertRaises(CapacityExceeded):
            self.engine.add_to_starters("F")

        self.engine.remove_from_starters("C")
        self.engine.add_to_starters("F")
        self.assertEqual(self.engine.starters, ("A", "B", "F"))

    def test_clear(self) -> None:
        """Test clearing both zones."""
        self.engine.add_to_starters("A")
        self.engine.add_to_substitutes("B")
        self.engine.set_starter_capacity(7)

        self.engine.clear()

        self.assertEqual(self.engine.lineup, Lineup.empty(7))
        self.assertEqual(self.engine.available_players(), list(self.pool.ids))

    def test_available_players_objects(self) -> None:
        """Test that available() returns Player objects in pool order."""
        self.engine.add_to_starters("B")
        names = [p.name for p in self.engine.available()]
        self.assertEqual(names[:2], ["Player A", "Player C"])

    def test_initial_lineup(self) -> None:
        """Test constructing from an existing lineup, including over capacity."""
        lineup = Lineup(starter_slots=2, starters=("A", "B", "C"), substitutes=("D",))
        engine = PartitionEngine(self.pool, lineup)

        self.assertEqual(engine.lineup, lineup)
        with self.assertRaises(CapacityExceeded):
            engine.promote_to_starter("D")

    def test_initial_lineup_rejects_overlap(self) -> None:
        """Test that a lineup listing a player twice is refused."""
        with self.assertRaises(ValueError):
            PartitionEngine(self.pool, Lineup(starters=("A",), substitutes=("A",)))
        with self.assertRaises(ValueError):
            PartitionEngine(self.pool, Lineup(starters=("nobody",)))
        with self.assertRaises(InvalidCapacity):
            PartitionEngine(self.pool, Lineup(starter_slots=0))

    def test_lineup_snapshot_is_detached(self) -> None:
        """Test that snapshots do not change with later operations."""
        self.engine.add_to_starters("A")
        snapshot = self.engine.lineup
        self.engine.add_to_starters("B")

        self.assertEqual(snapshot.starters, ("A",))
        self.assertEqual(snapshot.zone_of("A"), Zone.STARTER)
        self.assertEqual(snapshot.zone_of("B"), Zone.AVAILABLE)
        self.assertEqual(self.engine.lineup.zone_of("B"), Zone.STARTER)


class TestPartitionEngineInvariants(unittest.TestCase):
    """Random operation sequences must never break the lineup invariants."""

    def _random_operation(self, rng: random.Random, engine: PartitionEngine, ids) -> None:
        op = rng.choice([
            "add_starter", "add_sub", "remove_starter", "remove_sub",
            "promote", "demote", "reorder", "capacity", "clear",
        ])
        pid = rng.choice(ids)
        if op == "add_starter":
            engine.add_to_starters(pid)
        elif op == "add_sub":
            engine.add_to_substitutes(pid)
        elif op == "remove_starter":
            engine.remove_from_starters(pid)
        elif op == "remove_sub":
            engine.remove_from_substitutes(pid)
        elif op == "promote":
            engine.promote_to_starter(pid)
        elif op == "demote":
            engine.demote_to_substitute(pid)
        elif op == "reorder":
            zone = rng.choice([Zone.STARTER, Zone.SUBSTITUTE])
            engine.reorder(zone, rng.randint(-1, 6), rng.randint(-1, 6))
        elif op == "capacity":
            engine.set_starter_capacity(rng.randint(0, 8))
        elif rng.random() < 0.1:
            engine.clear()

    def test_invariants_hold_for_random_sequences(self) -> None:
        """Test disjoint zones, capacity after adds, and unchanged state on failure."""
        ids = ["A", "B", "C", "D", "E", "F", "G", "nobody"]
        pool = make_pool(*ids[:-1])

        for seed in range(25):
            rng = random.Random(seed)
            engine = PartitionEngine(pool)
            for _ in range(200):
                before = engine.lineup
                starters_before = len(before.starters)
                try:
                    self._random_operation(rng, engine, ids)
                except LineupError:
                    self.assertEqual(engine.lineup, before)
                    continue

                lineup = engine.lineup
                self.assertFalse(set(lineup.starters) & set(lineup.substitutes))
                self.assertEqual(len(set(lineup.starters)), len(lineup.starters))
                self.assertEqual(len(set(lineup.substitutes)), len(lineup.substitutes))
                if len(lineup.starters) > starters_before:
                    self.assertLessEqual(len(lineup.starters), lineup.starter_slots)
                self.assertEqual(
                    sorted(lineup.assigned_ids + tuple(engine.available_players())),
                    sorted(pool.ids)
                )


if __name__ == "__main__":
    unittest.main()
