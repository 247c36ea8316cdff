"""Tests for move classification."""

from randbats.teambuilder.move_counter import MoveCounter, effective_move_type, query_moves


class TestEffectiveMoveType:
    """Tests for effective_move_type."""

    def test_plain_move(self, dex):
        """Test a move keeps its own type."""
        assert effective_move_type(dex.get_move("earthquake"), ["Dragon", "Ground"], [], "Steel") == "Ground"

    def test_ate_ability(self, dex):
        """Test -ate abilities retype Normal moves."""
        hyper_voice = dex.get_move("hypervoice")
        assert effective_move_type(hyper_voice, ["Fairy"], ["Pixilate"], None) == "Fairy"
        assert effective_move_type(hyper_voice, ["Fairy"], ["Pixilate"], None, ate=False) == "Normal"

    def test_tera_blast(self, dex):
        """Test Tera Blast takes the Tera type."""
        tera_blast = dex.get_move("terablast")
        assert effective_move_type(tera_blast, ["Electric"], [], "Ice") == "Ice"
        assert effective_move_type(tera_blast, ["Electric"], [], "Ice", tera=False) == "Normal"


class TestMoveCounter:
    """Tests for MoveCounter and query_moves."""

    def test_empty(self):
        """Test missing tags read as zero."""
        counter = MoveCounter()
        assert counter.get("Physical") == 0
        assert counter.damaging_moves == {}
        assert counter.stab_counter == 0

    def test_setup_sweeper_moveset(self, dex):
        """Test tags for a physical setup moveset."""
        counter = query_moves(
            dex, ["earthquake", "outrage", "stoneedge", "swordsdance"], ["Dragon", "Ground"], "Ground"
        )
        assert counter.get("Physical") == 3
        assert counter.get("Status") == 1
        assert counter.get("Special") == 0
        assert counter.get("Ground") == 1
        assert counter.get("Rock") == 1
        assert counter.stab_counter == 2
        assert counter.get("stabtera") == 1
        assert counter.get("setup") == 1
        assert counter.get("physicalsetup") == 1
        assert counter.get("inaccurate") == 1
        assert set(counter.damaging_moves) == {"earthquake", "outrage", "stoneedge"}

    def test_fixed_damage_and_no_stab(self, dex):
        """Test fixed damage moves and moves that never count as STAB."""
        counter = query_moves(dex, ["seismictoss", "uturn", "pyroball"], ["Fire"], "Fire")
        assert counter.get("damage") == 1
        assert counter.get("Physical") == 2
        assert counter.get("Bug") == 0
        assert counter.get("Fire") == 1
        assert counter.stab_counter == 1
        assert counter.get("sheerforce") == 1
        assert counter.get("serenegrace") == 0
        assert set(counter.damaging_moves) == {"seismictoss", "uturn", "pyroball"}

    def test_priority_punch(self, dex):
        """Test priority, technician and punch tracking."""
        counter = query_moves(dex, ["machpunch", "drainpunch"], ["Fighting"], None)
        assert counter.get("priority") == 1
        assert counter.get("technician") == 1
        assert counter.get("drain") == 1
        assert counter.iron_fist == 2

    def test_serene_grace(self, dex):
        """Test moves with a 20-99% secondary benefit from Serene Grace."""
        counter = query_moves(dex, ["bodyslam", "crunch"], ["Normal"], None)
        assert counter.get("serenegrace") == 2
        assert counter.get("strongjaw") == 1

    def test_unknown_moves_ignored(self, dex):
        """Test unknown moves add nothing."""
        counter = query_moves(dex, ["notamove"], ["Normal"], None)
        assert counter.get("Physical") == 0
        assert counter.damaging_moves == {}

    def test_recompute_resets(self, dex):
        """Test recomputing clears earlier tags."""
        counter = query_moves(dex, ["earthquake"], ["Ground"], None)
        counter.recompute(dex, ["scald"], ["Water"], None)
        assert counter.get("Ground") == 0
        assert counter.get("Water") == 1
        assert list(counter.damaging_moves) == ["scald"]
