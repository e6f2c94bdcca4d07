"""Tests for the command-line quoting utility."""

import pytest

import quote_cli


def feed_input(monkeypatch, answers):
    """Replace input() with scripted answers; EOFError once they run out."""
    remaining = list(answers)

    def fake_input(prompt=""):
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    monkeypatch.setattr("builtins.input", fake_input)


class TestQuoteCommand:
    """Test the one-shot quote command."""

    def test_peak_quote_with_promo(self, capsys):
        """Test quoting from arguments."""
        assert quote_cli.main(["quote", "economy", "10", "--peak", "--promo", "grab10"]) == 0

        out = capsys.readouterr().out
        assert "Vehicle: GrabCar Economy | Peak | Distance: 10.00 km | Time: 0.00 min" in out
        assert "GRAB10 (discount 2.15)" in out
        assert "19.35" in out

    def test_quote_with_minutes(self, capsys):
        """Test that the optional minutes argument adds time cost."""
        assert quote_cli.main(["quote", "ECONOMY", "10", "20"]) == 0

        out = capsys.readouterr().out
        assert "Time cost" in out
        assert "19.50" in out

    def test_unknown_vehicle(self, capsys):
        """Test an unknown vehicle class."""
        assert quote_cli.main(["quote", "truck", "10"]) == 1
        assert "unknown vehicle class" in capsys.readouterr().out

    @pytest.mark.parametrize("args", [
        ["quote", "bike", "abc"],
        ["quote", "bike", "0"],
        ["quote", "bike", "201"],
        ["quote", "bike", "5", "-1"],
        ["quote", "bike"],
        ["quote", "bike", "5", "--promo"],
    ])
    def test_invalid_arguments(self, args, capsys):
        """Test rejected argument combinations."""
        assert quote_cli.main(args) == 1
        assert capsys.readouterr().out

    def test_usage(self, capsys):
        """Test missing and unknown commands."""
        assert quote_cli.main([]) == 1
        assert quote_cli.main(["bogus"]) == 1
        assert "Unknown command: bogus" in capsys.readouterr().out


class TestTables:
    """Test the rate and promo listings."""

    def test_rates(self, capsys):
        """Test the rate table listing."""
        assert quote_cli.main(["rates"]) == 0
        out = capsys.readouterr().out
        assert "GrabCar Premium" in out
        assert "x1.50" in out
        assert "RM 5.00" in out

    def test_promos(self, capsys):
        """Test the promo listing."""
        assert quote_cli.main(["promos"]) == 0
        out = capsys.readouterr().out
        assert "STUDENT15" in out
        assert "15%" in out


class TestInteractive:
    """Test the interactive menu loop."""

    def test_single_economy_quote(self, monkeypatch, capsys):
        """Test one full pass through the menu."""
        feed_input(monkeypatch, ["1", "10", "20", "1", "NONE", "2"])

        assert quote_cli.main(["interactive"]) == 0

        out = capsys.readouterr().out
        assert "Selected: GrabCar Economy" in out
        assert "Per minute: RM 0.20" in out
        assert "19.50" in out
        assert "Thank you" in out

    def test_bike_skips_minutes_and_applies_minimum(self, monkeypatch, capsys):
        """Test that per-minute prompts are skipped for vehicles without a per-minute rate."""
        feed_input(monkeypatch, ["3", "0.5", "1", " super20 ", "2"])

        assert quote_cli.main(["interactive"]) == 0

        out = capsys.readouterr().out
        assert "Enter estimated time" not in out
        assert "SUPER20 (discount 0.45)" in out
        assert "Minimum fare enforced" in out
        assert "5.00" in out

    def test_invalid_entries_reprompt(self, monkeypatch, capsys):
        """Test that bad entries are reported and asked again."""
        feed_input(monkeypatch, ["9", "x", "2", "abc", "-5", "500", "12", "0", "15", "3", "2", "", "2"])

        assert quote_cli.main(["interactive"]) == 0

        out = capsys.readouterr().out
        assert out.count("Invalid choice") == 3
        assert "Invalid input. Please enter a positive number (<= 200)." in out
        assert "Invalid input. Please enter a positive number (<= 1000)." in out
        assert "Selected: GrabCar Premium" in out

    def test_repeat_then_exit(self, monkeypatch, capsys):
        """Test calculating a second fare."""
        feed_input(monkeypatch, ["3", "4", "1", "NONE", "1", "3", "6", "2", "grab10", "2"])

        assert quote_cli.main(["interactive"]) == 0

        out = capsys.readouterr().out
        assert out.count("--- Fare Breakdown (RM) ---") == 2
        assert "Peak multiplier x1.50 applied to distance" in out

    def test_end_of_input_exits(self, monkeypatch, capsys):
        """Test that running out of input stops cleanly."""
        feed_input(monkeypatch, ["1"])

        assert quote_cli.main(["interactive"]) == 0
        assert "Input ended unexpectedly. Exiting." in capsys.readouterr().out
