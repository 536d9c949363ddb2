"""Testes da ordenação natural de códigos e das letras de rack."""

from services.codecs import natural_key, row_to_letter


class TestNaturalKey:

    def test_numbers_compare_numerically(self):
        codes = ["A10", "A2", "A1"]
        assert sorted(codes, key=natural_key) == ["A1", "A2", "A10"]

    def test_prefix_before_number(self):
        codes = ["B1", "A10", "B", "A2"]
        assert sorted(codes, key=natural_key) == ["A2", "A10", "B", "B1"]

    def test_case_insensitive(self):
        codes = ["b2", "A3", "a1"]
        assert sorted(codes, key=natural_key) == ["a1", "A3", "b2"]

    def test_pure_numbers(self):
        codes = ["10", "9", "100"]
        assert sorted(codes, key=natural_key) == ["9", "10", "100"]

    def test_empty_code(self):
        assert sorted(["A1", ""], key=natural_key) == ["", "A1"]

    def test_ties_are_deterministic(self):
        # mesmo código sem distinção de maiúsculas: decide o código original
        assert sorted(["a1", "A1"], key=natural_key) == ["A1", "a1"]
        assert sorted(["A1", "a1"], key=natural_key) == ["A1", "a1"]


class TestRowToLetter:

    def test_range(self):
        assert row_to_letter(1) == "A"
        assert row_to_letter(3) == "C"
        assert row_to_letter(26) == "Z"

    def test_clamped(self):
        assert row_to_letter(0) == "A"
        assert row_to_letter(40) == "Z"
