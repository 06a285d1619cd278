import unittest

from stoichem.equation import parse_equation
from stoichem.errors import (
    EmptyInput,
    InvalidAmount,
    InvalidUnit,
    MalformedEquation,
    SpeciesNotInEquation,
)
from stoichem.stoichiometry import (
    SpeciesAmount,
    Unit,
    convert,
    percent_yield,
    to_moles,
    validate_amount,
)


class TestConvert(unittest.TestCase):
    def test_grams_to_grams(self):
        result = convert("2H2 + O2 -> 2H2O", SpeciesAmount("H2", 2, "g"), "H2O")
        self.assertAlmostEqual(result.known_moles, 0.9921, places=4)
        self.assertAlmostEqual(result.moles, 0.9921, places=4)
        self.assertAlmostEqual(result.value, 17.872, places=3)
        self.assertEqual(result.unit, "g")

    def test_steps(self):
        result = convert("2H2 + O2 -> 2H2O", SpeciesAmount("H2", "2", "g"), "H2O")
        self.assertEqual(result.steps[0], "1. Moles of H2 = 2 g / 2.016 g/mol = 0.9921 mol")
        self.assertEqual(result.steps[1], "2. Mole ratio: (2 mol H2O / 2 mol H2)")
        self.assertEqual(result.steps[-1], "3. Mass of H2O = 0.9921 mol * 18.015 g/mol = 17.872 g")

    def test_moles_input(self):
        result = convert("2H2 + O2 -> 2H2O", SpeciesAmount("O2", 1, Unit.MOLES), "H2O")
        self.assertAlmostEqual(result.moles, 2.0)
        self.assertAlmostEqual(result.value, 36.03, places=3)
        self.assertEqual(result.steps[0], "1. Moles of O2 = 1.0000 mol (given)")

    def test_product_to_reactant(self):
        equation = parse_equation("N2 + 3H2 -> 2NH3")
        result = convert(equation, SpeciesAmount("NH3", 2, "mol"), "H2")
        self.assertAlmostEqual(result.moles, 3.0)

    def test_species_not_in_equation(self):
        with self.assertRaises(SpeciesNotInEquation) as ctx:
            convert("2H2 + O2 -> 2H2O", SpeciesAmount("N2", 1), "H2O")
        self.assertEqual(ctx.exception.formula, "N2")
        with self.assertRaises(SpeciesNotInEquation):
            convert("2H2 + O2 -> 2H2O", SpeciesAmount("H2", 1), "H2O2")

    def test_amount_checked_before_parsing(self):
        # the equation is malformed too, but the amount is rejected first
        with self.assertRaises(InvalidAmount):
            convert("H2 + O2 H2O", SpeciesAmount("H2", 0), "H2O")
        with self.assertRaises(MalformedEquation):
            convert("H2 + O2 H2O", SpeciesAmount("H2", 1), "H2O")

    def test_invalid_unit(self):
        with self.assertRaises(InvalidUnit):
            convert("2H2 + O2 -> 2H2O", SpeciesAmount("H2", 1, "kg"), "H2O")

    def test_blank_fields(self):
        with self.assertRaises(EmptyInput):
            convert("", SpeciesAmount("H2", 1), "H2O")
        with self.assertRaises(EmptyInput):
            convert("2H2 + O2 -> 2H2O", SpeciesAmount(" ", 1), "H2O")
        with self.assertRaises(EmptyInput):
            convert("2H2 + O2 -> 2H2O", SpeciesAmount("H2", 1), "")

    def test_idempotent(self):
        request = SpeciesAmount("H2", 2, "g")
        first = convert("2H2 + O2 -> 2H2O", request, "H2O")
        second = convert("2H2 + O2 -> 2H2O", request, "H2O")
        self.assertEqual(first, second)


class TestAmounts(unittest.TestCase):
    def test_validate_amount(self):
        self.assertEqual(validate_amount("2.5"), 2.5)
        self.assertEqual(validate_amount(3), 3.0)
        for bad in (None, "", "abc", 0, -1, "nan", "inf", True):
            with self.subTest(amount=bad):
                with self.assertRaises(InvalidAmount):
                    validate_amount(bad)

    def test_to_moles(self):
        self.assertAlmostEqual(to_moles("H2O", 18.015, "g"), 1.0)
        self.assertEqual(to_moles("H2O", 0.5, "mol"), 0.5)


class TestPercentYield(unittest.TestCase):
    def test_percent(self):
        result = percent_yield(8, "10")
        self.assertAlmostEqual(result.value, 80.0)
        self.assertEqual(result.unit, "%")

    def test_zero_actual_is_allowed(self):
        self.assertEqual(percent_yield(0, 10).value, 0.0)

    def test_invalid_inputs(self):
        with self.assertRaises(InvalidAmount):
            percent_yield("x", 10)
        with self.assertRaises(InvalidAmount):
            percent_yield(5, 0)
        with self.assertRaises(InvalidAmount):
            percent_yield(-1, 10)


if __name__ == '__main__':
    unittest.main()
