import unittest

from stoichem.balance import check_balance, check_equation
from stoichem.equation import parse_side
from stoichem.errors import EmptyInput, InvalidTerm, MismatchedParentheses
from stoichem.models import EquationSide


class TestCheckBalance(unittest.TestCase):
    def test_balanced_water(self):
        report = check_balance("2H2 + O2", "2H2O")
        self.assertTrue(report.balanced)
        self.assertEqual(report.tally["H"].reactant, 4)
        self.assertEqual(report.tally["H"].product, 4)
        self.assertEqual(report.tally["O"].reactant, 2)
        self.assertEqual(report.tally["O"].product, 2)

    def test_unbalanced_water(self):
        report = check_balance("H2 + O2", "H2O")
        self.assertFalse(report.balanced)
        self.assertEqual(report.tally["O"].reactant, 2)
        self.assertEqual(report.tally["O"].product, 1)
        self.assertEqual(report.unbalanced_elements(), ("O",))

    def test_element_on_one_side_only(self):
        report = check_balance("Na + Cl2", "NaCl + Ar")
        self.assertFalse(report.balanced)
        self.assertEqual(report.tally["Ar"].reactant, 0)
        self.assertEqual(report.tally["Ar"].product, 1)

    def test_tally_sorted_by_element(self):
        report = check_balance("CH4 + 2O2", "CO2 + 2H2O")
        self.assertTrue(report.balanced)
        self.assertEqual(list(report.tally), ["C", "H", "O"])

    def test_accepts_parsed_sides(self):
        report = check_balance(parse_side("N2 + 3H2"), parse_side("2NH3"))
        self.assertTrue(report.balanced)

    def test_check_equation(self):
        self.assertTrue(check_equation("2Na + Cl2 -> 2NaCl").balanced)
        self.assertFalse(check_equation("Fe + O2 -> Fe2O3").balanced)

    def test_blank_side(self):
        with self.assertRaises(EmptyInput):
            check_balance("", "H2O")

    def test_no_elements(self):
        with self.assertRaises(EmptyInput):
            check_balance(EquationSide(()), EquationSide(()))

    def test_parse_errors_propagate(self):
        with self.assertRaises(MismatchedParentheses):
            check_balance("Ca(OH", "CaO")
        with self.assertRaises(InvalidTerm):
            check_balance("2", "H2O")


if __name__ == '__main__':
    unittest.main()
