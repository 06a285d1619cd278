import json
import tempfile
import unittest
from pathlib import Path

from stoichem.errors import InvalidFormulaSyntax, UnknownElement
from stoichem.formula import parse_formula
from stoichem.mass import mass_percent, molar_mass
from stoichem.models import Formula
from stoichem.periodic_table import DEFAULT_TABLE, PeriodicTable, load_periodic_table


class TestPeriodicTable(unittest.TestCase):
    def test_bundled_table(self):
        self.assertEqual(len(DEFAULT_TABLE), 92)
        self.assertEqual(DEFAULT_TABLE.symbols[0], "H")
        self.assertEqual(DEFAULT_TABLE.symbols[-1], "U")
        self.assertAlmostEqual(DEFAULT_TABLE.weight("O"), 15.999)

    def test_table_is_read_only(self):
        with self.assertRaises(TypeError):
            DEFAULT_TABLE.weights["H"] = 2.0

    def test_missing_symbol(self):
        with self.assertRaises(UnknownElement):
            DEFAULT_TABLE.weight("Uue")

    def test_load_from_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "weights.json"
            path.write_text(json.dumps({"H": 1, "O": 16}))
            table = load_periodic_table(path)
        self.assertEqual(dict(table.weights), {"H": 1.0, "O": 16.0})

    def test_load_rejects_bad_entries(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "weights.json"
            path.write_text(json.dumps({"H": -1.0}))
            with self.assertRaises(ValueError):
                load_periodic_table(path)
            path.write_text(json.dumps({"h": 1.0}))
            with self.assertRaises(ValueError):
                load_periodic_table(path)


class TestMolarMass(unittest.TestCase):
    def test_water(self):
        result = molar_mass(parse_formula("H2O"))
        self.assertAlmostEqual(result.total, 18.015, places=3)
        self.assertEqual(result.unit, "g/mol")

    def test_magnesium_hydroxide(self):
        result = molar_mass("Mg(OH)2")
        self.assertAlmostEqual(result.total, 58.32, places=2)

    def test_breakdown_follows_first_seen_order(self):
        result = molar_mass("Mg(OH)2")
        self.assertEqual([part.element for part in result.contributions], ["Mg", "O", "H"])
        hydrogen = result.contributions[2]
        self.assertEqual(hydrogen.count, 2)
        self.assertAlmostEqual(hydrogen.contribution, 2.016)
        self.assertEqual(result.steps[0], "Mg: 1 × 24.305 g/mol = 24.305 g/mol")

    def test_total_is_sum_of_contributions(self):
        result = molar_mass("C6H12O6")
        self.assertAlmostEqual(result.total, sum(p.contribution for p in result.contributions))
        self.assertAlmostEqual(result.total, 180.156, places=3)

    def test_substituted_table(self):
        table = PeriodicTable({"H": 1.0, "O": 16.0})
        self.assertEqual(molar_mass("H2O", table).total, 18.0)

    def test_element_missing_from_table(self):
        formula = Formula("Zz", {"Zz": 1})
        with self.assertRaises(UnknownElement):
            molar_mass(formula)

    def test_oversized_count_in_built_formula(self):
        with self.assertRaises(InvalidFormulaSyntax):
            molar_mass(Formula("H", {"H": 10**400}))

    def test_repeatable(self):
        self.assertEqual(molar_mass("Ca(NO3)2"), molar_mass("Ca(NO3)2"))

    def test_mass_percent(self):
        percent = mass_percent("H2O")
        self.assertAlmostEqual(sum(percent.values()), 100.0)
        self.assertAlmostEqual(percent["O"], 15.999 / 18.015 * 100.0)


if __name__ == '__main__':
    unittest.main()
