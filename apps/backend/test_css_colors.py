import unittest

from agents.tools.theme.css_colors import is_brand_neutral, is_fully_transparent, parse_rgba, to_hex


class ToHexTests(unittest.TestCase):
    def test_rgb_functional(self):
        self.assertEqual(to_hex("rgb(255, 87, 51)"), "#FF5733")
        self.assertEqual(to_hex("rgba(17, 34, 51, 0.5)"), "#112233")

    def test_space_separated_syntax(self):
        self.assertEqual(to_hex("rgb(255 87 51 / 50%)"), "#FF5733")

    def test_hex_forms_are_expanded_and_uppercased(self):
        self.assertEqual(to_hex("#abc"), "#AABBCC")
        self.assertEqual(to_hex("#abcd"), "#AABBCC")
        self.assertEqual(to_hex("#0a141e"), "#0A141E")
        self.assertEqual(to_hex("#0a141e80"), "#0A141E")

    def test_named_colors(self):
        self.assertEqual(to_hex("RebeccaPurple"), "#663399")
        self.assertEqual(to_hex("transparent"), "#000000")

    def test_hsl(self):
        self.assertEqual(to_hex("hsl(0, 100%, 50%)"), "#FF0000")
        self.assertEqual(to_hex("hsla(240, 100%, 50%, 0.3)"), "#0000FF")

    def test_percentages_and_clamping(self):
        self.assertEqual(to_hex("rgb(100%, 0%, 0%)"), "#FF0000")
        self.assertEqual(to_hex("rgb(300, -5, 0)"), "#FF0000")

    def test_out_of_range_exponents_clamp(self):
        self.assertEqual(to_hex("rgb(1e999, 0, 0)"), "#FF0000")
        self.assertEqual(to_hex("rgb(0, -1e999, 1e999%)"), "#0000FF")
        self.assertEqual(parse_rgba("rgba(0, 0, 0, 1e999)"), (0, 0, 0, 1.0))
        self.assertIsNotNone(to_hex("hsl(1e999, 50%, 50%)"))

    def test_unparseable_values(self):
        for value in (None, "", "   ", "notacolor", "rgb(1, 2)", "url(#gradient)", "#12"):
            with self.subTest(value=value):
                self.assertIsNone(to_hex(value))


class AlphaTests(unittest.TestCase):
    def test_fully_transparent(self):
        self.assertTrue(is_fully_transparent("transparent"))
        self.assertTrue(is_fully_transparent("rgba(0, 0, 0, 0)"))
        self.assertTrue(is_fully_transparent("#11223300"))

    def test_not_transparent(self):
        self.assertFalse(is_fully_transparent("rgba(0, 0, 0, 0.1)"))
        self.assertFalse(is_fully_transparent("rgb(0, 0, 0)"))
        self.assertFalse(is_fully_transparent("none"))

    def test_parse_rgba_keeps_alpha(self):
        self.assertEqual(parse_rgba("rgba(1, 2, 3, 0.25)"), (1, 2, 3, 0.25))


class NeutralTests(unittest.TestCase):
    def test_black_and_white_are_neutral(self):
        self.assertTrue(is_brand_neutral("#FFFFFF"))
        self.assertTrue(is_brand_neutral("#000000"))
        self.assertFalse(is_brand_neutral("#FF5733"))


if __name__ == "__main__":
    unittest.main()
