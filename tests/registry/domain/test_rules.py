import unittest

from label_maker.registry.domain.rules import normalize_nation_name, parse_nation_list


class NormalizeNationNameTests(unittest.TestCase):
    def test_lowercases_and_joins_words_with_underscores(self):
        self.assertEqual(normalize_nation_name("Test Land"), "test_land")
        self.assertEqual(normalize_nation_name("Testland"), "testland")

    def test_whitespace_runs_collapse_to_one_underscore(self):
        self.assertEqual(normalize_nation_name("The   Holy\tEmpire"), "the_holy_empire")

    def test_underscore_and_space_forms_are_the_same_nation(self):
        self.assertEqual(normalize_nation_name("Test_Land"), normalize_nation_name("Test Land"))

    def test_is_idempotent(self):
        for raw in ("Testlandia", "Test Land", "  Mixed  Case ", "already_normal"):
            once = normalize_nation_name(raw)
            self.assertEqual(normalize_nation_name(once), once)


class ParseNationListTests(unittest.TestCase):
    def test_extracts_and_normalizes_nations_element(self):
        xml = (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            "<WORLD><NATIONS>Testlandia,Alice Land,bob</NATIONS></WORLD>"
        )
        self.assertEqual(parse_nation_list(xml), ["testlandia", "alice_land", "bob"])

    def test_blank_entries_are_dropped(self):
        xml = "<WORLD><NATIONS>alice,,bob,</NATIONS></WORLD>"
        self.assertEqual(parse_nation_list(xml), ["alice", "bob"])

    def test_missing_nations_element_returns_none(self):
        self.assertIsNone(parse_nation_list("<WORLD><REGIONS>a,b</REGIONS></WORLD>"))

    def test_non_xml_body_returns_none(self):
        self.assertIsNone(parse_nation_list("Too many requests"))
