"""
Unit tests for donor_match.core.identity.matching.

Tests every strategy of the matcher:
- Direct normalized equality / containment
- Script conversion (both directions)
- Core-name matching (exact and substring)
- Multi-person quorum
- Generic-name protection against false positives
"""

import unittest

from donor_match.core.identity.matching import (
    EntityMatcher,
    match_cores,
    match_entities,
    match_quorum,
    substring_match,
)
from donor_match.core.identity.models import MatchReason, MatchVerdict

from conversion_table import TABLE_CONVERTER, table_matcher


# [scraped, existing, should_match]
FIXTURES = [
    # Basic substring matching
    ("東亞", "東亞銀行", True),
    # Simplified <-> Traditional
    ("刘亦菲女士", "劉亦菲", True),
    ("中国红十字会", "中國紅十字會", True),
    ("杭州灵隐寺", "杭州靈隱寺", True),
    # Celebrity groups
    ("藝人張智霖先生 及 袁詠儀小姐一家", "張智霖及袁詠儀", True),
    ("藝人方力申先生、香港游泳學校、慈善機構一瀧游泳", "方力申/香港游泳學校/一瀧游泳", True),
    ("王祖藍李亞男夫婦", "王祖藍及李亞男", True),
    (
        "梁安琪慈善基金、何鴻燊博士醫療拓展基金會、何猷亨先生及何猷君先生及奚夢瑤小姐一家",
        "何猷亨、何猷君、奚梦瑶及梁安琪",
        True,
    ),
    ("ABC Ltd/XYZ Holdings/Alpha Beta", "XYZ、ABC", True),
    # False positives
    ("中國燃氣（0384）", "中國宏橋", False),
    ("中國燃氣（0384）", "中國平安", False),
    ("中國宏橋", "中國平安", False),
    ("李嘉誠", "李兆基", False),
    ("張柏芝", "張智霖", False),
    ("中電", "中銀", False),
    ("新地", "新世界", False),
    ("港鐵", "港交所", False),
    # Company variations
    ("HashKey Group", "HashKey", True),
    ("Amber Group", "Amber", True),
    ("DFI集團", "DFI", True),
    ("霍英東基金會", "霍英東基金", True),
    ("保良局永恆愛心之星郭富城先生", "郭富城", True),
    # Aliases and suffix variations
    ("中國紅十字總會", "中國紅十字會總會", True),
    ("中国红十字总会", "中國紅十字會總會", True),
    ("361度集團", "361集團（1361）", True),
]


class TestSubstringMatch(unittest.TestCase):
    """Test the direct equality / containment check."""

    def test_containment(self):
        self.assertTrue(substring_match("東亞", "東亞銀行"))
        self.assertTrue(substring_match("東亞銀行", "東亞"))

    def test_equal_after_normalization(self):
        self.assertTrue(substring_match("361度集團", "361集團（1361）"))

    def test_generic_shorter_name_blocks_containment(self):
        self.assertFalse(substring_match("李", "李嘉誠"))
        self.assertFalse(substring_match("abc", "abcdefgh"))

    def test_different_names(self):
        self.assertFalse(substring_match("中國燃氣（0384）", "中國宏橋"))

    def test_empty(self):
        self.assertFalse(substring_match("", "東亞"))
        self.assertFalse(substring_match("先生", "東亞"))


class TestMatchCores(unittest.TestCase):
    def test_exact(self):
        self.assertEqual(match_cores(["方力申"], ["一瀧游泳", "方力申"]), MatchReason.CORE_EXACT)

    def test_exact_wins_over_earlier_substring_pair(self):
        reason = match_cores(["郭富城", "劉德華"], ["郭富城基金", "劉德華"])
        self.assertEqual(reason, MatchReason.CORE_EXACT)

    def test_substring(self):
        self.assertEqual(match_cores(["郭富城"], ["郭富城基金"]), MatchReason.CORE_SUBSTRING)

    def test_case_insensitive(self):
        self.assertEqual(match_cores(["Amber"], ["AMBER"]), MatchReason.CORE_EXACT)

    def test_generic_cores_ignored(self):
        self.assertIsNone(match_cores(["中國"], ["中國"]))
        self.assertIsNone(match_cores(["ABC"], ["ABC"]))

    def test_no_match(self):
        self.assertIsNone(match_cores(["張柏芝"], ["張智霖"]))
        self.assertIsNone(match_cores([], ["張智霖"]))


class TestMatchQuorum(unittest.TestCase):
    def test_two_shared_members(self):
        self.assertTrue(match_quorum({"abc", "xyz", "alpha"}, {"xyz", "abc"}))

    def test_one_shared_member(self):
        self.assertFalse(match_quorum({"abc", "alpha"}, {"abc", "beta"}))

    def test_containment_counts(self):
        self.assertTrue(match_quorum({"何猷亨", "何猷君"}, {"何猷亨先", "何猷君先"}))

    def test_one_long_name_cannot_cover_two(self):
        self.assertFalse(match_quorum({"abc", "xyz"}, {"abcxyz", "other"}))

    def test_empty_members_ignored(self):
        self.assertFalse(match_quorum({"", "abc"}, {"", "abc"}))


class TestEntityMatcher(unittest.TestCase):
    """Test the full ordered strategy cascade."""

    def setUp(self):
        self.matcher = table_matcher()

    def test_direct(self):
        self.assertEqual(
            self.matcher.match("東亞", "東亞銀行"),
            MatchVerdict(matched=True, reason=MatchReason.DIRECT),
        )

    def test_false_positive_guard(self):
        verdict = self.matcher.match("中國燃氣（0384）", "中國宏橋")
        self.assertFalse(verdict.matched)
        self.assertEqual(verdict.reason, MatchReason.NO_MATCH)

    def test_script_converted_forward(self):
        verdict = self.matcher.match("刘亦菲女士", "劉亦菲")
        self.assertTrue(verdict.matched)
        self.assertEqual(verdict.reason, MatchReason.SCRIPT_FORWARD)

    def test_script_converted_backward(self):
        class SimplifyOnly:
            """Converter that only knows Traditional -> Simplified."""

            def to_traditional(self, value):
                return value

            def to_simplified(self, value):
                return value.replace("劉", "刘")

        verdict = EntityMatcher(SimplifyOnly()).match("刘亦菲", "劉亦菲女士")
        self.assertEqual(verdict, MatchVerdict(True, MatchReason.SCRIPT_BACKWARD))

    def test_alias_then_direct(self):
        verdict = self.matcher.match("中國紅十字總會", "中國紅十字會總會")
        self.assertEqual(verdict.reason, MatchReason.DIRECT)

    def test_alias_then_script_conversion(self):
        verdict = self.matcher.match("中国红十字总会", "中國紅十字會總會")
        self.assertEqual(verdict.reason, MatchReason.SCRIPT_FORWARD)

    def test_core_exact(self):
        verdict = self.matcher.match(
            "藝人方力申先生、香港游泳學校、慈善機構一瀧游泳", "方力申/香港游泳學校/一瀧游泳"
        )
        self.assertEqual(verdict, MatchVerdict(True, MatchReason.CORE_EXACT))

    def test_core_substring(self):
        verdict = self.matcher.match("郭富城、劉德華", "郭富城慈善基金")
        self.assertEqual(verdict, MatchVerdict(True, MatchReason.CORE_SUBSTRING))

    def test_core_match_through_script_conversion(self):
        verdict = self.matcher.match("张智霖/古巨基", "張智霖慈善基金")
        self.assertTrue(verdict.matched)
        self.assertEqual(verdict.reason, MatchReason.CORE_SUBSTRING)

    def test_multi_person_quorum(self):
        verdict = self.matcher.match("ABC Ltd/XYZ Holdings/Alpha Beta", "XYZ、ABC")
        self.assertEqual(verdict, MatchVerdict(True, MatchReason.MULTI_PERSON_QUORUM))

    def test_multi_donor_strings(self):
        verdict = self.matcher.match(
            "梁安琪慈善基金、何鴻燊博士醫療拓展基金會、何猷亨先生及何猷君先生及奚夢瑤小姐一家",
            "何猷亨、何猷君、奚梦瑶及梁安琪",
        )
        self.assertTrue(verdict.matched)

    def test_celebrity_near_miss(self):
        self.assertFalse(self.matcher.match("張柏芝", "張智霖").matched)

    def test_bare_surname_never_matches(self):
        self.assertFalse(self.matcher.match("李", "李嘉誠").matched)
        self.assertFalse(self.matcher.match("李先生", "李嘉誠").matched)

    def test_direct_wins_over_core(self):
        verdict = self.matcher.match("藝人張智霖先生 及 袁詠儀小姐一家", "張智霖及袁詠儀")
        self.assertEqual(verdict.reason, MatchReason.DIRECT)

    def test_empty_input(self):
        empty = MatchVerdict(matched=False, reason=MatchReason.EMPTY)
        self.assertEqual(self.matcher.match("", "東亞"), empty)
        self.assertEqual(self.matcher.match("東亞", ""), empty)
        self.assertEqual(self.matcher.match("   ", "東亞"), empty)

    def test_over_stripped_input_does_not_match(self):
        self.assertFalse(self.matcher.match("先生", "東亞銀行").matched)
        self.assertFalse(self.matcher.match("有限公司", "中國宏橋有限公司").matched)

    def test_fixtures(self):
        for scraped, existing, expected in FIXTURES:
            with self.subTest(scraped=scraped, existing=existing):
                verdict = self.matcher.match(scraped, existing)
                self.assertEqual(verdict.matched, expected, f"reason: {verdict.reason}")

    def test_symmetry(self):
        for scraped, existing, _ in FIXTURES:
            with self.subTest(scraped=scraped, existing=existing):
                self.assertEqual(
                    self.matcher.match(scraped, existing).matched,
                    self.matcher.match(existing, scraped).matched,
                )

    def test_deterministic(self):
        first = self.matcher.match("郭富城、劉德華", "郭富城慈善基金")
        second = self.matcher.match("郭富城、劉德華", "郭富城慈善基金")
        self.assertEqual(first, second)


class TestMatchEntities(unittest.TestCase):
    def test_with_injected_converter(self):
        verdict = match_entities("刘亦菲女士", "劉亦菲", converter=TABLE_CONVERTER)
        self.assertTrue(verdict.matched)

    def test_default_converter(self):
        self.assertEqual(
            match_entities("東亞", "東亞銀行"),
            MatchVerdict(matched=True, reason=MatchReason.DIRECT),
        )
        self.assertTrue(match_entities("刘亦菲女士", "劉亦菲").matched)
        self.assertFalse(match_entities("中國燃氣（0384）", "中國宏橋").matched)

    def test_reason_values(self):
        self.assertEqual(str(MatchReason.SCRIPT_FORWARD), "script-converted-forward")
        self.assertEqual(MatchReason("multi-person-quorum"), MatchReason.MULTI_PERSON_QUORUM)


if __name__ == "__main__":
    unittest.main()
