import unittest

from src.relative_time import THIS_MONTH_RELATIVE_TIME, THIS_WEEK_RELATIVE_TIME, TODAY_RELATIVE_TIME
from src.relative_time.phrase_parser import THIS_YEAR_RELATIVE_TIME, parse_time_phrase


class ParseTimePhraseTests(unittest.TestCase):
    def test_last_n_days(self):
        result = parse_time_phrase("revenue for the last 7 days")
        self.assertEqual(result.original_phrase, "last 7 days")
        self.assertEqual(result.descriptor.key, "unit=(Day)&count=(-7)&referenceTime=(now)")

    def test_unit_spellings(self):
        cases = {
            "past 15 minutes": "unit=(Min)&count=(-15)&referenceTime=(now)",
            "last 30 mins": "unit=(Min)&count=(-30)&referenceTime=(now)",
            "Past Hour": "unit=(Hour)&count=(-1)&referenceTime=(now)",
            "last 2 weeks": "unit=(Week)&count=(-2)&referenceTime=(now)",
            "last 3 months": "unit=(Month)&count=(-3)&referenceTime=(now)",
            "past year": "unit=(Year)&count=(-1)&referenceTime=(now)",
        }
        for text, key in cases.items():
            self.assertEqual(parse_time_phrase(text).descriptor.key, key, text)

    def test_calendar_periods(self):
        self.assertIs(parse_time_phrase("sales today").descriptor, TODAY_RELATIVE_TIME)
        self.assertIs(parse_time_phrase("This Week signups").descriptor, THIS_WEEK_RELATIVE_TIME)
        self.assertIs(parse_time_phrase("this month").descriptor, THIS_MONTH_RELATIVE_TIME)
        self.assertIs(parse_time_phrase("this year").descriptor, THIS_YEAR_RELATIVE_TIME)

    def test_no_match(self):
        result = parse_time_phrase("deposit balance by region")
        self.assertIsNone(result.original_phrase)
        self.assertIsNone(result.descriptor)


if __name__ == "__main__":
    unittest.main()
