import unittest

from roundtable.pipeline.portfolios import load_portfolios, collect_universe


class LoadPortfoliosTests(unittest.TestCase):
    def test_ids_and_decoded_entry_prices(self):
        raw = {
            "p1": {"advisorName": "Ada", "tickers": ["BRK.B", "AAA"], "entryPrices": {"BRK_DOT_B": 400.0}},
            "p2": {"advisorName": "Bo", "tickers": ["AAA"]},
        }
        portfolios = load_portfolios(raw)
        self.assertEqual([p["id"] for p in portfolios], ["p1", "p2"])
        self.assertEqual(portfolios[0]["entryPrices"], {"BRK.B": 400.0})
        self.assertEqual(portfolios[1]["entryPrices"], {})

    def test_missing_fields_default(self):
        portfolios = load_portfolios({"p1": {}})
        self.assertEqual(portfolios[0]["tickers"], [])
        self.assertEqual(portfolios[0]["advisorName"], "p1")

    def test_index_keyed_tickers(self):
        portfolios = load_portfolios({"p1": {"tickers": {"1": "BBB", "0": "AAA"}}})
        self.assertEqual(portfolios[0]["tickers"], ["AAA", "BBB"])

    def test_entry_prices_are_coerced_or_dropped(self):
        raw = {"p1": {"tickers": ["AAA", "BBB", "CCC"], "entryPrices": {"AAA": "80", "BBB": "n/a", "CCC": None}}}
        self.assertEqual(load_portfolios(raw)[0]["entryPrices"], {"AAA": 80.0})

    def test_non_mapping_entry_prices_are_ignored(self):
        portfolios = load_portfolios({"p1": {"tickers": ["AAA"], "entryPrices": [80.0]}})
        self.assertEqual(portfolios[0]["entryPrices"], {})

    def test_mixed_index_keys(self):
        raw = {"p1": {"tickers": {"10": "KKK", "2": "BBB", "x": "XXX", "0": "AAA"}}}
        self.assertEqual(load_portfolios(raw)[0]["tickers"], ["AAA", "BBB", "KKK", "XXX"])

    def test_scalar_tickers_are_ignored(self):
        self.assertEqual(load_portfolios({"p1": {"tickers": "AAA"}})[0]["tickers"], [])

    def test_malformed_entries_are_skipped(self):
        portfolios = load_portfolios({"p1": "oops", "p2": {"tickers": ["AAA"]}})
        self.assertEqual([p["id"] for p in portfolios], ["p2"])

    def test_empty_source(self):
        self.assertEqual(load_portfolios(None), [])


class CollectUniverseTests(unittest.TestCase):
    def test_unique_in_first_seen_order(self):
        portfolios = [
            {"tickers": ["AAA", "BBB", "CCC"]},
            {"tickers": ["BBB", "DDD", "AAA"]},
            {"tickers": []},
        ]
        self.assertEqual(collect_universe(portfolios), ["AAA", "BBB", "CCC", "DDD"])


if __name__ == "__main__":
    unittest.main()
