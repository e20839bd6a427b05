import unittest

from roundtable.pipeline.returns import HOLDING_WEIGHT, holding_return, portfolio_return, compute_returns


def _portfolio(pid="p1", tickers=("AAA", "BBB", "CCC", "DDD", "EEE"), entry_prices=None):
    return {"id": pid, "advisorName": pid, "tickers": list(tickers), "entryPrices": entry_prices or {}}


class PortfolioReturnTests(unittest.TestCase):
    def test_only_one_priced_holding(self):
        prices = {"AAA": {"sp": 100.0, "cp": 110.0}}
        ret = portfolio_return(_portfolio(), prices)
        self.assertAlmostEqual(ret, ((110 - 100) / 100) * 0.2)
        self.assertAlmostEqual(ret, 0.02)

    def test_weight_is_constant_not_holding_count(self):
        prices = {"AAA": {"sp": 100.0, "cp": 150.0}}
        ret = portfolio_return(_portfolio(tickers=["AAA"]), prices)
        self.assertAlmostEqual(ret, 0.5 * HOLDING_WEIGHT)

    def test_entry_price_override(self):
        prices = {"AAA": {"sp": 100.0, "cp": 90.0}}
        universe = portfolio_return(_portfolio(tickers=["AAA"]), prices)
        swapped = portfolio_return(_portfolio(tickers=["AAA"], entry_prices={"AAA": 80.0}), prices)
        self.assertLess(universe, 0)
        self.assertGreater(swapped, 0)
        self.assertAlmostEqual(swapped, ((90 - 80) / 80) * 0.2)

    def test_override_for_other_ticker_is_ignored(self):
        prices = {"AAA": {"sp": 100.0, "cp": 90.0}}
        ret = portfolio_return(_portfolio(tickers=["AAA"], entry_prices={"ZZZ": 1.0}), prices)
        self.assertAlmostEqual(ret, -0.02)

    def test_no_priced_holdings_is_pending(self):
        ret = portfolio_return(_portfolio(), {"ZZZ": {"sp": 1.0, "cp": 2.0}})
        self.assertIsNone(ret)

    def test_flat_return_is_not_pending(self):
        ret = portfolio_return(_portfolio(tickers=["AAA"]), {"AAA": {"sp": 10.0, "cp": 10.0}})
        self.assertIsNotNone(ret)
        self.assertEqual(ret, 0.0)

    def test_partial_anchor_is_skipped(self):
        prices = {"AAA": {"sp": 100.0}, "BBB": {"cp": 5.0}, "CCC": {"sp": 0, "cp": 5.0}}
        self.assertIsNone(portfolio_return(_portfolio(), prices))

    def test_sums_all_priced_holdings(self):
        prices = {
            "AAA": {"sp": 100.0, "cp": 110.0},
            "BBB": {"sp": 50.0, "cp": 40.0},
            "CCC": {"sp": 20.0, "cp": 25.0},
        }
        ret = portfolio_return(_portfolio(), prices)
        self.assertAlmostEqual(ret, (0.10 - 0.20 + 0.25) * 0.2)

    def test_holding_return_guards(self):
        self.assertIsNone(holding_return(None))
        self.assertIsNone(holding_return({"sp": None, "cp": 1.0}))
        self.assertAlmostEqual(holding_return({"sp": 100.0, "cp": 90.0}, 80.0), 0.125)


class ComputeReturnsTests(unittest.TestCase):
    def test_splits_priced_and_pending(self):
        prices = {"AAA": {"sp": 100.0, "cp": 110.0}}
        portfolios = [_portfolio("p1"), _portfolio("p2", tickers=["XXX"])]
        returns, pending = compute_returns(portfolios, prices)
        self.assertEqual(list(returns), ["p1"])
        self.assertEqual(pending, ["p2"])

    def test_unusable_data_makes_only_that_portfolio_pending(self):
        prices = {
            "AAA": {"sp": 100.0, "cp": 110.0},
            "BAD": {"sp": "100", "cp": 110.0},
            "JUNK": "junk",
        }
        portfolios = [
            _portfolio("p1", tickers=["AAA"]),
            _portfolio("p2", tickers=["BAD"]),
            _portfolio("p3", tickers=["AAA"], entry_prices={"AAA": "80"}),
            _portfolio("p4", tickers=["JUNK", "AAA"]),
        ]
        returns, pending = compute_returns(portfolios, prices)
        self.assertEqual(set(returns), {"p1", "p4"})
        self.assertAlmostEqual(returns["p4"], 0.02)
        self.assertEqual(pending, ["p2", "p3"])


if __name__ == "__main__":
    unittest.main()
