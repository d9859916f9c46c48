import unittest
from datetime import datetime, timezone

from quadriga.data.models import (
    AccountBalance,
    LookupOrder,
    OpenOrder,
    OrderBook,
    PriceLevel,
    Ticker,
    Transaction,
    to_dict,
)
from quadriga.infra.errors import ResponseDecodeError


class TickerTest(unittest.TestCase):
    def test_decodes_string_numbers(self) -> None:
        ticker = Ticker.from_payload({"high": "100", "low": "90", "last": "95"})
        self.assertEqual(100.0, ticker.high)
        self.assertEqual(90.0, ticker.low)
        self.assertEqual(95.0, ticker.last)
        self.assertIsNone(ticker.bid)

    def test_full_payload(self) -> None:
        ticker = Ticker.from_payload(
            {
                "high": "3000.00",
                "last": "2950.10",
                "timestamp": "1500000000",
                "volume": "12.5",
                "vwap": "2975.3",
                "low": "2900.00",
                "ask": "2951.00",
                "bid": "2949.00",
            }
        )
        self.assertEqual(2951.0, ticker.ask)
        self.assertEqual(datetime(2017, 7, 14, 2, 40, tzinfo=timezone.utc), ticker.timestamp)

    def test_rejects_non_object(self) -> None:
        with self.assertRaises(ResponseDecodeError):
            Ticker.from_payload(["high"])


class OrderBookTest(unittest.TestCase):
    def test_levels(self) -> None:
        book = OrderBook.from_payload(
            {
                "timestamp": "1500000000",
                "bids": [["100.5", "1.2"], ["100.0", "3"]],
                "asks": [["101", "0.5"]],
            }
        )
        self.assertEqual([PriceLevel(100.5, 1.2), PriceLevel(100.0, 3.0)], book.bids)
        self.assertEqual(PriceLevel(101.0, 0.5), book.best_ask())

    def test_empty_sides(self) -> None:
        book = OrderBook.from_payload({"bids": [], "asks": []})
        self.assertIsNone(book.best_bid())
        self.assertIsNone(book.best_ask())

    def test_malformed_level(self) -> None:
        with self.assertRaises(ResponseDecodeError):
            OrderBook.from_payload({"bids": [["1"]], "asks": []})


class TransactionTest(unittest.TestCase):
    def test_list(self) -> None:
        trades = Transaction.list_from_payload(
            [{"date": "1500000000", "tid": 7, "price": "10.5", "amount": "2", "side": "buy"}]
        )
        self.assertEqual(1, len(trades))
        self.assertEqual(7, trades[0].tid)
        self.assertEqual("buy", trades[0].side)

    def test_rejects_object(self) -> None:
        with self.assertRaises(ResponseDecodeError):
            Transaction.list_from_payload({"tid": 1})


class AccountBalanceTest(unittest.TestCase):
    def test_groups_by_currency(self) -> None:
        balance = AccountBalance.from_payload(
            {
                "cad_balance": "100.00",
                "btc_balance": "1.5",
                "cad_reserved": "10",
                "btc_reserved": "0",
                "cad_available": "90",
                "btc_available": "1.5",
                "fee": "0.5",
            }
        )
        self.assertEqual(0.5, balance.fee)
        self.assertEqual(90.0, balance.get("CAD").available)
        self.assertEqual(1.5, balance.get("btc").balance)
        self.assertIsNone(balance.get("eth"))


class OrderRecordsTest(unittest.TestCase):
    def test_open_order_side(self) -> None:
        order = OpenOrder.from_payload(
            {"id": "abc", "datetime": "2017-07-14 02:40:00", "type": "1", "price": "5", "amount": "1", "status": "0"}
        )
        self.assertEqual("sell", order.side)
        self.assertEqual(datetime(2017, 7, 14, 2, 40, tzinfo=timezone.utc), order.datetime)

    def test_lookup_order(self) -> None:
        order = LookupOrder.from_payload(
            {"id": "abc", "book": "btc_cad", "price": "5", "amount": "1", "type": 0, "status": 2}
        )
        self.assertEqual("btc_cad", order.book)
        self.assertEqual(2, order.status)
        self.assertNotIn("raw", to_dict(order))


class TimestampParsingTest(unittest.TestCase):
    EXPECTED = datetime(2017, 7, 14, 2, 40, tzinfo=timezone.utc)

    def test_seconds_milliseconds_and_nanoseconds(self) -> None:
        for value in ("1500000000", "1500000000000", 1_500_000_000_000_000_000):
            with self.subTest(value=value):
                self.assertEqual(self.EXPECTED, Ticker.from_payload({"timestamp": value}).timestamp)

    def test_non_finite_values_decode_to_none(self) -> None:
        for value in ("NaN", "inf", "1e400"):
            with self.subTest(value=value):
                self.assertIsNone(Ticker.from_payload({"timestamp": value}).timestamp)

    def test_out_of_range_raises_decode_error(self) -> None:
        with self.assertRaises(ResponseDecodeError):
            Ticker.from_payload({"timestamp": "1e300"})
        with self.assertRaises(ResponseDecodeError):
            OrderBook.from_payload({"timestamp": -(10 ** 30), "bids": [], "asks": []})


class NumericFieldTest(unittest.TestCase):
    def test_non_finite_prices_are_dropped(self) -> None:
        ticker = Ticker.from_payload({"high": "NaN", "low": "inf", "last": "-Infinity"})
        self.assertEqual((None, None, None), (ticker.high, ticker.low, ticker.last))

    def test_booleans_are_not_numbers(self) -> None:
        trade = Transaction.from_payload({"tid": True, "price": False})
        self.assertIsNone(trade.tid)
        self.assertIsNone(trade.price)

    def test_non_finite_order_book_level_is_rejected(self) -> None:
        with self.assertRaises(ResponseDecodeError):
            OrderBook.from_payload({"bids": [["NaN", "1"]], "asks": []})


if __name__ == "__main__":
    unittest.main()
