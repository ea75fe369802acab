import unittest

from candlechart.models.market import Tick
from candlechart.providers.wire import decode_tick, decode_ticks, parse_price


class TestParsePrice(unittest.TestCase):
    def test_numbers_and_numeric_strings(self):
        self.assertEqual(parse_price("101.5"), 101.5)
        self.assertEqual(parse_price(" 42 "), 42.0)
        self.assertEqual(parse_price(7), 7.0)

    def test_unusable_values_become_zero(self):
        for raw in (None, "", "  ", "abc", "nan", "inf", "-5", True, [1]):
            with self.subTest(raw=raw):
                self.assertEqual(parse_price(raw), 0.0)


class TestDecodeTick(unittest.TestCase):
    def test_full_wire_tick(self):
        raw = {"s": "btcusd", "b": "100.5", "a": "101.25", "spr": "0.75", "bf": "1", "af": "2"}

        tick = decode_tick(raw)

        self.assertEqual(
            tick,
            Tick(symbol="BTCUSD", bid=100.5, ask=101.25, spread=0.75, bf="1", af="2"),
        )
        self.assertEqual(tick.high, 101.25)
        self.assertEqual(tick.low, 100.5)

    def test_blank_fields_default_to_zero(self):
        tick = decode_tick({"s": "BTCUSD", "b": "", "a": "oops"})

        self.assertEqual(tick.bid, 0.0)
        self.assertEqual(tick.ask, 0.0)
        self.assertEqual(tick.spread, 0.0)
        self.assertEqual(tick.bf, "")

    def test_missing_symbol_uses_default(self):
        self.assertEqual(decode_tick({"a": "1"}, default_symbol="BTCUSD").symbol, "BTCUSD")

    def test_non_object_entries_are_skipped(self):
        ticks = decode_ticks([{"s": "BTCUSD", "b": "1", "a": "2"}, "junk", None, 5])

        self.assertEqual(len(ticks), 1)
        self.assertEqual(decode_ticks(None), [])


if __name__ == "__main__":
    unittest.main()
