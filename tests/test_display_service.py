"""Unit tests for display service functions."""

import unittest
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from partyhunt.core.models import PlayerRecord, SessionRecord, Transfer
from partyhunt.core.parser import load_session_report
from partyhunt.services.display import (
    describe_leader,
    filter_transfers,
    format_date_range,
    format_decimal,
    format_number,
    format_player_name,
    format_timestamp,
    format_transfer_commands,
    prepare_players_for_display,
)

FIXTURE = Path(__file__).parent / "fixtures" / "party_hunt.txt"


class TestDisplayService(unittest.TestCase):
    """Test display formatting functions."""

    def test_format_number(self):
        self.assertEqual(format_number(1234567), "1,234,567")
        self.assertEqual(format_number(-84567), "-84,567")
        self.assertEqual(format_number(0), "0")

    def test_format_number_decimal_rounds(self):
        self.assertEqual(format_number(Decimal("266666.67")), "266,667")
        self.assertEqual(format_number(Decimal("-0.5")), "-1")

    def test_format_number_none(self):
        self.assertEqual(format_number(None), "--")

    def test_format_decimal(self):
        self.assertEqual(format_decimal(Decimal("0.6666")), "0.67")
        self.assertEqual(format_decimal(Decimal("-1234.5")), "-1,234.50")
        self.assertEqual(format_decimal(Decimal("12.345"), places=1), "12.3")
        self.assertEqual(format_decimal(None), "--")

    def test_format_timestamp(self):
        self.assertEqual(format_timestamp(datetime(2025, 7, 14, 18, 13, 49)), "2025-07-14 18:13")

    def test_format_date_range(self):
        session = load_session_report(FIXTURE)
        self.assertEqual(format_date_range(session), "2025-07-14 18:13 - 2025-07-14 19:58")

    def test_format_player_name(self):
        self.assertEqual(format_player_name(PlayerRecord(name="Bob")), "Bob")
        self.assertEqual(
            format_player_name(PlayerRecord(name="Bob", is_leader=True)), "Bob (Leader)"
        )


class TestTransferFormatting(unittest.TestCase):
    """Test transfer command output."""

    def setUp(self):
        self.transfers = [
            Transfer(sender="A", recipient="B", amount=533),
            Transfer(sender="A", recipient="C", amount=0),
            Transfer(sender="A", recipient="D", amount=12),
        ]

    def test_format_transfer_commands(self):
        self.assertEqual(
            format_transfer_commands(self.transfers),
            ["transfer 533 to B", "transfer 0 to C", "transfer 12 to D"],
        )

    def test_format_transfer_commands_skip_zero(self):
        self.assertEqual(
            format_transfer_commands(self.transfers, skip_zero=True),
            ["transfer 533 to B", "transfer 12 to D"],
        )

    def test_filter_transfers_keeps_all_by_default(self):
        self.assertEqual(filter_transfers(self.transfers), self.transfers)


class TestPlayerRows(unittest.TestCase):
    """Test player table preparation."""

    def test_prepare_players_for_display(self):
        session = load_session_report(FIXTURE)
        rows = prepare_players_for_display(session)

        self.assertEqual(len(rows), 3)
        self.assertEqual(rows[0]["name"], "Alice (Leader)")
        self.assertEqual(rows[0]["should_receive"], "416,667")
        self.assertEqual(rows[1]["balance"], "-200,000")
        self.assertEqual(rows[1]["should_receive"], "466,667")
        self.assertEqual(rows[2]["healing"], "1,234")

    def test_describe_leader(self):
        def session(*players):
            return SessionRecord(
                start_time=datetime(2025, 1, 1),
                end_time=datetime(2025, 1, 1, 1),
                players=players,
            )

        self.assertIsNone(describe_leader(session(PlayerRecord(name="A"))))
        self.assertEqual(describe_leader(session(PlayerRecord(name="A", is_leader=True))), "A")
        self.assertEqual(
            describe_leader(
                session(
                    PlayerRecord(name="A", is_leader=True),
                    PlayerRecord(name="B", is_leader=True),
                )
            ),
            "A (also flagged: B)",
        )


if __name__ == "__main__":
    unittest.main(verbosity=2)
