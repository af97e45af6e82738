#!/usr/bin/env python3
"""Tests for the decklist parser."""

import io
import tempfile
import unittest
from pathlib import Path

from proxy_pages.decklist import (
    MAX_QUANTITY,
    TokenKind,
    parse_decklist,
    parse_line,
    read_decklist,
    tokenize_line,
)
from proxy_pages.errors import InputMissingError
from proxy_pages.models import CardRequest


class TestParseLine(unittest.TestCase):
    """Test parsing of single decklist lines."""

    def test_quantity_separators_are_equivalent(self):
        """Test that 3x, 3X and 3 all parse to the same request."""
        expected = CardRequest(name="Island", quantity=3)
        for line in ("3x Island", "3 Island", "3X Island", "  3 x  Island  ", "3xIsland", "3XIsland"):
            with self.subTest(line=line):
                self.assertEqual(parse_line(line), expected)

    def test_no_leading_digit_defaults_to_one(self):
        """Test that a bare card name gets quantity 1."""
        request = parse_line("Lightning Bolt")
        self.assertEqual(request.quantity, 1)
        self.assertEqual(request.name, "Lightning Bolt")
        self.assertIsNone(request.explicit_face)

    def test_blank_and_comment_lines_are_skipped(self):
        """Test that blank and comment lines produce nothing."""
        for line in ("", "   ", "# comment", "// comment", "  # indented"):
            with self.subTest(line=line):
                self.assertIsNone(parse_line(line))

    def test_quantity_without_name_is_dropped(self):
        """Test that a line with only a quantity is dropped."""
        self.assertIsNone(parse_line("4"))
        self.assertIsNone(parse_line("4x"))
        self.assertIsNone(parse_line("4 x "))

    def test_name_starting_with_x_is_kept(self):
        """Test that an X at the start of a name is not eaten as a separator."""
        request = parse_line("3 Xenagos, the Reveler")
        self.assertEqual(request, CardRequest(name="Xenagos, the Reveler", quantity=3))

    def test_digits_directly_followed_by_name(self):
        """Test a quantity glued to the name."""
        self.assertEqual(parse_line("2Island"), CardRequest(name="Island", quantity=2))

    def test_name_keeps_inner_text(self):
        """Test that split-card names and punctuation pass through untouched."""
        request = parse_line("1 Fire // Ice")
        self.assertEqual(request.name, "Fire // Ice")

    def test_out_of_range_quantity_defaults_to_one(self):
        """Test that unrepresentable quantities fall back to 1."""
        huge = str(MAX_QUANTITY + 1)
        self.assertEqual(parse_line(f"{huge} Island").quantity, 1)
        self.assertEqual(parse_line("0 Island").quantity, 1)
        self.assertEqual(parse_line(f"{MAX_QUANTITY} Island").quantity, MAX_QUANTITY)


class TestTokenizer(unittest.TestCase):
    """Test the line tokenizer."""

    def test_token_kinds(self):
        """Test the tokens produced for a full line."""
        tokens = tokenize_line("12x Forest")
        self.assertEqual(
            [token.kind for token in tokens],
            [TokenKind.QUANTITY, TokenKind.SEPARATOR, TokenKind.NAME],
        )
        self.assertEqual([token.text for token in tokens], ["12", "x", "Forest"])

    def test_comment_has_no_tokens(self):
        """Test that comments tokenize to nothing."""
        self.assertEqual(tokenize_line("// Sideboard"), [])


class TestParseDecklist(unittest.TestCase):
    """Test parsing of whole decklists."""

    def test_order_is_preserved(self):
        """Test that requests come out in line order."""
        text = "4 Lightning Bolt\n# burn\n\n2x Island\nCounterspell\n// end\n"
        requests = parse_decklist(text)
        self.assertEqual(
            requests,
            [
                CardRequest(name="Lightning Bolt", quantity=4),
                CardRequest(name="Island", quantity=2),
                CardRequest(name="Counterspell", quantity=1),
            ],
        )

    def test_duplicate_lines_are_not_merged(self):
        """Test that repeated names stay as separate requests."""
        requests = parse_decklist("1 Island\n1 Island\n")
        self.assertEqual(len(requests), 2)

    def test_empty_input(self):
        """Test that empty or whitespace-only input gives no requests."""
        self.assertEqual(parse_decklist(""), [])
        self.assertEqual(parse_decklist("  \n\t\n"), [])

    def test_windows_line_endings(self):
        """Test CRLF input."""
        requests = parse_decklist("1 Island\r\n2 Swamp\r\n")
        self.assertEqual([r.name for r in requests], ["Island", "Swamp"])


class TestReadDecklist(unittest.TestCase):
    """Test reading decklist text from files and streams."""

    def test_read_from_file(self):
        """Test reading a decklist file."""
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "deck.txt"
            path.write_text("4 Island\n", encoding="utf-8")
            self.assertEqual(read_decklist(path), "4 Island\n")

    def test_missing_file_is_fatal(self):
        """Test that a missing file raises InputMissingError."""
        with self.assertRaises(InputMissingError):
            read_decklist(Path("/nonexistent/deck.txt"))

    def test_read_from_piped_stream(self):
        """Test reading from a non-interactive stream."""
        self.assertEqual(read_decklist(stream=io.StringIO("1 Swamp")), "1 Swamp")

    def test_interactive_stream_is_fatal(self):
        """Test that a terminal with nothing piped raises InputMissingError."""

        class FakeTerminal(io.StringIO):
            def isatty(self):
                return True

        with self.assertRaises(InputMissingError):
            read_decklist(stream=FakeTerminal())


if __name__ == "__main__":
    unittest.main()
