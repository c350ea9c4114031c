"""
Unit tests for the command-line entry point.
"""

from main import build_parser


class TestParser:
    """Tests for argument parsing."""

    def test_clicks_in_order(self):
        """Node ids are kept in the order given."""
        args = build_parser().parse_args(["outer-0", "outer-3", "outer-1"])

        assert args.clicks == ["outer-0", "outer-3", "outer-1"]
        assert not args.verbose

    def test_no_clicks(self):
        """Running without clicks is allowed."""
        args = build_parser().parse_args(["-v"])

        assert args.clicks == []
        assert args.verbose
