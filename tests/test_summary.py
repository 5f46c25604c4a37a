"""Tests for the short description helpers."""

from types import SimpleNamespace

import pytest

from job_catalog.summary import (
    compose_summary,
    first_sentence,
    format_money,
    html_to_text,
    strip_markup,
)


class TestStripMarkup:
    """Textual tag removal with whitespace collapse."""

    def test_removes_tags_and_collapses_whitespace(self):
        assert strip_markup("<p><strong>Hi</strong> there.</p>") == "Hi there."

    def test_adjacent_block_tags_keep_words_apart(self):
        assert strip_markup("<li>one</li><li>two</li>") == "one two"

    def test_newlines_and_tabs_collapse(self):
        assert strip_markup("  <p>a\n\n\tb</p>  ") == "a b"

    def test_entities_are_not_decoded(self):
        assert strip_markup("<p>Fish &amp; chips</p>") == "Fish &amp; chips"

    def test_stray_angle_bracket_overconsumes(self):
        """A lone '<' eats text up to the next '>'."""
        assert strip_markup("x < y and z > w") == "x w"

    def test_unclosed_tag_is_left_alone(self):
        assert strip_markup("a <b c") == "a <b c"

    @pytest.mark.parametrize("value", ["", None, "<p></p>", "<br><br>"])
    def test_empty_results(self, value):
        assert strip_markup(value) == ""


class TestFirstSentence:
    """Excerpt up to the first period, or a truncated prefix."""

    def test_stops_at_first_period(self):
        assert first_sentence("Earn well. More text follows that is long.", 180) == "Earn well."

    def test_long_text_without_period_is_truncated(self):
        text = "a" * 250
        result = first_sentence(text, 180)
        assert result == "a" * 179 + "…"
        assert len(result) == 180

    def test_short_text_without_period_is_unchanged(self):
        assert first_sentence("No period here") == "No period here"

    def test_period_at_cutoff_is_ignored(self):
        text = "a" * 180 + ". tail"
        assert first_sentence(text, 180) == "a" * 179 + "…"

    def test_period_just_before_cutoff_is_kept(self):
        text = "a" * 179 + ". tail"
        assert first_sentence(text, 180) == "a" * 179 + "."

    def test_decimal_ends_excerpt_early(self):
        assert first_sentence("Pay is €9.88 per hour. Great.") == "Pay is €9."

    def test_empty_text(self):
        assert first_sentence("") == ""


class TestFormatMoney:
    def test_integer_amount(self):
        result = format_money(30)
        assert result == "€30"
        assert "€" in result and "30" in result

    def test_whole_float_drops_decimal(self):
        assert format_money(15.0) == "€15"

    def test_fractional_amount(self):
        assert format_money(14.71) == "€14.71"

    @pytest.mark.parametrize("amount", [0, -5, None, "30", True, float("nan")])
    def test_non_positive_or_non_numeric_is_absent(self, amount):
        assert format_money(amount) is None


class TestComposeSummary:
    """Ordered assembly of pay segments and the narrative excerpt."""

    def test_numeric_preferred_and_text_fallback(self):
        posting = SimpleNamespace(
            per_gig_amount=30,
            per_gig_amount_text="ignored",
            per_sale_amount=None,
            per_sale_amount_text="flat fee",
            description_html="<p>Great role.</p> more text",
        )
        assert compose_summary(posting) == "€30 per gig — flat fee — Great role."

    def test_per_sale_numeric(self):
        posting = SimpleNamespace(per_sale_amount=200, description_html="<p>Sell rooms.</p>")
        assert compose_summary(posting) == "€200 per sale — Sell rooms."

    def test_zero_amount_falls_back_to_text(self):
        posting = SimpleNamespace(
            per_gig_amount=0,
            per_gig_amount_text="Paid per task",
            description_html="",
        )
        assert compose_summary(posting) == "Paid per task"

    def test_empty_description_and_no_pay(self):
        posting = SimpleNamespace(description_html="<p></p>")
        assert compose_summary(posting) == ""

    def test_object_without_fields(self):
        assert compose_summary(object()) == ""

    def test_empty_text_fallback_is_omitted(self):
        posting = SimpleNamespace(per_sale_amount_text="", description_html="<p>Hi.</p>")
        assert compose_summary(posting) == "Hi."

    def test_works_on_postings(self, make_posting):
        posting = make_posting(per_gig_amount=12.5)
        assert compose_summary(posting) == "€12.5 per gig — A test job."


class TestHtmlToText:
    def test_decodes_entities(self):
        assert html_to_text("<p>Fish &amp; chips</p>") == "Fish & chips"

    def test_separates_blocks(self):
        assert html_to_text("<ul><li>one</li><li>two</li></ul>") == "one two"

    def test_empty(self):
        assert html_to_text("") == ""
        assert html_to_text(None) == ""
