"""Tests for the invoice layout engine."""

from datetime import date
from unittest.mock import patch

import pytest

from factories import long_items, make_invoice
from clinicdocs.config import LayoutProfile
from clinicdocs.exceptions import LayoutError
from clinicdocs.export.reader import count_pages, read_page_texts
from clinicdocs.layout.invoice_renderer import (
    DESCRIPTION_WRAP,
    PROCEDURE_WRAP,
    clip_lines,
    layout_invoice,
    render_invoice,
    row_height,
)
from clinicdocs.models.invoice import (
    Address,
    AnimalInfo,
    AnimalSection,
    InvoiceHeaderInfo,
    InvoiceLayoutInput,
    LineItem,
    PartyBlock,
)


@pytest.fixture
def profile():
    return LayoutProfile()


def _all_texts(result):
    return [op.text for op in result.ops if op.kind == "text"]


def test_row_height():
    assert row_height([""], [""]) == 25
    assert row_height(["a"], ["a", "b"]) == 38
    assert row_height(["a"], ["x"] * 5) == 80


def test_clip_lines():
    lines = ["first line", "second line", "third line"]
    assert clip_lines(lines, 3, 12) == lines
    assert clip_lines(lines, 2, 12) == ["first line", "second li..."]


class TestSinglePageInvoice:
    """One animal, one item."""

    def test_single_item_amounts(self, single_item_invoice, profile):
        result = layout_invoice(single_item_invoice, profile)

        assert result.page_count == 1
        assert len(result.rows) == 1
        texts = _all_texts(result)
        # unit price, line total, subtotal, total
        assert texts.count("$140.00") == 4
        assert "Spay surgery" in texts
        assert "Animal: Buddy (Dog)" in texts

    def test_pdf_text_readable(self, single_item_invoice, profile):
        pdf = render_invoice(single_item_invoice, profile)

        assert pdf.startswith(b"%PDF")
        pages = read_page_texts(pdf)
        assert len(pages) == 1
        assert "INVOICE #INV-001" in pages[0]
        assert "$140.00" in pages[0]
        assert "Thank you for choosing AHA Clinic" in pages[0]

    def test_header_block(self, single_item_invoice, profile):
        result = layout_invoice(single_item_invoice, profile)
        texts = _all_texts(result)

        assert texts[:2] == ["AHA Clinic", "Veterinary Services"]
        assert "Date: 03/01/2024" in texts
        assert "Due Date: 03/31/2024" in texts
        assert "Status: sent" in texts
        assert "PAID" not in texts

    def test_client_block(self, single_item_invoice, profile):
        texts = _all_texts(layout_invoice(single_item_invoice, profile))

        assert "John Doe" in texts
        assert "123 Main St" in texts
        assert "Test City, TS, 12345" in texts
        assert "USA" not in texts

    def test_column_header_once(self, single_item_invoice, profile):
        texts = _all_texts(layout_invoice(single_item_invoice, profile))
        for label in ("Procedure", "Description", "Qty", "Unit Price", "Total"):
            assert texts.count(label) == 1

    def test_custom_profile(self, single_item_invoice):
        profile = LayoutProfile(clinic_name="North Vet", currency_symbol="EUR ",
                                footer_message="")
        texts = _all_texts(layout_invoice(single_item_invoice, profile))

        assert texts[0] == "North Vet"
        assert "EUR 140.00" in texts
        assert not any("Thank you" in t for t in texts)


class TestHeaderVariants:
    """Paid badge, organizations and missing data."""

    def test_paid_badge(self, profile):
        invoice = make_invoice([], status="paid", payment_method="credit_card",
                               payment_date=date(2024, 3, 5))
        texts = _all_texts(layout_invoice(invoice, profile))

        assert "PAID" in texts
        assert "Payment Method: Credit Card" in texts
        assert "Payment Date: 03/05/2024" in texts

    def test_organization_party(self, profile):
        invoice = InvoiceLayoutInput(
            header=InvoiceHeaderInfo(invoice_number="INV-7"),
            party=PartyBlock.for_organization(
                "City Shelter", Address(city="Toronto", state="ON", country="Canada")),
        )
        texts = _all_texts(layout_invoice(invoice, profile))

        assert "City Shelter" in texts
        assert "Canada" in texts

    def test_missing_party_and_animals(self, profile):
        invoice = InvoiceLayoutInput(header=InvoiceHeaderInfo())
        result = layout_invoice(invoice, profile)
        texts = _all_texts(result)

        assert "INVOICE #N/A" in texts
        assert "Date: N/A" in texts
        assert "Client information not available" in texts
        assert "Animal information not available" in texts
        assert "No items in this invoice" in texts
        assert result.rows == []
        assert texts.count("$0.00") == 2

    def test_long_animal_summary_truncated(self, profile):
        sections = [AnimalSection(animal=AnimalInfo(name=f"Patient{i}", species="Rabbit"))
                    for i in range(10)]
        texts = _all_texts(layout_invoice(make_invoice(sections), profile))

        summary = next(t for t in texts if t.startswith("Patient0 (Rabbit)"))
        assert len(summary) <= 90
        assert summary.endswith("...")

    def test_empty_line_item_rendered(self, profile):
        section = AnimalSection(animal=AnimalInfo(name="Buddy", species="Dog"), items=[LineItem()])
        result = layout_invoice(make_invoice([section]), profile)

        assert len(result.rows) == 1
        assert result.rows[0].height == 25


class TestPagination:
    """Multi-page invoices."""

    def test_many_rows_paginate(self, large_invoice, profile):
        result = layout_invoice(large_invoice, profile)

        assert result.page_count >= 2
        assert count_pages(result.pdf_bytes) == result.page_count
        assert len(result.rows) == 40

    def test_every_page_has_column_header(self, large_invoice, profile):
        result = layout_invoice(large_invoice, profile)

        for page_number in range(1, result.page_count + 1):
            assert "Procedure" in result.texts_on_page(page_number)
        for page_text in read_page_texts(result.pdf_bytes):
            assert "Procedure" in page_text

    def test_continuation_pages_titled(self, large_invoice, profile):
        result = layout_invoice(large_invoice, profile)

        for page_number in range(2, result.page_count + 1):
            assert "INVOICE #INV-001 (continued)" in result.texts_on_page(page_number)
        for page_number in range(1, result.page_count):
            assert "Continued on next page..." in result.texts_on_page(page_number)
        assert "Continued on next page..." not in result.texts_on_page(result.page_count)

    def test_section_label_repeated(self, large_invoice, profile):
        result = layout_invoice(large_invoice, profile)
        continued = [t for t in _all_texts(result) if t.endswith("(Dog) (continued)")]
        assert continued

    def test_rows_stay_on_page(self, large_invoice, profile):
        result = layout_invoice(large_invoice, profile)
        bottom_limit = result.page_size[1] - 100

        for row in result.rows:
            assert row.bottom <= bottom_limit + 1e-6
            assert all(len(line) <= PROCEDURE_WRAP for line in row.procedure_lines)
            assert all(len(line) <= DESCRIPTION_WRAP for line in row.description_lines)

    def test_rows_do_not_overlap(self, large_invoice, profile):
        rows = layout_invoice(large_invoice, profile).rows

        for previous, current in zip(rows, rows[1:]):
            assert current.page_number >= previous.page_number
            if current.page_number == previous.page_number:
                assert current.top >= previous.bottom

    def test_heading_kept_with_first_row(self, large_invoice, profile):
        result = layout_invoice(large_invoice, profile)
        heading = next(op for op in result.ops if op.text == "Animal: Misty (Cat)")
        first_row = next(r for r in result.rows if r.section_index == 1)

        assert heading.page_number == first_row.page_number

    def test_page_count_monotonic(self, profile):
        counts = []
        for n in (1, 5, 10, 20, 40, 80):
            section = AnimalSection(animal=AnimalInfo(name="Buddy", species="Dog"),
                                    items=long_items(n))
            counts.append(layout_invoice(make_invoice([section]), profile).page_count)

        assert counts == sorted(counts)
        assert counts[0] == 1
        assert counts[-1] > 1

    def test_totals_identical_across_renders(self, large_invoice, profile):
        first = layout_invoice(large_invoice, profile)
        second = layout_invoice(large_invoice, profile)

        assert _all_texts(first) == _all_texts(second)
        assert "$500.00" in _all_texts(first)

    def test_oversized_row_fits_one_page(self, profile):
        """A row taller than a page is clipped and never spills off the page."""
        item = LineItem(procedure="Hospitalization",
                        description="observation notes " * 170, unit_price=300)
        section = AnimalSection(animal=AnimalInfo(name="Buddy", species="Dog"), items=[item])
        result = layout_invoice(make_invoice([section]), profile)

        row = result.rows[0]
        assert row.bottom <= result.page_size[1] - 100 + 1e-6
        assert row.description_lines[-1].endswith("...")
        assert all(len(line) <= DESCRIPTION_WRAP for line in row.description_lines)

        heading = next(op for op in result.ops if op.text == "Animal: Buddy (Dog)")
        assert heading.page_number == row.page_number
        for page_number in range(2, result.page_count + 1):
            texts = result.texts_on_page(page_number)
            assert any(r.page_number == page_number for r in result.rows) or "Total:" in texts

    def test_unpopulated_animal_has_no_heading(self, profile):
        sections = [
            AnimalSection(animal=None, items=[LineItem(procedure="Exam", unit_price=50)]),
            AnimalSection(animal=AnimalInfo(name="Misty", species="Cat"),
                          items=[LineItem(procedure="Vaccine", unit_price=20)]),
        ]
        result = layout_invoice(make_invoice(sections), profile)
        texts = _all_texts(result)

        assert len(result.rows) == 2
        assert [t for t in texts if t.startswith("Animal: ")] == ["Animal: Misty (Cat)"]
        assert "Unknown (Unknown)" not in " ".join(texts)
        assert "Misty (Cat)" in texts
        assert "$70.00" in texts


class TestFailures:
    """LayoutError wrapping."""

    def test_unexpected_error_wrapped(self, single_item_invoice, profile):
        with patch("clinicdocs.layout.invoice_renderer.PageCanvas.draw_column_header",
                   side_effect=RuntimeError("boom")):
            with pytest.raises(LayoutError, match="Failed to generate PDF: boom"):
                render_invoice(single_item_invoice, profile)

    def test_layout_error_passes_through(self, single_item_invoice, profile):
        with patch("clinicdocs.layout.invoice_renderer.FontSet",
                   side_effect=LayoutError("no fonts")):
            with pytest.raises(LayoutError, match="no fonts"):
                render_invoice(single_item_invoice, profile)
