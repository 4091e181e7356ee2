from i2e.extraction.models import TotalCandidate
from i2e.extraction.totals import (
    collect_total_candidates,
    compare_total_candidates,
    fallback_total,
    rank_total_candidates,
    resolve_invoice_total,
    total_kind,
)


def _resolve(pages):
    candidates = []
    for number, text in enumerate(pages, start=1):
        candidates.extend(collect_total_candidates(text, number))
    return resolve_invoice_total(candidates, "\n".join(pages))


def test_single_page_total():
    assert _resolve(["Invoice No. 123\nTotal 1.234,56"]) == 1234.56


def test_total_outranks_larger_subtotal_across_pages():
    pages = ["Subtotal (Net) 900,00", "Total 250,00"]
    assert _resolve(pages) == 250.0


def test_later_page_wins_between_subtotals():
    pages = ["Subtotal 80,00", "Subtotal 120,00"]
    assert _resolve(pages) == 120.0


def test_subtotal_net_keyword():
    candidates = collect_total_candidates("Subtotal (Net) 1.950,00", 1)

    assert len(candidates) == 1
    assert candidates[0].kind == "Subtotal"
    assert candidates[0].priority == 2
    assert candidates[0].amount == 1950.0


def test_largest_amount_in_window_wins():
    candidates = collect_total_candidates("Total 10,00 EUR 2.359,50", 1)
    assert candidates[0].amount == 2359.5


def test_amount_on_following_line():
    page = "Total amount due\n\nEUR 1.234,56"
    candidates = collect_total_candidates(page, 3)

    assert len(candidates) == 1
    assert candidates[0].amount == 1234.56
    assert candidates[0].page_number == 3
    assert candidates[0].source_line == "Total amount due -> EUR 1.234,56"


def test_vat_lines_are_skipped():
    page = "Total VAT 21% 409,50\nTotal\nVAT 21% 409,50\n2.359,50"
    candidates = collect_total_candidates(page, 1)

    assert [c.amount for c in candidates] == [2359.5]


def test_column_header_is_not_a_total():
    page = "Pos Description Qty Position Total\nTotal 99,00"
    candidates = collect_total_candidates(page, 1)

    assert [c.line_index for c in candidates] == [1]


def test_amount_outside_window_is_ignored():
    page = "Total" + " " * 60 + "1.234,56"
    assert collect_total_candidates(page, 1) == []
    assert collect_total_candidates(page, 1, amount_window=80)[0].amount == 1234.56


def test_small_amounts_are_noise():
    assert collect_total_candidates("Total 0,50", 1) == []


def test_dates_are_not_amounts():
    assert collect_total_candidates("Total as of 15.01.2024", 1) == []


def test_negative_total():
    candidates = collect_total_candidates("Total 1.234,56-", 1)
    assert candidates[0].amount == -1234.56


def test_total_kind():
    assert total_kind("Total 12,00") == "Total"
    assert total_kind("Subtotal Total 12,00") == "Subtotal"
    assert total_kind("SUBTOTAL 12,00") == "Subtotal"


def test_compare_total_candidates():
    total_p1 = TotalCandidate.create(10.0, 1, "Total 10,00", "Total")
    subtotal_p2 = TotalCandidate.create(99.0, 2, "Subtotal 99,00", "Subtotal")
    total_p2 = TotalCandidate.create(20.0, 2, "Total 20,00", "Total", line_index=4)
    total_p2_early = TotalCandidate.create(30.0, 2, "Total 30,00", "Total", line_index=1)

    assert compare_total_candidates(total_p1, subtotal_p2) < 0
    assert compare_total_candidates(total_p2, total_p1) < 0
    assert compare_total_candidates(total_p2_early, total_p2) < 0
    assert compare_total_candidates(total_p2, total_p2) == 0

    ranked = rank_total_candidates([subtotal_p2, total_p1, total_p2, total_p2_early])
    assert [c.amount for c in ranked] == [30.0, 20.0, 10.0, 99.0]


def test_fallback_uses_last_nonzero_match():
    assert resolve_invoice_total([], "Total: 0,00\nTotal: 0,80") == 0.8


def test_fallback_tries_patterns_in_order():
    assert fallback_total("Subtotal (Net) 0,70") == 0.7
    assert fallback_total("Total: 0,00") is None
    assert fallback_total("") is None


def test_no_total_anywhere():
    assert _resolve(["Invoice No. 1\nNothing to see"]) is None


def test_vat_code_lines_are_not_totals():
    page = "Total 21%(V1) 409,50\nTotal 2.359,50"
    assert [c.amount for c in collect_total_candidates(page, 1)] == [2359.5]


def test_grand_total_fallback():
    assert fallback_total("Grand Total 0,90") == 0.9
    assert resolve_invoice_total([], "Grand Total: 0,40-") == -0.4


def test_fallback_ignores_column_header_and_next_line():
    page = "\n".join([
        "Pos Material Description Qty Unit VAT Unit Price Position Total",
        "0010 100200 Application Hosting Basic 2 PU 21%(V1) 500,00 1.000,00",
    ])

    assert fallback_total(page) is None
    assert fallback_total("Description Position Total 0,50") is None
    assert fallback_total("Total\n0,50") is None


def test_column_header_never_becomes_the_invoice_total():
    from i2e.extraction import extract_invoice_data

    page = "\n".join([
        "Invoice No. 4711",
        "Pos Material Description Qty Unit VAT Unit Price Position Total",
        "0010 100200 Application Hosting Basic 2 PU 21%(V1) 500,00 1.000,00",
    ])

    records = extract_invoice_data([page], "inv.pdf")

    assert records[0]['position'] == "0010"
    assert {r['extractedInvoiceTotal'] for r in records} == {None}
