from i2e.extraction.line_items import (
    LINE_ITEM_STRATEGIES,
    extract_line_items,
    find_candidate_lines,
    line_item_section,
    parse_loose,
    parse_structured,
    parse_tokenized,
    run_strategies,
)
from tests.fixtures.invoice_pages import PAGE_ONE

STRUCTURED_LINE = "0010 100200 Application Hosting Basic 2 PU 21%(V1) 500,00 1.000,00"
TOKENIZED_LINE = "0020 200300 External consultant 10 h 95,00 21%(V1) 950,00"
LOOSE_LINE = "0050 300400 Other costs 1 PU 21%(V1)120,00"


def test_candidate_lines_stop_at_first_total():
    page = "\n".join([
        "  " + STRUCTURED_LINE + "  ",
        "21%(V1) short",
        "Subtotal 1.000,00",
        TOKENIZED_LINE,
    ])

    assert find_candidate_lines(page) == [STRUCTURED_LINE]
    assert len(line_item_section(page)) == 2


def test_position_total_header_is_not_a_boundary():
    section = line_item_section("Pos Description Position Total\n" + STRUCTURED_LINE)
    assert len(section) == 2


def test_structured_strategy():
    items = parse_structured([STRUCTURED_LINE])

    assert len(items) == 1
    item = items[0]
    assert item.position == "0010"
    assert item.material == "100200"
    assert item.position_description == "Application Hosting Basic"
    assert item.position_quantity == 2.0
    assert item.unit == "PU"
    assert item.vat == "21%(V1)"
    assert item.unit_price == 500.0
    assert item.position_total == 1000.0
    assert item.type_cost == "Internal"


def test_structured_strategy_rejects_other_layouts():
    assert parse_structured([TOKENIZED_LINE, LOOSE_LINE]) == []


def test_tokenized_strategy():
    items = parse_tokenized([TOKENIZED_LINE])

    assert len(items) == 1
    item = items[0]
    assert item.position == "0020"
    assert item.material == "200300"
    assert item.position_description == "External consultant"
    assert item.position_quantity == 10.0
    assert item.unit == "h"
    assert item.unit_price == 95.0
    assert item.position_total == 950.0
    assert item.type_cost == "External"


def test_tokenized_strategy_defaults():
    items = parse_tokenized(["0030 400500 21%(V1) 75,00"])

    assert items[0].position_description == "Unknown Service"
    assert items[0].position_quantity == 1.0
    assert items[0].unit == "PU"
    assert items[0].unit_price == 0.0
    assert items[0].position_total == 75.0


def test_tokenized_strategy_needs_amount_after_vat():
    assert parse_tokenized([LOOSE_LINE]) == []


def test_loose_strategy():
    items = parse_loose([LOOSE_LINE])

    assert len(items) == 1
    item = items[0]
    assert item.position == "0050"
    assert item.material == "300400"
    assert item.position_description == "Other costs"
    assert item.position_quantity == 1.0
    assert item.unit == "PU"
    assert item.vat == "21%(V1)"
    assert item.unit_price == 120.0
    assert item.position_total == 120.0
    assert item.type_cost == "External"


def test_cascade_uses_first_productive_strategy():
    page = STRUCTURED_LINE + "\n" + TOKENIZED_LINE
    items = extract_line_items(page, 1)

    # the tokenized-only row is not picked up once the structured pass succeeded
    assert [item.position for item in items] == ["0010"]


def test_cascade_falls_through_to_later_strategies():
    assert [i.position for i in extract_line_items(TOKENIZED_LINE, 1)] == ["0020"]
    assert [i.position for i in extract_line_items(LOOSE_LINE, 1)] == ["0050"]


def test_cascade_order_with_recording_strategies():
    calls = []

    def recorder(name, result):
        def strategy(lines):
            calls.append((name, list(lines)))
            return result
        strategy.__name__ = name
        return strategy

    strategies = [recorder("a", []), recorder("b", ["item"]), recorder("c", ["other"])]

    assert run_strategies(["line"], strategies) == ["item"]
    assert calls == [("a", ["line"]), ("b", ["line"])]


def test_page_without_candidates_runs_every_strategy():
    calls = []

    def recorder(name):
        def strategy(lines):
            calls.append(name)
            return []
        strategy.__name__ = name
        return strategy

    items = extract_line_items(
        "Invoice No. 1\nTotal 10,00", 1,
        strategies=[recorder("a"), recorder("b"), recorder("c")],
    )

    assert items == []
    assert calls == ["a", "b", "c"]
    assert extract_line_items("Invoice No. 1\nTotal 10,00", 1) == []


def test_items_are_stamped_with_page_and_period():
    items = extract_line_items(PAGE_ONE, 2, service_period="February 2024")

    assert [item.position for item in items] == ["0010", "0020"]
    assert all(item.page_number == 2 for item in items)
    assert all(item.service_provision_period == "February 2024" for item in items)
    assert items[1].unit == "H"
    assert items[1].type_cost == "External"


def test_default_strategy_order():
    assert LINE_ITEM_STRATEGIES == (parse_structured, parse_tokenized, parse_loose)
