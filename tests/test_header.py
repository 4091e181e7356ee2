import pytest

from i2e.extraction.classifiers import classify_cost_type, detect_credit_note
from i2e.extraction.header import extract_field, extract_header, month_of_invoice
from tests.fixtures.invoice_pages import PAGE_ONE


def test_extract_header_from_full_text():
    header = extract_header(PAGE_ONE, "acme.pdf")

    assert header.file_name == "acme.pdf"
    assert header.project_id == "EN44-PRO0022640"
    assert header.invoice_number == "90012345"
    assert header.customer_id == "556677"
    assert header.date_of_invoice == "15.03.2024"
    assert header.month_of_invoice == "March"
    assert header.currency == "EUR"
    assert header.vat == "DE123456789"
    assert header.credit_note is False


def test_header_to_dict_keys():
    data = extract_header("Invoice No. 42", "x.pdf").to_dict()

    assert list(data) == [
        'fileName', 'projectId', 'invoiceNumber', 'customerId', 'dateOfInvoice',
        'monthOfInvoice', 'currency', 'vat', 'creditNote',
    ]
    assert data['invoiceNumber'] == "42"
    assert data['projectId'] is None


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Ref PRO1234567", "PRO1234567"),
        ("Ref EN44-PRO1234567", "EN44-PRO1234567"),
        ("Nothing here", None),
    ],
)
def test_project_id(text, expected):
    assert extract_field(text, 'projectId') == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Invoice No.: 4711", "4711"),
        ("Credit Note No. 815", "815"),
        ("invoice number 999", "999"),
    ],
)
def test_invoice_number_variants(text, expected):
    assert extract_field(text, 'invoiceNumber') == expected


def test_customer_id_falls_back_to_client_id():
    assert extract_field("Client ID: 1234", 'customerId') == "1234"


def test_invoice_date_prefers_labelled_date():
    text = "Delivered 01.01.2024\nInvoice Date: 15/11/2023"
    assert extract_field(text, 'dateOfInvoice') == "15/11/2023"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Currency: GBP", "GBP"),
        ("Amounts in USD", "USD"),
        ("Currency conversion applies", None),
    ],
)
def test_currency(text, expected):
    assert extract_field(text, 'currency') == expected


def test_vat_falls_back_to_btw():
    assert extract_field("BTW: NL001234567B01", 'vat') == "NL001234567B01"


def test_unknown_field_rejected():
    with pytest.raises(ValueError):
        extract_field("text", 'iban')


@pytest.mark.parametrize(
    "date_str, expected",
    [
        ("15.03.2024", "March"),
        ("15/11/2023", "November"),
        ("15.13.2024", None),
        ("garbage", None),
        (None, None),
    ],
)
def test_month_of_invoice(date_str, expected):
    assert month_of_invoice(date_str) == expected


@pytest.mark.parametrize(
    "text",
    ["This is a Credit Note", "CREDIT MEMO 12", "Refund of overpayment"],
)
def test_detect_credit_note(text):
    assert detect_credit_note(text) is True


def test_regular_invoice_is_not_credit_note():
    assert detect_credit_note(PAGE_ONE) is False
    assert detect_credit_note(None) is False


@pytest.mark.parametrize(
    "description, expected",
    [
        ("Application Hosting", "Internal"),
        ("Infrastructure support", "Internal"),
        ("External consultant", "External"),
        ("Other costs", "External"),
        ("Consultant days", "External"),
        ("Service desk", "External"),
        ("Licences", "Internal"),
        (None, "Internal"),
    ],
)
def test_classify_cost_type(description, expected):
    assert classify_cost_type(description) == expected
