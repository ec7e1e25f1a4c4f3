from app.pipeline.fields import FIELD_COLUMNS, normalize_nulls, to_ticket_columns


def test_null_strings_become_none():
    payload = {
        "Branch": "General",
        "Table_No": "null",
        "Bill_No": " NULL ",
        "Waiter_Name": None,
        "Category": ["Taste", "null"],
    }

    normalized = normalize_nulls(payload)

    assert normalized["Branch"] == "General"
    assert normalized["Table_No"] is None
    assert normalized["Bill_No"] is None
    assert normalized["Waiter_Name"] is None
    assert normalized["Category"] == ["Taste"]


def test_normalize_keeps_non_string_values():
    assert normalize_nulls({"Token_No": 17}) == {"Token_No": 17}


def test_ticket_columns_cover_every_schema_field():
    columns = to_ticket_columns({"Branch": "RS Puram"})

    assert set(columns) == set(FIELD_COLUMNS.values())
    assert columns["branch"] == "RS Puram"
    assert columns["customer_name"] is None
    assert columns["category"] is None


def test_ticket_columns_coerce_model_types():
    columns = to_ticket_columns(
        {
            "Category": "Hygiene",
            "Table_No": 12,
            "Status": "Closed",
            "Staff_Responsible": ["Ravi", "Kumar"],
        }
    )

    assert columns["category"] == ["Hygiene"]
    assert columns["table_no"] == "12"
    assert columns["issue_status"] == "Closed"
    assert columns["staff_responsible"] == "Ravi, Kumar"
