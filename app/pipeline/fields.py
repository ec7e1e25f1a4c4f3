"""Cleanup of the extraction payload and its mapping onto ticket columns."""

import json
from typing import Any

# Extraction schema key -> tickets column
FIELD_COLUMNS = {
    "Branch": "branch",
    "Name": "customer_name",
    "Category": "category",
    "Category_Other": "category_other",
    "Issue_Details": "issue_details",
    "Status": "issue_status",
    "Status_Other": "issue_status_other",
    "Action_Taken": "action_taken",
    "Customer_Care_Notes": "customer_care_notes",
    "Resolution_Feedback_From_Customer": "resolution_feedback",
    "Order_Type": "order_type",
    "Order_Type_Other": "order_type_other",
    "Ticket_Type": "ticket_type",
    "Ticket_Type_Other": "ticket_type_other",
    "Table_No": "table_no",
    "Token_No": "token_no",
    "Bill_No": "bill_no",
    "Waiter_Name": "waiter_name",
    "Captain_Name": "captain_name",
    "Staff_Responsible": "staff_responsible",
    "AI_Summary": "ai_summary",
    "Preventive_Action": "preventive_action",
}

LIST_FIELDS = {"Category"}


def _is_null_string(value: Any) -> bool:
    return isinstance(value, str) and value.strip().lower() == "null"


def normalize_nulls(payload: dict[str, Any]) -> dict[str, Any]:
    """Replaces the string "null" the model sometimes emits with a real None."""
    normalized: dict[str, Any] = {}
    for key, value in payload.items():
        if _is_null_string(value):
            normalized[key] = None
        elif isinstance(value, list):
            normalized[key] = [item for item in value if not _is_null_string(item)]
        else:
            normalized[key] = value
    return normalized


def _column_value(key: str, value: Any) -> Any:
    if value is None:
        return None
    if key in LIST_FIELDS:
        items = value if isinstance(value, list) else [value]
        return [str(item) for item in items if item is not None] or None
    if isinstance(value, list):
        return ", ".join(str(item) for item in value if item is not None) or None
    if isinstance(value, dict):
        return json.dumps(value)
    return str(value)


def to_ticket_columns(fields: dict[str, Any]) -> dict[str, Any]:
    """Column values for every extracted field; unmentioned fields become None."""
    return {
        column: _column_value(key, fields.get(key))
        for key, column in FIELD_COLUMNS.items()
    }
