"""Prompts and the response schema used against Gemini."""

TRANSCRIPTION_PROMPT = (
    "You are an expert audio transcriber. The following audio file contains a "
    "conversation between two people in a mix of Tamil and English (Tanglish). "
    "Your task is to transcribe it into clean, plain English text. Crucially, "
    "identify each distinct speaker and label their dialogue (e.g., 'Person 1:', "
    "'Person 2:'). Provide only the final, labeled transcription."
)

ANALYSIS_PROMPT = """
You are an expert AI assistant for a restaurant's customer support analysis.
Analyze the following transcript of a customer incident. Based ONLY on this text, extract the required information.
If a value is not mentioned, return null for that field.
For the 'Branch' field, if no specific branch is mentioned, default to 'General'.
For 'Customer_Care_Notes', 'AI_Summary' and 'Preventive_Action', generate the content based on your analysis.

**General Rules:**
1.  Analyze the content of the transcript ONLY. Do not invent information. DO NOT HALLUCINATE
2.  If information for a field is not mentioned in the transcript, its value MUST be `null`.
3.  The final output MUST be a single, valid JSON object and nothing else. Do not include any text or explanations outside of the JSON structure.

Transcript:
\"\"\"
{transcript}
\"\"\"
"""

BRANCHES = [
    "RS Puram",
    "Koundampalayam",
    "Sivanandha Colony",
    "Peelamedu",
    "Ramanathapuram",
    "Central Kitchen",
    "General",
]

CATEGORIES = [
    "Food Quality",
    "Taste",
    "Hygiene",
    "Staff Behavior",
    "Serving Delay",
    "Object In Food",
    "Missing Food Item",
    "Not Cooked Well",
    "Policy Change",
    "Order",
    "Enquiry",
    "Takeaway Delay",
    "Wrong Item",
    "Other",
]

ISSUE_STATUSES = ["Open", "Closed", "Closed - No Contact", "Other"]
ORDER_TYPES = ["Dine-in", "Swiggy", "Zomato", "Takeaway", "Other"]
TICKET_TYPES = ["Complaint", "Feedback", "Suggestion", "Order", "Enquiry", "Other"]


def _other_note(field: str) -> dict:
    return {
        "type": "string",
        "description": f"If {field} is 'Other', provide a brief 3-word description here. Otherwise, null.",
    }


ANALYSIS_SCHEMA = {
    "type": "object",
    "properties": {
        "Branch": {"type": "string", "enum": BRANCHES},
        "Name": {"type": "string"},
        "Category": {
            "type": "array",
            "items": {"type": "string", "enum": CATEGORIES},
        },
        "Category_Other": {
            "type": "string",
            "description": "If Category includes 'Other', provide a brief 3-word description here. Otherwise, null.",
        },
        "Issue_Details": {"type": "string"},
        "Status": {"type": "string", "enum": ISSUE_STATUSES},
        "Status_Other": _other_note("Status"),
        "Action_Taken": {"type": "string"},
        "Customer_Care_Notes": {"type": "string"},
        "Resolution_Feedback_From_Customer": {"type": "string"},
        "Order_Type": {"type": "string", "enum": ORDER_TYPES},
        "Order_Type_Other": _other_note("Order_Type"),
        "Ticket_Type": {"type": "string", "enum": TICKET_TYPES},
        "Ticket_Type_Other": _other_note("Ticket_Type"),
        "Table_No": {"type": "string"},
        "Token_No": {"type": "string"},
        "Bill_No": {"type": "string"},
        "Waiter_Name": {"type": "string"},
        "Captain_Name": {"type": "string"},
        "Staff_Responsible": {"type": "string"},
        "AI_Summary": {"type": "string"},
        "Preventive_Action": {
            "type": "string",
            "description": "One or two sentences on what would stop this incident from recurring.",
        },
    },
}
