"""
Output grammar shared by the generator instruction and the parser.

The generator is asked (see prompts/analysis/v1.yaml) to emit five
blank-line separated sections in a fixed order, optionally followed by a
translation header and the same five sections in the target language.
"""
import re
from typing import List, Tuple

PROMPT_PATH = "analysis/v1.yaml"

NO_TRANSLATION_LANGUAGE = "English"

SUPPORTED_LANGUAGES: Tuple[str, ...] = (
    "English",
    "Spanish",
    "French",
    "Hindi",
    "German",
    "Chinese",
    "Japanese",
    "Portuguese",
    "Arabic",
    "Bengali",
)

NOT_AVAILABLE = "Not Available"

# --- section titles, in emitted order ---
PURCHASE_DETAILS = "🧾 Extracted Purchase Details"
EXPENSE_CATEGORY = "🗂 Expense Category"
INSIGHTS = "📊 Purchase Intelligence Insights"
RECOMMENDATIONS = "🔧 Business Recommendations"
SUMMARY = "💬 Summary for Business Owner"

SECTION_TITLES: List[str] = [
    PURCHASE_DETAILS,
    EXPENSE_CATEGORY,
    INSIGHTS,
    RECOMMENDATIONS,
    SUMMARY,
]

PURCHASE_DETAIL_KEYS = ("Vendor", "Date", "Items", "Total Amount", "Tax", "Payment Method")
CATEGORY_KEYS = ("Category", "Reason")

EXPENSE_CATEGORIES = (
    "Food & Dining",
    "Travel & Transport",
    "Office Supplies",
    "Utilities",
    "Inventory / Stock",
    "Miscellaneous",
)

# --- markers ---
TRANSLATION_DELIMITER = "--- TRANSLATION"
HEADER_MARKER = "---"
BULLET_MARKER = "- "
KEY_VALUE_SEPARATOR = ":"
DEFAULT_TRANSLATION_LABEL = "Translation"

# "--- TRANSLATION (Spanish) ---"
TRANSLATION_HEADER_RE = re.compile(
    r"^\s*---\s*TRANSLATION\s*(?:\((?P<language>[^)]*)\))?\s*(?:---)?\s*$"
)

BLANK_LINE_RE = re.compile(r"^\s*$")


def translation_header(language: str) -> str:
    return f"{TRANSLATION_DELIMITER} ({language}) {HEADER_MARKER}"


def is_supported_language(language: str) -> bool:
    return language in SUPPORTED_LANGUAGES


def wants_translation(language: str) -> bool:
    return language != NO_TRANSLATION_LANGUAGE
