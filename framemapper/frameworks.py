"""
Static framework catalog: UI choices, spreadsheet detection and
display-language hints.
"""

from typing import List, Tuple


SAMPLE_FRAMEWORKS: List[Tuple[str, str]] = [
    ("react", "React"),
    ("angular", "Angular"),
    ("vue", "Vue.js"),
    ("svelte", "Svelte"),
    ("nextjs", "Next.js"),
    ("nuxtjs", "Nuxt.js"),
    ("express", "Express.js (Node.js)"),
    ("django", "Django (Python)"),
    ("flask", "Flask (Python)"),
    ("springboot", "Spring Boot (Java)"),
    ("rubyonrails", "Ruby on Rails"),
    ("pandas", "Pandas (Python)"),
    ("numpy", "NumPy (Python)"),
    ("excel", "Microsoft Excel"),
    ("googlesheets", "Google Sheets"),
    ("sql", "SQL (General)"),
    ("mongodb", "MongoDB (NoSQL)"),
    ("firebase_firestore", "Firebase Firestore"),
    ("aws_lambda", "AWS Lambda"),
    ("google_cloud_functions", "Google Cloud Functions"),
    ("azure_functions", "Azure Functions"),
    ("swiftui", "SwiftUI (iOS)"),
    ("jetpack_compose", "Jetpack Compose (Android)"),
    ("flutter", "Flutter"),
    ("react_native", "React Native"),
]

KNOWN_SPREADSHEET_FRAMEWORKS: List[str] = [
    "Microsoft Excel",
    "Google Sheets",
    "LibreOffice Calc",
    "Apple Numbers",
    "Airtable",
    "Smartsheet",
    "Zoho Sheet",
]

# Aliases that also identify a spreadsheet application.
_SPREADSHEET_ALIASES = {
    "excel", "googlesheets", "google sheets", "sheets", "libreoffice calc",
    "calc", "numbers", "apple numbers", "airtable", "smartsheet", "zoho sheet",
}

# Ordered: first substring match wins.
LANGUAGE_HINTS: List[Tuple[str, str]] = [
    ("pandas", "python"),
    ("numpy", "python"),
    ("django", "python"),
    ("flask", "python"),
    ("python", "python"),
    ("react", "javascript"),
    ("vue", "javascript"),
    ("angular", "javascript"),
    ("svelte", "javascript"),
    ("next", "javascript"),
    ("nuxt", "javascript"),
    ("express", "javascript"),
    ("javascript", "javascript"),
    ("firestore", "javascript"),
    ("lambda", "javascript"),
    ("cloud functions", "javascript"),
    ("azure functions", "javascript"),
    ("mongodb", "javascript"),
    ("sql", "sql"),
    ("spring", "java"),
    ("java", "java"),
    ("rails", "ruby"),
    ("ruby", "ruby"),
    ("swift", "swift"),
    ("compose", "kotlin"),
    ("kotlin", "kotlin"),
    ("flutter", "dart"),
]

_LABELS = dict(SAMPLE_FRAMEWORKS)

_CANONICAL = {label.casefold(): value for value, label in SAMPLE_FRAMEWORKS}
_CANONICAL.update({value: value for value, _ in SAMPLE_FRAMEWORKS})


def framework_label(value: str) -> str:
    """Display label for a catalog value; unknown values are returned as-is."""
    return _LABELS.get(value, value)


def framework_key(name: str) -> str:
    """Comparable identity for a framework given by catalog value or label."""
    folded = (name or "").strip().casefold()
    return _CANONICAL.get(folded, folded)


def is_known_spreadsheet(name: str) -> bool:
    """Heuristic check whether a framework name refers to a spreadsheet app."""
    normalized = framework_label((name or "").strip()).lower()
    if not normalized:
        return False
    if normalized in _SPREADSHEET_ALIASES:
        return True
    return any(known.lower() in normalized for known in KNOWN_SPREADSHEET_FRAMEWORKS)


def guess_language(framework: str) -> str:
    """
    Guess a highlighting language from a framework name.

    Used by the presentation layer only; falls back to "plaintext".
    """
    lowered = (framework or "").lower().replace("_", " ")
    for needle, language in LANGUAGE_HINTS:
        if needle in lowered:
            return language
    return "plaintext"
