"""Static location knowledge for attributing events to a city and country.

# ─── PURPOSE ──────────────────────────────────────────────────────────
#
# Event listings arrive from ticketing partners with free-text venue
# fields ("Boulevard City, Riyadh", "Coca-Cola Arena", "Bahrain
# International Circuit, Sakhir").  These tables let the location
# resolver map those strings to a country slug and a city name.
#
# Tables are ORDERED: the first country whose keywords match wins, and
# within the city table the first match wins.  More specific entries come
# first ("bur dubai" before "dubai", UAE landmarks before generic tokens).
#
# Keywords are matched on word boundaries, so "uk" never matches "duke"
# and "oman" never matches "woman".
#
# There is deliberately NO default entry.  An unmatched string resolves to
# "unknown", never to the home country.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

# Sentinel used for both city and country when nothing matched.
UNKNOWN_LOCATION = "unknown"


# ═════════════════════════════════════════════════════════════════════════
# 1. COUNTRY KEYWORDS (checked in order)
# ═════════════════════════════════════════════════════════════════════════

COUNTRY_KEYWORDS: list[tuple[str, tuple[str, ...]]] = [
    ("uae", (
        "dubai", "abu dhabi", "sharjah", "ajman", "ras al khaimah",
        "fujairah", "umm al quwain", "al ain", "khorfakkan", "kalba",
        "dibba", "yas island", "saadiyat", "al reem", "jebel ali",
        "palm jumeirah", "five palm", "jumeirah", "jbr", "difc", "deira",
        "bur dubai", "al barsha", "business bay", "downtown dubai",
        "dubai marina", "mall of the emirates", "mall of emirates",
        "dubai mall", "dubai opera", "dubai autodrome", "meydan",
        "coca-cola arena", "etihad arena", "louvre abu dhabi",
        "ferrari world", "expo city", "uae", "united arab emirates",
    )),
    ("saudi-arabia", (
        "saudi", "saudi arabia", "riyadh", "jeddah", "dammam", "khobar",
        "al khobar", "mecca", "makkah", "medina", "madinah", "alula",
        "ksa",
    )),
    ("qatar", (
        "qatar", "doha", "al wakrah", "lusail",
    )),
    ("bahrain", (
        "bahrain", "manama", "muharraq", "seef", "juffair", "amwaj",
        "riffa", "adliya", "sakhir", "isa town", "hamad town",
    )),
    ("uk", (
        "united kingdom", "uk", "england", "scotland", "wales", "london",
        "manchester", "birmingham", "edinburgh", "glasgow", "liverpool",
        "leeds",
    )),
    ("oman", (
        "oman", "muscat", "salalah",
    )),
    ("kuwait", (
        "kuwait", "kuwait city",
    )),
]


# ═════════════════════════════════════════════════════════════════════════
# 2. CITY KEYWORDS (checked in order, first match wins)
# ═════════════════════════════════════════════════════════════════════════

CITY_KEYWORDS: list[tuple[str, str]] = [
    # UAE: Dubai and its districts / landmarks
    ("bur dubai", "Dubai"),
    ("downtown dubai", "Dubai"),
    ("dubai", "Dubai"),
    ("palm jumeirah", "Dubai"),
    ("five palm", "Dubai"),
    ("jumeirah", "Dubai"),
    ("jbr", "Dubai"),
    ("difc", "Dubai"),
    ("deira", "Dubai"),
    ("al barsha", "Dubai"),
    ("business bay", "Dubai"),
    ("meydan", "Dubai"),
    ("coca-cola arena", "Dubai"),
    ("mall of the emirates", "Dubai"),
    ("mall of emirates", "Dubai"),
    ("jebel ali", "Dubai"),
    # UAE: Abu Dhabi
    ("louvre abu dhabi", "Abu Dhabi"),
    ("abu dhabi", "Abu Dhabi"),
    ("yas island", "Abu Dhabi"),
    ("saadiyat", "Abu Dhabi"),
    ("etihad arena", "Abu Dhabi"),
    ("ferrari world", "Abu Dhabi"),
    # UAE: other emirates
    ("sharjah", "Sharjah"),
    ("ajman", "Ajman"),
    ("ras al khaimah", "Ras Al Khaimah"),
    ("fujairah", "Fujairah"),
    ("al ain", "Al Ain"),
    ("khorfakkan", "Khorfakkan"),
    ("kalba", "Kalba"),
    ("dibba", "Dibba"),
    # Saudi Arabia
    ("riyadh", "Riyadh"),
    ("jeddah", "Jeddah"),
    ("dammam", "Dammam"),
    ("khobar", "Al Khobar"),
    ("mecca", "Mecca"),
    ("makkah", "Mecca"),
    ("medina", "Medina"),
    ("madinah", "Medina"),
    ("alula", "AlUla"),
    # Qatar
    ("doha", "Doha"),
    ("al wakrah", "Al Wakrah"),
    ("lusail", "Lusail"),
    # Bahrain
    ("manama", "Manama"),
    ("seef", "Seef"),
    ("muharraq", "Muharraq"),
    ("juffair", "Juffair"),
    ("amwaj", "Amwaj"),
    ("riffa", "Riffa"),
    ("adliya", "Adliya"),
    ("sakhir", "Sakhir"),
    # United Kingdom
    ("london", "London"),
    ("manchester", "Manchester"),
    ("birmingham", "Birmingham"),
    ("edinburgh", "Edinburgh"),
    ("glasgow", "Glasgow"),
    ("liverpool", "Liverpool"),
    ("leeds", "Leeds"),
    # Oman
    ("muscat", "Muscat"),
    ("salalah", "Salalah"),
    # Kuwait
    ("kuwait city", "Kuwait City"),
    ("kuwait", "Kuwait City"),
]

# City → country for cities matched without any country keyword.  Every
# city in CITY_KEYWORDS is also a country keyword, so this is only used to
# keep city and country consistent when both tables match.
CITY_COUNTRY: dict[str, str] = {
    "Dubai": "uae", "Abu Dhabi": "uae", "Sharjah": "uae", "Ajman": "uae",
    "Ras Al Khaimah": "uae", "Fujairah": "uae", "Al Ain": "uae",
    "Khorfakkan": "uae", "Kalba": "uae", "Dibba": "uae",
    "Riyadh": "saudi-arabia", "Jeddah": "saudi-arabia",
    "Dammam": "saudi-arabia", "Al Khobar": "saudi-arabia",
    "Mecca": "saudi-arabia", "Medina": "saudi-arabia", "AlUla": "saudi-arabia",
    "Doha": "qatar", "Al Wakrah": "qatar", "Lusail": "qatar",
    "Manama": "bahrain", "Seef": "bahrain", "Muharraq": "bahrain",
    "Juffair": "bahrain", "Amwaj": "bahrain", "Riffa": "bahrain",
    "Adliya": "bahrain", "Sakhir": "bahrain",
    "London": "uk", "Manchester": "uk", "Birmingham": "uk",
    "Edinburgh": "uk", "Glasgow": "uk", "Liverpool": "uk", "Leeds": "uk",
    "Muscat": "oman", "Salalah": "oman",
    "Kuwait City": "kuwait",
}


# ═════════════════════════════════════════════════════════════════════════
# 3. DISPLAY NAMES
# ═════════════════════════════════════════════════════════════════════════

COUNTRY_DISPLAY_NAMES: dict[str, str] = {
    "bahrain": "Bahrain",
    "uae": "UAE",
    "saudi-arabia": "Saudi Arabia",
    "saudi": "Saudi Arabia",
    "qatar": "Qatar",
    "uk": "United Kingdom",
    "oman": "Oman",
    "kuwait": "Kuwait",
}


# ═════════════════════════════════════════════════════════════════════════
# 4. LOCATION TOKENS PER COUNTRY
# ═════════════════════════════════════════════════════════════════════════
# Tokens that, when they appear in a generated article, place the article
# in that country.  Used by the writer's mismatch check for the home country.

COUNTRY_MENTION_TOKENS: dict[str, tuple[str, ...]] = {
    "bahrain": ("bahrain", "manama", "muharraq", "seef", "juffair", "riffa", "amwaj"),
    "uae": ("uae", "dubai", "abu dhabi", "sharjah", "ajman"),
    "saudi-arabia": ("saudi", "riyadh", "jeddah", "dammam", "khobar", "mecca", "medina"),
    "qatar": ("qatar", "doha", "lusail", "al wakrah"),
}


def country_display_name(country_slug: str) -> str:
    """Return the human-readable name for *country_slug*.

    Unknown slugs are returned unchanged so a partner-supplied country
    string is never silently replaced.
    """
    return COUNTRY_DISPLAY_NAMES.get(country_slug.lower(), country_slug)
