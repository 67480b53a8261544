"""Reader-facing explanations for each compliance flag code."""

UEB = "http://www.iceb.org/ueb.html"
BANA = "https://www.brailleauthority.org/"
LIBLOUIS_DOCS = "https://liblouis.io/documentation/"
ADA_SIGNAGE = "https://www.ada.gov/regs2010/2010ADAstandards/2010ADAStandards.htm#c7"


def _link(label, url):
    return {"label": label, "url": url}


COMPLIANCE_DOCUMENTATION = {
    "all_caps": {
        "title": "All-Caps Text in Braille",
        "description": (
            "When text is in all capitals, each letter requires a capitalization indicator "
            "in braille. Multi-word all-caps text can be represented with a capital word "
            "indicator or individual capital letter indicators."
        ),
        "links": [
            _link("UEB Guidelines - Capitalization", UEB),
            _link("Braille Authority of North America - Capital Letters", BANA),
            _link("liblouis Documentation - Capitalization Rules", LIBLOUIS_DOCS),
        ],
    },
    "numbers_present": {
        "title": "Numbers and Ordinals in Braille",
        "description": (
            "Numbers in braille require a number indicator before the numeric sequence. "
            "Ordinals, decimals, and formatted numbers need special attention for proper "
            "spacing and indicators."
        ),
        "links": [
            _link("UEB Guidelines - Numbers", UEB),
            _link("BANA - Numeric Mode Indicator Rules", BANA),
        ],
    },
    "abbreviation_detected": {
        "title": "Abbreviations in Braille",
        "description": (
            "Abbreviations may require Grade 1 indicators to prevent misinterpretation. "
            "Common abbreviations like 'Dr.', 'St.', 'Rm' need verification for correct "
            "expansion and meaning in context."
        ),
        "links": [
            _link("UEB Guidelines - Abbreviations", UEB),
            _link("BANA - Common Abbreviations", BANA),
        ],
    },
    "non_ascii_quotes": {
        "title": "Smart Quotes and Typography",
        "description": (
            "Curly quotes (smart quotes) are handled differently than straight ASCII quotes "
            "in braille. They should be normalized or verified for correct punctuation handling."
        ),
        "links": [
            _link("UEB Guidelines - Punctuation", UEB),
            _link("Typography Normalization Best Practices", BANA),
        ],
    },
    "dash_variant": {
        "title": "Em Dashes and En Dashes",
        "description": (
            "Different dash types (hyphen, en dash, em dash) have distinct representations "
            "in braille. Verify that the correct dash type is used for the intended meaning."
        ),
        "links": [
            _link("UEB Guidelines - Dashes", UEB),
            _link("BANA - Dash Usage", BANA),
        ],
    },
    "ellipsis": {
        "title": "Ellipsis Character",
        "description": (
            "The Unicode ellipsis character should be verified for correct handling. It may "
            "need to be represented as three periods in braille depending on context."
        ),
        "links": [_link("UEB Guidelines - Ellipsis", UEB)],
    },
    "unusual_symbol": {
        "title": "Trademark and Copyright Symbols",
        "description": (
            "Special symbols like copyright, registered, and trademark signs require specific "
            "braille representations. Verify they should appear on the sign and how they "
            "should be transcribed."
        ),
        "links": [
            _link("UEB Guidelines - Special Symbols", UEB),
            _link("BANA - Symbol Guidelines", BANA),
        ],
    },
    "non_ascii_letter": {
        "title": "Non-English Letters and Diacritics",
        "description": (
            "Letters with accents or from non-English alphabets may not be supported by US "
            "English braille tables. Verify language/profile handling or use appropriate "
            "international tables."
        ),
        "links": [
            _link("liblouis - Language Tables", LIBLOUIS_DOCS),
            _link("International Braille Standards", "http://www.iceb.org/"),
        ],
    },
    "emoji_or_pictograph": {
        "title": "Emoji and Pictographs",
        "description": (
            "Emoji and pictographic characters cannot be represented in tactile braille and "
            "must be removed or replaced with text descriptions."
        ),
        "links": [
            _link("Accessibility Best Practices - Emoji Alt Text",
                  "https://www.w3.org/WAI/WCAG21/Understanding/"),
        ],
    },
    "non_bmp_character": {
        "title": "Non-BMP Unicode Characters",
        "description": (
            "Characters outside the Basic Multilingual Plane (including some emoji, rare "
            "symbols, and historical scripts) are not supported by the translation engine "
            "and must be removed."
        ),
        "links": [_link("Unicode Planes Overview", "https://en.wikipedia.org/wiki/Plane_(Unicode)")],
    },
    "punctuation_dense": {
        "title": "Punctuation-Heavy Text",
        "description": (
            "Text with heavy punctuation (parentheses, slashes, special characters) requires "
            "careful verification. Each punctuation mark affects spacing and meaning in braille."
        ),
        "links": [
            _link("UEB Guidelines - Punctuation", UEB),
            _link("BANA - Punctuation Rules", BANA),
        ],
    },
    "punctuation_high_risk": {
        "title": "High Punctuation Density",
        "description": (
            "Extremely high punctuation density detected. This often indicates technical "
            "content, paths, or formatted data that may not translate correctly. Simplify "
            "or verify carefully."
        ),
        "links": [
            _link("UEB Guidelines - Technical Material", UEB),
            _link("liblouis - Computer Braille Code", LIBLOUIS_DOCS),
        ],
    },
    "multiline_input": {
        "title": "Multi-Line Signage Layout",
        "description": (
            "Sign braille has different line break rules than document braille. Each line "
            "should be verified for proper formatting and spacing per ADA/accessibility standards."
        ),
        "links": [
            _link("ADA Standards - Signage Requirements", ADA_SIGNAGE),
            _link("ICC A117.1 - Accessible Design Standards",
                  "https://www.iccsafe.org/products-and-services/i-codes/the-a117-series/"),
        ],
    },
    "length_risk": {
        "title": "Long Text for Signage",
        "description": (
            "Text exceeding typical sign dimensions may not fit standard formats. Verify line "
            "breaks, cell count per line, and physical layout constraints."
        ),
        "links": [
            _link("ADA Standards - Signage Dimensions", ADA_SIGNAGE),
            _link("Braille Cell Spacing Standards", BANA),
        ],
    },
    "technical_string": {
        "title": "Technical Strings (URLs, Emails, Phone Numbers)",
        "description": (
            "Technical content like URLs, email addresses, and phone numbers should typically "
            "use Grade 1 braille to avoid contractions that could alter the meaning."
        ),
        "links": [
            _link("UEB Guidelines - Technical Material", UEB),
            _link("Computer Braille Code", BANA),
        ],
    },
    "grade2_short_label_risk": {
        "title": "Grade 2 for Short Labels",
        "description": (
            "Grade 2 contractions on short labels may reduce readability or create ambiguity. "
            "Grade 1 is often safer for brief signage like room numbers and labels."
        ),
        "links": [
            _link("UEB Guidelines - Contractions", UEB),
            _link("BANA - Grade Selection Guidelines", BANA),
        ],
    },
}


def documentation_for(code):
    """Return the explanation for a flag code, or None for unknown codes."""
    return COMPLIANCE_DOCUMENTATION.get(code)
