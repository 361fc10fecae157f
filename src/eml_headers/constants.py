"""
Standard MIME names shared by the header reader and its callers.
"""

# Standard MIME header names
HN_CONTENT_DISPOSITION = "Content-Disposition"
HN_CONTENT_ENCODING = "Content-Transfer-Encoding"
HN_CONTENT_TYPE = "Content-Type"

# Headers that carry email addresses (lowercase)
ADDRESS_HEADERS = frozenset(
    {
        "bcc",
        "cc",
        "delivered-to",
        "from",
        "reply-to",
        "to",
    }
)
