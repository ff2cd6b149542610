"""SAML assertion extraction from the identity provider's auto-submit form."""

from bs4 import BeautifulSoup


def extract_saml_response(html: str) -> str:
    """Return the SAMLResponse form value, or "" if the page has none.

    BeautifulSoup decodes HTML entities (e.g. &#x2B; for +) so the value
    is ready to post back as-is.
    """
    soup = BeautifulSoup(html, "lxml")
    field = soup.select_one("html form > input[name='SAMLResponse']")
    if field is None:
        return ""
    return field.get("value", "")
