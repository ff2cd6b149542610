"""Tests for saml.py — SAMLResponse extraction."""

from okta_session.saml import extract_saml_response


class TestExtractSamlResponse:
    def test_bare_form(self):
        html = '<form><input name="SAMLResponse" value="XYZ123"/></form>'
        assert extract_saml_response(html) == "XYZ123"

    def test_okta_auto_submit_page(self):
        html = """
        <html><body onload="document.forms[0].submit()">
          <form id="appForm" method="POST" action="https://app.example.com/auth/saml/callback">
            <input name="SAMLResponse" type="hidden" value="PHNhbWxwOlJlc3BvbnNl&#x2b;Pg&#x3d;&#x3d;"/>
            <input name="RelayState" type="hidden" value=""/>
          </form>
        </body></html>
        """
        assert extract_saml_response(html) == "PHNhbWxwOlJlc3BvbnNl+Pg=="

    def test_missing_input(self):
        html = "<html><body><form><input name='username'/></form></body></html>"
        assert extract_saml_response(html) == ""

    def test_no_form(self):
        assert extract_saml_response("<html><body>Sign in</body></html>") == ""

    def test_empty_document(self):
        assert extract_saml_response("") == ""

    def test_input_without_value(self):
        assert extract_saml_response('<form><input name="SAMLResponse"/></form>') == ""
