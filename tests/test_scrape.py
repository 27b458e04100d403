"""Tests for the HTML extraction helpers."""

import json

from conftest import created_token_html, sign_in_html, token_page_html

from gitlab_smoke.scrape import extract_authenticity_token, extract_created_token, extract_root_password


class TestAuthenticityToken:
    def test_hidden_input(self):
        assert extract_authenticity_token(token_page_html("abc+/==")) == "abc+/=="

    def test_html_entities_unescaped(self):
        page = '<input type="hidden" name="authenticity_token" value="a&amp;b" />'
        assert extract_authenticity_token(page) == "a&b"

    def test_meta_tag_fallback(self):
        page = '<head><meta name="csrf-token" content="from-meta" /></head>'
        assert extract_authenticity_token(page) == "from-meta"

    def test_input_preferred_over_meta(self):
        page = '<meta name="csrf-token" content="meta" /><input name="authenticity_token" value="input" />'
        assert extract_authenticity_token(page) == "input"

    def test_missing(self):
        assert extract_authenticity_token("<html><body>Sign in</body></html>") is None

    def test_empty_value(self):
        assert extract_authenticity_token('<input name="authenticity_token" value="" />') is None

    def test_sign_in_page(self):
        assert extract_authenticity_token(sign_in_html("login")) == "login"


class TestCreatedToken:
    def test_input_element(self):
        assert extract_created_token(created_token_html("glpat-xyz")) == "glpat-xyz"

    def test_value_not_first_attribute(self):
        body = '<input id="created-personal-access-token" data-x="1" value="tok" readonly>'
        assert extract_created_token(body) == "tok"

    def test_json_new_token(self):
        body = json.dumps({"new_token": "glpat-json", "active_access_tokens": []})
        assert extract_created_token(body) == "glpat-json"

    def test_other_input_ignored(self):
        body = '<input id="personal_access_token_name" value="automated-test-token-1" />'
        assert extract_created_token(body) is None

    def test_missing(self):
        assert extract_created_token("<html>Name can't be blank</html>") is None

    def test_json_without_token(self):
        assert extract_created_token(json.dumps({"errors": ["Name can't be blank"]})) is None


class TestRootPassword:
    def test_password_line(self):
        assert extract_root_password("Password: Zm9vYmFy+/=\n") == "Zm9vYmFy+/="

    def test_full_file(self):
        text = (
            "# WARNING: This value is valid only in the following conditions\n"
            "Password: hunter2\n"
            "# NOTE: This file will be automatically deleted\n"
        )
        assert extract_root_password(text) == "hunter2"

    def test_missing(self):
        assert extract_root_password("") is None
        assert extract_root_password("Password:\n") is None
