"""
Mail composition unit tests: mailto URI encoding and the composition payload.
"""
from urllib.parse import parse_qs, unquote, urlsplit

import pytest

from luma.services.mail_compose import MailComposition, build_mailto_uri


class TestBuildMailtoUri:
    def test_subject_and_body_encoded(self):
        uri = build_mailto_uri("jane.doe@example.com", "Course Approval Request: AWS", "Line 1\nLine 2")
        assert uri.startswith("mailto:jane.doe@example.com?subject=Course%20Approval%20Request%3A%20AWS")
        assert "body=Line%201%0ALine%202" in uri

    def test_reserved_characters_round_trip(self):
        body = "Cost: $199.99 & tax? 100% = yes #1"
        uri = build_mailto_uri("a@example.com", "s", body)
        query = parse_qs(urlsplit(uri).query)
        assert query["body"] == [body]

    def test_cc_bcc_included_when_set(self):
        uri = build_mailto_uri("a@example.com", "s", "b", cc="hr@example.com", bcc="audit@example.com")
        query = parse_qs(urlsplit(uri).query)
        assert query["cc"] == ["hr@example.com"]
        assert query["bcc"] == ["audit@example.com"]

    @pytest.mark.parametrize("blank", [None, "", "   "])
    def test_blank_cc_bcc_omitted(self, blank):
        uri = build_mailto_uri("a@example.com", "s", "b", cc=blank, bcc=blank)
        assert "cc=" not in uri
        assert "bcc=" not in uri

    def test_recipient_list_keeps_separators(self):
        uri = build_mailto_uri(" a@example.com,b@example.com ", "s", "b")
        assert unquote(uri).startswith("mailto:a@example.com,b@example.com?")


class TestMailComposition:
    def test_to_dict_includes_mailto(self):
        comp = MailComposition(
            to="jane.doe@example.com", subject="Hi", body="Body",
            cc="hr@example.com", template_name="Course Approval Request",
        )
        d = comp.to_dict()
        assert d["to"] == "jane.doe@example.com"
        assert d["cc"] == "hr@example.com"
        assert d["bcc"] is None
        assert d["template_name"] == "Course Approval Request"
        assert d["mailto"] == comp.mailto_uri
        assert d["mailto"].startswith("mailto:jane.doe@example.com?subject=Hi&body=Body&cc=")

    def test_is_immutable(self):
        comp = MailComposition(to="a@example.com", subject="s", body="b")
        with pytest.raises(AttributeError):
            comp.subject = "changed"
