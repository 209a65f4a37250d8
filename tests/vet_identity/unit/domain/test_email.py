"""Unit tests for the Email value object."""

import pytest

from vet_identity.domain.user import Email, InvalidEmailError, normalize_email


class TestEmail:
    def test_valid_email_is_normalized(self):
        assert Email("  Doctor@Clinic.COM ").value == "doctor@clinic.com"

    @pytest.mark.parametrize("value", ["", "plain", "a@b", "@example.com"])
    def test_invalid_email_rejected(self, value):
        with pytest.raises(InvalidEmailError):
            Email(value)

    def test_emails_with_different_case_are_equal(self):
        assert Email("A@example.com") == Email("a@example.com")

    def test_str(self):
        assert str(Email("a@example.com")) == "a@example.com"


def test_normalize_email_does_not_validate():
    assert normalize_email(" Not An Email ") == "not an email"
