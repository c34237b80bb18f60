"""Tests for opaque page tokens."""

import pytest
from storefront.shared.errors import MalformedInput
from storefront.shared.paging import decode_token, encode_token


class TestPageTokens:
    def test_missing_token_starts_at_zero(self):
        assert decode_token(None) == 0
        assert decode_token("") == 0

    def test_token_is_url_safe_and_opaque(self):
        token = encode_token(20)
        assert "20" not in token
        assert decode_token(token) == 20

    @pytest.mark.parametrize("token", ["not-a-token!", "b2Zmc2V0Og==", "Zm9vOjEw"])
    def test_malformed_token_is_rejected(self, token):
        with pytest.raises(MalformedInput):
            decode_token(token)
