from uuid import UUID, uuid4

import pytest

from modules.core.exceptions import MalformedIdentifier, NotFoundError
from modules.core.identifiers import parse_identifier

pytestmark = pytest.mark.unit


class TestParseIdentifier:
    def test_accepts_uuid_and_string(self):
        value = uuid4()
        assert parse_identifier(value, "Order") is value
        assert parse_identifier(str(value), "Order") == value
        assert isinstance(parse_identifier(str(value).upper(), "Order"), UUID)

    @pytest.mark.parametrize("raw", ["", "abc", "123", None, 42])
    def test_rejects_malformed(self, raw):
        with pytest.raises(MalformedIdentifier, match="Invalid Order ID format."):
            parse_identifier(raw, "Order")

    def test_malformed_is_a_not_found(self):
        assert issubclass(MalformedIdentifier, NotFoundError)
