import pytest

from crtlo.auth.chittyid import validate_chittyid_format


@pytest.mark.parametrize(
    "chitty_id",
    [
        "CHITTY-PEO-ABCD1234-WXYZ",
        "CHITTY-PROP-00000001-A1B2",
        "CHITTY-CONTEXT-Z9Y8X7W6-0000",
        "CHITTY-SERVICE-AAAAAAAA-BBBB",
    ],
)
def test_valid_chittyids(chitty_id):
    assert validate_chittyid_format(chitty_id) is True


@pytest.mark.parametrize(
    "chitty_id",
    [
        "CHITTY-XYZ-12-AB",
        "CHITTY-PEO-abcd1234-WXYZ",
        "CHITTY-PEO-ABCD123-WXYZ",
        "CHITTY-PEO-ABCD1234-WXYZ ",
        "XCHITTY-PEO-ABCD1234-WXYZ",
        "CHITTY-PEO-ABCD1234-WXYZ\n",
        "",
        None,
    ],
)
def test_invalid_chittyids(chitty_id):
    assert validate_chittyid_format(chitty_id) is False
