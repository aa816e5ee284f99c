import pytest

from junior_bot.core.errors import InvalidTarget
from junior_bot.utils.addresses import (
    contact_id_from_address,
    is_contact_address,
    to_contact_address,
    to_group_address,
)


def test_to_contact_address_appends_suffix():
    assert to_contact_address("5511999999999") == "5511999999999@c.us"


def test_to_contact_address_strips_formatting():
    assert to_contact_address("+55 (11) 99999-9999") == "5511999999999@c.us"


def test_to_contact_address_keeps_suffixed_address():
    assert to_contact_address("5511999999999@c.us") == "5511999999999@c.us"


def test_to_contact_address_rejects_empty_number():
    with pytest.raises(InvalidTarget):
        to_contact_address("abc")


def test_to_group_address():
    assert to_group_address("120363025246125888") == "120363025246125888@g.us"
    assert to_group_address("120363025246125888@g.us") == "120363025246125888@g.us"


def test_to_group_address_rejects_contact_address():
    with pytest.raises(InvalidTarget):
        to_group_address("5511999999999@c.us")


def test_contact_address_helpers():
    assert is_contact_address("5511999999999@c.us")
    assert not is_contact_address("120363025246125888@g.us")
    assert not is_contact_address(None)
    assert contact_id_from_address("5511999999999@c.us") == "5511999999999"


@pytest.mark.parametrize(
    "address",
    ["5511999999999-1600000000@g.us", "5511999999999@s.whatsapp.net", "5511@"],
)
def test_to_contact_address_rejects_foreign_suffix(address):
    with pytest.raises(InvalidTarget):
        to_contact_address(address)
