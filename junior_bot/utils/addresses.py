# file: junior_bot/utils/addresses.py

import re

from junior_bot.core.errors import InvalidTarget

CONTACT_SUFFIX = "@c.us"
GROUP_SUFFIX = "@g.us"


def is_contact_address(address: str | None) -> bool:
    return bool(address) and address.endswith(CONTACT_SUFFIX)


def contact_id_from_address(address: str) -> str:
    """'5511999999999@c.us' -> '5511999999999'"""
    return address.removesuffix(CONTACT_SUFFIX)


def to_contact_address(recipient: str) -> str:
    """
    Normaliza um número para o formato de endereço individual do WhatsApp.
    Endereços já com sufixo passam direto; outro sufixo (grupo, etc.) é recusado.
    """
    recipient = (recipient or "").strip()
    if recipient.endswith(CONTACT_SUFFIX):
        return recipient

    if "@" in recipient:
        raise InvalidTarget(f"endereço não é de contato: {recipient!r}")

    digits = re.sub(r"\D", "", recipient)
    if not digits:
        raise InvalidTarget(f"número inválido: {recipient!r}")

    return f"{digits}{CONTACT_SUFFIX}"


def to_group_address(group_id: str) -> str:
    group_id = (group_id or "").strip()
    if group_id.endswith(GROUP_SUFFIX):
        return group_id

    if not group_id or "@" in group_id:
        raise InvalidTarget(f"id de grupo inválido: {group_id!r}")

    return f"{group_id}{GROUP_SUFFIX}"
