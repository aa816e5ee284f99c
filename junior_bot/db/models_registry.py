# Importa todos os models para registrar as tabelas no Base.metadata
from junior_bot.models.conversations import Conversation, Message  # noqa: F401
from junior_bot.models.carts import Cart  # noqa: F401
from junior_bot.models.orders import Order  # noqa: F401
