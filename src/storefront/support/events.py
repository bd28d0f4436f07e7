"""Domain events for the CustomerQuery aggregate."""

from protean.fields import DateTime, Identifier, String, Text

from storefront.domain import storefront


@storefront.event(part_of="CustomerQuery")
class QuerySent:
    """A signed-in user sent a question to the store."""

    __version__ = 1

    query_id = Identifier(required=True)
    user_id = Identifier(required=True)
    user_name = String(required=True)
    user_email = String(required=True)
    phone = String(required=True)
    message = Text(required=True)
    sent_at = DateTime(required=True)
