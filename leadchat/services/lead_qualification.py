"""
Lead qualification heuristic

A reply that mentions a sales representative is treated as a sign the
visitor should be handed to a human sales contact.
"""

LEAD_PHRASE = "sales representative"

LEAD_FOLLOW_UP_MESSAGE = (
    "It seems like you're interested in speaking with a sales representative. "
    "Would you like me to connect you?"
)


def qualifies_lead(reply: str) -> bool:
    """Case-insensitive substring check for the lead phrase"""
    return LEAD_PHRASE in reply.lower()
